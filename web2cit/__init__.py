"""Web2Cit: collaborative, per-domain citation extraction for webpages."""

from web2cit.clients import CitoidClient, RevisionsApi
from web2cit.config import Settings, get_settings
from web2cit.core import (
    FallbackTemplate,
    PathPattern,
    Procedure,
    TemplateField,
    TranslationTemplate,
    Webpage,
    WebpageFactory,
)
from web2cit.core.fetcher import HTMLFetcher, SimpleFetcher, create_fetcher
from web2cit.domain import Domain
from web2cit.exceptions import Web2CitError
from web2cit.models import TargetOutput, TemplateDefinition

__version__ = '0.1.0'

__all__ = [
    'CitoidClient',
    'Domain',
    'FallbackTemplate',
    'HTMLFetcher',
    'PathPattern',
    'Procedure',
    'RevisionsApi',
    'Settings',
    'SimpleFetcher',
    'TargetOutput',
    'TemplateDefinition',
    'TemplateField',
    'TranslationTemplate',
    'Web2CitError',
    'Webpage',
    'WebpageFactory',
    'create_fetcher',
    'get_settings',
]
