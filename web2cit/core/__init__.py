"""Translation engine: steps, procedures, fields, templates, patterns and webpages."""

from web2cit.core.caching import CitoidCache, HttpCache, ResponseCache, parse_html
from web2cit.core.citation import make_citation, outputs_to_citation
from web2cit.core.fields import FIELD_NAMES, TemplateField, TranslationField
from web2cit.core.pattern import CATCHALL_PATTERN, PathPattern
from web2cit.core.procedure import Procedure
from web2cit.core.template import BaseTemplate, FallbackTemplate, TranslationTemplate
from web2cit.core.webpage import Webpage, WebpageFactory

__all__ = [
    'CATCHALL_PATTERN',
    'FIELD_NAMES',
    'BaseTemplate',
    'CitoidCache',
    'FallbackTemplate',
    'HttpCache',
    'PathPattern',
    'Procedure',
    'ResponseCache',
    'TemplateField',
    'TranslationField',
    'TranslationTemplate',
    'Webpage',
    'WebpageFactory',
    'make_citation',
    'outputs_to_citation',
    'parse_html',
]
