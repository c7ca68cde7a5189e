"""Per-domain configuration and translation."""

from web2cit.domain.configuration import ConfigurationRevision, DomainConfiguration
from web2cit.domain.domain import Domain, make_translation_result
from web2cit.domain.fallback import DEFAULT_FALLBACK_TEMPLATE
from web2cit.domain.patterns import PatternConfiguration
from web2cit.domain.templates import TemplateConfiguration
from web2cit.domain.tests import TestConfiguration, TestField, TranslationTest

__all__ = [
    'DEFAULT_FALLBACK_TEMPLATE',
    'ConfigurationRevision',
    'Domain',
    'DomainConfiguration',
    'PatternConfiguration',
    'TemplateConfiguration',
    'TestConfiguration',
    'TestField',
    'TranslationTest',
    'make_translation_result',
]
