"""Data models for Web2Cit definitions and outputs."""

from web2cit.models.citoid import SIMPLE_CITOID_FIELDS, is_simple_citoid_field
from web2cit.models.definitions import (
    FallbackTemplateDefinition,
    PatternDefinition,
    ProcedureDefinition,
    SelectionDefinition,
    TemplateDefinition,
    TemplateFieldDefinition,
    TestDefinition,
    TestFieldDefinition,
    TransformationDefinition,
)
from web2cit.models.outputs import (
    FieldInfo,
    ProcedureInfo,
    SelectionInfo,
    TargetOutput,
    TemplateInfo,
    TransformationInfo,
    TranslationResult,
)
from web2cit.models.results import FetchResult, FieldOutput, ProcedureOutput, StepOutput, TemplateOutput

__all__ = [
    'SIMPLE_CITOID_FIELDS',
    'is_simple_citoid_field',
    # Definitions
    'FallbackTemplateDefinition',
    'PatternDefinition',
    'ProcedureDefinition',
    'SelectionDefinition',
    'TemplateDefinition',
    'TemplateFieldDefinition',
    'TestDefinition',
    'TestFieldDefinition',
    'TransformationDefinition',
    # Outputs
    'FetchResult',
    'FieldInfo',
    'FieldOutput',
    'ProcedureInfo',
    'ProcedureOutput',
    'SelectionInfo',
    'StepOutput',
    'TargetOutput',
    'TemplateInfo',
    'TemplateOutput',
    'TransformationInfo',
    'TranslationResult',
]
