"""Pydantic models for the declarative configuration shapes.

These mirror the JSON stored in configuration revisions field-for-field, so
``model_dump(exclude_none=True)`` round-trips a stored definition.
"""

from pydantic import BaseModel, ConfigDict, Field


class SelectionDefinition(BaseModel):
    """A single selection step.

    Attributes:
        type: Selection type ('citoid', 'xpath', 'css', 'fixed')
        config: Type-specific configuration string

    """

    type: str = Field(description='Selection type')
    config: str = Field(description='Type-specific selection config')


class TransformationDefinition(BaseModel):
    """A single transformation step.

    Attributes:
        type: Transformation type ('join', 'split', 'date', 'range', 'match')
        config: Type-specific configuration string
        itemwise: Whether the transformation applies per item

    """

    type: str = Field(description='Transformation type')
    config: str = Field(description='Type-specific transformation config')
    itemwise: bool = Field(description='Apply per item instead of to the whole sequence')


class ProcedureDefinition(BaseModel):
    """Selections feeding a chain of transformations."""

    selections: list[SelectionDefinition] = Field(default_factory=list)
    transformations: list[TransformationDefinition] = Field(default_factory=list)


class TemplateFieldDefinition(BaseModel):
    """A template field and the procedures that produce its value."""

    fieldname: str = Field(description='Name from the field-name enumeration')
    procedures: list[ProcedureDefinition] = Field(default_factory=list)
    required: bool = Field(default=False, description='Whether the template needs this field to be valid')


class FallbackTemplateDefinition(BaseModel):
    """A template without a path, tried after every other template."""

    model_config = ConfigDict(extra='forbid')

    label: str | None = None
    fields: list[TemplateFieldDefinition] = Field(default_factory=list)


class TemplateDefinition(BaseModel):
    """A template bound to one path of a domain."""

    path: str = Field(description='Template path, relative to the domain')
    label: str | None = None
    fields: list[TemplateFieldDefinition] = Field(default_factory=list)


class PatternDefinition(BaseModel):
    """A glob pattern used to bucket paths."""

    pattern: str = Field(description='Glob pattern matched against URL paths')
    label: str | None = None


class TestFieldDefinition(BaseModel):
    """Expected output for one field of a test."""

    __test__ = False

    fieldname: str
    goal: list[str] = Field(default_factory=list)


class TestDefinition(BaseModel):
    """Expected translation output for one path."""

    __test__ = False

    path: str
    fields: list[TestFieldDefinition] = Field(default_factory=list)
