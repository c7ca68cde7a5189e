"""Pydantic models for the structured output of a domain translation."""

from typing import Any

from pydantic import BaseModel, Field


class SelectionInfo(BaseModel):
    """A selection step together with its output."""

    type: str
    config: str
    output: list[str]


class TransformationInfo(BaseModel):
    """A transformation step together with its output."""

    type: str
    config: str
    itemwise: bool
    output: list[str]


class ProcedureInfo(BaseModel):
    """Intermediate outputs of one procedure."""

    selections: list[SelectionInfo] = Field(default_factory=list)
    transformations: list[TransformationInfo] = Field(default_factory=list)
    output: list[str] = Field(default_factory=list)


class FieldInfo(BaseModel):
    """Per-field introspection data for UI and debugging.

    Attributes:
        name: Field name
        required: Whether the template requires this field
        procedures: Intermediate outputs of every procedure
        output: Validated output; invalid items are None
        valid: Whether the output is non-empty and fully valid
        applicable: Whether the field is valid or not required
        control: Whether this is a control field

    """

    name: str
    required: bool
    procedures: list[ProcedureInfo] = Field(default_factory=list)
    output: list[str | None] = Field(default_factory=list)
    valid: bool
    applicable: bool
    control: bool = False


class TemplateInfo(BaseModel):
    """Summary of the template used for a translation."""

    path: str | None = Field(default=None, description='Template path, None for the fallback template')
    label: str | None = None
    applicable: bool
    fields: list[FieldInfo] = Field(default_factory=list)


class TranslationResult(BaseModel):
    """Output of one template applied to one target."""

    citation: dict[str, Any] | None = Field(default=None, description='Assembled citation, if applicable')
    timestamp: str
    template: TemplateInfo


class TranslationInfo(BaseModel):
    """Pattern used to pick templates, and the resulting translations."""

    pattern: str | None = None
    outputs: list[TranslationResult] = Field(default_factory=list)


class CacheInfo(BaseModel):
    """Timestamp of a cached response."""

    timestamp: str


class TargetCaches(BaseModel):
    """Cache state of a target webpage."""

    http: CacheInfo | None = None
    citoid: CacheInfo | None = None


class TargetInfo(BaseModel):
    """The translated webpage."""

    path: str
    caches: TargetCaches = Field(default_factory=TargetCaches)


class RevisionInfo(BaseModel):
    """Revision a configuration was loaded from."""

    revid: int | None = None


class DomainDefinitions(BaseModel):
    """Revisions of each domain configuration."""

    patterns: RevisionInfo = Field(default_factory=RevisionInfo)
    templates: RevisionInfo = Field(default_factory=RevisionInfo)
    tests: RevisionInfo = Field(default_factory=RevisionInfo)


class DomainInfo(BaseModel):
    """The domain a target was translated with."""

    name: str
    definitions: DomainDefinitions = Field(default_factory=DomainDefinitions)


class TargetOutput(BaseModel):
    """Complete translation output for one target path."""

    domain: DomainInfo
    target: TargetInfo
    translation: TranslationInfo
