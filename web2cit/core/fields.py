"""Citation fields: parameters, validation and template fields."""

from __future__ import annotations

import asyncio
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from web2cit.core.procedure import Procedure
from web2cit.exceptions import ForceRequiredFieldError, UnknownFieldError
from web2cit.models.definitions import ProcedureDefinition, TemplateFieldDefinition
from web2cit.models.results import FieldOutput

if TYPE_CHECKING:
    from web2cit.core.webpage import Webpage

# https://aurimasv.github.io/z2csl/typeMap.xml
ITEM_TYPES = (
    'artwork',
    'attachment',
    'audioRecording',
    'bill',
    'blogPost',
    'book',
    'bookSection',
    'case',
    'computerProgram',
    'conferencePaper',
    'dictionaryEntry',
    'document',
    'email',
    'encyclopediaArticle',
    'film',
    'forumPost',
    'hearing',
    'instantMessage',
    'interview',
    'journalArticle',
    'letter',
    'magazineArticle',
    'manuscript',
    'map',
    'newspaperArticle',
    'note',
    'patent',
    'podcast',
    'presentation',
    'radioBroadcast',
    'report',
    'statute',
    'thesis',
    'tvBroadcast',
    'videoRecording',
    'webpage',
)


@dataclass(frozen=True)
class FieldParameters:
    """Static parameters of a field name.

    Attributes:
        array: Whether the field holds several values
        force_required: Whether templates must always require the field
        pattern: Pattern every output value must fully match
        default_procedure: Procedure used when a field is created by name
        unique: Whether a template may hold at most one field with this name
        control: Whether the field is excluded from citations

    """

    array: bool
    force_required: bool
    pattern: re.Pattern[str]
    default_procedure: ProcedureDefinition = field(default_factory=ProcedureDefinition)
    unique: bool = True
    control: bool = False


def _citoid_procedure(*names: str, transformations: Sequence[dict[str, Any]] = ()) -> ProcedureDefinition:
    return ProcedureDefinition.model_validate(
        {
            'selections': [{'type': 'citoid', 'config': name} for name in names],
            'transformations': list(transformations),
        }
    )


FIELD_PARAMETERS: dict[str, FieldParameters] = {
    'itemType': FieldParameters(
        array=False,
        force_required=True,
        pattern=re.compile(rf'^(?:{"|".join(ITEM_TYPES)})$'),
        default_procedure=_citoid_procedure('itemType'),
    ),
    'title': FieldParameters(
        array=False,
        force_required=True,
        pattern=re.compile(r'^.+$'),
        default_procedure=_citoid_procedure('title'),
    ),
    'authorFirst': FieldParameters(
        array=True,
        force_required=False,
        pattern=re.compile(r'^.*$'),  # first names may be empty
        default_procedure=_citoid_procedure('authorFirst'),
    ),
    'authorLast': FieldParameters(
        array=True,
        force_required=False,
        pattern=re.compile(r'^.+$'),
        default_procedure=_citoid_procedure('authorLast'),
    ),
    'date': FieldParameters(
        array=False,
        force_required=False,
        pattern=re.compile(r'^\d{4}(-\d{2}(-\d{2})?)?$'),
        default_procedure=_citoid_procedure(
            'date', transformations=[{'type': 'date', 'config': 'en', 'itemwise': False}]
        ),
    ),
    'publishedIn': FieldParameters(
        array=False,
        force_required=False,
        pattern=re.compile(r'^.+$'),
        # items have at most one of publicationTitle, code or reporter
        default_procedure=_citoid_procedure(
            'publicationTitle',
            'code',
            'reporter',
            transformations=[{'type': 'range', 'config': '0', 'itemwise': False}],
        ),
    ),
    'publishedBy': FieldParameters(
        array=False,
        force_required=False,
        pattern=re.compile(r'^.+$'),
        default_procedure=_citoid_procedure('publisher'),
    ),
    'language': FieldParameters(
        array=False,
        force_required=False,
        pattern=re.compile(r'^[a-z]{2}(?:-?[a-z]{2,})*$', re.IGNORECASE),
        default_procedure=_citoid_procedure('language'),
    ),
    'control': FieldParameters(
        array=False,
        force_required=True,
        pattern=re.compile(r'^.*$'),
        unique=False,
        control=True,
    ),
}

FIELD_NAMES = tuple(FIELD_PARAMETERS)


def get_field_parameters(fieldname: str) -> FieldParameters:
    """Look up the parameters of a field name.

    Raises:
        UnknownFieldError: If the name is not a known field

    """
    params = FIELD_PARAMETERS.get(fieldname)
    if params is None:
        raise UnknownFieldError(fieldname)
    return params


class TranslationField:
    """A named citation field and its static parameters."""

    def __init__(self, fieldname: str):
        self.name = fieldname
        self.params = get_field_parameters(fieldname)

    @property
    def is_array(self) -> bool:
        return self.params.array

    @property
    def pattern(self) -> re.Pattern[str]:
        return self.params.pattern

    @property
    def is_unique(self) -> bool:
        return self.params.unique

    @property
    def is_control(self) -> bool:
        return self.params.control

    @property
    def force_required(self) -> bool:
        return self.params.force_required

    def validate(self, output: Sequence[str]) -> list[str | None]:
        """Validate an output against the field's arity and pattern.

        Scalar fields collapse several values into one comma-joined value.
        Values are trimmed; values not matching the pattern become None so
        that positions are preserved.

        Args:
            output: Unvalidated output

        Returns:
            Validated output

        """
        values = list(output)
        if not self.is_array and len(values) > 1:
            values = [','.join(values)]
        validated: list[str | None] = []
        for value in values:
            value = value.strip()
            validated.append(value if self.pattern.fullmatch(value) else None)
        return validated


class TemplateField(TranslationField):
    """A field of a template, computed by one or more procedures.

    Attributes:
        procedures: Procedures whose outputs are concatenated
        required: Whether the template is only applicable if this field is valid

    """

    def __init__(self, fieldname: str, procedures: Sequence[Procedure] = (), required: bool = False):
        """Initialize the template field.

        Force-required fields are always required, whatever ``required`` says.

        Raises:
            UnknownFieldError: If the name is not a known field

        """
        super().__init__(fieldname)
        self.procedures = list(procedures)
        self._required = self.force_required or required

    @property
    def required(self) -> bool:
        return self._required

    @classmethod
    def from_definition(cls, definition: TemplateFieldDefinition | dict[str, Any]) -> TemplateField:
        """Build a template field from its definition."""
        if not isinstance(definition, TemplateFieldDefinition):
            definition = TemplateFieldDefinition.model_validate(definition)
        return cls(
            definition.fieldname,
            procedures=[Procedure.from_definition(procedure) for procedure in definition.procedures],
            required=definition.required,
        )

    @classmethod
    def from_name(cls, fieldname: str, required: bool = False) -> TemplateField:
        """Build a template field using the field's default procedure."""
        params = get_field_parameters(fieldname)
        return cls(fieldname, procedures=[Procedure.from_definition(params.default_procedure)], required=required)

    def with_required(self, required: bool) -> TemplateField:
        """Return a copy of this field with a different required flag.

        Raises:
            ForceRequiredFieldError: If making a force-required field non-required

        """
        if not required and self.force_required:
            raise ForceRequiredFieldError(self.name)
        return type(self)(self.name, procedures=self.procedures, required=required)

    def to_definition(self) -> TemplateFieldDefinition:
        return TemplateFieldDefinition(
            fieldname=self.name,
            procedures=[procedure.to_definition() for procedure in self.procedures],
            required=self.required,
        )

    async def translate(self, target: Webpage) -> FieldOutput:
        """Run the field's procedures against a target and validate the result.

        Args:
            target: Webpage to translate

        Returns:
            Procedure outputs, validated output, validity and applicability

        """
        procedure_outputs = list(await asyncio.gather(*(procedure.translate(target) for procedure in self.procedures)))
        combined = [item for procedure_output in procedure_outputs for item in procedure_output.output]
        output = self.validate(combined)
        valid = bool(output) and all(value is not None for value in output)
        return FieldOutput(
            field=self,
            procedure_outputs=procedure_outputs,
            output=output,
            valid=valid,
            required=self.required,
            applicable=valid or not self.required,
        )

    def __repr__(self) -> str:
        return f'TemplateField({self.name!r}, required={self.required!r})'
