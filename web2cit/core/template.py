"""Translation templates: ordered sets of fields bound to a domain path."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from web2cit.core.fields import TemplateField
from web2cit.exceptions import CrossDomainTranslationError, DomainNameError, Web2CitError
from web2cit.models.definitions import FallbackTemplateDefinition, TemplateDefinition, TemplateFieldDefinition
from web2cit.models.results import TemplateOutput
from web2cit.utils.timestamps import utc_timestamp
from web2cit.utils.urls import is_domain_name, normalize_path

if TYPE_CHECKING:
    from web2cit.core.webpage import Webpage

logger = logging.getLogger(__name__)


class BaseTemplate:
    """Fields evaluated together against targets of one domain.

    Attributes:
        domain: Domain the template applies to
        label: Optional human-readable label
        fields: Template fields, unique by name except for control fields

    """

    path: str | None = None

    def __init__(
        self,
        domain: str,
        fields: Iterable[TemplateFieldDefinition | dict[str, Any]] = (),
        label: str | None = None,
        force_required: Iterable[str] = (),
    ):
        """Initialize the template.

        Fields that fail to build are logged and skipped, as are unique
        fields whose name is already taken.

        Args:
            domain: Domain the template applies to
            fields: Field definitions, in order
            label: Optional label
            force_required: Names of fields to mark as required

        Raises:
            DomainNameError: If the domain name is invalid

        """
        if not is_domain_name(domain):
            raise DomainNameError(domain)
        self.domain = domain
        self.label = label
        self.fields: list[TemplateField] = []

        force_required = set(force_required)
        for definition in fields:
            try:
                field = TemplateField.from_definition(definition)
            except (ValidationError, Web2CitError) as e:
                logger.warning(f'Skipping invalid field definition in template for {self._describe()}: {e}')
                continue
            if field.name in force_required and not field.required:
                field = field.with_required(True)
            self.add_field(field)

    def _describe(self) -> str:
        return f'{self.domain}{self.path or " (fallback)"}'

    def add_field(self, field: TemplateField) -> bool:
        """Append a field unless a unique field with the same name exists.

        Returns:
            Whether the field was added

        """
        if field.is_unique and any(existing.name == field.name for existing in self.fields):
            logger.info(f'Template for {self._describe()} already has a "{field.name}" field; skipping duplicate')
            return False
        self.fields.append(field)
        return True

    async def translate(self, target: Webpage) -> TemplateOutput:
        """Translate a target webpage with every field of the template.

        Args:
            target: Webpage of the template's domain

        Returns:
            Field outputs and the template's applicability

        Raises:
            CrossDomainTranslationError: If the target belongs to another domain

        """
        if target.domain != self.domain:
            raise CrossDomainTranslationError(self.domain, target.domain)

        outputs = list(await asyncio.gather(*(field.translate(target) for field in self.fields)))
        return TemplateOutput(
            template=self,
            target=target,
            outputs=outputs,
            applicable=all(output.applicable for output in outputs),
            timestamp=utc_timestamp(),
        )


class TranslationTemplate(BaseTemplate):
    """A template bound to one path of its domain."""

    def __init__(
        self,
        domain: str,
        definition: TemplateDefinition | dict[str, Any],
        force_required: Iterable[str] = (),
    ):
        if not isinstance(definition, TemplateDefinition):
            definition = TemplateDefinition.model_validate(definition)
        if not definition.path.startswith('/'):
            raise ValueError(f'Template path "{definition.path}" must start with "/"')
        self.path = normalize_path(definition.path)
        super().__init__(domain, definition.fields, label=definition.label, force_required=force_required)

    def to_definition(self) -> TemplateDefinition:
        return TemplateDefinition(
            path=self.path,
            label=self.label,
            fields=[field.to_definition() for field in self.fields],
        )

    def __repr__(self) -> str:
        return f'TranslationTemplate({self.domain!r}, path={self.path!r})'


class FallbackTemplate(BaseTemplate):
    """The path-less template tried after every other template."""

    def __init__(
        self,
        domain: str,
        definition: FallbackTemplateDefinition | dict[str, Any],
        force_required: Iterable[str] = (),
    ):
        if not isinstance(definition, FallbackTemplateDefinition):
            definition = FallbackTemplateDefinition.model_validate(definition)
        super().__init__(domain, definition.fields, label=definition.label, force_required=force_required)

    def to_definition(self) -> FallbackTemplateDefinition:
        return FallbackTemplateDefinition(
            label=self.label,
            fields=[field.to_definition() for field in self.fields],
        )

    def __repr__(self) -> str:
        return f'FallbackTemplate({self.domain!r})'
