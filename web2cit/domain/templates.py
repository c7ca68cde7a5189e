"""Templates of a domain and the precedence rules used to try them."""

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import logfire

from web2cit.core.template import BaseTemplate, FallbackTemplate, TranslationTemplate
from web2cit.domain.configuration import DomainConfiguration
from web2cit.exceptions import DuplicateTemplatePathError, Web2CitError
from web2cit.models.definitions import FallbackTemplateDefinition, TemplateDefinition
from web2cit.models.results import TemplateOutput
from web2cit.utils.urls import normalize_path

if TYPE_CHECKING:
    from web2cit.core.webpage import Webpage

logger = logging.getLogger(__name__)


class TemplateConfiguration(DomainConfiguration[TranslationTemplate]):
    """Templates of a domain, in precedence order, plus an optional fallback.

    Attributes:
        force_required_fields: Field names every template treats as required
        fallback: Path-less template tried after every other template

    """

    filename = 'templates.json'
    kind = 'template'

    def __init__(
        self,
        domain: str,
        definitions: Iterable[TemplateDefinition | dict[str, Any]] | None = None,
        force_required_fields: Iterable[str] = (),
        fallback: FallbackTemplateDefinition | dict[str, Any] | None = None,
        **kwargs: Any,
    ):
        self.force_required_fields = tuple(force_required_fields)
        self.fallback = (
            FallbackTemplate(domain, fallback, force_required=self.force_required_fields)
            if fallback is not None
            else None
        )
        super().__init__(domain, definitions, **kwargs)

    def build(self, definition: TemplateDefinition | dict[str, Any]) -> TranslationTemplate:
        return TranslationTemplate(self.domain, definition, force_required=self.force_required_fields)

    def identify(self, item: TranslationTemplate) -> str:
        return item.path

    def normalize_id(self, item_id: str) -> str:
        return normalize_path(item_id)

    def duplicate_error(self, item_id: str) -> Web2CitError:
        return DuplicateTemplatePathError(item_id)

    def to_definition(self, item: TranslationTemplate) -> TemplateDefinition:
        return item.to_definition()

    @property
    def paths(self) -> list[str]:
        return self.ids

    async def translate_with(
        self,
        target: 'Webpage',
        paths: Iterable[str] | None = None,
        use_fallback: bool = True,
        prefer_same_path: bool = False,
        try_all_templates: bool = False,
        only_applicable: bool = True,
    ) -> list[TemplateOutput]:
        """Translate a target with candidate templates, in precedence order.

        By default templates are tried one at a time and the first applicable
        one wins. With ``try_all_templates`` every candidate is evaluated
        concurrently.

        Args:
            target: Webpage to translate
            paths: Paths of the candidate templates; every template if None
            use_fallback: Try the fallback template last
            prefer_same_path: Try the template whose path equals the target's first
            try_all_templates: Evaluate every candidate instead of stopping at the first applicable one
            only_applicable: Leave non-applicable outputs out of the result

        Returns:
            Template outputs, in the order the templates were tried

        """
        templates: list[BaseTemplate] = list(self.get(paths))
        if prefer_same_path:
            same_path = [template for template in templates if template.path == target.path]
            templates = same_path + [template for template in templates if template.path != target.path]
        if use_fallback and self.fallback is not None:
            templates.append(self.fallback)

        if try_all_templates:
            outputs = list(await asyncio.gather(*(template.translate(target) for template in templates)))
            if only_applicable:
                outputs = [output for output in outputs if output.applicable]
            return outputs

        outputs = []
        for template in templates:
            with logfire.span('try template {path}', path=template.path, target=target.path):
                output = await template.translate(target)
            if output.applicable or not only_applicable:
                outputs.append(output)
            if output.applicable:
                break
        else:
            logger.info(f'No applicable template found for {target.url}')
        return outputs
