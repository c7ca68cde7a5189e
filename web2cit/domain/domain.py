"""Domains: pattern routing and template precedence for one website."""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import logfire

from web2cit.clients.citoid import CitoidClient
from web2cit.clients.revisions import RevisionsApi
from web2cit.config import Settings, get_settings
from web2cit.core.caching import DocumentParser, parse_html
from web2cit.core.citation import make_citation
from web2cit.core.fetcher import HTMLFetcher
from web2cit.core.webpage import Webpage, WebpageFactory
from web2cit.domain.fallback import DEFAULT_FALLBACK_TEMPLATE
from web2cit.domain.patterns import PatternConfiguration
from web2cit.domain.templates import TemplateConfiguration
from web2cit.domain.tests import TestConfiguration
from web2cit.exceptions import DomainNameError
from web2cit.models.definitions import (
    FallbackTemplateDefinition,
    PatternDefinition,
    TemplateDefinition,
    TestDefinition,
)
from web2cit.models.outputs import (
    CacheInfo,
    DomainDefinitions,
    DomainInfo,
    FieldInfo,
    ProcedureInfo,
    RevisionInfo,
    SelectionInfo,
    TargetCaches,
    TargetInfo,
    TargetOutput,
    TemplateInfo,
    TransformationInfo,
    TranslationInfo,
    TranslationResult,
)
from web2cit.models.results import FieldOutput, TemplateOutput
from web2cit.utils.urls import is_domain_name

logger = logging.getLogger(__name__)


def _field_info(field_output: FieldOutput) -> FieldInfo:
    procedures = []
    for procedure_output in field_output.procedure_outputs:
        procedure = procedure_output.procedure
        procedures.append(
            ProcedureInfo(
                selections=[
                    SelectionInfo(type=selection.type, config=selection.config or '', output=output)
                    for selection, output in zip(procedure.selections, procedure_output.selection, strict=True)
                ],
                transformations=[
                    TransformationInfo(
                        type=transformation.type,
                        config=transformation.config,
                        itemwise=transformation.itemwise,
                        output=output,
                    )
                    for transformation, output in zip(
                        procedure.transformations, procedure_output.transformation, strict=True
                    )
                ],
                output=procedure_output.output,
            )
        )
    return FieldInfo(
        name=field_output.fieldname,
        required=field_output.required,
        procedures=procedures,
        output=field_output.output,
        valid=field_output.valid,
        applicable=field_output.applicable,
        control=field_output.control,
    )


def make_translation_result(template_output: TemplateOutput) -> TranslationResult:
    """Summarize a template output, with a citation if the template was applicable."""
    citation = None
    if template_output.applicable:
        citation = make_citation(template_output.outputs, template_output.target.url)

    template = template_output.template
    return TranslationResult(
        citation=citation,
        timestamp=template_output.timestamp,
        template=TemplateInfo(
            path=template.path,
            label=template.label,
            applicable=template_output.applicable,
            fields=[_field_info(field_output) for field_output in template_output.outputs],
        ),
    )


class Domain:
    """Translation configuration and webpages of one website.

    Attributes:
        domain: Domain name
        webpages: Factory sharing webpages (and their caches) between translations
        templates: Templates and fallback template
        patterns: Path patterns
        tests: Translation tests

    """

    def __init__(
        self,
        domain: str,
        templates: Iterable[TemplateDefinition | dict[str, Any]] | None = None,
        patterns: Iterable[PatternDefinition | dict[str, Any]] | None = None,
        tests: Iterable[TestDefinition | dict[str, Any]] | None = None,
        fallback_template: FallbackTemplateDefinition | dict[str, Any] | None = DEFAULT_FALLBACK_TEMPLATE,
        catchall_pattern: bool = True,
        force_required_fields: Iterable[str] | None = None,
        fetcher: HTMLFetcher | None = None,
        citoid: CitoidClient | None = None,
        parser: DocumentParser = parse_html,
        revisions_api: RevisionsApi | None = None,
        settings: Settings | None = None,
    ):
        """Initialize the domain.

        Args:
            domain: Domain name
            templates: Template definitions, in precedence order
            patterns: Pattern definitions, in matching order
            tests: Test definitions
            fallback_template: Fallback template definition; None disables it
            catchall_pattern: Append a catch-all pattern to the patterns
            force_required_fields: Fields every template must require;
                the configured ones by default
            fetcher: Page fetcher shared by the domain's webpages
            citoid: Citoid client shared by the domain's webpages
            parser: HTML parser shared by the domain's webpages
            revisions_api: Client for the configuration storage
            settings: Settings to read defaults from

        Raises:
            DomainNameError: If the domain name is invalid

        """
        if not is_domain_name(domain):
            raise DomainNameError(domain)
        self.domain = domain
        settings = settings or get_settings()
        if force_required_fields is None:
            force_required_fields = settings.force_required_fields

        self.webpages = WebpageFactory(domain, fetcher=fetcher, citoid=citoid, parser=parser)
        options: dict[str, Any] = {'revisions_api': revisions_api, 'settings': settings}
        self.templates = TemplateConfiguration(
            domain,
            templates,
            force_required_fields=force_required_fields,
            fallback=fallback_template,
            **options,
        )
        self.patterns = PatternConfiguration(domain, patterns, catchall=catchall_pattern, **options)
        self.tests = TestConfiguration(domain, tests, **options)

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> 'Domain':
        """Create the domain of a URL, registering the URL's webpage with it."""
        webpage = Webpage(
            url,
            fetcher=kwargs.get('fetcher'),
            citoid=kwargs.get('citoid'),
            parser=kwargs.get('parser', parse_html),
        )
        domain = cls(webpage.domain, **kwargs)
        domain.webpages.set_webpage(webpage)
        return domain

    async def fetch_and_load_configs(self, refresh: bool = False) -> None:
        """Load the latest stored templates, patterns and tests.

        Each configuration loads independently; failures are logged and leave
        that configuration unchanged.
        """
        configurations = (self.templates, self.patterns, self.tests)
        outcomes = await asyncio.gather(
            *(configuration.fetch_and_load(refresh) for configuration in configurations),
            return_exceptions=True,
        )
        for configuration, outcome in zip(configurations, outcomes, strict=True):
            if isinstance(outcome, Exception):
                logger.warning(f'Failed to load {configuration.kind} configuration for {self.domain}: {outcome}')
                logfire.warn(
                    'Configuration load failed', domain=self.domain, kind=configuration.kind, error=str(outcome)
                )
            elif isinstance(outcome, BaseException):
                raise outcome

    def get_paths(self) -> list[str]:
        """Return the template paths and non-empty test paths, without duplicates."""
        return list(dict.fromkeys([*self.templates.paths, *self.tests.non_empty_paths]))

    async def translate(
        self,
        paths: str | Iterable[str],
        all_templates: bool = False,
        only_applicable: bool = True,
        force_template_paths: Iterable[str] | None = None,
        force_pattern: str | None = None,
    ) -> list[TargetOutput]:
        """Translate target paths of this domain.

        Each path is bucketed by the first pattern it matches, and the
        templates in that pattern's bucket are tried in template order,
        followed by the fallback template.

        Args:
            paths: Target path or paths
            all_templates: Evaluate every candidate template instead of
                stopping at the first applicable one
            only_applicable: Leave non-applicable template outputs out
            force_template_paths: Use these templates for every target,
                bypassing pattern matching and the fallback template
            force_pattern: Use this pattern's templates for every target

        Returns:
            One output per target path, in input order

        """
        if isinstance(paths, str):
            paths = [paths]
        paths = list(paths)
        if force_template_paths is not None:
            force_template_paths = list(force_template_paths)

        targets_by_pattern: dict[str | None, list[str]]
        if force_template_paths is not None:
            targets_by_pattern = {None: paths}
        elif force_pattern is not None:
            targets_by_pattern = {force_pattern: paths}
        else:
            targets_by_pattern = dict(self.patterns.sort_paths(paths))

        assignments: dict[str, tuple[str | None, list[str]]] = {}
        for pattern, target_paths in targets_by_pattern.items():
            if not target_paths:
                continue
            if pattern is None:
                template_paths = force_template_paths or []
            else:
                template_paths = self.patterns.sort_paths(self.templates.paths, pattern)
            for target_path in target_paths:
                assignments[target_path] = (pattern, template_paths)

        with logfire.span('translate {domain}', domain=self.domain, paths=paths):
            return list(
                await asyncio.gather(
                    *(
                        self._translate_target(
                            path,
                            *assignments.get(path, (None, [])),
                            use_fallback=force_template_paths is None,
                            all_templates=all_templates,
                            only_applicable=only_applicable,
                        )
                        for path in paths
                    )
                )
            )

    async def _translate_target(
        self,
        path: str,
        pattern: str | None,
        template_paths: list[str],
        use_fallback: bool,
        all_templates: bool,
        only_applicable: bool,
    ) -> TargetOutput:
        target = self.webpages.get_webpage(path)
        template_outputs = await self.templates.translate_with(
            target,
            template_paths,
            use_fallback=use_fallback,
            try_all_templates=all_templates,
            only_applicable=only_applicable,
        )

        return TargetOutput(
            domain=DomainInfo(
                name=self.domain,
                definitions=DomainDefinitions(
                    patterns=RevisionInfo(revid=self.patterns.current_revid),
                    templates=RevisionInfo(revid=self.templates.current_revid),
                    tests=RevisionInfo(revid=self.tests.current_revid),
                ),
            ),
            target=TargetInfo(
                path=target.path,
                caches=TargetCaches(
                    http=CacheInfo(timestamp=target.cache.http.timestamp) if target.cache.http.timestamp else None,
                    citoid=(
                        CacheInfo(timestamp=target.cache.citoid.timestamp) if target.cache.citoid.timestamp else None
                    ),
                ),
            ),
            translation=TranslationInfo(
                pattern=pattern,
                outputs=[make_translation_result(output) for output in template_outputs],
            ),
        )
