"""Dataclasses for fetch results and step/field/template outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from web2cit.core.fields import TemplateField
    from web2cit.core.procedure import Procedure
    from web2cit.core.template import BaseTemplate
    from web2cit.core.webpage import Webpage

StepOutput = list[str]


@dataclass
class FetchResult:
    """Result of an HTML fetch operation.

    Attributes:
        url: Final URL, after redirects
        body: Response body text
        headers: Response headers, lower-cased names
        status_code: HTTP status code
        fetch_time: Total time spent fetching, in seconds

    """

    url: str
    body: str
    headers: dict[str, str] = field(default_factory=dict)
    status_code: int = 200
    fetch_time: float = 0.0


@dataclass
class ProcedureOutput:
    """Intermediate and final outputs of one procedure run.

    Attributes:
        procedure: The procedure that produced this output
        selection: One output per selection, in declared order
        transformation: One output per transformation, in chain order
        output: Final procedure output

    """

    procedure: Procedure
    selection: list[StepOutput]
    transformation: list[StepOutput]
    output: StepOutput


@dataclass
class FieldOutput:
    """Validated output of a template field."""

    field: TemplateField
    procedure_outputs: list[ProcedureOutput]
    output: list[str | None]
    valid: bool
    required: bool
    applicable: bool

    @property
    def fieldname(self) -> str:
        return self.field.name

    @property
    def control(self) -> bool:
        return self.field.is_control


@dataclass
class TemplateOutput:
    """Output of translating one target with one template."""

    template: BaseTemplate
    target: Webpage
    outputs: list[FieldOutput]
    applicable: bool
    timestamp: str
