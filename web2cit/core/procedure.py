"""Procedures: selections feeding a chain of transformations."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from web2cit.core.steps import Selection, Transformation, create_selection, create_transformation
from web2cit.models.definitions import ProcedureDefinition
from web2cit.models.results import ProcedureOutput, StepOutput

if TYPE_CHECKING:
    from web2cit.core.webpage import Webpage


class Procedure:
    """Run selections concurrently and pipe their output through transformations.

    Attributes:
        selections: Selections, in declared order
        transformations: Transformations, in chain order

    """

    def __init__(
        self,
        selections: Sequence[Selection] = (),
        transformations: Sequence[Transformation] = (),
    ):
        self.selections = list(selections)
        self.transformations = list(transformations)

    @classmethod
    def from_definition(cls, definition: ProcedureDefinition | dict[str, Any]) -> Procedure:
        """Build a procedure from its definition.

        Raises:
            UnknownStepTypeError: If a step type is not supported
            ConfigTypeError: If a step config is invalid

        """
        if not isinstance(definition, ProcedureDefinition):
            definition = ProcedureDefinition.model_validate(definition)
        return cls(
            selections=[create_selection(selection) for selection in definition.selections],
            transformations=[create_transformation(transformation) for transformation in definition.transformations],
        )

    def to_definition(self) -> ProcedureDefinition:
        return ProcedureDefinition(
            selections=[selection.to_definition() for selection in self.selections],
            transformations=[transformation.to_definition() for transformation in self.transformations],
        )

    async def translate(self, target: Webpage) -> ProcedureOutput:
        """Run the procedure against a target webpage.

        Selection outputs are concatenated in declared order, whatever order
        they complete in. If the transformation chain ends with an empty
        output while the selections returned something, the untransformed
        selection output is used instead.

        Args:
            target: Webpage to translate

        Returns:
            Selection, transformation and final outputs

        """
        selection_outputs: list[StepOutput] = list(
            await asyncio.gather(*(selection.select(target) for selection in self.selections))
        )
        selection_output = [item for output in selection_outputs for item in output]

        transformation_outputs: list[StepOutput] = []
        current = selection_output
        for transformation in self.transformations:
            current = await transformation.transform(current)
            transformation_outputs.append(current)

        # TODO: decide whether an empty chain result should erase the selection output
        output = current if current or not selection_output else selection_output

        return ProcedureOutput(
            procedure=self,
            selection=selection_outputs,
            transformation=transformation_outputs,
            output=output,
        )

    def __repr__(self) -> str:
        return f'Procedure(selections={self.selections!r}, transformations={self.transformations!r})'
