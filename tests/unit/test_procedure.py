import asyncio

import pytest

from web2cit.core.procedure import Procedure
from web2cit.core.steps import (
    CitoidSelection,
    FixedSelection,
    JoinTransformation,
    MatchTransformation,
    RangeTransformation,
    Selection,
)
from web2cit.exceptions import HTTPResponseError, UnknownStepTypeError


class DelayedSelection(Selection):
    """Fixed selection that resolves after a delay."""

    type = 'delayed'

    def __init__(self, config, delay):
        super().__init__(config)
        self.delay = delay

    def _validate(self, config):
        return config

    async def _select(self, target, config):
        await asyncio.sleep(self.delay)
        return [config]


@pytest.mark.asyncio
async def test_procedure_pipes_selections_through_transformations(webpage):
    procedure = Procedure(
        selections=[CitoidSelection('title'), CitoidSelection('authorFirst')],
        transformations=[RangeTransformation(itemwise=False, config='1,2,0'), JoinTransformation()],
    )

    output = await procedure.translate(webpage)

    assert output.selection == [['Sample article'], ['John', 'Jane']]
    assert output.transformation == [
        ['John', 'Jane', 'Sample article'],
        ['John,Jane,Sample article'],
    ]
    assert output.output == ['John,Jane,Sample article']
    assert output.procedure is procedure


@pytest.mark.asyncio
async def test_procedure_keeps_declared_selection_order(webpage):
    procedure = Procedure(selections=[DelayedSelection('slow', 0.02), DelayedSelection('fast', 0)])
    output = await procedure.translate(webpage)
    assert output.output == ['slow', 'fast']


@pytest.mark.asyncio
async def test_procedure_without_transformations(webpage):
    output = await Procedure(selections=[FixedSelection('a'), FixedSelection('b')]).translate(webpage)
    assert output.transformation == []
    assert output.output == ['a', 'b']


@pytest.mark.asyncio
async def test_procedure_empty_transformation_result_falls_back_to_selection(webpage):
    procedure = Procedure(selections=[FixedSelection('abc')], transformations=[MatchTransformation(config=r'/\d+/')])
    output = await procedure.translate(webpage)
    assert output.transformation == [[]]
    assert output.output == ['abc']


@pytest.mark.asyncio
async def test_procedure_propagates_fetch_errors(webpage, fake_citoid):
    fake_citoid.failures.append(HTTPResponseError(webpage.url, 503))
    procedure = Procedure(selections=[CitoidSelection('title')])

    with pytest.raises(HTTPResponseError):
        await procedure.translate(webpage)


def test_procedure_definition_round_trip():
    definition = {
        'selections': [{'type': 'xpath', 'config': '//h1'}],
        'transformations': [{'type': 'range', 'config': '0', 'itemwise': False}],
    }
    procedure = Procedure.from_definition(definition)
    assert procedure.to_definition().model_dump() == definition


def test_procedure_from_definition_rejects_unknown_steps():
    with pytest.raises(UnknownStepTypeError):
        Procedure.from_definition({'selections': [{'type': 'regex', 'config': 'x'}]})
