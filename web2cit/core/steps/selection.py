"""Selection steps.

A selection reads raw data about a target webpage (its simplified Citoid
citation or its HTML) and returns an ordered list of strings.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar

import lxml.html
import soupsieve
from lxml import etree

from web2cit.exceptions import SelectionConfigTypeError, UndefinedSelectionConfigError, UnknownStepTypeError
from web2cit.models.citoid import is_simple_citoid_field
from web2cit.models.definitions import SelectionDefinition
from web2cit.models.results import StepOutput

if TYPE_CHECKING:
    from web2cit.core.webpage import Webpage


def collapse_whitespace(text: str) -> str:
    """Trim a string and collapse inner whitespace runs into single spaces."""
    return ' '.join(text.split())


class Selection(ABC):
    """Base class for selection steps.

    Selections are immutable: ``with_config`` returns a new, re-validated
    instance instead of changing this one.
    """

    type: ClassVar[str]

    def __init__(self, config: str | None = None):
        """Initialize the selection.

        Args:
            config: Type-specific config; may be left unset, but then
                ``select`` fails

        Raises:
            SelectionConfigTypeError: If the config is invalid for this type

        """
        self._config: str | None = None
        if config is not None:
            self._config = self._validate(config)

    @property
    def config(self) -> str | None:
        return self._config

    def with_config(self, config: str) -> Selection:
        """Return a copy of this selection with a different config."""
        return type(self)(config)

    def to_definition(self) -> SelectionDefinition:
        return SelectionDefinition(type=self.type, config=self._config or '')

    async def select(self, target: Webpage) -> StepOutput:
        """Select data from a target webpage.

        Args:
            target: Webpage to select from

        Returns:
            Selected strings, in document/citation order

        Raises:
            UndefinedSelectionConfigError: If no config has been set

        """
        if self._config is None:
            raise UndefinedSelectionConfigError(self.type)
        return await self._select(target, self._config)

    @abstractmethod
    def _validate(self, config: str) -> str:
        """Validate a config, returning it if valid."""

    @abstractmethod
    async def _select(self, target: Webpage, config: str) -> StepOutput:
        """Run the selection with a validated config."""

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._config!r})'


class CitoidSelection(Selection):
    """Select a field of the target's simplified Citoid citation."""

    type = 'citoid'

    def _validate(self, config: str) -> str:
        if not is_simple_citoid_field(config):
            raise SelectionConfigTypeError(self.type, config, 'not a Citoid field')
        return config

    async def _select(self, target: Webpage, config: str) -> StepOutput:
        data = await target.cache.citoid.get_data()
        value = data.citation.get(config)
        if value is None:
            return []
        if isinstance(value, list):
            return [str(item) for item in value]
        return [str(value)]


class XPathSelection(Selection):
    """Select nodes or values from the target's HTML with an XPath expression."""

    type = 'xpath'

    def _validate(self, config: str) -> str:
        try:
            xpath = etree.XPath(config)
            # undefined prefixes, functions and variables only fail on evaluation
            xpath(lxml.html.document_fromstring('<html></html>'))
        except etree.XPathError as e:
            raise SelectionConfigTypeError(self.type, config, str(e)) from e
        self._xpath = xpath
        return config

    async def _select(self, target: Webpage, config: str) -> StepOutput:
        data = await target.cache.http.get_data()
        result = self._xpath(data.doc)
        if isinstance(result, list):
            return self._nodes_to_strings(result)
        return [self._scalar_to_string(result)]

    @staticmethod
    def _nodes_to_strings(nodes: list[Any]) -> StepOutput:
        output: StepOutput = []
        for node in nodes:
            if isinstance(node, etree._Element):
                if isinstance(node.tag, str):
                    output.append(collapse_whitespace(''.join(node.itertext())))
                else:
                    # comments and processing instructions
                    text = collapse_whitespace(node.text or '')
                    if text:
                        output.append(text)
            elif isinstance(node, str):
                if getattr(node, 'is_attribute', False):
                    output.append(str(node))
                else:
                    text = collapse_whitespace(node)
                    if text:
                        output.append(text)
        return output

    @staticmethod
    def _scalar_to_string(value: Any) -> str:
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, float):
            if math.isnan(value):
                return 'NaN'
            if math.isinf(value):
                return 'Infinity' if value > 0 else '-Infinity'
            if value.is_integer():
                return str(int(value))
        return str(value)


class CssSelection(Selection):
    """Select element texts from the target's HTML with a CSS selector."""

    type = 'css'

    def _validate(self, config: str) -> str:
        try:
            self._selector = soupsieve.compile(config)
        except soupsieve.SelectorSyntaxError as e:
            raise SelectionConfigTypeError(self.type, config, str(e)) from e
        return config

    async def _select(self, target: Webpage, config: str) -> StepOutput:
        data = await target.cache.http.get_data()
        texts = (collapse_whitespace(element.get_text()) for element in self._selector.select(data.soup))
        return [text for text in texts if text]


class FixedSelection(Selection):
    """Return the config itself, without reading the target."""

    type = 'fixed'

    def _validate(self, config: str) -> str:
        return config

    async def _select(self, target: Webpage, config: str) -> StepOutput:
        return [config]


SELECTION_TYPES: dict[str, type[Selection]] = {
    selection_class.type: selection_class
    for selection_class in (CitoidSelection, XPathSelection, CssSelection, FixedSelection)
}


def create_selection(definition: SelectionDefinition | dict[str, Any]) -> Selection:
    """Create a selection from its definition.

    Args:
        definition: Selection definition (model or plain dict)

    Returns:
        The selection instance

    Raises:
        UnknownStepTypeError: If the selection type is not supported
        SelectionConfigTypeError: If the config is invalid for the type

    """
    if not isinstance(definition, SelectionDefinition):
        definition = SelectionDefinition.model_validate(definition)
    selection_class = SELECTION_TYPES.get(definition.type)
    if selection_class is None:
        raise UnknownStepTypeError('selection', definition.type)
    return selection_class(definition.config)
