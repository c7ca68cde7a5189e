"""Transformation steps.

Transformations are pure functions from a list of strings to a list of
strings. ``transform`` is a coroutine only so that procedures can treat every
step uniformly.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, ClassVar

from dateparser.date import DateDataParser

from web2cit.exceptions import TransformationConfigTypeError, UnknownStepTypeError
from web2cit.models.definitions import TransformationDefinition
from web2cit.models.results import StepOutput


class Transformation(ABC):
    """Base class for transformation steps.

    Transformations are immutable; ``with_config`` and ``with_itemwise``
    return rebuilt, re-validated instances.
    """

    type: ClassVar[str]
    default_config: ClassVar[str]
    default_itemwise: ClassVar[bool]

    def __init__(self, itemwise: bool | None = None, config: str | None = None):
        """Initialize the transformation.

        Args:
            itemwise: Apply per item; the type's default if None
            config: Type-specific config; the type's default if None

        Raises:
            TransformationConfigTypeError: If the config is invalid for this type

        """
        self.itemwise = self.default_itemwise if itemwise is None else itemwise
        self._config = self._validate(self.default_config if config is None else config)

    @property
    def config(self) -> str:
        return self._config

    def with_config(self, config: str) -> Transformation:
        """Return a copy of this transformation with a different config."""
        return type(self)(self.itemwise, config)

    def with_itemwise(self, itemwise: bool) -> Transformation:
        """Return a copy of this transformation with a different itemwise flag."""
        return type(self)(itemwise, self._config)

    def to_definition(self) -> TransformationDefinition:
        return TransformationDefinition(type=self.type, config=self._config, itemwise=self.itemwise)

    async def transform(self, input: StepOutput) -> StepOutput:
        """Transform a list of strings.

        Args:
            input: Output of the previous step

        Returns:
            The transformed list

        """
        return self._transform(list(input))

    def _validate(self, config: str) -> str:
        return config

    @abstractmethod
    def _transform(self, input: StepOutput) -> StepOutput:
        """Apply the transformation."""

    def __repr__(self) -> str:
        return f'{type(self).__name__}(itemwise={self.itemwise!r}, config={self._config!r})'


def _split(item: str, separator: str) -> list[str]:
    if separator == '':
        return list(item)
    return item.split(separator)


class JoinTransformation(Transformation):
    """Join items (or the characters of each item) with a separator."""

    type = 'join'
    default_config = ','
    default_itemwise = False

    def _transform(self, input: StepOutput) -> StepOutput:
        if self.itemwise:
            return [self._config.join(item) for item in input]
        return [self._config.join(input)]


class SplitTransformation(Transformation):
    """Split items on a separator."""

    type = 'split'
    default_config = ','
    default_itemwise = True

    def _transform(self, input: StepOutput) -> StepOutput:
        if not self.itemwise:
            input = [','.join(input)]
        return [part for item in input for part in _split(item, self._config)]


# Supported locales and the dateparser language each maps to
DATE_LOCALES: dict[str, str] = {
    'ca': 'ca',
    'da': 'da',
    'de': 'de',
    'en': 'en',
    'es': 'es',
    'fi': 'fi',
    'fr': 'fr',
    'it': 'it',
    'ja': 'ja',
    'ko': 'ko',
    'nl': 'nl',
    'no': 'nb',
    'pl': 'pl',
    'pt': 'pt',
    'ru': 'ru',
    'sv': 'sv',
    'zh-CN': 'zh',
    'zh-TW': 'zh-Hant',
}

_PERIOD_FORMATS = {
    'year': '%Y',
    'month': '%Y-%m',
}


@lru_cache(maxsize=len(DATE_LOCALES))
def _get_date_parser(language: str) -> DateDataParser:
    return DateDataParser(languages=[language], settings={'PREFER_DAY_OF_MONTH': 'first'})


class DateTransformation(Transformation):
    """Normalize free-form dates into ISO-8601 dates.

    The output precision follows the input: a full date gives ``yyyy-mm-dd``,
    a month gives ``yyyy-mm`` and a bare year gives ``yyyy``. Strings that
    cannot be parsed are passed through unchanged.
    """

    type = 'date'
    default_config = 'en'
    default_itemwise = True

    def _validate(self, config: str) -> str:
        if config not in DATE_LOCALES:
            raise TransformationConfigTypeError(self.type, config, 'unsupported locale')
        return config

    def _transform(self, input: StepOutput) -> StepOutput:
        if not self.itemwise:
            input = [','.join(input)]
        return [self._parse(item) for item in input]

    def _parse(self, text: str) -> str:
        if not text.strip():
            return text
        date_data = _get_date_parser(DATE_LOCALES[self._config]).get_date_data(text)
        if date_data.date_obj is None:
            return text
        return date_data.date_obj.strftime(_PERIOD_FORMATS.get(date_data.period, '%Y-%m-%d'))


@dataclass(frozen=True)
class _Range:
    start: int
    end: int | None  # None means up to the last index

    def apply(self, items: list[str]) -> list[str]:
        last = len(items) - 1
        end = last if self.end is None else min(self.end, last)
        if self.start > end:
            return []
        return items[self.start : end + 1]


_RANGE_RE = re.compile(r'^(?:(?P<start>\d+)(?P<colon>:(?P<end>\d*))?|:(?P<open_end>\d+))$')


def parse_ranges(config: str) -> list[_Range]:
    """Parse a range config such as ``"0,2:3,5:"`` into ranges.

    Whitespace is ignored.

    Raises:
        ValueError: If an entry is not a valid range

    """
    ranges = []
    for entry in re.sub(r'\s', '', config).split(','):
        match = _RANGE_RE.match(entry)
        if match is None:
            raise ValueError(f'Invalid range "{entry}"')
        if match['open_end'] is not None:
            ranges.append(_Range(0, int(match['open_end'])))
            continue
        start = int(match['start'])
        if match['colon'] is None:
            ranges.append(_Range(start, start))
        else:
            ranges.append(_Range(start, int(match['end']) if match['end'] else None))
    return ranges


class RangeTransformation(Transformation):
    """Select items by 0-based index ranges."""

    type = 'range'
    default_config = '0:'
    default_itemwise = False

    def _validate(self, config: str) -> str:
        try:
            self._ranges = parse_ranges(config)
        except ValueError as e:
            raise TransformationConfigTypeError(self.type, config, str(e)) from e
        return config

    def _transform(self, input: StepOutput) -> StepOutput:
        groups = [[item] for item in input] if self.itemwise else [input]
        return [item for group in groups for range_ in self._ranges for item in range_.apply(group)]


_REGEX_CONFIG_RE = re.compile(r'^/(?P<pattern>.*)/(?P<flags>[a-z]*)$', re.DOTALL)

_REGEX_FLAGS = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
}


class MatchTransformation(Transformation):
    """Extract substrings matching a literal or a ``/regex/flags`` config.

    Literal configs return every occurrence. Regular expressions return only
    the first match per item unless the ``g`` flag is given; if they have
    capture groups, the non-empty groups are returned instead of the match.
    """

    type = 'match'
    default_config = '/.*/'
    default_itemwise = True

    def _validate(self, config: str) -> str:
        regex_config = _REGEX_CONFIG_RE.match(config)
        if regex_config is None:
            self._regex = re.compile(re.escape(config))
            self._global = True
            return config

        flags = 0
        self._global = False
        for flag in regex_config['flags']:
            if flag == 'g':
                self._global = True
            elif flag in _REGEX_FLAGS:
                flags |= _REGEX_FLAGS[flag]
            else:
                raise TransformationConfigTypeError(self.type, config, f'unsupported flag "{flag}"')
        try:
            self._regex = re.compile(regex_config['pattern'], flags)
        except re.error as e:
            raise TransformationConfigTypeError(self.type, config, str(e)) from e
        return config

    def _transform(self, input: StepOutput) -> StepOutput:
        if not self.itemwise:
            input = [','.join(input)]
        output: StepOutput = []
        for item in input:
            for match in self._regex.finditer(item):
                if self._regex.groups:
                    output.extend(group for group in match.groups() if group)
                else:
                    output.append(match.group(0))
                if not self._global:
                    break
        return output


TRANSFORMATION_TYPES: dict[str, type[Transformation]] = {
    transformation_class.type: transformation_class
    for transformation_class in (
        JoinTransformation,
        SplitTransformation,
        DateTransformation,
        RangeTransformation,
        MatchTransformation,
    )
}


def create_transformation(definition: TransformationDefinition | dict[str, Any]) -> Transformation:
    """Create a transformation from its definition.

    Args:
        definition: Transformation definition (model or plain dict)

    Returns:
        The transformation instance

    Raises:
        UnknownStepTypeError: If the transformation type is not supported
        TransformationConfigTypeError: If the config is invalid for the type

    """
    if not isinstance(definition, TransformationDefinition):
        definition = TransformationDefinition.model_validate(definition)
    transformation_class = TRANSFORMATION_TYPES.get(definition.type)
    if transformation_class is None:
        raise UnknownStepTypeError('transformation', definition.type)
    return transformation_class(definition.itemwise, definition.config)
