"""Glob patterns matched against URL paths.

Globs follow the usual path semantics: ``*`` and ``?`` never cross a ``/``,
a ``**`` path segment spans any number of segments (including none) and
``{a,b}`` expands to alternatives. Wildcards do not match segments starting
with a dot.
"""

import re
from typing import Any

from wcmatch import glob

from web2cit.exceptions import PatternError
from web2cit.models.definitions import PatternDefinition
from web2cit.utils.urls import normalize_path, strip_query

CATCHALL_PATTERN = '**'

GLOB_FLAGS = glob.GLOBSTAR | glob.BRACE


def compile_glob(pattern: str) -> list[re.Pattern[str]]:
    """Compile a glob pattern into regular expressions, one per brace alternative.

    Raises:
        PatternError: If the pattern is empty or not a valid glob

    """
    if not isinstance(pattern, str) or not pattern:
        raise PatternError(str(pattern), 'empty pattern')
    try:
        include, _ = glob.translate(pattern, flags=GLOB_FLAGS)
        return [re.compile(expression) for expression in include]
    except (ValueError, re.error) as e:
        raise PatternError(pattern, str(e)) from e


class PathPattern:
    """A labelled glob pattern, compiled once at construction.

    Attributes:
        pattern: The glob pattern
        label: Optional human-readable label

    """

    def __init__(self, pattern: str, label: str | None = None):
        """Compile the pattern.

        Raises:
            PatternError: If the pattern is empty or not a valid glob

        """
        self._regexes = compile_glob(pattern)
        self.pattern = pattern
        self.label = label

    @classmethod
    def from_definition(cls, definition: PatternDefinition | dict[str, Any]) -> 'PathPattern':
        if not isinstance(definition, PatternDefinition):
            definition = PatternDefinition.model_validate(definition)
        return cls(definition.pattern, definition.label)

    def to_definition(self) -> PatternDefinition:
        return PatternDefinition(pattern=self.pattern, label=self.label)

    def match(self, path: str) -> bool:
        """Check whether a path matches the pattern.

        The query string is ignored and dot segments are resolved before
        matching.
        """
        path = normalize_path(strip_query(path))
        return any(regex.fullmatch(path) for regex in self._regexes)

    def __repr__(self) -> str:
        return f'PathPattern({self.pattern!r}, label={self.label!r})'
