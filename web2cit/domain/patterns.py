"""Ordered path patterns of a domain, used to bucket paths."""

from collections.abc import Iterable
from typing import Any, overload

from web2cit.core.pattern import CATCHALL_PATTERN, PathPattern
from web2cit.domain.configuration import DomainConfiguration
from web2cit.exceptions import DuplicatePatternError, Web2CitError
from web2cit.models.definitions import PatternDefinition


class PatternConfiguration(DomainConfiguration[PathPattern]):
    """Patterns of a domain, in first-match-wins order.

    If the catch-all pattern is enabled, it is always last and every path
    matches at least it.
    """

    filename = 'patterns.json'
    kind = 'pattern'

    def __init__(
        self,
        domain: str,
        definitions: Iterable[PatternDefinition | dict[str, Any]] | None = None,
        catchall: bool = True,
        **kwargs: Any,
    ):
        self.catchall = PathPattern(CATCHALL_PATTERN, 'catchall') if catchall else None
        super().__init__(domain, definitions, **kwargs)

    def build(self, definition: PatternDefinition | dict[str, Any]) -> PathPattern:
        return PathPattern.from_definition(definition)

    def identify(self, item: PathPattern) -> str:
        return item.pattern

    def duplicate_error(self, item_id: str) -> Web2CitError:
        return DuplicatePatternError(item_id)

    def to_definition(self, item: PathPattern) -> PatternDefinition:
        return item.to_definition()

    def reserved_ids(self) -> set[str]:
        return {CATCHALL_PATTERN} if self.catchall else set()

    @property
    def patterns(self) -> list[PathPattern]:
        """Every pattern, including the catch-all, in matching order."""
        if self.catchall is None:
            return list(self.values)
        return [*self.values, self.catchall]

    @overload
    def sort_paths(self, paths: Iterable[str]) -> dict[str, list[str]]: ...

    @overload
    def sort_paths(self, paths: Iterable[str], target_pattern: str) -> list[str]: ...

    def sort_paths(self, paths: Iterable[str], target_pattern: str | None = None) -> dict[str, list[str]] | list[str]:
        """Bucket paths by the first pattern they match.

        Args:
            paths: Paths to sort
            target_pattern: If given, only return the paths of this pattern's bucket

        Returns:
            Paths per matched pattern, in pattern order (patterns without
            matches and unmatched paths are left out), or the paths of
            ``target_pattern`` (empty if no such pattern exists)

        """
        matches: dict[str, list[str]] = {}
        for path in paths:
            for pattern in self.patterns:
                if pattern.match(path):
                    matches.setdefault(pattern.pattern, []).append(path)
                    break
        buckets = {pattern.pattern: matches[pattern.pattern] for pattern in self.patterns if pattern.pattern in matches}

        if target_pattern is not None:
            return buckets.get(target_pattern, [])
        return buckets
