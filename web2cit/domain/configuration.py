"""Base class for revisioned, per-domain configuration lists."""

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

import logfire
from pydantic import BaseModel, ValidationError

from web2cit.clients.revisions import Revision, RevisionsApi, strip_syntax_highlight
from web2cit.config import Settings, get_settings
from web2cit.exceptions import DomainNameError, RevisionsApiError, Web2CitError
from web2cit.utils.urls import is_domain_name

logger = logging.getLogger(__name__)

ItemT = TypeVar('ItemT')


@dataclass
class ConfigurationRevision:
    """A stored configuration revision, parsed into definition dicts."""

    revid: int
    timestamp: str
    configuration: list[Any]


class DomainConfiguration(ABC, Generic[ItemT]):
    """An ordered list of configuration items for one domain.

    Items are identified by a string id (a path or a pattern), unique within
    the list. Configurations are stored as JSON arrays in wiki pages whose
    revisions can be fetched and loaded.

    Attributes:
        domain: Domain the configuration belongs to
        storage_title: Title of the wiki page storing the configuration
        current_revid: Revision the current values were loaded from, if any
        values: Configuration items, in order

    """

    filename: ClassVar[str]
    kind: ClassVar[str]

    def __init__(
        self,
        domain: str,
        definitions: Iterable[Any] | None = None,
        revisions_api: RevisionsApi | None = None,
        settings: Settings | None = None,
    ):
        if not is_domain_name(domain):
            raise DomainNameError(domain)
        self.domain = domain
        self.settings = settings or get_settings()
        labels = domain.rstrip('.').split('.')
        self.storage_title = f'{self.settings.storage_root}{"/".join(reversed(labels))}/{self.filename}'
        self._revisions_api = revisions_api
        self._revision_ids: list[Revision] | None = None
        self._revision_cache: dict[int, ConfigurationRevision] = {}
        self.current_revid: int | None = None
        self.values: list[ItemT] = []
        if definitions is not None:
            self.load_configuration(definitions)

    @property
    def revisions_api(self) -> RevisionsApi:
        if self._revisions_api is None:
            self._revisions_api = RevisionsApi(settings=self.settings)
        return self._revisions_api

    # ========================================================================
    # Item handling
    # ========================================================================

    @abstractmethod
    def build(self, definition: Any) -> ItemT:
        """Build an item from its definition."""

    @abstractmethod
    def identify(self, item: ItemT) -> str:
        """Return the id of an item."""

    @abstractmethod
    def duplicate_error(self, item_id: str) -> Web2CitError:
        """Return the error raised when adding an item whose id is taken."""

    @abstractmethod
    def to_definition(self, item: ItemT) -> BaseModel:
        """Return the definition of an item."""

    def normalize_id(self, item_id: str) -> str:
        return item_id

    def reserved_ids(self) -> set[str]:
        """Ids that can never be added, in addition to existing ones."""
        return set()

    @property
    def ids(self) -> list[str]:
        return [self.identify(value) for value in self.values]

    def get(self, ids: Iterable[str] | None = None) -> list[ItemT]:
        """Return the items with the given ids (all items if None), in list order."""
        if ids is None:
            return list(self.values)
        wanted = {self.normalize_id(item_id) for item_id in ids}
        return [value for value in self.values if self.identify(value) in wanted]

    def add(self, definition: Any, index: int | None = None) -> ItemT:
        """Build and insert an item.

        Args:
            definition: Item definition
            index: Insertion index; appended if None

        Returns:
            The new item

        Raises:
            Web2CitError: If an item with the same id exists, or the definition is invalid
            ValidationError: If the definition is malformed

        """
        item = self.build(definition)
        item_id = self.identify(item)
        if item_id in self.ids or item_id in self.reserved_ids():
            raise self.duplicate_error(item_id)
        if index is None:
            self.values.append(item)
        else:
            self.values.insert(index, item)
        return item

    def _index(self, item_id: str) -> int:
        item_id = self.normalize_id(item_id)
        for index, value in enumerate(self.values):
            if self.identify(value) == item_id:
                return index
        raise KeyError(f'No {self.kind} "{item_id}" in {self.domain} configuration')

    def move(self, item_id: str, index: int) -> None:
        """Move an item to a new index.

        Raises:
            KeyError: If no item has that id

        """
        item = self.values.pop(self._index(item_id))
        self.values.insert(index, item)

    def remove(self, item_id: str) -> None:
        """Remove an item.

        Raises:
            KeyError: If no item has that id

        """
        del self.values[self._index(item_id)]

    def parse(self, definitions: Iterable[Any]) -> list[ItemT]:
        """Build items from definitions, skipping invalid and duplicate ones."""
        items: list[ItemT] = []
        seen = self.reserved_ids()
        for definition in definitions:
            try:
                item = self.build(definition)
            except (ValidationError, Web2CitError, ValueError) as e:
                logger.warning(f'Skipping invalid {self.kind} definition for {self.domain}: {e}')
                continue
            item_id = self.identify(item)
            if item_id in seen:
                logger.info(f'Skipping duplicate {self.kind} "{item_id}" for {self.domain}')
                continue
            seen.add(item_id)
            items.append(item)
        return items

    def load_configuration(self, definitions: Iterable[Any]) -> None:
        """Replace the current items with items parsed from definitions."""
        if isinstance(definitions, str | bytes) or not isinstance(definitions, Iterable):
            raise TypeError(f'{self.kind} configuration must be a list of definitions')
        self.values = self.parse(definitions)

    def to_json(self) -> list[dict[str, Any]]:
        return [self.to_definition(value).model_dump(exclude_none=True) for value in self.values]

    # ========================================================================
    # Revisions
    # ========================================================================

    async def get_revision_ids(self, refresh: bool = False) -> list[Revision]:
        """Return the ids and timestamps of the stored revisions, newest first."""
        if self._revision_ids is None or refresh:
            self._revision_ids = await self.revisions_api.fetch_revisions(self.storage_title)
        return self._revision_ids

    async def get_revision(self, revid: int, refresh: bool = False) -> ConfigurationRevision:
        """Return a parsed configuration revision, fetching it on first use."""
        revision = self._revision_cache.get(revid)
        if revision is None or refresh:
            revision = await self.fetch_revision(revid)
            self._revision_cache[revid] = revision
        return revision

    async def fetch_revision(self, revid: int) -> ConfigurationRevision:
        """Fetch and parse a configuration revision.

        Raises:
            RevisionsApiError: If the revision is missing or its content is not a JSON array

        """
        revisions = await self.revisions_api.fetch_revisions(
            self.storage_title, with_content=True, start_id=revid, max_revisions=1
        )
        if not revisions or revisions[0].revid != revid:
            raise RevisionsApiError(f'No revision found for revid {revid}')
        revision = revisions[0]
        if revision.content is None:
            raise RevisionsApiError(f'Unexpected empty content in revision {revid}')

        try:
            configuration = json.loads(strip_syntax_highlight(revision.content))
        except json.JSONDecodeError as e:
            raise RevisionsApiError(f'Failed to parse the content of revision {revid} as JSON') from e
        if not isinstance(configuration, list):
            raise RevisionsApiError(f'Content of revision {revid} is not a JSON array')

        return ConfigurationRevision(revid=revision.revid, timestamp=revision.timestamp, configuration=configuration)

    async def fetch_and_load(self, refresh: bool = False, revid: int | None = None) -> None:
        """Load a stored revision (the latest one by default).

        Args:
            refresh: Bypass memoized revision lists and contents
            revid: Revision to load instead of the latest

        """
        with logfire.span('load {kind} configuration for {domain}', kind=self.kind, domain=self.domain):
            if revid is None:
                revision_ids = await self.get_revision_ids(refresh)
                if not revision_ids:
                    logger.info(f'No {self.kind} configuration stored for {self.domain}')
                    return
                revid = revision_ids[0].revid
            revision = await self.get_revision(revid, refresh)
            self.load_configuration(revision.configuration)
            self.current_revid = revid
