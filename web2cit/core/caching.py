"""Per-webpage response caches.

Each cache memoizes a single fetch: concurrent ``get_data`` calls share the
same in-flight future, and a resolved or rejected result is reused until an
explicit refresh replaces it.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Generic, Literal, TypeVar

import lxml.html
from bs4 import BeautifulSoup
from lxml import etree
from lxml.html import HtmlElement

from web2cit.core.fetcher import HTMLFetcher
from web2cit.utils.timestamps import utc_timestamp

if TYPE_CHECKING:
    from web2cit.clients.citoid import CitoidClient, SimpleCitation

logger = logging.getLogger(__name__)

CacheState = Literal['empty', 'pending', 'resolved', 'rejected']

DataT = TypeVar('DataT')

DocumentParser = Callable[[str], HtmlElement]

EMPTY_DOCUMENT = '<html></html>'


def parse_html(body: str) -> HtmlElement:
    """Parse an HTML body into an lxml document.

    Args:
        body: HTML text

    Returns:
        The root ``<html>`` element; empty or content-free bodies yield an empty document

    """
    if not body.strip():
        return lxml.html.document_fromstring(EMPTY_DOCUMENT)
    try:
        try:
            return lxml.html.document_fromstring(body)
        except ValueError:
            # lxml refuses str input carrying an XML encoding declaration
            return lxml.html.document_fromstring(body.encode('utf-8'))
    except etree.ParserError:
        # bodies made only of comments or processing instructions
        return lxml.html.document_fromstring(EMPTY_DOCUMENT)


@dataclass
class HttpCacheData:
    """Fetched webpage content."""

    body: str
    doc: HtmlElement
    headers: dict[str, str] = field(default_factory=dict)

    @cached_property
    def soup(self) -> BeautifulSoup:
        """BeautifulSoup view of the body, built on first use."""
        return BeautifulSoup(self.body, 'lxml')


@dataclass
class CitoidCacheData:
    """Simplified Citoid citation for a webpage."""

    citation: 'SimpleCitation'


class ResponseCache(ABC, Generic[DataT]):
    """Memoize one fetch per webpage and data kind.

    Attributes:
        url: URL the cached data belongs to
        timestamp: ISO timestamp of the last successful fetch, if any

    """

    def __init__(self, url: str):
        """Initialize an empty cache.

        Args:
            url: URL the cached data belongs to

        """
        self.url = url
        self.timestamp: str | None = None
        self._data_future: asyncio.Future[DataT] | None = None
        self._refreshing = False

    @property
    def refreshing(self) -> bool:
        """Whether a fetch is currently in flight."""
        return self._refreshing

    @property
    def state(self) -> CacheState:
        """State of the memoized fetch."""
        future = self._data_future
        if future is None:
            return 'empty'
        if not future.done():
            return 'pending'
        if future.cancelled() or future.exception() is not None:
            return 'rejected'
        return 'resolved'

    async def get_data(self, refresh: bool = False) -> DataT:
        """Return the cached data, fetching it if needed.

        A new fetch is issued if nothing was fetched yet, or if ``refresh`` is
        set and no fetch is in flight. Otherwise the memoized (possibly pending
        or rejected) result is awaited.

        Args:
            refresh: Replace the memoized result with a new fetch

        Returns:
            The fetched data

        """
        if self._data_future is None or (refresh and not self._refreshing):
            self._refreshing = True
            self._data_future = asyncio.ensure_future(self._run_fetch())
        # shielded so a cancelled caller never aborts the shared fetch
        return await asyncio.shield(self._data_future)

    async def _run_fetch(self) -> DataT:
        try:
            data = await self.fetch_data()
        except Exception as e:
            logger.warning(f'Fetching {self.kind} data for {self.url} failed: {e}')
            raise
        finally:
            self._refreshing = False
        self.timestamp = utc_timestamp()
        return data

    @property
    @abstractmethod
    def kind(self) -> str:
        """Short name of the cached data kind."""

    @abstractmethod
    async def fetch_data(self) -> DataT:
        """Fetch fresh data for the cached URL."""


class HttpCache(ResponseCache[HttpCacheData]):
    """Cache of a webpage's body, parsed document and headers."""

    def __init__(self, url: str, fetcher: HTMLFetcher, parser: DocumentParser = parse_html):
        """Initialize the HTTP cache.

        Args:
            url: Webpage URL
            fetcher: Fetcher used to download the page
            parser: Function turning the body into a document

        """
        super().__init__(url)
        self.fetcher = fetcher
        self.parser = parser

    @property
    def kind(self) -> str:
        return 'http'

    async def fetch_data(self) -> HttpCacheData:
        result = await self.fetcher.fetch(self.url)
        return HttpCacheData(body=result.body, doc=self.parser(result.body), headers=dict(result.headers))


class CitoidCache(ResponseCache[CitoidCacheData]):
    """Cache of a webpage's simplified Citoid citation."""

    def __init__(self, url: str, client: 'CitoidClient'):
        """Initialize the Citoid cache.

        Args:
            url: Webpage URL
            client: Citoid client used to fetch the citation

        """
        super().__init__(url)
        self.client = client

    @property
    def kind(self) -> str:
        return 'citoid'

    async def fetch_data(self) -> CitoidCacheData:
        citation = await self.client.fetch_simple_citation(self.url)
        return CitoidCacheData(citation=citation)
