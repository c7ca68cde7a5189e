"""Target webpages and the per-domain webpage factory."""

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

from web2cit.clients.citoid import CitoidClient
from web2cit.core.caching import CitoidCache, DocumentParser, HttpCache, parse_html
from web2cit.core.fetcher import HTMLFetcher, create_fetcher
from web2cit.exceptions import DomainNameError
from web2cit.utils.urls import is_domain_name, normalize_path

logger = logging.getLogger(__name__)


@dataclass
class WebpageCache:
    """Response caches shared by every selection targeting a webpage."""

    http: HttpCache
    citoid: CitoidCache


class Webpage:
    """A webpage that templates can be translated against.

    Attributes:
        url: Absolute URL, without fragment
        domain: Host name of the webpage
        path: Normalized path, including the query string
        cache: HTTP and Citoid response caches

    """

    def __init__(
        self,
        url: str,
        fetcher: HTMLFetcher | None = None,
        citoid: CitoidClient | None = None,
        parser: DocumentParser = parse_html,
    ):
        """Initialize a webpage from its URL.

        Args:
            url: Absolute http(s) URL
            fetcher: Fetcher for the HTTP cache; a SimpleFetcher by default
            citoid: Citoid client for the Citoid cache
            parser: HTML parser for the HTTP cache

        Raises:
            ValueError: If the URL has no scheme or host

        """
        parts = urlsplit(url)
        if not parts.scheme or not parts.hostname:
            raise ValueError(f'Invalid absolute URL: {url}')

        self.domain = parts.hostname
        self.path = normalize_path(urlunsplit(('', '', parts.path or '/', parts.query, '')))
        self.url = f'{parts.scheme}://{parts.netloc}{self.path}'
        self.cache = WebpageCache(
            http=HttpCache(self.url, fetcher or create_fetcher(), parser=parser),
            citoid=CitoidCache(self.url, citoid or CitoidClient()),
        )

    def __repr__(self) -> str:
        return f'Webpage({self.url!r})'


class WebpageFactory:
    """Create and memoize the webpages of one domain.

    Memoizing webpages per path means every template translating the same
    path shares the same caches.
    """

    def __init__(
        self,
        domain: str,
        fetcher: HTMLFetcher | None = None,
        citoid: CitoidClient | None = None,
        parser: DocumentParser = parse_html,
    ):
        if not is_domain_name(domain):
            raise DomainNameError(domain)
        self.domain = domain
        self.fetcher = fetcher
        self.citoid = citoid
        self.parser = parser
        self._webpages: dict[str, Webpage] = {}

    def get_webpage(self, path: str) -> Webpage:
        """Return the webpage for a path, creating it on first use.

        Args:
            path: Absolute path (must start with '/'), with optional query

        Returns:
            The memoized webpage

        Raises:
            ValueError: If the path does not start with '/'

        """
        if not path.startswith('/'):
            raise ValueError(f'Path "{path}" must start with "/"')
        normalized = normalize_path(path)
        webpage = self._webpages.get(normalized)
        if webpage is None:
            webpage = Webpage(
                f'https://{self.domain}{normalized}',
                fetcher=self.fetcher,
                citoid=self.citoid,
                parser=self.parser,
            )
            self._webpages[webpage.path] = webpage
        return webpage

    def set_webpage(self, webpage: Webpage) -> None:
        """Register an existing webpage with the factory.

        Raises:
            ValueError: If the webpage belongs to another domain or its path is already registered

        """
        if webpage.domain != self.domain:
            raise ValueError(f'Webpage domain "{webpage.domain}" does not match factory domain "{self.domain}"')
        if webpage.path in self._webpages:
            raise ValueError(f'A webpage for path "{webpage.path}" has already been set')
        self._webpages[webpage.path] = webpage

    @property
    def paths(self) -> list[str]:
        return list(self._webpages)
