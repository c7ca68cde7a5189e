"""Abstract base class for HTML fetchers."""

from abc import ABC, abstractmethod

from web2cit.models.results import FetchResult


class HTMLFetcher(ABC):
    """Abstract base class for HTML fetchers.

    Implement this interface to plug a different HTTP stack (or a test double)
    into the webpage caches.
    """

    @abstractmethod
    async def fetch(self, url: str) -> FetchResult:
        """Fetch HTML from a URL.

        Args:
            url: URL to fetch

        Returns:
            FetchResult with the body, headers and status

        Raises:
            HTTPResponseError: If the server answers with a non-success status

        """
        pass
