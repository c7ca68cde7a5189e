"""Simple asynchronous HTTP fetcher."""

import logging
import time

import httpx

from web2cit.config import Settings, get_settings
from web2cit.core.fetcher.base import HTMLFetcher
from web2cit.exceptions import HTTPResponseError
from web2cit.models.results import FetchResult
from web2cit.utils.retry import get_retryer, log_retry


class SimpleFetcher(HTMLFetcher):
    """HTTP fetcher built on httpx, retrying transport errors.

    Attributes:
        timeout: Request timeout in seconds
        user_agent: User-Agent header sent with every request
        max_retries: Attempts made before a transport error propagates
        logger: Logger instance

    """

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str | None = None,
        max_retries: int | None = None,
        settings: Settings | None = None,
    ):
        """Initialize the simple fetcher.

        Args:
            timeout: Request timeout; defaults to the configured timeout
            user_agent: User-Agent header; defaults to the configured one
            max_retries: Attempts on transport errors; defaults to the configured number
            settings: Settings to read defaults from

        """
        settings = settings or get_settings()
        self.timeout = settings.timeout if timeout is None else timeout
        self.user_agent = user_agent or settings.user_agent
        self.max_retries = settings.max_retries if max_retries is None else max_retries
        self.logger = logging.getLogger(__name__)

    def _get_headers(self) -> dict[str, str]:
        """Get headers for the request."""
        return {
            'User-Agent': self.user_agent,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.9',
        }

    async def fetch(self, url: str) -> FetchResult:
        """Fetch a webpage.

        Args:
            url: The URL that is being fetched

        Returns:
            The fetched body, headers and status

        Raises:
            HTTPResponseError: If the final response status is not 2xx
            httpx.HTTPError: If the request keeps failing after retries

        """
        start_time = time.time()
        retryer = get_retryer(max_attempts=self.max_retries, log_callback=log_retry)

        async for attempt in retryer:
            with attempt:
                async with httpx.AsyncClient(
                    headers=self._get_headers(), timeout=self.timeout, follow_redirects=True
                ) as client:
                    response = await client.get(url)

        if not response.is_success:
            self.logger.warning(f'Fetching {url} failed with status {response.status_code}')
            raise HTTPResponseError(url, response.status_code)

        return FetchResult(
            url=str(response.url),
            body=response.text,
            headers={name.lower(): value for name, value in response.headers.items()},
            status_code=response.status_code,
            fetch_time=time.time() - start_time,
        )
