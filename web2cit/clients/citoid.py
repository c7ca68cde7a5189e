"""Client for the Citoid citation service.

Citoid returns citations in the mediawiki-basefields format, where creators are
lists of ``[first, last]`` pairs. Selections work on a "simplified" citation
instead, in which every creator type is split into a ``{type}First`` and a
``{type}Last`` list.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
import logfire

from web2cit.config import Settings, get_settings
from web2cit.exceptions import HTTPResponseError
from web2cit.models.citoid import BASE_CREATOR_TYPES, SIMPLE_CITOID_FIELDS
from web2cit.utils.retry import get_retryer, log_retry

logger = logging.getLogger(__name__)

SimpleCitation = dict[str, str | list[str]]


def simplify_citation(citation: dict[str, Any]) -> SimpleCitation:
    """Convert a mediawiki-basefields citation into a simplified citation.

    Args:
        citation: Citation as returned by the mediawiki-basefields endpoint

    Returns:
        Citation with split creator lists, plain tag strings and every other
        simple field copied as-is

    """
    simple: SimpleCitation = {}

    for creator_type in BASE_CREATOR_TYPES:
        creators = citation.get(creator_type)
        if creators:
            simple[f'{creator_type}First'] = [creator[0] for creator in creators]
            simple[f'{creator_type}Last'] = [creator[1] for creator in creators]

    tags = citation.get('tags')
    if tags is not None:
        simple['tags'] = [tag['tag'] if isinstance(tag, dict) else str(tag) for tag in tags]

    for name, value in citation.items():
        if name in SIMPLE_CITOID_FIELDS and name not in simple:
            simple[name] = value

    return simple


class CitoidClient:
    """Fetch simplified citations from a Citoid endpoint.

    Attributes:
        endpoint: mediawiki-basefields endpoint URL
        timeout: Request timeout in seconds
        user_agent: User-Agent header sent to the service
        max_retries: Attempts made on transport errors

    """

    def __init__(self, endpoint: str | None = None, settings: Settings | None = None):
        """Initialize the client.

        Args:
            endpoint: Endpoint URL; defaults to the configured endpoint
            settings: Settings to read defaults from

        """
        settings = settings or get_settings()
        self.endpoint = (endpoint or settings.citoid_api_endpoint).rstrip('/')
        self.timeout = settings.timeout
        self.user_agent = settings.user_agent
        self.max_retries = settings.max_retries

    def request_url(self, url: str) -> str:
        """Build the Citoid request URL for a target URL."""
        return f'{self.endpoint}/{quote(url, safe="")}'

    async def fetch_citation(self, url: str) -> dict[str, Any]:
        """Fetch the first mediawiki-basefields citation Citoid returns for a URL.

        Args:
            url: Target URL

        Returns:
            The raw citation

        Raises:
            HTTPResponseError: If Citoid answers with a non-success status
            ValueError: If the response holds no citation

        """
        request_url = self.request_url(url)
        retryer = get_retryer(max_attempts=self.max_retries, log_callback=log_retry)

        with logfire.span('citoid request {url}', url=url):
            async for attempt in retryer:
                with attempt:
                    async with httpx.AsyncClient(
                        headers={'User-Agent': self.user_agent, 'Accept': 'application/json'},
                        timeout=self.timeout,
                    ) as client:
                        response = await client.get(request_url)

        if not response.is_success:
            raise HTTPResponseError(request_url, response.status_code)

        citations = response.json()
        if not isinstance(citations, list) or not citations:
            raise ValueError(f'Unexpected Citoid response for {url}')
        return citations[0]

    async def fetch_simple_citation(self, url: str) -> SimpleCitation:
        """Fetch the simplified citation for a URL.

        Args:
            url: Target URL

        Returns:
            The simplified citation

        """
        citation = await self.fetch_citation(url)
        logger.debug(f'Citoid returned {citation.get("itemType")} citation for {url}')
        return simplify_citation(citation)
