"""Client for the MediaWiki revisions API, where domain configurations are stored."""

import logging
import re
from dataclasses import dataclass
from typing import Any

import httpx
import logfire

from web2cit.config import Settings, get_settings
from web2cit.exceptions import HTTPResponseError, RevisionsApiError
from web2cit.utils.retry import get_retryer, log_retry

logger = logging.getLogger(__name__)

_SYNTAXHIGHLIGHT_OPEN_RE = re.compile(r'^\s*<syntaxhighlight[^>]*>')
_SYNTAXHIGHLIGHT_CLOSE_RE = re.compile(r'</syntaxhighlight>[\s\u200b]*$')


@dataclass
class Revision:
    """A page revision.

    Attributes:
        revid: Revision id
        timestamp: ISO timestamp of the revision
        content: Main-slot content, if requested

    """

    revid: int
    timestamp: str
    content: str | None = None


def strip_syntax_highlight(content: str) -> str:
    """Remove the ``<syntaxhighlight>`` wrapper around stored JSON content."""
    content = _SYNTAXHIGHLIGHT_OPEN_RE.sub('', content, count=1)
    return _SYNTAXHIGHLIGHT_CLOSE_RE.sub('', content, count=1)


class RevisionsApi:
    """Fetch page revisions from a MediaWiki instance.

    Attributes:
        instance: Wiki base URL
        path: Path of the action API
        rvlimit_max: Maximum revisions requested per API call

    """

    def __init__(
        self,
        instance: str | None = None,
        path: str | None = None,
        rvlimit_max: int | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.instance = (instance or settings.revisions_api_instance).rstrip('/')
        self.path = path or settings.revisions_api_path
        self.rvlimit_max = rvlimit_max or settings.rvlimit_max
        self.timeout = settings.timeout
        self.user_agent = settings.user_agent
        self.max_retries = settings.max_retries

    @property
    def endpoint(self) -> str:
        return self.instance + self.path

    async def _query(self, client: httpx.AsyncClient, params: dict[str, Any]) -> dict[str, Any]:
        retryer = get_retryer(max_attempts=self.max_retries, log_callback=log_retry)
        async for attempt in retryer:
            with attempt:
                response = await client.get(self.endpoint, params=params)

        if not response.is_success:
            raise HTTPResponseError(str(response.url), response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise RevisionsApiError('Revisions API response is not valid JSON') from e

        if not isinstance(data, dict) or 'pages' not in data.get('query', {}):
            raise RevisionsApiError('Unexpected Revisions API JSON response format')
        return data

    async def fetch_revisions(
        self,
        title: str,
        with_content: bool = False,
        start_id: int | None = None,
        max_revisions: int | None = None,
    ) -> list[Revision]:
        """Fetch the revisions of a page, newest first.

        Args:
            title: Page title
            with_content: Whether to include each revision's content
            start_id: Revision id to start listing from
            max_revisions: Maximum number of revisions to return

        Returns:
            The revisions; empty if the page does not exist

        Raises:
            HTTPResponseError: If the API answers with a non-success status
            RevisionsApiError: If the API response cannot be understood

        """
        rvprop = ['ids', 'timestamp']
        if with_content:
            rvprop.append('content')

        rvlimit = self.rvlimit_max
        if max_revisions is not None and max_revisions < self.rvlimit_max:
            rvlimit = max_revisions

        params: dict[str, Any] = {
            'action': 'query',
            'prop': 'revisions',
            'titles': title,
            'rvprop': '|'.join(rvprop),
            'rvlimit': rvlimit,
            'rvslots': 'main',
            'formatversion': '2',
            'format': 'json',
        }
        if start_id is not None:
            params['rvstartid'] = start_id

        revisions: list[Revision] = []
        with logfire.span('fetch revisions {title}', title=title):
            async with httpx.AsyncClient(headers={'User-Agent': self.user_agent}, timeout=self.timeout) as client:
                while max_revisions is None or len(revisions) < max_revisions:
                    data = await self._query(client, params)

                    pages = data['query']['pages']
                    page = pages[0] if pages else None
                    if page is not None:
                        if page.get('missing'):
                            logger.info(f'Page {title} does not exist')
                        else:
                            revisions.extend(self._parse_revision(revision) for revision in page.get('revisions', []))

                    rvcontinue = data.get('continue', {}).get('rvcontinue')
                    if rvcontinue is None:
                        break
                    params['rvcontinue'] = rvcontinue

        return revisions[:max_revisions] if max_revisions is not None else revisions

    @staticmethod
    def _parse_revision(revision: dict[str, Any]) -> Revision:
        content = revision.get('slots', {}).get('main', {}).get('content')
        return Revision(revid=revision['revid'], timestamp=revision['timestamp'], content=content)
