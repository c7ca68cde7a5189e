import asyncio

import pytest

from web2cit.config import Settings
from web2cit.core.fetcher import HTMLFetcher
from web2cit.core.webpage import Webpage
from web2cit.exceptions import HTTPResponseError
from web2cit.models.results import FetchResult


class FakeFetcher(HTMLFetcher):
    """In-memory fetcher serving fixed pages and recording every call."""

    def __init__(self, default=None, pages=None):
        self.default = default
        self.pages = dict(pages or {})
        self.failures = []
        self.calls = []

    async def fetch(self, url):
        self.calls.append(url)
        await asyncio.sleep(0)
        if self.failures:
            raise self.failures.pop(0)
        body = self.pages.get(url, self.default)
        if body is None:
            raise HTTPResponseError(url, 404)
        return FetchResult(url=url, body=body, headers={'content-type': 'text/html; charset=utf-8'})


class FakeCitoid:
    """In-memory Citoid client returning fixed simplified citations."""

    def __init__(self, default=None, citations=None):
        self.default = default
        self.citations = dict(citations or {})
        self.failures = []
        self.calls = []

    async def fetch_simple_citation(self, url):
        self.calls.append(url)
        await asyncio.sleep(0)
        if self.failures:
            raise self.failures.pop(0)
        citation = self.citations.get(url, self.default)
        if citation is None:
            raise HTTPResponseError(url, 404)
        return dict(citation)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def article_html():
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <title>Sample article | Example News</title>
        <meta name="author" content="John Doe">
        <meta property="article:published_time" content="2022-01-27T10:00:00Z">
    </head>
    <body>
        <h1 class="headline">
            Sample
            article
        </h1>
        <div class="byline">
            <span class="author">John</span>
            <span class="author">Jane</span>
            <span class="author">   </span>
        </div>
        <time datetime="2022-01-27">January 27, 2022</time>
        <!-- generated -->
        <article>
            <p>First paragraph.</p>
            <p>Second paragraph.</p>
        </article>
    </body>
    </html>
    """


@pytest.fixture
def article_citation():
    return {
        'itemType': 'newspaperArticle',
        'title': 'Sample article',
        'authorFirst': ['John', 'Jane'],
        'authorLast': ['Doe', 'Roe'],
        'date': 'January 27, 2022',
        'publicationTitle': 'Example News',
        'language': 'en',
        'url': 'https://example.com/article/1',
    }


@pytest.fixture
def fake_fetcher(article_html):
    return FakeFetcher(default=article_html)


@pytest.fixture
def fake_citoid(article_citation):
    return FakeCitoid(default=article_citation)


@pytest.fixture
def make_webpage(fake_fetcher, fake_citoid):
    def _make_webpage(url='https://example.com/article/1'):
        return Webpage(url, fetcher=fake_fetcher, citoid=fake_citoid)

    return _make_webpage


@pytest.fixture
def webpage(make_webpage):
    return make_webpage()


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line('markers', 'integration: marks tests as integration tests')
    config.addinivalue_line('markers', 'unit: marks tests as unit tests')


def pytest_collection_modifyitems(config, items):
    """Apply directory-based marks to collected test items."""

    for item in items:
        if hasattr(item, 'fspath'):
            file_path = str(item.fspath)

            # Add marks based on directory
            if '/tests/integration/' in file_path:
                item.add_marker(pytest.mark.integration)
            elif '/tests/unit/' in file_path:
                item.add_marker(pytest.mark.unit)
