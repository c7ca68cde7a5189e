import asyncio

import pytest

from web2cit.core.caching import CitoidCache, HttpCache, parse_html
from web2cit.exceptions import HTTPResponseError

URL = 'https://example.com/article/1'


@pytest.fixture
def http_cache(fake_fetcher):
    return HttpCache(URL, fake_fetcher)


def test_parse_html_empty_body():
    doc = parse_html('')
    assert doc.tag == 'html'
    assert len(doc.xpath('//body/*')) == 0


@pytest.mark.parametrize('body', ['<!-- nothing here -->', '<?xml-stylesheet href="a.css"?>'])
def test_parse_html_content_free_body(body):
    doc = parse_html(body)
    assert doc.tag == 'html'
    assert len(doc.xpath('//body/*')) == 0


@pytest.mark.asyncio
async def test_comment_only_page_resolves(fake_fetcher):
    fake_fetcher.pages[URL] = '<!-- nothing here -->'
    cache = HttpCache(URL, fake_fetcher)

    data = await cache.get_data()

    assert cache.state == 'resolved'
    assert data.doc.xpath('//h1') == []


def test_parse_html_with_encoding_declaration():
    doc = parse_html('<?xml version="1.0" encoding="utf-8"?><html><body><h1>Hi</h1></body></html>')
    assert doc.xpath('string(//h1)') == 'Hi'


def test_new_cache_is_empty(http_cache):
    assert http_cache.state == 'empty'
    assert not http_cache.refreshing
    assert http_cache.timestamp is None


@pytest.mark.asyncio
async def test_concurrent_gets_share_one_fetch(http_cache, fake_fetcher):
    first, second = await asyncio.gather(http_cache.get_data(), http_cache.get_data())
    assert first is second
    assert fake_fetcher.calls == [URL]
    assert http_cache.state == 'resolved'
    assert http_cache.timestamp is not None


@pytest.mark.asyncio
async def test_resolved_data_is_reused(http_cache, fake_fetcher):
    data = await http_cache.get_data()
    assert await http_cache.get_data() is data
    assert len(fake_fetcher.calls) == 1
    assert data.headers['content-type'].startswith('text/html')
    assert data.doc.xpath('//h1')
    assert data.soup.find('h1') is not None


@pytest.mark.asyncio
async def test_refresh_issues_new_fetch(http_cache, fake_fetcher):
    first = await http_cache.get_data()
    second = await http_cache.get_data(refresh=True)
    assert second is not first
    assert len(fake_fetcher.calls) == 2


@pytest.mark.asyncio
async def test_refresh_while_pending_does_not_fetch_again(http_cache, fake_fetcher):
    task = asyncio.ensure_future(http_cache.get_data())
    await asyncio.sleep(0)
    assert http_cache.state == 'pending'
    assert http_cache.refreshing

    refreshed = await http_cache.get_data(refresh=True)
    assert refreshed is await task
    assert len(fake_fetcher.calls) == 1
    assert not http_cache.refreshing


@pytest.mark.asyncio
async def test_failures_are_sticky_until_refresh(http_cache, fake_fetcher):
    fake_fetcher.failures.append(HTTPResponseError(URL, 503))

    with pytest.raises(HTTPResponseError):
        await http_cache.get_data()
    with pytest.raises(HTTPResponseError):
        await http_cache.get_data()
    assert len(fake_fetcher.calls) == 1
    assert http_cache.state == 'rejected'
    assert http_cache.timestamp is None

    data = await http_cache.get_data(refresh=True)
    assert data.body
    assert http_cache.state == 'resolved'
    assert len(fake_fetcher.calls) == 2


@pytest.mark.asyncio
async def test_citoid_cache(fake_citoid):
    cache = CitoidCache(URL, fake_citoid)
    data = await cache.get_data()
    assert data.citation['title'] == 'Sample article'
    assert fake_citoid.calls == [URL]


@pytest.mark.asyncio
async def test_custom_parser(mocker, fake_fetcher):
    parser = mocker.Mock(side_effect=parse_html)
    cache = HttpCache(URL, fake_fetcher, parser=parser)
    await cache.get_data()
    parser.assert_called_once()
