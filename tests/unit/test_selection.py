import pytest

from web2cit.core.steps import (
    CitoidSelection,
    CssSelection,
    FixedSelection,
    XPathSelection,
    create_selection,
)
from web2cit.exceptions import SelectionConfigTypeError, UndefinedSelectionConfigError, UnknownStepTypeError
from web2cit.models.definitions import SelectionDefinition


@pytest.mark.asyncio
async def test_citoid_selection_scalar_and_list(webpage):
    assert await CitoidSelection('title').select(webpage) == ['Sample article']
    assert await CitoidSelection('authorFirst').select(webpage) == ['John', 'Jane']


@pytest.mark.asyncio
async def test_citoid_selection_missing_field_is_empty(webpage):
    assert await CitoidSelection('DOI').select(webpage) == []


def test_citoid_selection_rejects_unknown_field():
    with pytest.raises(SelectionConfigTypeError):
        CitoidSelection('notACitoidField')


@pytest.mark.asyncio
async def test_xpath_selection_element_text_is_collapsed(webpage):
    assert await XPathSelection('//h1').select(webpage) == ['Sample article']


@pytest.mark.asyncio
async def test_xpath_selection_skips_blank_text_nodes(webpage):
    output = await XPathSelection('//span[@class="author"]/text()').select(webpage)
    assert output == ['John', 'Jane']


@pytest.mark.asyncio
async def test_xpath_selection_attributes(webpage):
    assert await XPathSelection('//time/@datetime').select(webpage) == ['2022-01-27']
    assert await XPathSelection('//meta[@name="author"]/@content').select(webpage) == ['John Doe']


@pytest.mark.asyncio
async def test_xpath_selection_comments(webpage):
    assert await XPathSelection('//comment()').select(webpage) == ['generated']


@pytest.mark.asyncio
async def test_xpath_selection_scalar_results(webpage):
    assert await XPathSelection('count(//article/p)').select(webpage) == ['2']
    assert await XPathSelection('boolean(//h1)').select(webpage) == ['true']
    assert await XPathSelection('boolean(//h2)').select(webpage) == ['false']


@pytest.mark.asyncio
async def test_xpath_selection_no_match(webpage):
    assert await XPathSelection('//table').select(webpage) == []


@pytest.mark.parametrize('config', ['//[', '//ns:div', 'foo()', '$var', '//a | 3'])
def test_xpath_selection_rejects_invalid_expression(config):
    with pytest.raises(SelectionConfigTypeError):
        XPathSelection(config)


@pytest.mark.asyncio
async def test_css_selection_drops_empty_texts(webpage):
    assert await CssSelection('.byline .author').select(webpage) == ['John', 'Jane']
    assert await CssSelection('article p').select(webpage) == ['First paragraph.', 'Second paragraph.']


def test_css_selection_rejects_invalid_selector():
    with pytest.raises(SelectionConfigTypeError):
        CssSelection('p[')


@pytest.mark.asyncio
async def test_fixed_selection_does_not_fetch(webpage, fake_fetcher, fake_citoid):
    assert await FixedSelection('webpage').select(webpage) == ['webpage']
    assert fake_fetcher.calls == []
    assert fake_citoid.calls == []


@pytest.mark.asyncio
async def test_selection_without_config_cannot_select(webpage):
    selection = XPathSelection()
    assert selection.config is None
    with pytest.raises(UndefinedSelectionConfigError):
        await selection.select(webpage)


def test_with_config_returns_new_selection():
    selection = XPathSelection('//h1')
    updated = selection.with_config('//h2')
    assert updated is not selection
    assert selection.config == '//h1'
    assert updated.config == '//h2'


def test_with_config_validates():
    with pytest.raises(SelectionConfigTypeError):
        CitoidSelection('title').with_config('nope')


def test_create_selection_from_dict():
    selection = create_selection({'type': 'css', 'config': 'h1'})
    assert isinstance(selection, CssSelection)
    assert selection.to_definition() == SelectionDefinition(type='css', config='h1')


def test_create_selection_unknown_type():
    with pytest.raises(UnknownStepTypeError, match='Unknown selection type: jsonpath'):
        create_selection({'type': 'jsonpath', 'config': '$.title'})


@pytest.mark.asyncio
async def test_selections_share_one_fetch(webpage, fake_fetcher):
    await XPathSelection('//h1').select(webpage)
    await CssSelection('h1').select(webpage)
    assert fake_fetcher.calls == ['https://example.com/article/1']
