import pytest

from web2cit.clients.revisions import Revision
from web2cit.domain.patterns import PatternConfiguration
from web2cit.domain.templates import TemplateConfiguration
from web2cit.domain.tests import TestConfiguration
from web2cit.exceptions import (
    DomainNameError,
    DuplicatePatternError,
    DuplicateTemplatePathError,
    DuplicateTestPathError,
    RevisionsApiError,
)


def fixed_field(fieldname, value):
    return {'fieldname': fieldname, 'procedures': [{'selections': [{'type': 'fixed', 'config': value}]}]}


@pytest.fixture
def revisions_api(mocker):
    api = mocker.Mock()
    api.fetch_revisions = mocker.AsyncMock()
    return api


# =============================================================================
# Patterns
# =============================================================================


@pytest.fixture
def patterns():
    return PatternConfiguration(
        'example.com',
        [
            {'pattern': '/article/*', 'label': 'Articles'},
            {'pattern': '/news/**'},
        ],
    )


def test_patterns_end_with_catchall(patterns):
    assert [pattern.pattern for pattern in patterns.patterns] == ['/article/*', '/news/**', '**']
    assert patterns.ids == ['/article/*', '/news/**']


def test_sort_paths_first_match_wins(patterns):
    buckets = patterns.sort_paths(['/article/1', '/news/a/b', '/about', '/article/2'])
    assert buckets == {
        '/article/*': ['/article/1', '/article/2'],
        '/news/**': ['/news/a/b'],
        '**': ['/about'],
    }


def test_sort_paths_leaves_out_patterns_without_matches(patterns):
    assert patterns.sort_paths(['/article/1']) == {'/article/*': ['/article/1']}
    assert patterns.sort_paths([]) == {}


def test_sort_paths_for_one_pattern(patterns):
    paths = ['/article/1', '/about']
    assert patterns.sort_paths(paths, '/article/*') == ['/article/1']
    assert patterns.sort_paths(paths, '/missing/*') == []


def test_sort_paths_without_catchall():
    patterns = PatternConfiguration('example.com', [{'pattern': '/article/*'}], catchall=False)
    assert patterns.sort_paths(['/article/1', '/about']) == {'/article/*': ['/article/1']}


def test_invalid_and_duplicate_patterns_are_skipped():
    patterns = PatternConfiguration(
        'example.com',
        [
            {'pattern': '/a/*'},
            {'pattern': ''},
            {'label': 'no pattern'},
            {'pattern': '/a/*'},
            {'pattern': '**'},
        ],
    )
    assert patterns.ids == ['/a/*']


def test_add_move_remove(patterns):
    patterns.add({'pattern': '/blog/*'}, index=0)
    assert patterns.ids == ['/blog/*', '/article/*', '/news/**']

    patterns.move('/blog/*', 2)
    assert patterns.ids == ['/article/*', '/news/**', '/blog/*']

    patterns.remove('/article/*')
    assert patterns.ids == ['/news/**', '/blog/*']

    with pytest.raises(KeyError):
        patterns.remove('/article/*')


def test_add_duplicate_pattern(patterns):
    with pytest.raises(DuplicatePatternError):
        patterns.add({'pattern': '/news/**'})
    with pytest.raises(DuplicatePatternError):
        patterns.add({'pattern': '**'})


def test_load_configuration_requires_a_list(patterns):
    with pytest.raises(TypeError):
        patterns.load_configuration('[{"pattern": "/a/*"}]')


def test_to_json(patterns):
    assert patterns.to_json() == [{'pattern': '/article/*', 'label': 'Articles'}, {'pattern': '/news/**'}]


def test_storage_title():
    patterns = PatternConfiguration('www.example.com')
    assert patterns.storage_title == 'Web2Cit/data/com/example/www/patterns.json'


def test_invalid_domain():
    with pytest.raises(DomainNameError):
        PatternConfiguration('example')


# =============================================================================
# Templates
# =============================================================================


def test_templates_are_identified_by_normalized_path():
    templates = TemplateConfiguration(
        'example.com',
        [
            {'path': '/a', 'fields': [fixed_field('title', 'A')]},
            {'path': '/b/../a', 'fields': [fixed_field('title', 'duplicate')]},
            {'path': 'relative'},
            {'path': '/b'},
        ],
    )
    assert templates.paths == ['/a', '/b']
    assert [template.path for template in templates.get(['/b', '/./a'])] == ['/a', '/b']

    with pytest.raises(DuplicateTemplatePathError):
        templates.add({'path': '/c/../b'})


def test_templates_force_required_fields():
    templates = TemplateConfiguration(
        'example.com',
        [{'path': '/a', 'fields': [fixed_field('date', '2022')]}],
        force_required_fields=['date'],
        fallback={'fields': [fixed_field('date', '2022')]},
    )
    assert templates.get()[0].fields[0].required
    assert templates.fallback.fields[0].required


@pytest.fixture
def templates():
    return TemplateConfiguration(
        'example.com',
        [
            {'path': '/article/1', 'fields': [fixed_field('itemType', 'bogus'), fixed_field('title', 'A')]},
            {'path': '/article/2', 'fields': [fixed_field('itemType', 'webpage'), fixed_field('title', 'B')]},
            {'path': '/article/3', 'fields': [fixed_field('itemType', 'webpage'), fixed_field('title', 'C')]},
        ],
        fallback={'fields': [fixed_field('itemType', 'webpage'), fixed_field('title', 'Fallback')]},
    )


@pytest.mark.asyncio
async def test_translate_with_stops_at_first_applicable(templates, webpage):
    outputs = await templates.translate_with(webpage)
    assert [output.template.path for output in outputs] == ['/article/2']


@pytest.mark.asyncio
async def test_translate_with_non_applicable_outputs(templates, webpage):
    outputs = await templates.translate_with(webpage, only_applicable=False)
    assert [(output.template.path, output.applicable) for output in outputs] == [
        ('/article/1', False),
        ('/article/2', True),
    ]


@pytest.mark.asyncio
async def test_translate_with_all_templates(templates, webpage):
    outputs = await templates.translate_with(webpage, try_all_templates=True)
    assert [output.template.path for output in outputs] == ['/article/2', '/article/3', None]


@pytest.mark.asyncio
async def test_translate_with_falls_back(templates, webpage):
    outputs = await templates.translate_with(webpage, paths=['/article/1'])
    assert [output.template.path for output in outputs] == [None]

    outputs = await templates.translate_with(webpage, paths=['/article/1'], use_fallback=False)
    assert outputs == []


@pytest.mark.asyncio
async def test_translate_with_prefers_same_path(templates, make_webpage):
    outputs = await templates.translate_with(make_webpage('https://example.com/article/3'), prefer_same_path=True)
    assert [output.template.path for output in outputs] == ['/article/3']


# =============================================================================
# Tests
# =============================================================================


def test_test_configuration():
    tests = TestConfiguration(
        'example.com',
        [
            {
                'path': '/article/1',
                'fields': [
                    {'fieldname': 'title', 'goal': [' Sample article ', 'ignored']},
                    {'fieldname': 'authorLast', 'goal': ['Doe', 'Roe']},
                    {'fieldname': 'control', 'goal': ['x']},
                    {'fieldname': 'subtitle', 'goal': ['x']},
                ],
            },
            {'path': '/article/2', 'fields': []},
            {'path': '/article/1'},
        ],
    )
    assert tests.paths == ['/article/1', '/article/2']
    assert tests.non_empty_paths == ['/article/1']

    test = tests.get(['/article/1'])[0]
    assert [field.name for field in test.fields] == ['title', 'authorLast']
    assert test.get_field('title').goal == ['Sample article']
    assert test.get_field('authorLast').goal == ['Doe', 'Roe']

    with pytest.raises(DuplicateTestPathError):
        tests.add({'path': '/article/2'})


# =============================================================================
# Revisions
# =============================================================================


@pytest.mark.asyncio
async def test_fetch_and_load_latest_revision(revisions_api):
    revisions_api.fetch_revisions.side_effect = [
        [Revision(revid=12, timestamp='2022-02-01T00:00:00Z'), Revision(revid=7, timestamp='2022-01-01T00:00:00Z')],
        [
            Revision(
                revid=12,
                timestamp='2022-02-01T00:00:00Z',
                content='<syntaxhighlight lang="json">\n[{"pattern": "/article/*"}]\n</syntaxhighlight>',
            )
        ],
    ]
    patterns = PatternConfiguration('example.com', revisions_api=revisions_api)

    await patterns.fetch_and_load()

    assert patterns.ids == ['/article/*']
    assert patterns.current_revid == 12
    revisions_api.fetch_revisions.assert_called_with(
        'Web2Cit/data/com/example/patterns.json', with_content=True, start_id=12, max_revisions=1
    )


@pytest.mark.asyncio
async def test_fetch_and_load_specific_revision(revisions_api):
    revisions_api.fetch_revisions.return_value = [
        Revision(revid=7, timestamp='2022-01-01T00:00:00Z', content='[{"path": "/a"}]')
    ]
    templates = TemplateConfiguration('example.com', revisions_api=revisions_api)

    await templates.fetch_and_load(revid=7)
    await templates.fetch_and_load(revid=7)

    assert templates.paths == ['/a']
    assert templates.current_revid == 7
    assert revisions_api.fetch_revisions.await_count == 1


@pytest.mark.asyncio
async def test_fetch_and_load_without_revisions(revisions_api):
    revisions_api.fetch_revisions.return_value = []
    patterns = PatternConfiguration('example.com', [{'pattern': '/a/*'}], revisions_api=revisions_api)

    await patterns.fetch_and_load()

    assert patterns.ids == ['/a/*']
    assert patterns.current_revid is None


@pytest.mark.asyncio
@pytest.mark.parametrize('content', ['{"pattern": "/a/*"}', 'not json', None])
async def test_fetch_revision_rejects_bad_content(revisions_api, content):
    revisions_api.fetch_revisions.return_value = [Revision(revid=3, timestamp='t', content=content)]
    patterns = PatternConfiguration('example.com', revisions_api=revisions_api)

    with pytest.raises(RevisionsApiError):
        await patterns.fetch_revision(3)


@pytest.mark.asyncio
async def test_fetch_revision_missing(revisions_api):
    revisions_api.fetch_revisions.return_value = [Revision(revid=2, timestamp='t', content='[]')]
    patterns = PatternConfiguration('example.com', revisions_api=revisions_api)

    with pytest.raises(RevisionsApiError):
        await patterns.fetch_revision(3)
