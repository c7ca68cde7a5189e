"""Assemble citations from template field outputs."""

import logging
from collections.abc import Callable, Iterable
from datetime import date
from typing import Any

from web2cit.models.results import FieldOutput

logger = logging.getLogger(__name__)

Citation = dict[str, Any]
CitationSetter = Callable[[Citation, list[str]], None]

CITATION_SOURCE = 'Web2Cit'


def _set_value(key: str) -> CitationSetter:
    def setter(citation: Citation, values: list[str]) -> None:
        citation[key] = values[0]

    return setter


def _set_creator_names(creator_type: str, position: int) -> CitationSetter:
    def setter(citation: Citation, values: list[str]) -> None:
        creators = citation.setdefault(creator_type, [])
        while len(creators) < len(values):
            creators.append(['', ''])
        for creator, value in zip(creators, values, strict=False):
            creator[position] = value

    return setter


# field name -> how its (valid) output is written into the citation
CITATION_SETTERS: dict[str, CitationSetter] = {
    'itemType': _set_value('itemType'),
    'title': _set_value('title'),
    'authorFirst': _set_creator_names('author', 0),
    'authorLast': _set_creator_names('author', 1),
    'date': _set_value('date'),
    'publishedIn': _set_value('publicationTitle'),
    'publishedBy': _set_value('publisher'),
    'language': _set_value('language'),
}


def outputs_to_citation(outputs: Iterable[FieldOutput]) -> Citation:
    """Write valid, non-control field outputs into a partial citation.

    Authors without a last name are dropped.
    """
    citation: Citation = {}
    for output in outputs:
        if output.control or not output.valid:
            continue
        setter = CITATION_SETTERS.get(output.fieldname)
        if setter is None:
            continue
        setter(citation, [value for value in output.output if value is not None])

    if 'author' in citation:
        citation['author'] = [creator for creator in citation['author'] if creator[1]]
        if not citation['author']:
            del citation['author']
    return citation


def make_citation(outputs: Iterable[FieldOutput], url: str) -> Citation | None:
    """Build a complete citation from the outputs of an applicable template.

    Args:
        outputs: Field outputs of the template
        url: URL of the translated webpage

    Returns:
        The citation, or None if the outputs lack an item type or a title

    """
    citation = outputs_to_citation(outputs)
    for key in ('itemType', 'title'):
        if key not in citation:
            logger.warning(f'Cannot build citation for {url}: "{key}" missing from template output')
            return None

    citation.update(
        url=url,
        source=[CITATION_SOURCE],
        accessDate=date.today().isoformat(),
        tags=[],
        key='',
        version=0,
    )
    return citation
