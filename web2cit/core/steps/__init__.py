"""Selection and transformation steps."""

from web2cit.core.steps.selection import (
    SELECTION_TYPES,
    CitoidSelection,
    CssSelection,
    FixedSelection,
    Selection,
    XPathSelection,
    create_selection,
)
from web2cit.core.steps.transformation import (
    DATE_LOCALES,
    TRANSFORMATION_TYPES,
    DateTransformation,
    JoinTransformation,
    MatchTransformation,
    RangeTransformation,
    SplitTransformation,
    Transformation,
    create_transformation,
)

Step = Selection | Transformation

__all__ = [
    'DATE_LOCALES',
    'SELECTION_TYPES',
    'TRANSFORMATION_TYPES',
    'CitoidSelection',
    'CssSelection',
    'DateTransformation',
    'FixedSelection',
    'JoinTransformation',
    'MatchTransformation',
    'RangeTransformation',
    'Selection',
    'SplitTransformation',
    'Step',
    'Transformation',
    'XPathSelection',
    'create_selection',
    'create_transformation',
]
