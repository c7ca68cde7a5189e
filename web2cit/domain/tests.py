"""Translation tests: expected field values for given paths.

Only parsing and bookkeeping live here; scoring template outputs against
these goals is out of scope.
"""

import logging
from typing import Any

from web2cit.core.fields import TranslationField
from web2cit.domain.configuration import DomainConfiguration
from web2cit.exceptions import DuplicateTestPathError, Web2CitError
from web2cit.models.definitions import TestDefinition, TestFieldDefinition
from web2cit.utils.urls import normalize_path

logger = logging.getLogger(__name__)


class TestField(TranslationField):
    """Expected (goal) output for one field."""

    __test__ = False

    def __init__(self, definition: TestFieldDefinition | dict[str, Any]):
        """Initialize the test field.

        Goal values are trimmed; scalar fields keep their first goal only.

        Raises:
            UnknownFieldError: If the field name is unknown
            ValueError: If the field is a control field

        """
        if not isinstance(definition, TestFieldDefinition):
            definition = TestFieldDefinition.model_validate(definition)
        super().__init__(definition.fieldname)
        if self.is_control:
            raise ValueError(f'Control field "{definition.fieldname}" cannot be tested')

        goal = [value.strip() for value in definition.goal]
        if not self.is_array and len(goal) > 1:
            logger.warning(f'Keeping only the first goal of single-valued field "{self.name}"')
            goal = goal[:1]
        self.goal = goal

    def to_definition(self) -> TestFieldDefinition:
        return TestFieldDefinition(fieldname=self.name, goal=list(self.goal))


class TranslationTest:
    """Goals for every tested field of one path."""

    __test__ = False

    def __init__(self, domain: str, definition: TestDefinition | dict[str, Any]):
        if not isinstance(definition, TestDefinition):
            definition = TestDefinition.model_validate(definition)
        if not definition.path.startswith('/'):
            raise ValueError(f'Test path "{definition.path}" must start with "/"')
        self.domain = domain
        self.path = normalize_path(definition.path)
        self.fields: list[TestField] = []
        for field_definition in definition.fields:
            try:
                field = TestField(field_definition)
            except ValueError as e:
                logger.warning(f'Skipping invalid test field for {domain}{self.path}: {e}')
                continue
            if any(existing.name == field.name for existing in self.fields):
                logger.info(f'Skipping duplicate test field "{field.name}" for {domain}{self.path}')
                continue
            self.fields.append(field)

    def get_field(self, fieldname: str) -> TestField | None:
        return next((field for field in self.fields if field.name == fieldname), None)

    def to_definition(self) -> TestDefinition:
        return TestDefinition(path=self.path, fields=[field.to_definition() for field in self.fields])


class TestConfiguration(DomainConfiguration[TranslationTest]):
    """Tests of a domain, one per path."""

    __test__ = False

    filename = 'tests.json'
    kind = 'test'

    def build(self, definition: TestDefinition | dict[str, Any]) -> TranslationTest:
        return TranslationTest(self.domain, definition)

    def identify(self, item: TranslationTest) -> str:
        return item.path

    def normalize_id(self, item_id: str) -> str:
        return normalize_path(item_id)

    def duplicate_error(self, item_id: str) -> Web2CitError:
        return DuplicateTestPathError(item_id)

    def to_definition(self, item: TranslationTest) -> TestDefinition:
        return item.to_definition()

    @property
    def paths(self) -> list[str]:
        return self.ids

    @property
    def non_empty_paths(self) -> list[str]:
        """Paths of the tests that define at least one field goal."""
        return [test.path for test in self.values if test.fields]
