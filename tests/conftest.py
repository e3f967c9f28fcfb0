"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest

from esquery.placeholders import (
    ArgumentAccessor,
    NamedParameter,
    PlaceholderResolver,
)
from esquery.repository import SearchOperations


@pytest.fixture
def positional_resolver() -> PlaceholderResolver:
    """Create a resolver substituting ?N placeholders."""
    return PlaceholderResolver()


@pytest.fixture
def named_resolver() -> PlaceholderResolver:
    """Create a resolver substituting :name placeholders."""
    return PlaceholderResolver(use_named_parameters=True)


@pytest.fixture
def person_accessor() -> ArgumentAccessor:
    """Create an accessor for a (firstname, lastname, age) call."""
    return ArgumentAccessor(
        ["Jack", "Miller", 42],
        [
            NamedParameter(name="firstname", index=0),
            NamedParameter(name="lastname", index=1),
            NamedParameter(name="age", index=2),
        ],
    )


@pytest.fixture
def mock_operations() -> Mock:
    """Create a mocked search collaborator."""
    operations = Mock(spec=SearchOperations)
    operations.search = Mock(return_value={"hits": {"total": {"value": 0}, "hits": []}})
    return operations
