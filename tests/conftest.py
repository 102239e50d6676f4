"""
Shared test fixtures and utilities for the treeguard test suite.
"""

import pytest

from treeguard import TreeValidator, ValidationSettings


@pytest.fixture
def namespace(request):
    """Namespace segment matching every type declared in the requesting test module.

    Test modules are imported under their own name, so the last segment of
    that name is a segment of `__module__` for every class they define.
    """
    return request.module.__name__.rpartition(".")[2]


@pytest.fixture
def settings(namespace):
    """Settings validating the requesting test module's types."""
    return ValidationSettings(namespaces_to_validate=namespace)


@pytest.fixture
def validator(settings):
    return TreeValidator(settings)
