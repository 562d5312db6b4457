"""
Pytest configuration for recordcheck tests.

Seeds the in-memory records before each test and parametrizes
ModelAssertions subclasses with their generated cases.
"""

import pytest

from recordcheck import generate_model_cases
from tests.framework.models import backend, seed


def pytest_generate_tests(metafunc):
    """
    Parametrize the 'case' argument of ModelAssertions tests.

    Each generated case becomes its own test, named after the case.
    """
    generate_model_cases(metafunc)


@pytest.fixture(autouse=True)
def seeded_records():
    seed()
    yield
    backend.clear()
