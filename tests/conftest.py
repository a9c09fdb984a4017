import pytest

from plainmodel import get_default_naming_case, set_default_naming_case


@pytest.fixture
def restore_default_case():
    """Put the process-wide default naming case back after the test."""
    previous = get_default_naming_case()
    yield previous
    set_default_naming_case(previous)
