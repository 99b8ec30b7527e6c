import pytest
from click.testing import CliRunner

from keysmith.adapters import DeterministicRandomSource
from keysmith.core.ports import MemoryDictionary
from keysmith.core.service import PasswordService


@pytest.fixture
def seeded_source():
    """LCG source with the default seed."""
    return DeterministicRandomSource()


@pytest.fixture
def incrementing_source():
    """Raw values 0, 1, 2, ... 255, then wrapping."""
    return DeterministicRandomSource.incrementing(0, 256)


@pytest.fixture
def dictionary():
    return MemoryDictionary()


@pytest.fixture
def make_service(dictionary):
    """Build a PasswordService around any random source."""

    def _make(source, dict_port=None):
        return PasswordService(source, dict_port or dictionary)

    return _make


@pytest.fixture
def runner():
    return CliRunner()
