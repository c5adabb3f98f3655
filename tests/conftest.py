# tests/conftest.py

"""Pytest configuration and fixtures for test suite"""

# Standard library imports
from logging import Logger
from logging import getLogger
from pathlib import Path
from shutil import rmtree
from tempfile import mkdtemp

# Third party imports
import pytest

# Local imports
from marc_toolkit.infrastructure.config import _loader
from tests.fixtures.records import RecordBuilder


# Custom markers
def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "full_isolation: mark test as needing complete isolation")
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture(autouse=True, scope="function")
def basic_isolation():
    """Minimal isolation for most tests - reset logging and the cached config"""
    # Reset logging to avoid handler conflicts
    root_logger = getLogger()
    # Remove all handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    # Reset logging level
    root_logger.setLevel(30)  # WARNING level

    # Clear all logger instances
    Logger.manager.loggerDict.clear()

    # Forget any config.json picked up by an earlier test
    _loader._default_config = None

    yield

    _loader._default_config = None


@pytest.fixture
def full_isolation(monkeypatch, tmp_path):
    """Full test isolation: run from an empty working directory"""
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture
def temp_test_dir():
    """Provide a temporary directory for tests that need file operations"""
    temp_dir = mkdtemp()
    yield temp_dir
    rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def builder() -> type[RecordBuilder]:
    """Record builder helpers"""
    return RecordBuilder


@pytest.fixture
def bib_record():
    return RecordBuilder.bibliographic()


@pytest.fixture
def holdings_record():
    return RecordBuilder.holdings()


@pytest.fixture
def marc_file(tmp_path) -> Path:
    """A small MARC file: two bibliographic records, the first with holdings"""
    path = tmp_path / "records.mrc"
    path.write_bytes(
        RecordBuilder.raw(
            RecordBuilder.bibliographic("bib001", "First title"),
            RecordBuilder.holdings("hld001", bib_id="bib001"),
            RecordBuilder.bibliographic("bib002", "Second title"),
        )
    )
    return path
