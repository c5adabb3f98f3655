# tests/integration/conftest.py

"""Integration test fixtures and configuration"""

# Standard library imports
import gzip
from pathlib import Path

# Third party imports
import pytest

# Local imports
from tests.fixtures.records import build_collection


@pytest.fixture
def collection_file(tmp_path) -> Path:
    """Plain file with 20 bib records and 20 holdings records"""
    path = tmp_path / "collection.mrc"
    path.write_bytes(build_collection(20))
    return path


@pytest.fixture
def compressed_collection_file(tmp_path) -> Path:
    """Gzip file with 10 bib records and 20 holdings records"""
    path = tmp_path / "collection.mrc.gz"
    with gzip.open(path, "wb") as f:
        f.write(build_collection(10, holdings_per_bib=2))
    return path
