# marc_toolkit/infrastructure/__init__.py

"""System infrastructure: configuration, logging and byte sources."""

# Local imports
from marc_toolkit.infrastructure.config import ConfigLoader
from marc_toolkit.infrastructure.config import get_config
from marc_toolkit.infrastructure.sources import iter_sources

__all__ = ["ConfigLoader", "get_config", "iter_sources"]
