# marc_toolkit/infrastructure/sources.py

"""Byte sources: standard input, named files and gzip-compressed files"""

# Standard library imports
import gzip
from logging import getLogger
from pathlib import Path
import sys
from typing import Iterator
from typing import Sequence

# Local imports
from marc_toolkit.core.types.protocols import BinarySource

logger = getLogger(__name__)

STDIN_PATH = "-"
STDIN_NAME = "<stdin>"
GZIP_MAGIC = b"\x1f\x8b"


def _is_gzip(path: Path) -> bool:
    if path.suffix.lower() == ".gz":
        return True
    with open(path, "rb") as f:
        return f.read(2) == GZIP_MAGIC


def iter_sources(paths: Sequence[str]) -> Iterator[tuple[str, BinarySource]]:
    """Open sources one at a time, in order

    Each file is closed as soon as the consumer moves on to the next source,
    so at most one file is open. No paths, or "-", means standard input.

    Raises:
        OSError: If a file cannot be opened
    """
    if not paths:
        paths = [STDIN_PATH]

    for path in paths:
        if path == STDIN_PATH:
            yield STDIN_NAME, sys.stdin.buffer
            continue

        file_path = Path(path)
        if _is_gzip(file_path):
            logger.debug(f"Opening {path} as gzip")
            with gzip.open(file_path, "rb") as stream:
                yield path, stream
        else:
            with open(file_path, "rb") as stream:
                yield path, stream
