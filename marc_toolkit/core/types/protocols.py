# marc_toolkit/core/types/protocols.py

"""Protocol definitions for pluggable collaborators."""

# Standard library imports
from typing import Protocol
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    # Local imports
    from marc_toolkit.core.domain.enums import RecordRole
    from marc_toolkit.core.domain.record import Record


class BinarySource(Protocol):
    """Anything the reader can pull raw bytes from."""

    def read(self, size: int = -1, /) -> bytes: ...


class BinarySink(Protocol):
    """Anything the writer can push serialized records to."""

    def write(self, data: bytes, /) -> int | None: ...


class RecordClassifier(Protocol):
    """Decides whether a record heads a group or trails one."""

    def __call__(self, record: "Record") -> "RecordRole": ...


class RecordPredicate(Protocol):
    """A compiled query."""

    def __call__(self, record: "Record") -> bool: ...
