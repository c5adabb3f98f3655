# marc_toolkit/core/domain/group.py

"""A bibliographic record together with its trailing holdings records"""

# Standard library imports
from typing import Iterator

# Local imports
from marc_toolkit.core.domain.record import Record


class RecordGroup:
    """One primary record plus the secondary records that immediately follow it

    A secondary record that appears before any primary record forms a
    singleton group of its own and is flagged as an orphan.
    """

    __slots__ = ("primary", "secondaries", "orphan")

    def __init__(
        self, primary: Record, secondaries: list[Record] | None = None, orphan: bool = False
    ) -> None:
        self.primary = primary
        self.secondaries: list[Record] = list(secondaries) if secondaries else []
        self.orphan = orphan

    @property
    def records(self) -> list[Record]:
        """All records of the group in stream order"""
        return [self.primary, *self.secondaries]

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return 1 + len(self.secondaries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RecordGroup):
            return NotImplemented
        return (
            self.primary == other.primary
            and self.secondaries == other.secondaries
            and self.orphan == other.orphan
        )

    def __repr__(self) -> str:
        flag = ", orphan" if self.orphan else ""
        return f"RecordGroup({self.primary!r}, {len(self.secondaries)} secondaries{flag})"
