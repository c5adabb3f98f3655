# marc_toolkit/application/processing/query/_terms.py

"""Compiled query terms

Every term evaluates to a boolean against one record. Evaluation never
raises for absent fields: a missing field simply has zero occurrences.
"""

# Standard library imports
from dataclasses import dataclass
from operator import eq
from operator import ge
from operator import gt
from operator import le
from operator import lt
from re import Pattern
from re import compile as re_compile
from typing import Callable
from typing import Iterator

# Local imports
from marc_toolkit.core.domain.record import ControlField
from marc_toolkit.core.domain.record import DataField
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.types.aliases import Decoder

LEADER_TAG = "LDR"

ORDERING: dict[str, Callable[[object, object], bool]] = {
    "<": lt,
    "<=": le,
    "=": eq,
    ">=": ge,
    ">": gt,
}

_NUMBER = re_compile(r"\s*[+-]?\d+(\.\d+)?\s*")


def _as_number(text: str) -> float | None:
    if _NUMBER.fullmatch(text):
        return float(text)
    return None


def compare_text(op: str, actual: str, expected: str, pattern: Pattern[str] | None) -> bool:
    """Compare field text with a literal, a regex or an ordering

    Ordering operators compare numerically when both sides are numbers and
    fall back to string ordering otherwise.
    """
    if op == "~":
        return pattern is not None and pattern.search(actual) is not None
    if op == "=":
        return actual == expected
    actual_number = _as_number(actual)
    expected_number = _as_number(expected)
    if actual_number is not None and expected_number is not None:
        return ORDERING[op](actual_number, expected_number)
    return ORDERING[op](actual, expected)


def _subfield_values(record: Record, tag: str, code: str) -> Iterator[bytes]:
    for field in record.get_fields(tag):
        if isinstance(field, DataField):
            for subfield in field.subfields:
                if subfield.code == code:
                    yield subfield.data


@dataclass(frozen=True, slots=True)
class PresenceTerm:
    """+TAG, -TAG, +TAGc, -TAGc"""

    tag: str
    code: str | None
    negate: bool

    def evaluate(self, record: Record, decoder: Decoder) -> bool:
        if self.code is None:
            present = self.tag in record
        else:
            present = next(_subfield_values(record, self.tag, self.code), None) is not None
        return present != self.negate


@dataclass(frozen=True, slots=True)
class CountTerm:
    """#TAG OP N, #TAGc OP N, #(*) OP N (tag None counts every field)"""

    tag: str | None
    code: str | None
    op: str
    value: int

    def count(self, record: Record) -> int:
        if self.tag is None:
            return len(record.fields)
        if self.code is None:
            return record.count(self.tag)
        return sum(1 for _ in _subfield_values(record, self.tag, self.code))

    def evaluate(self, record: Record, decoder: Decoder) -> bool:
        return ORDERING[self.op](self.count(record), self.value)


@dataclass(frozen=True, slots=True)
class ContentTerm:
    """TAG OP VALUE, TAGc OP VALUE; true when any occurrence matches"""

    tag: str
    code: str | None
    op: str
    value: str
    pattern: Pattern[str] | None = None

    def texts(self, record: Record, decoder: Decoder) -> Iterator[str]:
        if self.code is not None:
            for data in _subfield_values(record, self.tag, self.code):
                yield decoder(data)
            return
        for field in record.get_fields(self.tag):
            yield field.text(decoder)

    def evaluate(self, record: Record, decoder: Decoder) -> bool:
        return any(
            compare_text(self.op, text, self.value, self.pattern)
            for text in self.texts(record, decoder)
        )


@dataclass(frozen=True, slots=True)
class IndicatorTerm:
    """TAG:1 OP VALUE, TAG:2 OP VALUE"""

    tag: str
    which: int
    op: str
    value: str
    pattern: Pattern[str] | None = None

    def evaluate(self, record: Record, decoder: Decoder) -> bool:
        for field in record.get_fields(self.tag):
            if not isinstance(field, DataField):
                continue
            indicator = field.indicator1 if self.which == 1 else field.indicator2
            if compare_text(self.op, indicator, self.value, self.pattern):
                return True
        return False


@dataclass(frozen=True, slots=True)
class PositionTerm:
    """TAG/P[-Q] OP VALUE on a control field, or LDR/P[-Q] on the leader"""

    tag: str
    start: int
    end: int
    op: str
    value: str
    pattern: Pattern[str] | None = None

    def slices(self, record: Record, decoder: Decoder) -> Iterator[str]:
        if self.tag == LEADER_TAG:
            yield str(record.leader)[self.start : self.end + 1]
            return
        for field in record.get_fields(self.tag):
            if isinstance(field, ControlField):
                # Positions count bytes, so slice before decoding
                yield decoder(field.data[self.start : self.end + 1])

    def evaluate(self, record: Record, decoder: Decoder) -> bool:
        return any(
            compare_text(self.op, text, self.value, self.pattern)
            for text in self.slices(record, decoder)
        )


type Term = PresenceTerm | CountTerm | ContentTerm | IndicatorTerm | PositionTerm
