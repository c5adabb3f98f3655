# marc_toolkit/core/domain/record.py

"""Core MARC record domain entities

A record is a leader plus an ordered list of fields. Control fields (tags
00x) carry raw content; data fields carry indicators and an ordered list of
subfields. Content is kept as bytes so a parsed record serializes back to the
exact input; text accessors decode on demand.
"""

# Standard library imports
from typing import Iterator
from typing import NamedTuple

# Local imports
from marc_toolkit.core.domain.enums import RecordCategory
from marc_toolkit.core.types.aliases import Decoder

# ISO 2709 separators
RECORD_TERMINATOR = b"\x1d"
FIELD_TERMINATOR = b"\x1e"
SUBFIELD_DELIMITER = b"\x1f"

LEADER_LENGTH = 24
DIRECTORY_ENTRY_LENGTH = 12
DEFAULT_LEADER = "00000nam a2200000 a 4500"


def decode_utf8(data: bytes) -> str:
    """Default decoder: UTF-8 with replacement characters for bad bytes"""
    return data.decode("utf-8", errors="replace")


def is_control_tag(tag: str) -> bool:
    """Tags 00x always identify control fields"""
    return tag.startswith("00")


def tag_matches(pattern: str, tag: str) -> bool:
    """Match a tag against a pattern where '.' stands for any character"""
    if len(pattern) != len(tag):
        return False
    return all(p == "." or p == t for p, t in zip(pattern, tag))


def _to_bytes(value: str | bytes) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


class Leader:
    """The fixed 24-character record header"""

    __slots__ = ("_value",)

    def __init__(self, value: str = DEFAULT_LEADER) -> None:
        if len(value) != LEADER_LENGTH:
            raise ValueError(f"Leader must be {LEADER_LENGTH} characters, got {len(value)}")
        self._value = value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Leader({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Leader):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __getitem__(self, index: int | slice) -> str:
        return self._value[index]

    def set(self, position: int, value: str) -> None:
        """Overwrite characters starting at position, keeping the length fixed"""
        end = position + len(value)
        if position < 0 or end > LEADER_LENGTH:
            raise ValueError(f"Leader positions {position}-{end - 1} out of range")
        self._value = self._value[:position] + value + self._value[end:]

    @property
    def record_length(self) -> int:
        return int(self._value[0:5])

    @record_length.setter
    def record_length(self, value: int) -> None:
        self.set(0, f"{value:05d}")

    @property
    def record_status(self) -> str:
        return self._value[5]

    @property
    def record_type(self) -> str:
        return self._value[6]

    @property
    def bibliographic_level(self) -> str:
        return self._value[7]

    @property
    def coding_scheme(self) -> str:
        return self._value[9]

    @property
    def indicator_count(self) -> int:
        return int(self._value[10])

    @property
    def subfield_code_length(self) -> int:
        return int(self._value[11])

    @property
    def base_address(self) -> int:
        return int(self._value[12:17])

    @base_address.setter
    def base_address(self, value: int) -> None:
        self.set(12, f"{value:05d}")

    @property
    def length_of_field_length(self) -> int:
        return int(self._value[20])

    @property
    def length_of_starting_position(self) -> int:
        return int(self._value[21])


class Subfield(NamedTuple):
    """A coded sub-unit of a data field"""

    code: str
    data: bytes

    @property
    def value(self) -> str:
        return decode_utf8(self.data)


class ControlField:
    """Field with raw content and no indicators or subfields (tags 00x)"""

    __slots__ = ("tag", "data")

    def __init__(self, tag: str, data: str | bytes = b"") -> None:
        if len(tag) != 3:
            raise ValueError(f"Tag must be 3 characters: {tag!r}")
        if not is_control_tag(tag):
            raise ValueError(f"Tag {tag} is not a control field tag")
        self.tag = tag
        self.data = _to_bytes(data)

    def is_control_field(self) -> bool:
        return True

    @property
    def value(self) -> str:
        return decode_utf8(self.data)

    def text(self, decoder: Decoder = decode_utf8) -> str:
        return decoder(self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ControlField):
            return NotImplemented
        return self.tag == other.tag and self.data == other.data

    def __repr__(self) -> str:
        return f"ControlField({self.tag!r}, {self.data!r})"


class DataField:
    """Field with indicators and an ordered list of subfields"""

    __slots__ = ("tag", "indicators", "subfields")

    def __init__(
        self,
        tag: str,
        indicators: str | tuple[str, str] = "  ",
        subfields: list[Subfield] | None = None,
    ) -> None:
        if len(tag) != 3:
            raise ValueError(f"Tag must be 3 characters: {tag!r}")
        if is_control_tag(tag):
            raise ValueError(f"Tag {tag} identifies a control field")
        self.tag = tag
        self.indicators = "".join(indicators)
        self.subfields: list[Subfield] = list(subfields) if subfields else []

    def is_control_field(self) -> bool:
        return False

    @property
    def indicator1(self) -> str:
        return self.indicators[0] if self.indicators else " "

    @property
    def indicator2(self) -> str:
        return self.indicators[1] if len(self.indicators) > 1 else " "

    def add_subfield(self, code: str, value: str | bytes) -> None:
        self.subfields.append(Subfield(code, _to_bytes(value)))

    def get_subfields(self, *codes: str) -> list[str]:
        """Decoded values of subfields with the given codes, in field order"""
        return [sf.value for sf in self.subfields if not codes or sf.code in codes]

    def count(self, code: str) -> int:
        return sum(1 for sf in self.subfields if sf.code == code)

    def __getitem__(self, code: str) -> str | None:
        for sf in self.subfields:
            if sf.code == code:
                return sf.value
        return None

    def __contains__(self, code: str) -> bool:
        return any(sf.code == code for sf in self.subfields)

    @property
    def value(self) -> str:
        return self.text()

    def text(self, decoder: Decoder = decode_utf8) -> str:
        """Subfield values joined by single spaces"""
        return " ".join(decoder(sf.data) for sf in self.subfields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataField):
            return NotImplemented
        return (
            self.tag == other.tag
            and self.indicators == other.indicators
            and self.subfields == other.subfields
        )

    def __repr__(self) -> str:
        return f"DataField({self.tag!r}, {self.indicators!r}, {self.subfields!r})"


type Field = ControlField | DataField


class Record:
    """A MARC record: leader plus ordered fields

    Records produced by the reader remember their source name and 1-based
    position within that source, for reporting.
    """

    __slots__ = ("leader", "fields", "source", "position")

    def __init__(
        self,
        leader: Leader | str | None = None,
        fields: list[Field] | None = None,
        source: str | None = None,
        position: int | None = None,
    ) -> None:
        if leader is None:
            leader = Leader()
        elif isinstance(leader, str):
            leader = Leader(leader)
        self.leader = leader
        self.fields: list[Field] = list(fields) if fields else []
        self.source = source
        self.position = position

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, tag: str) -> bool:
        return any(tag_matches(tag, field.tag) for field in self.fields)

    def get_fields(self, *tags: str) -> list[Field]:
        """Fields whose tag matches any of the patterns, in record order"""
        if not tags:
            return list(self.fields)
        return [f for f in self.fields if any(tag_matches(t, f.tag) for t in tags)]

    def get_field(self, tag: str) -> Field | None:
        for field in self.fields:
            if tag_matches(tag, field.tag):
                return field
        return None

    def count(self, tag: str) -> int:
        return sum(1 for field in self.fields if tag_matches(tag, field.tag))

    def add_field(self, *fields: Field) -> None:
        self.fields.extend(fields)

    def insert_field(self, index: int, field: Field) -> None:
        self.fields.insert(index, field)

    def remove_field(self, field: Field) -> None:
        # Identity, not equality: two identical fields may both be present
        for i, candidate in enumerate(self.fields):
            if candidate is field:
                del self.fields[i]
                return
        raise ValueError(f"Field {field.tag} is not part of this record")

    def remove_fields(self, *tags: str) -> int:
        """Remove every field matching the tag patterns, returning how many"""
        before = len(self.fields)
        self.fields = [f for f in self.fields if not any(tag_matches(t, f.tag) for t in tags)]
        return before - len(self.fields)

    @property
    def control_number(self) -> str | None:
        field = self.get_field("001")
        if field is None:
            return None
        return field.value.strip()

    @property
    def category(self) -> RecordCategory:
        return RecordCategory.from_record_type(self.leader.record_type)

    def as_marc(self) -> bytes:
        """Serialize to ISO 2709, recomputing the leader lengths and directory"""
        # Local imports
        from marc_toolkit.application.processing.writer import serialize_record

        return serialize_record(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.leader == other.leader and self.fields == other.fields

    def __repr__(self) -> str:
        return f"Record({str(self.leader)!r}, {len(self.fields)} fields)"
