# marc_toolkit/application/processing/writer.py

"""ISO 2709 serialization of records and groups"""

# Standard library imports
from logging import getLogger

# Local imports
from marc_toolkit.core.domain.group import RecordGroup
from marc_toolkit.core.domain.record import ControlField
from marc_toolkit.core.domain.record import FIELD_TERMINATOR
from marc_toolkit.core.domain.record import Field
from marc_toolkit.core.domain.record import LEADER_LENGTH
from marc_toolkit.core.domain.record import Leader
from marc_toolkit.core.domain.record import RECORD_TERMINATOR
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.domain.record import SUBFIELD_DELIMITER
from marc_toolkit.core.types.protocols import BinarySink

logger = getLogger(__name__)

# Directory entry widths written for every record (leader/20-23 "4500")
FIELD_LENGTH_WIDTH = 4
START_POSITION_WIDTH = 5
MAX_FIELD_LENGTH = 10**FIELD_LENGTH_WIDTH - 1
MAX_RECORD_LENGTH = 99999

# Separators that may never appear inside field content
DATA_FORBIDDEN = RECORD_TERMINATOR + FIELD_TERMINATOR + SUBFIELD_DELIMITER
# Control fields have no subfields, so only the terminators would split them
CONTROL_FORBIDDEN = RECORD_TERMINATOR + FIELD_TERMINATOR


def _check_content(tag: str, data: bytes, forbidden: bytes) -> None:
    for separator in forbidden:
        if separator in data:
            raise ValueError(f"Field {tag} content contains separator byte 0x{separator:02X}")


def encode_field(field: Field, indicator_count: int = 2, code_length: int = 1) -> bytes:
    """Field content as stored in the record, including its terminator

    Args:
        field: Field to encode
        indicator_count: Indicator characters per data field (leader/10)
        code_length: Characters per subfield code (leader/11 minus one)

    Raises:
        ValueError: If the field would not read back as written
    """
    if isinstance(field, ControlField):
        _check_content(field.tag, field.data, CONTROL_FORBIDDEN)
        return field.data + FIELD_TERMINATOR

    if len(field.indicators) != indicator_count:
        raise ValueError(
            f"Field {field.tag} has {len(field.indicators)} indicator(s), expected {indicator_count}"
        )
    indicators = field.indicators.encode("latin-1")
    _check_content(field.tag, indicators, DATA_FORBIDDEN)

    parts = [indicators]
    for subfield in field.subfields:
        if len(subfield.code) != code_length:
            raise ValueError(
                f"Field {field.tag} subfield code {subfield.code!r} is not "
                f"{code_length} character(s)"
            )
        code = subfield.code.encode("latin-1")
        _check_content(field.tag, code + subfield.data, DATA_FORBIDDEN)
        parts.append(SUBFIELD_DELIMITER + code + subfield.data)
    parts.append(FIELD_TERMINATOR)
    return b"".join(parts)


def serialize_record(record: Record) -> bytes:
    """Serialize a record, recomputing the directory, record length and base address

    The record's own leader is left untouched; the written leader carries the
    recomputed values.

    Raises:
        ValueError: If a field or the whole record exceeds what ISO 2709 can
            address, or a field does not fit the leader's indicator count and
            subfield code length
    """
    leader = Leader(str(record.leader))
    indicator_count = leader.indicator_count
    # A subfield code length below 2 is read as 2, so write it the same way
    code_length = max(leader.subfield_code_length - 1, 1)

    directory = bytearray()
    body = bytearray()
    for field in record.fields:
        data = encode_field(field, indicator_count, code_length)
        if len(data) > MAX_FIELD_LENGTH:
            raise ValueError(f"Field {field.tag} is {len(data)} bytes, limit is {MAX_FIELD_LENGTH}")
        directory += (
            f"{field.tag}{len(data):0{FIELD_LENGTH_WIDTH}d}{len(body):0{START_POSITION_WIDTH}d}"
        ).encode("ascii")
        body += data
    directory += FIELD_TERMINATOR

    base_address = LEADER_LENGTH + len(directory)
    record_length = base_address + len(body) + len(RECORD_TERMINATOR)
    if record_length > MAX_RECORD_LENGTH:
        raise ValueError(f"Record is {record_length} bytes, limit is {MAX_RECORD_LENGTH}")

    leader.record_length = record_length
    leader.base_address = base_address
    leader.set(20, f"{FIELD_LENGTH_WIDTH}{START_POSITION_WIDTH}00")

    return str(leader).encode("ascii") + bytes(directory) + bytes(body) + RECORD_TERMINATOR


class MarcWriter:
    """Write records to a binary stream

    Output already written stays written; the writer does not buffer beyond
    what the underlying stream does.
    """

    def __init__(self, stream: BinarySink) -> None:
        self.stream = stream
        self.records_written = 0

    def write(self, record: Record) -> None:
        self.stream.write(serialize_record(record))
        self.records_written += 1

    def write_group(self, group: RecordGroup) -> None:
        for record in group:
            self.write(record)

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()
