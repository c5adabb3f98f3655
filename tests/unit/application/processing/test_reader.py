# tests/unit/application/processing/test_reader.py

"""Tests for the streaming ISO 2709 reader"""

# Standard library imports
from io import BytesIO

# Third party imports
import pytest

# Local imports
from marc_toolkit.application.models.run_stats import ReadStatistics
from marc_toolkit.application.processing.reader import MarcReader
from marc_toolkit.application.processing.reader import RecordParser
from marc_toolkit.application.processing.reader import iter_raw_records
from marc_toolkit.application.processing.reader import read_records
from marc_toolkit.application.processing.writer import serialize_record
from marc_toolkit.core.domain.enums import ReadMode
from marc_toolkit.core.domain.enums import Severity
from marc_toolkit.core.domain.enums import StructuralErrorKind
from marc_toolkit.core.domain.errors import StructuralError
from marc_toolkit.core.domain.record import Subfield
from tests.fixtures.records import BIB_008
from tests.fixtures.records import RecordBuilder

CORRUPT_RECORD = b"this is not a marc record\x1d"


def read_all(data: bytes, mode: ReadMode = ReadMode.LENIENT, **kwargs) -> list:
    return list(MarcReader(BytesIO(data), source="test.mrc", mode=mode, **kwargs))


def record_of_length(length: int) -> bytes:
    """Serialized bibliographic record padded to an exact byte length"""
    short = serialize_record(RecordBuilder.bibliographic(title="x"))
    title = "x" * (1 + length - len(short))
    raw = serialize_record(RecordBuilder.bibliographic(title=title))
    assert len(raw) == length
    return raw


class TestIterRawRecords:
    """Test splitting a byte stream on record terminators"""

    def test_splits_on_terminator(self):
        chunks = list(iter_raw_records(BytesIO(b"abc\x1ddef\x1d")))
        assert chunks == [(b"abc\x1d", True), (b"def\x1d", True)]

    def test_small_chunks(self):
        chunks = list(iter_raw_records(BytesIO(b"abc\x1ddefgh\x1d"), chunk_size=2))
        assert chunks == [(b"abc\x1d", True), (b"defgh\x1d", True)]

    def test_unterminated_tail(self):
        chunks = list(iter_raw_records(BytesIO(b"abc\x1dtail")))
        assert chunks[-1] == (b"tail", False)

    def test_trailing_whitespace_ignored(self):
        assert list(iter_raw_records(BytesIO(b"abc\x1d\n"))) == [(b"abc\x1d", True)]

    def test_empty_stream(self):
        assert list(iter_raw_records(BytesIO(b""))) == []


class TestRoundTrip:
    """Test that parsing and re-serializing preserves bytes"""

    def test_serialize_parse_is_identity(self):
        raw = RecordBuilder.raw(RecordBuilder.bibliographic())
        records = read_all(raw)
        assert len(records) == 1
        assert records[0].as_marc() == raw

    def test_parsed_fields_match_built_fields(self):
        built = RecordBuilder.bibliographic(title="Moby Dick")
        (parsed,) = read_all(serialize_record(built))
        assert parsed.fields == built.fields
        assert parsed.control_number == "bib001"
        assert parsed.source == "test.mrc"
        assert parsed.position == 1

    def test_directory_count_equals_field_count(self):
        raw = serialize_record(RecordBuilder.holdings())
        base_address = int(raw[12:17])
        entries = (base_address - 24 - 1) // 12
        (parsed,) = read_all(raw)
        assert len(parsed.fields) == entries == 4

    def test_multiple_records_keep_order(self):
        raw = RecordBuilder.raw(
            RecordBuilder.bibliographic("b1"),
            RecordBuilder.holdings("h1"),
            RecordBuilder.bibliographic("b2"),
        )
        records = read_all(raw, chunk_size=16)
        assert [r.control_number for r in records] == ["b1", "h1", "b2"]
        assert [r.position for r in records] == [1, 2, 3]


class TestLengthMismatch:
    """A leader declaring 500 bytes on a 480-byte record"""

    def test_lenient_warns_and_continues(self):
        raw = RecordBuilder.with_leader_length(record_of_length(480), 500)
        statistics = ReadStatistics()
        reader = MarcReader(BytesIO(raw + raw), statistics=statistics)
        records = list(reader)
        assert len(records) == 2
        assert statistics.warnings == 2
        assert reader.last_findings[0].severity is Severity.WARNING
        assert reader.last_findings[0].category == "length_mismatch"

    def test_strict_raises(self):
        raw = RecordBuilder.with_leader_length(record_of_length(480), 500)
        with pytest.raises(StructuralError) as exc_info:
            read_all(raw, mode=ReadMode.STRICT)
        assert exc_info.value.kind is StructuralErrorKind.LENGTH_MISMATCH
        assert exc_info.value.position == 1


class TestResynchronization:
    """Test recovery after a record that cannot be parsed"""

    def test_lenient_skips_only_the_corrupt_record(self):
        raw = (
            serialize_record(RecordBuilder.bibliographic("b1"))
            + CORRUPT_RECORD
            + serialize_record(RecordBuilder.bibliographic("b2"))
        )
        statistics = ReadStatistics()
        records = read_all(raw, statistics=statistics)
        assert [r.control_number for r in records] == ["b1", "b2"]
        assert statistics.records_skipped == 1
        assert statistics.records_read == 2
        assert statistics.records_seen == 3

    def test_next_record_position_is_kept(self):
        raw = CORRUPT_RECORD + serialize_record(RecordBuilder.bibliographic("b1"))
        (record,) = read_all(raw)
        assert record.position == 2

    def test_strict_aborts_after_good_records(self):
        raw = serialize_record(RecordBuilder.bibliographic("b1")) + CORRUPT_RECORD
        reader = iter(MarcReader(BytesIO(raw), mode=ReadMode.STRICT))
        assert next(reader).control_number == "b1"
        with pytest.raises(StructuralError) as exc_info:
            next(reader)
        assert exc_info.value.kind is StructuralErrorKind.BAD_LEADER

    def test_short_record(self):
        with pytest.raises(StructuralError) as exc_info:
            read_all(b"00010\x1d", mode=ReadMode.STRICT)
        assert exc_info.value.kind is StructuralErrorKind.BAD_LEADER


class TestTerminators:
    def test_missing_record_terminator_lenient(self):
        raw = serialize_record(RecordBuilder.bibliographic())[:-1]
        reader = MarcReader(BytesIO(raw))
        (record,) = list(reader)
        assert record.control_number == "bib001"
        assert [f.category for f in reader.last_findings] == ["missing_terminator"]

    def test_missing_record_terminator_strict(self):
        raw = serialize_record(RecordBuilder.bibliographic())[:-1]
        with pytest.raises(StructuralError) as exc_info:
            read_all(raw, mode=ReadMode.STRICT)
        assert exc_info.value.kind is StructuralErrorKind.MISSING_TERMINATOR

    def test_line_breaks_between_records(self):
        record = serialize_record(RecordBuilder.bibliographic())
        records = read_all(record + b"\r\n" + record)
        assert len(records) == 2

    def test_field_length_within_tolerance(self):
        raw = serialize_record(RecordBuilder.bibliographic())
        # 001 "bib001" plus its terminator is 7 bytes; declare 8
        damaged = RecordBuilder.with_entry_length(raw, 0, 8)
        parser = RecordParser(ReadMode.LENIENT)
        record, findings = parser.parse(damaged)
        assert record.control_number == "bib001"
        assert [f.category for f in findings] == ["length_mismatch"]

    def test_field_length_within_tolerance_strict(self):
        raw = serialize_record(RecordBuilder.bibliographic())
        damaged = RecordBuilder.with_entry_length(raw, 0, 8)
        with pytest.raises(StructuralError):
            RecordParser(ReadMode.STRICT).parse(damaged)

    def test_field_length_beyond_tolerance_skipped(self):
        raw = serialize_record(RecordBuilder.bibliographic())
        damaged = RecordBuilder.with_entry_length(raw, 0, 12)
        assert read_all(damaged) == []

    def test_tolerance_is_configurable(self):
        raw = serialize_record(RecordBuilder.bibliographic())
        damaged = RecordBuilder.with_entry_length(raw, 0, 8)
        assert read_all(damaged, length_tolerance=0) == []


class TestFieldDamage:
    @staticmethod
    def raw_with_note(note: bytes) -> bytes:
        return RecordBuilder.assemble(
            [
                ("001", b"bib001"),
                ("008", BIB_008.encode("ascii")),
                ("245", b"10\x1faTitle"),
                ("500", note),
            ]
        )

    def test_short_indicators_are_padded(self):
        parsed, findings = RecordParser().parse(self.raw_with_note(b"1\x1faNote"))
        assert parsed.get_field("500").indicators == "1 "
        assert [f.category for f in findings] == ["bad_field"]

    def test_short_indicators_rejected_in_strict_mode(self):
        with pytest.raises(StructuralError) as exc_info:
            RecordParser(ReadMode.STRICT).parse(self.raw_with_note(b"1\x1faNote"))
        assert exc_info.value.kind is StructuralErrorKind.BAD_FIELD

    def test_empty_subfield_dropped(self):
        parsed, findings = RecordParser().parse(self.raw_with_note(b"  \x1f\x1faNote"))
        assert parsed.get_field("500").subfields == [Subfield("a", b"Note")]
        assert [f.category for f in findings] == ["bad_field"]


class TestReadRecords:
    def test_chains_sources_and_shares_statistics(self):
        statistics = ReadStatistics()
        sources = [
            ("a.mrc", BytesIO(RecordBuilder.raw(RecordBuilder.bibliographic("a1")))),
            ("b.mrc", BytesIO(RecordBuilder.raw(RecordBuilder.bibliographic("b1")))),
        ]
        records = list(read_records(sources, statistics=statistics))
        assert [(r.source, r.position) for r in records] == [("a.mrc", 1), ("b.mrc", 1)]
        assert statistics.sources == 2
        assert statistics.records_read == 2
