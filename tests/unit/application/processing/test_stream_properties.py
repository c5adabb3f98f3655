# tests/unit/application/processing/test_stream_properties.py

"""Property-based tests for serialization round trips and query complements

These tests check that invariants of the record stream hold across
arbitrary well-formed records, not only hand-picked examples.
"""

# Standard library imports
from io import BytesIO

# Third party imports
from hypothesis import given
from hypothesis import settings
from hypothesis import strategies as st
from hypothesis.strategies import composite

# Local imports
from marc_toolkit.application.processing.grouping import group_records
from marc_toolkit.application.processing.query import compile_query
from marc_toolkit.application.processing.reader import MarcReader
from marc_toolkit.application.processing.writer import serialize_record
from marc_toolkit.core.domain.record import ControlField
from marc_toolkit.core.domain.record import DataField
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.domain.record import Subfield

SEPARATORS = {0x1D, 0x1E, 0x1F}

content_bytes = st.binary(max_size=40).map(
    lambda data: bytes(b for b in data if b not in SEPARATORS)
)
indicators = st.text(alphabet=" 0123456789", min_size=2, max_size=2)
subfield_codes = st.sampled_from("abcdefghijklmnopqrstuvwxyz0123456789")
data_tags = st.sampled_from(["020", "100", "245", "250", "260", "500", "650", "700", "852"])
control_tags = st.sampled_from(["001", "003", "005", "008"])
record_types = st.sampled_from("acdmtuvxy")


@composite
def control_fields(draw) -> ControlField:
    return ControlField(draw(control_tags), draw(content_bytes))


@composite
def data_fields(draw) -> DataField:
    subfields = draw(st.lists(st.builds(Subfield, subfield_codes, content_bytes), max_size=4))
    return DataField(draw(data_tags), draw(indicators), subfields)


@composite
def records(draw) -> Record:
    fields = draw(st.lists(st.one_of(control_fields(), data_fields()), max_size=8))
    leader = f"00000n{draw(record_types)}m a2200000 a 4500"
    return Record(leader, fields)


class TestRoundTripProperties:
    """serialize(parse(bytes)) == bytes for every constructed record"""

    @given(records())
    def test_bytes_survive_parse_and_serialize(self, record: Record) -> None:
        raw = serialize_record(record)
        (parsed,) = list(MarcReader(BytesIO(raw)))
        assert serialize_record(parsed) == raw

    @given(records())
    def test_fields_survive(self, record: Record) -> None:
        (parsed,) = list(MarcReader(BytesIO(serialize_record(record))))
        assert parsed.fields == record.fields

    @given(records())
    def test_directory_count_equals_field_count(self, record: Record) -> None:
        raw = serialize_record(record)
        entries = (int(raw[12:17]) - 24 - 1) // 12
        (parsed,) = list(MarcReader(BytesIO(raw)))
        assert len(parsed.fields) == entries

    @settings(max_examples=50)
    @given(st.lists(records(), max_size=6), st.integers(min_value=1, max_value=64))
    def test_stream_split_independent_of_chunk_size(self, batch, chunk_size) -> None:
        raw = b"".join(serialize_record(r) for r in batch)
        parsed = list(MarcReader(BytesIO(raw), chunk_size=chunk_size))
        assert [r.fields for r in parsed] == [r.fields for r in batch]


class TestQueryProperties:
    """A query and its inverted twin partition any input"""

    terms = st.sampled_from(
        ["+245", "-650", "+245a", "#650 > 1", "#(*) >= 3", "245a ~ a", "LDR/06 = x", "+.5."]
    )

    @given(st.lists(records(), max_size=8), st.lists(terms, min_size=1, max_size=3), st.booleans())
    def test_invert_is_exact_complement(self, batch, query_terms, any_match) -> None:
        query = compile_query(query_terms, any_match=any_match)
        inverted = compile_query(query_terms, any_match=any_match, invert=True)
        for record in batch:
            assert query(record) != inverted(record)
        kept = list(query.filter(batch))
        dropped = list(inverted.filter(batch))
        assert len(kept) + len(dropped) == len(batch)

    @given(st.lists(records(), max_size=10))
    def test_grouping_preserves_order(self, batch) -> None:
        flattened = [record for group in group_records(batch) for record in group]
        assert flattened == batch
