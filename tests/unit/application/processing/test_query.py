# tests/unit/application/processing/test_query.py

"""Tests for compiling and evaluating field queries"""

# Third party imports
import pytest

# Local imports
from marc_toolkit.application.processing.query import ContentTerm
from marc_toolkit.application.processing.query import CountTerm
from marc_toolkit.application.processing.query import IndicatorTerm
from marc_toolkit.application.processing.query import PositionTerm
from marc_toolkit.application.processing.query import PresenceTerm
from marc_toolkit.application.processing.query import compile_query
from marc_toolkit.application.processing.query import parse_term
from marc_toolkit.core.domain.enums import QueryErrorKind
from marc_toolkit.core.domain.errors import QuerySyntaxError
from marc_toolkit.core.domain.record import Record
from tests.fixtures.records import RecordBuilder
from tests.fixtures.records import data_field


@pytest.fixture
def record() -> Record:
    return RecordBuilder.bibliographic(
        title="The cat in the hat",
        extra_fields=[
            data_field("020", a="123"),
            data_field("500", "  ", a="A note"),
            data_field("650", " 0", a="Cats", x="Juvenile fiction"),
            data_field("650", " 0", a="Hats"),
        ],
    )


@pytest.fixture
def no_title() -> Record:
    return RecordBuilder.bibliographic(title=None)


def matches(terms, record, **kwargs) -> bool:
    return compile_query(terms, **kwargs)(record)


class TestParseTerm:
    """Test that each term form compiles to the right term type"""

    @pytest.mark.parametrize(
        "term,term_type",
        [
            ("+245", PresenceTerm),
            ("-245a", PresenceTerm),
            ("#245 > 1", CountTerm),
            ("#(*) >= 3", CountTerm),
            ("245a = Title", ContentTerm),
            ("245 ~ ^The", ContentTerm),
            ("245:1 = 1", IndicatorTerm),
            ("008/35-37 = eng", PositionTerm),
            ("LDR/06 = a", PositionTerm),
        ],
    )
    def test_term_types(self, term, term_type):
        assert isinstance(parse_term(term), term_type)

    def test_count_without_spaces(self):
        assert parse_term("#245>1") == CountTerm("245", None, ">", 1)

    def test_longest_valid_operator_without_spaces(self):
        term = parse_term("245~=x")
        assert term.op == "~"
        assert term.value == "=x"
        assert parse_term("245a<=x").op == "<="
        assert parse_term("245:1=#").value == " "

    def test_operator_run_with_spaces(self):
        term = parse_term("245 ~= x")
        assert (term.op, term.value) == ("~", "= x")

    def test_quoted_value(self):
        term = parse_term("245a = 'The cat'")
        assert term.value == "The cat"

    def test_blank_indicator_aliases(self):
        assert parse_term("245:2 = #").value == " "
        assert parse_term("245:2 = _").value == " "


class TestSyntaxErrors:
    """Compile-time errors are raised before any record is seen"""

    @pytest.mark.parametrize(
        "term,kind",
        [
            ("+24", QueryErrorKind.UNKNOWN_TAG),
            ("+LDR", QueryErrorKind.UNKNOWN_TAG),
            ("245/0 = x", QueryErrorKind.UNKNOWN_TAG),
            ("#245", QueryErrorKind.BAD_OPERATOR),
            ("#245 ~ 2", QueryErrorKind.BAD_OPERATOR),
            ("245a !! x", QueryErrorKind.BAD_OPERATOR),
            ("245:1 > 1", QueryErrorKind.BAD_OPERATOR),
            ("245a ~ [", QueryErrorKind.BAD_REGEX),
            ("#245 > many", QueryErrorKind.MALFORMED_TERM),
            ("245:3 = 1", QueryErrorKind.MALFORMED_TERM),
            ("+245ab", QueryErrorKind.MALFORMED_TERM),
            ("008/9-3 = x", QueryErrorKind.MALFORMED_TERM),
            ("245", QueryErrorKind.MALFORMED_TERM),
        ],
    )
    def test_error_kinds(self, term, kind):
        with pytest.raises(QuerySyntaxError) as exc_info:
            compile_query(term)
        assert exc_info.value.kind is kind
        assert exc_info.value.term == term

    def test_empty_query(self):
        with pytest.raises(QuerySyntaxError) as exc_info:
            compile_query([])
        assert exc_info.value.kind is QueryErrorKind.EMPTY_QUERY

    def test_blank_terms_are_empty(self):
        with pytest.raises(QuerySyntaxError):
            compile_query(["  ", ""])


class TestPresence:
    def test_field_presence(self, record, no_title):
        assert matches("+245", record)
        assert not matches("+245", no_title)

    def test_field_absence(self, record, no_title):
        assert not matches("-245", record)
        assert matches("-245", no_title)

    def test_subfield_presence(self, record):
        assert matches("+650x", record)
        assert not matches("+650z", record)
        assert matches("-245c", record)

    def test_wildcard_tag(self, record):
        assert matches("+6..", record)
        assert not matches("+7..", record)

    def test_invert_is_complement(self, record, no_title):
        records = [record, no_title, RecordBuilder.holdings()]
        query = compile_query("+245")
        inverted = compile_query("+245", invert=True)
        assert list(query.filter(records)) == [record]
        assert list(inverted.filter(records)) == records[1:]


class TestCounts:
    def test_two_245_match_greater_than_one(self, record):
        record.add_field(data_field("245", "00", a="Second title"))
        assert matches("#245 > 1", record)

    def test_single_245_does_not_match(self, record):
        assert not matches("#245 > 1", record)

    def test_absent_field_counts_zero(self, no_title):
        assert matches("#245 = 0", no_title)

    def test_subfield_count(self, record):
        assert matches("#650a = 2", record)
        assert matches("#650x < 2", record)

    def test_all_fields(self, record):
        # 001, 008, 245, 020, 500, 650, 650
        assert matches("#(*) = 7", record)
        assert not matches("#(*) > 7", record)


class TestContent:
    def test_equality_on_subfield(self, record):
        assert matches("245a = The cat in the hat", record)
        assert not matches("245a = The cat", record)

    def test_regex_on_field_text(self, record):
        assert matches("245 ~ ^The cat", record)
        assert matches("650 ~ fiction$", record)
        assert not matches("650a ~ ^Dogs", record)

    def test_any_occurrence(self, record):
        assert matches("650a = Hats", record)

    def test_numeric_ordering(self, record):
        assert matches("020a > 100", record)
        assert matches("020a < 1000", record)
        assert not matches("020a >= 124", record)

    def test_string_ordering(self, record):
        assert matches("650a < D", record)

    def test_regex_value_starting_with_operator_character(self):
        record = RecordBuilder.bibliographic(extra_fields=[data_field("500", a="a=x")])
        assert matches("500~=x", record)
        assert matches("500 ~ =x", record)
        assert not matches("500~=y", record)

    def test_missing_field_is_false(self, no_title):
        assert not matches("245a ~ .", no_title)

    def test_custom_decoder(self):
        record = RecordBuilder.bibliographic(extra_fields=[data_field("500")])
        record.get_field("500").add_subfield("a", b"caf\xe9")
        query = compile_query("500a = café", decoder=lambda data: data.decode("latin-1"))
        assert query(record)


class TestIndicatorsAndPositions:
    def test_indicator_values(self, record):
        assert matches("245:1 = 1", record)
        assert matches("245:2 = 0", record)
        assert matches("500:1 = #", record)
        assert matches("650:2 ~ [0-7]", record)
        assert not matches("245:1 = 0", record)

    def test_control_field_positions(self, record):
        assert matches("008/35-37 = eng", record)
        assert matches("008/07-10 >= 1900", record)
        assert not matches("008/35-37 = fre", record)

    def test_leader_positions(self, record):
        assert matches("LDR/06 = a", record)
        assert matches("LDR/06-07 = am", record)
        assert matches("LDR/06 = x", RecordBuilder.holdings())


class TestCombination:
    def test_terms_and_by_default(self, record):
        assert matches(["+245", "+650"], record)
        assert not matches(["+245", "+999"], record)

    def test_any_match_ors_terms(self, record):
        assert matches(["+999", "+245"], record, any_match=True)
        assert not matches(["+998", "+999"], record, any_match=True)

    def test_invert_negates_whole_result(self, record):
        assert not matches(["+245", "+650"], record, invert=True)
        assert matches(["+245", "+999"], record, invert=True)

    def test_single_string_term(self, record):
        assert compile_query("+245").source_terms == ["+245"]

    def test_repr(self):
        assert repr(compile_query(["+245", "+650"], invert=True)) == (
            "CompiledQuery(NOT (+245 AND +650))"
        )

    def test_filter_groups_on_primary(self):
        # Local imports
        from marc_toolkit.application.processing.grouping import group_records

        records = [
            RecordBuilder.bibliographic("p1", title="Wanted"),
            RecordBuilder.holdings("h1"),
            RecordBuilder.bibliographic("p2", title="Other"),
            RecordBuilder.holdings("h2"),
        ]
        groups = list(compile_query("245a = Wanted").filter_groups(group_records(records)))
        assert len(groups) == 1
        assert [r.control_number for r in groups[0]] == ["p1", "h1"]
