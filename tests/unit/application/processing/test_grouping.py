# tests/unit/application/processing/test_grouping.py

"""Tests for grouping holdings records with their bibliographic record"""

# Local imports
from marc_toolkit.application.processing.grouping import classify_by_field
from marc_toolkit.application.processing.grouping import classify_by_leader
from marc_toolkit.application.processing.grouping import classify_by_query
from marc_toolkit.application.processing.grouping import group_records
from marc_toolkit.application.processing.query import compile_query
from marc_toolkit.core.domain.enums import RecordRole
from marc_toolkit.core.domain.group import RecordGroup
from tests.fixtures.records import RecordBuilder
from tests.fixtures.records import data_field


class TestClassifiers:
    def test_leader_classifier(self):
        assert classify_by_leader(RecordBuilder.bibliographic()) is RecordRole.PRIMARY
        assert classify_by_leader(RecordBuilder.holdings()) is RecordRole.SECONDARY

    def test_field_classifier(self):
        classify = classify_by_field("852")
        bib_with_852 = RecordBuilder.bibliographic(extra_fields=[data_field("852", b="MAIN")])
        assert classify(bib_with_852) is RecordRole.SECONDARY
        assert classify(RecordBuilder.bibliographic()) is RecordRole.PRIMARY

    def test_query_classifier(self):
        classify = classify_by_query(compile_query("+004"))
        assert classify(RecordBuilder.holdings()) is RecordRole.SECONDARY
        assert classify(RecordBuilder.bibliographic()) is RecordRole.PRIMARY


class TestGroupRecords:
    def test_primary_secondary_secondary_primary(self):
        p1 = RecordBuilder.bibliographic("p1")
        s1 = RecordBuilder.holdings("s1")
        s2 = RecordBuilder.holdings("s2")
        p2 = RecordBuilder.bibliographic("p2")

        groups = list(group_records([p1, s1, s2, p2]))

        assert groups == [RecordGroup(p1, [s1, s2]), RecordGroup(p2, [])]

    def test_orphans_before_first_primary(self):
        s1 = RecordBuilder.holdings("s1")
        s2 = RecordBuilder.holdings("s2")
        p1 = RecordBuilder.bibliographic("p1")
        s3 = RecordBuilder.holdings("s3")

        groups = list(group_records([s1, s2, p1, s3]))

        assert groups == [
            RecordGroup(s1, orphan=True),
            RecordGroup(s2, orphan=True),
            RecordGroup(p1, [s3]),
        ]

    def test_order_preserved_when_flattened(self):
        records = [
            RecordBuilder.holdings("s0"),
            RecordBuilder.bibliographic("p1"),
            RecordBuilder.holdings("s1"),
            RecordBuilder.bibliographic("p2"),
            RecordBuilder.bibliographic("p3"),
            RecordBuilder.holdings("s3"),
        ]
        flattened = [r for group in group_records(records) for r in group]
        assert flattened == records

    def test_empty_stream(self):
        assert list(group_records([])) == []

    def test_lazy(self):
        consumed = []

        def stream():
            for name in ("p1", "p2", "p3"):
                consumed.append(name)
                yield RecordBuilder.bibliographic(name)

        first = next(group_records(stream()))
        assert first.primary.control_number == "p1"
        assert consumed == ["p1", "p2"]
