# tests/unit/application/processing/test_text_format.py

"""Tests for the mnemonic text dump"""

# Local imports
from marc_toolkit.application.processing.text_format import format_field
from marc_toolkit.application.processing.text_format import format_record
from marc_toolkit.core.domain.record import ControlField
from tests.fixtures.records import RecordBuilder
from tests.fixtures.records import data_field


def test_data_field_line():
    field = data_field("245", "10", a="Summerland /", c="Michael Chabon.")
    assert format_field(field) == "=245  10$aSummerland /$cMichael Chabon."


def test_blank_indicators_as_backslash():
    assert format_field(data_field("500", "  ", a="Note")) == "=500  \\\\$aNote"


def test_control_field_blanks_as_backslash():
    assert format_field(ControlField("007", "ta ")) == "=007  ta\\"


def test_record_starts_with_leader():
    text = format_record(RecordBuilder.bibliographic(title="Title"))
    lines = text.splitlines()
    assert lines[0] == "=LDR  00000nam a2200000 a 4500"
    assert lines[1] == "=001  bib001"
    assert lines[-1] == "=245  10$aTitle"
    assert text.endswith("\n")
