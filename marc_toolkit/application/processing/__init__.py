# marc_toolkit/application/processing/__init__.py

"""Record reading, writing, grouping, filtering and diagnostics"""

# Local imports
from marc_toolkit.application.processing.diagnostics import DiagnosticsEngine
from marc_toolkit.application.processing.grouping import classify_by_field
from marc_toolkit.application.processing.grouping import classify_by_leader
from marc_toolkit.application.processing.grouping import group_records
from marc_toolkit.application.processing.query import CompiledQuery
from marc_toolkit.application.processing.query import compile_query
from marc_toolkit.application.processing.reader import MarcReader
from marc_toolkit.application.processing.reader import RecordParser
from marc_toolkit.application.processing.reader import read_records
from marc_toolkit.application.processing.text_format import format_record
from marc_toolkit.application.processing.writer import MarcWriter
from marc_toolkit.application.processing.writer import serialize_record

__all__: list[str] = [
    "CompiledQuery",
    "DiagnosticsEngine",
    "MarcReader",
    "MarcWriter",
    "RecordParser",
    "classify_by_field",
    "classify_by_leader",
    "compile_query",
    "format_record",
    "group_records",
    "read_records",
    "serialize_record",
]
