# marc_toolkit/__init__.py

"""MARC Toolkit Package

A library and command-line tool for streaming MARC21 binary (ISO 2709)
records: reading and re-serializing, grouping holdings with their
bibliographic records, filtering with field queries, and diagnostics.
"""

# Local imports
# Reading and writing
from marc_toolkit.application.processing.reader import MarcReader
from marc_toolkit.application.processing.reader import read_records
from marc_toolkit.application.processing.writer import MarcWriter
from marc_toolkit.application.processing.writer import serialize_record

# Grouping, querying and diagnostics
from marc_toolkit.application.processing.diagnostics import DiagnosticsEngine
from marc_toolkit.application.processing.grouping import group_records
from marc_toolkit.application.processing.query import CompiledQuery
from marc_toolkit.application.processing.query import compile_query

# Data models
from marc_toolkit.application.models.run_stats import DiagnosticsSummary
from marc_toolkit.application.models.run_stats import ReadStatistics
from marc_toolkit.core.domain.enums import ReadMode
from marc_toolkit.core.domain.enums import Severity
from marc_toolkit.core.domain.errors import MarcToolkitError
from marc_toolkit.core.domain.errors import QuerySyntaxError
from marc_toolkit.core.domain.errors import StructuralError
from marc_toolkit.core.domain.finding import Finding
from marc_toolkit.core.domain.finding import RecordReport
from marc_toolkit.core.domain.group import RecordGroup
from marc_toolkit.core.domain.record import ControlField
from marc_toolkit.core.domain.record import DataField
from marc_toolkit.core.domain.record import Leader
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.domain.record import Subfield

# Configuration
from marc_toolkit.infrastructure.config import ConfigLoader
from marc_toolkit.infrastructure.config import RulesConfig

# Version info
__version__ = "0.1.0"

__all__: list[str] = [
    # Reading and writing
    "MarcReader",
    "MarcWriter",
    "read_records",
    "serialize_record",
    # Processing
    "CompiledQuery",
    "DiagnosticsEngine",
    "compile_query",
    "group_records",
    # Data models
    "ControlField",
    "DataField",
    "DiagnosticsSummary",
    "Finding",
    "Leader",
    "ReadMode",
    "ReadStatistics",
    "Record",
    "RecordGroup",
    "RecordReport",
    "Severity",
    "Subfield",
    # Errors
    "MarcToolkitError",
    "QuerySyntaxError",
    "StructuralError",
    # Configuration
    "ConfigLoader",
    "RulesConfig",
    # Version
    "__version__",
]
