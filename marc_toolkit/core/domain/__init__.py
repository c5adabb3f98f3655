# marc_toolkit/core/domain/__init__.py

"""Core domain models"""

# Local imports
from marc_toolkit.core.domain.enums import QueryErrorKind
from marc_toolkit.core.domain.enums import ReadMode
from marc_toolkit.core.domain.enums import RecordCategory
from marc_toolkit.core.domain.enums import RecordRole
from marc_toolkit.core.domain.enums import Severity
from marc_toolkit.core.domain.enums import StructuralErrorKind
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

__all__ = [
    "ControlField",
    "DataField",
    "Finding",
    "Leader",
    "MarcToolkitError",
    "QueryErrorKind",
    "QuerySyntaxError",
    "ReadMode",
    "Record",
    "RecordCategory",
    "RecordGroup",
    "RecordReport",
    "RecordRole",
    "Severity",
    "StructuralError",
    "StructuralErrorKind",
    "Subfield",
]
