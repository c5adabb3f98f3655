# marc_toolkit/core/domain/enums.py

"""Domain enumerations for the MARC toolkit"""

# Standard library imports
from enum import Enum


class ReadMode(Enum):
    """How the reader treats structural deviations"""

    STRICT = "strict"  # Any deviation is an error
    LENIENT = "lenient"  # Small deviations are warnings, bad records are skipped


class StructuralErrorKind(Enum):
    """Categories of malformed binary layout"""

    BAD_LEADER = "bad_leader"
    BAD_DIRECTORY = "bad_directory"
    LENGTH_MISMATCH = "length_mismatch"
    MISSING_TERMINATOR = "missing_terminator"
    BAD_FIELD = "bad_field"


class QueryErrorKind(Enum):
    """Categories of query compile errors"""

    UNKNOWN_TAG = "unknown_tag"
    BAD_OPERATOR = "bad_operator"
    BAD_REGEX = "bad_regex"
    MALFORMED_TERM = "malformed_term"
    EMPTY_QUERY = "empty_query"


class Severity(Enum):
    """Severity of a diagnostics finding"""

    ERROR = "error"
    WARNING = "warning"


class RecordRole(Enum):
    """Role of a record within a group"""

    PRIMARY = "primary"  # Bibliographic record heading a group
    SECONDARY = "secondary"  # Holdings record trailing a bibliographic record


class RecordCategory(Enum):
    """Broad record category derived from leader/06

    Each category has its own semantic rule set.
    """

    BIBLIOGRAPHIC = "bibliographic"
    HOLDINGS = "holdings"
    AUTHORITY = "authority"
    CLASSIFICATION = "classification"
    COMMUNITY = "community"
    UNKNOWN = "unknown"

    @classmethod
    def from_record_type(cls, record_type: str) -> "RecordCategory":
        """Map a leader/06 type of record code to its category"""
        if len(record_type) == 1 and record_type in "acdefgijkmoprt":
            return cls.BIBLIOGRAPHIC
        if record_type in ("u", "v", "x", "y"):
            return cls.HOLDINGS
        if record_type == "z":
            return cls.AUTHORITY
        if record_type == "w":
            return cls.CLASSIFICATION
        if record_type == "q":
            return cls.COMMUNITY
        return cls.UNKNOWN
