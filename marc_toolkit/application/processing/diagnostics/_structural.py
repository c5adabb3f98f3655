# marc_toolkit/application/processing/diagnostics/_structural.py

"""Structural pass: leader, directory and terminator checks as findings"""

# Local imports
from marc_toolkit.application.processing.reader import DEFAULT_LENGTH_TOLERANCE
from marc_toolkit.application.processing.reader import RecordParser
from marc_toolkit.core.domain.enums import ReadMode
from marc_toolkit.core.domain.enums import Severity
from marc_toolkit.core.domain.errors import StructuralError
from marc_toolkit.core.domain.finding import Finding
from marc_toolkit.core.domain.record import Record


class StructuralChecker:
    """Validate raw records, reporting problems instead of raising

    The record is always parsed leniently so that every deviation is
    collected, not only the first. In strict mode the tolerated deviations
    are then escalated to errors.
    """

    def __init__(self, strict: bool = False, length_tolerance: int = DEFAULT_LENGTH_TOLERANCE):
        self.strict = strict
        self.parser = RecordParser(ReadMode.LENIENT, length_tolerance)

    def check(
        self,
        raw: bytes,
        position: int | None = None,
        source: str | None = None,
        terminated: bool = True,
    ) -> tuple[Record | None, list[Finding]]:
        """Return the parsed record (None if unparseable) and structural findings"""
        try:
            record, findings = self.parser.parse(raw, position, source, terminated)
        except StructuralError as e:
            return None, [Finding(Severity.ERROR, e.kind.value, e.message)]

        if self.strict:
            findings = [finding.escalated() for finding in findings]
        return record, findings
