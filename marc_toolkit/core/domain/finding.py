# marc_toolkit/core/domain/finding.py

"""Diagnostics findings and per-record reports"""

# Standard library imports
from dataclasses import dataclass
from dataclasses import field

# Local imports
from marc_toolkit.core.domain.enums import Severity
from marc_toolkit.core.types.json import JSONDict


@dataclass(slots=True)
class Finding:
    """A reportable fact about one record

    category is either a structural error kind value (e.g. "length_mismatch")
    or a semantic rule name (e.g. "required_field").
    """

    severity: Severity
    category: str
    message: str
    tag: str = ""

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def escalated(self) -> "Finding":
        """Copy of this finding with ERROR severity"""
        return Finding(Severity.ERROR, self.category, self.message, self.tag)

    def to_dict(self) -> JSONDict:
        return {
            "severity": self.severity.value,
            "category": self.category,
            "tag": self.tag,
            "message": self.message,
        }


@dataclass(slots=True)
class RecordReport:
    """All findings for one record of a stream"""

    position: int
    source: str = ""
    control_number: str | None = None
    findings: list[Finding] = field(default_factory=list)
    skipped: bool = False

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return any(f.severity is Severity.ERROR for f in self.findings)

    def to_dict(self) -> JSONDict:
        return {
            "position": self.position,
            "source": self.source,
            "control_number": self.control_number,
            "skipped": self.skipped,
            "findings": [f.to_dict() for f in self.findings],
        }
