# marc_toolkit/application/models/run_stats.py

"""Pydantic models for streaming run statistics"""

# Third party imports
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

# Local imports
from marc_toolkit.core.domain.finding import RecordReport


class ReadStatistics(BaseModel):
    """Counters kept by the record reader across one or more sources"""

    model_config = ConfigDict()

    sources: int = Field(0, description="Number of sources opened")
    records_read: int = Field(0, description="Records parsed and yielded")
    records_skipped: int = Field(0, description="Records dropped because they could not be parsed")
    warnings: int = Field(0, description="Structural deviations tolerated in lenient mode")
    bytes_read: int = Field(0, description="Bytes of record data consumed")

    @property
    def records_seen(self) -> int:
        return self.records_read + self.records_skipped

    def increment(self, field: str, value: int = 1) -> None:
        """Increment a statistic field

        Args:
            field: Field name to increment
            value: Amount to increment by
        """
        if hasattr(self, field):
            current = getattr(self, field)
            setattr(self, field, current + value)

    def to_dict(self) -> dict:
        return self.model_dump()


class DiagnosticsSummary(BaseModel):
    """End-of-run summary of a diagnostics pass"""

    model_config = ConfigDict()

    records_read: int = Field(0, description="Records examined, including skipped ones")
    records_ok: int = Field(0, description="Records without any finding")
    records_with_errors: int = Field(0, description="Records with at least one error")
    records_with_warnings: int = Field(0, description="Records with warnings but no errors")
    records_skipped: int = Field(0, description="Records that could not be parsed")
    errors: int = Field(0, description="Total error findings")
    warnings: int = Field(0, description="Total warning findings")
    by_category: dict[str, int] = Field(default_factory=dict, description="Findings per category")
    aborted: bool = Field(False, description="Run stopped early on a strict-mode error")

    def add_report(self, report: RecordReport) -> None:
        """Fold one record's findings into the summary"""
        self.records_read += 1
        if report.skipped:
            self.records_skipped += 1

        errors = len(report.errors)
        warnings = len(report.warnings)
        self.errors += errors
        self.warnings += warnings
        if errors:
            self.records_with_errors += 1
        elif warnings:
            self.records_with_warnings += 1
        else:
            self.records_ok += 1

        for finding in report.findings:
            self.by_category[finding.category] = self.by_category.get(finding.category, 0) + 1

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    def to_dict(self) -> dict:
        return self.model_dump()
