# marc_toolkit/application/processing/diagnostics/_engine.py

"""Diagnostics engine: structural then semantic validation of a record stream"""

# Standard library imports
from logging import getLogger
from typing import Iterable
from typing import Iterator

# Local imports
from marc_toolkit.application.models.run_stats import DiagnosticsSummary
from marc_toolkit.application.processing.diagnostics._semantic import SemanticChecker
from marc_toolkit.application.processing.diagnostics._structural import StructuralChecker
from marc_toolkit.application.processing.reader import DEFAULT_CHUNK_SIZE
from marc_toolkit.application.processing.reader import DEFAULT_LENGTH_TOLERANCE
from marc_toolkit.application.processing.reader import iter_raw_records
from marc_toolkit.core.domain.enums import ReadMode
from marc_toolkit.core.domain.enums import StructuralErrorKind
from marc_toolkit.core.domain.errors import StructuralError
from marc_toolkit.core.domain.finding import Finding
from marc_toolkit.core.domain.finding import RecordReport
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.types.protocols import BinarySource
from marc_toolkit.infrastructure.config import RulesConfig

logger = getLogger(__name__)


class DiagnosticsEngine:
    """Produce one RecordReport per record of a stream

    Every record gets a structural pass; records that parse also get a
    semantic pass against the rule table. In lenient mode the run always
    reaches the end of the stream. In strict mode the first record with a
    structural error is reported and the run then aborts with
    StructuralError.

    Example:
        engine = DiagnosticsEngine(RulesConfig.load("rules.json"))
        for report in engine.run([("records.mrc", stream)]):
            ...
        print(engine.summary.errors)
    """

    def __init__(
        self,
        rules: RulesConfig | None = None,
        mode: ReadMode = ReadMode.LENIENT,
        length_tolerance: int = DEFAULT_LENGTH_TOLERANCE,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.mode = mode
        self.chunk_size = chunk_size
        self.structural = StructuralChecker(mode is ReadMode.STRICT, length_tolerance)
        self.semantic = SemanticChecker(rules)
        self.summary = DiagnosticsSummary()

    @property
    def strict(self) -> bool:
        return self.mode is ReadMode.STRICT

    def diagnose_raw(
        self,
        raw: bytes,
        position: int,
        source: str = "",
        terminated: bool = True,
    ) -> RecordReport:
        """Check one raw record

        Args:
            raw: Record bytes as split from the stream
            position: 1-based position in the source
            source: Source name for the report
            terminated: False when the stream ended inside the record

        Returns:
            Report with structural findings first, then semantic ones
        """
        record, findings = self.structural.check(raw, position, source, terminated)
        if record is None:
            return RecordReport(position, source, None, findings, skipped=True)
        findings.extend(self.semantic.check(record))
        return RecordReport(position, source, record.control_number, findings)

    def diagnose_record(self, record: Record) -> RecordReport:
        """Semantic-only check of an already parsed record"""
        return RecordReport(
            record.position or 0,
            record.source or "",
            record.control_number,
            self.semantic.check(record),
        )

    def run(self, sources: Iterable[tuple[str, BinarySource]]) -> Iterator[RecordReport]:
        """Diagnose every record of every source in order

        Raises:
            StructuralError: In strict mode, after yielding the report of the
                first record with a structural error
        """
        for name, stream in sources:
            logger.debug(f"Diagnosing MARC records from {name}")
            raw_records = iter_raw_records(stream, self.chunk_size)
            for position, (raw, terminated) in enumerate(raw_records, start=1):
                report = self.diagnose_raw(raw, position, name, terminated)
                self.summary.add_report(report)
                self._log_report(report)
                yield report

                if self.strict:
                    structural_error = self._first_structural_error(report)
                    if structural_error is not None:
                        self.summary.aborted = True
                        logger.error(f"Aborting diagnostics at {name}:{position}")
                        raise StructuralError(
                            StructuralErrorKind(structural_error.category),
                            structural_error.message,
                            position=position,
                            source=name,
                        )

    def _first_structural_error(self, report: RecordReport) -> Finding | None:
        structural_kinds = {kind.value for kind in StructuralErrorKind}
        for finding in report.errors:
            if finding.category in structural_kinds:
                return finding
        return None

    def _log_report(self, report: RecordReport) -> None:
        if report.skipped:
            logger.warning(f"{report.source}:{report.position}: record could not be parsed")
        elif report.findings:
            logger.debug(
                f"{report.source}:{report.position}: {len(report.errors)} error(s), "
                f"{len(report.warnings)} warning(s)"
            )
