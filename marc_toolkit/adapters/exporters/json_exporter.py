# marc_toolkit/adapters/exporters/json_exporter.py

"""JSON export of diagnostics reports"""

# Standard library imports
from datetime import datetime
import gzip
import json
from tempfile import TemporaryFile
from typing import Iterable
from typing import TextIO
from typing import cast

# Local imports
from marc_toolkit import __version__
from marc_toolkit.application.models.run_stats import DiagnosticsSummary
from marc_toolkit.core.domain.finding import RecordReport
from marc_toolkit.core.types.json import JSONDict

type ReportParameters = dict[str, str | int | float | bool]


class JSONReportWriter:
    """Write a diagnostics report as records arrive

    Records are spooled to a temporary file, one JSON document per line, so
    memory use does not grow with the input. close() writes the final file
    with the metadata block first, once the run summary is known.

    Example:
        writer = JSONReportWriter("report.json")
        for report in engine.run(sources):
            writer.add(report)
        writer.close(engine.summary)
    """

    def __init__(
        self,
        json_file: str,
        pretty: bool = True,
        compress: bool = False,
        include_clean: bool = False,
    ) -> None:
        """Initialize the writer

        Args:
            json_file: Output filename
            pretty: If True, format JSON with indentation (default).
            compress: If True, use gzip compression and append .gz to the name.
            include_clean: If True, also list records without findings.
        """
        self.output_path = json_file if not compress else f"{json_file}.gz"
        self.pretty = pretty
        self.compress = compress
        self.include_clean = include_clean
        self.records_written = 0
        self._spool = TemporaryFile("w+", encoding="utf-8")

    def add(self, report: RecordReport) -> None:
        if not (self.include_clean or report.findings):
            return
        self._spool.write(json.dumps(report.to_dict(), ensure_ascii=False, default=str))
        self._spool.write("\n")
        self.records_written += 1

    def close(
        self, summary: DiagnosticsSummary, parameters: ReportParameters | None = None
    ) -> str:
        """Write the report file and drop the spool

        Returns:
            Path of the file written
        """
        try:
            if self.compress:
                output = gzip.open(self.output_path, "wt", encoding="utf-8")
            else:
                output = open(self.output_path, "w", encoding="utf-8")
            with output:
                self._write_document(output, _create_metadata(summary, parameters))
        finally:
            self._spool.close()
        return self.output_path

    def _write_document(self, output: TextIO, metadata: JSONDict) -> None:
        indent = 2 if self.pretty else None
        newline = "\n" if self.pretty else ""
        pad = "  " if self.pretty else ""

        metadata_text = json.dumps(metadata, indent=indent, ensure_ascii=False, default=str)
        output.write("{" + newline)
        output.write(f'{pad}"metadata": {_indent(metadata_text, pad)},{newline}')
        output.write(f'{pad}"records": [')

        self._spool.seek(0)
        for count, line in enumerate(self._spool):
            record_text = line.rstrip("\n")
            if self.pretty:
                record = json.loads(record_text)
                record_text = json.dumps(record, indent=indent, ensure_ascii=False)
            separator = "," if count else ""
            output.write(f"{separator}{newline}{pad * 2}{_indent(record_text, pad * 2)}")

        if self.records_written:
            output.write(f"{newline}{pad}")
        output.write("]" + newline + "}" + newline)


def _indent(text: str, pad: str) -> str:
    return text.replace("\n", "\n" + pad) if pad else text


def save_report_json(
    reports: Iterable[RecordReport],
    summary: DiagnosticsSummary,
    json_file: str,
    pretty: bool = True,
    compress: bool = False,
    parameters: ReportParameters | None = None,
    include_clean: bool = False,
) -> str:
    """Save diagnostics results to a JSON file

    Args:
        reports: Per-record reports in stream order
        summary: Summary of the run that produced the reports
        json_file: Output filename
        pretty: If True, format JSON with indentation (default).
        compress: If True, use gzip compression and append .gz to the name.
        parameters: Run parameters (for metadata).
        include_clean: If True, also list records without findings.

    Returns:
        Path of the file written
    """
    writer = JSONReportWriter(
        json_file, pretty=pretty, compress=compress, include_clean=include_clean
    )
    for report in reports:
        writer.add(report)
    return writer.close(summary, parameters=parameters)


def _create_metadata(
    summary: DiagnosticsSummary, parameters: ReportParameters | None = None
) -> JSONDict:
    """Create the metadata section for JSON output"""
    metadata = {
        "processing_date": datetime.now().isoformat(),
        "tool_version": __version__,
        "summary": summary.to_dict(),
    }

    if parameters:
        metadata["parameters"] = parameters

    return cast(JSONDict, metadata)
