# marc_toolkit/adapters/cli/main.py

"""
MARC Toolkit - CLI Main Module

Command-line interface for counting, filtering, viewing and validating
MARC21 binary record streams.

Exit status: 0 on success, 1 when diagnostics found errors, 2 when the run
could not complete (bad query, unreadable input, strict-mode abort).
"""

# Standard library imports
from argparse import Namespace
from contextlib import ExitStack
from logging import getLogger
import sys
from time import time
from typing import Iterable
from typing import Iterator

# Local imports
from marc_toolkit.adapters.cli.parser import create_argument_parser
from marc_toolkit.adapters.exporters.json_exporter import JSONReportWriter
from marc_toolkit.application.models.run_stats import ReadStatistics
from marc_toolkit.application.processing.diagnostics import DiagnosticsEngine
from marc_toolkit.application.processing.grouping import classify_by_field
from marc_toolkit.application.processing.grouping import classify_by_leader
from marc_toolkit.application.processing.grouping import group_records
from marc_toolkit.application.processing.query import compile_query
from marc_toolkit.application.processing.reader import read_records
from marc_toolkit.application.processing.text_format import format_record
from marc_toolkit.application.processing.writer import MarcWriter
from marc_toolkit.core.domain.enums import ReadMode
from marc_toolkit.core.domain.errors import QuerySyntaxError
from marc_toolkit.core.domain.errors import StructuralError
from marc_toolkit.core.domain.finding import RecordReport
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.types.protocols import RecordClassifier
from marc_toolkit.infrastructure.config import ConfigLoader
from marc_toolkit.infrastructure.config import RulesConfig
from marc_toolkit.infrastructure.logging import ProgressBarManager
from marc_toolkit.infrastructure.logging import log_run_summary
from marc_toolkit.infrastructure.logging import setup_logging
from marc_toolkit.infrastructure.sources import iter_sources

logger = getLogger(__name__)

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_FAILURE = 2


def _log_level(args: Namespace, config: ConfigLoader) -> str:
    if args.verbose >= 2 or config.logging.debug:
        return "DEBUG"
    if args.verbose == 1:
        return "INFO"
    return "WARNING"


def _read_mode(args: Namespace, config: ConfigLoader) -> ReadMode:
    return ReadMode.STRICT if args.strict else config.read_mode


def _classifier(config: ConfigLoader) -> RecordClassifier:
    if config.grouping.holdings_by == "field":
        return classify_by_field(config.grouping.holdings_tag)
    return classify_by_leader


def _input_paths(paths: list[str], config: ConfigLoader) -> list[str]:
    return paths or config.sources.inputs


def _records(
    paths: list[str], mode: ReadMode, config: ConfigLoader, statistics: ReadStatistics
) -> Iterator[Record]:
    return read_records(
        iter_sources(_input_paths(paths, config)),
        mode=mode,
        length_tolerance=config.reader.length_tolerance,
        chunk_size=config.reader.chunk_size,
        statistics=statistics,
    )


def run_count(
    args: Namespace, config: ConfigLoader, statistics: ReadStatistics, progress: ProgressBarManager
) -> int:
    """Print the number of records, or of groups with --groups"""
    records = progress.track(
        _records(args.files, _read_mode(args, config), config, statistics),
        "count",
        "Counting records",
    )
    if args.groups:
        total = sum(1 for _ in group_records(records, _classifier(config)))
    else:
        total = sum(1 for _ in records)
    print(total)
    return EXIT_OK


def run_view(args: Namespace, config: ConfigLoader, statistics: ReadStatistics) -> int:
    """Print every record as mnemonic text, separated by blank lines"""
    for record in _records(args.files, _read_mode(args, config), config, statistics):
        print(format_record(record, config.decoder))
    return EXIT_OK


def run_filter(args: Namespace, config: ConfigLoader, statistics: ReadStatistics) -> int:
    """Write matching records (or groups) as a MARC21 stream"""
    # Compile first so a bad query never opens any input
    query = compile_query(args.terms, any_match=args.any, invert=args.invert, decoder=config.decoder)
    logger.info(f"Filtering with {query!r}")

    with ExitStack() as stack:
        if args.output:
            sink = stack.enter_context(open(args.output, "wb"))
        else:
            sink = sys.stdout.buffer
        writer = MarcWriter(sink)

        records = _records(args.input, _read_mode(args, config), config, statistics)
        if args.groups:
            for group in query.filter_groups(group_records(records, _classifier(config))):
                writer.write_group(group)
        else:
            for record in query.filter(records):
                writer.write(record)
        writer.flush()

    args.records_written = writer.records_written
    return EXIT_OK


def _format_finding_lines(report: RecordReport) -> Iterable[str]:
    label = report.control_number or "-"
    for finding in report.findings:
        tag = f" [{finding.tag}]" if finding.tag else ""
        yield (
            f"{report.source}:{report.position}: {label}: {finding.severity.value}: "
            f"{finding.category}{tag}: {finding.message}"
        )


def run_diag(
    args: Namespace, config: ConfigLoader, statistics: ReadStatistics, progress: ProgressBarManager
) -> int:
    """Print one line per finding and the summary; optionally save a JSON report"""
    rules = RulesConfig.load(args.rules) if args.rules else config.rules
    mode = _read_mode(args, config)
    engine = DiagnosticsEngine(
        rules,
        mode=mode,
        length_tolerance=config.reader.length_tolerance,
        chunk_size=config.reader.chunk_size,
    )

    # Reports are spooled to disk as they arrive
    report_writer = None
    if args.report_json:
        report_writer = JSONReportWriter(
            args.report_json, pretty=config.output.pretty_json, compress=config.output.compress
        )

    status = EXIT_OK
    try:
        sources = iter_sources(_input_paths(args.files, config))
        for report in progress.track(engine.run(sources), "diag", "Checking records"):
            for line in _format_finding_lines(report):
                print(line)
            if report_writer is not None:
                report_writer.add(report)
    except StructuralError as e:
        logger.error(f"Strict mode: {e}")
        status = EXIT_FAILURE

    summary = engine.summary
    print(
        f"records: {summary.records_read}, ok: {summary.records_ok}, "
        f"with errors: {summary.records_with_errors}, "
        f"with warnings: {summary.records_with_warnings}, skipped: {summary.records_skipped}"
    )
    print(f"errors: {summary.errors}, warnings: {summary.warnings}")
    for category, count in sorted(summary.by_category.items()):
        print(f"  {category}: {count}")

    if report_writer is not None:
        output_path = report_writer.close(
            summary,
            parameters={"mode": mode.value, "files": " ".join(args.files) or "-"},
        )
        logger.info(f"Report saved to {output_path}")

    # Report counts for the run summary
    statistics.records_read = summary.records_read - summary.records_skipped
    statistics.records_skipped = summary.records_skipped
    statistics.warnings = summary.warnings
    args.errors = summary.errors

    if status == EXIT_OK and summary.has_errors:
        status = EXIT_FINDINGS
    return status


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point"""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    config = ConfigLoader(args.config)

    log_file_path = setup_logging(
        log_file=args.log_file,
        log_level=_log_level(args, config),
        silent=args.silent,
        disable_file_logging=args.log_file is None,
        command=args.command,
    )

    start_time = time()
    statistics = ReadStatistics()
    progress = ProgressBarManager(enabled=args.progress and not args.silent)
    args.records_written = None
    args.errors = None

    try:
        with progress.running():
            if args.command == "count":
                status = run_count(args, config, statistics, progress)
            elif args.command == "diag":
                status = run_diag(args, config, statistics, progress)
            elif args.command == "filter":
                status = run_filter(args, config, statistics)
            else:
                status = run_view(args, config, statistics)
    except QuerySyntaxError as e:
        logger.error(f"Invalid query: {e}")
        return EXIT_FAILURE
    except StructuralError as e:
        logger.error(f"Malformed record in strict mode: {e}")
        return EXIT_FAILURE
    except OSError as e:
        logger.error(f"Cannot read or write: {e}")
        return EXIT_FAILURE

    log_run_summary(
        command=args.command,
        log_file=log_file_path,
        start_time=start_time,
        end_time=time(),
        records_read=statistics.records_read,
        records_skipped=statistics.records_skipped,
        warnings=statistics.warnings,
        records_written=args.records_written,
        errors=args.errors,
        mode=_read_mode(args, config).value,
    )
    return status


if __name__ == "__main__":
    sys.exit(main())
