# marc_toolkit/infrastructure/logging/_setup.py

"""Logging configuration and setup for CLI"""

# Standard library imports
from datetime import datetime
from logging import DEBUG
from logging import FileHandler
from logging import Formatter
from logging import INFO
from logging import StreamHandler
from logging import getLevelNamesMapping
from logging import getLogger
from os import makedirs
from os.path import exists
import sys


def get_default_log_path(command: str = "run") -> str:
    """Generate default log file path with timestamp"""
    log_dir = "logs"
    if not exists(log_dir):
        makedirs(log_dir)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{log_dir}/marc_toolkit_{command}_{timestamp}.log"


def set_up_logging(
    log_file: str | None = None,
    log_level: str = "WARNING",
    silent: bool = False,
    disable_file_logging: bool = True,
    command: str = "run",
) -> str | None:
    """Configure logging for the application

    Console output always goes to stderr; stdout is reserved for record data.

    Args:
        log_file: Path to log file (auto-generated if None and file logging enabled)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        silent: If True, suppress console output
        disable_file_logging: If True, disable file logging
        command: CLI command, used to name a generated log file

    Returns:
        Path to log file if file logging is enabled, None otherwise
    """
    level = getLevelNamesMapping().get(log_level.upper(), INFO)

    root_logger = getLogger()
    root_logger.setLevel(DEBUG if not disable_file_logging else level)

    # Clear any existing handlers
    root_logger.handlers = []

    console_formatter = Formatter("%(asctime)s - %(levelname)s - %(message)s")
    file_formatter = Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if not silent:
        console_handler = StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(console_formatter)
        root_logger.addHandler(console_handler)

    if not disable_file_logging:
        if log_file is None:
            log_file = get_default_log_path(command)

        file_handler = FileHandler(log_file)
        file_handler.setLevel(DEBUG)  # Always log debug to file
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

        logger = getLogger(__name__)
        logger.info(f"Logging to file: {log_file}")

        return log_file

    return None


def log_run_summary(
    command: str,
    log_file: str | None,
    start_time: float,
    end_time: float,
    records_read: int,
    records_skipped: int,
    warnings: int = 0,
    records_written: int | None = None,
    errors: int | None = None,
    mode: str = "lenient",
) -> None:
    """Log final run summary with statistics

    Args:
        command: CLI command that ran
        log_file: Path to log file (if any)
        start_time: Processing start time
        end_time: Processing end time
        records_read: Records parsed
        records_skipped: Records dropped as unparseable
        warnings: Structural warnings tolerated
        records_written: Records written by filtering commands
        errors: Error findings from diagnostics
        mode: Read mode used
    """
    logger = getLogger(__name__)

    processing_time = end_time - start_time
    minutes = int(processing_time // 60)
    seconds = int(processing_time % 60)
    total = records_read + records_skipped
    records_per_second = total / processing_time if processing_time > 0 else 0

    summary_lines = ["\n" + "=" * 80, f"{command.upper()} COMPLETE", "=" * 80]
    summary_lines.extend(
        [
            f"Records seen: {total:,}",
            f"Records parsed: {records_read:,}",
            f"Records skipped (malformed): {records_skipped:,}",
            f"Structural warnings: {warnings:,}",
        ]
    )
    if records_written is not None:
        summary_lines.append(f"Records written: {records_written:,}")
    if errors is not None:
        summary_lines.append(f"Error findings: {errors:,}")

    summary_lines.extend(
        [
            f"Processing time: {minutes}m {seconds}s",
            f"Processing rate: {records_per_second:.0f} records/second",
            f"Read mode: {mode}",
        ]
    )
    if log_file:
        summary_lines.append(f"Log: {log_file}")
    summary_lines.append("=" * 80)

    logger.info("\n".join(summary_lines))
