# marc_toolkit/adapters/cli/parser.py

"""Command-line argument parser configuration"""

# Standard library imports
from argparse import ArgumentParser

# Local imports
from marc_toolkit.infrastructure.config import get_config


def _add_strict(parser: ArgumentParser) -> None:
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first structural deviation (default: reader.mode from config)",
    )


def _add_files(parser: ArgumentParser) -> None:
    parser.add_argument(
        "files",
        nargs="*",
        help="MARC21 binary files, '.gz' allowed; '-' or none reads standard input",
    )


def create_argument_parser() -> ArgumentParser:
    """Create and configure argument parser with all CLI options"""
    # Load default configuration
    config = get_config()
    logging_config = config.logging

    parser = ArgumentParser(
        prog="marc-toolkit",
        description="Read, count, filter, view and validate MARC21 binary record streams",
        epilog="Terms starting with '-' (absence tests) may need '--' before them, "
        "e.g. marc-toolkit filter -- -245",
    )

    parser.add_argument(
        "--config", default=None, help="Path to configuration JSON (default: ./config.json)"
    )

    # Logging options
    parser.add_argument(
        "--log-file",
        default=logging_config.log_file,
        help="Write a DEBUG log to this file (default: no file logging)",
    )

    # Verbosity - count occurrences: -v (INFO), -vv (DEBUG)
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (default: warnings only, -v: INFO, -vv: DEBUG)",
    )
    parser.add_argument("--silent", action="store_true", help="Suppress all console logging")
    parser.add_argument(
        "--progress", action="store_true", help="Show a progress display on stderr"
    )

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    count_parser = subparsers.add_parser("count", help="Count records or record groups")
    count_parser.add_argument(
        "--groups", action="store_true", help="Count bibliographic/holdings groups"
    )
    _add_strict(count_parser)
    _add_files(count_parser)

    diag_parser = subparsers.add_parser("diag", help="Report structural and semantic problems")
    _add_strict(diag_parser)
    diag_parser.add_argument("--rules", default=None, help="Path to a rules.json rule table")
    diag_parser.add_argument(
        "--report-json", default=None, help="Also write findings and summary to this JSON file"
    )
    _add_files(diag_parser)

    filter_parser = subparsers.add_parser(
        "filter", help="Write the records matching a query to a MARC21 stream"
    )
    filter_parser.add_argument(
        "-v", "--invert", action="store_true", help="Write the records that do NOT match"
    )
    filter_parser.add_argument(
        "-e", "--any", action="store_true", help="Match when any term matches (default: all)"
    )
    filter_parser.add_argument(
        "--groups", action="store_true", help="Filter whole groups on their primary record"
    )
    _add_strict(filter_parser)
    filter_parser.add_argument(
        "-i",
        "--input",
        action="append",
        default=[],
        help="Input file (repeatable; default: standard input)",
    )
    filter_parser.add_argument(
        "-o", "--output", default=None, help="Output file (default: standard output)"
    )
    filter_parser.add_argument("terms", nargs="+", help="Query terms, e.g. +245 '245a~^The'")

    view_parser = subparsers.add_parser("view", help="Print records as mnemonic text")
    _add_strict(view_parser)
    _add_files(view_parser)

    return parser
