# marc_toolkit/adapters/cli/__init__.py

"""CLI adapter for the MARC toolkit"""

# Local imports
from marc_toolkit.adapters.cli.main import main
from marc_toolkit.adapters.cli.parser import create_argument_parser

__all__ = ["create_argument_parser", "main"]
