#!/usr/bin/env python3
"""
MARC Toolkit - Main Entry Point

This module allows the package to be run as a script:
    python -m marc_toolkit
"""

# Standard library imports
import sys

# Local imports
from marc_toolkit.adapters.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
