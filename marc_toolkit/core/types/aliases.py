# marc_toolkit/core/types/aliases.py

"""Type aliases shared across the toolkit."""

# Standard library imports
from typing import Callable

type Decoder = Callable[[bytes], str]  # Raw field content -> text
type Position = int  # 1-based record position within a source
