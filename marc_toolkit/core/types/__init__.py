# marc_toolkit/core/types/__init__.py

"""Type definitions for the MARC toolkit

Pure type definitions with no implementation logic. Protocols should be
imported from their module directly to avoid circular imports.
"""

# Local imports
from marc_toolkit.core.types.aliases import Decoder
from marc_toolkit.core.types.aliases import Position
from marc_toolkit.core.types.json import JSONDict
from marc_toolkit.core.types.json import JSONList
from marc_toolkit.core.types.json import JSONPrimitive
from marc_toolkit.core.types.json import JSONType

__all__ = [
    "Decoder",
    "Position",
    "JSONDict",
    "JSONList",
    "JSONPrimitive",
    "JSONType",
]
