# marc_toolkit/core/domain/errors.py

"""Exception hierarchy for the MARC toolkit

Structural errors describe malformed binary records and are raised by the
reader. Query syntax errors are raised when a filter expression is compiled,
never while it is evaluated. Semantic problems in well-formed records are not
exceptions; they are reported as findings by the diagnostics engine.
"""

# Local imports
from marc_toolkit.core.domain.enums import QueryErrorKind
from marc_toolkit.core.domain.enums import StructuralErrorKind


class MarcToolkitError(Exception):
    """Base class for all toolkit errors"""


class StructuralError(MarcToolkitError):
    """A record's binary layout disagrees with its leader or directory"""

    def __init__(
        self,
        kind: StructuralErrorKind,
        message: str,
        position: int | None = None,
        source: str | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.position = position
        self.source = source
        super().__init__(str(self))

    def __str__(self) -> str:
        location = ""
        if self.source is not None and self.position is not None:
            location = f"{self.source}:{self.position}: "
        elif self.position is not None:
            location = f"record {self.position}: "
        return f"{location}{self.kind.value}: {self.message}"


class QuerySyntaxError(MarcToolkitError):
    """A query term could not be compiled"""

    def __init__(self, kind: QueryErrorKind, message: str, term: str = "") -> None:
        self.kind = kind
        self.message = message
        self.term = term
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.term:
            return f"{self.kind.value}: {self.message} (in {self.term!r})"
        return f"{self.kind.value}: {self.message}"
