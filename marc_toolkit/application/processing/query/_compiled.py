# marc_toolkit/application/processing/query/_compiled.py

"""Compiled queries: a list of terms combined with AND or OR"""

# Standard library imports
from logging import getLogger
from typing import Iterable
from typing import Iterator
from typing import Sequence

# Local imports
from marc_toolkit.application.processing.query._parser import parse_term
from marc_toolkit.application.processing.query._terms import Term
from marc_toolkit.core.domain.enums import QueryErrorKind
from marc_toolkit.core.domain.errors import QuerySyntaxError
from marc_toolkit.core.domain.group import RecordGroup
from marc_toolkit.core.domain.record import Record
from marc_toolkit.core.domain.record import decode_utf8
from marc_toolkit.core.types.aliases import Decoder

logger = getLogger(__name__)


class CompiledQuery:
    """A predicate over records built from query terms

    Terms are ANDed unless any_match is set, in which case they are ORed.
    invert negates the combined result, so a query and its inverted twin
    partition any input exactly.
    """

    __slots__ = ("terms", "source_terms", "any_match", "invert", "decoder")

    def __init__(
        self,
        terms: list[Term],
        source_terms: list[str],
        any_match: bool = False,
        invert: bool = False,
        decoder: Decoder = decode_utf8,
    ) -> None:
        self.terms = terms
        self.source_terms = source_terms
        self.any_match = any_match
        self.invert = invert
        self.decoder = decoder

    def __call__(self, record: Record) -> bool:
        results = (term.evaluate(record, self.decoder) for term in self.terms)
        matched = any(results) if self.any_match else all(results)
        return matched != self.invert

    def filter(self, records: Iterable[Record]) -> Iterator[Record]:
        """Lazily yield matching records in input order"""
        for record in records:
            if self(record):
                yield record

    def filter_groups(self, groups: Iterable[RecordGroup]) -> Iterator[RecordGroup]:
        """Yield whole groups whose primary record matches"""
        for group in groups:
            if self(group.primary):
                yield group

    def __repr__(self) -> str:
        joiner = " OR " if self.any_match else " AND "
        text = joiner.join(self.source_terms)
        return f"CompiledQuery(NOT ({text}))" if self.invert else f"CompiledQuery({text})"


def compile_query(
    terms: str | Sequence[str],
    any_match: bool = False,
    invert: bool = False,
    decoder: Decoder = decode_utf8,
) -> CompiledQuery:
    """Compile query terms into a record predicate

    Args:
        terms: One term string or a sequence of them (one per shell argument)
        any_match: OR the terms instead of ANDing them
        invert: Negate the combined result
        decoder: Turns raw field bytes into text for content comparisons

    Returns:
        CompiledQuery usable as a predicate

    Raises:
        QuerySyntaxError: If no terms are given or any term is invalid
    """
    if isinstance(terms, str):
        terms = [terms]
    source_terms = [t for t in terms if t.strip()]
    if not source_terms:
        raise QuerySyntaxError(QueryErrorKind.EMPTY_QUERY, "no query terms given")

    compiled = [parse_term(term) for term in source_terms]
    logger.debug(f"Compiled {len(compiled)} query term(s): {compiled}")
    return CompiledQuery(compiled, source_terms, any_match=any_match, invert=invert, decoder=decoder)
