# marc_toolkit/application/processing/query/_parser.py

"""Parse query term strings into compiled terms

Term forms:
    +TAG  -TAG  +TAGc  -TAGc          presence / absence
    #TAG OP N  #TAGc OP N  #(*) OP N   occurrence counts
    TAG OP VALUE  TAGc OP VALUE        field / subfield content
    TAG:1 OP VALUE  TAG:2 OP VALUE     indicators
    TAG/P[-Q] OP VALUE  LDR/P[-Q] ...  control field / leader positions

Tags are three characters from [0-9A-Za-z] where '.' matches any character.
All errors are raised here, at compile time, as QuerySyntaxError.
"""

# Standard library imports
import re

# Local imports
from marc_toolkit.application.processing.query._terms import ContentTerm
from marc_toolkit.application.processing.query._terms import CountTerm
from marc_toolkit.application.processing.query._terms import IndicatorTerm
from marc_toolkit.application.processing.query._terms import LEADER_TAG
from marc_toolkit.application.processing.query._terms import PositionTerm
from marc_toolkit.application.processing.query._terms import PresenceTerm
from marc_toolkit.application.processing.query._terms import Term
from marc_toolkit.core.domain.enums import QueryErrorKind
from marc_toolkit.core.domain.errors import QuerySyntaxError
from marc_toolkit.core.domain.record import is_control_tag

COUNT_OPERATORS = frozenset({"<", "<=", "=", ">=", ">"})
CONTENT_OPERATORS = frozenset({"<", "<=", "=", ">=", ">", "~"})
INDICATOR_OPERATORS = frozenset({"=", "~"})
BLANK_ALIASES = frozenset({"#", "_"})

_TAG = re.compile(r"[0-9A-Za-z.]{3}")
_SUBFIELD_CODE = re.compile(r"[0-9A-Za-z]")
_OPERATOR_CHARS = "<>=!~"
_COMPARISON = re.compile(
    rf"(?P<lhs>[^\s{_OPERATOR_CHARS}]+)\s*(?P<rest>(?P<op>[{_OPERATOR_CHARS}]+).*)",
    re.DOTALL,
)
_COUNT = re.compile(
    rf"#\s*(?P<target>\(\*\)|[^\s{_OPERATOR_CHARS}]+)\s*(?P<op>[{_OPERATOR_CHARS}]*)\s*(?P<value>.*)",
    re.DOTALL,
)
_POSITION = re.compile(r"(?P<tag>[^/]+)/(?P<start>\d+)(?:-(?P<end>\d+))?")
_INDICATOR = re.compile(r"(?P<tag>[^:]+):(?P<which>.*)")


def _error(kind: QueryErrorKind, message: str, term: str) -> QuerySyntaxError:
    return QuerySyntaxError(kind, message, term)


def _check_tag(tag: str, term: str) -> str:
    if tag == LEADER_TAG or not _TAG.fullmatch(tag):
        raise _error(QueryErrorKind.UNKNOWN_TAG, f"{tag!r} is not a field tag", term)
    return tag


def _split_tag_code(target: str, term: str) -> tuple[str, str | None]:
    """Split 'TAG' or 'TAGc' into tag and optional subfield code"""
    tag = _check_tag(target[:3], term)
    code = target[3:]
    if not code:
        return tag, None
    if not _SUBFIELD_CODE.fullmatch(code):
        raise _error(QueryErrorKind.MALFORMED_TERM, f"{code!r} is not a subfield code", term)
    return tag, code


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _compile_pattern(op: str, value: str, term: str) -> re.Pattern[str] | None:
    if op != "~":
        return None
    try:
        return re.compile(value)
    except re.error as e:
        raise _error(QueryErrorKind.BAD_REGEX, f"invalid regular expression: {e}", term) from e


def _split_operator(rest: str, run: str, operators: frozenset[str]) -> tuple[str, str]:
    """Take the longest valid operator from the start of an operator run

    Returns the operator and the unquoted value that follows it. A run with
    no valid prefix is returned whole so the caller can report it.
    """
    for size in range(len(run), 0, -1):
        if run[:size] in operators:
            return run[:size], _unquote(rest[size:].lstrip())
    return run, _unquote(rest[len(run) :].lstrip())


def _parse_presence(term: str) -> PresenceTerm:
    tag, code = _split_tag_code(term[1:], term)
    return PresenceTerm(tag, code, negate=term[0] == "-")


def _parse_count(term: str) -> CountTerm:
    match = _COUNT.fullmatch(term)
    if match is None:
        raise _error(QueryErrorKind.MALFORMED_TERM, "expected #TAG OP N", term)

    op = match["op"]
    if not op:
        raise _error(QueryErrorKind.BAD_OPERATOR, "missing comparison operator", term)
    if op not in COUNT_OPERATORS:
        raise _error(QueryErrorKind.BAD_OPERATOR, f"{op!r} cannot compare counts", term)

    value = match["value"].strip()
    if not value.isdigit():
        raise _error(QueryErrorKind.MALFORMED_TERM, f"{value!r} is not a count", term)

    target = match["target"]
    if target == "(*)":
        return CountTerm(None, None, op, int(value))
    tag, code = _split_tag_code(target, term)
    return CountTerm(tag, code, op, int(value))


def _parse_comparison(term: str) -> Term:
    match = _COMPARISON.fullmatch(term)
    if match is None:
        raise _error(
            QueryErrorKind.MALFORMED_TERM,
            "expected +TAG, -TAG, #TAG OP N or TAG OP VALUE",
            term,
        )
    lhs = match["lhs"]

    if indicator := _INDICATOR.fullmatch(lhs):
        op, value = _split_operator(match["rest"], match["op"], INDICATOR_OPERATORS)
        return _parse_indicator(indicator, op, value, term)

    op, value = _split_operator(match["rest"], match["op"], CONTENT_OPERATORS)
    if op not in CONTENT_OPERATORS:
        raise _error(QueryErrorKind.BAD_OPERATOR, f"unknown operator {op!r}", term)
    pattern = _compile_pattern(op, value, term)

    if position := _POSITION.fullmatch(lhs):
        tag = position["tag"]
        if tag != LEADER_TAG:
            _check_tag(tag, term)
            if not is_control_tag(tag):
                raise _error(
                    QueryErrorKind.UNKNOWN_TAG,
                    f"positions apply to the leader and control fields, not {tag}",
                    term,
                )
        start = int(position["start"])
        end = int(position["end"]) if position["end"] is not None else start
        if end < start:
            raise _error(QueryErrorKind.MALFORMED_TERM, f"empty position range {start}-{end}", term)
        return PositionTerm(tag, start, end, op, value, pattern)

    if "/" in lhs:
        raise _error(QueryErrorKind.MALFORMED_TERM, f"bad position {lhs!r}", term)

    tag, code = _split_tag_code(lhs, term)
    return ContentTerm(tag, code, op, value, pattern)


def _parse_indicator(match: re.Match[str], op: str, value: str, term: str) -> IndicatorTerm:
    tag = _check_tag(match["tag"], term)
    if match["which"] not in ("1", "2"):
        raise _error(QueryErrorKind.MALFORMED_TERM, "indicator position must be 1 or 2", term)
    if op not in INDICATOR_OPERATORS:
        raise _error(QueryErrorKind.BAD_OPERATOR, f"{op!r} cannot compare indicators", term)

    if op == "=":
        if value in BLANK_ALIASES:
            value = " "
        if len(value) != 1:
            raise _error(
                QueryErrorKind.MALFORMED_TERM, f"indicator value {value!r} is not one character", term
            )
    return IndicatorTerm(tag, int(match["which"]), op, value, _compile_pattern(op, value, term))


def parse_term(term: str) -> Term:
    """Compile one term string

    Raises:
        QuerySyntaxError: If the term cannot be compiled
    """
    text = term.strip()
    if not text:
        raise _error(QueryErrorKind.MALFORMED_TERM, "empty term", term)
    if text[0] in "+-":
        return _parse_presence(text)
    if text[0] == "#":
        return _parse_count(text)
    return _parse_comparison(text)
