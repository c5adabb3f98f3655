# marc_toolkit/application/processing/query/__init__.py

"""Field query evaluator used by record filtering"""

# Local imports
from marc_toolkit.application.processing.query._compiled import CompiledQuery
from marc_toolkit.application.processing.query._compiled import compile_query
from marc_toolkit.application.processing.query._parser import parse_term
from marc_toolkit.application.processing.query._terms import ContentTerm
from marc_toolkit.application.processing.query._terms import CountTerm
from marc_toolkit.application.processing.query._terms import IndicatorTerm
from marc_toolkit.application.processing.query._terms import PositionTerm
from marc_toolkit.application.processing.query._terms import PresenceTerm

__all__ = [
    "CompiledQuery",
    "ContentTerm",
    "CountTerm",
    "IndicatorTerm",
    "PositionTerm",
    "PresenceTerm",
    "compile_query",
    "parse_term",
]
