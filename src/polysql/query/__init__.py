"""
Query builder state and DML compilation.
"""

from .builder import DIRECTIONS, JOIN_TYPES, OPERATORS, QueryBuilder
from .compiled import CompiledQuery, interpolate, literal
from .compiler import QueryCompiler
from .state import QueryState

__all__ = [
    "CompiledQuery",
    "DIRECTIONS",
    "JOIN_TYPES",
    "OPERATORS",
    "QueryBuilder",
    "QueryCompiler",
    "QueryState",
    "interpolate",
    "literal",
]
