"""Query builder capability and reference implementations."""

from .base import Query
from .expressions import (
    Expression,
    Comparison,
    And,
    Or,
    OrderTerm,
    OrderClause,
    qmark_placeholders,
    numeric_placeholders
)
from .memory import ListQuery
from .sql import SQLQuery

__all__ = [
    "Query",
    "Expression",
    "Comparison",
    "And",
    "Or",
    "OrderTerm",
    "OrderClause",
    "qmark_placeholders",
    "numeric_placeholders",
    "ListQuery",
    "SQLQuery"
]
