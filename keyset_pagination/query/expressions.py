"""Structured filter and order expressions.

Seek predicates are kept as a small expression tree of column comparisons
joined by AND/OR. Query collaborators either render the tree to their own
placeholder dialect or evaluate it directly against rows. ``str()`` of any
expression gives the ``?`` placeholder rendering.
"""

import itertools
import operator
from typing import Any, Callable, Iterator, List, Literal

from pydantic import BaseModel, ConfigDict

from ..models import Order

Placeholders = Callable[[], str]
ColumnLookup = Callable[[str], Any]

_OPERATORS = {
    "=": operator.eq,
    "<": operator.lt,
    ">": operator.gt,
}


def qmark_placeholders() -> Placeholders:
    """Placeholder factory for ``?`` style parameters."""
    return lambda: "?"


def numeric_placeholders(start: int = 1) -> Placeholders:
    """Placeholder factory for ``$1, $2, ...`` style parameters."""
    counter = itertools.count(start)
    return lambda: f"${next(counter)}"


class Expression(BaseModel):
    """Base class for filter expressions."""

    model_config = ConfigDict(frozen=True)

    def render(self, placeholders: Placeholders) -> str:
        raise NotImplementedError

    def evaluate(self, lookup: ColumnLookup, args: Iterator[Any]) -> bool:
        """Evaluate against a row, consuming args in rendering order."""
        raise NotImplementedError

    def __str__(self) -> str:
        return self.render(qmark_placeholders())


class Comparison(Expression):
    """``column <op> ?``"""

    column: str
    operator: Literal["=", "<", ">"]

    def render(self, placeholders: Placeholders) -> str:
        return f"{self.column} {self.operator} {placeholders()}"

    def evaluate(self, lookup: ColumnLookup, args: Iterator[Any]) -> bool:
        return _OPERATORS[self.operator](lookup(self.column), next(args))


class And(Expression):
    """Conjunction of expressions."""

    terms: List[Expression]

    def render(self, placeholders: Placeholders) -> str:
        return " AND ".join(_group(term, placeholders, Or) for term in self.terms)

    def evaluate(self, lookup: ColumnLookup, args: Iterator[Any]) -> bool:
        # Every term is evaluated so that args stay aligned.
        results = [term.evaluate(lookup, args) for term in self.terms]
        return all(results)


class Or(Expression):
    """Disjunction of expressions."""

    terms: List[Expression]

    def render(self, placeholders: Placeholders) -> str:
        return " OR ".join(_group(term, placeholders, Or) for term in self.terms)

    def evaluate(self, lookup: ColumnLookup, args: Iterator[Any]) -> bool:
        results = [term.evaluate(lookup, args) for term in self.terms]
        return any(results)


def _group(term: Expression, placeholders: Placeholders, needs_parens: type) -> str:
    rendered = term.render(placeholders)
    if isinstance(term, needs_parens) and len(term.terms) > 1:
        return f"({rendered})"
    return rendered


class OrderTerm(BaseModel):
    """A single ``column direction`` pair."""

    model_config = ConfigDict(frozen=True)

    column: str
    order: Order

    def __str__(self) -> str:
        return f"{self.column} {self.order.value}"


class OrderClause(BaseModel):
    """Multi-column ORDER BY clause."""

    model_config = ConfigDict(frozen=True)

    terms: List[OrderTerm]

    def __str__(self) -> str:
        return ", ".join(str(term) for term in self.terms)
