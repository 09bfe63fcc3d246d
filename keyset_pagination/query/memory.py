"""In-memory query over a list of entities."""

import logging
from typing import Any, Iterable, List, Optional, Tuple

from ..models import Order
from ..naming import read_field
from .expressions import Expression, OrderClause

logger = logging.getLogger(__name__)


class ListQuery:
    """Query builder that filters, sorts and limits a list of rows in memory.

    Rows may be pydantic models, plain objects or dicts. Columns passed in
    predicates and order clauses may be qualified with the table name.
    """

    def __init__(
        self,
        rows: Iterable[Any],
        model: Optional[type] = None,
        table: str = "items",
        destination: Optional[Any] = None
    ):
        self._rows = list(rows)
        self._model = model
        self._table = table
        self._destination = [] if destination is None else destination
        self._filters: List[Tuple[Expression, Tuple[Any, ...]]] = []
        self._order: Optional[OrderClause] = None
        self._limit: Optional[int] = None

    def model(self) -> Optional[type]:
        return self._model

    def value(self) -> Any:
        return self._destination

    def table(self) -> str:
        return self._table

    def where(self, predicate: Expression, *args: Any) -> "ListQuery":
        if not isinstance(predicate, Expression):
            raise TypeError(f"ListQuery filters must be expressions, got {type(predicate).__name__}")
        self._filters.append((predicate, args))
        return self

    def limit(self, n: int) -> "ListQuery":
        self._limit = n
        return self

    def order(self, clause: OrderClause) -> "ListQuery":
        self._order = clause
        return self

    def select(self) -> "ListQuery":
        rows = [row for row in self._rows if self._matches(row)]

        if self._order is not None:
            # Stable sorts applied from the least significant key
            for term in reversed(self._order.terms):
                column = self._column_name(term.column)
                rows.sort(
                    key=lambda row, column=column: read_field(row, column),
                    reverse=term.order == Order.DESC
                )

        if self._limit is not None:
            rows = rows[:self._limit]

        logger.debug(f"Selected {len(rows)} of {len(self._rows)} rows from {self._table}")

        if isinstance(self._destination, list):
            self._destination[:] = rows
        return self

    def _matches(self, row: Any) -> bool:
        def lookup(column: str) -> Any:
            return read_field(row, self._column_name(column))

        return all(
            predicate.evaluate(lookup, iter(args))
            for predicate, args in self._filters
        )

    def _column_name(self, column: str) -> str:
        prefix = f"{self._table}."
        if column.startswith(prefix):
            return column[len(prefix):]
        return column
