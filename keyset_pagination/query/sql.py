"""SQL statement builder for cursor pagination."""

import logging
from typing import Any, Callable, Iterable, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel

from .expressions import (
    Expression, OrderClause, numeric_placeholders, qmark_placeholders
)

logger = logging.getLogger(__name__)

Executor = Callable[[str, List[Any]], Iterable[Any]]
Dialect = Literal["qmark", "numeric"]


class SQLQuery:
    """Builds a SELECT statement and runs it through an executor.

    The executor receives the rendered SQL and its positional parameters and
    returns mapping-like rows (``sqlite3.Row``, ``asyncpg.Record`` fetched
    eagerly, dicts). When ``model`` is a pydantic model each row is
    validated into it.

    Args:
        table: Table to select from
        executor: Callable running (sql, params) and returning rows
        model: Optional entity type for returned rows
        columns: Columns to select, ``*`` when omitted
        dialect: ``qmark`` for ``?`` placeholders, ``numeric`` for ``$1``
    """

    def __init__(
        self,
        table: str,
        executor: Executor,
        model: Optional[type] = None,
        columns: Optional[Sequence[str]] = None,
        dialect: Dialect = "qmark"
    ):
        if dialect not in ("qmark", "numeric"):
            raise ValueError(f"Unsupported placeholder dialect: {dialect}")
        self._table = table
        self._executor = executor
        self._model = model
        self._columns = list(columns or [])
        self._dialect = dialect
        self._filters: List[Tuple[Expression, Tuple[Any, ...]]] = []
        self._order: Optional[OrderClause] = None
        self._limit: Optional[int] = None
        self._destination: List[Any] = []

    def model(self) -> Optional[type]:
        return self._model

    def value(self) -> List[Any]:
        return self._destination

    def table(self) -> str:
        return self._table

    def where(self, predicate: Expression, *args: Any) -> "SQLQuery":
        self._filters.append((predicate, args))
        return self

    def limit(self, n: int) -> "SQLQuery":
        self._limit = n
        return self

    def order(self, clause: OrderClause) -> "SQLQuery":
        self._order = clause
        return self

    def build(self) -> Tuple[str, List[Any]]:
        """Render the statement.

        Returns:
            Tuple of (sql, parameters)
        """
        if self._dialect == "numeric":
            placeholders = numeric_placeholders()
        else:
            placeholders = qmark_placeholders()

        columns = ", ".join(self._columns) if self._columns else "*"
        sql = f"SELECT {columns} FROM {self._table}"
        params: List[Any] = []

        if self._filters:
            conditions = []
            for predicate, args in self._filters:
                conditions.append(f"({predicate.render(placeholders)})")
                params.extend(args)
            sql += " WHERE " + " AND ".join(conditions)

        if self._order is not None and self._order.terms:
            sql += f" ORDER BY {self._order}"

        if self._limit is not None:
            sql += f" LIMIT {placeholders()}"
            params.append(self._limit)

        return sql, params

    def select(self) -> "SQLQuery":
        sql, params = self.build()
        logger.debug(f"Executing: {sql}", extra={"params": params})

        rows = self._executor(sql, params)
        if isinstance(self._model, type) and issubclass(self._model, BaseModel):
            items = [self._model.model_validate(dict(row)) for row in rows]
        else:
            items = list(rows)

        self._destination[:] = items
        return self
