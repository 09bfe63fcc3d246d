"""Keyset (cursor-based) paginator."""

import logging
from collections.abc import MutableSequence
from typing import Any, List, Literal, Optional, Sequence, Tuple

from ..config import Settings, get_settings
from ..models import (
    Cursor, Order, PaginatedResponse, PaginationParams, PaginatorConfig, flip
)
from ..naming import to_snake_case
from ..query.base import Query
from ..query.expressions import And, Comparison, Or, OrderClause, OrderTerm
from .cursor import CursorDecoder, CursorEncoder

logger = logging.getLogger(__name__)

Side = Literal["after", "before"]


def resolve_operator(side: Optional[Side], order: Order) -> str:
    """Comparison operator that seeks past a cursor.

    Paging after a cursor in ascending order, or before one in descending
    order, moves toward larger keys.
    """
    if (side == "after" and order == Order.ASC) or (side == "before" and order == Order.DESC):
        return ">"
    return "<"


def build_cursor_predicate(
    columns: Sequence[str],
    fields: Sequence[Any],
    operator: str
) -> Tuple[Optional[Or], List[Any]]:
    """Build the composite seek predicate for a decoded cursor.

    For columns k1..kN and values v1..vN this is::

        k1 OP ? OR k1 = ? AND k2 OP ? OR ... OR k1 = ? AND ... AND kN OP ?

    which compares the (k1..kN) tuple lexicographically.

    Args:
        columns: Qualified column names in key order
        fields: Decoded cursor values in key order
        operator: ``>`` or ``<``

    Returns:
        Tuple of (predicate, arguments); predicate is None without fields
    """
    if not fields:
        return None, []

    clauses = []
    args: List[Any] = []
    for i, column in enumerate(columns):
        terms = [Comparison(column=prev, operator="=") for prev in columns[:i]]
        terms.append(Comparison(column=column, operator=operator))
        clauses.append(And(terms=terms))
        args.extend(fields[:i + 1])

    return Or(terms=clauses), args


def build_order_clause(columns: Sequence[str], order: Order) -> OrderClause:
    """Build the ORDER BY clause applying ``order`` to every column."""
    return OrderClause(terms=[OrderTerm(column=column, order=order) for column in columns])


class Paginator:
    """Paginates a query using cursors instead of offsets.

    A paginator holds the state of a single request and must not be shared
    between concurrent requests.

    Example:
        paginator = Paginator(PaginatorConfig(keys=["created_at", "id"], limit=20))
        paginator.set_after_cursor(token)
        items = paginator.paginate(query).value()
        next_cursor = paginator.get_next_cursor()
    """

    def __init__(
        self,
        config: Optional[PaginatorConfig] = None,
        settings: Optional[Settings] = None
    ):
        config = config or PaginatorConfig()
        self._settings = settings
        self._cursor = Cursor(after=config.after, before=config.before)
        self._keys: List[str] = list(config.keys)
        self._limit: Optional[int] = config.limit
        self._order: Optional[Order] = config.order
        self._next = Cursor()
        self.has_more = False

        # Resolved at paginate time
        self.keys: List[str] = []
        self.limit: int = 0
        self.order: Order = Order.DESC

    @classmethod
    def from_params(
        cls,
        params: PaginationParams,
        keys: Optional[Sequence[str]] = None,
        settings: Optional[Settings] = None
    ) -> "Paginator":
        """Create a paginator from request query parameters."""
        return cls(params.to_config(list(keys or [])), settings=settings)

    def set_after_cursor(self, after_cursor: str) -> None:
        self._cursor.after = after_cursor

    def set_before_cursor(self, before_cursor: str) -> None:
        self._cursor.before = before_cursor

    def set_keys(self, *keys: str) -> None:
        """Append paging keys. Keys must identify a row uniquely together."""
        self._keys.extend(keys)

    def set_limit(self, limit: int) -> None:
        if limit < 0:
            raise ValueError(f"Limit must not be negative, got {limit}")
        self._limit = limit

    def set_order(self, order: "Order | str") -> None:
        self._order = Order.parse(order)

    def get_next_cursor(self) -> Cursor:
        """Cursors for the next and previous pages of the last paginate call."""
        return self._next.model_copy()

    def paginate(self, query: Query) -> Query:
        """Apply cursor filtering, ordering and limit, execute and reshape.

        Errors raised by the query or the cursor decoder propagate unchanged.
        """
        self._resolve_options()
        self._next = Cursor()
        self.has_more = False

        columns = [f"{query.table()}.{to_snake_case(key)}" for key in self.keys]
        self._append_paging_query(query, columns).select()

        elems = query.value()
        if isinstance(elems, MutableSequence) and len(elems) > 0:
            self._post_process(elems)
        else:
            logger.debug("No results to post-process")
        return query

    def paginated_response(self, query: Query) -> PaginatedResponse:
        """Paginate and wrap the page with its cursors."""
        elems = self.paginate(query).value()
        items = list(elems) if isinstance(elems, MutableSequence) else []
        return PaginatedResponse(
            items=items,
            cursor=self.get_next_cursor(),
            has_more=self.has_more
        )

    def _resolve_options(self) -> None:
        settings = self._settings or get_settings()

        if self._cursor.after is not None and self._cursor.before is not None:
            logger.warning("Both after and before cursors set; ignoring before cursor")

        self.keys = list(self._keys) or list(settings.default_keys)
        self.limit = self._limit or settings.default_limit
        if settings.max_limit is not None:
            self.limit = min(self.limit, settings.max_limit)
        self.order = self._order or Order.parse(settings.default_order)

        logger.debug(
            f"Paginating by {self.keys} {self.order.value} limit {self.limit}",
            extra={"side": self._side()}
        )

    def _side(self) -> Optional[Side]:
        if self._has_after_cursor():
            return "after"
        if self._has_before_cursor():
            return "before"
        return None

    def _has_after_cursor(self) -> bool:
        return self._cursor.after is not None

    def _has_before_cursor(self) -> bool:
        return not self._has_after_cursor() and self._cursor.before is not None

    def _append_paging_query(self, query: Query, columns: List[str]) -> Query:
        decoder = CursorDecoder(query.model(), self.keys)
        fields: List[Any] = []
        if self._has_after_cursor():
            fields = decoder.decode(self._cursor.after)
        elif self._has_before_cursor():
            fields = decoder.decode(self._cursor.before)

        predicate, args = build_cursor_predicate(
            columns, fields, resolve_operator(self._side(), self.order)
        )
        if predicate is not None:
            query = query.where(predicate, *args)

        order = flip(self.order) if self._has_before_cursor() else self.order
        query = query.limit(self.limit + 1)
        query = query.order(build_order_clause(columns, order))
        return query

    def _post_process(self, elems: MutableSequence) -> None:
        self.has_more = len(elems) > self.limit
        if self.has_more:
            del elems[-1]
        if self._has_before_cursor():
            elems.reverse()

        encoder = CursorEncoder(self.keys)
        if self._has_before_cursor() or self.has_more:
            self._next.after = encoder.encode(elems[-1])
        if self._has_after_cursor() or (self.has_more and self._has_before_cursor()):
            self._next.before = encoder.encode(elems[0])

        logger.debug(
            f"Page of {len(elems)} items, has_more={self.has_more}",
            extra={"after": self._next.after, "before": self._next.before}
        )
