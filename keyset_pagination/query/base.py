"""Query builder capability consumed by the paginator."""

from typing import Any, Optional, Protocol, runtime_checkable

from .expressions import Expression, OrderClause


@runtime_checkable
class Query(Protocol):
    """A fluent query builder.

    ``value()`` is the destination container that ``select()`` fills. For
    the paginator to trim and reorder results it must be a mutable sequence;
    any other destination is left untouched.
    """

    def model(self) -> Optional[type]:
        """Entity type the query returns."""
        ...

    def value(self) -> Any:
        """Destination container populated by select()."""
        ...

    def table(self) -> str:
        """Storage table name used to qualify columns."""
        ...

    def where(self, predicate: Expression, *args: Any) -> "Query":
        ...

    def limit(self, n: int) -> "Query":
        ...

    def order(self, clause: OrderClause) -> "Query":
        ...

    def select(self) -> "Query":
        """Execute the query and populate value()."""
        ...
