"""Pydantic models for keyset pagination options and results."""

from enum import Enum
from typing import Optional, List, Any

from pydantic import BaseModel, Field, ConfigDict, field_validator


class Order(str, Enum):
    """Sort direction applied to every pagination key."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: "str | Order") -> "Order":
        """Parse a case-insensitive order name."""
        if isinstance(value, Order):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Order must be 'asc' or 'desc', got {value!r}")
        try:
            return cls(value.upper())
        except ValueError:
            raise ValueError(f"Order must be 'asc' or 'desc', got {value!r}") from None


def flip(order: Order) -> Order:
    """Return the opposite order."""
    return Order.DESC if order == Order.ASC else Order.ASC


class Cursor(BaseModel):
    """A pair of optional cursor tokens.

    Used both as input (where to resume paging) and as output (where the
    next forward and backward pages start).
    """

    after: Optional[str] = Field(default=None, description="Resume after this row")
    before: Optional[str] = Field(default=None, description="Resume before this row")


class PaginatorConfig(BaseModel):
    """Explicit configuration for a single Paginator.

    Unset fields are resolved from Settings when paginating: keys default
    to the primary identity key, limit to 10 and order to DESC.
    """

    keys: List[str] = Field(default_factory=list, description="Ordered sort keys, unique per row")
    limit: Optional[int] = Field(default=None, ge=0, description="Page size; 0 or None means default")
    order: Optional[Order] = Field(default=None, description="Sort direction for all keys")
    after: Optional[str] = Field(default=None, description="After cursor token")
    before: Optional[str] = Field(default=None, description="Before cursor token")

    @field_validator("order", mode="before")
    @classmethod
    def parse_order(cls, v):
        """Accept lowercase order names."""
        if v is None:
            return v
        return Order.parse(v)


class PaginationParams(BaseModel):
    """Query parameters for cursor pagination.

    Unset limit and order fall back to Settings when paginating.
    """

    limit: Optional[int] = Field(default=None, ge=1, le=200, description="Number of items per page")
    after: Optional[str] = Field(default=None, description="Cursor for the next page")
    before: Optional[str] = Field(default=None, description="Cursor for the previous page")
    order: Optional[str] = Field(default=None, pattern="^(asc|desc)$", description="Sort order")

    def to_config(self, keys: Optional[List[str]] = None) -> PaginatorConfig:
        """Build a PaginatorConfig from these parameters."""
        return PaginatorConfig(
            keys=list(keys or []),
            limit=self.limit,
            order=self.order,
            after=self.after,
            before=self.before
        )


class PaginatedResponse(BaseModel):
    """Response model for paginated data."""

    items: List[Any] = Field(description="List of items")
    cursor: Cursor = Field(default_factory=Cursor, description="Cursors for the next and previous pages")
    has_more: bool = Field(default=False, description="Whether more items exist in the paging direction")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "items": [{"id": 11}, {"id": 12}],
                "cursor": {"after": "WzEyXQ", "before": "WzExXQ"},
                "has_more": True
            }
        }
    )
