"""Pagination models."""

from .pagination import (
    Order,
    flip,
    Cursor,
    PaginatorConfig,
    PaginationParams,
    PaginatedResponse
)

__all__ = [
    "Order",
    "flip",
    "Cursor",
    "PaginatorConfig",
    "PaginationParams",
    "PaginatedResponse"
]
