"""Pagination module for cursor-based pagination."""

from .cursor import CursorEncoder, CursorDecoder
from .paginator import (
    Paginator,
    resolve_operator,
    build_cursor_predicate,
    build_order_clause
)
from .links import create_link_header

__all__ = [
    "CursorEncoder",
    "CursorDecoder",
    "Paginator",
    "resolve_operator",
    "build_cursor_predicate",
    "build_order_clause",
    "create_link_header"
]
