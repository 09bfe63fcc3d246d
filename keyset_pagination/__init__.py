"""Keyset (cursor-based) pagination over query builders."""

from .config import Settings, get_settings
from .errors import InvalidCursorError, ProblemDetailException
from .models import (
    Order,
    Cursor,
    PaginatorConfig,
    PaginationParams,
    PaginatedResponse
)
from .pagination import (
    Paginator,
    CursorEncoder,
    CursorDecoder,
    create_link_header
)
from .query import Query, ListQuery, SQLQuery

__all__ = [
    "Settings",
    "get_settings",
    "InvalidCursorError",
    "ProblemDetailException",
    "Order",
    "Cursor",
    "PaginatorConfig",
    "PaginationParams",
    "PaginatedResponse",
    "Paginator",
    "CursorEncoder",
    "CursorDecoder",
    "create_link_header",
    "Query",
    "ListQuery",
    "SQLQuery"
]
