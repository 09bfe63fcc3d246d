"""Tests for Link header creation."""

from keyset_pagination.models import Cursor
from keyset_pagination.pagination import create_link_header


class TestCreateLinkHeader:
    """Test create_link_header."""

    def test_no_cursors(self):
        """Test no header without cursors."""
        assert create_link_header("https://api.example.com/items", {"limit": 10}, Cursor()) is None

    def test_next_and_prev(self):
        """Test both relations are emitted."""
        header = create_link_header(
            "https://api.example.com/items",
            {"limit": 10, "order": "asc", "after": "old", "before": None},
            Cursor(after="WzIwXQ", before="WzExXQ")
        )

        assert header == (
            '<https://api.example.com/items?limit=10&order=asc&after=WzIwXQ>; rel="next", '
            '<https://api.example.com/items?limit=10&order=asc&before=WzExXQ>; rel="prev"'
        )

    def test_next_only(self):
        """Test first page only links forward."""
        header = create_link_header("/items", {}, Cursor(after="WzEwXQ"))
        assert header == '</items?after=WzEwXQ>; rel="next"'
