"""Tests for expressions and the reference query builders."""

import sqlite3
import pytest

from keyset_pagination.models import Order, PaginatorConfig
from keyset_pagination.pagination import Paginator
from keyset_pagination.query import (
    And, Comparison, ListQuery, Or, OrderClause, OrderTerm, Query, SQLQuery,
    numeric_placeholders
)


def seek(columns, op):
    terms = []
    for i, column in enumerate(columns):
        equal = [Comparison(column=prev, operator="=") for prev in columns[:i]]
        terms.append(And(terms=equal + [Comparison(column=column, operator=op)]))
    return Or(terms=terms)


class TestExpressions:
    """Test expression rendering and evaluation."""

    def test_qmark_rendering(self):
        """Test default string rendering."""
        assert str(seek(["t.a", "t.b"], ">")) == "t.a > ? OR t.a = ? AND t.b > ?"

    def test_numeric_rendering(self):
        """Test numbered placeholders."""
        rendered = seek(["t.a", "t.b"], "<").render(numeric_placeholders())
        assert rendered == "t.a < $1 OR t.a = $2 AND t.b < $3"

    def test_nested_or_is_parenthesized(self):
        """Test disjunctions inside conjunctions keep their grouping."""
        expr = And(terms=[
            Comparison(column="x", operator="="),
            Or(terms=[Comparison(column="y", operator="<"), Comparison(column="z", operator=">")])
        ])
        assert str(expr) == "x = ? AND (y < ? OR z > ?)"

    def test_evaluate_consumes_all_args(self):
        """Test evaluation aligns args even when an early clause matches."""
        expr = seek(["a", "b"], ">")
        row = {"a": 5, "b": 0}
        assert expr.evaluate(row.get, iter([4, 4, 9])) is True
        assert expr.evaluate(row.get, iter([5, 5, 0])) is False
        assert expr.evaluate(row.get, iter([5, 5, -1])) is True

    def test_order_clause_str(self):
        """Test order clause rendering."""
        clause = OrderClause(terms=[
            OrderTerm(column="a", order=Order.ASC),
            OrderTerm(column="b", order=Order.DESC)
        ])
        assert str(clause) == "a ASC, b DESC"


class TestListQuery:
    """Test the in-memory query."""

    def test_implements_query(self, items, item_model):
        """Test ListQuery satisfies the Query protocol."""
        assert isinstance(ListQuery(items, model=item_model), Query)

    def test_filter_sort_limit(self, named_rows):
        """Test filtering, mixed-direction sorting and limiting."""
        query = ListQuery(named_rows, table="rows")
        query.where(Or(terms=[Comparison(column="rows.id", operator=">")]), 10)
        query.order(OrderClause(terms=[
            OrderTerm(column="rows.name", order=Order.ASC),
            OrderTerm(column="rows.id", order=Order.DESC)
        ]))
        query.limit(3).select()

        assert [(r["name"], r["id"]) for r in query.value()] == [
            ("alpha", 16), ("alpha", 12), ("beta", 17)
        ]

    def test_rejects_string_predicates(self, items):
        """Test raw SQL strings are not accepted."""
        with pytest.raises(TypeError):
            ListQuery(items).where("id > ?", 1)


class TestSQLQuery:
    """Test the SQL statement builder."""

    def test_build_without_filters(self):
        """Test plain select."""
        query = SQLQuery("items", executor=lambda sql, params: [], columns=["id", "name"])
        assert query.build() == ("SELECT id, name FROM items", [])

    def test_numeric_dialect_numbers_across_clauses(self):
        """Test placeholders are numbered across filters and limit."""
        query = SQLQuery("events", executor=lambda sql, params: [], dialect="numeric")
        query.where(Or(terms=[Comparison(column="events.gpt_id", operator="=")]), "gpt-1")
        query.where(seek(["events.created_at", "events.id"], "<"), "t", "t", "u")
        query.order(OrderClause(terms=[
            OrderTerm(column="events.created_at", order=Order.DESC),
            OrderTerm(column="events.id", order=Order.DESC)
        ]))
        query.limit(11)

        sql, params = query.build()
        assert sql == (
            "SELECT * FROM events "
            "WHERE (events.gpt_id = $1) AND "
            "(events.created_at < $2 OR events.created_at = $3 AND events.id < $4) "
            "ORDER BY events.created_at DESC, events.id DESC LIMIT $5"
        )
        assert params == ["gpt-1", "t", "t", "u", 11]

    def test_unknown_dialect(self):
        """Test unsupported dialects are rejected."""
        with pytest.raises(ValueError):
            SQLQuery("items", executor=lambda sql, params: [], dialect="pyformat")

    def test_rows_validated_into_model(self, item_model):
        """Test executor rows become model instances."""
        query = SQLQuery("items", executor=lambda sql, params: [{"id": 1, "name": "a"}], model=item_model)
        assert query.select().value() == [item_model(id=1, name="a")]


class TestSQLitePagination:
    """Test paginating a real SQLite table."""

    @pytest.fixture
    def connection(self, named_rows):
        conn = sqlite3.connect(":memory:")
        conn.row_factory = sqlite3.Row
        conn.execute("CREATE TABLE items (id INTEGER PRIMARY KEY, name TEXT NOT NULL)")
        conn.executemany("INSERT INTO items (id, name) VALUES (:id, :name)", named_rows)
        yield conn
        conn.close()

    def run_page(self, connection, item_model, **config):
        def executor(sql, params):
            return connection.execute(sql, params).fetchall()

        paginator = Paginator(PaginatorConfig(keys=["name", "id"], limit=5, **config))
        page = paginator.paginate(SQLQuery("items", executor, model=item_model)).value()
        return paginator, page

    @pytest.mark.parametrize("order", ["asc", "desc"])
    def test_walk_forward_and_back(self, connection, item_model, named_rows, order):
        """Test forward then backward paging over SQLite."""
        expected = sorted(named_rows, key=lambda r: (r["name"], r["id"]), reverse=order == "desc")

        pages = []
        after = None
        while True:
            paginator, page = self.run_page(connection, item_model, order=order, after=after)
            pages.append([(item.name, item.id) for item in page])
            after = paginator.get_next_cursor().after
            if after is None:
                break

        seen = [row for page in pages for row in page]
        assert seen == [(r["name"], r["id"]) for r in expected]

        first_paginator, _ = self.run_page(connection, item_model, order=order)
        second_paginator, _ = self.run_page(
            connection, item_model, order=order,
            after=first_paginator.get_next_cursor().after
        )
        _, back = self.run_page(
            connection, item_model, order=order,
            before=second_paginator.get_next_cursor().before
        )
        assert [(item.name, item.id) for item in back] == pages[0]
