"""
Tests for the clause-list statement builder and insert renderer.
"""

import pytest

from staybook.utils.exceptions import InvalidRecordError
from staybook.utils.query_builder import QueryBuilder, build_insert
from tests.conftest import assert_well_formed


class TestQueryBuilder:
    """Test SELECT assembly."""

    def test_no_clauses(self):
        """Test that a bare select gets no WHERE."""
        statement, params = QueryBuilder("SELECT * FROM properties").build()

        assert statement == "SELECT * FROM properties"
        assert params == []

    def test_base_whitespace_is_collapsed(self):
        """Test that multi-line base selects render on one line."""
        statement, _ = QueryBuilder("""
            SELECT *
            FROM   properties
        """).build()

        assert statement == "SELECT * FROM properties"

    def test_where_clauses_joined_with_and(self):
        """Test that predicates are joined with AND and WHERE appears once."""
        statement, params = (
            QueryBuilder("SELECT * FROM properties")
            .where("city ILIKE {param}", "%Van%")
            .where("owner_id = {param}", 3)
            .build()
        )

        assert statement == "SELECT * FROM properties WHERE city ILIKE $1 AND owner_id = $2"
        assert params == ["%Van%", 3]
        assert statement.count("WHERE") == 1

    def test_full_statement_order(self):
        """Test clause order and placeholder numbering across WHERE, HAVING and LIMIT."""
        statement, params = (
            QueryBuilder("SELECT p.*, avg(r.rating) AS average_rating FROM p JOIN r ON r.pid = p.id")
            .where("p.city ILIKE {param}", "%a%")
            .group_by("p.id")
            .having("avg(r.rating) >= {param}", 4)
            .order_by("p.cost_per_night")
            .limit(10)
            .build()
        )

        assert statement.endswith(
            "WHERE p.city ILIKE $1 GROUP BY p.id HAVING avg(r.rating) >= $2 "
            "ORDER BY p.cost_per_night LIMIT $3"
        )
        assert params == ["%a%", 4, 10]
        assert_well_formed(statement, params)

    def test_placeholders_follow_text_order(self):
        """Test that HAVING added before WHERE is still numbered after it."""
        query = QueryBuilder("SELECT * FROM p").group_by("p.id")
        query.having("count(*) > {param}", 1)
        query.where("p.owner_id = {param}", 7)

        statement, params = query.build()

        assert statement == "SELECT * FROM p WHERE p.owner_id = $1 GROUP BY p.id HAVING count(*) > $2"
        assert params == [7, 1]

    def test_build_is_repeatable(self):
        """Test that building twice yields the same statement."""
        query = QueryBuilder("SELECT * FROM p").where("a = {param}", 1).limit(5)

        assert query.build() == query.build()

    def test_template_requires_one_marker(self):
        """Test that templates without exactly one marker are rejected."""
        query = QueryBuilder("SELECT * FROM p")

        with pytest.raises(ValueError):
            query.where("a = 1", 1)
        with pytest.raises(ValueError):
            query.where("a = {param} OR b = {param}", 1)

    def test_values_never_in_statement_text(self):
        """Test that bound values stay out of the statement."""
        hostile = "x'; DROP TABLE users; --"
        statement, params = QueryBuilder("SELECT * FROM p").where("city ILIKE {param}", hostile).build()

        assert hostile not in statement
        assert params == [hostile]


class TestBuildInsert:
    """Test INSERT rendering from column/value pairs."""

    def test_columns_and_placeholders_match(self):
        """Test parallel column and placeholder lists."""
        statement, params = build_insert(
            "properties",
            [("title", "Cabin"), ("cost_per_night", 100), ("owner_id", 3)],
        )

        assert statement == (
            "INSERT INTO properties (title, cost_per_night, owner_id) "
            "VALUES ($1, $2, $3) RETURNING *"
        )
        assert params == ["Cabin", 100, 3]

    def test_single_column(self):
        """Test that a single column has no stray delimiters."""
        statement, params = build_insert("properties", [("owner_id", 3)])

        assert "(owner_id)" in statement
        assert "VALUES ($1)" in statement
        assert params == [3]

    def test_empty_insert_rejected(self):
        """Test that nothing to insert raises."""
        with pytest.raises(InvalidRecordError):
            build_insert("properties", [])
