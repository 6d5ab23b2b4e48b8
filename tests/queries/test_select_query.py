"""Tests for clausework.queries.select: clause order, optional clauses, subqueries, CTEs."""

import pytest

from clausework.errors import InvalidArgumentError
from clausework.expressions import WhereExpression, col, func, raw
from clausework.queries import SelectQuery


def test_select_star_when_no_columns():
    query = SelectQuery().from_("users")
    assert query.to_sql() == "SELECT * FROM users"
    assert query.get_params() == []


def test_full_clause_order():
    query = (
        SelectQuery()
        .select("u.id", "u.name")
        .from_("users", "u")
        .left_join("orders o", "o.user_id = u.id")
        .where("u.status", "=", "active")
        .group_by("u.id", "u.name")
        .having("COUNT(o.id)", ">", 1)
        .order_by("u.name")
        .limit(10)
        .offset(20)
    )
    assert query.to_sql() == (
        "SELECT u.id, u.name FROM users u "
        "LEFT JOIN orders o ON o.user_id = u.id "
        "WHERE u.status = ? "
        "GROUP BY u.id, u.name "
        "HAVING COUNT(o.id) > ? "
        "ORDER BY u.name ASC LIMIT 10 OFFSET 20"
    )
    assert query.get_params() == ["active", 1]


def test_clauses_may_be_added_in_any_order():
    query = SelectQuery().limit(5).order_by("id", "DESC").where("age", ">", 18).from_("users").select("id")
    assert query.to_sql() == "SELECT id FROM users WHERE age > ? ORDER BY id DESC LIMIT 5"


def test_distinct_and_aliased_columns():
    assert SelectQuery().distinct().select("status").from_("users").to_sql() == "SELECT DISTINCT status FROM users"
    query = SelectQuery().select(n="COUNT(*)").from_("users")
    assert query.to_sql() == "SELECT COUNT(*) AS n FROM users"
    query = SelectQuery().select(func("MAX", col("age")).as_("oldest")).from_("users")
    assert query.to_sql() == "SELECT MAX(age) AS oldest FROM users"


def test_empty_where_emits_no_keyword():
    query = SelectQuery().from_("users")
    query.where_expression = WhereExpression()
    assert query.to_sql() == "SELECT * FROM users"


def test_where_parameter_order_is_append_order():
    query = (
        SelectQuery()
        .from_("users")
        .where("a", "=", 1)
        .or_where("b", "=", 2)
        .and_where(lambda c: c.where("c", "=", 3).or_where("d", "=", 4))
        .where("e", "IN", [5, 6])
    )
    assert query.to_sql() == "SELECT * FROM users WHERE a = ? OR b = ? AND (c = ? OR d = ?) AND e IN (?, ?)"
    assert query.get_params() == [1, 2, 3, 4, 5, 6]


def test_join_order_is_append_order():
    query = (
        SelectQuery()
        .from_("users u")
        .join("orders o", "o.user_id = u.id")
        .right_join("payments p", ["order_id"])
        .cross_join("regions r")
        .natural_join("profiles")
        .full_join("notes n", "n.user_id = u.id")
    )
    assert query.to_sql() == (
        "SELECT * FROM users u "
        "JOIN orders o ON o.user_id = u.id "
        "RIGHT JOIN payments p USING (order_id) "
        "CROSS JOIN regions r "
        "NATURAL JOIN profiles "
        "FULL JOIN notes n ON n.user_id = u.id"
    )


def test_join_parameters_come_before_where_parameters():
    query = (
        SelectQuery()
        .from_("users u")
        .inner_join("orders o", lambda c: c.where("o.user_id", "=", col("u.id")).and_where("o.total", ">", 10))
        .where("u.age", ">", 18)
    )
    assert query.to_sql() == (
        "SELECT * FROM users u INNER JOIN orders o ON o.user_id = u.id AND o.total > ? WHERE u.age > ?"
    )
    assert query.get_params() == [10, 18]


def test_subquery_in_from_and_where():
    adults = SelectQuery().from_("users").where("age", ">", 18)
    query = SelectQuery().select("name").from_(adults, "adults").where("id", "IN", SelectQuery().select("user_id").from_("orders").where("total", ">", 20))
    assert query.to_sql() == (
        "SELECT name FROM (SELECT * FROM users WHERE age > ?) adults "
        "WHERE id IN (SELECT user_id FROM orders WHERE total > ?)"
    )
    assert query.get_params() == [18, 20]


def test_where_exists():
    orders = SelectQuery().select("1").from_("orders o").where("o.user_id = u.id")
    query = SelectQuery().from_("users u").where_not_exists(orders)
    assert query.to_sql() == "SELECT * FROM users u WHERE NOT EXISTS (SELECT 1 FROM orders o WHERE o.user_id = u.id)"


def test_common_table_expressions():
    active = SelectQuery().from_("users").where("status", "=", "active")
    query = SelectQuery().with_("active", active).from_("active").where("age", ">", 18)
    assert query.to_sql() == (
        "WITH active AS (SELECT * FROM users WHERE status = ?) SELECT * FROM active WHERE age > ?"
    )
    assert query.get_params() == ["active", 18]
    counter = raw("SELECT 1 AS n UNION ALL SELECT n + 1 FROM counter WHERE n < 5")
    query = SelectQuery().with_recursive("counter", counter).select("n").from_("counter")
    assert query.to_sql().startswith("WITH RECURSIVE counter AS (SELECT 1 AS n")


def test_having_variants():
    query = (
        SelectQuery()
        .select("status")
        .from_("users")
        .group_by("status")
        .having("COUNT(*)", ">", 1)
        .or_having("MAX(age)", ">=", 40)
        .and_having("status", "!=", "banned")
    )
    assert query.to_sql().endswith("HAVING COUNT(*) > ? OR MAX(age) >= ? AND status != ?")
    assert query.get_params() == [1, 40, "banned"]


def test_limit_and_offset_validation():
    with pytest.raises(InvalidArgumentError, match="LIMIT must not be negative"):
        SelectQuery().from_("users").limit(-1).build()
    with pytest.raises(InvalidArgumentError, match="OFFSET must be an integer"):
        SelectQuery().from_("users").offset("10").to_sql()
    with pytest.raises(InvalidArgumentError, match="LIMIT must be an integer"):
        SelectQuery().from_("users").limit(True).to_sql()
    assert SelectQuery().from_("users").limit(0).to_sql() == "SELECT * FROM users LIMIT 0"
    assert SelectQuery().from_("users").limit(5).limit(None).to_sql() == "SELECT * FROM users"


def test_negative_limit_produces_no_sql():
    query = SelectQuery().from_("users").limit(-1)
    with pytest.raises(InvalidArgumentError):
        query.build()
    assert not query.built
    query.limit(3)
    assert query.to_sql() == "SELECT * FROM users LIMIT 3"


def test_str_and_render():
    query = SelectQuery().from_("users").where("id", "=", 7)
    assert str(query) == query.to_sql()
    assert query.render() == ("SELECT * FROM users WHERE id = ?", [7])
    assert query.sql == "SELECT * FROM users WHERE id = ?"
    assert query.values == (7,)


def test_limit_and_offset_fields_are_checked_at_build():
    query = SelectQuery(limit_value="abc").from_("users")
    with pytest.raises(InvalidArgumentError, match="LIMIT must be an integer"):
        query.build()
    with pytest.raises(InvalidArgumentError, match="OFFSET must be an integer"):
        SelectQuery(limit_value=5, offset_value="5").from_("users").build()


def test_offset_requires_limit():
    query = SelectQuery().from_("users").offset(1)
    with pytest.raises(InvalidArgumentError, match="OFFSET requires a LIMIT"):
        query.to_sql()
    assert query.limit(10).to_sql() == "SELECT * FROM users LIMIT 10 OFFSET 1"
