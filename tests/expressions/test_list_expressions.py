"""Tests for list-shaped clauses: ORDER BY, select lists, SET, VALUES, WITH."""

import pytest

from clausework.errors import InvalidArgumentError
from clausework.expressions import (
    AssignmentExpression,
    ColumnListExpression,
    GroupExpression,
    OrderExpression,
    SelectExpression,
    ValueListExpression,
    WithExpression,
    col,
    raw,
)
from clausework.queries import SelectQuery


class TestOrderExpression:

    def test_directions(self):
        order = OrderExpression().append("name").append("age", "desc")
        assert order.sql == "name ASC, age DESC"

    def test_sort_expressions_and_mappings(self):
        order = OrderExpression().append(col("created_at").desc()).append({"id": "asc nulls last"})
        assert order.sql == "created_at DESC, id ASC NULLS LAST"

    def test_bad_direction_raises(self):
        order = OrderExpression().append("name", "sideways")
        with pytest.raises(InvalidArgumentError, match="sort direction"):
            _ = order.sql

    def test_expression_values_are_kept(self):
        order = OrderExpression().append(raw("ABS(score - ?)", 50))
        assert order.render() == ("ABS(score - ?) ASC", [50])


class TestSelectLists:

    def test_select_expression(self):
        select = SelectExpression().append("id").append("COUNT(*)", "n")
        assert select.sql == "id, COUNT(*) AS n"

    def test_select_subquery_item(self):
        orders = SelectQuery().select("COUNT(*)").from_("orders").where("orders.user_id = users.id")
        select = SelectExpression().append(orders, "n_orders")
        assert select.sql == "(SELECT COUNT(*) FROM orders WHERE orders.user_id = users.id) AS n_orders"

    def test_group_and_column_lists(self):
        assert GroupExpression().append("a").append(col("b")).sql == "a, b"
        columns = ColumnListExpression().append("id").append("name")
        assert columns.names == ("id", "name")


class TestAssignmentExpression:

    def test_assignments_in_order(self):
        assignments = AssignmentExpression().append("name", "Bob").append({"age": 30, "status": "new"})
        assert assignments.sql == "name = ?, age = ?, status = ?"
        assert assignments.values == ("Bob", 30, "new")

    def test_duplicate_column_overrides_in_place(self):
        assignments = AssignmentExpression().append("name", "Bob").append("age", 30).append("name", "Carol")
        assert assignments.sql == "name = ?, age = ?"
        assert assignments.values == ("Carol", 30)
        assert assignments.assignments == {"name": "Carol", "age": 30}

    def test_expression_and_subquery_values(self):
        total = SelectQuery().select("SUM(total)").from_("orders").where("user_id", "=", 1)
        assignments = (
            AssignmentExpression()
            .append("counter", raw("counter + ?", 1))
            .append("total", total)
        )
        assert assignments.sql == "counter = counter + ?, total = (SELECT SUM(total) FROM orders WHERE user_id = ?)"
        assert assignments.values == (1, 1)

    def test_list_value_is_one_parameter(self):
        assignments = AssignmentExpression().append("tags", [1, 2])
        assert assignments.sql == "tags = ?"
        assert assignments.values == ([1, 2],)

    def test_invalid_columns(self):
        with pytest.raises(InvalidArgumentError):
            AssignmentExpression().append(col("name"), "Bob")
        with pytest.raises(InvalidArgumentError, match="non-empty"):
            _ = AssignmentExpression().append(" ", "Bob").sql


class TestValueListExpression:

    def test_mapping_rows_follow_first_row_columns(self):
        rows = ValueListExpression().append({"a": 1, "b": 2}).append({"b": 4, "a": 3})
        assert rows.inferred_columns() == ("a", "b")
        assert rows.sql == "(?, ?), (?, ?)"
        assert rows.values == (1, 2, 3, 4)

    def test_rows_are_copied(self):
        row = {"a": 1}
        rows = ValueListExpression().append(row)
        row["a"] = 2
        assert rows.values == (1,)

    def test_compose_for_declared_columns(self):
        rows = ValueListExpression().append({"name": "Bob", "age": 3})
        assert rows.compose_for(("age", "name")) == ("(?, ?)", (3, "Bob"))
        positional = ValueListExpression().append(("Bob", raw("CURRENT_TIMESTAMP")))
        assert positional.compose_for(("name", "created")) == ("(?, CURRENT_TIMESTAMP)", ("Bob",))

    def test_mismatched_rows_raise(self):
        rows = ValueListExpression().append({"a": 1, "b": 2}).append({"a": 3})
        with pytest.raises(InvalidArgumentError, match="Row 1"):
            _ = rows.sql
        positional = ValueListExpression().append((1, 2, 3))
        with pytest.raises(InvalidArgumentError, match="expected 2"):
            positional.compose_for(("a", "b"))
        with pytest.raises(InvalidArgumentError, match="mapping or a sequence"):
            ValueListExpression().append("a")


class TestWithExpression:

    def test_common_table_expressions(self):
        active = SelectQuery().from_("users").where("status", "=", "active")
        ctes = WithExpression().append("active", active).append("recent", raw("SELECT * FROM orders"))
        assert ctes.sql == (
            "active AS (SELECT * FROM users WHERE status = ?), recent AS (SELECT * FROM orders)"
        )
        assert ctes.values == ("active",)

    def test_recursive(self):
        tree = raw("SELECT 1 AS n UNION ALL SELECT n + 1 FROM counter WHERE n < ?", 10)
        ctes = WithExpression().append("counter", tree, recursive=True)
        assert ctes.sql.startswith("RECURSIVE counter AS (")
        assert ctes.values == (10,)
