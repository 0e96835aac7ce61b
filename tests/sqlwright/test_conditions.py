"""Tests for condition compilation."""

import pytest

from sqlwright.conditions import ConditionCompiler, is_empty
from sqlwright.errors import ConditionError
from sqlwright.params import ParameterBinder
from sqlwright.quoting import SqlglotQuoter


@pytest.fixture
def compiler():
    return ConditionCompiler(SqlglotQuoter("mysql", table_prefix="craft_"))


@pytest.fixture
def binder():
    return ParameterBinder()


class TestEmptyConditions:
    """Empty conditions compile to nothing."""

    @pytest.mark.parametrize("condition", [None, "", "   ", {}, [], ()])
    def test_empty_condition(self, compiler, binder, condition):
        """Test empty condition."""
        assert is_empty(condition)
        assert compiler.compile(condition, binder) == ""
        assert binder.bindings == []


class TestRawConditions:
    """Tests for raw SQL conditions."""

    def test_raw_sql(self, compiler, binder):
        """Test raw sql."""
        assert compiler.compile("siteId = 1", binder) == "WHERE siteId = 1"

    def test_tokens_expanded(self, compiler, binder):
        """Test tokens expanded."""
        result = compiler.compile("[[siteId]] = 1", binder)
        assert result == "WHERE `siteId` = 1"


class TestHashConditions:
    """Tests for mapping conditions."""

    def test_single_pair(self, compiler, binder):
        """Test single pair."""
        assert compiler.compile({"siteId": 1}, binder) == "WHERE `siteId`=:qp0"
        assert binder.bindings == [(":qp0", 1)]

    def test_multiple_pairs_and_combined(self, compiler, binder):
        """Test multiple pairs and combined."""
        result = compiler.compile({"siteId": 1, "type": "entry"}, binder)
        assert result == "WHERE (`siteId`=:qp0) AND (`type`=:qp1)"
        assert binder.bindings == [(":qp0", 1), (":qp1", "entry")]

    def test_none_is_null(self, compiler, binder):
        """Test none is null."""
        assert compiler.compile({"dateDeleted": None}, binder) == (
            "WHERE `dateDeleted` IS NULL"
        )
        assert binder.bindings == []

    def test_list_is_in(self, compiler, binder):
        """Test list is in."""
        result = compiler.compile({"id": [1, 2]}, binder)
        assert result == "WHERE `id` IN (:qp0, :qp1)"


class TestOperatorConditions:
    """Tests for operator-format conditions."""

    def test_and(self, compiler, binder):
        """Test and."""
        result = compiler.compile(["and", {"a": 1}, "b > 2"], binder)
        assert result == "WHERE (`a`=:qp0) AND (b > 2)"

    def test_or_skips_empty_operands(self, compiler, binder):
        """Test or skips empty operands."""
        result = compiler.compile(["or", None, {"a": 1}], binder)
        assert result == "WHERE `a`=:qp0"

    def test_not(self, compiler, binder):
        """Test not."""
        result = compiler.compile(["not", {"a": 1}], binder)
        assert result == "WHERE NOT (`a`=:qp0)"

    def test_in(self, compiler, binder):
        """Test in."""
        result = compiler.compile(["in", "id", [3, 4]], binder)
        assert result == "WHERE `id` IN (:qp0, :qp1)"

    def test_not_in(self, compiler, binder):
        """Test not in."""
        result = compiler.compile(["NOT IN", "id", [3]], binder)
        assert result == "WHERE `id` NOT IN (:qp0)"

    def test_in_with_empty_values_matches_nothing(self, compiler, binder):
        """Test in with empty values matches nothing."""
        assert compiler.compile(["in", "id", []], binder) == "WHERE 0=1"

    def test_like_escapes_and_wraps(self, compiler, binder):
        """Test like escapes and wraps."""
        result = compiler.compile(["like", "title", "50%_off"], binder)
        assert result == "WHERE `title` LIKE :qp0"
        assert binder.bindings == [(":qp0", "%50\\%\\_off%")]

    def test_between(self, compiler, binder):
        """Test between."""
        result = compiler.compile(["between", "id", 1, 10], binder)
        assert result == "WHERE `id` BETWEEN :qp0 AND :qp1"
        assert binder.bindings == [(":qp0", 1), (":qp1", 10)]

    @pytest.mark.parametrize("operator", [">", ">=", "<", "<=", "!=", "<>", "="])
    def test_comparison(self, compiler, binder, operator):
        """Test comparison."""
        result = compiler.compile([operator, "id", 5], binder)
        assert result == f"WHERE `id` {operator} :qp0"

    def test_nested_bindings_in_order(self, compiler, binder):
        """Test nested bindings in order."""
        compiler.compile(
            ["and", {"a": "x"}, ["or", {"b": "y"}, ["like", "c", "z"]]], binder
        )
        assert [name for name, _ in binder.bindings] == [":qp0", ":qp1", ":qp2"]
        assert [value for _, value in binder.bindings] == ["x", "y", "%z%"]


class TestMalformedConditions:
    """Tests for ConditionError."""

    def test_unknown_operator(self, compiler, binder):
        """Test unknown operator."""
        with pytest.raises(ConditionError, match="Unknown condition operator"):
            compiler.compile(["frobnicate", "a", 1], binder)

    def test_wrong_operand_count(self, compiler, binder):
        """Test wrong operand count."""
        with pytest.raises(ConditionError):
            compiler.compile(["between", "id", 1], binder)

    def test_operator_must_be_string(self, compiler, binder):
        """Test operator must be string."""
        with pytest.raises(ConditionError):
            compiler.compile([1, 2, 3], binder)

    def test_unsupported_type(self, compiler, binder):
        """Test unsupported type."""
        with pytest.raises(ConditionError, match="Unsupported condition type"):
            compiler.compile(42, binder)
