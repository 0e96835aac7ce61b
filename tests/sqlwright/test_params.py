"""Tests for placeholder allocation."""

from sqlwright.params import BoundStatement, ParameterBinder


class TestParameterBinder:
    """Tests for ParameterBinder."""

    def test_names_follow_insertion_order(self):
        """Test names follow insertion order."""
        binder = ParameterBinder()
        assert binder.bind("foo") == ":qp0"
        assert binder.bind("bar") == ":qp1"
        assert binder.bindings == [(":qp0", "foo"), (":qp1", "bar")]

    def test_numbering_continues_from_existing_params(self):
        """Test numbering continues from existing params."""
        binder = ParameterBinder(params={":qp0": 1, ":qp1": 2})
        assert binder.bind("x") == ":qp2"

    def test_existing_params_not_modified(self):
        """Test existing params not modified."""
        params = {":qp0": 1}
        binder = ParameterBinder(params=params)
        binder.bind("x")
        assert params == {":qp0": 1}

    def test_custom_prefix(self):
        """Test custom prefix."""
        binder = ParameterBinder(prefix=":p")
        assert binder.bind(1) == ":p0"

    def test_statement_snapshot(self):
        """Test statement snapshot."""
        binder = ParameterBinder()
        binder.bind("a")
        statement = binder.statement("SELECT :qp0")
        binder.bind("b")

        assert statement.sql == "SELECT :qp0"
        assert statement.bindings == [(":qp0", "a")]


class TestBoundStatement:
    """Tests for BoundStatement."""

    def test_unpacks_as_tuple(self):
        """Test unpacks as tuple."""
        sql, bindings = BoundStatement("SQL", [(":qp0", 1)])
        assert sql == "SQL"
        assert bindings == [(":qp0", 1)]

    def test_params_dict(self):
        """Test params dict."""
        statement = BoundStatement("SQL", [(":qp0", "a"), (":qp1", "b")])
        assert statement.params == {":qp0": "a", ":qp1": "b"}
