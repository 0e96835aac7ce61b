"""Placeholder allocation for bound statement parameters."""

from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

DEFAULT_PARAM_PREFIX = ":qp"

Binding = Tuple[str, Any]


class BoundStatement(NamedTuple):
    """A SQL string together with the parameter bindings it introduced.

    Bindings are returned rather than written into a caller-owned map, so
    callers merge them explicitly:

        >>> sql, bindings = builder.replace("t", "c", "foo", "bar")
        >>> params.update(bindings)
    """

    sql: str
    bindings: List[Binding]

    @property
    def params(self) -> Dict[str, Any]:
        """Return the bindings as a placeholder -> value dict."""
        return dict(self.bindings)


class ParameterBinder:
    """Allocate placeholder names for values bound during one build call.

    Placeholder names are ``prefix + n`` where ``n`` is the size the
    caller's parameter map would have at the time of insertion: the number
    of entries already in ``params`` plus the bindings made so far.

    Args:
        prefix: Placeholder prefix (including the leading colon).
        params: The caller's existing parameters. Only its size is read.
    """

    def __init__(
        self,
        prefix: str = DEFAULT_PARAM_PREFIX,
        params: Optional[Mapping[str, Any]] = None,
    ):
        self.prefix = prefix
        self.offset = len(params) if params else 0
        self.bindings: List[Binding] = []

    def bind(self, value: Any) -> str:
        """Record a value and return the placeholder it is bound to."""
        name = f"{self.prefix}{self.offset + len(self.bindings)}"
        self.bindings.append((name, value))
        return name

    def statement(self, sql: str) -> BoundStatement:
        """Wrap a finished SQL string with the bindings collected so far."""
        return BoundStatement(sql, list(self.bindings))
