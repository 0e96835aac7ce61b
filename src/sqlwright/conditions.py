"""Compile query conditions into WHERE clauses.

Three condition formats are supported:

- **Raw SQL**: a string, used verbatim after ``{{table}}``/``[[column]]``
  token expansion.
- **Hash format**: a mapping of column name to value. Values are compared
  with ``=``; ``None`` becomes ``IS NULL`` and lists become ``IN (...)``.
  Pairs are AND-combined.
- **Operator format**: a list or tuple whose first item names the operator,
  e.g. ``["and", {"type": 1}, ["like", "title", "news"]]``.

Every value is bound through a :class:`ParameterBinder`; the compiler never
inspects values beyond deciding how to bind them.
"""

from typing import Any, Callable, Dict, List, Mapping, Sequence

from sqlwright.errors import ConditionError
from sqlwright.params import ParameterBinder
from sqlwright.quoting import Quoter

COMPARISON_OPERATORS = ("=", "!=", "<>", "<", "<=", ">", ">=")


def is_empty(condition: Any) -> bool:
    """Return True for conditions that compile to nothing."""
    if condition is None:
        return True
    if isinstance(condition, str):
        return condition.strip() == ""
    if isinstance(condition, (Mapping, list, tuple)):
        return len(condition) == 0
    return False


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ConditionCompiler:
    """Compile conditions using a dialect quoter.

    Args:
        quoter: Quoter used for column names and raw SQL token expansion.
    """

    def __init__(self, quoter: Quoter):
        self.quoter = quoter
        self._builders: Dict[str, Callable[[str, Sequence[Any], ParameterBinder], str]] = {
            "and": self._build_conjunction,
            "or": self._build_conjunction,
            "not": self._build_not,
            "in": self._build_in,
            "not in": self._build_in,
            "like": self._build_like,
            "not like": self._build_like,
            "between": self._build_between,
            "not between": self._build_between,
        }

    def compile(self, condition: Any, binder: ParameterBinder) -> str:
        """Compile a condition into a ``WHERE`` clause.

        Args:
            condition: Raw SQL, hash or operator condition, or None.
            binder: Receives every bound value, in SQL order.

        Returns:
            ``"WHERE <expr>"``, or ``""`` when the condition is empty.

        Raises:
            ConditionError: If the condition is malformed.
        """
        expression = self.build(condition, binder)
        return f"WHERE {expression}" if expression else ""

    def build(self, condition: Any, binder: ParameterBinder) -> str:
        """Compile a condition into a bare boolean expression."""
        if is_empty(condition):
            return ""
        if isinstance(condition, str):
            return self.quoter.quote_sql(condition)
        if isinstance(condition, Mapping):
            return self._build_hash(condition, binder)
        if isinstance(condition, (list, tuple)):
            operator = condition[0]
            if not isinstance(operator, str):
                raise ConditionError(
                    f"Operator condition must start with an operator name, got {operator!r}"
                )
            return self._build_operator(operator, list(condition[1:]), binder)

        raise ConditionError(f"Unsupported condition type: {type(condition).__name__}")

    def _build_operator(
        self, operator: str, operands: List[Any], binder: ParameterBinder
    ) -> str:
        key = " ".join(operator.lower().split())
        if key in self._builders:
            return self._builders[key](key, operands, binder)
        if key in COMPARISON_OPERATORS:
            return self._build_comparison(key, operands, binder)
        raise ConditionError(f"Unknown condition operator: {operator!r}")

    def _build_hash(self, condition: Mapping[str, Any], binder: ParameterBinder) -> str:
        parts = []
        for column, value in condition.items():
            if isinstance(value, (list, tuple, set, frozenset)):
                parts.append(self._build_in("in", [column, list(value)], binder))
            elif value is None:
                parts.append(f"{self.quoter.quote_column_name(column)} IS NULL")
            else:
                parts.append(
                    f"{self.quoter.quote_column_name(column)}={binder.bind(value)}"
                )

        return parts[0] if len(parts) == 1 else "(" + ") AND (".join(parts) + ")"

    def _build_conjunction(
        self, operator: str, operands: Sequence[Any], binder: ParameterBinder
    ) -> str:
        parts = [self.build(operand, binder) for operand in operands]
        parts = [part for part in parts if part]
        if not parts:
            return ""
        if len(parts) == 1:
            return parts[0]
        glue = f") {operator.upper()} ("
        return "(" + glue.join(parts) + ")"

    def _build_not(
        self, operator: str, operands: Sequence[Any], binder: ParameterBinder
    ) -> str:
        if len(operands) != 1:
            raise ConditionError("Operator 'NOT' requires exactly one operand.")
        expression = self.build(operands[0], binder)
        return f"NOT ({expression})" if expression else ""

    def _build_in(
        self, operator: str, operands: Sequence[Any], binder: ParameterBinder
    ) -> str:
        if len(operands) != 2:
            raise ConditionError(f"Operator '{operator.upper()}' requires two operands.")
        column, values = operands
        if not isinstance(values, (list, tuple, set, frozenset)):
            values = [values]
        values = list(values)
        if not values:
            # Nothing is IN an empty set; everything is NOT IN it
            return "0=1" if operator == "in" else ""

        column = self.quoter.quote_column_name(column)
        placeholders = [binder.bind(value) for value in values]
        return f"{column} {operator.upper()} ({', '.join(placeholders)})"

    def _build_like(
        self, operator: str, operands: Sequence[Any], binder: ParameterBinder
    ) -> str:
        if len(operands) != 2:
            raise ConditionError(f"Operator '{operator.upper()}' requires two operands.")
        column, value = operands
        placeholder = binder.bind(f"%{_escape_like(str(value))}%")
        return f"{self.quoter.quote_column_name(column)} {operator.upper()} {placeholder}"

    def _build_between(
        self, operator: str, operands: Sequence[Any], binder: ParameterBinder
    ) -> str:
        if len(operands) != 3:
            raise ConditionError(
                f"Operator '{operator.upper()}' requires three operands."
            )
        column, low, high = operands
        column = self.quoter.quote_column_name(column)
        low_ph = binder.bind(low)
        high_ph = binder.bind(high)
        return f"{column} {operator.upper()} {low_ph} AND {high_ph}"

    def _build_comparison(
        self, operator: str, operands: Sequence[Any], binder: ParameterBinder
    ) -> str:
        if len(operands) != 2:
            raise ConditionError(f"Operator '{operator}' requires two operands.")
        column, value = operands
        column = self.quoter.quote_column_name(column)
        if value is None:
            return f"{column} {operator} NULL"
        return f"{column} {operator} {binder.bind(value)}"
