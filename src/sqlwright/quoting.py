"""Identifier and value quoting for SQL dialects.

Quoting is delegated to SQLGlot so that every dialect SQLGlot knows about
gets its own identifier delimiters and literal escaping rules. On top of
that, the quoter understands two placeholder syntaxes commonly used in
migration code:

- ``{{name}}`` / ``{{%name}}``: a table name; ``%`` is replaced with the
  configured table prefix.
- ``[[name]]``: a column name.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlglot import exp

_TOKEN_PATTERN = re.compile(r"(\{\{(%?[\w\-\. ]+%?)\}\}|\[\[([\w\-\. ]+)\]\])")
_TABLE_TOKEN_PATTERN = re.compile(r"^\{\{(%?[\w\-\. ]+%?)\}\}$")


class Quoter(ABC):
    """Abstract interface for quoting SQL names and values.

    Output of every method is safe to splice directly into SQL text.
    """

    @abstractmethod
    def quote_table_name(self, name: str) -> str:
        """Quote a (possibly schema-qualified) table name."""
        pass

    @abstractmethod
    def quote_column_name(self, name: str) -> str:
        """Quote a (possibly table-qualified) column name."""
        pass

    @abstractmethod
    def quote_value(self, value: Any) -> str:
        """Render a Python value as a SQL literal."""
        pass

    @abstractmethod
    def quote_sql(self, sql: str) -> str:
        """Expand ``{{table}}`` and ``[[column]]`` tokens inside a SQL fragment."""
        pass


class SqlglotQuoter(Quoter):
    """Quoter backed by SQLGlot's dialect generators.

    Args:
        dialect: SQLGlot dialect name (e.g. "mysql"). None selects SQLGlot's
                 default dialect, which quotes identifiers with double quotes.
        table_prefix: Replaces ``%`` in ``{{%name}}`` table tokens.

    Example:
        >>> quoter = SqlglotQuoter("mysql", table_prefix="craft_")
        >>> quoter.quote_table_name("{{%entries}}")
        '`craft_entries`'
        >>> quoter.quote_column_name("e.title")
        '`e`.`title`'
    """

    def __init__(self, dialect: Optional[str] = None, table_prefix: str = ""):
        self.dialect = dialect
        self.table_prefix = table_prefix
        self._quote_char = self._identifier("x")[0]

    def _identifier(self, name: str) -> str:
        return exp.to_identifier(name, quoted=True).sql(dialect=self.dialect)

    def _is_quoted(self, name: str) -> bool:
        return name.startswith(self._quote_char)

    def _expand_table_token(self, token: str) -> str:
        return token.replace("%", self.table_prefix)

    def quote_simple_table_name(self, name: str) -> str:
        """Quote a table name that carries no schema prefix."""
        if self._is_quoted(name):
            return name
        return self._identifier(name)

    def quote_simple_column_name(self, name: str) -> str:
        """Quote a column name that carries no table prefix."""
        if name == "*" or self._is_quoted(name):
            return name
        return self._identifier(name)

    def quote_table_name(self, name: str) -> str:
        match = _TABLE_TOKEN_PATTERN.match(name)
        if match:
            name = self._expand_table_token(match.group(1))
        elif "(" in name or "{{" in name:
            return name

        if "." not in name:
            return self.quote_simple_table_name(name)

        return ".".join(self.quote_simple_table_name(part) for part in name.split("."))

    def quote_column_name(self, name: str) -> str:
        if "(" in name or "[[" in name:
            return name

        prefix = ""
        if "." in name:
            table, name = name.rsplit(".", 1)
            prefix = self.quote_table_name(table) + "."

        return prefix + self.quote_simple_column_name(name)

    def quote_value(self, value: Any) -> str:
        return exp.convert(value).sql(dialect=self.dialect)

    def quote_sql(self, sql: str) -> str:
        def _replace(match: "re.Match[str]") -> str:
            if match.group(3) is not None:
                return self.quote_column_name(match.group(3))
            return self.quote_table_name(self._expand_table_token(match.group(2)))

        return _TOKEN_PATTERN.sub(_replace, sql)
