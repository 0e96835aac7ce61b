"""MySQL statement builder.

The MySQL builder wraps a generic :class:`QueryBuilder` configured with
MySQL quoting and column types, and overrides the statements whose MySQL SQL
differs: table options, sequence renaming, fixed ordering and duplicate row
deletion. Every other statement is delegated to the wrapped builder.
"""

import re
from typing import Any, Dict, Optional, Sequence

from sqlwright.builder.base import ColumnDefinitions, QueryBuilder
from sqlwright.errors import UnsupportedOperationError
from sqlwright.quoting import SqlglotQuoter
from sqlwright.utils.config import DbConfig

MYSQL_TYPE_MAP: Dict[str, str] = {
    "pk": "int(11) NOT NULL AUTO_INCREMENT PRIMARY KEY",
    "upk": "int(10) UNSIGNED NOT NULL AUTO_INCREMENT PRIMARY KEY",
    "bigpk": "bigint(20) NOT NULL AUTO_INCREMENT PRIMARY KEY",
    "ubigpk": "bigint(20) UNSIGNED NOT NULL AUTO_INCREMENT PRIMARY KEY",
    "char": "char(1)",
    "string": "varchar(255)",
    "text": "text",
    "tinyint": "tinyint(3)",
    "smallint": "smallint(6)",
    "integer": "int(11)",
    "bigint": "bigint(20)",
    "float": "float",
    "double": "double",
    "decimal": "decimal(10,0)",
    "datetime": "datetime",
    "timestamp": "timestamp",
    "time": "time",
    "date": "date",
    # LONGBLOB rather than BLOB so binary columns are not capped at 64KB
    "binary": "longblob",
    "boolean": "tinyint(1)",
    "money": "decimal(19,4)",
    "json": "json",
}

# Keyword detection is a plain regex match, not a parser; keywords inside
# comments or string literals are counted as present.
_ENGINE_PATTERN = re.compile(r"\bENGINE\b", re.IGNORECASE)
_CHARSET_PATTERN = re.compile(r"\bCHARACTER +SET\b", re.IGNORECASE)
_COLLATE_PATTERN = re.compile(r"\bCOLLATE\b", re.IGNORECASE)

DEFAULT_ENGINE = "InnoDb"


class MySQLQueryBuilder:
    """Statement builder for MySQL and MariaDB.

    Args:
        config: Static database configuration. ``charset`` and ``collation``
               are used as table defaults by :meth:`create_table`.
        base: The generic builder to delegate to. Defaults to a
             :class:`QueryBuilder` with MySQL quoting and column types.

    Example:
        >>> builder = MySQLQueryBuilder(DbConfig(charset="utf8mb4"))
        >>> builder.fixed_order("status", ["b", "a", "c"])
        "FIELD(`status`,'b','a','c')"
    """

    name = "mysql"
    dialect = "mysql"

    def __init__(
        self, config: Optional[DbConfig] = None, base: Optional[QueryBuilder] = None
    ):
        self.config = config or DbConfig()
        if base is None:
            base = QueryBuilder(
                self.config,
                quoter=SqlglotQuoter(
                    self.dialect, table_prefix=self.config.table_prefix
                ),
                type_map=MYSQL_TYPE_MAP,
            )
        self.base = base
        self.quoter = base.quoter

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not defined here
        if name == "base":
            raise AttributeError(name)
        return getattr(self.base, name)

    def table_options(self, options: Optional[str] = None) -> str:
        """Add default ENGINE, CHARACTER SET and COLLATE clauses to table options.

        Each clause is appended only when its keyword is absent from
        ``options``, in the order ENGINE, CHARACTER SET, COLLATE.
        """
        options = options.strip() if options else ""
        clauses = [options] if options else []
        if not _ENGINE_PATTERN.search(options):
            clauses.append(f"ENGINE = {DEFAULT_ENGINE}")
        if not _CHARSET_PATTERN.search(options):
            clauses.append(f"DEFAULT CHARACTER SET = {self.config.charset}")
        if self.config.collation is not None and not _COLLATE_PATTERN.search(options):
            clauses.append(f"DEFAULT COLLATE = {self.config.collation}")
        return " ".join(clauses)

    def create_table(
        self, table: str, columns: ColumnDefinitions, options: Optional[str] = None
    ) -> str:
        """Build a CREATE TABLE statement with InnoDB and the default charset.

        Args:
            table: Table name; quoted by this method.
            columns: ``name -> type`` mapping, or a sequence of ``(name, type)``
                    pairs and raw definition strings.
            options: Additional table options. Missing ENGINE, CHARACTER SET
                    and COLLATE clauses are filled in from the configuration.

        Returns:
            The CREATE TABLE statement.
        """
        return self.base.create_table(table, columns, self.table_options(options))

    def rename_sequence(self, old_name: str, new_name: str) -> str:
        """MySQL has no sequence objects.

        Raises:
            UnsupportedOperationError: Always.
        """
        raise UnsupportedOperationError(
            f"{self.name} does not support renaming sequences."
        )

    def fixed_order(self, column: str, values: Sequence[Any]) -> str:
        """Build a ``FIELD()`` expression returning rows in the order of ``values``.

        Values are quoted as literals rather than bound, since the expression
        is meant to be embedded in an ORDER BY clause.
        """
        sql = "FIELD(" + self.quoter.quote_column_name(column)
        for value in values:
            sql += "," + self.quoter.quote_value(value)
        return sql + ")"

    def delete_duplicates(
        self, table: str, columns: Sequence[str], pk: str = "id"
    ) -> str:
        """Build a self-join DELETE removing duplicate rows.

        Within each group of rows sharing the same values for ``columns``,
        the row with the smallest ``pk`` is kept.

        Args:
            table: The table to clean up.
            columns: Columns that together identify a duplicate.
            pk: Primary key column; must be unique and orderable.

        Returns:
            The DELETE statement.
        """
        table = self.quoter.quote_table_name(table)
        pk = self.quoter.quote_column_name(pk)
        a = self.quoter.quote_column_name("a")
        b = self.quoter.quote_column_name("b")

        sql = (
            f"DELETE {a} FROM {table} {a}"
            f" INNER JOIN {table} {b}"
            f" WHERE {a}.{pk} > {b}.{pk}"
        )
        for column in columns:
            column = self.quoter.quote_column_name(column)
            sql += f" AND {a}.{column} = {b}.{column}"

        return sql
