"""Generic statement builder.

This module provides the dialect-neutral capability set: column type mapping,
table DDL and bound DML. Dialect builders compose an instance of
:class:`QueryBuilder` and override only the statements whose SQL differs.
"""

import re
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from sqlwright.conditions import ConditionCompiler
from sqlwright.params import BoundStatement, ParameterBinder
from sqlwright.quoting import Quoter, SqlglotQuoter
from sqlwright.utils.config import DbConfig

ColumnDefinitions = Union[Mapping[str, str], Sequence[Union[str, Tuple[str, str]]]]

# Abstract column types understood by create_table/add_column
GENERIC_TYPE_MAP: Dict[str, str] = {
    "pk": "integer NOT NULL PRIMARY KEY",
    "bigpk": "bigint NOT NULL PRIMARY KEY",
    "char": "char(1)",
    "string": "varchar(255)",
    "text": "text",
    "tinyint": "smallint",
    "smallint": "smallint",
    "integer": "integer",
    "bigint": "bigint",
    "float": "float",
    "double": "double precision",
    "decimal": "decimal(10,0)",
    "datetime": "timestamp",
    "timestamp": "timestamp",
    "time": "time",
    "date": "date",
    "binary": "blob",
    "boolean": "boolean",
    "money": "decimal(19,4)",
    "json": "json",
}

_SIZED_TYPE = re.compile(r"^(\w+)\((.+?)\)(.*)$", re.DOTALL)
_QUALIFIED_TYPE = re.compile(r"^(\w+)\s+")
_TYPE_SIZE = re.compile(r"\(.+\)")


class QueryBuilder:
    """Dialect-neutral SQL statement builder.

    Args:
        config: Static database configuration (charset, collation, table
               prefix, placeholder prefix). Defaults to ``DbConfig()``.
        quoter: Identifier quoter. Defaults to a SQLGlot quoter for
               :attr:`dialect` using the configured table prefix.
        type_map: Abstract column type -> concrete type mapping.

    Example:
        >>> builder = QueryBuilder()
        >>> builder.drop_table_if_exists("widgets")
        'DROP TABLE IF EXISTS "widgets"'
    """

    name = "generic"
    dialect: Optional[str] = None

    def __init__(
        self,
        config: Optional[DbConfig] = None,
        quoter: Optional[Quoter] = None,
        type_map: Optional[Mapping[str, str]] = None,
    ):
        self.config = config or DbConfig()
        self.quoter = quoter or SqlglotQuoter(
            self.dialect, table_prefix=self.config.table_prefix
        )
        self.type_map: Dict[str, str] = dict(
            GENERIC_TYPE_MAP if type_map is None else type_map
        )
        self.conditions = ConditionCompiler(self.quoter)

    def binder(self, params: Optional[Mapping[str, Any]] = None) -> ParameterBinder:
        """Create a placeholder allocator for one build call."""
        return ParameterBinder(self.config.param_prefix, params)

    def build_where(self, condition: Any, binder: ParameterBinder) -> str:
        """Compile a condition into a WHERE clause ("" when empty)."""
        return self.conditions.compile(condition, binder)

    def get_column_type(self, column_type: str) -> str:
        """Convert an abstract column type into a concrete one.

        Abstract types may carry a size (``string(64)``) or trailing
        constraints (``integer NOT NULL``). Types not found in the type map
        are returned unchanged.
        """
        if column_type in self.type_map:
            return self.type_map[column_type]

        match = _SIZED_TYPE.match(column_type)
        if match:
            if match.group(1) in self.type_map:
                mapped = self.type_map[match.group(1)]
                return (
                    _TYPE_SIZE.sub(f"({match.group(2)})", mapped, count=1)
                    + match.group(3)
                )
            return column_type

        match = _QUALIFIED_TYPE.match(column_type)
        if match and match.group(1) in self.type_map:
            return self.type_map[match.group(1)] + column_type[len(match.group(1)) :]

        return column_type

    def _column_definitions(self, columns: ColumnDefinitions) -> Sequence[str]:
        items = columns.items() if isinstance(columns, Mapping) else columns
        definitions = []
        for item in items:
            if isinstance(item, str):
                # Raw definitions such as table constraints
                definitions.append(item)
            else:
                name, column_type = item
                definitions.append(
                    f"{self.quoter.quote_column_name(name)} "
                    f"{self.get_column_type(column_type)}"
                )
        return definitions

    def create_table(
        self, table: str, columns: ColumnDefinitions, options: Optional[str] = None
    ) -> str:
        """Build a CREATE TABLE statement.

        Args:
            table: Table name; quoted by this method.
            columns: ``name -> type`` mapping, or a sequence of ``(name, type)``
                    pairs and raw definition strings.
            options: SQL fragment appended after the column list.

        Returns:
            The CREATE TABLE statement.
        """
        body = ",\n".join(f"\t{col}" for col in self._column_definitions(columns))
        sql = f"CREATE TABLE {self.quoter.quote_table_name(table)} (\n{body}\n)"
        return sql if options is None else f"{sql} {options}"

    def drop_table(self, table: str) -> str:
        return f"DROP TABLE {self.quoter.quote_table_name(table)}"

    def drop_table_if_exists(self, table: str) -> str:
        """Build a DROP TABLE statement that is a no-op for missing tables."""
        return f"DROP TABLE IF EXISTS {self.quoter.quote_table_name(table)}"

    def rename_table(self, old_name: str, new_name: str) -> str:
        return (
            f"ALTER TABLE {self.quoter.quote_table_name(old_name)} "
            f"RENAME TO {self.quoter.quote_table_name(new_name)}"
        )

    def truncate_table(self, table: str) -> str:
        return f"TRUNCATE TABLE {self.quoter.quote_table_name(table)}"

    def add_column(self, table: str, column: str, column_type: str) -> str:
        return (
            f"ALTER TABLE {self.quoter.quote_table_name(table)} "
            f"ADD {self.quoter.quote_column_name(column)} "
            f"{self.get_column_type(column_type)}"
        )

    def drop_column(self, table: str, column: str) -> str:
        return (
            f"ALTER TABLE {self.quoter.quote_table_name(table)} "
            f"DROP COLUMN {self.quoter.quote_column_name(column)}"
        )

    def rename_sequence(self, old_name: str, new_name: str) -> str:
        """Build an ALTER SEQUENCE ... RENAME TO statement."""
        return (
            f"ALTER SEQUENCE {self.quoter.quote_table_name(old_name)} "
            f"RENAME TO {self.quoter.quote_table_name(new_name)}"
        )

    def insert(
        self,
        table: str,
        columns: Mapping[str, Any],
        params: Optional[Mapping[str, Any]] = None,
    ) -> BoundStatement:
        """Build an INSERT statement with every value bound to a placeholder."""
        binder = self.binder(params)
        names = ", ".join(self.quoter.quote_column_name(name) for name in columns)
        values = ", ".join(binder.bind(value) for value in columns.values())
        sql = (
            f"INSERT INTO {self.quoter.quote_table_name(table)} "
            f"({names}) VALUES ({values})"
        )
        return binder.statement(sql)

    def update(
        self,
        table: str,
        columns: Mapping[str, Any],
        condition: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> BoundStatement:
        """Build an UPDATE statement.

        SET values are bound first, then any values from the condition.
        """
        binder = self.binder(params)
        assignments = ", ".join(
            f"{self.quoter.quote_column_name(name)}={binder.bind(value)}"
            for name, value in columns.items()
        )
        sql = f"UPDATE {self.quoter.quote_table_name(table)} SET {assignments}"
        where = self.build_where(condition, binder)
        return binder.statement(sql if where == "" else f"{sql} {where}")

    def delete(
        self,
        table: str,
        condition: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> BoundStatement:
        binder = self.binder(params)
        sql = f"DELETE FROM {self.quoter.quote_table_name(table)}"
        where = self.build_where(condition, binder)
        return binder.statement(sql if where == "" else f"{sql} {where}")

    def replace(
        self,
        table: str,
        column: str,
        find: str,
        replace: str,
        condition: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> BoundStatement:
        """Build a statement replacing text in a column.

        Args:
            table: The table to update. Spliced as given apart from
                  ``{{table}}`` token expansion, so pass a raw or
                  pre-quoted name.
            column: The column to search; quoted by this method.
            find: The text to search for.
            replace: The replacement text.
            condition: Optional condition for the WHERE clause.
            params: The caller's existing parameters. Only their count is
                   read, to continue placeholder numbering; the map is not
                   modified.

        Returns:
            A BoundStatement whose bindings are ``find``, ``replace``, then
            any values bound by the condition. Merge them into the caller's
            parameters before executing.
        """
        binder = self.binder(params)
        column = self.quoter.quote_column_name(column)
        find_placeholder = binder.bind(find)
        replace_placeholder = binder.bind(replace)

        sql = (
            f"UPDATE {self.quoter.quote_sql(table)} SET {column} = "
            f"REPLACE({column}, {find_placeholder}, {replace_placeholder})"
        )
        where = self.build_where(condition, binder)
        return binder.statement(sql if where == "" else f"{sql} {where}")

    def fixed_order(self, column: str, values: Sequence[Any]) -> str:
        """Build a portable expression ordering rows by an explicit value list.

        Rows matching ``values[i]`` sort as ``i``; all others sort last.
        """
        column = self.quoter.quote_column_name(column)
        sql = "CASE"
        for i, value in enumerate(values):
            sql += f" WHEN {column}={self.quoter.quote_value(value)} THEN {i}"
        return f"{sql} ELSE {len(values)} END"

    def delete_duplicates(
        self, table: str, columns: Sequence[str], pk: str = "id"
    ) -> str:
        """Build a statement deleting duplicate rows.

        Within each group of rows sharing the same values for ``columns``,
        the row with the smallest ``pk`` is kept.
        """
        table = self.quoter.quote_table_name(table)
        pk = self.quoter.quote_column_name(pk)
        b = self.quoter.quote_column_name("b")

        sql = (
            f"DELETE FROM {table} WHERE EXISTS (SELECT 1 FROM {table} {b}"
            f" WHERE {b}.{pk} < {table}.{pk}"
        )
        for column in columns:
            column = self.quoter.quote_column_name(column)
            sql += f" AND {b}.{column} = {table}.{column}"

        return sql + ")"

