"""CLI entry point for SQL Wright."""

from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

import typer
from rich.console import Console

from sqlwright.builder import get_builder, list_builders
from sqlwright.errors import BuilderError
from sqlwright.formatters import JsonFormatter, OutputWriter, TextFormatter
from sqlwright.params import BoundStatement
from sqlwright.utils.config import load_config, resolve_db_config

app = typer.Typer(
    name="sqlwright",
    help="Generate dialect-specific DDL and DML statements.",
    invoke_without_command=False,
)
console = Console()
err_console = Console(stderr=True)

DEFAULT_DIALECT = "mysql"
OUTPUT_FORMATS = ("text", "json")

DIALECT_OPTION = typer.Option(
    None,
    "--dialect",
    "-d",
    help="Target dialect (default: mysql, or from config)",
)
OUTPUT_FORMAT_OPTION = typer.Option(
    None,
    "--output-format",
    "-f",
    help="Output format: 'text' or 'json' (default: text, or from config)",
)
OUTPUT_FILE_OPTION = typer.Option(
    None,
    "--output-file",
    "-o",
    help="Write output to file instead of stdout",
)
CHARSET_OPTION = typer.Option(
    None, "--charset", help="Default table charset (overrides config)"
)
COLLATION_OPTION = typer.Option(
    None, "--collation", help="Default table collation (overrides config)"
)
TABLE_PREFIX_OPTION = typer.Option(
    None, "--table-prefix", help="Prefix substituted for % in {{%table}} names"
)


def _parse_column(spec: str) -> Tuple[str, str]:
    """Split a "name:type" column option."""
    name, sep, column_type = spec.partition(":")
    if not sep or not name or not column_type:
        raise ValueError(f"Invalid column '{spec}'. Expected format: name:type")
    return name.strip(), column_type.strip()


def _run(
    build: Callable[[Any], Any],
    dialect: Optional[str],
    output_format: Optional[str],
    output_file: Optional[Path],
    charset: Optional[str] = None,
    collation: Optional[str] = None,
    table_prefix: Optional[str] = None,
) -> None:
    """Build a statement with the configured builder and print it.

    Args:
        build: Receives the builder and returns a SQL string or BoundStatement.
        dialect: Dialect from the CLI, overriding config.
        output_format: Output format from the CLI, overriding config.
        output_file: Optional file to write to.
        charset: Charset override.
        collation: Collation override.
        table_prefix: Table prefix override.
    """
    config = load_config()

    dialect = dialect or config.dialect or DEFAULT_DIALECT
    output_format = output_format or config.output_format or "text"

    if output_format not in OUTPUT_FORMATS:
        err_console.print(
            f"[red]Error:[/red] Invalid output format '{output_format}'. "
            "Use 'text' or 'json'."
        )
        raise typer.Exit(1)

    try:
        db_config = resolve_db_config(config, charset, collation, table_prefix)
        builder = get_builder(dialect, db_config)
        result = build(builder)

    except BuilderError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    statement = result if isinstance(result, BoundStatement) else BoundStatement(result, [])

    if output_format == "json":
        OutputWriter.write(JsonFormatter.format(statement), output_file)
    elif output_file:
        OutputWriter.write(statement.sql, output_file)
    else:
        TextFormatter.format(statement, console)

    if output_file:
        err_console.print(f"[green]Statement written to {output_file}[/green]")


@app.callback()
def main():
    """SQL Wright - SQL statement builder."""
    pass


@app.command()
def dialects() -> None:
    """List the available dialects."""
    names = list_builders()
    if names:
        console.print("[bold]Available dialects:[/bold]")
        for name in names:
            console.print(f"  - {name}")
    else:
        console.print("[yellow]No dialects available[/yellow]")


@app.command("create-table")
def create_table(
    table: str = typer.Argument(..., help="Table name"),
    column: List[str] = typer.Option(
        ...,
        "--column",
        "-c",
        help="Column in name:type format (repeatable), e.g. id:pk or title:string(64)",
    ),
    options: Optional[str] = typer.Option(
        None, "--options", help="Table options appended after the column list"
    ),
    dialect: Optional[str] = DIALECT_OPTION,
    output_format: Optional[str] = OUTPUT_FORMAT_OPTION,
    output_file: Optional[Path] = OUTPUT_FILE_OPTION,
    charset: Optional[str] = CHARSET_OPTION,
    collation: Optional[str] = COLLATION_OPTION,
    table_prefix: Optional[str] = TABLE_PREFIX_OPTION,
) -> None:
    """
    Generate a CREATE TABLE statement.

    Examples:

        sqlwright create-table widgets -c id:pk -c title:string

        sqlwright create-table "{{%widgets}}" -c id:pk --table-prefix craft_
    """
    _run(
        lambda builder: builder.create_table(
            table, [_parse_column(spec) for spec in column], options
        ),
        dialect,
        output_format,
        output_file,
        charset,
        collation,
        table_prefix,
    )


@app.command("drop-table")
def drop_table(
    table: str = typer.Argument(..., help="Table name"),
    if_exists: bool = typer.Option(
        False, "--if-exists", help="Do nothing when the table is missing"
    ),
    dialect: Optional[str] = DIALECT_OPTION,
    output_format: Optional[str] = OUTPUT_FORMAT_OPTION,
    output_file: Optional[Path] = OUTPUT_FILE_OPTION,
    table_prefix: Optional[str] = TABLE_PREFIX_OPTION,
) -> None:
    """Generate a DROP TABLE statement."""
    _run(
        lambda builder: (
            builder.drop_table_if_exists(table)
            if if_exists
            else builder.drop_table(table)
        ),
        dialect,
        output_format,
        output_file,
        table_prefix=table_prefix,
    )


@app.command()
def replace(
    table: str = typer.Argument(..., help="Table name (used as given)"),
    column: str = typer.Argument(..., help="Column to search"),
    find: str = typer.Argument(..., help="Text to search for"),
    replace_with: str = typer.Argument(..., help="Replacement text"),
    where: Optional[str] = typer.Option(
        None, "--where", "-w", help="Raw SQL condition for the WHERE clause"
    ),
    dialect: Optional[str] = DIALECT_OPTION,
    output_format: Optional[str] = OUTPUT_FORMAT_OPTION,
    output_file: Optional[Path] = OUTPUT_FILE_OPTION,
    table_prefix: Optional[str] = TABLE_PREFIX_OPTION,
) -> None:
    """
    Generate an UPDATE statement replacing text in a column.

    Examples:

        sqlwright replace content body http:// https://

        sqlwright replace content body foo bar --where "siteId = 1" -f json
    """
    _run(
        lambda builder: builder.replace(table, column, find, replace_with, where),
        dialect,
        output_format,
        output_file,
        table_prefix=table_prefix,
    )


@app.command("fixed-order")
def fixed_order(
    column: str = typer.Argument(..., help="Column holding the values"),
    values: Optional[List[str]] = typer.Argument(
        None, help="Values in the order rows should be returned"
    ),
    dialect: Optional[str] = DIALECT_OPTION,
    output_format: Optional[str] = OUTPUT_FORMAT_OPTION,
    output_file: Optional[Path] = OUTPUT_FILE_OPTION,
) -> None:
    """Generate an ORDER BY expression returning rows in a fixed order."""
    _run(
        lambda builder: builder.fixed_order(column, values or []),
        dialect,
        output_format,
        output_file,
    )


@app.command("delete-duplicates")
def delete_duplicates(
    table: str = typer.Argument(..., help="Table name"),
    columns: List[str] = typer.Argument(
        ..., help="Columns that together identify a duplicate row"
    ),
    pk: str = typer.Option("id", "--pk", help="Primary key column"),
    dialect: Optional[str] = DIALECT_OPTION,
    output_format: Optional[str] = OUTPUT_FORMAT_OPTION,
    output_file: Optional[Path] = OUTPUT_FILE_OPTION,
    table_prefix: Optional[str] = TABLE_PREFIX_OPTION,
) -> None:
    """
    Generate a DELETE statement removing duplicate rows.

    The row with the smallest primary key in each duplicate group is kept.
    """
    _run(
        lambda builder: builder.delete_duplicates(table, columns, pk),
        dialect,
        output_format,
        output_file,
        table_prefix=table_prefix,
    )


@app.command("rename-sequence")
def rename_sequence(
    old_name: str = typer.Argument(..., help="Current sequence name"),
    new_name: str = typer.Argument(..., help="New sequence name"),
    dialect: Optional[str] = DIALECT_OPTION,
    output_format: Optional[str] = OUTPUT_FORMAT_OPTION,
    output_file: Optional[Path] = OUTPUT_FILE_OPTION,
) -> None:
    """Generate a statement renaming a sequence (not supported by MySQL)."""
    _run(
        lambda builder: builder.rename_sequence(old_name, new_name),
        dialect,
        output_format,
        output_file,
    )


if __name__ == "__main__":
    app()
