"""Output formatters for generated statements."""

import json
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from sqlwright.params import BoundStatement


class TextFormatter:
    """Format statements as plain SQL plus a Rich table of bound parameters."""

    @staticmethod
    def format(statement: BoundStatement, console: Console) -> None:
        """
        Print the SQL, followed by its parameter bindings when there are any.

        The SQL is printed without markup processing so identifiers such as
        ``[[column]]`` are not mistaken for Rich styles.

        Args:
            statement: The statement to display
            console: Rich Console instance for output
        """
        console.print(
            statement.sql, markup=False, highlight=False, emoji=False, soft_wrap=True
        )

        if not statement.bindings:
            return

        table = Table(title="Parameters", title_style="bold")
        table.add_column("Placeholder", style="cyan")
        table.add_column("Value", style="green")
        for name, value in statement.bindings:
            table.add_row(Text(name), Text(repr(value)))

        console.print()
        console.print(table)


class JsonFormatter:
    """Format statements as JSON."""

    @staticmethod
    def format(statement: BoundStatement) -> str:
        """
        Format a statement as a JSON document.

        Args:
            statement: The statement to format

        Returns:
            JSON string with ``sql`` and ``params`` keys
        """
        return json.dumps(
            {"sql": statement.sql, "params": statement.params}, indent=2, default=str
        )


class OutputWriter:
    """Write formatted output to file or stdout."""

    @staticmethod
    def write(content: str, output_file: Optional[Path] = None) -> None:
        """
        Write content to file or stdout.

        Args:
            content: The content to write
            output_file: Optional file path. If None, writes to stdout.
        """
        if output_file:
            output_file.write_text(content, encoding="utf-8")
        else:
            print(content)
