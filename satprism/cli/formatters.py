"""Output formatters for valuation rows."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table
from rich.text import Text

VALUATION_COLUMNS = ["txid", "time", "amount", "usdAmount", "currentUsd", "diffUsd", "type"]

_HEADERS = {
    "txid": "Transaction",
    "time": "Time",
    "amount": "BTC",
    "usdAmount": "USD then",
    "currentUsd": "USD now",
    "diffUsd": "Difference",
    "type": "Type",
}
_USD_COLUMNS = {"usdAmount", "currentUsd", "diffUsd"}


class OutputFormatter:
    """Protocol-like base class for CLI output formatters."""

    name: str

    def render(self, rows: Sequence[Mapping[str, object]], *, stream: TextIO) -> None:
        """Render the provided rows to the target stream."""

        raise NotImplementedError


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Render valuations as a Rich table."""

    name: str = "table"
    no_color: bool = False

    def render(self, rows: Sequence[Mapping[str, object]], *, stream: TextIO) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)

        table = Table(box=SIMPLE, show_lines=False)
        header_style = "" if self.no_color else "bold"
        for column in VALUATION_COLUMNS:
            justify = "left" if column in ("txid", "time", "type") else "right"
            table.add_column(_HEADERS[column], header_style=header_style, justify=justify)

        if not rows:
            console.print(table)
            console.print("No transactions found.")
            return

        for row in rows:
            table.add_row(*(self._format_cell(column, row.get(column)) for column in VALUATION_COLUMNS))
        console.print(table)

    def _format_cell(self, column: str, value: object) -> str | Text:
        if value is None:
            return "-"
        if column in _USD_COLUMNS and isinstance(value, (int, float)):
            text = f"{value:,.2f}"
            if column == "diffUsd" and not self.no_color:
                return Text(text, style="green" if value >= 0 else "red")
            return text
        if column == "amount" and isinstance(value, (int, float)):
            return f"{value:.8f}"
        return str(value)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """Render valuations as JSON Lines."""

    name: str = "jsonl"

    def render(self, rows: Sequence[Mapping[str, object]], *, stream: TextIO) -> None:
        for row in rows:
            json.dump(dict(row), stream, ensure_ascii=False, default=str)
            stream.write("\n")
        stream.flush()


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    """Instantiate a formatter by name."""

    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized == "jsonl":
        return JSONLFormatter()
    msg = f"Unsupported format '{name}'. Available formats: table, jsonl."
    raise ValueError(msg)
