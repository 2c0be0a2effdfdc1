from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mockbanker.descriptors import DomainDescriptor
from mockbanker.domain.models import DomainOption, HistoryEntry, ValidationVerdict
from mockbanker.domain.rows import ResultRow

_PREVIEW_VALUES = 3


def _yes_no(value: bool) -> str:
    return "[green]Yes[/green]" if value else "[red]No[/red]"


def print_rows(
    descriptor: DomainDescriptor,
    rows: Sequence[ResultRow],
    spaces: bool = True,
    requested: Optional[int] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Render a generated snapshot as a rich table, one column per CSV column.
    """
    console = console or Console()

    if not rows:
        console.print(f"[yellow]No {descriptor.category} values generated.[/yellow]")
        return

    caption = None
    if requested is not None and requested != len(rows):
        caption = f"{len(rows)} of {requested} requested"

    table = Table(title=f"{descriptor.category} Results", box=box.ROUNDED, caption=caption)
    table.add_column("#", justify="right", style="dim")
    for index, column in enumerate(descriptor.csv_columns):
        if column.field == "valid":
            table.add_column(column.header, justify="center")
        else:
            table.add_column(column.header, style="cyan" if index == 0 else None, no_wrap=index == 0)

    for number, row in enumerate(rows, start=1):
        cells = []
        for column in descriptor.csv_columns:
            value = row.cell(column.field, spaces)
            if isinstance(value, bool):
                cells.append(_yes_no(value))
            else:
                cells.append("" if value is None else str(value))
        table.add_row(str(number), *cells)

    console.print(table)


def print_history(entries: List[HistoryEntry], console: Optional[Console] = None) -> None:
    console = console or Console()

    if not entries:
        console.print("[yellow]No history yet.[/yellow]")
        return

    table = Table(title="Activity History", box=box.ROUNDED, caption="Newest first")
    table.add_column("When", style="dim", no_wrap=True)
    table.add_column("Category", style="cyan")
    table.add_column("Selection", style="magenta")
    table.add_column("Count", justify="right")
    table.add_column("Values")

    for entry in entries:
        when = datetime.fromtimestamp(entry.timestamp / 1000).strftime("%Y-%m-%d %H:%M:%S")
        preview = ", ".join(entry.raw_values[:_PREVIEW_VALUES])
        if len(entry.raw_values) > _PREVIEW_VALUES:
            preview += f" (+{len(entry.raw_values) - _PREVIEW_VALUES} more)"
        table.add_row(when, entry.category, entry.country_or_label, str(entry.count), preview)

    console.print(table)


def print_options(
    descriptor: DomainDescriptor,
    options: Sequence[DomainOption],
    console: Optional[Console] = None,
) -> None:
    console = console or Console()
    table = Table(title=f"{descriptor.category} {descriptor.selector_kind}s", box=box.ROUNDED)
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Format", style="dim")
    for option in options:
        table.add_row(option.code, option.label, option.description or "")
    console.print(table)


def print_verdict(verdict: ValidationVerdict, console: Optional[Console] = None) -> None:
    console = console or Console()
    style = "bold green" if verdict.valid else "bold red"
    mark = "✓" if verdict.valid else "✗"
    console.print(f"[{style}]{mark} {escape(verdict.message)}[/{style}]")


__all__ = ["print_rows", "print_history", "print_options", "print_verdict"]
