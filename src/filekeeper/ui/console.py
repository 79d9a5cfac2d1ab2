"""Coloured terminal output built on rich."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from filekeeper.registry.record import Record

DISPLAY_TIME_FORMAT = "%d-%b-%Y %H:%M"
WIDTH = 70


def truncate(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    return value[: limit - 3] + "..."


class ConsoleView:
    """Rendering helpers for menu screens, status lines and records."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ── Banners & separators ─────────────────────────────────

    def banner(self, title: str) -> None:
        self.console.print()
        self.console.print(
            Panel(Text(title, justify="center", style="bold cyan"), box=box.DOUBLE, width=WIDTH)
        )

    def sub_header(self, text: str) -> None:
        self.console.print(f"\n  ── {text} ──", style="bold yellow", markup=False)

    def separator(self) -> None:
        self.console.print(Rule(style="dim"), width=WIDTH)

    def menu_item(self, number: str, label: str) -> None:
        self.console.print(f"  [bold green]\\[{number}][/]  {label}")

    # ── Status lines ─────────────────────────────────────────

    def success(self, message: str) -> None:
        self.console.print(f"  [OK]  {message}", style="bold green", markup=False)

    def error(self, message: str) -> None:
        self.console.print(f"  [!!]  {message}", style="bold red", markup=False)

    def info(self, message: str) -> None:
        self.console.print(f"  [i]   {message}", style="cyan", markup=False)

    def warning(self, message: str) -> None:
        self.console.print(f"  [!]   {message}", style="yellow", markup=False)

    def prompt(self, label: str) -> None:
        self.console.print(f"  {label}", style="yellow", markup=False, end="")

    # ── Records ──────────────────────────────────────────────

    def record_table(self, records: list[Record]) -> None:
        if not records:
            self.warning("No files found.")
            return

        table = Table(box=box.SIMPLE_HEAD, header_style="bold cyan")
        table.add_column("ID", no_wrap=True)
        table.add_column("File Name", style="green", no_wrap=True)
        table.add_column("Category", no_wrap=True)
        table.add_column("Created", style="dim", no_wrap=True)
        table.add_column("Path", style="dim", no_wrap=True)
        for r in records:
            table.add_row(
                r.short_id,
                truncate(r.file_name, 26),
                truncate(r.category, 12),
                r.created_at.strftime(DISPLAY_TIME_FORMAT),
                truncate(r.storage_path, 28),
            )
        self.console.print(table)

    def record_detail(self, record: Record, content: str | None = None) -> None:
        """Detail card; ``content`` overrides the cached content (e.g. live disk text)."""
        self.sub_header("File Details")
        rows = [
            ("ID", record.id),
            ("File Name", record.file_name),
            ("Category", record.category),
            ("Path", record.storage_path),
            ("Created", record.created_at.strftime(DISPLAY_TIME_FORMAT)),
            ("Updated", record.updated_at.strftime(DISPLAY_TIME_FORMAT)),
        ]
        for label, value in rows:
            line = Text(f"  {label:<11}: ", style="bold")
            line.append(value, style="green" if label == "File Name" else "")
            self.console.print(line)
        self.console.print(Text("  Content    :", style="bold"))
        self.separator()
        text = record.content if content is None else content
        for line in text.split("\n"):
            self.console.print(f"    {line}", markup=False, highlight=False)
        self.separator()
