#!/usr/bin/env python3
"""
Console UI Module using Rich

Console interface for free-dev-space: styled messages, the results table,
scan spinner, progress bars and the confirmation prompt. All color and
terminal handling lives here; the scanning core never touches the console.
"""

from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.prompt import Confirm
from rich.table import Table

from .auxiliary import format_bytes, format_path_for_display


class ConsoleUI:
    """Console UI handler using Rich"""

    def __init__(self, use_color: bool = True, force_terminal: Optional[bool] = None):
        """Initialize console; *use_color* False strips all styling"""
        self.console = Console(force_terminal=force_terminal, no_color=not use_color, highlight=False)

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green")

    def print_error(self, message: str):
        """Print error message in red"""
        self.console.print(message, style="red bold")

    def print_warning(self, message: str):
        """Print warning message in yellow"""
        self.console.print(message, style="yellow")

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan")

    def print_progress(self, message: str):
        """Print progress message in dim white"""
        self.console.print(message, style="white dim")

    def print_header(self, title: str, subtitle: Optional[str] = None):
        """Print a header with optional subtitle"""
        if subtitle:
            header_text = f"[bold]{title}[/bold]\n[dim]{subtitle}[/dim]"
        else:
            header_text = f"[bold]{title}[/bold]"

        panel = Panel(header_text, box=box.ROUNDED, padding=(0, 1))
        self.console.print(panel)

    def show_configuration(self, config: dict[str, Any]):
        """Display configuration in a formatted table"""
        table = Table(show_header=False, box=box.SIMPLE)
        table.add_column("Setting", style="cyan dim", min_width=20, justify="right")
        table.add_column("Value", style="cyan", min_width=30)

        for key, value in config.items():
            if isinstance(value, (list, tuple, set, frozenset)):
                value = ", ".join(sorted(str(v) for v in value))
            table.add_row(escape(key), escape(str(value)))

        self.console.print(table)

    # Progress displays
    def create_progress(self):
        """Create a Rich progress context manager for batch operations"""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("({task.completed}/{task.total})"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )

    def create_activity_progress(self):
        """Create a Rich progress context manager for activity-only display (no counts)"""
        return Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )

    # Result displays
    def show_matches(self, records: list, root: str, title: str = "Regenerable artifacts"):
        """Show matched directories, largest first, with a total line"""
        table = Table(title=title, box=box.ROUNDED, show_lines=False)
        table.add_column("Path", style="white", min_width=30, overflow="fold")
        table.add_column("Type", style="dim", min_width=12)
        table.add_column("Size", justify="right", style="yellow", min_width=10)

        for record in sorted(records, key=lambda r: r.size, reverse=True):
            table.add_row(
                escape(format_path_for_display(record.path, root)),
                escape(record.rule.description or record.name),
                format_bytes(record.size),
            )

        self.console.print(table)
        total = sum(r.size for r in records)
        self.print_info(f"Total reclaimable: {format_bytes(total)} ({len(records)} directories)")

    def show_deletion_summary(self, report, root: str):
        """Show freed space and any per-item failures"""
        if report.deleted:
            self.print_success(f"Deleted {len(report.deleted)} directories, freed {format_bytes(report.freed_bytes)}")

        if report.failures:
            self.print_error(f"Failed to delete {report.failure_count} directories:")
            for failure in report.failures:
                display = escape(format_path_for_display(failure.path, root))
                self.console.print(f"[red dim]  • {display}: {escape(failure.message)}[/red dim]")

    # Interactive prompts
    def confirm(self, question: str, default: bool = False) -> bool:
        """Ask for yes/no confirmation"""
        return Confirm.ask(question, default=default, console=self.console)
