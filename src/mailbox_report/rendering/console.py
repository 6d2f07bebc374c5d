"""Console rendering of mailbox usage reports."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mailbox_report.usage.models import Report
from mailbox_report.usage.quota import NOT_COMPUTABLE_DISPLAY, UNSET_QUOTA_DISPLAY
from mailbox_report.usage.sizes import NOT_AVAILABLE


def format_mb(value: float) -> str:
    return f"{value:,.2f} MB"


def format_quota(value: float | None) -> str:
    """Format a resolved quota, showing "Default (N/A)" when unset."""
    return UNSET_QUOTA_DISPLAY if value is None else format_mb(value)


def format_free_space(value: float | None) -> str:
    """Format free space; negative values are kept and flagged."""
    if value is None:
        return NOT_COMPUTABLE_DISPLAY
    if value < 0:
        return f"{format_mb(value)} (over quota)"
    return format_mb(value)


def folder_table(report: Report, top: int | None = None) -> Table:
    """Build the folder table, largest folders first.

    Args:
        report: Report whose folders are already sorted by size.
        top: Show only the first ``top`` folders when set.

    Returns:
        A rich Table ready to print.
    """
    folders = report.folders if top is None else report.folders[:top]
    title = f"Folders ({len(folders)} of {len(report.folders)})"
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Folder", style="cyan", overflow="fold")
    table.add_column("Type")
    table.add_column("Items", justify="right")
    table.add_column("Items (incl. subfolders)", justify="right")
    table.add_column("Size", justify="right")

    for folder in folders:
        size = Text(folder.size_display)
        if folder.size_display == NOT_AVAILABLE:
            size.stylize("dim")
        table.add_row(
            folder.path,
            folder.folder_type,
            f"{folder.item_count:,}",
            f"{folder.subfolder_item_count:,}",
            size,
        )
    return table


def quota_summary(report: Report) -> Panel:
    """Build the quota summary block."""
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column()

    grid.add_row("Total used (folders)", format_mb(report.total_used_mb))
    grid.add_row("Total item size (server)", report.server_total_item_size or NOT_AVAILABLE)
    for label, value in (
        ("Issue warning quota", report.issue_warning_mb),
        ("Prohibit send quota", report.prohibit_send_mb),
        ("Prohibit send/receive quota", report.prohibit_send_receive_mb),
    ):
        grid.add_row(label, Text(format_quota(value), style="yellow" if value is None else ""))

    if report.free_space_mb is None:
        free_style = "yellow"
    elif report.is_over_quota:
        free_style = "bold red"
    else:
        free_style = "green"
    grid.add_row("Free space", Text(format_free_space(report.free_space_mb), style=free_style))

    percent = report.usage_percent
    grid.add_row("Usage", NOT_COMPUTABLE_DISPLAY if percent is None else f"{percent:.2f}%")

    title = report.display_name or report.identity
    return Panel(grid, title=f"Quota summary: {title}", expand=False)


def render_report(report: Report, console: Console | None = None, top: int | None = None) -> None:
    """Print the folder table and quota summary for a report.

    Args:
        report: The report to render.
        console: Console to print to (defaults to a new stdout console).
        top: Limit the folder table to the ``top`` largest folders.
    """
    console = console or Console()
    console.print(folder_table(report, top=top))
    console.print()
    console.print(quota_summary(report))
