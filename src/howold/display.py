"""Terminal rendering: summary panel, scan progress, results table, advisories.

Everything is printed on the shared stderr console.
"""

import platform
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime, timezone

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table
from rich.text import Text

from common.constants import VERSION
from common.logger import console, warning

from .clients.rate_limit import RateState
from .models import ProjectRecord, RepoReference, RepositoryMetadata, YearFilter
from .resolver import ProgressCallback


def format_date(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%d")


def format_time(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%H:%M:%S")


def relative_time(moment: datetime, now: datetime | None = None) -> str:
    """Describe how long ago moment was.

    Example:
        >>> relative_time(datetime(2020, 1, 1, tzinfo=timezone.utc), now=datetime(2023, 6, 1, tzinfo=timezone.utc))
        '3 years ago'
    """
    now = now or datetime.now(timezone.utc)
    days = (now - moment).days

    if days < 1:
        return "today"
    if days == 1:
        return "yesterday"
    if days < 30:
        return f"{days} days ago"
    if days < 365:
        return f"{days // 30} months ago"
    years = days // 365
    return f"{years} year{'s' if years > 1 else ''} ago"


def render_summary(
    reference: RepoReference,
    branch: str,
    metadata: RepositoryMetadata,
    year_filter: YearFilter | None = None,
) -> None:
    """Print the repository panel: name, branch, creation date, active filters."""
    lines = [
        f"[cyan]◆[/cyan] [bold]{escape(reference.full_name)}[/bold]",
        f"[dim]Branch[/dim]   {escape(branch)}",
        f"[dim]Created[/dim]  {format_date(metadata.created_at)} "
        f"[dim]({relative_time(metadata.created_at)})[/dim]",
    ]
    if reference.path:
        lines.append(f"[dim]Path[/dim]     {escape(reference.path)}")
    if year_filter:
        lines.append(f"[dim]Filter[/dim]   {year_filter.label}")

    console.print()
    console.print(Panel("\n".join(lines), box=box.ROUNDED, border_style="dim", expand=False))


def render_found(count: int) -> None:
    console.print(f"\n  [cyan]◇[/cyan] [dim]Found[/dim] [bold]{count}[/bold] [dim]projects[/dim]\n")


@contextmanager
def scan_progress(total: int) -> Iterator[ProgressCallback]:
    """Show a 'Scanning' bar while directories are resolved.

    Yields a callback taking (done, total). Nothing is drawn when stderr is
    not a terminal.
    """
    progress = Progress(
        TextColumn("  [dim]Scanning[/dim]"),
        BarColumn(bar_width=24, style="dim", complete_style="cyan", finished_style="cyan"),
        TextColumn("[dim]{task.percentage:>3.0f}%[/dim]"),
        console=console,
        transient=True,
        disable=not console.is_terminal,
    )
    task = progress.add_task("scan", total=total)

    def update(done: int, total: int) -> None:
        progress.update(task, completed=done, total=total)

    with progress:
        yield update


def results_table(records: list[ProjectRecord]) -> Table:
    table = Table(box=box.ROUNDED, border_style="dim", header_style="bold")
    table.add_column("date", style="green", no_wrap=True)
    table.add_column("time", style="dim", no_wrap=True)
    table.add_column("sha", style="cyan", no_wrap=True)
    table.add_column("project", no_wrap=True)

    for record in records:
        table.add_row(
            format_date(record.created_at),
            format_time(record.created_at),
            record.short_sha,
            Text(record.path),
        )
    return table


def render_results(shown: list[ProjectRecord], total: int, skipped: int = 0) -> None:
    """Print the results table and the 'Showing N of M' line."""
    if not shown:
        warning("[dim]No projects found[/dim]")
    else:
        console.print(results_table(shown))
        of_total = f"[dim] of [/dim][bold]{total}[/bold]" if total > len(shown) else ""
        console.print(
            f"\n  [dim]Showing[/dim] [bold]{len(shown)}[/bold]{of_total} [dim]projects[/dim] "
            "[dim]·[/dim] [green]▲[/green] [dim]latest last[/dim]"
        )

    if skipped:
        console.print(f"  [dim]{skipped} skipped[/dim]")


def render_rate_advice(has_token: bool, rate_state: RateState) -> None:
    """Suggest a token when anonymous, or warn when the quota is nearly spent."""
    if not has_token:
        console.print()
        warning(
            "[dim]Set[/dim] [cyan]GITHUB_TOKEN[/cyan] "
            "[dim]for higher rate limits (60/hr → 5000/hr)[/dim]"
        )
    elif rate_state.is_low():
        resets = ""
        if rate_state.reset_at:
            resets = f" [dim](resets {rate_state.reset_at.astimezone().strftime('%H:%M:%S')})[/dim]"
        console.print()
        warning(f"[dim]Low quota:[/dim] {rate_state.remaining}/{rate_state.limit}{resets}")
    console.print()


def render_version() -> None:
    console.print(
        f"\n  [cyan]◆[/cyan] [bold]howold[/bold] [dim]v{VERSION}[/dim] "
        f"[dim]· python {platform.python_version()}[/dim]\n"
    )
