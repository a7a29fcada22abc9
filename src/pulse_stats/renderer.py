"""Rich-based terminal metrics renderer with JSON support."""

from __future__ import annotations

import io
import json
from dataclasses import asdict

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import (
    GitHubActivity,
    PullRequestCounts,
    ReviewCounts,
    SprintMetrics,
    WeeklyMetrics,
)


def _format_number(n: int) -> str:
    return f"{n:,}"


def _format_hours(h: float | None) -> str:
    if h is None:
        return "-"
    if h < 1:
        return f"{h * 60:.0f}m"
    if h < 24:
        return f"{h:.1f}h"
    return f"{h / 24:.1f}d"


def _format_date(iso: str) -> str:
    """Format an ISO 8601 date string to YYYY-MM-DD for display."""
    return iso[:10] if len(iso) >= 10 else iso


def _make_bar(percentage: float, width: int = 20) -> str:
    filled = round(percentage / 100 * width)
    return "\u2588" * filled + "\u2591" * (width - filled)


def _write_to_file(content: str, output_file: str) -> None:
    """Write content to a file and print confirmation."""
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(content)
    Console().print(f"Saved to {output_file}")


def _make_console(output_file: str | None) -> tuple[Console, io.StringIO | None]:
    if output_file:
        string_io = io.StringIO()
        return Console(file=string_io, force_terminal=False, width=120), string_io
    return Console(), None


def _print_header(console: Console, title: str, github: GitHubActivity) -> None:
    period = ""
    tr = github.time_range
    if tr.start or tr.end:
        start = _format_date(tr.start) if tr.start else "..."
        end = _format_date(tr.end) if tr.end else "..."
        period = f"\nPeriod: {start} ~ {end}"
    who = f" - {github.username}" if github.username else ""
    console.print(Panel(Text(f"{title}{who}{period}", justify="center"), style="bold cyan"))
    console.print()


def _print_counts(
    console: Console,
    prs: PullRequestCounts,
    reviews: ReviewCounts,
) -> None:
    console.print("[bold]Pull Requests & Reviews[/bold]")
    table = Table(show_header=True, header_style="bold")
    table.add_column("Pull Requests")
    table.add_column("Count", justify="right")
    table.add_column("Reviews")
    table.add_column("Count", justify="right")
    table.add_row("Open", _format_number(prs.open), "Approved", _format_number(reviews.approved))
    table.add_row(
        "Merged",
        _format_number(prs.merged),
        "Changes Requested",
        _format_number(reviews.changes_requested),
    )
    table.add_row(
        "Closed", _format_number(prs.closed), "Commented", _format_number(reviews.commented)
    )
    table.add_row(
        "[bold]Total[/bold]",
        _format_number(prs.total),
        "[bold]Total[/bold]",
        _format_number(reviews.total),
    )
    console.print(table)
    console.print()


def _print_distribution(console: Console, title: str, label: str, counts: dict[str, int]) -> None:
    if not counts:
        return
    table = Table(title=title, title_justify="left", show_header=True, header_style="bold")
    table.add_column(label)
    table.add_column("Count", justify="right")
    for name, count in counts.items():
        table.add_row(name or "-", _format_number(count))
    console.print(table)


def render_weekly(
    metrics: WeeklyMetrics,
    github: GitHubActivity,
    output_file: str | None = None,
) -> None:
    """Render WeeklyMetrics to the terminal using rich."""
    console, string_io = _make_console(output_file)

    _print_header(console, "Weekly Summary", github)

    console.print("[bold]Summary[/bold]")
    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("label", style="dim")
    summary.add_column("value", style="bold")
    summary.add_row("Commits", _format_number(metrics.total_commits))
    summary.add_row("Pull Requests", _format_number(metrics.pull_requests.total))
    summary.add_row("Reviews", _format_number(metrics.reviews.total))
    summary.add_row(
        "Code Changes",
        f"+{_format_number(metrics.additions)} / -{_format_number(metrics.deletions)}",
    )
    console.print(summary)
    console.print()

    _print_counts(console, metrics.pull_requests, metrics.reviews)

    if metrics.repo_breakdown:
        console.print("[bold]Repository Breakdown[/bold]")
        repo_table = Table(show_header=True, header_style="bold")
        repo_table.add_column("Repository", no_wrap=True)
        repo_table.add_column("Commits", justify="right", no_wrap=True)
        repo_table.add_column("PRs", justify="right", no_wrap=True)
        repo_table.add_column("Merged", justify="right", no_wrap=True)
        repo_table.add_column("+/-", justify="right", no_wrap=True)
        repo_table.add_column("Reviews", justify="right", no_wrap=True)
        for r in metrics.repo_breakdown:
            repo_table.add_row(
                r.repo or "-",
                _format_number(r.commits),
                _format_number(r.pull_requests),
                _format_number(r.merged),
                f"+{_format_number(r.additions)} / -{_format_number(r.deletions)}",
                _format_number(r.reviews),
            )
        console.print(repo_table)
        console.print()

    tickets = metrics.tickets
    if tickets is not None:
        console.print(f"[bold]Tickets: {_format_number(tickets.total_issues)}[/bold]")
        _print_distribution(console, "By Status", "Status", tickets.by_status)
        _print_distribution(console, "By Priority", "Priority", tickets.by_priority)
        _print_distribution(console, "By Type", "Type", tickets.by_type)
        console.print()

    if string_io is not None and output_file:
        _write_to_file(string_io.getvalue(), output_file)


def render_sprint(
    metrics: SprintMetrics,
    github: GitHubActivity,
    sprint_name: str | None = None,
    output_file: str | None = None,
) -> None:
    """Render SprintMetrics to the terminal using rich."""
    console, string_io = _make_console(output_file)

    title = f"Sprint Retrospective: {sprint_name}" if sprint_name else "Sprint Retrospective"
    _print_header(console, title, github)

    prs = metrics.pull_requests
    console.print("[bold]Sprint Metrics[/bold]")
    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column("label", style="dim")
    summary.add_column("value", style="bold")
    summary.add_row("Commits", _format_number(metrics.total_commits))
    summary.add_row("Pull Requests", _format_number(prs.total))
    summary.add_row("Merge Rate", f"{prs.merge_rate}%")
    summary.add_row("Avg Merge Time", _format_hours(metrics.avg_merge_time_hours))
    summary.add_row(
        "Code Changes",
        f"+{_format_number(metrics.additions)} / -{_format_number(metrics.deletions)}",
    )
    summary.add_row("Reviews", _format_number(metrics.reviews.total))
    console.print(summary)
    console.print()

    _print_counts(console, prs, metrics.reviews)

    tickets = metrics.tickets
    if tickets is not None:
        console.print("[bold]Ticket Completion[/bold]")
        console.print(
            f"  {_make_bar(tickets.completion_rate)} "
            f"{tickets.completed}/{tickets.total_issues} ({tickets.completion_rate}%)"
        )
        console.print()
        _print_distribution(console, "By Type", "Type", tickets.by_type)
        _print_distribution(console, "By Priority", "Priority", tickets.by_priority)
        console.print()

    if string_io is not None and output_file:
        _write_to_file(string_io.getvalue(), output_file)


def render_json(metrics: WeeklyMetrics | SprintMetrics, output_file: str | None = None) -> None:
    """Render a metrics record as JSON."""
    content = json.dumps(asdict(metrics), indent=2, ensure_ascii=False)
    if output_file:
        _write_to_file(content, output_file)
    else:
        print(content)
