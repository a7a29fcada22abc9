"""Orchestrator: wires together loader, aggregator, and renderer."""

from __future__ import annotations

from .aggregator import analyze_sprint_activity, calculate_weekly_metrics
from .loader import load_github_activity, load_ticket_activity
from .renderer import render_json, render_sprint, render_weekly


def run(
    report: str,
    activity_path: str,
    tickets_path: str | None = None,
    output_format: str = "table",
    output_file: str | None = None,
    sprint_name: str | None = None,
) -> None:
    """Main pipeline: load activity, reduce to metrics, render."""
    github = load_github_activity(activity_path)
    tickets = load_ticket_activity(tickets_path) if tickets_path else None

    if report == "sprint":
        sprint = analyze_sprint_activity(github, tickets)
        if output_format == "json":
            render_json(sprint, output_file=output_file)
        else:
            render_sprint(sprint, github, sprint_name=sprint_name, output_file=output_file)
        return

    weekly = calculate_weekly_metrics(github, tickets)
    if output_format == "json":
        render_json(weekly, output_file=output_file)
    else:
        render_weekly(weekly, github, output_file=output_file)
