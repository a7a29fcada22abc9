"""CLI entrypoint for pulse-stats."""

from __future__ import annotations

import json
import logging
import sys

import click

from . import __version__
from .loader import ActivityDataError

_format_option = click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    show_default=True,
    envvar="PULSE_STATS_FORMAT",
    show_envvar=True,
    help="Output format",
)
_tickets_option = click.option(
    "--tickets",
    "tickets_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Issue-tracker activity JSON (object with 'issues', or a list)",
)
_output_option = click.option(
    "--output",
    "output_file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Save output to file instead of stdout",
)


def _run(**kwargs) -> None:
    from .orchestrator import run

    try:
        run(**kwargs)
    except ActivityDataError as exc:
        click.echo(f"Error: Invalid activity data. {exc}", err=True)
        sys.exit(1)
    except json.JSONDecodeError as exc:
        click.echo(f"Error: Could not parse JSON. {exc}", err=True)
        sys.exit(1)
    except Exception as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
@click.version_option(version=__version__)
def main(verbose: bool) -> None:
    """Reduce developer activity to weekly and sprint metrics.

    \b
    ACTIVITY_JSON is a GitHub activity document with 'username', 'timeRange',
    'commits', 'pullRequests' and 'reviews'.

    \b
    Examples:
      pulse-stats weekly activity.json
      pulse-stats weekly activity.json --tickets jira.json --format json
      pulse-stats sprint activity.json --sprint-name "Sprint 42" --output retro.txt
    """
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("pulse_stats").setLevel(logging.DEBUG if verbose else logging.WARNING)


@main.command()
@click.argument("activity", type=click.Path(exists=True, dir_okay=False))
@_tickets_option
@_format_option
@_output_option
def weekly(
    activity: str,
    tickets_path: str | None,
    output_format: str,
    output_file: str | None,
) -> None:
    """Summarize a week of activity with a per-repository breakdown."""
    _run(
        report="weekly",
        activity_path=activity,
        tickets_path=tickets_path,
        output_format=output_format.lower(),
        output_file=output_file,
    )


@main.command()
@click.argument("activity", type=click.Path(exists=True, dir_okay=False))
@_tickets_option
@click.option("--sprint-name", default=None, help="Sprint name shown in the report header")
@_format_option
@_output_option
def sprint(
    activity: str,
    tickets_path: str | None,
    sprint_name: str | None,
    output_format: str,
    output_file: str | None,
) -> None:
    """Summarize a sprint: merge rate, merge time and ticket completion."""
    _run(
        report="sprint",
        activity_path=activity,
        tickets_path=tickets_path,
        output_format=output_format.lower(),
        output_file=output_file,
        sprint_name=sprint_name,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
