"""Metrics reduction: turn activity bundles into WeeklyMetrics and SprintMetrics."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from .classify import (
    APPROVED,
    CHANGES_REQUESTED,
    MERGED,
    OPEN,
    classify_pull_request,
    classify_review,
    is_done,
)
from .models import (
    GitHubActivity,
    PullRequest,
    PullRequestCounts,
    RepoActivity,
    Review,
    ReviewCounts,
    SprintMetrics,
    SprintTicketStats,
    Ticket,
    TicketActivity,
    WeeklyMetrics,
    WeeklyTicketStats,
)

logger = logging.getLogger(__name__)

TicketInput = TicketActivity | Sequence[Ticket] | None


def _round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with halves going up (2.5 -> 3), unlike the built-in ``round``."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def _percentage(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    return int(_round_half_up(part / whole * 100))


def _parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO 8601 timestamp; naive values and bare dates are read as UTC."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _ticket_list(tickets: TicketInput) -> list[Ticket]:
    if tickets is None:
        return []
    if isinstance(tickets, TicketActivity):
        return list(tickets.issues)
    return list(tickets)


def _count_by(values: list[str]) -> dict[str, int]:
    """Count occurrences, keyed in first-seen order."""
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return counts


def _summarize_pull_requests(
    pull_requests: Sequence[PullRequest],
) -> tuple[PullRequestCounts, int, int]:
    """Count PRs by state and sum line changes.

    Returns ``(counts, additions, deletions)``. Unknown additions/deletions
    count as zero.
    """
    merged = 0
    open_ = 0
    closed = 0
    additions = 0
    deletions = 0
    for pr in pull_requests:
        bucket = classify_pull_request(pr)
        if bucket == MERGED:
            merged += 1
        elif bucket == OPEN:
            open_ += 1
        else:
            closed += 1
        additions += pr.additions or 0
        deletions += pr.deletions or 0

    total = len(pull_requests)
    counts = PullRequestCounts(
        total=total,
        open=open_,
        merged=merged,
        closed=closed,
        merge_rate=_percentage(merged, total),
    )
    return counts, additions, deletions


def _summarize_reviews(reviews: Sequence[Review]) -> ReviewCounts:
    approved = 0
    changes_requested = 0
    commented = 0
    for review in reviews:
        bucket = classify_review(review)
        if bucket == APPROVED:
            approved += 1
        elif bucket == CHANGES_REQUESTED:
            changes_requested += 1
        else:
            commented += 1
    return ReviewCounts(
        total=len(reviews),
        approved=approved,
        changes_requested=changes_requested,
        commented=commented,
    )


@dataclass
class _RepoTally:
    commits: int = 0
    pull_requests: int = 0
    merged: int = 0
    additions: int = 0
    deletions: int = 0
    reviews: int = 0


def _build_repo_breakdown(github: GitHubActivity) -> tuple[RepoActivity, ...]:
    """Group activity by repository, busiest first.

    Repositories with equal activity keep the order in which they were first
    seen (commits, then pull requests, then reviews).
    """
    tallies: dict[str, _RepoTally] = {}

    for commit in github.commits:
        tallies.setdefault(commit.repo, _RepoTally()).commits += 1

    for pr in github.pull_requests:
        tally = tallies.setdefault(pr.repo, _RepoTally())
        tally.pull_requests += 1
        if classify_pull_request(pr) == MERGED:
            tally.merged += 1
        tally.additions += pr.additions or 0
        tally.deletions += pr.deletions or 0

    for review in github.reviews:
        tallies.setdefault(review.repo, _RepoTally()).reviews += 1

    breakdown = [
        RepoActivity(
            repo=repo,
            commits=t.commits,
            pull_requests=t.pull_requests,
            merged=t.merged,
            additions=t.additions,
            deletions=t.deletions,
            reviews=t.reviews,
        )
        for repo, t in tallies.items()
    ]
    # sorted() is stable, so ties stay in first-seen order
    return tuple(sorted(breakdown, key=lambda r: r.total_activity, reverse=True))


def merge_latency_hours(pull_requests: Sequence[PullRequest]) -> float | None:
    """Average creation-to-merge time of merged PRs, in hours.

    Only merged PRs whose ``created_at`` and ``merged_at`` both parse and whose
    merge comes strictly after creation are included. The result is rounded to
    one decimal place. Returns ``None`` when no PR qualifies.
    """
    total_seconds = 0.0
    sampled = 0
    for pr in pull_requests:
        if classify_pull_request(pr) != MERGED:
            continue
        created = _parse_timestamp(pr.created_at)
        merged = _parse_timestamp(pr.merged_at)
        if created is None or merged is None:
            logger.debug("Skipping merge time for PR #%s: missing or invalid timestamps", pr.number)
            continue
        seconds = (merged - created).total_seconds()
        if seconds <= 0:
            logger.debug(
                "Skipping merge time for PR #%s: non-positive duration %.0fs",
                pr.number,
                seconds,
            )
            continue
        total_seconds += seconds
        sampled += 1

    if sampled == 0:
        return None
    return _round_half_up(total_seconds / sampled / 3600, 1)


def calculate_weekly_metrics(
    github: GitHubActivity, tickets: TicketInput = None
) -> WeeklyMetrics:
    """Reduce a week of activity to totals plus a per-repository breakdown.

    ``tickets`` may be a TicketActivity, a sequence of Ticket, or None. Ticket
    stats are only present when at least one ticket is supplied.
    """
    pr_counts, additions, deletions = _summarize_pull_requests(github.pull_requests)
    review_counts = _summarize_reviews(github.reviews)
    breakdown = _build_repo_breakdown(github)

    ticket_stats: WeeklyTicketStats | None = None
    issues = _ticket_list(tickets)
    if issues:
        ticket_stats = WeeklyTicketStats(
            total_issues=len(issues),
            by_status=_count_by([t.status for t in issues]),
            by_priority=_count_by([t.priority for t in issues]),
            by_type=_count_by([t.issue_type for t in issues]),
        )

    logger.debug(
        "Weekly metrics for %s: %d commits, %d PRs, %d reviews across %d repos",
        github.username,
        len(github.commits),
        pr_counts.total,
        review_counts.total,
        len(breakdown),
    )

    return WeeklyMetrics(
        total_commits=len(github.commits),
        pull_requests=pr_counts,
        additions=additions,
        deletions=deletions,
        reviews=review_counts,
        repo_breakdown=breakdown,
        tickets=ticket_stats,
    )


def analyze_sprint_activity(
    github: GitHubActivity, tickets: TicketInput = None
) -> SprintMetrics:
    """Reduce a sprint of activity to totals, merge cadence and ticket completion."""
    pr_counts, additions, deletions = _summarize_pull_requests(github.pull_requests)
    review_counts = _summarize_reviews(github.reviews)
    avg_merge_hours = merge_latency_hours(github.pull_requests)

    ticket_stats: SprintTicketStats | None = None
    issues = _ticket_list(tickets)
    if issues:
        completed = sum(1 for t in issues if is_done(t))
        ticket_stats = SprintTicketStats(
            total_issues=len(issues),
            completed=completed,
            completion_rate=_percentage(completed, len(issues)),
            by_type=_count_by([t.issue_type for t in issues]),
            by_priority=_count_by([t.priority for t in issues]),
        )

    logger.debug(
        "Sprint metrics for %s: %d PRs, merge rate %d%%, avg merge time %s",
        github.username,
        pr_counts.total,
        pr_counts.merge_rate,
        avg_merge_hours,
    )

    return SprintMetrics(
        total_commits=len(github.commits),
        pull_requests=pr_counts,
        additions=additions,
        deletions=deletions,
        reviews=review_counts,
        avg_merge_time_hours=avg_merge_hours,
        tickets=ticket_stats,
    )
