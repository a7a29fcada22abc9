"""Data models for pulse-stats."""

from __future__ import annotations

from dataclasses import dataclass, field


# Activity records, as supplied by the activity-fetching collaborator.


@dataclass(frozen=True)
class TimeRange:
    start: str = ""
    end: str = ""


@dataclass(frozen=True)
class Commit:
    sha: str
    message: str = ""
    author: str = ""
    date: str = ""
    repo: str = ""
    url: str = ""


@dataclass(frozen=True)
class PullRequest:
    """A pull request in one of the ``open``, ``merged`` or ``closed`` states.

    ``additions`` and ``deletions`` are ``None`` when the source did not report
    them; they count as zero in line totals.
    """

    number: int
    title: str = ""
    state: str = "open"
    author: str = ""
    created_at: str = ""
    updated_at: str = ""
    merged_at: str | None = None
    repo: str = ""
    url: str = ""
    additions: int | None = None
    deletions: int | None = None


@dataclass(frozen=True)
class Review:
    pull_request_number: int
    pull_request_title: str = ""
    author: str = ""
    state: str = ""
    submitted_at: str = ""
    repo: str = ""


@dataclass(frozen=True)
class Ticket:
    key: str
    summary: str = ""
    status: str = ""
    priority: str = ""
    assignee: str = ""
    issue_type: str = ""
    updated_at: str = ""
    url: str = ""


@dataclass(frozen=True)
class GitHubActivity:
    """Commits, pull requests and reviews by one user over a time range."""

    username: str
    commits: list[Commit] = field(default_factory=list)
    pull_requests: list[PullRequest] = field(default_factory=list)
    reviews: list[Review] = field(default_factory=list)
    time_range: TimeRange = field(default_factory=TimeRange)


@dataclass(frozen=True)
class TicketActivity:
    issues: list[Ticket] = field(default_factory=list)
    time_range: TimeRange = field(default_factory=TimeRange)


# Metrics records produced by the reducers.


@dataclass(frozen=True)
class PullRequestCounts:
    total: int = 0
    open: int = 0
    merged: int = 0
    closed: int = 0
    merge_rate: int = 0


@dataclass(frozen=True)
class ReviewCounts:
    total: int = 0
    approved: int = 0
    changes_requested: int = 0
    commented: int = 0


@dataclass(frozen=True)
class RepoActivity:
    """Per-repository activity within a weekly report."""

    repo: str
    commits: int = 0
    pull_requests: int = 0
    merged: int = 0
    additions: int = 0
    deletions: int = 0
    reviews: int = 0

    @property
    def total_activity(self) -> int:
        return self.commits + self.pull_requests + self.reviews


@dataclass(frozen=True)
class WeeklyTicketStats:
    total_issues: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    by_priority: dict[str, int] = field(default_factory=dict)
    by_type: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class SprintTicketStats:
    """Ticket totals for a sprint; ``completed`` never exceeds ``total_issues``."""

    total_issues: int = 0
    completed: int = 0
    completion_rate: int = 0
    by_type: dict[str, int] = field(default_factory=dict)
    by_priority: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class WeeklyMetrics:
    """Weekly totals. Frozen at the top level; the ticket dicts are fresh per call."""

    total_commits: int = 0
    pull_requests: PullRequestCounts = field(default_factory=PullRequestCounts)
    additions: int = 0
    deletions: int = 0
    reviews: ReviewCounts = field(default_factory=ReviewCounts)
    repo_breakdown: tuple[RepoActivity, ...] = ()
    tickets: WeeklyTicketStats | None = None


@dataclass(frozen=True)
class SprintMetrics:
    total_commits: int = 0
    pull_requests: PullRequestCounts = field(default_factory=PullRequestCounts)
    additions: int = 0
    deletions: int = 0
    reviews: ReviewCounts = field(default_factory=ReviewCounts)
    # None when no merged PR has parseable, ordered timestamps.
    avg_merge_time_hours: float | None = None
    tickets: SprintTicketStats | None = None
