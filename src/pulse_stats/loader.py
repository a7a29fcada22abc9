"""Parse activity JSON documents into model objects."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .models import (
    Commit,
    GitHubActivity,
    PullRequest,
    Review,
    Ticket,
    TicketActivity,
    TimeRange,
)

logger = logging.getLogger(__name__)


class ActivityDataError(ValueError):
    """Raised when an activity document does not have the expected structure."""


def _read_json(path: str | Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _require_list(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ActivityDataError(f"'{key}' must be a list, got {type(value).__name__}")
    for i, item in enumerate(value):
        if not isinstance(item, dict):
            raise ActivityDataError(f"'{key}[{i}]' must be an object")
    return value


def _str(raw: dict[str, Any], key: str) -> str:
    """Return ``raw[key]`` if it is a string, else ``""``."""
    value = raw.get(key)
    if isinstance(value, str):
        return value
    if value is not None:
        logger.debug("Ignoring non-string %s %r", key, value)
    return ""


def _optional_str(raw: dict[str, Any], key: str) -> str | None:
    value = raw.get(key)
    if value is None or isinstance(value, str):
        return value
    logger.debug("Ignoring non-string %s %r", key, value)
    return None


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    logger.debug("Ignoring non-integer line count %r", value)
    return None


def _parse_time_range(raw: Any) -> TimeRange:
    if not isinstance(raw, dict):
        return TimeRange()
    return TimeRange(start=_str(raw, "from"), end=_str(raw, "to"))


def _parse_commit(raw: dict[str, Any]) -> Commit:
    return Commit(
        sha=_str(raw, "sha"),
        message=_str(raw, "message"),
        author=_str(raw, "author"),
        date=_str(raw, "date"),
        repo=_str(raw, "repo"),
        url=_str(raw, "url"),
    )


def _parse_pull_request(raw: dict[str, Any]) -> PullRequest:
    return PullRequest(
        number=raw.get("number", 0),
        title=_str(raw, "title"),
        state=_str(raw, "state"),
        author=_str(raw, "author"),
        created_at=_str(raw, "createdAt"),
        updated_at=_str(raw, "updatedAt"),
        merged_at=_optional_str(raw, "mergedAt"),
        repo=_str(raw, "repo"),
        url=_str(raw, "url"),
        additions=_optional_int(raw.get("additions")),
        deletions=_optional_int(raw.get("deletions")),
    )


def _parse_review(raw: dict[str, Any]) -> Review:
    return Review(
        pull_request_number=raw.get("pullRequestNumber", 0),
        pull_request_title=_str(raw, "pullRequestTitle"),
        author=_str(raw, "author"),
        state=_str(raw, "state"),
        submitted_at=_str(raw, "submittedAt"),
        repo=_str(raw, "repo"),
    )


def _parse_ticket(raw: dict[str, Any]) -> Ticket:
    return Ticket(
        key=_str(raw, "key"),
        summary=_str(raw, "summary"),
        status=_str(raw, "status"),
        priority=_str(raw, "priority"),
        assignee=_str(raw, "assignee"),
        issue_type=_str(raw, "issueType"),
        updated_at=_str(raw, "updatedAt"),
        url=_str(raw, "url"),
    )


def parse_github_activity(data: Any) -> GitHubActivity:
    """Build a GitHubActivity from a decoded activity document.

    Missing collections are treated as empty. Raises ActivityDataError when
    the document or one of its collections has the wrong shape.
    """
    if not isinstance(data, dict):
        raise ActivityDataError("GitHub activity document must be a JSON object")

    activity = GitHubActivity(
        username=_str(data, "username"),
        commits=[_parse_commit(c) for c in _require_list(data, "commits")],
        pull_requests=[
            _parse_pull_request(pr) for pr in _require_list(data, "pullRequests")
        ],
        reviews=[_parse_review(r) for r in _require_list(data, "reviews")],
        time_range=_parse_time_range(data.get("timeRange")),
    )
    logger.debug(
        "Loaded activity for %s: %d commits, %d PRs, %d reviews",
        activity.username,
        len(activity.commits),
        len(activity.pull_requests),
        len(activity.reviews),
    )
    return activity


def parse_ticket_activity(data: Any) -> TicketActivity:
    """Build a TicketActivity from a decoded document or a bare list of issues."""
    if isinstance(data, list):
        data = {"issues": data}
    if not isinstance(data, dict):
        raise ActivityDataError("Ticket activity document must be a JSON object or list")

    activity = TicketActivity(
        issues=[_parse_ticket(t) for t in _require_list(data, "issues")],
        time_range=_parse_time_range(data.get("timeRange")),
    )
    logger.debug("Loaded %d tickets", len(activity.issues))
    return activity


def load_github_activity(path: str | Path) -> GitHubActivity:
    return parse_github_activity(_read_json(path))


def load_ticket_activity(path: str | Path) -> TicketActivity:
    return parse_ticket_activity(_read_json(path))
