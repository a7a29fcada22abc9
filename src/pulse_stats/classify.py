"""Classification rules for pull requests, reviews and ticket statuses."""

from __future__ import annotations

import logging

from .models import PullRequest, Review, Ticket

logger = logging.getLogger(__name__)

MERGED = "merged"
OPEN = "open"
CLOSED = "closed"

APPROVED = "approved"
CHANGES_REQUESTED = "changes_requested"
COMMENTED = "commented"

DONE_STATUSES = frozenset(
    {
        "done",
        "closed",
        "resolved",
        "complete",
        "completed",
    }
)


def classify_pull_request(pr: PullRequest) -> str:
    """Return ``MERGED``, ``OPEN`` or ``CLOSED`` for a pull request.

    Any state other than ``merged`` or ``open`` counts as closed.
    """
    if pr.state == "merged":
        return MERGED
    if pr.state == "open":
        return OPEN
    if pr.state != "closed":
        logger.debug("Counting PR #%s with state %r as closed", pr.number, pr.state)
    return CLOSED


def classify_review(review: Review) -> str:
    """Return ``APPROVED``, ``CHANGES_REQUESTED`` or ``COMMENTED`` for a review."""
    if review.state == "APPROVED":
        return APPROVED
    if review.state == "CHANGES_REQUESTED":
        return CHANGES_REQUESTED
    return COMMENTED


def is_done(ticket: Ticket) -> bool:
    """Check if a ticket's status is in the done vocabulary (case-insensitive)."""
    return isinstance(ticket.status, str) and ticket.status.lower() in DONE_STATUSES
