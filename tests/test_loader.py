"""Tests for the loader module."""

from __future__ import annotations

import json

import pytest

from pulse_stats.loader import (
    ActivityDataError,
    load_github_activity,
    load_ticket_activity,
    parse_github_activity,
    parse_ticket_activity,
)


def test_parse_github_activity(activity_doc):
    activity = parse_github_activity(activity_doc)

    assert activity.username == "alice"
    assert activity.time_range.start == "2026-02-01T00:00:00Z"
    assert activity.time_range.end == "2026-02-14T00:00:00Z"
    assert len(activity.commits) == 3
    assert activity.commits[0].sha == "a1"
    assert activity.commits[1].repo == "org/lib"

    pr = activity.pull_requests[0]
    assert pr.number == 1
    assert pr.state == "merged"
    assert pr.created_at == "2026-02-01T00:00:00Z"
    assert pr.merged_at == "2026-02-02T00:00:00Z"
    assert pr.additions == 120
    assert pr.deletions == 30

    assert activity.pull_requests[1].additions is None
    assert activity.pull_requests[2].merged_at is None

    review = activity.reviews[0]
    assert review.pull_request_number == 9
    assert review.pull_request_title == "Other"
    assert review.state == "APPROVED"
    assert review.submitted_at == "2026-02-03T00:00:00Z"


def test_parse_github_activity_missing_collections_are_empty():
    activity = parse_github_activity({"username": "bob"})
    assert activity.commits == []
    assert activity.pull_requests == []
    assert activity.reviews == []
    assert activity.time_range.start == ""


def test_parse_github_activity_non_numeric_line_counts():
    activity = parse_github_activity(
        {"pullRequests": [{"number": 1, "state": "open", "additions": "n/a", "deletions": "7"}]}
    )
    pr = activity.pull_requests[0]
    assert pr.additions is None
    assert pr.deletions == 7


@pytest.mark.parametrize("data", [None, [], "activity", 42])
def test_parse_github_activity_rejects_non_objects(data):
    with pytest.raises(ActivityDataError):
        parse_github_activity(data)


@pytest.mark.parametrize("key", ["commits", "pullRequests", "reviews"])
def test_parse_github_activity_rejects_non_list_collections(key):
    with pytest.raises(ActivityDataError, match=key):
        parse_github_activity({"username": "alice", key: {"oops": 1}})


def test_parse_github_activity_rejects_non_object_records():
    with pytest.raises(ActivityDataError, match=r"commits\[1\]"):
        parse_github_activity({"commits": [{"sha": "a"}, "b"]})


def test_parse_ticket_activity(tickets_doc):
    activity = parse_ticket_activity(tickets_doc)

    assert len(activity.issues) == 4
    ticket = activity.issues[1]
    assert ticket.key == "P-2"
    assert ticket.status == "In Progress"
    assert ticket.priority == "High"
    assert ticket.issue_type == "Bug"
    assert activity.time_range.end == "2026-02-14T00:00:00Z"


def test_parse_ticket_activity_accepts_bare_list(tickets_doc):
    activity = parse_ticket_activity(tickets_doc["issues"])
    assert [t.key for t in activity.issues] == ["P-1", "P-2", "P-3", "P-4"]


def test_parse_ticket_activity_rejects_bad_issues():
    with pytest.raises(ActivityDataError):
        parse_ticket_activity({"issues": "P-1"})
    with pytest.raises(ActivityDataError):
        parse_ticket_activity("P-1")


def test_load_from_files(activity_file, tickets_file):
    assert load_github_activity(activity_file).username == "alice"
    assert len(load_ticket_activity(tickets_file).issues) == 4


def test_load_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(json.JSONDecodeError):
        load_github_activity(path)


def test_parse_github_activity_drops_non_string_fields():
    activity = parse_github_activity(
        {
            "username": 42,
            "timeRange": {"from": 0, "to": "2026-02-07T00:00:00Z"},
            "commits": [{"sha": 123, "repo": ["org/app"]}],
            "pullRequests": [
                {"number": 1, "state": "merged", "createdAt": 1738368000000,
                 "mergedAt": 1738454400000, "title": None},
            ],
            "reviews": [{"pullRequestNumber": 2, "state": {"x": 1}}],
        }
    )
    assert activity.username == ""
    assert activity.time_range.start == ""
    assert activity.time_range.end == "2026-02-07T00:00:00Z"
    assert activity.commits[0].sha == ""
    assert activity.commits[0].repo == ""
    pr = activity.pull_requests[0]
    assert pr.created_at == ""
    assert pr.merged_at is None
    assert pr.title == ""
    assert activity.reviews[0].state == ""


def test_parse_ticket_activity_drops_non_string_fields():
    activity = parse_ticket_activity(
        [{"key": "P-1", "status": 3, "priority": {"name": "High"}, "issueType": ["Bug"]}]
    )
    ticket = activity.issues[0]
    assert ticket.key == "P-1"
    assert ticket.status == ""
    assert ticket.priority == ""
    assert ticket.issue_type == ""


@pytest.mark.parametrize(
    "value,expected",
    [
        (12, 12),
        ("7", 7),
        (" 8 ", 8),
        (None, None),
        (12.7, None),
        (True, None),
        (False, None),
        ("-3", None),
        ("n/a", None),
        ([1], None),
    ],
)
def test_parse_pull_request_line_counts(value, expected):
    activity = parse_github_activity(
        {"pullRequests": [{"number": 1, "state": "open", "additions": value}]}
    )
    assert activity.pull_requests[0].additions == expected
