from __future__ import annotations

import json

import pytest


@pytest.fixture
def activity_doc() -> dict:
    return {
        "username": "alice",
        "timeRange": {"from": "2026-02-01T00:00:00Z", "to": "2026-02-14T00:00:00Z"},
        "commits": [
            {"sha": "a1", "message": "feat: login", "author": "alice",
             "date": "2026-02-02T10:00:00Z", "repo": "org/app", "url": ""},
            {"sha": "a2", "message": "fix: typo", "author": "alice",
             "date": "2026-02-03T10:00:00Z", "repo": "org/lib", "url": ""},
            {"sha": "a3", "message": "docs: readme", "author": "alice",
             "date": "2026-02-04T10:00:00Z", "repo": "org/app", "url": ""},
        ],
        "pullRequests": [
            {"number": 1, "title": "Add login", "state": "merged", "author": "alice",
             "createdAt": "2026-02-01T00:00:00Z", "updatedAt": "2026-02-02T00:00:00Z",
             "mergedAt": "2026-02-02T00:00:00Z", "repo": "org/app", "url": "",
             "additions": 120, "deletions": 30},
            {"number": 2, "title": "Refactor", "state": "merged", "author": "alice",
             "createdAt": "2026-02-01T00:00:00Z", "updatedAt": "2026-02-02T12:00:00Z",
             "mergedAt": "2026-02-02T12:00:00Z", "repo": "org/lib", "url": ""},
            {"number": 3, "title": "WIP", "state": "open", "author": "alice",
             "createdAt": "2026-02-05T00:00:00Z", "updatedAt": "2026-02-05T00:00:00Z",
             "repo": "org/app", "url": ""},
            {"number": 4, "title": "Abandoned", "state": "closed", "author": "alice",
             "createdAt": "2026-02-05T00:00:00Z", "updatedAt": "2026-02-06T00:00:00Z",
             "repo": "org/app", "url": ""},
        ],
        "reviews": [
            {"pullRequestNumber": 9, "pullRequestTitle": "Other", "author": "alice",
             "state": "APPROVED", "submittedAt": "2026-02-03T00:00:00Z", "repo": "org/lib"},
            {"pullRequestNumber": 10, "pullRequestTitle": "Another", "author": "alice",
             "state": "COMMENTED", "submittedAt": "2026-02-04T00:00:00Z", "repo": "org/lib"},
        ],
    }


@pytest.fixture
def tickets_doc() -> dict:
    return {
        "issues": [
            {"key": "P-1", "summary": "Login", "status": "Done", "priority": "High",
             "assignee": "alice", "issueType": "Story", "updatedAt": "", "url": ""},
            {"key": "P-2", "summary": "Crash", "status": "In Progress", "priority": "High",
             "assignee": "alice", "issueType": "Bug", "updatedAt": "", "url": ""},
            {"key": "P-3", "summary": "Docs", "status": "Closed", "priority": "Low",
             "assignee": "alice", "issueType": "Task", "updatedAt": "", "url": ""},
            {"key": "P-4", "summary": "Flaky test", "status": "Resolved", "priority": "Medium",
             "assignee": "alice", "issueType": "Bug", "updatedAt": "", "url": ""},
        ],
        "timeRange": {"from": "2026-02-01T00:00:00Z", "to": "2026-02-14T00:00:00Z"},
    }


@pytest.fixture
def activity_file(tmp_path, activity_doc):
    path = tmp_path / "activity.json"
    path.write_text(json.dumps(activity_doc))
    return path


@pytest.fixture
def tickets_file(tmp_path, tickets_doc):
    path = tmp_path / "tickets.json"
    path.write_text(json.dumps(tickets_doc))
    return path
