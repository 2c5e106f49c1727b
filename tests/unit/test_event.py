"""Unit tests for reading the workflow event payload."""

from __future__ import annotations

from pathlib import Path

import pytest

from add_to_project.config import ConfigError
from add_to_project.utils.event import load_event, parse_event


def test_load_issue_event(write_event, issue_event):
    event = load_event(str(write_event(issue_event)))
    assert event.content.node_id == "I_kwDOissue"
    assert event.content.number == 42
    assert event.owner_login == "acme"
    assert event.label_names == ["bug", "needs-triage"]


def test_pull_request_is_used_when_there_is_no_issue():
    event = parse_event(
        {
            "pull_request": {
                "node_id": "PR_kwDOpr",
                "number": 5,
                "html_url": "https://github.com/other/repo/pull/5",
            },
            "repository": {"owner": {"login": "other"}},
        }
    )
    assert event.content.node_id == "PR_kwDOpr"
    assert event.label_names == []
    assert event.owner_login == "other"


def test_missing_repository_owner_is_tolerated(issue_event):
    del issue_event["repository"]
    assert parse_event(issue_event).owner_login is None


def test_event_without_issue_or_pull_request_is_rejected():
    with pytest.raises(ConfigError) as e:
        parse_event({"action": "created", "comment": {}})
    assert "neither an issue nor a pull_request" in str(e.value)


def test_malformed_issue_payload_is_rejected():
    with pytest.raises(ConfigError):
        parse_event({"issue": {"number": 1}})


def test_missing_event_path_is_rejected():
    with pytest.raises(ConfigError):
        load_event("")


def test_unreadable_event_file_is_rejected(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_event(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_event(str(broken))
