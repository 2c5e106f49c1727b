# Shared pytest fixtures
from __future__ import annotations

import json
from pathlib import Path

import pytest

from add_to_project.config import get_settings
from add_to_project.github.mutations import ADD_DRAFT_ISSUE, ADD_TO_PROJECT, UPDATE_PROJECT_FIELD
from add_to_project.github.queries import GET_PROJECT_FIELDS

PROJECT_URL = "https://github.com/orgs/acme/projects/7"


@pytest.fixture()
def project_fields() -> list[dict]:
    """フィールド取得クエリが返すノード（空のプレースホルダを含む）"""
    return [
        {"id": "F_title", "name": "Title", "dataType": "TITLE"},
        {},
        {
            "id": "F_status",
            "name": "Status",
            "dataType": "SINGLE_SELECT",
            "options": [
                {"id": "O_todo", "name": "Todo"},
                {"id": "O_done", "name": "Done"},
            ],
        },
        {"id": "F_notes", "name": "Notes", "dataType": "TEXT"},
        {"id": "F_estimate", "name": "Estimate", "dataType": "NUMBER"},
        {"id": "F_sprint", "name": "Sprint", "dataType": "ITERATION"},
    ]


@pytest.fixture()
def issue_event() -> dict:
    return {
        "action": "opened",
        "issue": {
            "node_id": "I_kwDOissue",
            "number": 42,
            "html_url": "https://github.com/acme/widgets/issues/42",
            "labels": [{"name": "Bug"}, {"name": "needs-triage"}],
        },
        "repository": {"name": "widgets", "owner": {"login": "acme"}},
    }


@pytest.fixture()
def write_event(tmp_path: Path):
    def _write(payload: dict) -> Path:
        path = tmp_path / "event.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def action_env(monkeypatch, tmp_path: Path, write_event, issue_event):
    """Actionsランナーと同じ形の環境変数を設定する"""
    monkeypatch.chdir(tmp_path)
    event_path = write_event(issue_event)
    output_path = tmp_path / "github_output"
    output_path.write_text("", encoding="utf-8")

    env = {
        "INPUT_PROJECT-URL": PROJECT_URL,
        "INPUT_GITHUB-TOKEN": "ghs_testtoken",
        "INPUT_FIELDS": "Status=done\nEstimate=3",
        "INPUT_LABELED": "",
        "INPUT_LABEL-OPERATOR": "",
        "GITHUB_EVENT_PATH": str(event_path),
        "GITHUB_OUTPUT": str(output_path),
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)

    get_settings.cache_clear()
    yield env
    get_settings.cache_clear()


class FakeGitHubClient:
    """GraphQL呼び出しを記録し、固定のレスポンスを返すクライアント"""

    def __init__(self, fields: list[dict], project_id: str = "PVT_project"):
        self.fields = fields
        self.project_id = project_id
        self.calls: list[tuple[str, dict | None]] = []

    async def execute_query(self, query: str, variables: dict | None = None) -> dict:
        self.calls.append((query, variables))

        if query == GET_PROJECT_FIELDS:
            return {"node": {"fields": {"nodes": self.fields}}}
        if query == ADD_TO_PROJECT:
            return {"addProjectV2ItemById": {"item": {"id": "PVTI_item"}}}
        if query == ADD_DRAFT_ISSUE:
            return {"addProjectV2DraftIssue": {"projectItem": {"id": "PVTI_draft"}}}
        if query == UPDATE_PROJECT_FIELD:
            return {"updateProjectV2ItemFieldValue": {"projectV2Item": {"id": variables["itemId"]}}}

        root = "organization" if "organization(" in query else "user"
        return {root: {"projectV2": {"id": self.project_id}}}

    def calls_for(self, query: str) -> list[dict | None]:
        return [variables for q, variables in self.calls if q == query]


@pytest.fixture()
def fake_client(project_fields) -> FakeGitHubClient:
    return FakeGitHubClient(project_fields)
