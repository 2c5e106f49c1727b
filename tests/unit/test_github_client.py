"""Unit tests for the GitHub GraphQL client.

Covers:
- request construction (URL + auth)
- GraphQL error mapping
- bounded retry on transport errors
"""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock, patch

import pytest
import requests

from add_to_project.github.client import GitHubAPIError, GitHubAuthError, GitHubClient


def make_response(status_code: int = 200, payload: dict | None = None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"HTTP {status_code}")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture()
def no_sleep():
    with patch("add_to_project.utils.retry.asyncio.sleep", new=AsyncMock()) as sleep:
        yield sleep


@pytest.mark.asyncio
async def test_execute_query_posts_query_with_bearer_token():
    client = GitHubClient("ghs_tok")
    with patch(
        "add_to_project.github.client.requests.post",
        return_value=make_response(payload={"data": {"viewer": {"login": "bot"}}}),
    ) as post:
        data = await client.execute_query("query { viewer { login } }", {"a": 1})

    assert data == {"viewer": {"login": "bot"}}
    args, kwargs = post.call_args
    assert args[0] == "https://api.github.com/graphql"
    assert kwargs["headers"]["Authorization"] == "Bearer ghs_tok"
    assert kwargs["json"] == {"query": "query { viewer { login } }", "variables": {"a": 1}}
    assert kwargs["timeout"] == 30


@pytest.mark.asyncio
async def test_custom_api_url_is_used():
    client = GitHubClient("ghs_tok", api_url="https://ghe.example.com/api/")
    with patch(
        "add_to_project.github.client.requests.post",
        return_value=make_response(payload={"data": {}}),
    ) as post:
        await client.execute_query("query { viewer { login } }")

    assert post.call_args[0][0] == "https://ghe.example.com/api/graphql"
    assert "variables" not in post.call_args[1]["json"]


@pytest.mark.asyncio
async def test_graphql_errors_raise_without_retry(no_sleep):
    errors = [{"type": "NOT_FOUND", "message": "Could not resolve to a ProjectV2"}]
    client = GitHubClient("ghs_tok")
    with patch(
        "add_to_project.github.client.requests.post",
        return_value=make_response(payload={"data": None, "errors": errors}),
    ) as post:
        with pytest.raises(GitHubAPIError) as e:
            await client.execute_query("query { x }")

    assert e.value.errors == errors
    assert post.call_count == 1
    no_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_unauthorized_raises_auth_error_without_retry(no_sleep):
    client = GitHubClient("ghs_tok")
    with patch(
        "add_to_project.github.client.requests.post",
        return_value=make_response(status_code=401),
    ) as post:
        with pytest.raises(GitHubAuthError):
            await client.execute_query("query { x }")

    assert post.call_count == 1


@pytest.mark.asyncio
async def test_server_errors_are_retried_then_succeed(no_sleep):
    client = GitHubClient("ghs_tok")
    responses = [
        make_response(status_code=502),
        make_response(status_code=503),
        make_response(payload={"data": {"ok": True}}),
    ]
    with patch("add_to_project.github.client.requests.post", side_effect=responses) as post:
        data = await client.execute_query("query { x }")

    assert data == {"ok": True}
    assert post.call_count == 3
    assert [c.args[0] for c in no_sleep.await_args_list] == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retries_are_bounded(no_sleep):
    client = GitHubClient("ghs_tok")
    with patch(
        "add_to_project.github.client.requests.post",
        side_effect=requests.ConnectionError("connection reset"),
    ) as post:
        with pytest.raises(requests.ConnectionError):
            await client.execute_query("query { x }")

    assert post.call_count == 3
