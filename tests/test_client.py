"""Tests for client.py — GitHub issues client with mocked HTTP."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from gitissues_widget.client import FetchError, GitHubClient
from gitissues_widget.config import Config
from gitissues_widget.models import FetchFailed, FetchSucceeded


@pytest.fixture
def config():
    return Config(GITISSUES_REPO="octocat/hello-world", GITHUB_API_URL="https://api.test/")


@pytest.fixture
def client(config):
    return GitHubClient(config)


def _ok_response(payload):
    mock_response = MagicMock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = MagicMock()
    return mock_response


SAMPLE_ISSUE = {
    "number": 1,
    "title": "Crash on start",
    "html_url": "https://github.com/octocat/hello-world/issues/1",
    "state": "open",
    "updated_at": "2024-03-15T12:00:00Z",
    "user": {"login": "bob"},
    "comments": 2,
    "labels": [],
}


# --- fetch_issues ---


@pytest.mark.asyncio
async def test_fetch_issues_success(client):
    mock_get = AsyncMock(return_value=_ok_response([SAMPLE_ISSUE]))
    with patch.object(client._client, "get", mock_get):
        issues = await client.fetch_issues("octocat", "hello-world")

    assert issues == [SAMPLE_ISSUE]
    call_url = mock_get.call_args[0][0]
    assert call_url == "https://api.test/repos/octocat/hello-world/issues"


def test_fetch_issues_no_auth_header(client):
    assert "authorization" not in client._client.headers


@pytest.mark.asyncio
async def test_fetch_issues_empty_list(client):
    with patch.object(client._client, "get", new_callable=AsyncMock, return_value=_ok_response([])):
        issues = await client.fetch_issues("octocat", "hello-world")

    assert issues == []


@pytest.mark.asyncio
async def test_fetch_issues_http_error(client):
    mock_response = MagicMock()
    mock_response.status_code = 404
    mock_response.raise_for_status = MagicMock(
        side_effect=httpx.HTTPStatusError("Not Found", request=MagicMock(), response=mock_response)
    )

    with (
        patch.object(client._client, "get", new_callable=AsyncMock, return_value=mock_response),
        pytest.raises(FetchError, match="404"),
    ):
        await client.fetch_issues("octocat", "hello-world")


@pytest.mark.asyncio
async def test_fetch_issues_transport_error(client):
    error = httpx.ConnectError("connection refused")
    with (
        patch.object(client._client, "get", new_callable=AsyncMock, side_effect=error),
        pytest.raises(FetchError, match="connection refused"),
    ):
        await client.fetch_issues("octocat", "hello-world")


@pytest.mark.asyncio
async def test_fetch_issues_malformed_json(client):
    mock_response = MagicMock()
    mock_response.raise_for_status = MagicMock()
    mock_response.json.side_effect = ValueError("Expecting value")

    with (
        patch.object(client._client, "get", new_callable=AsyncMock, return_value=mock_response),
        pytest.raises(FetchError, match="Malformed JSON"),
    ):
        await client.fetch_issues("octocat", "hello-world")


@pytest.mark.asyncio
async def test_fetch_issues_non_list_body(client):
    response = _ok_response({"message": "Moved Permanently"})
    with (
        patch.object(client._client, "get", new_callable=AsyncMock, return_value=response),
        pytest.raises(FetchError, match="dict"),
    ):
        await client.fetch_issues("octocat", "hello-world")


@pytest.mark.asyncio
async def test_fetch_error_is_chained(client):
    error = httpx.ReadTimeout("timed out")
    with patch.object(client._client, "get", new_callable=AsyncMock, side_effect=error):
        with pytest.raises(FetchError) as exc_info:
            await client.fetch_issues("octocat", "hello-world")

    assert exc_info.value.__cause__ is error


# --- command ---


@pytest.mark.asyncio
async def test_command_success_uses_configured_repo(client):
    client.fetch_issues = AsyncMock(return_value=[SAMPLE_ISSUE])

    event = await client.command()

    assert event == FetchSucceeded(data=[SAMPLE_ISSUE])
    client.fetch_issues.assert_awaited_once_with("octocat", "hello-world")


@pytest.mark.asyncio
async def test_command_failure_returns_event(client):
    client.fetch_issues = AsyncMock(side_effect=FetchError("GitHub API request failed: 500"))

    event = await client.command()

    assert isinstance(event, FetchFailed)
    assert event.error == "GitHub API request failed: 500"


# --- Lifecycle ---


@pytest.mark.asyncio
async def test_aclose(client):
    await client.aclose()
    assert client._client.is_closed


@pytest.mark.asyncio
async def test_aclose_twice(client):
    await client.aclose()
    await client.aclose()
    assert client._client.is_closed
