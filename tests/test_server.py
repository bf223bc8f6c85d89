"""Tests for server.py — entry point wiring and shutdown."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from gitissues_widget import server
from gitissues_widget.config import Config


@pytest.fixture
def fake_client():
    client = MagicMock()
    client.aclose = AsyncMock()
    return client


def test_main_runs_streamable_http(fake_client):
    config = Config(GITISSUES_REPO="o/r", MCP_SERVER_HOST="0.0.0.0", MCP_SERVER_PORT=9999)
    fake_mcp = MagicMock()

    with (
        patch.object(server, "load_config", return_value=config),
        patch.object(server, "GitHubClient", return_value=fake_client),
        patch.object(server, "FastMCP", return_value=fake_mcp),
    ):
        server.main()

    fake_mcp.run.assert_called_once_with(transport="streamable-http", host="0.0.0.0", port=9999)
    fake_client.aclose.assert_awaited_once()


def test_client_closed_when_server_interrupted(fake_client):
    fake_mcp = MagicMock()
    fake_mcp.run.side_effect = KeyboardInterrupt

    with (
        patch.object(server, "load_config", return_value=Config(GITISSUES_REPO="o/r")),
        patch.object(server, "GitHubClient", return_value=fake_client),
        patch.object(server, "FastMCP", return_value=fake_mcp),
        pytest.raises(KeyboardInterrupt),
    ):
        server.main()

    fake_client.aclose.assert_awaited_once()
