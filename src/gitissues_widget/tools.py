"""MCP tool definitions for the GitIssues widget.

All exceptions are caught at the tool boundary and returned as
"Error: ..." strings so the MCP protocol never sees an uncaught exception.
"""

import json
import logging

from fastmcp import FastMCP

from .host import WidgetHost

logger = logging.getLogger(__name__)


def register_tools(mcp: FastMCP, host: WidgetHost) -> None:
    """Register the widget tools on the given MCP server instance."""

    @mcp.tool()
    async def get_open_issues() -> str:
        """Get up to 10 open issues of the watched repository.

        Polls GitHub if the last poll is older than the refresh interval.

        Returns a JSON list of issues with title, number, url, user, time,
        comments and labels fields.
        """
        try:
            state = await host.ensure_fresh()
            return json.dumps([issue.to_dict() for issue in state.display_issues])
        except Exception as e:
            logger.error("get_open_issues failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def refresh_issues() -> str:
        """Poll GitHub now, ignoring the refresh interval.

        Returns the full widget state as JSON: warning, display_issues and
        last_checked.
        """
        try:
            state = await host.poll_once()
            return json.dumps(state.to_dict())
        except Exception as e:
            logger.error("refresh_issues failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def render_widget() -> str:
        """Render the widget as an HTML fragment."""
        try:
            await host.ensure_fresh()
            return host.render()
        except Exception as e:
            logger.error("render_widget failed: %s", e, exc_info=True)
            return f"Error: {e}"

    @mcp.tool()
    async def get_feed_status() -> str:
        """Get the current banner and last-checked time without polling."""
        try:
            state = host.state
            return json.dumps(
                {
                    "warning": state.warning,
                    "last_checked": state.last_checked,
                    "issue_count": len(state.display_issues),
                    "refresh_frequency_ms": host.refresh_frequency,
                }
            )
        except Exception as e:
            logger.error("get_feed_status failed: %s", e, exc_info=True)
            return f"Error: {e}"
