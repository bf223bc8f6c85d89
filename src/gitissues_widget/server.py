"""MCP Server entry point for the GitIssues widget.

Runs FastMCP with Streamable HTTP transport; tools poll GitHub lazily,
at most once per refresh interval.
"""

import asyncio
import logging
import sys

from fastmcp import FastMCP

from .client import GitHubClient
from .config import load_config
from .host import WidgetHost
from .tools import register_tools

logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run the GitIssues MCP server."""
    config = load_config()
    client = GitHubClient(config)
    host = WidgetHost(client, config)

    mcp = FastMCP("gitissues-widget")
    register_tools(mcp, host)

    logger.info(
        "Starting GitIssues MCP server for %s on %s:%d (streamable-http)",
        config.github_repo,
        config.server_host,
        config.server_port,
    )
    try:
        mcp.run(
            transport="streamable-http",
            host=config.server_host,
            port=config.server_port,
        )
    finally:
        # mcp.run() owns its event loop; it is gone by now.
        logger.info("Shutting down, closing connections...")
        host.stop()
        asyncio.run(client.aclose())


if __name__ == "__main__":
    main()
