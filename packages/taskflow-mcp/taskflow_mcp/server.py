"""
Taskflow MCP Server

Exposes the task service to AI agents as MCP tools.
"""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from taskflow.config import TaskflowConfig, load_config
from taskflow.logging_setup import setup_logging
from taskflow.services import TaskService
from taskflow.store import create_store
from taskflow_mcp.tools.tasks import register_task_tools

logger = logging.getLogger(__name__)


def create_server(
    config: Optional[TaskflowConfig] = None,
    service: Optional[TaskService] = None,
) -> FastMCP:
    """
    Create the MCP server with all task tools registered.

    Args:
        config: Optional TaskflowConfig. If not provided, loads from default location.
        service: Optional TaskService. If not provided, one is built over a
            fresh store that lives as long as the server.

    Returns:
        FastMCP server instance
    """
    config = config or load_config()
    if service is None:
        service = TaskService(create_store(config))

    mcp = FastMCP("taskflow")
    register_task_tools(mcp, service, config)

    logger.info("Taskflow MCP server created")
    return mcp


# =============================================================================
# CLI ENTRY POINT
# =============================================================================

def main():
    """Main entry point for taskflow-mcp command."""
    import argparse

    parser = argparse.ArgumentParser(description="Taskflow MCP Server")
    parser.add_argument("--no-seed", action="store_true", help="Start with an empty task store")
    args = parser.parse_args()

    config = load_config()
    if args.no_seed:
        config.store.seed_demo_tasks = False

    # stdout carries the MCP stdio transport, so logs go to stderr only
    setup_logging(config.logging.level, config.logging.file)

    mcp = create_server(config)
    mcp.run()


if __name__ == "__main__":
    main()
