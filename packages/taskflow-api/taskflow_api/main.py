"""
Command-line entry point for the Taskflow HTTP API.
"""

import argparse
import logging

import uvicorn

from taskflow.config import load_config
from taskflow.logging_setup import setup_logging
from taskflow_api.app import create_app

logger = logging.getLogger(__name__)


def main():
    """Main entry point for taskflow-api command."""
    parser = argparse.ArgumentParser(description="Taskflow HTTP API")
    parser.add_argument("--host", help="Bind address (overrides config)")
    parser.add_argument("--port", type=int, help="Port (overrides config)")
    parser.add_argument("--no-seed", action="store_true", help="Start with an empty task store")
    args = parser.parse_args()

    config = load_config()
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port
    if args.no_seed:
        config.store.seed_demo_tasks = False

    setup_logging(config.logging.level, config.logging.file)

    app = create_app(config)
    logger.info(f"Serving on http://{config.server.host}:{config.server.port}")
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_config=None)


if __name__ == "__main__":
    main()
