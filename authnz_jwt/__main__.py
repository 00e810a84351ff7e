"""
authnz-jwt Entry Point

Allows running the server directly via `python -m authnz_jwt [config.json]`.
Configures logging to stderr, loads the configuration and serves HTTP.
"""

import asyncio
import logging
import os
import sys

from .config.loader import load_config
from .core.auth_server import AuthServer
from .core.constants import DEFAULT_CONFIG_PATH, ENV_CONFIG_PATH, ENV_LOG_LEVEL
from .security.errors import ConfigurationError


def setup_logging():
    """Configure logging to stderr"""
    level_name = os.environ.get(ENV_LOG_LEVEL, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


async def main():
    """Main entry point"""
    setup_logging()
    logger = logging.getLogger("main")

    if len(sys.argv) > 1:
        config_path = sys.argv[1]
    else:
        config_path = os.environ.get(ENV_CONFIG_PATH, DEFAULT_CONFIG_PATH)

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        logger.critical(f"Invalid configuration {config_path}: {e}")
        sys.exit(1)

    server = AuthServer(config)
    try:
        logger.info(f"Starting authnz-jwt on {config.host}:{config.port}...")
        await server.run()
    except Exception as e:
        logger.critical(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


def run():
    """Console script entry point"""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    run()
