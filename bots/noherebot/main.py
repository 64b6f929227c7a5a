#!/usr/bin/env python3
"""Main entry point for the no-here bot.

This module handles bot initialization and the main event loop.
Components are initialized in dependency order:

    1. Config - Environment variables and optional YAML file
    2. Settings store - Redis when REDIS_URL is set, in-memory otherwise
    3. Message handler - Command parser, dispatcher and broadcast guard
    4. Slack handler - Socket Mode event loop and reply delivery

Environment Variables:
    SLACK_BOT_TOKEN: Bot token (required)
    SLACK_APP_TOKEN: App-level token for Socket Mode (required to run)
    REDIS_URL: Redis connection URL (optional)
    LOG_LEVEL: Logging level (default: 'INFO')
    NOHEREBOT_CONFIG: YAML config path (default: '/app/config/noherebot.yml')

Example:
    Run the bot locally with a persistent store:

    $ export SLACK_BOT_TOKEN=xoxb-...
    $ export SLACK_APP_TOKEN=xapp-...
    $ export REDIS_URL=redis://localhost:6379/0
    $ python -m noherebot.main
"""

import logging
import os
import sys

from .config import load_config
from .errors import ConfigError
from .message_handler import MessageHandler
from .repositories import create_repository
from .slack_handler import SlackHandler

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


def main():
    """Initialize bot and start event loop.

    Raises:
        SystemExit: On fatal initialization errors (exit code 1)

    Note:
        Gracefully handles KeyboardInterrupt for clean shutdown.
    """
    logger.info("Starting no-here bot")

    try:
        config = load_config()
        repository = create_repository(config)
        message_handler = MessageHandler(repository)
        slack_handler = SlackHandler(config, message_handler)

        logger.info("Bot initialized successfully")
        logger.info("Waiting for messages...")

        slack_handler.start()

    except KeyboardInterrupt:
        logger.info("Shutting down gracefully...")
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
