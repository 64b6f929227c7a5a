"""Bot configuration.

Settings come from environment variables and an optional YAML file.
Environment variables win over file values.

Environment Variables:
    SLACK_BOT_TOKEN: Bot token (xoxb-...), required
    SLACK_APP_TOKEN: App-level token (xapp-...) for Socket Mode, required
    REDIS_URL: Redis connection URL; the in-memory store is used if unset
    NOHEREBOT_CONFIG: Path to the YAML file (default: '/app/config/noherebot.yml')

YAML file keys:
    default_warning_message: Warning used for channels without their own
    redis_url: Redis connection URL
    ignored_users: Member ids whose messages are never handled

Example noherebot.yml:
    default_warning_message: "Please don't ping everyone here."
    ignored_users:
      - USLACKBOT
      - U0OTHERBOT
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .repositories import DEFAULT_WARNING_MESSAGE

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "/app/config/noherebot.yml"


@dataclass
class BotConfig:
    """Runtime configuration of the bot."""

    slack_bot_token: str
    slack_app_token: Optional[str] = None
    redis_url: Optional[str] = None
    default_warning_message: str = DEFAULT_WARNING_MESSAGE
    ignored_users: List[str] = field(default_factory=lambda: ["USLACKBOT"])


def _load_file(config_path: str) -> Dict[str, Any]:
    """Load the YAML config file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Parsed mapping, empty if the file does not exist

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping
    """
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug(f"Config file {config_path} not found, using defaults")
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    logger.info(f"Loaded config from {config_path}")
    return data


def load_config(config_path: Optional[str] = None) -> BotConfig:
    """Build the bot configuration from file and environment.

    Args:
        config_path: YAML file path, NOHEREBOT_CONFIG or the default if omitted

    Returns:
        BotConfig instance

    Raises:
        ConfigError: If a Slack token is missing or the file is invalid
    """
    path = config_path or os.getenv("NOHEREBOT_CONFIG", DEFAULT_CONFIG_PATH)
    file_config = _load_file(path)

    slack_bot_token = os.getenv("SLACK_BOT_TOKEN")
    if not slack_bot_token:
        raise ConfigError("SLACK_BOT_TOKEN not defined")

    slack_app_token = os.getenv("SLACK_APP_TOKEN")
    if not slack_app_token:
        raise ConfigError("SLACK_APP_TOKEN not defined")

    config = BotConfig(
        slack_bot_token=slack_bot_token,
        slack_app_token=slack_app_token,
        redis_url=os.getenv("REDIS_URL") or file_config.get("redis_url"),
    )

    # An empty "default_warning_message:" key leaves the built-in default.
    if file_config.get("default_warning_message") is not None:
        config.default_warning_message = str(file_config["default_warning_message"])

    if "ignored_users" in file_config:
        ignored = file_config["ignored_users"] or []
        if not isinstance(ignored, list):
            raise ConfigError("ignored_users must be a list of member ids")
        config.ignored_users = [str(user) for user in ignored]

    return config
