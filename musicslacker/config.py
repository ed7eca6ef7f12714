"""Music Slacker configuration management."""

import logging

from pydantic import Field
from pydantic_settings import BaseSettings
from typing import Optional

from .resolver import SONGLINK_API_URL

logger = logging.getLogger("musicslacker.config")


class MusicSlackerSettings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    # Slack
    slack_bot_token: Optional[str] = Field(default=None, description="Slack bot token (xoxb-...)")
    slack_signing_secret: Optional[str] = Field(default=None, description="Slack app signing secret")

    # song.link
    resolver_url: str = Field(default=SONGLINK_API_URL, description="song.link links endpoint")
    user_country: str = Field(default="US", description="Country code sent as userCountry")
    resolver_timeout: float = Field(default=15.0, gt=0, description="song.link request timeout (seconds)")

    # Replies
    include_missing: bool = Field(default=True, description="Append the 'Could not find this on' line")

    log_level: str = Field(default="INFO", description="Root log level")

    model_config = {"env_prefix": "MUSICSLACKER_", "env_file": ".env", "extra": "ignore"}


def load_settings() -> MusicSlackerSettings:
    """Load settings from environment."""
    settings = MusicSlackerSettings()

    if not settings.slack_bot_token:
        logger.warning("MUSICSLACKER_SLACK_BOT_TOKEN is not set; replies cannot be posted.")
    if not settings.slack_signing_secret:
        logger.warning("MUSICSLACKER_SLACK_SIGNING_SECRET is not set; every Slack request will be rejected.")

    return settings
