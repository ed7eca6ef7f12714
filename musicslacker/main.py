"""Music Slacker — wiring and logging setup."""

import logging
from typing import Optional

import httpx

from .communication.slack import SlackClient
from .config import MusicSlackerSettings, load_settings
from .pipeline import LinkPipeline
from .resolver import SonglinkClient
from .webhook import SlackEventHandler

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger("musicslacker")


def setup_logging(level: str | int = logging.INFO) -> None:
    """Configure root logging to stderr. Safe to call more than once."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    # httpx logs every request URL at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def build_resolver(
    settings: MusicSlackerSettings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> SonglinkClient:
    return SonglinkClient(
        http_client=http_client,
        base_url=settings.resolver_url,
        user_country=settings.user_country,
        timeout=settings.resolver_timeout,
    )


def build_pipeline(
    settings: MusicSlackerSettings,
    http_client: Optional[httpx.AsyncClient] = None,
) -> LinkPipeline:
    return LinkPipeline(build_resolver(settings, http_client), include_missing=settings.include_missing)


def build_event_handler(
    settings: Optional[MusicSlackerSettings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> SlackEventHandler:
    """Assemble the Slack event handler from settings.

    Raises:
        ValueError: Slack token or signing secret missing
    """
    if settings is None:
        settings = load_settings()
        setup_logging(settings.log_level)
    if not settings.slack_bot_token or not settings.slack_signing_secret:
        raise ValueError(
            "Slack credentials are required. Set MUSICSLACKER_SLACK_BOT_TOKEN and "
            "MUSICSLACKER_SLACK_SIGNING_SECRET in the environment or .env."
        )

    slack = SlackClient(settings.slack_bot_token, http_client=http_client)
    logger.info(f"Slack event handler ready (resolver: {settings.resolver_url}, country: {settings.user_country})")
    return SlackEventHandler(build_pipeline(settings, http_client), slack, settings.slack_signing_secret)
