"""Slack plumbing — request signatures, event envelopes, Web API calls.

Only what the bot needs: verify that a request came from Slack, pull the
user message out of an Events API envelope, post a threaded reply and add
a reaction.
"""

import hashlib
import hmac
import logging
import time
from typing import Any, Optional

import httpx

from ..models import InboundMessage, OutboundReply

logger = logging.getLogger("musicslacker.slack")

SLACK_API_URL = "https://slack.com/api"

# Requests older than this are rejected (replay protection)
SIGNATURE_TOLERANCE_SECONDS = 60 * 5


class SlackAPIError(Exception):
    """Slack answered ``ok: false`` or an unreadable body. ``error`` holds the error code."""

    def __init__(self, method: str, error: str):
        super().__init__(f"{method} failed: {error}")
        self.method = method
        self.error = error


# ============================================================
# REQUEST SIGNATURES
# ============================================================

def compute_slack_signature(signing_secret: str, timestamp: str, body: bytes) -> str:
    """``v0=`` + hex HMAC-SHA256 of ``v0:{timestamp}:{body}``."""
    basestring = b"v0:" + timestamp.encode() + b":" + body
    digest = hmac.new(signing_secret.encode(), basestring, hashlib.sha256).hexdigest()
    return f"v0={digest}"


def verify_slack_signature(
    signing_secret: str,
    timestamp: Optional[str],
    body: bytes,
    signature: Optional[str],
    now: Optional[float] = None,
    tolerance: int = SIGNATURE_TOLERANCE_SECONDS,
) -> bool:
    """Check the X-Slack-Signature header of an incoming request."""
    if not signing_secret or not timestamp or not signature:
        return False

    try:
        ts = int(timestamp)
    except ValueError:
        logger.warning("Slack request has a malformed timestamp")
        return False

    now = time.time() if now is None else now
    if abs(now - ts) > tolerance:
        logger.warning("Slack request timestamp outside tolerance window")
        return False

    expected = compute_slack_signature(signing_secret, timestamp, body)
    if hmac.compare_digest(expected, signature):
        return True

    logger.warning("Slack signature mismatch")
    return False


# ============================================================
# EVENT ENVELOPES
# ============================================================

def parse_message_event(payload: dict[str, Any]) -> Optional[InboundMessage]:
    """Extract a user message from an ``event_callback`` envelope.

    Returns None for anything the bot should ignore: other event types,
    bot messages (including our own replies), edits, deletes and other
    subtypes, and messages without text.
    """
    if payload.get("type") != "event_callback":
        return None

    event = payload.get("event") or {}
    if event.get("type") != "message":
        return None
    if event.get("bot_id") or event.get("subtype"):
        return None

    text = event.get("text")
    channel = event.get("channel")
    ts = event.get("ts")
    if not text or not channel or not ts:
        return None

    return InboundMessage(
        channel=channel,
        ts=ts,
        text=text,
        user=event.get("user"),
        thread_ts=event.get("thread_ts"),
    )


# ============================================================
# WEB API
# ============================================================

class SlackClient:
    """Minimal Slack Web API client bound to one bot token."""

    def __init__(
        self,
        token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = SLACK_API_URL,
        timeout: float = 10.0,
    ):
        self.token = token
        self._http = http_client
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def _call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/{method}"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json; charset=utf-8",
        }
        if self._http is not None:
            resp = await self._http.post(url, json=payload, headers=headers, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=payload, headers=headers)
        resp.raise_for_status()
        try:
            data = resp.json()
        except ValueError as e:
            raise SlackAPIError(method, "invalid_response") from e
        if not isinstance(data, dict):
            raise SlackAPIError(method, "invalid_response")
        if not data.get("ok"):
            raise SlackAPIError(method, data.get("error", "unknown_error"))
        return data

    async def post_threaded_reply(self, channel: str, thread_ts: str, text: str) -> dict[str, Any]:
        """Post ``text`` in the thread of ``thread_ts``. Link unfurling is off."""
        data = await self._call(
            "chat.postMessage",
            {
                "channel": channel,
                "thread_ts": thread_ts,
                "text": text,
                "unfurl_links": False,
                "unfurl_media": False,
            },
        )
        logger.info(f"Posted threaded reply in {channel} ({thread_ts})")
        return data

    async def send(self, reply: OutboundReply) -> dict[str, Any]:
        return await self.post_threaded_reply(reply.channel, reply.thread_ts, reply.text)

    async def add_reaction(self, channel: str, timestamp: str, emoji: str) -> bool:
        """React to a message. Failures are logged, never raised.

        Not used by the event handler, which only posts threaded replies.
        Available to callers that want to acknowledge a message with an emoji.
        """
        try:
            await self._call("reactions.add", {"channel": channel, "timestamp": timestamp, "name": emoji})
            return True
        except SlackAPIError as e:
            if e.error != "already_reacted":
                logger.error(f"Error adding reaction: {e.error}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"Error adding reaction: {type(e).__name__}")
            return False
