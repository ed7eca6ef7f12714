"""Slack Events API handler, independent of any web framework.

Hand it the request headers and raw body; it returns ``(status, json_body)``
for whatever server sits in front of it.

The pipeline runs before the response is returned, so the first delivery
of a message can take as long as the resolver timeout (15 s by default)
while Slack expects an answer within 3 s. The hosting server must not cut
that request short. Slack then redelivers, and those retries are answered
immediately without reprocessing.
"""

import json
import logging
from typing import Any, Mapping

import httpx

from .communication.slack import SlackAPIError, SlackClient, parse_message_event, verify_slack_signature
from .models import OutboundReply
from .pipeline import LinkPipeline

logger = logging.getLogger("musicslacker.webhook")


def _header(headers: Mapping[str, str], name: str) -> str | None:
    """Case-insensitive header lookup."""
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


class SlackEventHandler:
    """Verify, route and answer one Slack Events API request."""

    def __init__(self, pipeline: LinkPipeline, slack: SlackClient, signing_secret: str):
        self.pipeline = pipeline
        self.slack = slack
        self.signing_secret = signing_secret

    async def handle(self, headers: Mapping[str, str], body: bytes) -> tuple[int, dict[str, Any]]:
        if not verify_slack_signature(
            self.signing_secret,
            _header(headers, "X-Slack-Request-Timestamp"),
            body,
            _header(headers, "X-Slack-Signature"),
        ):
            return 401, {"error": "invalid signature"}

        try:
            payload = json.loads(body)
        except ValueError:
            return 400, {"error": "invalid JSON"}
        if not isinstance(payload, dict):
            return 400, {"error": "invalid payload"}

        if payload.get("type") == "url_verification":
            logger.info("Slack URL verification received")
            return 200, {"challenge": payload.get("challenge")}

        # Slack redelivers when we are slow; the first delivery already replied
        retry_num = _header(headers, "X-Slack-Retry-Num")
        if retry_num:
            logger.info(f"Ignoring Slack retry #{retry_num} ({_header(headers, 'X-Slack-Retry-Reason')})")
            return 200, {"ok": True}

        message = parse_message_event(payload)
        if message is None:
            return 200, {"ok": True}

        text = await self.pipeline.process(message.text)
        if text is None:
            return 200, {"ok": True}

        reply = OutboundReply(channel=message.channel, thread_ts=message.thread_anchor, text=text)
        try:
            await self.slack.send(reply)
        except (SlackAPIError, httpx.HTTPError) as e:
            # Still acknowledge, otherwise Slack redelivers and we reply twice
            logger.error(f"Error posting threaded reply in {reply.channel} ({reply.thread_ts}): {e}")

        return 200, {"ok": True}
