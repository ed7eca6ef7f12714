"""Music link detection — find and classify streaming URLs in message text.

One ordered rule table drives both operations. ``detect`` returns the first
rule that matches anywhere in the text, so only one link is ever taken from a
message even when several are present.

Slack delivers URLs wrapped as ``<url>`` or ``<url|label>``; the identifier
tails stop at ``>`` and ``|`` so the extracted URL comes out clean.
"""

import re
from typing import Optional

from .models import DetectedLink, MusicService

_TAIL = r"[^?\s|>]+"

MUSIC_URL_RULES: tuple[tuple[MusicService, re.Pattern], ...] = (
    (
        MusicService.SPOTIFY,
        re.compile(r"https?://open\.spotify\.com/(?:track|album|playlist)/[a-zA-Z0-9]+", re.IGNORECASE),
    ),
    (
        MusicService.APPLE_MUSIC,
        re.compile(r"https?://music\.apple\.com/[a-z]{2}/(?:album|playlist|song)/" + _TAIL, re.IGNORECASE),
    ),
    (
        MusicService.TIDAL,
        re.compile(
            r"https?://(?:listen\.)?tidal\.com/(?:browse/)?(?:track|album|playlist)/[a-zA-Z0-9-]+",
            re.IGNORECASE,
        ),
    ),
    (
        MusicService.QOBUZ,
        re.compile(r"https?://(?:open|play)\.qobuz\.com/[a-z]+/" + _TAIL, re.IGNORECASE),
    ),
    (
        MusicService.YOUTUBE_MUSIC,
        # watch?v= / playlist?list= carry the id in the query string
        re.compile(
            r"https?://music\.youtube\.com/(?:(?:watch|playlist)\?[^\s|>]+|(?:watch|playlist|browse)/" + _TAIL + ")",
            re.IGNORECASE,
        ),
    ),
    (
        MusicService.BANDCAMP,
        re.compile(r"https?://[a-zA-Z0-9-]+\.bandcamp\.com/(?:track|album)/" + _TAIL, re.IGNORECASE),
    ),
)


def detect(text: Optional[str]) -> Optional[DetectedLink]:
    """Return the first music link found in ``text``, or None."""
    if not text:
        return None

    for service, pattern in MUSIC_URL_RULES:
        match = pattern.search(text)
        if match:
            return DetectedLink(url=match.group(0), service=service)

    return None


def classify(url: Optional[str]) -> MusicService:
    """Identify which service ``url`` belongs to (UNKNOWN if none)."""
    if not url:
        return MusicService.UNKNOWN

    for service, pattern in MUSIC_URL_RULES:
        if pattern.search(url):
            return service

    return MusicService.UNKNOWN


def has_music_link(text: Optional[str]) -> bool:
    return detect(text) is not None
