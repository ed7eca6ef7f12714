"""Fallback search URLs for services the resolver does not cover.

Qobuz and Bandcamp are rarely mapped by song.link, so when it has nothing
for them we point at their own search pages instead. These are searches,
not confirmed track links.
"""

import re
from dataclasses import replace
from typing import Optional
from urllib.parse import quote

from .models import MusicService, TrackMetadata

QOBUZ_SEARCH_URL = "https://www.qobuz.com/us-en/search?q={query}"
BANDCAMP_SEARCH_URL = "https://bandcamp.com/search?q={query}"

_WHITESPACE_RE = re.compile(r"\s+")


def _clean(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    value = _WHITESPACE_RE.sub(" ", value).strip()
    return value or None


def _encode(query: str) -> str:
    # Same safe set as JavaScript's encodeURIComponent
    return quote(query, safe="-_.!~*'()")


def sanitize_metadata(metadata: TrackMetadata) -> TrackMetadata:
    """Collapse whitespace runs and trim the free-text fields.

    ISRC is passed through untouched. Applying this twice gives the same
    result as applying it once.
    """
    return replace(
        metadata,
        artist=_clean(metadata.artist),
        title=_clean(metadata.title),
        album=_clean(metadata.album),
    )


def generate_qobuz_search_url(metadata: TrackMetadata) -> Optional[str]:
    """ISRC search if we have one, else artist + title, else nothing."""
    if metadata.isrc:
        return QOBUZ_SEARCH_URL.format(query=_encode(metadata.isrc))

    if metadata.artist and metadata.title:
        return QOBUZ_SEARCH_URL.format(query=_encode(f"{metadata.artist} {metadata.title}"))

    return None


def generate_bandcamp_search_url(metadata: TrackMetadata) -> Optional[str]:
    """Artist + title, else artist + album, else nothing."""
    if metadata.artist and metadata.title:
        return BANDCAMP_SEARCH_URL.format(query=_encode(f"{metadata.artist} {metadata.title}"))

    if metadata.artist and metadata.album:
        return BANDCAMP_SEARCH_URL.format(query=_encode(f"{metadata.artist} {metadata.album}"))

    return None


def generate_search_urls(metadata: TrackMetadata) -> dict[MusicService, Optional[str]]:
    """Build every fallback search URL we can from ``metadata``."""
    metadata = sanitize_metadata(metadata)
    return {
        MusicService.QOBUZ: generate_qobuz_search_url(metadata),
        MusicService.BANDCAMP: generate_bandcamp_search_url(metadata),
    }
