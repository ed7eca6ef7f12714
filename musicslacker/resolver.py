"""song.link (Odesli) client — cross-platform links for one music URL.

One GET per message, bounded by a timeout and never retried here. A 404
means song.link has no mapping for the URL and is treated as an empty
result, not a failure.
"""

import logging
from enum import Enum
from typing import Any, Optional

import httpx

from .models import MusicService, ResolverResult, TrackMetadata, empty_links

logger = logging.getLogger("musicslacker.resolver")

SONGLINK_API_URL = "https://api.song.link/v1-alpha.1/links"

# Known-good track used for health checks
HEALTH_CHECK_URL = "https://open.spotify.com/track/3n3Ppam7vgaVa1iaRUc9Lp"

# linksByPlatform key -> service
PLATFORM_KEYS: dict[str, MusicService] = {
    "spotify": MusicService.SPOTIFY,
    "appleMusic": MusicService.APPLE_MUSIC,
    "tidal": MusicService.TIDAL,
    "qobuz": MusicService.QOBUZ,
    "youtubeMusic": MusicService.YOUTUBE_MUSIC,
    "bandcamp": MusicService.BANDCAMP,
}


# ════════════════════════════════════════════════════════
# Resolver errors: classified by ``kind``, never by the
# message text.  Callers render them with format_error().
# ════════════════════════════════════════════════════════

class ResolverErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    UPSTREAM = "upstream"


class ResolverError(Exception):
    """Base class for song.link failures."""

    kind: ResolverErrorKind = ResolverErrorKind.UPSTREAM

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message or self.kind.value)
        self.status_code = status_code


class ResolverRateLimitError(ResolverError):
    """429 — song.link rate limit hit."""
    kind = ResolverErrorKind.RATE_LIMITED


class ResolverUpstreamError(ResolverError):
    """Any other non-success status, transport failure or timeout."""
    kind = ResolverErrorKind.UPSTREAM


def _text(value: Any) -> Optional[str]:
    """Non-empty strings pass, everything else is None."""
    if isinstance(value, str) and value:
        return value
    return None


def parse_songlink_response(data: dict) -> ResolverResult:
    """Normalize a song.link JSON payload into links + metadata."""
    links = empty_links()
    by_platform = data.get("linksByPlatform") or {}
    if not isinstance(by_platform, dict):
        by_platform = {}
    for key, service in PLATFORM_KEYS.items():
        entry = by_platform.get(key)
        if isinstance(entry, dict):
            links[service] = _text(entry.get("url"))

    metadata = TrackMetadata()
    entities = data.get("entitiesByUniqueId") or {}
    if isinstance(entities, dict) and entities:
        first = next(iter(entities.values()))
        if isinstance(first, dict):
            metadata = TrackMetadata(
                artist=_text(first.get("artistName")),
                title=_text(first.get("title")),
                album=_text(first.get("albumName")),
                isrc=_text(first.get("isrc")),
            )

    return ResolverResult(links=links, metadata=metadata)


class SonglinkClient:
    """Resolve a streaming URL into its equivalents on other platforms.

    Pass an ``httpx.AsyncClient`` to share connections across calls; without
    one, each call opens and closes its own client.
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        base_url: str = SONGLINK_API_URL,
        user_country: str = "US",
        timeout: float = 15.0,
    ):
        self._http = http_client
        self._owns_http = False
        self.base_url = base_url
        self.user_country = user_country
        self.timeout = timeout

    async def __aenter__(self) -> "SonglinkClient":
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.timeout)
            self._owns_http = True
        return self

    async def __aexit__(self, *exc):
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None
            self._owns_http = False

    async def _get(self, params: dict, timeout: float) -> httpx.Response:
        if self._http is not None:
            return await self._http.get(self.base_url, params=params, timeout=timeout)
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.get(self.base_url, params=params)

    async def resolve(self, url: str) -> ResolverResult:
        """Fetch cross-platform links and track metadata for ``url``.

        Raises:
            ResolverRateLimitError: song.link answered 429
            ResolverUpstreamError: any other failure
        """
        params = {"url": url, "userCountry": self.user_country}

        try:
            response = await self._get(params, self.timeout)
        except httpx.TimeoutException as e:
            logger.error(f"song.link timed out after {self.timeout}s")
            raise ResolverUpstreamError("song.link request timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"song.link request failed: {type(e).__name__}")
            raise ResolverUpstreamError("song.link request failed") from e

        status = response.status_code
        if status == 404:
            logger.info(f"song.link has no match for {url}")
            return ResolverResult()
        if status == 429:
            logger.warning("song.link rate limit exceeded")
            raise ResolverRateLimitError("song.link rate limit exceeded", status_code=status)
        if not response.is_success:
            logger.error(f"song.link returned HTTP {status}")
            raise ResolverUpstreamError(f"song.link returned HTTP {status}", status_code=status)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("song.link returned a body that is not JSON")
            raise ResolverUpstreamError("song.link returned invalid JSON", status_code=status) from e
        if not isinstance(data, dict):
            raise ResolverUpstreamError("song.link returned an unexpected payload", status_code=status)
        if not isinstance(data.get("linksByPlatform") or {}, dict):
            logger.error("song.link returned linksByPlatform that is not an object")
            raise ResolverUpstreamError("song.link returned an unexpected payload", status_code=status)

        result = parse_songlink_response(data)
        found = [s.display_name for s, link in result.links.items() if link]
        logger.debug(f"song.link resolved {url}: {', '.join(found) or 'nothing'}")
        return result

    async def check_health(self) -> bool:
        """True if song.link answers for a known track. Never raises."""
        params = {"url": HEALTH_CHECK_URL, "userCountry": self.user_country}
        try:
            response = await self._get(params, 5.0)
            return response.is_success
        except Exception as e:
            logger.warning(f"song.link health check failed: {type(e).__name__}")
            return False
