"""Value types shared by the link pipeline."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MusicService(str, Enum):
    """Streaming services the bot knows about. Value is the display name."""

    SPOTIFY = "Spotify"
    APPLE_MUSIC = "Apple Music"
    TIDAL = "Tidal"
    QOBUZ = "Qobuz"
    YOUTUBE_MUSIC = "YouTube Music"
    BANDCAMP = "Bandcamp"
    UNKNOWN = "Unknown"

    @property
    def display_name(self) -> str:
        return self.value


# Render order for replies. Fixed so identical input gives identical output.
CANONICAL_ORDER: tuple[MusicService, ...] = (
    MusicService.APPLE_MUSIC,
    MusicService.BANDCAMP,
    MusicService.QOBUZ,
    MusicService.SPOTIFY,
    MusicService.TIDAL,
    MusicService.YOUTUBE_MUSIC,
)

# service -> url, None when nothing was found
CrossPlatformLinks = dict[MusicService, Optional[str]]
MergedLinks = dict[MusicService, Optional[str]]


def empty_links() -> CrossPlatformLinks:
    """One None entry per known service."""
    return {service: None for service in CANONICAL_ORDER}


@dataclass(frozen=True)
class DetectedLink:
    url: str
    service: MusicService


@dataclass(frozen=True)
class TrackMetadata:
    artist: Optional[str] = None
    title: Optional[str] = None
    album: Optional[str] = None
    isrc: Optional[str] = None

    def is_empty(self) -> bool:
        return not any((self.artist, self.title, self.album, self.isrc))


@dataclass
class ResolverResult:
    links: CrossPlatformLinks = field(default_factory=empty_links)
    metadata: TrackMetadata = field(default_factory=TrackMetadata)


@dataclass(frozen=True)
class InboundMessage:
    """A user message lifted out of a Slack event envelope."""

    channel: str
    ts: str
    text: str
    user: Optional[str] = None
    thread_ts: Optional[str] = None

    @property
    def thread_anchor(self) -> str:
        """Reply into the existing thread, or start one on this message."""
        return self.thread_ts or self.ts


@dataclass(frozen=True)
class OutboundReply:
    channel: str
    thread_ts: str
    text: str
