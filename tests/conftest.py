"""Pytest configuration and shared fixtures."""

import httpx
import pytest

SPOTIFY_URL = "https://open.spotify.com/track/3n3Ppam7vgaVa1iaRUc9Lp"


@pytest.fixture
def songlink_payload():
    """A trimmed-down song.link response for Mr. Brightside."""
    return {
        "entityUniqueId": "SPOTIFY_SONG::3n3Ppam7vgaVa1iaRUc9Lp",
        "userCountry": "US",
        "pageUrl": "https://song.link/s/3n3Ppam7vgaVa1iaRUc9Lp",
        "linksByPlatform": {
            "spotify": {"url": SPOTIFY_URL, "entityUniqueId": "SPOTIFY_SONG::3n3Ppam7vgaVa1iaRUc9Lp"},
            "appleMusic": {"url": "https://music.apple.com/us/album/mr-brightside/1440829560?i=1440829981"},
            "tidal": {"url": "https://listen.tidal.com/track/1726046"},
            "youtubeMusic": {"url": "https://music.youtube.com/watch?v=gGdGFtwCNBE"},
            "deezer": {"url": "https://www.deezer.com/track/3135556"},
        },
        "entitiesByUniqueId": {
            "SPOTIFY_SONG::3n3Ppam7vgaVa1iaRUc9Lp": {
                "id": "3n3Ppam7vgaVa1iaRUc9Lp",
                "type": "song",
                "title": "Mr. Brightside",
                "artistName": "The Killers",
                "isrc": "USIR20400274",
                "albumName": "Hot Fuss",
            },
            "ITUNES_SONG::1440829981": {
                "id": "1440829981",
                "type": "song",
                "title": "Mr. Brightside (Other)",
                "artistName": "Someone Else",
            },
        },
    }


@pytest.fixture
def mock_http():
    """Build an httpx.AsyncClient whose requests go to ``handler``.

    Every request is also appended to the returned list so tests can
    inspect what was sent.
    """
    def _factory(handler):
        seen: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        return client, seen

    return _factory
