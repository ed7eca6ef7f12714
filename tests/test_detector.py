"""Tests for music link detection and classification."""

import pytest

from musicslacker.detector import MUSIC_URL_RULES, classify, detect, has_music_link
from musicslacker.models import MusicService


SAMPLE_URLS = {
    MusicService.SPOTIFY: "https://open.spotify.com/track/3n3Ppam7vgaVa1iaRUc9Lp",
    MusicService.APPLE_MUSIC: "https://music.apple.com/us/album/hot-fuss/1440829560",
    MusicService.TIDAL: "https://tidal.com/browse/track/1726046",
    MusicService.QOBUZ: "https://open.qobuz.com/track/12345678",
    MusicService.YOUTUBE_MUSIC: "https://music.youtube.com/watch?v=gGdGFtwCNBE",
    MusicService.BANDCAMP: "https://artist-name.bandcamp.com/track/some-song",
}


class TestDetect:

    @pytest.mark.parametrize("text", [
        "",
        None,
        "no links here",
        "https://example.com/track/123",
        "https://www.youtube.com/watch?v=gGdGFtwCNBE",
        "open.spotify.com/track/3n3Ppam7vgaVa1iaRUc9Lp",
        "https://open.spotify.com/artist/0C0XlULifJtAgn6ZNCW2eu",
    ])
    def test_no_music_link(self, text):
        assert detect(text) is None
        assert has_music_link(text) is False

    @pytest.mark.parametrize("service,url", list(SAMPLE_URLS.items()))
    def test_each_service(self, service, url):
        link = detect(f"check this out {url} so good")
        assert link is not None
        assert link.url == url
        assert link.service is service

    def test_spotify_stops_at_query_string(self):
        link = detect("https://open.spotify.com/track/3n3Ppam7vgaVa1iaRUc9Lp?si=abcdef")
        assert link.url == "https://open.spotify.com/track/3n3Ppam7vgaVa1iaRUc9Lp"

    def test_tidal_listen_subdomain(self):
        link = detect("https://listen.tidal.com/album/1726045")
        assert link.service is MusicService.TIDAL

    def test_apple_music_song(self):
        link = detect("https://music.apple.com/gb/song/mr-brightside/1440829981")
        assert link.service is MusicService.APPLE_MUSIC

    def test_case_insensitive(self):
        link = detect("HTTPS://OPEN.SPOTIFY.COM/track/3n3Ppam7vgaVa1iaRUc9Lp")
        assert link.service is MusicService.SPOTIFY

    def test_slack_wrapped_url(self):
        text = "<https://music.apple.com/us/album/hot-fuss/1440829560>"
        assert detect(text).url == "https://music.apple.com/us/album/hot-fuss/1440829560"

    def test_slack_wrapped_url_with_label(self):
        text = "listen <https://artist.bandcamp.com/album/record|artist.bandcamp.com/album/record>"
        assert detect(text).url == "https://artist.bandcamp.com/album/record"

    def test_only_first_rule_match_is_returned(self):
        # Table order wins, not position in the text
        text = f"{SAMPLE_URLS[MusicService.TIDAL]} and {SAMPLE_URLS[MusicService.SPOTIFY]}"
        link = detect(text)
        assert link.service is MusicService.SPOTIFY

    def test_two_links_same_service_takes_first(self):
        text = "https://open.spotify.com/track/AAA111 then https://open.spotify.com/track/BBB222"
        assert detect(text).url == "https://open.spotify.com/track/AAA111"


class TestClassify:

    def test_unknown(self):
        assert classify("https://example.com/") is MusicService.UNKNOWN
        assert classify("") is MusicService.UNKNOWN
        assert classify(None) is MusicService.UNKNOWN

    @pytest.mark.parametrize("service,url", list(SAMPLE_URLS.items()))
    def test_round_trip_with_detect(self, service, url):
        link = detect(f"shared: {url}")
        assert classify(link.url) is link.service is service

    def test_rule_table_covers_every_known_service(self):
        services = [service for service, _ in MUSIC_URL_RULES]
        assert MusicService.UNKNOWN not in services
        assert set(services) == set(MusicService) - {MusicService.UNKNOWN}
