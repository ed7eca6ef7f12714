"""Music Slacker — cross-platform music links for Slack."""

__version__ = "0.3.0"
