"""Shared utilities for Music Slacker CLI commands."""

from rich.console import Console

console = Console()


def mask_secret(value: str | None) -> str:
    """Show only the first 4 characters of a credential."""
    if not value:
        return "[red]not set[/red]"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}…({len(value)} chars)"
