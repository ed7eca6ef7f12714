"""Status and health commands."""

import asyncio

from rich.table import Table

from . import cli
from .shared import console, mask_secret


@cli.command()
def status():
    """Show Music Slacker configuration."""
    from musicslacker import __version__
    from musicslacker.config import MusicSlackerSettings

    settings = MusicSlackerSettings()

    table = Table(title=f"Music Slacker v{__version__}", show_header=False, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Slack bot token", mask_secret(settings.slack_bot_token))
    table.add_row("Slack signing secret", mask_secret(settings.slack_signing_secret))
    table.add_row("Resolver", settings.resolver_url)
    table.add_row("Country", settings.user_country)
    table.add_row("Timeout", f"{settings.resolver_timeout:g}s")
    table.add_row("Missing-services line", "on" if settings.include_missing else "off")
    table.add_row("Log level", settings.log_level)

    console.print(table)


@cli.command()
def health():
    """Check that song.link is reachable."""
    from musicslacker.config import MusicSlackerSettings
    from musicslacker.main import build_resolver

    resolver = build_resolver(MusicSlackerSettings())
    ok = asyncio.run(resolver.check_health())
    if ok:
        console.print(f"[green]song.link OK[/green] ({resolver.base_url})")
    else:
        console.print(f"[red]song.link unreachable[/red] ({resolver.base_url})")
        raise SystemExit(1)
