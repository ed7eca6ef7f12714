"""Link commands — run the pipeline from the terminal."""

import asyncio
import click

from . import cli
from .shared import console


@cli.command()
@click.argument("text")
@click.option("--no-missing", is_flag=True, help="Omit the 'Could not find this on' line")
def links(text, no_missing):
    """Build the reply the bot would post for TEXT."""
    async def _links():
        from musicslacker.config import MusicSlackerSettings
        from musicslacker.main import build_pipeline

        settings = MusicSlackerSettings()
        if no_missing:
            settings.include_missing = False
        pipeline = build_pipeline(settings)
        return await pipeline.process(text)

    reply = asyncio.run(_links())
    if reply is None:
        console.print("[yellow]No music link found.[/yellow]")
        raise SystemExit(1)
    console.print(reply, markup=False, highlight=False)


@cli.command()
@click.argument("text")
def detect(text):
    """Show which music link (if any) TEXT contains."""
    from musicslacker.detector import detect as detect_link

    link = detect_link(text)
    if link is None:
        console.print("[yellow]No music link found.[/yellow]")
        raise SystemExit(1)
    console.print(f"[bold]{link.service.display_name}[/bold] {link.url}", highlight=False)
