"""Music Slacker CLI — command line interface."""

import click
from musicslacker import __version__
from .shared import console


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="musicslacker")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, debug):
    """Music Slacker — cross-platform music links for Slack"""
    from musicslacker.config import MusicSlackerSettings
    from musicslacker.main import setup_logging
    setup_logging("DEBUG" if debug else MusicSlackerSettings().log_level)

    if ctx.invoked_subcommand is None:
        _show_help()


def _show_help():
    """Show all available commands."""
    console.print(f"[bold]Music Slacker v{__version__}[/bold]: cross-platform music links for Slack\n")

    commands = [
        ("links TEXT", "Build the reply the bot would post for TEXT"),
        ("detect TEXT", "Show which music link (if any) TEXT contains"),
        ("health", "Check that song.link is reachable"),
        ("status", "Show configuration"),
    ]
    for name, desc in commands:
        console.print(f"    [bold]musicslacker {name:14s}[/bold] {desc}")
    console.print()
    console.print("[dim]Run 'musicslacker <command> --help' for details on a specific command.[/dim]")


# Import all command modules (registers commands onto cli group)
from . import cmd_links  # noqa: E402, F401
from . import cmd_status  # noqa: E402, F401
