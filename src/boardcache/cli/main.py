#!/usr/bin/env python3
"""
BoardCache CLI Main Application

Typer-based command-line interface for managing BoardCache configuration.
"""

import logging
import typer
from rich.console import Console
from typing import Optional

from boardcache import __version__
from boardcache.cli.commands import config

console = Console()

app = typer.Typer(
    name="boardcache",
    help="Article cache for discussion boards",
    context_settings={"help_option_names": ["-h", "--help"]},
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.add_typer(config.app, name="config", help="Create, inspect and validate configuration")


def version_callback(value: bool):
    """Show version information."""
    if value:
        console.print(f"[bold cyan]BoardCache[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit()


@app.callback()
def app_callback(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version information and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """
    BoardCache - in-process article cache for discussion boards

    [bold]Quick Start:[/bold]

    • Create a config: [cyan]boardcache config init boardcache.yaml[/cyan]
    • Check it: [cyan]boardcache config validate -c boardcache.yaml[/cyan]
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main():
    """Entry point for the boardcache console script."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise SystemExit(1)
