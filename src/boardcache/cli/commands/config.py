"""
Config Command

Commands for creating, inspecting and validating BoardCache configuration
files.
"""

import json
from pathlib import Path
from typing import Optional, Annotated
import typer
from rich.console import Console
from rich.table import Table

from boardcache.cli.error_handling import handle_error
from boardcache.core.config import AppConfig, ConfigManager
from boardcache.core.exceptions import ConfigurationError

console = Console()

app = typer.Typer(
    name="config",
    help="Create, inspect and validate configuration",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

PROFILES = ("default", "small", "large")


def _load(config_file: Optional[str]) -> AppConfig:
    try:
        return ConfigManager(config_file=config_file).load_config()
    except ConfigurationError as e:
        handle_error(e)


def print_config_summary(config: AppConfig) -> None:
    """
    Print a formatted summary of the configuration.

    Args:
        config: AppConfig instance to summarize
    """
    table = Table(title="Configuration Summary", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="dim", width=24)
    table.add_column("Value", style="white", width=20)

    table.add_row("Article cache size", str(config.cache.article_count))
    table.add_row("Abstract cache size", str(config.cache.abstract_count))
    table.add_row("Metrics", "✓ Enabled" if config.cache.metrics_enabled else "✗ Disabled")
    table.add_row("Side hot articles", str(config.side_lists.hot_articles_count))
    table.add_row("Side random articles", str(config.side_lists.random_articles_count))
    table.add_row("Hot window (days)", str(config.side_lists.hot_window_days))
    table.add_row("Log level", config.log_level)

    console.print(table)
    console.print()


@app.command("show")
def config_show(
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
):
    """
    Show the effective configuration.

    [bold cyan]Examples:[/bold cyan]

    • Defaults and environment: [green]boardcache config show[/green]
    • Specific file: [green]boardcache config show -c boardcache.yaml[/green]
    """
    print_config_summary(_load(config))


@app.command("init")
def config_init(
    path: Annotated[str, typer.Argument(help="Where to write the configuration file")] = "boardcache.yaml",
    profile: Annotated[str, typer.Option("--profile", "-p", help="Profile: default, small or large")] = "default",
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file")] = False,
):
    """
    Write an example configuration file.
    """
    output_file = Path(path)
    if output_file.exists() and not force:
        console.print(f"[red]Error: {output_file} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(1)

    if profile not in PROFILES:
        console.print(f"[red]Error: Unknown profile '{profile}'. Choose from: {', '.join(PROFILES)}[/red]")
        raise typer.Exit(1)

    ConfigManager().create_example_config(output_file, profile=profile)
    console.print(f"[green]✓ Wrote {profile} configuration to {output_file}[/green]")


@app.command("validate")
def config_validate(
    config: Annotated[Optional[str], typer.Option("--config", "-c", help="Configuration file path")] = None,
):
    """
    Validate configuration and report warnings.
    """
    manager = ConfigManager(config_file=config)
    try:
        loaded = manager.load_config()
    except ConfigurationError as e:
        handle_error(e)

    warnings = manager.validate_config(loaded)
    if not warnings:
        console.print("[bold green]✓ Configuration is valid[/bold green]")
        return

    console.print(f"[yellow]Configuration is valid with {len(warnings)} warning(s):[/yellow]")
    for warning in warnings:
        console.print(f"  • {warning}")


@app.command("schema")
def config_schema(
    output: Annotated[Optional[str], typer.Option("--output", "-o", help="Write the schema to this file")] = None,
):
    """
    Print the JSON schema of the configuration file.
    """
    manager = ConfigManager()
    if output:
        manager.generate_schema(Path(output))
        console.print(f"[green]✓ Wrote schema to {output}[/green]")
    else:
        typer.echo(json.dumps(manager.generate_schema(), indent=2))
