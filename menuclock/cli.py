"""Command-line interface for Menu Clock.

Provides commands for:
- Running the menu bar clock
- Previewing the current title
- Viewing and changing the clock preferences
- Showing the configuration
"""

import logging
import sys
import time
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from menuclock import __version__
from menuclock.clock.preferences import (
    DATE_FORMAT_KEY,
    FLASH_DATE_SEPARATORS_KEY,
    IS_ANALOG_KEY,
    PREFERENCE_KEYS,
    ClockPreferences,
)
from menuclock.clock.renderer import StyledTitle, render_title
from menuclock.exceptions import MenuClockError
from menuclock.utils.config import load_config

console = Console()

TRUE_VALUES = ("true", "yes", "on", "1")
FALSE_VALUES = ("false", "no", "off", "0")


# --- Utility Functions ---


def parse_preference_value(key: str, value: str):
    """Convert a command-line value to the type stored for ``key``."""
    if key == DATE_FORMAT_KEY:
        return value
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise click.BadParameter(f"{key} expects a boolean, got {value!r}", param_hint="VALUE")


def styled_title_text(title: StyledTitle) -> Text:
    """Rich text for a title, with hidden separators left blank."""
    return Text(title.visible_text(), style="bold")


def fail(error: Exception) -> None:
    console.print(f"[red]✗ Error: {error}[/red]")
    sys.exit(1)


def open_preferences(ctx) -> ClockPreferences:
    from menuclock.macos.launcher import open_preference_store

    try:
        return ClockPreferences(open_preference_store(ctx.obj["config"]))
    except MenuClockError as e:
        fail(e)


# --- Main CLI Group ---


@click.group()
@click.version_option(version=__version__, prog_name="Menu Clock")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.pass_context
def cli(ctx, config):
    """Menu Clock - the time in your macOS menu bar.

    Use 'menuclock <command> --help' for more information about a command.
    """
    ctx.ensure_object(dict)

    # Load configuration
    config_path = config if config else None
    ctx.obj["config"] = load_config(config_path)

    logging.basicConfig(
        level=ctx.obj["config"].logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.pass_context
def run(ctx):
    """Start the menu bar clock (macOS only)."""
    from menuclock.macos.launcher import launch

    try:
        launch(ctx.obj["config"])
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")
        sys.exit(0)
    except MenuClockError as e:
        fail(e)


@cli.command()
@click.option("--flash/--no-flash", default=None,
              help="Override the FlashDateSeparators preference")
@click.pass_context
def preview(ctx, flash):
    """Print the current status bar title and full date."""
    preferences = open_preferences(ctx)

    from menuclock.clock.formatter import ClockFormatters

    formatters = ClockFormatters(ctx.obj["config"].display.title_template)
    formatters.rebuild(preferences.date_format())

    if flash is None:
        flash = preferences.flash_date_separators()

    now = time.time()
    title = render_title(formatters.title_string(now), now, flash)

    console.print(styled_title_text(title))
    console.print(f"[dim]{formatters.full_date_string(now)}[/dim]")
    console.print(f"[dim]Pattern: {formatters.title_pattern}[/dim]")


# --- Preference Commands ---


@cli.group()
def prefs():
    """Clock preference commands."""
    pass


@prefs.command("show")
@click.pass_context
def prefs_show(ctx):
    """Show the clock preferences."""
    snapshot = open_preferences(ctx).snapshot()

    table = Table(title=f"Clock preferences ({ctx.obj['config'].preferences.suite_name})")
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    table.add_row(DATE_FORMAT_KEY, snapshot.date_format or "[dim]locale default[/dim]")
    table.add_row(FLASH_DATE_SEPARATORS_KEY, str(snapshot.flash_date_separators))
    table.add_row(IS_ANALOG_KEY, str(snapshot.is_analog))

    console.print(table)


@prefs.command("set")
@click.argument("key", type=click.Choice(PREFERENCE_KEYS))
@click.argument("value")
@click.pass_context
def prefs_set(ctx, key, value):
    """Set a clock preference."""
    parsed = parse_preference_value(key, value)
    preferences = open_preferences(ctx)
    preferences.store.set(key, parsed)
    console.print(f"[green]✓[/green] {key} = {parsed!r}")


@prefs.command("unset")
@click.argument("key", type=click.Choice(PREFERENCE_KEYS))
@click.pass_context
def prefs_unset(ctx, key):
    """Remove a clock preference, restoring its default."""
    preferences = open_preferences(ctx)
    preferences.store.remove(key)
    console.print(f"[green]✓[/green] {key} removed")


# --- Config Commands ---


@cli.group()
def config():
    """Configuration commands."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show current configuration."""
    cfg = ctx.obj["config"]

    sections = [
        ("Preferences", [
            f"Suite: {cfg.preferences.suite_name}",
        ]),
        ("Display", [
            f"Title Template: {cfg.display.title_template}",
            f"Monospaced Digits: {cfg.display.monospaced_digits}",
            f"Settings Pane: {cfg.display.settings_pane_path}",
        ]),
        ("Logging", [
            f"Level: {cfg.logging.level}",
        ]),
    ]

    for title, items in sections:
        console.print(f"\n[bold]{title}[/bold]")
        for item in items:
            console.print(f"  {item}")


@config.command("path")
def config_path():
    """Show config file path."""
    default_path = Path("config.yaml")
    if default_path.exists():
        console.print(f"Config file: [cyan]{default_path.absolute()}[/cyan]")
    else:
        console.print("[dim]No config.yaml found. Using defaults.[/dim]")


# --- Entry Point ---


def main():
    """Main entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
