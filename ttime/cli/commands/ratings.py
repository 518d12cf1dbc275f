"""CLI commands for inspecting and configuring ratings."""

from __future__ import annotations

from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.table import Table

from ttime.cli.context import DEFAULT_SETTINGS_PATH, build_registry, require_rating
from ttime.utils.logging import get_logger

console = Console()
log = get_logger(__name__, component="cli.ratings")

SettingsOption = typer.Option(DEFAULT_SETTINGS_PATH, "--settings", envvar="TTIME_SETTINGS", help="Settings YAML file")
PluginDirOption = typer.Option([], "--plugin-dir", help="Extra directory searched for rating units")


def list_ratings(settings: Path = SettingsOption, plugin_dir: List[Path] = PluginDirOption) -> None:
    """Show every discovered rating with its state and weight."""

    registry = build_registry(settings, plugin_dir)
    menus = registry.menu_registry()

    table = Table(title="Ratings")
    table.add_column("Key")
    table.add_column("Class")
    table.add_column("Enabled")
    table.add_column("Weight", justify="right")
    table.add_column("Menu items", justify="right")
    for slot in sorted(registry.instances(), key=lambda s: s.key):
        if not slot.ok:
            table.add_row(slot.key, "-", "[red]failed[/red]", "-", "-")
            continue
        rating = slot.rating
        table.add_row(
            slot.key,
            type(rating).__name__,
            "yes" if rating.enabled else "no",
            f"{rating.weight:g}",
            str(len(menus.items_for(slot.key))),
        )
    console.print(table)


def set_weight(
    key: str = typer.Argument(..., help="Rating settings key"),
    weight: float = typer.Argument(..., help="New weight"),
    settings: Path = SettingsOption,
    plugin_dir: List[Path] = PluginDirOption,
) -> None:
    """Change a rating's weight and save the settings."""

    registry = build_registry(settings, plugin_dir)
    rating = require_rating(registry, key)
    rating.weight = weight
    registry.settings.save(settings)
    console.print(f"[green]{key}[/green] weight set to {weight:g}")


def _toggle(key: str, enabled: bool, settings: Path, plugin_dir: List[Path]) -> None:
    registry = build_registry(settings, plugin_dir)
    rating = require_rating(registry, key)
    rating.enabled = enabled
    registry.settings.save(settings)
    console.print(f"[green]{key}[/green] {'enabled' if enabled else 'disabled'}")


def enable(
    key: str = typer.Argument(..., help="Rating settings key"),
    settings: Path = SettingsOption,
    plugin_dir: List[Path] = PluginDirOption,
) -> None:
    """Enable a rating."""

    _toggle(key, True, settings, plugin_dir)


def disable(
    key: str = typer.Argument(..., help="Rating settings key"),
    settings: Path = SettingsOption,
    plugin_dir: List[Path] = PluginDirOption,
) -> None:
    """Disable a rating."""

    _toggle(key, False, settings, plugin_dir)
