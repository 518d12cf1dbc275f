"""CLI command scoring a schedule described in a YAML file."""

from __future__ import annotations

from pathlib import Path
from typing import List

import typer
import yaml
from rich.console import Console
from rich.table import Table

from ttime.cli.commands.ratings import PluginDirOption, SettingsOption
from ttime.cli.context import build_registry
from ttime.exceptions import RatingConfigError
from ttime.schedule import schedule_from_dict
from ttime.scoring.aggregate import WeightedAggregator
from ttime.utils.logging import get_logger

console = Console()
log = get_logger(__name__, component="cli.score")


def _load_schedule(path: Path):
    if not path.exists():
        raise RatingConfigError(f"Schedule file not found: {path}")
    try:
        return schedule_from_dict(yaml.safe_load(path.read_text(encoding="utf-8")))
    except (yaml.YAMLError, KeyError, TypeError, ValueError) as exc:
        raise RatingConfigError(f"Invalid schedule file {path}: {exc}") from exc


def score(
    schedule_file: Path = typer.Argument(..., help="YAML list of groups with their events"),
    settings: Path = SettingsOption,
    plugin_dir: List[Path] = PluginDirOption,
) -> None:
    """
    Score one schedule and show each rating's weighted contribution.

    Example:
        ttime-ratings score schedule.yml --settings ~/.ttime/settings.yml
    """
    schedule = _load_schedule(schedule_file)
    aggregator = WeightedAggregator(build_registry(settings, plugin_dir))

    table = Table(title=f"Score for {schedule_file.name}")
    table.add_column("Rating")
    table.add_column("Contribution", justify="right")
    for key, value in sorted(aggregator.decompose(schedule).items()):
        table.add_row(key, f"{value:.3f}")
    console.print(table)
    for slot in aggregator.failures:
        console.print(f"[yellow]Skipped {slot.key}: {slot.error}[/yellow]")
    console.print(f"[bold cyan]Total:[/bold cyan] {aggregator.aggregate_score(schedule):.3f}")
