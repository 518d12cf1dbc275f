"""Shared CLI helpers for building the rating registry."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ttime.exceptions import RatingConfigError
from ttime.scoring.base import AbstractRating
from ttime.scoring.loader import discover_ratings, rating_path_candidates
from ttime.scoring.registry import RatingRegistry
from ttime.settings import SettingsStore

DEFAULT_SETTINGS_PATH = Path.home() / ".ttime" / "settings.yml"


def build_registry(settings_path: Path, plugin_dirs: Sequence[Path] = ()) -> RatingRegistry:
    settings = SettingsStore.load(settings_path)
    candidates = [Path(p).resolve() for p in plugin_dirs] + rating_path_candidates()
    return discover_ratings(settings, candidates=candidates)


def require_rating(registry: RatingRegistry, key: str) -> AbstractRating:
    if key not in registry:
        available = ", ".join(sorted(registry.keys())) or "none"
        raise RatingConfigError(f"Unknown rating '{key}'. Available: {available}")
    rating = registry.get(key)
    if rating is None:
        raise RatingConfigError(f"Rating '{key}' failed to construct")
    return rating
