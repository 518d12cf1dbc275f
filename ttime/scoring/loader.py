"""Rating plugin discovery and registration.

Rating units are individual ``*.py`` files found under a fixed list of
candidate directories. Each file is imported once per process, keyed by its
file name, so the same unit installed in two places is only loaded from the
first location found. Later registries reuse the imported module.

A unit registers its ratings by defining ``register(registry)``; units
without that entrypoint have every concrete ``AbstractRating`` subclass they
define registered instead.
"""

from __future__ import annotations

import importlib
import importlib.util
import inspect
import sys
from pathlib import Path
from types import ModuleType
from typing import Iterable, Sequence

from ttime.exceptions import PluginLoadError
from ttime.scoring.base import AbstractRating
from ttime.scoring.registry import RatingRegistry
from ttime.settings import SettingsStore
from ttime.utils.logging import get_logger

log = get_logger(__name__, component="scoring.loader")

RATING_SUBDIR = Path("ttime") / "ratings"
PLUGIN_PATTERN = "[!_]*.py"
PLUGIN_MODULE_PREFIX = "ttime_rating_plugins"

# Unit name -> module, shared by every registry in this process.
_LOADED_UNITS: dict[str, ModuleType] = {}

# Relative entries are taken from the running program's directory.
RATING_PATH_CANDIDATES: tuple[str, ...] = (
    "../lib/ttime/ratings",
    "/usr/lib/ttime/ratings",
    "/usr/share/ttime/ratings",
    "/usr/local/share/ttime/ratings",
)


def rating_path_candidates(argv0: str | None = None, search_path: Iterable[str] | None = None) -> list[Path]:
    """Return absolute candidate directories in search order, without duplicates."""

    program = argv0 if argv0 is not None else (sys.argv[0] if sys.argv and sys.argv[0] else ".")
    my_path = Path(program).expanduser().resolve().parent
    entries = [my_path / p for p in RATING_PATH_CANDIDATES]
    entries += [Path(p or ".") / RATING_SUBDIR for p in (sys.path if search_path is None else search_path)]

    seen: set[Path] = set()
    candidates: list[Path] = []
    for entry in entries:
        resolved = entry.expanduser().resolve()
        if resolved not in seen:
            seen.add(resolved)
            candidates.append(resolved)
    return candidates


def register_module(module: ModuleType, registry: RatingRegistry) -> list[str]:
    """Register the ratings a module provides; return their settings keys."""

    before = set(registry.keys())
    entrypoint = getattr(module, "register", None)
    if callable(entrypoint):
        entrypoint(registry)
    else:
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (
                issubclass(obj, AbstractRating)
                and obj is not AbstractRating
                and obj.__module__ == module.__name__
                and obj.is_concrete()
            ):
                registry.register(obj)
    return [key for key in registry.keys() if key not in before]


class PluginLoader:
    """Discovers rating units on the candidate path and registers them."""

    def __init__(
        self,
        registry: RatingRegistry,
        *,
        candidates: Sequence[Path] | None = None,
        pattern: str = PLUGIN_PATTERN,
    ) -> None:
        self.registry = registry
        self.candidates = list(candidates) if candidates is not None else rating_path_candidates()
        self.pattern = pattern

    def iter_units(self) -> Iterable[Path]:
        for directory in self.candidates:
            directory = Path(directory)
            if not directory.is_dir():
                continue
            yield from sorted(p for p in directory.glob(self.pattern) if p.is_file())

    def load_all(self) -> list[str]:
        """Load every not-yet-seen unit found on the candidate path.

        Returns:
            Unit names registered by this call.

        Raises:
            PluginLoadError: If any unit fails to import or register.
        """

        loaded: list[str] = []
        for path in self.iter_units():
            unit_name = path.name
            if self.registry.has_loaded(unit_name):
                continue
            self.load_unit(path)
            loaded.append(unit_name)
        return loaded

    def load_unit(self, path: Path) -> list[str]:
        """Import one unit from its absolute path and register its ratings.

        A unit already imported in this process under the same name is not
        executed again; its module is registered into this registry instead.
        """

        path = Path(path).resolve()
        unit_name = path.name
        if self.registry.has_loaded(unit_name):
            return []
        # Mark first so a failing unit is never retried for this registry.
        self.registry.mark_loaded(unit_name)

        module = _LOADED_UNITS.get(unit_name)
        if module is None:
            module = self._import_file(path)
            _LOADED_UNITS[unit_name] = module
        return self._register(module, path)

    def _import_file(self, path: Path) -> ModuleType:
        log.info("Loading rating", extra={"unit": path.name, "path": str(path)})

        module_name = f"{PLUGIN_MODULE_PREFIX}.{path.stem}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise PluginLoadError(f"Cannot load rating unit from {path}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            sys.modules.pop(module_name, None)
            raise PluginLoadError(f"Rating unit {path} failed to load: {exc}") from exc
        return module

    def load_builtin(self, module_names: Iterable[str] | None = None) -> list[str]:
        """Register the rating units shipped inside the ``ttime.ratings`` package."""

        if module_names is None:
            from ttime.ratings import BUILTIN_UNITS

            module_names = BUILTIN_UNITS

        loaded: list[str] = []
        for name in module_names:
            unit_name = f"{name}.py"
            if self.registry.has_loaded(unit_name):
                continue
            self.registry.mark_loaded(unit_name)
            module = _LOADED_UNITS.get(unit_name)
            if module is None:
                log.info("Loading rating", extra={"unit": unit_name, "path": f"ttime.ratings.{name}"})
                try:
                    module = importlib.import_module(f"ttime.ratings.{name}")
                except Exception as exc:
                    raise PluginLoadError(f"Built-in rating unit {name} failed to load: {exc}") from exc
                _LOADED_UNITS[unit_name] = module
            self._register(module, unit_name)
            loaded.append(unit_name)
        return loaded

    def _register(self, module: ModuleType, origin: object) -> list[str]:
        try:
            return register_module(module, self.registry)
        except PluginLoadError:
            raise
        except Exception as exc:
            raise PluginLoadError(f"Rating unit {origin} failed to register: {exc}") from exc


def loaded_units() -> frozenset[str]:
    """Names of the units imported so far in this process."""

    return frozenset(_LOADED_UNITS)


def forget_loaded_units() -> None:
    """Drop the process-wide unit record so the next discovery imports files again."""

    _LOADED_UNITS.clear()


def discover_ratings(
    settings: SettingsStore | None = None,
    *,
    candidates: Sequence[Path] | None = None,
    builtin: bool = True,
) -> RatingRegistry:
    """Build a registry populated with built-in and discovered ratings."""

    registry = RatingRegistry(settings)
    loader = PluginLoader(registry, candidates=candidates)
    if builtin:
        loader.load_builtin()
    loader.load_all()
    log.info("Rating discovery complete", extra={"count": len(registry)})
    return registry


__all__ = [
    "PLUGIN_PATTERN",
    "PluginLoader",
    "RATING_PATH_CANDIDATES",
    "RATING_SUBDIR",
    "discover_ratings",
    "forget_loaded_units",
    "loaded_units",
    "rating_path_candidates",
    "register_module",
]
