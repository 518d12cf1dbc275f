"""Key/value settings store shared by all ratings.

The store is a plain mapping from settings key to an arbitrary structured
value. Ratings read and write through ``get``/``set``; persistence to YAML is
optional and only used by the surrounding application.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Mapping

import yaml

from ttime.exceptions import SettingsError
from ttime.utils.logging import get_logger

log = get_logger(__name__, component="settings")

WEIGHT_KEY = "weight"


class SettingsStore:
    """In-memory settings mapping with optional YAML persistence."""

    def __init__(self, initial: Mapping[str, Any] | None = None, *, path: Path | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})
        self.path = path

    def get(self, key: str) -> Any:
        return self._data.get(str(key))

    def set(self, key: str, value: Any) -> None:
        self._data[str(key)] = value

    def __contains__(self, key: object) -> bool:
        return str(key) in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def as_dict(self) -> dict[str, Any]:
        return dict(self._data)

    @classmethod
    def load(cls, path: Path) -> "SettingsStore":
        """Read settings from a YAML file; a missing file yields an empty store."""

        path = Path(path)
        if not path.exists():
            log.info("Settings file not found; starting empty", extra={"path": str(path)})
            return cls(path=path)
        try:
            content = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise SettingsError(f"Cannot read settings from {path}: {exc}") from exc
        if content is None:
            content = {}
        if not isinstance(content, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")
        return cls(content, path=path)

    def save(self, path: Path | None = None) -> Path:
        """Write settings to YAML via a temporary file then move for atomicity."""

        target = Path(path) if path is not None else self.path
        if target is None:
            raise SettingsError("No settings path configured")
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = target.with_suffix(target.suffix + ".tmp")
        try:
            tmp_path.write_text(yaml.safe_dump(self._data, sort_keys=True), encoding="utf-8")
            tmp_path.replace(target)
        except (OSError, yaml.YAMLError) as exc:
            raise SettingsError(f"Cannot write settings to {target}: {exc}") from exc
        self.path = target
        return target


__all__ = ["SettingsStore", "WEIGHT_KEY"]
