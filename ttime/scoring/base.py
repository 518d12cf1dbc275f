"""AbstractRating contract every rating plugin implements."""

from __future__ import annotations

import copy
import inspect
import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, MutableMapping

from ttime.exceptions import RatingConfigError
from ttime.menu import MenuItem
from ttime.schedule import flatten_events
from ttime.settings import WEIGHT_KEY, SettingsStore

DEFAULT_WEIGHT = 1


@dataclass(frozen=True, slots=True)
class RatingDescriptor:
    """Static per-type description of a rating."""

    key: str
    defaults: Mapping[str, Any] | None
    menu_items: tuple[MenuItem, ...]


class AbstractRating(ABC):
    """
    Pluggable scoring unit for candidate schedules.

    Subclasses implement ``rate_schedule`` and may declare class attributes:

        settings_name: Explicit settings key (defaults to the class name).
        defaults: Fallback settings used the first time settings are read.
        menu_items: UI actions exposed by this rating type.

    Example:
        >>> class NoMondays(AbstractRating):
        ...     defaults = {"enabled": True}
        ...     def rate_schedule(self):
        ...         return -sum(1 for ev in self.event_list if ev.day == 1)

    Scores are raw values on whatever scale the rating chooses; weighting
    belongs to the aggregator.
    """

    settings_name: ClassVar[str | None] = None
    defaults: ClassVar[Mapping[str, Any] | None] = None
    menu_items: ClassVar[tuple[MenuItem, ...]] = ()

    def __init__(self, settings: SettingsStore) -> None:
        self._store = settings
        self.schedule: Any = None

    @classmethod
    def settings_key(cls) -> str:
        """Return the settings key, falling back to the unqualified class name.

        Declarations are per type: a subclass never inherits its parent's key.
        """

        declared = cls.__dict__.get("settings_name")
        key = declared if declared is not None else getattr(cls, "__name__", None)
        if not isinstance(key, str) or not key.strip():
            raise RatingConfigError(f"settings key undefined for {cls!r}")
        return key.strip()

    @classmethod
    def default_settings(cls) -> dict[str, Any] | None:
        defaults = cls.__dict__.get("defaults")
        if defaults is None:
            return None
        return copy.deepcopy(dict(defaults))

    @classmethod
    def declare_menu_items(cls) -> tuple[MenuItem, ...]:
        return tuple(cls.__dict__.get("menu_items", ()))

    @classmethod
    def describe(cls) -> RatingDescriptor:
        return RatingDescriptor(key=cls.settings_key(), defaults=cls.default_settings(), menu_items=cls.declare_menu_items())

    @classmethod
    def is_concrete(cls) -> bool:
        return not inspect.isabstract(cls)

    @property
    def settings_store(self) -> SettingsStore:
        return self._store

    @property
    def settings(self) -> Any:
        """This rating's settings, initialised to the declared defaults on first access.

        A rating declaring no defaults starts from an empty mapping so that
        ``enabled`` can still be stored for it.
        """

        key = self.settings_key()
        if self._store.get(key) is None:
            defaults = self.default_settings()
            self._store.set(key, {} if defaults is None else defaults)
        return self._store.get(key)

    def _write_setting(self, name: str, value: Any) -> None:
        current = self.settings
        if not isinstance(current, MutableMapping):
            raise RatingConfigError(f"settings for {self.settings_key()} must be a mapping to set '{name}'")
        current[name] = value
        self._store.set(self.settings_key(), current)

    @property
    def enabled(self) -> bool:
        current = self.settings
        if not isinstance(current, Mapping):
            return True
        enabled = current.get("enabled", True)
        if not isinstance(enabled, bool):
            raise RatingConfigError(f"enabled for {self.settings_key()} must be true or false, got {enabled!r}")
        return enabled

    @enabled.setter
    def enabled(self, enabled: bool) -> None:
        self._write_setting("enabled", bool(enabled))

    def _weights(self) -> dict[str, Any]:
        weights = self._store.get(WEIGHT_KEY)
        if weights is None:
            weights = {}
            self._store.set(WEIGHT_KEY, weights)
        return weights

    @property
    def weight(self) -> float:
        weights = self._weights()
        key = self.settings_key()
        if weights.get(key) is None:
            weights[key] = DEFAULT_WEIGHT
            self._store.set(WEIGHT_KEY, weights)
        value = weights[key]
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise RatingConfigError(f"weight for {key} must be a number, got {value!r}")
        return value

    @weight.setter
    def weight(self, weight: float) -> None:
        if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
            raise RatingConfigError(f"weight for {self.settings_key()} must be a number, got {weight!r}")
        weights = self._weights()
        weights[self.settings_key()] = weight
        self._store.set(WEIGHT_KEY, weights)

    @property
    def event_list(self) -> list[Any]:
        return flatten_events(self.schedule)

    def score(self, schedule: Any) -> float:
        """
        Compute the raw (unweighted) score of a schedule.

        Disabled ratings return 0 without touching the schedule.
        """
        if not self.enabled:
            return 0

        self.schedule = schedule
        return self.rate_schedule()

    @abstractmethod
    def rate_schedule(self) -> float:
        """Return the raw score of ``self.schedule``."""

    def on_course_list_updated(self, course_list: Any) -> None:
        """Hook for ratings that cache per-course data."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self.settings_key()!r}>"


__all__ = ["AbstractRating", "DEFAULT_WEIGHT", "RatingDescriptor"]
