"""Explicit registry of rating types keyed by settings key."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator

from ttime.config.factories import FactoryBase
from ttime.exceptions import DuplicateRatingError, RatingConfigError, RatingConstructionError
from ttime.menu import MenuRegistry
from ttime.scoring.base import AbstractRating
from ttime.settings import SettingsStore
from ttime.utils.logging import get_logger

log = get_logger(__name__, component="scoring.registry")


RatingFactoryFn = Callable[[SettingsStore], AbstractRating]


class RatingFactory(FactoryBase[AbstractRating]):
    """Typed factory remembering the rating class it builds."""

    def __init__(self, rating_cls: type[AbstractRating], builder: RatingFactoryFn | None = None) -> None:
        super().__init__(name=rating_cls.settings_key(), builder=builder or rating_cls)
        self.rating_cls = rating_cls


@dataclass(slots=True)
class RatingSlot:
    """Outcome of constructing one registered rating type."""

    key: str
    rating: AbstractRating | None = None
    error: RatingConstructionError | None = None

    @property
    def ok(self) -> bool:
        return self.rating is not None and self.error is None


class RatingRegistry:
    """Registry mapping settings keys to rating factories.

    Holds the injected settings store every rating is constructed with, the
    names of plugin units already loaded into it, and the cached instances.
    """

    def __init__(self, settings: SettingsStore | None = None) -> None:
        self.settings = settings if settings is not None else SettingsStore()
        self._factories: dict[str, RatingFactory] = {}
        self._loaded_units: set[str] = set()
        self._instances: list[RatingSlot] | None = None

    def register(self, rating_cls: type[AbstractRating], factory: RatingFactoryFn | None = None) -> type[AbstractRating]:
        """Register a rating type; re-registering the same class is a no-op.

        Returns the class so the method can be used as a decorator.
        """

        if not isinstance(rating_cls, type) or not issubclass(rating_cls, AbstractRating):
            raise RatingConfigError(f"{rating_cls!r} is not an AbstractRating subclass")
        if not rating_cls.is_concrete():
            raise RatingConfigError(f"{rating_cls.__name__} is abstract and cannot be registered")

        key = rating_cls.settings_key()
        existing = self._factories.get(key)
        if existing is not None:
            if existing.rating_cls is rating_cls:
                return rating_cls
            raise DuplicateRatingError(
                f"Rating key '{key}' already registered by {existing.rating_cls.__module__}.{existing.rating_cls.__qualname__}"
            )

        self._factories[key] = RatingFactory(rating_cls, factory)
        self._instances = None
        log.debug("Rating registered", extra={"rating": key})
        return rating_cls

    def list_registered_types(self) -> set[type[AbstractRating]]:
        return {factory.rating_cls for factory in self._factories.values()}

    def keys(self) -> list[str]:
        return list(self._factories)

    def __contains__(self, key: object) -> bool:
        return key in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def __iter__(self) -> Iterator[str]:
        return iter(self._factories)

    def has_loaded(self, unit_name: str) -> bool:
        return unit_name in self._loaded_units

    def mark_loaded(self, unit_name: str) -> None:
        self._loaded_units.add(unit_name)

    @property
    def loaded_units(self) -> frozenset[str]:
        return frozenset(self._loaded_units)

    def instantiate_all(self) -> list[RatingSlot]:
        """Construct one instance per registered type.

        A failing constructor is recorded in its slot and logged; the remaining
        types are still constructed.
        """

        slots: list[RatingSlot] = []
        for key, factory in self._factories.items():
            try:
                rating = factory.create(self.settings)
            except Exception as exc:
                log.error(
                    "Rating construction failed",
                    extra={"rating": key, "error": f"{type(exc).__name__}: {exc}"},
                )
                error = RatingConstructionError(f"Rating '{key}' failed to construct: {exc}")
                error.__cause__ = exc
                slots.append(RatingSlot(key=key, error=error))
                continue
            slots.append(RatingSlot(key=key, rating=rating))
        return slots

    def instances(self) -> list[RatingSlot]:
        """Instances created once per registry and reused afterwards."""

        if self._instances is None:
            self._instances = self.instantiate_all()
        return self._instances

    def reset_instances(self) -> None:
        self._instances = None

    def get(self, key: str) -> AbstractRating | None:
        for slot in self.instances():
            if slot.key == key:
                return slot.rating
        return None

    def menu_registry(self) -> MenuRegistry:
        return MenuRegistry(
            (key, item) for key, factory in self._factories.items() for item in factory.rating_cls.declare_menu_items()
        )


__all__ = ["RatingFactory", "RatingFactoryFn", "RatingRegistry", "RatingSlot"]
