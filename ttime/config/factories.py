"""Factory helpers for rating construction with logging."""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from ttime.settings import SettingsStore

T = TypeVar("T")

log = logging.getLogger(__name__)


class FactoryBase(Generic[T]):
    """Named builder producing one component from an injected settings store."""

    def __init__(self, name: str, builder: Callable[[SettingsStore], T]) -> None:
        self.name = name
        self.builder = builder

    def create(self, settings: SettingsStore) -> T:
        component = self.builder(settings)
        log.debug(
            "Component constructed",
            extra={"rating": self.name, "type": component.__class__.__name__},
        )
        return component

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
