"""Menu descriptors that ratings expose to the UI layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator

from ttime.exceptions import MenuActionError

if TYPE_CHECKING:
    from ttime.scoring.base import AbstractRating


@dataclass(frozen=True, slots=True)
class MenuItem:
    """Static UI action declared by a rating type.

    Attributes:
        caption: Display text.
        method_name: Name of the rating method the action calls.
        event_required: Whether the action needs a selected event.
    """

    caption: str
    method_name: str
    event_required: bool = False


class MenuRegistry:
    """Passive collection of menu items keyed by rating settings key."""

    def __init__(self, entries: Iterable[tuple[str, MenuItem]] = ()) -> None:
        self._items: dict[str, list[MenuItem]] = {}
        for key, item in entries:
            self.add(key, item)

    def add(self, key: str, item: MenuItem) -> None:
        self._items.setdefault(key, []).append(item)

    def items_for(self, key: str) -> tuple[MenuItem, ...]:
        return tuple(self._items.get(key, ()))

    def entries(self) -> Iterator[tuple[str, MenuItem]]:
        for key, items in self._items.items():
            for item in items:
                yield key, item

    def __len__(self) -> int:
        return sum(len(items) for items in self._items.values())

    def invoke(self, rating: "AbstractRating", item: MenuItem, event: Any = None) -> Any:
        """Run a menu action against a rating instance."""

        action = getattr(rating, item.method_name, None)
        if not callable(action):
            raise MenuActionError(
                f"{type(rating).__name__} has no action '{item.method_name}' for menu item '{item.caption}'"
            )
        if item.event_required:
            if event is None:
                raise MenuActionError(f"Menu item '{item.caption}' requires a selected event")
            return action(event)
        return action()


__all__ = ["MenuItem", "MenuRegistry"]
