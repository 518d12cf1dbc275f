"""Unit tests for menu descriptors and dispatch."""

from __future__ import annotations

import pytest

from ttime.exceptions import MenuActionError
from ttime.menu import MenuItem, MenuRegistry


class Target:
    def __init__(self):
        self.calls = []

    def pin(self, event):
        self.calls.append(("pin", event))
        return "pinned"

    def reset(self):
        self.calls.append(("reset", None))


PIN = MenuItem("Pin event", "pin", event_required=True)
RESET = MenuItem("Reset", "reset")


def test_registry_groups_items_by_key():
    menus = MenuRegistry([("A", PIN), ("A", RESET), ("B", RESET)])
    assert menus.items_for("A") == (PIN, RESET)
    assert menus.items_for("missing") == ()
    assert list(menus.entries()) == [("A", PIN), ("A", RESET), ("B", RESET)]
    assert len(menus) == 3


def test_invoke_passes_event_when_required():
    target = Target()
    assert MenuRegistry().invoke(target, PIN, event="ev") == "pinned"
    MenuRegistry().invoke(target, RESET, event="ignored")
    assert target.calls == [("pin", "ev"), ("reset", None)]


def test_invoke_requires_event():
    with pytest.raises(MenuActionError):
        MenuRegistry().invoke(Target(), PIN)


def test_invoke_unknown_method():
    with pytest.raises(MenuActionError):
        MenuRegistry().invoke(Target(), MenuItem("Nope", "nope"))


def test_menu_item_is_immutable():
    with pytest.raises(AttributeError):
        PIN.caption = "other"
