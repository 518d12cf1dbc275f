"""Unit tests for the ratings shipped with ttime."""

from __future__ import annotations

import pytest

from ttime.menu import MenuRegistry
from ttime.ratings.early_mornings import EarlyMornings
from ttime.ratings.free_days import FreeDays
from ttime.ratings.gaps import NoGaps
from ttime.schedule import Event, Group
from ttime.settings import SettingsStore


def _group(course, *events):
    return Group(course=course, events=tuple(Event(*ev, course=course) for ev in events))


SCHEDULE = [
    _group("104166", (0, 510, 600), (2, 510, 600)),
    _group("234111", (0, 660, 780), (0, 1080, 1140)),
    _group("094412", (1, 480, 540)),
]


def test_no_gaps_counts_idle_hours():
    rating = NoGaps(SettingsStore())
    # Sunday: 600 -> 660 is a 60 minute gap; 780 -> 1080 exceeds max_gap.
    assert rating.score(SCHEDULE) == pytest.approx(-1.0)


def test_no_gaps_respects_max_gap_setting():
    store = SettingsStore({"NoGaps": {"enabled": True, "max_gap": 400}})
    assert NoGaps(store).score(SCHEDULE) == pytest.approx(-6.0)


def test_no_gaps_ignores_overlaps():
    schedule = [_group("1", (3, 480, 600), (3, 540, 570), (3, 630, 700))]
    assert NoGaps(SettingsStore()).score(schedule) == pytest.approx(-0.5)


def test_free_days_counts_configured_days():
    rating = FreeDays(SettingsStore())
    assert rating.settings_key() == "free_days"
    # Busy on Sunday, Monday, Tuesday.
    assert rating.score(SCHEDULE) == 2


def test_free_days_with_custom_days():
    store = SettingsStore({"free_days": {"days": [0, 5]}})
    assert FreeDays(store).score(SCHEDULE) == 1


def test_early_mornings_penalises_early_starts():
    rating = EarlyMornings(SettingsStore())
    assert rating.score(SCHEDULE) == -1


def test_early_mornings_menu_actions():
    store = SettingsStore()
    rating = EarlyMornings(store)
    menus = MenuRegistry((EarlyMornings.settings_key(), item) for item in EarlyMornings.declare_menu_items())
    ignore, reset = menus.items_for("EarlyMornings")

    assert ignore.event_required and not reset.event_required
    menus.invoke(rating, ignore, event=Event(1, 480, 540, course="094412"))
    assert store.get("EarlyMornings")["ignored_courses"] == ["094412"]
    assert rating.score(SCHEDULE) == 0

    menus.invoke(rating, reset)
    assert rating.score(SCHEDULE) == -1


def test_early_mornings_prunes_removed_courses():
    store = SettingsStore({"EarlyMornings": {"ignored_courses": ["094412", "999999"]}})
    rating = EarlyMornings(store)

    rating.on_course_list_updated(["094412", "104166"])

    assert store.get("EarlyMornings")["ignored_courses"] == ["094412"]
