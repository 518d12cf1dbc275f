"""End-to-end: discover plugins from disk, configure them, score schedules."""

from __future__ import annotations

import textwrap

from ttime.schedule import Event, Group
from ttime.scoring import PluginLoader, RatingRegistry, WeightedAggregator
from ttime.settings import SettingsStore

GAPS_UNIT = """
from ttime.scoring.base import AbstractRating


class Gaps(AbstractRating):
    defaults = {"enabled": True, "raw": 10}

    def rate_schedule(self):
        return self.settings["raw"]


def register(registry):
    registry.register(Gaps)
"""

OVERLAPS_UNIT = """
from ttime.scoring.base import AbstractRating


class Overlaps(AbstractRating):
    def rate_schedule(self):
        return -5
"""


def _install(tmp_path):
    plugins = tmp_path / "share" / "ttime" / "ratings"
    plugins.mkdir(parents=True)
    (plugins / "gaps_unit.py").write_text(textwrap.dedent(GAPS_UNIT))
    (plugins / "overlaps_unit.py").write_text(textwrap.dedent(OVERLAPS_UNIT))
    return plugins


def test_scenario_from_disk_with_persisted_settings(tmp_path):
    plugins = _install(tmp_path)
    settings_path = tmp_path / "settings.yml"

    store = SettingsStore.load(settings_path)
    registry = RatingRegistry(store)
    loader = PluginLoader(registry, candidates=[tmp_path / "missing", plugins])
    assert loader.load_all() == ["gaps_unit.py", "overlaps_unit.py"]
    assert loader.load_all() == []

    aggregator = WeightedAggregator(registry)
    schedule = [Group(course="104166", events=(Event(0, 600, 720),))]

    registry.get("Gaps").weight = 2
    assert aggregator.aggregate_score(schedule) == 15
    store.save()

    reloaded = SettingsStore.load(settings_path)
    fresh = RatingRegistry(reloaded)
    PluginLoader(fresh, candidates=[plugins]).load_all()
    fresh_agg = WeightedAggregator(fresh)
    assert fresh_agg.aggregate_score(schedule) == 15

    fresh.get("Overlaps").enabled = False
    assert fresh_agg.aggregate_score(schedule) == 20
    fresh.get("Gaps").weight = 0
    assert fresh_agg.aggregate_score(schedule) == 0
    assert reloaded.get("Gaps") == {"enabled": True, "raw": 10}
