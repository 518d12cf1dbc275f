"""Reward weekdays without any classes."""

from __future__ import annotations

from ttime.scoring.base import AbstractRating


class FreeDays(AbstractRating):
    settings_name = "free_days"
    defaults = {"enabled": True, "days": [0, 1, 2, 3, 4]}

    def rate_schedule(self) -> float:
        busy = {event.day for event in self.event_list}
        return sum(1 for day in self.settings.get("days", []) if day not in busy)


def register(registry) -> None:
    registry.register(FreeDays)
