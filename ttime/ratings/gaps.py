"""Penalise idle time between classes on the same day."""

from __future__ import annotations

import numpy as np

from ttime.schedule import events_by_day
from ttime.scoring.base import AbstractRating


class NoGaps(AbstractRating):
    """Negative hours spent waiting between consecutive events of a day.

    Breaks longer than ``max_gap`` minutes are treated as time off campus and
    ignored.
    """

    defaults = {"enabled": True, "max_gap": 240}

    def rate_schedule(self) -> float:
        max_gap = self.settings.get("max_gap", 240)
        idle = 0.0
        for events in events_by_day(self.event_list).values():
            if len(events) < 2:
                continue
            starts = np.array([ev.start for ev in events[1:]], dtype=float)
            ends = np.maximum.accumulate(np.array([ev.end for ev in events[:-1]], dtype=float))
            gaps = starts - ends
            idle += float(gaps[(gaps > 0) & (gaps <= max_gap)].sum())
        return -idle / 60.0


def register(registry) -> None:
    registry.register(NoGaps)
