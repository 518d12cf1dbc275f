"""Weighted aggregation of rating scores into one schedule score."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from ttime.exceptions import ScoringError
from ttime.scoring.base import AbstractRating
from ttime.scoring.registry import RatingRegistry, RatingSlot
from ttime.utils.logging import get_logger

log = get_logger(__name__, component="scoring.aggregate")


@dataclass(frozen=True, slots=True)
class RankedSchedule:
    score: float
    schedule: Any


class WeightedAggregator:
    """
    Sums ``weight * raw score`` over every enabled, healthy rating.

    Contributions are combined with ``math.fsum`` so the total is exactly
    rounded and independent of registry enumeration order. No clamping or
    normalisation is applied; ratings pick their own scale and weights
    balance them.
    """

    def __init__(self, registry: RatingRegistry) -> None:
        self.registry = registry
        self._reported: set[str] = set()

    def _slots(self) -> list[RatingSlot]:
        slots = self.registry.instances()
        for slot in slots:
            if not slot.ok and slot.key not in self._reported:
                self._reported.add(slot.key)
                log.warning(
                    "Rating excluded from scoring",
                    extra={"rating": slot.key, "error": str(slot.error)},
                )
        return slots

    @property
    def ratings(self) -> list[AbstractRating]:
        return [slot.rating for slot in self._slots() if slot.ok]

    @property
    def failures(self) -> list[RatingSlot]:
        return [slot for slot in self._slots() if not slot.ok]

    @staticmethod
    def contribution(rating: AbstractRating, schedule: Any) -> float:
        """Weighted contribution of one rating; exactly 0 when disabled."""

        if not rating.enabled:
            return 0.0
        key = rating.settings_key()
        try:
            raw = rating.score(schedule)
        except Exception as exc:
            raise ScoringError(f"Rating '{key}' failed to score schedule: {exc}") from exc
        return float(raw) * rating.weight

    def decompose(self, schedule: Any) -> dict[str, float]:
        """Return per-rating weighted contributions keyed by settings key."""

        return {rating.settings_key(): self.contribution(rating, schedule) for rating in self.ratings}

    def aggregate_score(self, schedule: Any) -> float:
        return math.fsum(self.contribution(rating, schedule) for rating in self.ratings)

    def rank(self, schedules: Iterable[Any]) -> list[RankedSchedule]:
        """Score schedules and return them best first (ties keep input order)."""

        scored = [RankedSchedule(score=self.aggregate_score(s), schedule=s) for s in schedules]
        return sorted(scored, key=lambda r: r.score, reverse=True)

    def update_courses(self, course_list: Sequence[Any]) -> None:
        """Forward a course list change to every healthy rating."""

        for rating in self.ratings:
            rating.on_course_list_updated(course_list)


__all__ = ["RankedSchedule", "WeightedAggregator"]
