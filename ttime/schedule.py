"""Read-only schedule shape consumed by ratings.

The schedule generator owns the real course model; ratings only need groups
that expose ``events`` and events with a day and a time span.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


@dataclass(frozen=True, slots=True)
class Event:
    """A single weekly meeting.

    Attributes:
        day: Day of week, 0 = Sunday through 6 = Saturday.
        start: Start time in minutes since midnight.
        end: End time in minutes since midnight.
        place: Optional room/building label.
        course: Optional course number this event belongs to.
    """

    day: int
    start: int
    end: int
    place: str | None = None
    course: str | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.day <= 6:
            raise ValueError(f"day must be in 0..6, got {self.day}")
        if self.end < self.start:
            raise ValueError("event end must not precede its start")

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Group:
    """A selectable group of a course (lecture, tutorial, ...)."""

    course: str
    events: tuple[Event, ...] = field(default_factory=tuple)
    kind: str = "lecture"
    number: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Group":
        course = str(data["course"])
        events = tuple(
            Event(
                day=int(ev["day"]),
                start=int(ev["start"]),
                end=int(ev["end"]),
                place=ev.get("place"),
                course=course,
            )
            for ev in data.get("events", [])
        )
        return cls(course=course, events=events, kind=str(data.get("kind", "lecture")), number=data.get("number"))


def _iter_groups(schedule: Any) -> Iterator[Any]:
    if hasattr(schedule, "events"):
        yield schedule
        return
    for item in schedule:
        yield from _iter_groups(item)


def flatten_events(schedule: Iterable[Any] | None) -> list[Any]:
    """Flatten a (possibly nested) collection of groups into its events."""

    if schedule is None:
        return []
    return [event for group in _iter_groups(schedule) for event in group.events]


def events_by_day(events: Iterable[Event]) -> dict[int, list[Event]]:
    """Bucket events per day, each bucket sorted by start time."""

    days: dict[int, list[Event]] = {}
    for event in events:
        days.setdefault(event.day, []).append(event)
    for bucket in days.values():
        bucket.sort(key=lambda ev: (ev.start, ev.end))
    return days


def schedule_from_dict(data: Any) -> list[Group]:
    """Build a schedule from a parsed YAML/JSON document (list of groups or {"groups": [...]})."""

    if isinstance(data, dict):
        data = data.get("groups", [])
    if not isinstance(data, list):
        raise ValueError("schedule document must be a list of groups")
    return [Group.from_dict(item) for item in data]


__all__ = ["DAY_NAMES", "Event", "Group", "events_by_day", "flatten_events", "schedule_from_dict"]
