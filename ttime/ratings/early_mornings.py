"""Penalise classes that start too early in the morning."""

from __future__ import annotations

from typing import Any, Iterable

from ttime.menu import MenuItem
from ttime.scoring.base import AbstractRating


def _course_id(course: Any) -> str:
    return str(getattr(course, "number", course))


class EarlyMornings(AbstractRating):
    """One point off for every event starting before ``earliest`` (minutes since midnight).

    Courses listed in ``ignored_courses`` never count.
    """

    defaults = {"enabled": True, "earliest": 510, "ignored_courses": []}
    menu_items = (
        MenuItem("Ignore early starts for this course", "ignore_course", event_required=True),
        MenuItem("Reset ignored courses", "reset_ignored"),
    )

    def rate_schedule(self) -> float:
        earliest = self.settings.get("earliest", 510)
        ignored = set(self.settings.get("ignored_courses", []))
        return -sum(1 for ev in self.event_list if ev.start < earliest and ev.course not in ignored)

    def ignore_course(self, event: Any) -> None:
        ignored = list(self.settings.get("ignored_courses", []))
        if event.course is not None and event.course not in ignored:
            ignored.append(event.course)
        self._write_setting("ignored_courses", ignored)

    def reset_ignored(self) -> None:
        self._write_setting("ignored_courses", [])

    def on_course_list_updated(self, course_list: Iterable[Any]) -> None:
        available = {_course_id(course) for course in course_list}
        ignored = self.settings.get("ignored_courses", [])
        kept = [course for course in ignored if course in available]
        if kept != ignored:
            self._write_setting("ignored_courses", kept)
