from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Tuple
from zoneinfo import ZoneInfo

from .types import DrawingSchedule

WEDNESDAY = 2
SATURDAY = 5


@dataclass(frozen=True)
class WeeklySchedule:
    weekdays: Tuple[int, ...]
    hour: int
    minute: int
    tz_name: str
    time_label: str

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.tz_name)


POWERBALL_SCHEDULE = WeeklySchedule(
    weekdays=(WEDNESDAY, SATURDAY),
    hour=23,
    minute=0,
    tz_name="America/New_York",
    time_label="11:00 PM ET",
)


def _next_occurrence(now: dt.datetime, weekday: int, schedule: WeeklySchedule) -> dt.datetime:
    days_ahead = (weekday - now.weekday()) % 7
    candidate = _at_draw_time(now.date() + dt.timedelta(days=days_ahead), schedule)
    if candidate <= now:
        candidate = _at_draw_time(candidate.date() + dt.timedelta(days=7), schedule)
    return candidate


def _at_draw_time(day: dt.date, schedule: WeeklySchedule) -> dt.datetime:
    return dt.datetime(
        day.year, day.month, day.day, schedule.hour, schedule.minute, tzinfo=schedule.tz
    )


def next_drawing(now: dt.datetime, schedule: WeeklySchedule = POWERBALL_SCHEDULE) -> DrawingSchedule:
    """Return the earliest upcoming drawing strictly after ``now``.

    Naive datetimes are taken to be UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)
    local_now = now.astimezone(schedule.tz)
    candidates = [_next_occurrence(local_now, weekday, schedule) for weekday in schedule.weekdays]
    return DrawingSchedule(draw_at=min(candidates), time_label=schedule.time_label)
