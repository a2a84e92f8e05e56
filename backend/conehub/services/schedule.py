"""Weekly duty grid: 3 fixed shifts x 7 days, nobody assigned yet."""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone

SHIFTS: tuple[tuple[str, time, time], ...] = (
    ("night", time(0, 0), time(8, 0)),
    ("day", time(8, 0), time(16, 0)),
    ("evening", time(16, 0), time(0, 0)),
)
DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class ShiftSlot:
    name: str
    starts_at: time
    ends_at: time
    assignee: str | None = None


@dataclass(frozen=True)
class DaySchedule:
    day: date
    shifts: list[ShiftSlot] = field(default_factory=list)


@dataclass(frozen=True)
class WeekSchedule:
    team_id: str
    week_start: date
    days: list[DaySchedule] = field(default_factory=list)


def current_week_start(today: date | None = None) -> date:
    today = today or datetime.now(timezone.utc).date()
    return today - timedelta(days=today.weekday())


def build_week(team_id: str, week_start: date | None = None) -> WeekSchedule:
    start = week_start or current_week_start()
    days = [
        DaySchedule(
            day=start + timedelta(days=offset),
            shifts=[ShiftSlot(name, begin, end) for name, begin, end in SHIFTS],
        )
        for offset in range(DAYS_IN_WEEK)
    ]
    return WeekSchedule(team_id=team_id, week_start=start, days=days)
