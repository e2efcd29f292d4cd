"""Time source abstraction."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""


@dataclass
class SystemClock(Clock):
    """Clock backed by the system wall clock."""

    def now(self) -> datetime:
        """Return the current UTC time."""
        return datetime.now(tz=UTC)


def local_day(moment: datetime | date, tz: ZoneInfo) -> date:
    """Return the calendar day of a moment in the given timezone."""
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            return moment.date()
        return moment.astimezone(tz).date()
    return moment


def day_bounds(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Return [local midnight, next local midnight) for a day, in UTC."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(UTC), end.astimezone(UTC)


def as_aware(moment: datetime, tz: ZoneInfo) -> datetime:
    """Attach the local timezone to naive datetimes."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment
