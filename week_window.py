# week_window.py
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional

DAYS_IN_WEEK = 7
END_OF_DAY = time(23, 59, 59, 999000)


@dataclass(frozen=True)
class WeekWindow:
    """Inclusive Monday 00:00:00.000 .. Sunday 23:59:59.999 span (local time)."""

    start: datetime
    end: datetime

    @classmethod
    def containing(cls, now: Optional[datetime] = None) -> "WeekWindow":
        now = now or datetime.now()
        # weekday(): Monday=0 .. Sunday=6
        offset = now.weekday()
        monday = now.date() - timedelta(days=offset)
        start = datetime.combine(monday, time.min)
        sunday = monday + timedelta(days=DAYS_IN_WEEK - 1)
        end = datetime.combine(sunday, END_OF_DAY)
        return cls(start, end)

    def __contains__(self, day) -> bool:
        if isinstance(day, datetime):
            day = day.date()
        if not isinstance(day, date):
            return False
        midnight = datetime.combine(day, time.min)
        return self.start <= midnight <= self.end

    def days(self) -> List[date]:
        """The seven calendar days of the window, Monday first."""
        first = self.start.date()
        return [first + timedelta(days=i) for i in range(DAYS_IN_WEEK)]
