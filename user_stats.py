# user_stats.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from habit import parse_timestamp

DEFAULT_USER_NAME = "User"


@dataclass
class UserProfile:
    """Profile fields owned by the user's configuration, not derived from habits."""

    name: str = DEFAULT_USER_NAME
    join_date: datetime = field(default_factory=datetime.now)
    # text the join date was loaded from, written back while it still matches
    join_date_text: Optional[str] = field(default=None, compare=False, repr=False)

    def days_joined(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.now()
        join = self.join_date
        # compare like with like when one side carries a tz offset
        if join.tzinfo is not None and now.tzinfo is None:
            now = now.astimezone()
        elif join.tzinfo is None and now.tzinfo is not None:
            join = join.astimezone()
        return max((now - join).days, 0)

    def to_dict(self) -> Dict[str, Any]:
        joined = self.join_date.isoformat()
        if self.join_date_text and parse_timestamp(self.join_date_text) == self.join_date:
            joined = self.join_date_text
        return {"name": self.name, "joinDate": joined}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], default_name: str = DEFAULT_USER_NAME,
                  now: Optional[datetime] = None) -> "UserProfile":
        data = data or {}
        raw_join = data.get("joinDate")
        if raw_join:
            return cls(name=data.get("name") or default_name,
                       join_date=parse_timestamp(raw_join), join_date_text=str(raw_join))
        return cls(name=data.get("name") or default_name, join_date=now or datetime.now())


@dataclass
class UserStats:
    """Aggregates derived from a habit collection.

    Only ``recompute`` writes these fields; the owning collection calls it
    after every mutation.
    """

    total_habits: int = 0
    completed_this_week: int = 0

    def recompute(self, habits: Iterable, now: Optional[datetime] = None) -> "UserStats":
        habits = list(habits)
        self.total_habits = len(habits)
        self.completed_this_week = sum(1 for h in habits if h.is_completed_this_week(now))
        return self

    @property
    def pending_this_week(self) -> int:
        return self.total_habits - self.completed_this_week

    def overall_progress_percentage(self) -> int:
        if self.total_habits == 0:
            return 0
        return 100 * self.completed_this_week // self.total_habits
