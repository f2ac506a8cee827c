# habit.py
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from errors import InvalidArgument, InvalidState
from week_window import WeekWindow


class HabitStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"


def _as_day(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    text = str(value)
    # ISO strings written by JavaScript end in "Z"
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


class Habit:
    """A single trackable habit with a weekly completion target.

    Completions are stored as calendar days; a day can only be recorded once.
    Nothing is validated at construction time, only on rename.
    """

    def __init__(
        self,
        id: int,
        name: str,
        target_frequency: int,
        completions: Optional[Iterable[Any]] = None,
        created_at: Optional[datetime] = None,
    ):
        self._id = id
        self._name = name
        self._target_frequency = target_frequency
        self._completions: List[date] = []
        for value in completions or []:
            day = _as_day(value)
            if day not in self._completions:
                self._completions.append(day)
        self._created_at = parse_timestamp(created_at) if created_at else datetime.now()
        # stored text is written back verbatim, e.g. "...000Z" from older files
        self._created_at_text = created_at if isinstance(created_at, str) else None

    def __repr__(self) -> str:
        return f"Habit(id={self._id!r}, name={self._name!r}, target_frequency={self._target_frequency!r})"

    # -------------------------
    # Properties
    # -------------------------
    @property
    def id(self) -> int:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, new_name: str) -> None:
        self.rename(new_name)

    @property
    def target_frequency(self) -> int:
        return self._target_frequency

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def completions(self) -> List[date]:
        return list(self._completions)

    # -------------------------
    # Mutations
    # -------------------------
    def rename(self, new_name: str) -> None:
        cleaned = (new_name or "").strip()
        if not cleaned:
            raise InvalidArgument("Habit name cannot be empty.")
        self._name = cleaned

    def mark_complete(self, today=None) -> bool:
        """Record today's completion. Returns False if today was already recorded."""
        day = _as_day(today) if today is not None else date.today()
        if day in self._completions:
            return False
        self._completions.append(day)
        return True

    # -------------------------
    # Weekly progress
    # -------------------------
    def week_completions(self, now: Optional[datetime] = None) -> List[date]:
        window = WeekWindow.containing(now)
        return [day for day in self._completions if day in window]

    def is_completed_this_week(self, now: Optional[datetime] = None) -> bool:
        return len(self.week_completions(now)) >= self._target_frequency

    def progress_percentage(self, now: Optional[datetime] = None) -> int:
        target = self._target_frequency
        if target <= 0:
            raise InvalidState(
                f"Habit '{self._name}' has a non-positive target frequency ({target})."
            )
        done = len(self.week_completions(now))
        return min(100 * done // target, 100)

    def status(self, now: Optional[datetime] = None) -> HabitStatus:
        if self.is_completed_this_week(now):
            return HabitStatus.COMPLETED
        return HabitStatus.PENDING

    # -------------------------
    # Snapshot
    # -------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self._id,
            "name": self._name,
            "targetFrequency": self._target_frequency,
            "completions": [day.isoformat() for day in self._completions],
            "createdAt": self._created_at_text or self._created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], now: Optional[datetime] = None) -> "Habit":
        target = data.get("targetFrequency")
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name") or "Unnamed",
            target_frequency=int(target) if target is not None else 1,
            completions=data.get("completions") or [],
            created_at=data.get("createdAt") or now or datetime.now(),
        )
