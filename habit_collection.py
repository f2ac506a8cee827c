# habit_collection.py
import logging
import threading
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional

from errors import InvalidArgument, NotFound
from habit import Habit
from user_stats import DEFAULT_USER_NAME, UserProfile, UserStats

logger = logging.getLogger(__name__)


class HabitFilter(str, Enum):
    ALL = "all"
    COMPLETED = "completed"
    ACTIVE = "active"


class HabitCollection:
    """Owns the user's habits, their profile and the derived stats.

    Every mutation runs under one re-entrant lock and recomputes the stats
    before releasing it, so readers (including the reminder thread) always
    see a consistent (habits, stats) pair.
    """

    def __init__(
        self,
        habits: Optional[List[Habit]] = None,
        profile: Optional[UserProfile] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._lock = threading.RLock()
        self._clock = clock
        self._habits: List[Habit] = []
        seen = set()
        for habit in habits or []:
            if habit.id in seen:
                raise InvalidArgument(f"Duplicate habit id {habit.id}.")
            seen.add(habit.id)
            self._habits.append(habit)
        self._profile = profile or UserProfile(join_date=clock())
        self._stats = UserStats()
        self._recompute()

    # -------------------------
    # Read access
    # -------------------------
    @property
    def habits(self) -> List[Habit]:
        with self._lock:
            return list(self._habits)

    @property
    def profile(self) -> UserProfile:
        return self._profile

    @property
    def stats(self) -> UserStats:
        return self._stats

    def now(self) -> datetime:
        return self._clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._habits)

    def __iter__(self) -> Iterator[Habit]:
        return iter(self.habits)

    def get(self, habit_id: int) -> Habit:
        with self._lock:
            for habit in self._habits:
                if habit.id == habit_id:
                    return habit
        raise NotFound(f"No habit with id {habit_id}.")

    def filter(self, which=HabitFilter.ALL, now: Optional[datetime] = None) -> List[Habit]:
        try:
            which = HabitFilter(which)
        except ValueError:
            raise InvalidArgument(f"Unknown habit filter: {which!r}") from None

        now = now or self._clock()
        habits = self.habits
        if which is HabitFilter.ALL:
            return habits
        if which is HabitFilter.COMPLETED:
            return [h for h in habits if h.is_completed_this_week(now)]
        return [h for h in habits if not h.is_completed_this_week(now)]

    # -------------------------
    # Mutations
    # -------------------------
    def add(self, name: str, target_frequency: int) -> Habit:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidArgument("Habit name cannot be empty.")
        if isinstance(target_frequency, bool) or not isinstance(target_frequency, int):
            raise InvalidArgument("Target frequency must be a whole number.")
        if target_frequency < 1:
            raise InvalidArgument("Target frequency must be at least 1 per week.")

        with self._lock:
            habit = Habit(self._next_id(), cleaned, target_frequency, created_at=self._clock())
            self._habits.append(habit)
            self._recompute()
        logger.debug("Added habit %s (%s, %dx/week)", habit.id, habit.name, target_frequency)
        return habit

    def complete(self, habit_id: int, today=None) -> bool:
        """Mark habit ``habit_id`` done for today; False if it already was."""
        with self._lock:
            habit = self.get(habit_id)
            recorded = habit.mark_complete(today if today is not None else self._clock())
            self._recompute()
        logger.debug("Complete habit %s -> %s", habit_id, recorded)
        return recorded

    def rename(self, habit_id: int, new_name: str) -> Habit:
        with self._lock:
            habit = self.get(habit_id)
            habit.rename(new_name)
            self._recompute()
        return habit

    def delete(self, position: int) -> Habit:
        """Remove the habit at 1-based display ``position`` (not its id)."""
        with self._lock:
            if isinstance(position, bool) or not isinstance(position, int) \
                    or not 1 <= position <= len(self._habits):
                raise NotFound(f"No habit at position {position}.")
            habit = self._habits.pop(position - 1)
            self._recompute()
        logger.debug("Deleted habit %s at position %s", habit.id, position)
        return habit

    def clear(self) -> None:
        with self._lock:
            self._habits = []
            self._recompute()

    def refresh_stats(self, now: Optional[datetime] = None) -> UserStats:
        """Recompute stats against ``now``, e.g. after the week rolled over."""
        with self._lock:
            self._stats.recompute(self._habits, now or self._clock())
            return self._stats

    def _next_id(self) -> int:
        return max((h.id for h in self._habits), default=0) + 1

    def _recompute(self) -> None:
        self._stats.recompute(self._habits, self._clock())

    # -------------------------
    # Snapshot
    # -------------------------
    def to_snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "profile": self._profile.to_dict(),
                "habits": [h.to_dict() for h in self._habits],
            }

    @classmethod
    def from_snapshot(
        cls,
        data: Optional[Dict[str, Any]],
        clock: Callable[[], datetime] = datetime.now,
        default_name: str = DEFAULT_USER_NAME,
    ) -> "HabitCollection":
        """Rebuild a collection from ``to_snapshot`` output.

        Raises ValueError/TypeError/KeyError on malformed data; callers that
        must tolerate corrupt input catch those and start empty.
        """
        if not data:
            return cls(profile=UserProfile(name=default_name, join_date=clock()), clock=clock)
        if not isinstance(data, dict):
            raise TypeError(f"Snapshot must be an object, got {type(data).__name__}")
        now = clock()
        profile_data = data.get("profile") or data.get("userProfile")
        profile = UserProfile.from_dict(profile_data, default_name=default_name, now=now)
        habits = [Habit.from_dict(item, now=now) for item in data.get("habits") or []]
        return cls(habits=habits, profile=profile, clock=clock)
