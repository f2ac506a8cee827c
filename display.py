# display.py
"""Plain-text rendering for the menu loop and reminders. Read-only."""
from datetime import datetime
from typing import Iterable, List, Optional

from errors import InvalidState
from habit import Habit, HabitStatus
from habit_collection import HabitCollection, HabitFilter

BAR_WIDTH = 10
FILLED = "█"
EMPTY = "░"

FILTER_TITLES = {
    HabitFilter.ALL: "=== 📋 All Habits ===",
    HabitFilter.ACTIVE: "=== 🔄 Active Habits ===",
    HabitFilter.COMPLETED: "=== ✅ Completed Habits ===",
}

STATUS_LABELS = {
    HabitStatus.COMPLETED: "✅ Completed",
    HabitStatus.PENDING: "⏳ Pending",
}


def progress_bar(percent: int, width: int = BAR_WIDTH) -> str:
    percent = max(0, min(int(percent), 100))
    filled = percent * width // 100
    return f"[{FILLED * filled}{EMPTY * (width - filled)}] {percent}%"


def habit_progress(habit: Habit, now: Optional[datetime] = None) -> str:
    try:
        return progress_bar(habit.progress_percentage(now))
    except InvalidState:
        return "[n/a]"


def format_habit_list(habits: Iterable[Habit], now: Optional[datetime] = None,
                      which: HabitFilter = HabitFilter.ALL) -> str:
    lines: List[str] = [FILTER_TITLES[HabitFilter(which)]]
    habits = list(habits)
    if not habits:
        lines.append("No habits match this filter.")
        return "\n".join(lines)

    for i, habit in enumerate(habits, start=1):
        done = len(habit.week_completions(now))
        label = "[Done]" if habit.status(now) is HabitStatus.COMPLETED else "[Active]"
        lines.append(f"{i}. {label} {habit.name} (id {habit.id})")
        lines.append(f"   Target: {habit.target_frequency}x/week")
        lines.append(f"   Progress: {done}/{habit.target_frequency} {habit_progress(habit, now)}")
    return "\n".join(lines)


def format_status_lines(habits: Iterable[Habit], now: Optional[datetime] = None) -> str:
    return "\n".join(
        f"{i}. {h.name} - {STATUS_LABELS[h.status(now)]}"
        for i, h in enumerate(habits, start=1)
    )


def format_profile(collection: HabitCollection, now: Optional[datetime] = None) -> str:
    now = now or collection.now()
    profile = collection.profile
    stats = collection.stats
    return "\n".join([
        f"Name              : {profile.name}",
        f"Joined            : {profile.join_date.isoformat()} ({profile.days_joined(now)} days ago)",
        f"Total habits      : {stats.total_habits}",
        f"Completed this week: {stats.completed_this_week}",
    ])


def format_stats(collection: HabitCollection, now: Optional[datetime] = None) -> str:
    now = now or collection.now()
    stats = collection.refresh_stats(now)
    overall = stats.overall_progress_percentage()
    lines = [
        "📊 === Habit Tracker Stats ===",
        f"👤 User                : {collection.profile.name}",
        f"📅 Joined              : {collection.profile.join_date.isoformat()}",
        f"📈 Total habits        : {stats.total_habits}",
        f"✅ Completed this week : {stats.completed_this_week}",
        f"⏳ Still pending       : {stats.pending_this_week}",
        "",
        f"🔥 Overall progress this week: {overall}%",
        progress_bar(overall),
    ]
    habits = collection.habits
    if habits:
        lines.append("")
        lines.append("Details:")
        for i, habit in enumerate(habits, start=1):
            lines.append(
                f"{i}. {habit.name} - {STATUS_LABELS[habit.status(now)]} {habit_progress(habit, now)}"
            )
    return "\n".join(lines)


def format_reminder(habits: Iterable[Habit]) -> str:
    """Reminder block for pending habits; empty string when nothing is pending."""
    habits = list(habits)
    if not habits:
        return ""
    lines = ["===== REMINDER ====="]
    lines.extend(f' {i}. Don\'t forget: "{h.name}"' for i, h in enumerate(habits, start=1))
    lines.append("====================")
    return "\n".join(lines)
