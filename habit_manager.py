import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError

from display import format_habit_list, format_profile, format_stats, format_status_lines
from errors import HabitError
from habit import Habit
from habit_collection import HabitCollection, HabitFilter
from reminders import DEFAULT_INTERVAL, ReminderService
from user_stats import DEFAULT_USER_NAME

logger = logging.getLogger(__name__)


class HabitTracker:
    """Runs habit mutations against the collection and persists after each one.

    ``lock`` is held from the mutation through the write, so saved snapshots
    land in the same order as the mutations that produced them.
    """

    def __init__(self, storage, user_name: str = DEFAULT_USER_NAME,
                 reminder_interval: float = DEFAULT_INTERVAL,
                 clock: Callable[[], datetime] = datetime.now,
                 output: Callable[[str], None] = print):
        self.storage = storage
        self.user_name = user_name
        self.clock = clock
        self.output = output
        self.lock = threading.RLock()
        self.collection = self.load_data()
        self.reminder = ReminderService(self.collection, reminder_interval, output=output)

    def load_data(self) -> HabitCollection:
        snapshot = self.storage.load()
        try:
            return HabitCollection.from_snapshot(snapshot, clock=self.clock, default_name=self.user_name)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            logger.warning("Stored data is corrupt, starting with an empty tracker: %s", e)
            return HabitCollection.from_snapshot(None, clock=self.clock, default_name=self.user_name)

    def save_data(self) -> None:
        with self.lock:
            self.storage.save(self.collection.to_snapshot())

    # -------------------------
    # Operations
    # -------------------------
    def add_habit(self, name: str, target_frequency: int) -> Habit:
        with self.lock:
            habit = self.collection.add(name, target_frequency)
            self.save_data()
        return habit

    def complete_habit(self, habit_id: int) -> bool:
        with self.lock:
            recorded = self.collection.complete(habit_id)
            self.save_data()
        return recorded

    def rename_habit(self, habit_id: int, new_name: str) -> Habit:
        with self.lock:
            habit = self.collection.rename(habit_id, new_name)
            self.save_data()
        return habit

    def delete_habit(self, position: int) -> Habit:
        with self.lock:
            habit = self.collection.delete(position)
            self.save_data()
        return habit

    def clear_all_data(self) -> None:
        with self.lock:
            self.collection.clear()
            self.storage.clear()

    def start_reminder(self) -> None:
        self.reminder.start()

    def stop_reminder(self) -> bool:
        return self.reminder.stop()

    # -------------------------
    # Interactive menu
    # -------------------------
    def _ask_int(self, prompt: str, ask: Callable[[str], str]) -> Optional[int]:
        raw = ask(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            self.output(f"❌ '{raw}' is not a number.")
            return None

    def _show(self, which: HabitFilter) -> None:
        now = self.clock()
        self.output(format_habit_list(self.collection.filter(which, now), now, which))

    def _menu_add(self, ask) -> None:
        name = ask("Enter a habit name: ").strip()
        target = self._ask_int("Target completions per week: ", ask)
        if target is None:
            return
        habit = self.add_habit(name, target)
        self.output(f"✅ Habit '{habit.name}' added (id {habit.id}).")

    def _menu_complete(self, ask) -> None:
        self._show(HabitFilter.ALL)
        habit_id = self._ask_int("Enter the id of the habit you completed: ", ask)
        if habit_id is None:
            return
        with self.lock:
            name = self.collection.get(habit_id).name
            recorded = self.complete_habit(habit_id)
        if recorded:
            self.output(f"✅ '{name}' marked as done for today!")
        else:
            self.output(f"'{name}' was already marked done today.")

    def _menu_delete(self, ask) -> None:
        self._show(HabitFilter.ALL)
        position = self._ask_int("Enter the number of the habit to delete: ", ask)
        if position is None:
            return
        habit = self.delete_habit(position)
        self.output(f"🗑️  Habit '{habit.name}' deleted.")

    def _menu_stop_reminder(self, ask) -> None:
        if self.stop_reminder():
            self.output("Reminder stopped.")
        else:
            self.output("No reminder is running.")

    def _menu_start_reminder(self, ask) -> None:
        self.start_reminder()
        self.output("Reminder started.")

    def _menu_clear(self, ask) -> None:
        if ask("Delete ALL habits and stored data? (y/n): ").strip().lower() == "y":
            self.clear_all_data()
            self.output("All data cleared.")

    def show_menu(self, ask: Optional[Callable[[str], str]] = None) -> None:
        """Main habit menu"""
        ask = ask or input
        actions = {
            "1": lambda _: self.output(format_profile(self.collection, self.clock())),
            "2": lambda _: self._show(HabitFilter.ALL),
            "3": lambda _: self._show(HabitFilter.ACTIVE),
            "4": lambda _: self._show(HabitFilter.COMPLETED),
            "5": self._menu_add,
            "6": self._menu_complete,
            "7": self._menu_delete,
            "8": lambda _: self.output(format_stats(self.collection, self.clock())),
            "9": lambda _: self.output(format_status_lines(self.collection.habits, self.clock())),
            "10": self._menu_stop_reminder,
            "11": self._menu_start_reminder,
            "12": self._menu_clear,
        }
        while True:
            self.output("\n🌱 Habit Tracker")
            self.output("1. View profile")
            self.output("2. View all habits")
            self.output("3. View active habits")
            self.output("4. View completed habits")
            self.output("5. Add a habit")
            self.output("6. Mark a habit as done")
            self.output("7. Delete a habit")
            self.output("8. View stats")
            self.output("9. Quick status list")
            self.output("10. Stop reminder")
            self.output("11. Start reminder")
            self.output("12. Clear all data")
            self.output("0. Exit")

            try:
                choice = ask("Choose an option (0–12): ").strip()
            except EOFError:
                choice = "0"
            if choice == "0":
                self.reminder.stop()
                self.output("Goodbye!")
                break

            action = actions.get(choice)
            if action is None:
                self.output("Invalid choice, try again.")
                continue
            try:
                action(ask)
            except HabitError as e:
                self.output(f"❌ {e}")
            except (OSError, SQLAlchemyError) as e:
                logger.error("Could not save habits: %s", e)
                self.output("❌ Could not save your data.")
