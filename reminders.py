# reminders.py
import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from display import format_reminder
from habit_collection import HabitCollection, HabitFilter

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 10  # seconds


class ReminderService:
    """Periodically prints the habits that have not met this week's target.

    Owned by the application: nothing runs until ``start()`` is called, and
    ``stop()`` cancels the background thread. Only reads the collection.
    """

    def __init__(self, collection: HabitCollection, interval: float = DEFAULT_INTERVAL,
                 output: Callable[[str], None] = print):
        self.collection = collection
        self.interval = interval
        self.output = output
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.is_running:
            self.stop()
        stop_event = threading.Event()
        self._stop_event = stop_event
        self._thread = threading.Thread(
            target=self._run, args=(stop_event,), name="habit-reminder", daemon=True
        )
        self._thread.start()
        logger.info("Reminder started (every %ss)", self.interval)

    def stop(self) -> bool:
        """Cancel the reminder. Returns False if none was running."""
        if self._thread is None:
            return False
        self._stop_event.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout=self.interval + 1)
        self._thread = None
        self._stop_event = None
        logger.info("Reminder stopped")
        return True

    def tick(self, now: Optional[datetime] = None) -> str:
        pending = self.collection.filter(HabitFilter.ACTIVE, now)
        text = format_reminder(pending)
        if text:
            self.output("\n" + text + "\n")
        return text

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            try:
                self.tick()
            except Exception:
                logger.exception("Reminder tick failed")
