import argparse
import logging

from config import Settings
from habit_manager import HabitTracker
from habits_repo import SqlHabitStorage, make_engine
from local_storage import LocalHabitStorage
from web_app import create_app

logger = logging.getLogger(__name__)


def build_storage(settings: Settings):
    if settings.storage == "sql":
        return SqlHabitStorage(make_engine(settings.database_url))
    return LocalHabitStorage(settings.data_file)


def build_tracker(settings: Settings) -> HabitTracker:
    return HabitTracker(
        build_storage(settings),
        user_name=settings.user_name,
        reminder_interval=settings.reminder_interval,
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Weekly habit tracker")
    parser.add_argument("command", nargs="?", choices=["menu", "serve"], default="menu")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    tracker = build_tracker(settings)

    if args.command == "serve":
        # Flask runs on localhost:5000 unless configured otherwise
        create_app(tracker).run(host=settings.host, port=settings.port, debug=False)
        return

    tracker.start_reminder()
    try:
        tracker.show_menu()
    finally:
        tracker.stop_reminder()


if __name__ == "__main__":
    main()
