# config.py
import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r, expected an integer; using %s", key, raw, default)
        return default


@dataclass
class Settings:
    storage: str = "json"  # json | sql
    data_file: str = "habits-data.json"
    database_url: str = "sqlite:///habits.db"
    reminder_interval: int = 10  # seconds
    user_name: str = "User"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 5000

    @classmethod
    def from_env(cls) -> "Settings":
        storage = os.getenv("HABIT_STORAGE", "json").strip().lower()
        if storage not in ("json", "sql"):
            logger.warning("Unknown HABIT_STORAGE=%r, falling back to json", storage)
            storage = "json"
        return cls(
            storage=storage,
            data_file=os.getenv("HABIT_DATA_FILE", "habits-data.json"),
            database_url=os.getenv("HABIT_DATABASE_URL", "sqlite:///habits.db"),
            reminder_interval=max(_int_env("HABIT_REMINDER_INTERVAL", 10), 1),
            user_name=os.getenv("HABIT_USER_NAME", "User"),
            log_level=os.getenv("HABIT_LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HABIT_HOST", "127.0.0.1"),
            port=_int_env("HABIT_PORT", 5000),
        )
