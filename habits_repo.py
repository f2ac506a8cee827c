# habits_repo.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    create_engine, MetaData, Table, Column, Integer, String,
    ForeignKey, select, delete, UniqueConstraint
)
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

# -------------------------
# Engine
# -------------------------
def make_engine(database_url: str = "sqlite:///habits.db"):
    """Create and return a SQLAlchemy engine (SQLite by default)."""
    return create_engine(database_url, future=True)

# -------------------------
# Schema (module-level, shared)
# -------------------------
metadata = MetaData()

profile = Table(
    "profile", metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String, nullable=False),
    Column("join_date", String, nullable=False),  # ISO-8601, kept verbatim
)

habits = Table(
    "habits", metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("position", Integer, nullable=False),
    Column("name", String, nullable=False),
    Column("target_frequency", Integer, nullable=False),
    Column("created_at", String, nullable=False),
)

completions = Table(
    "completions", metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("habit_id", Integer, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("day", String, nullable=False),  # YYYY-MM-DD
    Column("seq", Integer, nullable=False),
    UniqueConstraint("habit_id", "day", name="uq_completion_day"),
)

PROFILE_ROW_ID = 1

# -------------------------
# DB init
# -------------------------
def init_db(engine):
    """Create tables if they do not exist."""
    metadata.create_all(engine)

# -------------------------
# Helpers
# -------------------------
def _row_to_dict(row) -> Dict[str, Any]:
    # SQLAlchemy 2.x: row is Row; use _mapping
    return dict(row._mapping)


class SqlHabitStorage:
    """Snapshot persistence on top of a relational database."""

    def __init__(self, engine):
        self.engine = engine
        init_db(engine)

    def load(self) -> Optional[Dict[str, Any]]:
        try:
            with self.engine.connect() as conn:
                prow = conn.execute(
                    select(profile).where(profile.c.id == PROFILE_ROW_ID)
                ).first()
                habit_rows = [
                    _row_to_dict(r)
                    for r in conn.execute(select(habits).order_by(habits.c.position)).all()
                ]
                done_rows = conn.execute(
                    select(completions).order_by(completions.c.habit_id, completions.c.seq)
                ).all()
        except SQLAlchemyError as e:
            logger.warning("Error loading habits from database: %s", e)
            return None

        if prow is None and not habit_rows:
            return None

        days: Dict[int, List[str]] = {}
        for r in done_rows:
            m = r._mapping
            days.setdefault(m["habit_id"], []).append(m["day"])

        snapshot: Dict[str, Any] = {
            "habits": [
                {
                    "id": h["id"],
                    "name": h["name"],
                    "targetFrequency": h["target_frequency"],
                    "completions": days.get(h["id"], []),
                    "createdAt": h["created_at"],
                }
                for h in habit_rows
            ],
        }
        if prow is not None:
            p = _row_to_dict(prow)
            snapshot["profile"] = {"name": p["name"], "joinDate": p["join_date"]}
        return snapshot

    def save(self, snapshot: Dict[str, Any]) -> None:
        """Replace all stored rows with ``snapshot`` in a single transaction."""
        with self.engine.begin() as conn:  # ensures commit
            conn.execute(delete(completions))
            conn.execute(delete(habits))
            conn.execute(delete(profile))

            p = snapshot.get("profile")
            if p:
                conn.execute(profile.insert().values(
                    id=PROFILE_ROW_ID, name=p["name"], join_date=p["joinDate"]
                ))
            for position, h in enumerate(snapshot.get("habits") or [], start=1):
                conn.execute(habits.insert().values(
                    id=h["id"],
                    position=position,
                    name=h["name"],
                    target_frequency=h["targetFrequency"],
                    created_at=h["createdAt"],
                ))
                rows = [
                    {"habit_id": h["id"], "day": day, "seq": seq}
                    for seq, day in enumerate(h.get("completions") or [])
                ]
                if rows:
                    conn.execute(completions.insert(), rows)

    def clear(self) -> bool:
        with self.engine.begin() as conn:
            conn.execute(delete(completions))
            removed = conn.execute(delete(habits)).rowcount
            removed += conn.execute(delete(profile)).rowcount
        return bool(removed)
