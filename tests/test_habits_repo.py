# tests/test_habits_repo.py
from habits_repo import make_engine, SqlHabitStorage

SNAPSHOT = {
    "profile": {"name": "Sam", "joinDate": "2026-10-01T08:00:00"},
    "habits": [
        {"id": 2, "name": "Exercise", "targetFrequency": 5,
         "completions": ["2026-10-14", "2026-10-12"], "createdAt": "2026-10-01T08:00:00"},
        {"id": 3, "name": "Meditate", "targetFrequency": 2,
         "completions": [], "createdAt": "2026-10-02T07:30:00"},
    ],
}


def _storage(tmp_path):
    # temporary sqlite
    db_file = tmp_path / "test.db"
    return SqlHabitStorage(make_engine(f"sqlite:///{db_file}"))


def test_empty_database_loads_none(tmp_path):
    assert _storage(tmp_path).load() is None


def test_save_and_load_keeps_order_and_days(tmp_path):
    storage = _storage(tmp_path)
    storage.save(SNAPSHOT)

    assert storage.load() == SNAPSHOT


def test_save_replaces_previous_rows(tmp_path):
    storage = _storage(tmp_path)
    storage.save(SNAPSHOT)

    smaller = {"profile": SNAPSHOT["profile"], "habits": SNAPSHOT["habits"][1:]}
    storage.save(smaller)

    loaded = storage.load()
    assert [h["id"] for h in loaded["habits"]] == [3]


def test_clear(tmp_path):
    storage = _storage(tmp_path)
    storage.save(SNAPSHOT)

    assert storage.clear() is True
    assert storage.load() is None
