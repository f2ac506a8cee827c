import json
import threading

from local_storage import LocalHabitStorage

SNAPSHOT = {
    "profile": {"name": "Sam", "joinDate": "2026-10-01T08:00:00"},
    "habits": [{"id": 1, "name": "Read", "targetFrequency": 3,
                "completions": ["2026-10-13"], "createdAt": "2026-10-01T08:00:00"}],
}


def test_missing_file_loads_none(tmp_path):
    storage = LocalHabitStorage(str(tmp_path / "nope.json"))
    assert storage.load() is None


def test_save_then_load(tmp_path):
    path = tmp_path / "data" / "habits.json"
    storage = LocalHabitStorage(str(path))

    storage.save(SNAPSHOT)

    assert storage.load() == SNAPSHOT
    assert json.loads(path.read_text(encoding="utf-8")) == SNAPSHOT
    assert list((tmp_path / "data").glob("*.tmp")) == []


def test_corrupt_file_loads_none(tmp_path):
    path = tmp_path / "habits.json"
    path.write_text("{not json", encoding="utf-8")
    assert LocalHabitStorage(str(path)).load() is None


def test_non_object_loads_none(tmp_path):
    path = tmp_path / "habits.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")
    assert LocalHabitStorage(str(path)).load() is None


def test_clear_removes_file(tmp_path):
    path = tmp_path / "habits.json"
    storage = LocalHabitStorage(str(path))
    storage.save(SNAPSHOT)

    assert storage.clear() is True
    assert not path.exists()
    assert storage.clear() is False


def test_concurrent_saves_leave_a_readable_file(tmp_path):
    path = tmp_path / "habits.json"
    storage = LocalHabitStorage(str(path))
    snapshots = [
        {"profile": SNAPSHOT["profile"], "habits": SNAPSHOT["habits"] * n}
        for n in range(1, 17)
    ]
    errors = []

    def write(snapshot):
        try:
            for _ in range(10):
                storage.save(snapshot)
        except Exception as e:  # collected for the assertion below
            errors.append(e)

    threads = [threading.Thread(target=write, args=(s,)) for s in snapshots]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert storage.load() in snapshots
    assert list(tmp_path.glob("*.tmp")) == []
