from datetime import date, datetime

from habit import Habit
from user_stats import UserProfile, UserStats

NOW = datetime(2026, 10, 14, 10, 0)


def test_empty_stats():
    stats = UserStats().recompute([], NOW)
    assert stats.total_habits == 0
    assert stats.completed_this_week == 0
    assert stats.overall_progress_percentage() == 0


def test_overall_progress_is_floored():
    habits = [Habit(i, f"h{i}", 1) for i in range(1, 4)]
    habits[0].mark_complete(date(2026, 10, 13))

    stats = UserStats().recompute(habits, NOW)

    assert stats.total_habits == 3
    assert stats.completed_this_week == 1
    assert stats.pending_this_week == 2
    assert stats.overall_progress_percentage() == 33


def test_profile_days_joined():
    profile = UserProfile(name="Sam", join_date=datetime(2026, 10, 4, 12, 0))
    assert profile.days_joined(NOW) == 9
    assert profile.days_joined(datetime(2026, 10, 1)) == 0


def test_profile_round_trip():
    profile = UserProfile(name="Sam", join_date=datetime(2026, 10, 4, 12, 0))
    data = profile.to_dict()
    assert data == {"name": "Sam", "joinDate": "2026-10-04T12:00:00"}
    assert UserProfile.from_dict(data) == profile


def test_profile_from_missing_data_uses_default_name():
    assert UserProfile.from_dict(None, default_name="Guest").name == "Guest"


def test_profile_writes_new_join_date_after_change():
    profile = UserProfile.from_dict({"name": "Sam", "joinDate": "2025-11-03T06:15:00.000Z"})
    assert profile.to_dict()["joinDate"] == "2025-11-03T06:15:00.000Z"

    profile.join_date = datetime(2026, 1, 2, 9, 0)
    assert profile.to_dict()["joinDate"] == "2026-01-02T09:00:00"


def test_profile_without_join_date_uses_given_now():
    assert UserProfile.from_dict({"name": "Sam"}, now=NOW).join_date == NOW
