import unittest
from datetime import date, datetime, timedelta

from errors import InvalidArgument, InvalidState
from habit import Habit, HabitStatus
from week_window import WeekWindow

WEDNESDAY = datetime(2026, 10, 14, 10, 0)
MONDAY = date(2026, 10, 12)


class TestHabit(unittest.TestCase):
    def setUp(self):
        self.habit = Habit(1, "Read", 3, created_at=datetime(2026, 10, 1, 8, 0))

    def test_mark_complete_is_idempotent_per_day(self):
        """Same calendar day twice: True, then False, one entry."""
        self.assertTrue(self.habit.mark_complete(WEDNESDAY))
        self.assertFalse(self.habit.mark_complete(WEDNESDAY.replace(hour=22)))
        self.assertEqual(self.habit.completions, [date(2026, 10, 14)])

    def test_completions_is_a_copy(self):
        self.habit.mark_complete(WEDNESDAY)
        self.habit.completions.append(date(2026, 10, 15))
        self.assertEqual(len(self.habit.completions), 1)

    def test_constructor_drops_duplicate_days(self):
        habit = Habit(2, "Run", 2, completions=["2026-10-12", "2026-10-12", "2026-10-13"])
        self.assertEqual(habit.completions, [date(2026, 10, 12), date(2026, 10, 13)])

    def test_three_days_this_week_meets_target(self):
        for offset in range(3):
            self.habit.mark_complete(MONDAY + timedelta(days=offset))

        self.assertTrue(self.habit.is_completed_this_week(WEDNESDAY))
        self.assertEqual(self.habit.progress_percentage(WEDNESDAY), 100)
        self.assertEqual(self.habit.status(WEDNESDAY), HabitStatus.COMPLETED)

    def test_week_completions_ignore_other_weeks(self):
        self.habit.mark_complete(date(2026, 10, 11))   # previous Sunday
        self.habit.mark_complete(date(2026, 10, 13))
        self.habit.mark_complete(date(2026, 10, 19))   # next Monday

        window = WeekWindow.containing(WEDNESDAY)
        week = self.habit.week_completions(WEDNESDAY)
        self.assertEqual(week, [date(2026, 10, 13)])
        self.assertTrue(all(day in window for day in week))
        self.assertEqual(self.habit.status(WEDNESDAY), HabitStatus.PENDING)

    def test_progress_is_floored_monotonic_and_capped(self):
        habit = Habit(3, "Stretch", 3)
        seen = [habit.progress_percentage(WEDNESDAY)]
        for offset in range(5):
            habit.mark_complete(MONDAY + timedelta(days=offset))
            seen.append(habit.progress_percentage(WEDNESDAY))

        self.assertEqual(seen, [0, 33, 66, 100, 100, 100])

    def test_progress_with_non_positive_target_raises(self):
        habit = Habit(4, "Broken", 0)
        with self.assertRaises(InvalidState):
            habit.progress_percentage(WEDNESDAY)
        # zero completions >= zero target
        self.assertTrue(habit.is_completed_this_week(WEDNESDAY))

    def test_rename_trims_and_rejects_blank(self):
        self.habit.rename("  Read a book  ")
        self.assertEqual(self.habit.name, "Read a book")

        with self.assertRaises(InvalidArgument):
            self.habit.rename("   ")
        with self.assertRaises(InvalidArgument):
            self.habit.name = ""
        self.assertEqual(self.habit.name, "Read a book")

    def test_id_and_created_at_are_read_only(self):
        with self.assertRaises(AttributeError):
            self.habit.id = 5
        with self.assertRaises(AttributeError):
            self.habit.created_at = datetime.now()

    def test_to_dict_shape(self):
        self.habit.mark_complete(date(2026, 10, 13))
        self.assertEqual(self.habit.to_dict(), {
            "id": 1,
            "name": "Read",
            "targetFrequency": 3,
            "completions": ["2026-10-13"],
            "createdAt": "2026-10-01T08:00:00",
        })

    def test_from_dict_defaults(self):
        habit = Habit.from_dict({})
        self.assertEqual(habit.id, 0)
        self.assertEqual(habit.name, "Unnamed")
        self.assertEqual(habit.target_frequency, 1)
        self.assertEqual(habit.completions, [])

    def test_from_dict_accepts_javascript_timestamps(self):
        habit = Habit.from_dict({"id": 7, "name": "Walk", "targetFrequency": 2,
                                 "createdAt": "2025-11-03T06:15:00.000Z"})
        self.assertEqual(habit.created_at.year, 2025)
        self.assertIsNotNone(habit.created_at.tzinfo)


if __name__ == "__main__":
    unittest.main()
