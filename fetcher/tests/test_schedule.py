import datetime as dt
import unittest
from zoneinfo import ZoneInfo

from fetcher.schedule import POWERBALL_SCHEDULE, WeeklySchedule, next_drawing

ET = ZoneInfo("America/New_York")


def _et(year, month, day, hour, minute=0):
    return dt.datetime(year, month, day, hour, minute, tzinfo=ET)


class NextDrawingTests(unittest.TestCase):
    def test_tuesday_resolves_to_wednesday(self) -> None:
        schedule = next_drawing(_et(2025, 7, 8, 12))
        self.assertEqual(schedule.draw_at, _et(2025, 7, 9, 23))

    def test_after_saturday_draw_resolves_to_following_wednesday(self) -> None:
        schedule = next_drawing(_et(2025, 7, 12, 23, 30))
        self.assertEqual(schedule.draw_at, _et(2025, 7, 16, 23))

    def test_draw_day_before_draw_time_counts_today(self) -> None:
        schedule = next_drawing(_et(2025, 7, 9, 22, 59))
        self.assertEqual(schedule.draw_at, _et(2025, 7, 9, 23))

    def test_exact_draw_time_moves_to_next_draw(self) -> None:
        schedule = next_drawing(_et(2025, 7, 9, 23))
        self.assertEqual(schedule.draw_at, _et(2025, 7, 12, 23))

    def test_sunday_wraps_week(self) -> None:
        schedule = next_drawing(_et(2025, 7, 13, 9))
        self.assertEqual(schedule.draw_at, _et(2025, 7, 16, 23))

    def test_year_boundary(self) -> None:
        schedule = next_drawing(_et(2025, 12, 27, 23, 30))
        self.assertEqual(schedule.draw_at, _et(2025, 12, 31, 23))

    def test_naive_datetime_is_utc(self) -> None:
        # 03:30 UTC Thursday is 23:30 Wednesday in New York (EDT).
        schedule = next_drawing(dt.datetime(2025, 7, 10, 3, 30))
        self.assertEqual(schedule.draw_at, _et(2025, 7, 12, 23))

    def test_labels(self) -> None:
        schedule = next_drawing(_et(2025, 7, 8, 12))
        self.assertEqual(schedule.date_label, "Wednesday, July 9, 2025")
        self.assertEqual(schedule.describe(), "Wednesday, July 9, 2025 @ 11:00 PM ET")

    def test_custom_schedule(self) -> None:
        monday_noon = WeeklySchedule(
            weekdays=(0,), hour=12, minute=0, tz_name="UTC", time_label="12:00 PM UTC"
        )
        schedule = next_drawing(dt.datetime(2025, 7, 8, 0, 0, tzinfo=dt.timezone.utc), monday_noon)
        self.assertEqual(schedule.draw_at.date(), dt.date(2025, 7, 14))
        self.assertEqual(schedule.time_label, "12:00 PM UTC")

    def test_default_schedule_is_wednesday_and_saturday(self) -> None:
        self.assertEqual(POWERBALL_SCHEDULE.weekdays, (2, 5))
        self.assertEqual(POWERBALL_SCHEDULE.hour, 23)


if __name__ == "__main__":
    unittest.main()
