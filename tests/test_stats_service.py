import os
import sys
import datetime
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from models import WorkoutLog
from stats_service import ProgressTracker, StatisticsService


def _log(day: datetime.datetime, weight: float, reps: int) -> WorkoutLog:
    return WorkoutLog(date=day, weight=weight, reps=reps)


class StatisticsServiceTest(unittest.TestCase):
    def setUp(self) -> None:
        self.stats = StatisticsService()
        self.d1 = datetime.datetime(2025, 7, 1, 8, 0)
        self.d2 = datetime.datetime(2025, 7, 3, 18, 30)

    def test_empty_history(self) -> None:
        report = self.stats.recompute({})
        self.assertIsNone(report.summary)
        self.assertEqual(report.personal_records, [])
        self.assertEqual(report.monthly_volume, [])

    def test_exercise_with_no_logs_counts_as_empty(self) -> None:
        report = self.stats.recompute({"SQUAT": []})
        self.assertIsNone(report.summary)
        self.assertEqual(report.personal_records, [])

    def test_single_exercise(self) -> None:
        history = {"SQUAT": [_log(self.d1, 100, 5), _log(self.d2, 110, 3)]}
        report = self.stats.recompute(history)
        self.assertEqual(report.summary.total_volume, 830)
        self.assertEqual(report.summary.total_workouts, 2)
        self.assertEqual(report.summary.heaviest_lift.weight, 110)
        self.assertEqual(len(report.personal_records), 1)
        self.assertEqual(report.personal_records[0].exercise_name, "SQUAT")
        self.assertEqual(report.personal_records[0].record_log.weight, 110)

    def test_total_workouts_counts_days(self) -> None:
        morning = datetime.datetime(2025, 7, 1, 7, 0)
        evening = datetime.datetime(2025, 7, 1, 20, 0)
        history = {
            "SQUAT": [_log(morning, 100, 5)],
            "BENCH PRESS": [_log(evening, 80, 5), _log(self.d2, 82.5, 5)],
        }
        summary = self.stats.summary(history)
        self.assertEqual(summary.total_workouts, 2)
        self.assertAlmostEqual(summary.total_volume, 500 + 400 + 412.5)

    def test_ties_resolve_deterministically(self) -> None:
        first = _log(self.d1, 100, 5)
        second = _log(self.d2, 100, 8)
        other = _log(self.d1, 100, 3)
        history = {"SQUAT": [first, second], "DEADLIFT": [other]}
        summary = self.stats.summary(history)
        self.assertEqual(summary.heaviest_lift, other)
        records = self.stats.personal_records(history)
        self.assertEqual([r.exercise_name for r in records], ["DEADLIFT", "SQUAT"])
        self.assertEqual(records[1].record_log, first)

    def test_monthly_volume(self) -> None:
        history = {
            "SQUAT": [
                _log(datetime.datetime(2025, 6, 28), 100, 5),
                _log(datetime.datetime(2025, 7, 2), 100, 5),
            ],
            "BENCH PRESS": [
                _log(datetime.datetime(2025, 7, 15), 80, 10),
                _log(datetime.datetime(2024, 12, 31), 60, 10),
            ],
        }
        buckets = self.stats.monthly_volume(history)
        self.assertEqual(
            [b.sort_key for b in buckets],
            [datetime.date(2024, 12, 1), datetime.date(2025, 6, 1), datetime.date(2025, 7, 1)],
        )
        self.assertEqual([b.total_volume for b in buckets], [600, 500, 1300])
        self.assertEqual(buckets[-1].month_label, datetime.date(2025, 7, 1).strftime("%b"))

    def test_progression(self) -> None:
        history = {"SQUAT": [_log(self.d2, 110, 3), _log(self.d1, 100, 5)]}
        series = self.stats.progression(history, "SQUAT")
        self.assertEqual([log.date for log in series], [self.d1, self.d2])
        self.assertEqual(self.stats.progression(history, ""), [])
        self.assertEqual(self.stats.progression(history, "DEADLIFT"), [])


class ProgressTrackerTest(unittest.TestCase):
    def setUp(self) -> None:
        self.tracker = ProgressTracker()
        self.d1 = datetime.datetime(2025, 7, 1)
        self.d2 = datetime.datetime(2025, 7, 2)

    def test_auto_selects_first_exercise(self) -> None:
        history = {
            "SQUAT": [_log(self.d1, 100, 5)],
            "BENCH PRESS": [_log(self.d2, 80, 5), _log(self.d1, 75, 5)],
        }
        self.tracker.update(history)
        self.assertEqual(self.tracker.exercises_with_history, ["BENCH PRESS", "SQUAT"])
        self.assertEqual(self.tracker.selected_exercise, "BENCH PRESS")
        self.assertEqual([log.weight for log in self.tracker.progression], [75, 80])

    def test_keeps_selection_while_present(self) -> None:
        history = {"SQUAT": [_log(self.d1, 100, 5)], "DEADLIFT": [_log(self.d1, 140, 5)]}
        self.tracker.update(history)
        self.tracker.select("SQUAT")
        self.tracker.update(history)
        self.assertEqual(self.tracker.selected_exercise, "SQUAT")
        self.assertEqual(len(self.tracker.progression), 1)

    def test_selection_reset_when_exercise_disappears(self) -> None:
        self.tracker.update({"SQUAT": [_log(self.d1, 100, 5)]})
        self.tracker.update({"PLANK": [_log(self.d1, 1, 60)]})
        self.assertEqual(self.tracker.selected_exercise, "PLANK")
        self.tracker.update({})
        self.assertEqual(self.tracker.selected_exercise, "")
        self.assertEqual(self.tracker.progression, [])
        self.assertIsNone(self.tracker.report.summary)


if __name__ == "__main__":
    unittest.main()
