from __future__ import annotations
import datetime
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from algorithms import MathTools
from models import (
    MonthlyVolume,
    PersonalRecord,
    ProgressReport,
    SummaryStats,
    WorkoutHistory,
    WorkoutLog,
)

LOGGER = logging.getLogger(__name__)


class StatisticsService:
    """Compute derived progress statistics from a workout history snapshot.

    Every method is pure. Logs are visited exercise by exercise in ascending
    name order, then in stored order, so ties on weight always resolve to the
    first log in that sequence.
    """

    @staticmethod
    def _iter_logs(history: WorkoutHistory) -> Iterator[Tuple[str, WorkoutLog]]:
        for name in sorted(history):
            for log in history[name]:
                yield name, log

    @staticmethod
    def _local_date(ts: datetime.datetime) -> datetime.date:
        """Return the calendar day of ``ts`` on the local clock."""
        if ts.tzinfo is not None:
            ts = ts.astimezone()
        return ts.date()

    @staticmethod
    def _heaviest(logs: List[WorkoutLog]) -> Optional[WorkoutLog]:
        best: Optional[WorkoutLog] = None
        for log in logs:
            if best is None or log.weight > best.weight:
                best = log
        return best

    def summary(self, history: WorkoutHistory) -> Optional[SummaryStats]:
        """Return totals across all exercises or ``None`` without data."""
        logs = [log for _name, log in self._iter_logs(history)]
        if not logs:
            return None
        days = {self._local_date(log.date) for log in logs}
        volume = MathTools.volume((log.reps, log.weight) for log in logs)
        return SummaryStats(
            total_workouts=len(days),
            total_volume=volume,
            heaviest_lift=self._heaviest(logs),
        )

    def personal_records(self, history: WorkoutHistory) -> List[PersonalRecord]:
        """Return the heaviest log for each exercise sorted by exercise name."""
        records: List[PersonalRecord] = []
        for name in sorted(history):
            best = self._heaviest(history[name])
            if best is not None:
                records.append(PersonalRecord(exercise_name=name, record_log=best))
        return records

    def monthly_volume(self, history: WorkoutHistory) -> List[MonthlyVolume]:
        """Return total volume per calendar month in chronological order."""
        by_month: Dict[datetime.date, float] = {}
        for _name, log in self._iter_logs(history):
            day = self._local_date(log.date)
            month = day.replace(day=1)
            by_month[month] = by_month.get(month, 0.0) + MathTools.set_volume(
                log.weight, log.reps
            )
        return [
            MonthlyVolume(
                month_label=month.strftime("%b"),
                sort_key=month,
                total_volume=by_month[month],
            )
            for month in sorted(by_month)
        ]

    def progression(self, history: WorkoutHistory, exercise: str) -> List[WorkoutLog]:
        """Return the logs of ``exercise`` in ascending date order."""
        if not exercise:
            return []
        return sorted(history.get(exercise, []), key=lambda log: log.date)

    def recompute(self, history: WorkoutHistory) -> ProgressReport:
        """Return every derived view for ``history``."""
        report = ProgressReport(
            summary=self.summary(history),
            personal_records=self.personal_records(history),
            monthly_volume=self.monthly_volume(history),
        )
        LOGGER.debug(
            "recomputed stats for %d exercises, %d months",
            len(history),
            len(report.monthly_volume),
        )
        return report


class ProgressTracker:
    """Hold the progress screen state: latest report and selected exercise."""

    def __init__(self, statistics: StatisticsService | None = None) -> None:
        self.statistics = statistics or StatisticsService()
        self.report = ProgressReport()
        self.exercises_with_history: List[str] = []
        self.selected_exercise = ""
        self.progression: List[WorkoutLog] = []
        self._history: WorkoutHistory = {}

    def update(self, history: WorkoutHistory) -> ProgressReport:
        """Recompute everything from a fresh ``history`` snapshot."""
        self._history = history
        self.exercises_with_history = sorted(history)
        if self.selected_exercise not in self.exercises_with_history:
            self.selected_exercise = (
                self.exercises_with_history[0] if self.exercises_with_history else ""
            )
        self.report = self.statistics.recompute(history)
        self._refresh_progression()
        return self.report

    def select(self, exercise: str) -> List[WorkoutLog]:
        """Change the selected exercise and return its progression series."""
        self.selected_exercise = exercise
        self._refresh_progression()
        return self.progression

    def _refresh_progression(self) -> None:
        self.progression = self.statistics.progression(
            self._history, self.selected_exercise
        )
