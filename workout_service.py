from __future__ import annotations
import datetime
import logging
from typing import Callable, List, Optional

from db import CustomExerciseRepository, WorkoutHistoryRepository
from models import Exercise, WorkoutHistory, WorkoutLog

LOGGER = logging.getLogger(__name__)

BASE_EXERCISES = [
    "Bench Press",
    "Barbell Squat",
    "Deadlift",
    "Overhead Press",
    "Pull-Ups",
    "Bent-over Row",
    "Lat Pulldown",
    "Dumbbell Curl",
    "Triceps Extension",
    "Plank",
    "Push-Ups",
]


def base_exercises() -> List[Exercise]:
    """Return a fresh copy of the built-in exercise list."""
    return [Exercise(name=n.upper()) for n in BASE_EXERCISES]


def generate_mock_history(today: datetime.datetime | None = None) -> WorkoutHistory:
    """Return a small illustrative history so charts are not empty on first run."""
    now = today or datetime.datetime.now()
    day = datetime.timedelta(days=1)
    return {
        "BENCH PRESS": [
            WorkoutLog(date=now - day * 30, weight=90, reps=5),
            WorkoutLog(date=now - day * 15, weight=95, reps=5),
            WorkoutLog(date=now - day * 2, weight=100, reps=5),
        ],
        "BARBELL SQUAT": [
            WorkoutLog(date=now - day * 25, weight=110, reps=8),
            WorkoutLog(date=now - day * 10, weight=115, reps=8),
            WorkoutLog(date=now - day * 1, weight=120, reps=8),
        ],
    }


class WorkoutService:
    """Own the exercise registry and per-exercise workout history."""

    def __init__(
        self,
        history_repo: WorkoutHistoryRepository,
        exercise_repo: CustomExerciseRepository,
        seed_mock_history: bool = False,
    ) -> None:
        self.history_repo = history_repo
        self.exercise_repo = exercise_repo
        self.seed_mock_history = seed_mock_history
        self.exercises: List[Exercise] = []
        self.history: WorkoutHistory = {}
        self._subscribers: list[Callable[[], None]] = []
        self.load()

    def load(self) -> None:
        """Load exercises and history from storage, seeding on first run."""
        merged = base_exercises() + self.exercise_repo.fetch_all()
        self.exercises = sorted(merged, key=lambda e: e.name)
        history = self.history_repo.fetch()
        if history is None:
            history = generate_mock_history() if self.seed_mock_history else {}
            LOGGER.info("no stored workout history, starting with %d exercises", len(history))
        for logs in history.values():
            logs.sort(key=lambda log: log.date)
        self.history = history

    def _save(self) -> None:
        self.exercise_repo.save_all(self.exercises)
        self.history_repo.save(self.history)

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` for change notifications and return an unsubscriber."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback()

    def snapshot(self) -> WorkoutHistory:
        """Return a deep copy of the history for read-only consumers."""
        return {
            name: [log.model_copy() for log in logs]
            for name, logs in self.history.items()
        }

    def add_log(
        self,
        exercise_name: str,
        date: datetime.datetime,
        weight: float,
        reps: int,
    ) -> Optional[WorkoutLog]:
        """Append a log to ``exercise_name`` and keep its history date-sorted.

        Returns the new log, or ``None`` when ``weight`` is not positive or
        ``reps`` is negative.
        """
        if weight <= 0 or reps < 0:
            LOGGER.warning(
                "ignoring log for %s with weight=%s reps=%s", exercise_name, weight, reps
            )
            return None
        if date.tzinfo is not None:
            # history holds naive local times
            date = date.astimezone().replace(tzinfo=None)
        log = WorkoutLog(date=date, weight=weight, reps=int(reps))
        logs = self.history.setdefault(exercise_name, [])
        logs.append(log)
        logs.sort(key=lambda item: item.date)
        self._save()
        LOGGER.debug("logged %s for %s", log.result_string, exercise_name)
        self._notify()
        return log

    def latest_log(self, exercise_name: str) -> Optional[WorkoutLog]:
        """Return the most recent log for ``exercise_name``."""
        logs = self.history.get(exercise_name)
        if not logs:
            return None
        return sorted(logs, key=lambda log: log.date, reverse=True)[0]

    def add_custom_exercise(self, name: str) -> bool:
        """Register a custom exercise; return ``False`` if the name is taken."""
        if not name.strip():
            return False
        lowered = name.lower()
        if any(e.name.lower() == lowered for e in self.exercises):
            LOGGER.debug("exercise %s already exists", name)
            return False
        self.exercises.append(Exercise(name=name.upper(), is_custom=True))
        self.exercises.sort(key=lambda e: e.name)
        self._save()
        self._notify()
        return True

    def exercise_names(self) -> List[str]:
        return [e.name for e in self.exercises]
