from __future__ import annotations
import logging

from config import APP_VERSION, YamlConfig
from db import (
    CustomExerciseRepository,
    KeyValueRepository,
    ProfileRepository,
    WorkoutHistoryRepository,
)
from bmi_service import BMICalculator
from profile_service import ProfileService
from settings_schema import SettingsSchema, validate_settings
from stats_service import ProgressTracker, StatisticsService
from workout_service import WorkoutService

LOGGER = logging.getLogger(__name__)

_PACKAGE_LOGGERS = (
    "db",
    "workout_service",
    "stats_service",
    "profile_service",
    "bmi_service",
    __name__,
)


class FitnessTracker:
    """Wire storage and services together from a settings file."""

    def __init__(
        self,
        yaml_path: str = "settings.yaml",
        db_path: str | None = None,
        start_tips: bool = False,
    ) -> None:
        self.config = YamlConfig(yaml_path)
        self.settings: SettingsSchema = validate_settings(self.config.load())
        self._apply_log_level()
        self.store = KeyValueRepository(db_path or self.settings.db_path)
        self.workouts = WorkoutService(
            WorkoutHistoryRepository(self.store),
            CustomExerciseRepository(self.store),
            seed_mock_history=self.settings.seed_mock_history,
        )
        self.statistics = StatisticsService()
        self.progress = ProgressTracker(self.statistics)
        self.profile = ProfileService(
            ProfileRepository(self.store),
            tip_interval=self.settings.tip_interval,
            confirmation_delay=self.settings.save_confirmation_delay,
            start_tips=start_tips,
        )
        self.calculator = BMICalculator(
            weight_unit=self.settings.weight_unit,
            height_unit=self.settings.height_unit,
        )
        self._unsubscribe = self.workouts.subscribe(self.refresh_progress)
        self.refresh_progress()
        LOGGER.info("roobench %s ready", APP_VERSION)

    def _apply_log_level(self) -> None:
        level = getattr(logging, self.settings.log_level)
        for name in _PACKAGE_LOGGERS:
            logging.getLogger(name).setLevel(level)

    def refresh_progress(self) -> None:
        self.progress.update(self.workouts.snapshot())

    def save_settings(self, **changes) -> SettingsSchema:
        """Validate ``changes`` against the schema and write them to YAML."""
        data = self.settings.model_dump()
        data.update(changes)
        self.settings = validate_settings(data)
        self.config.save(self.settings.model_dump())
        self._apply_log_level()
        return self.settings

    def close(self) -> None:
        self._unsubscribe()
        self.profile.close()
