from __future__ import annotations

import datetime
import uuid
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    """Base for persisted records; JSON uses camelCase keys and base64 bytes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )


class Exercise(_Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    name: str
    is_custom: bool = False


class WorkoutLog(_Record):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    date: datetime.datetime
    weight: float = Field(gt=0)
    reps: int = Field(ge=0)

    @property
    def volume(self) -> float:
        return self.weight * self.reps

    @property
    def result_string(self) -> str:
        return f"{int(self.weight)} KG × {self.reps} REPS"

    @property
    def date_string(self) -> str:
        return f"{self.date.strftime('%b')} {self.date.day}".upper()


class UserProfile(_Record):
    height: str = ""
    weight: str = ""
    age: str = ""
    profile_image: Optional[bytes] = None


WorkoutHistory = Dict[str, List[WorkoutLog]]


class SummaryStats(BaseModel):
    total_workouts: int
    total_volume: float
    heaviest_lift: Optional[WorkoutLog] = None


class PersonalRecord(BaseModel):
    exercise_name: str
    record_log: WorkoutLog


class MonthlyVolume(BaseModel):
    month_label: str
    sort_key: datetime.date
    total_volume: float


class ProgressReport(BaseModel):
    """All derived views computed from one history snapshot."""

    summary: Optional[SummaryStats] = None
    personal_records: List[PersonalRecord] = Field(default_factory=list)
    monthly_volume: List[MonthlyVolume] = Field(default_factory=list)


_history_adapter = TypeAdapter(WorkoutHistory)
_exercise_list_adapter = TypeAdapter(List[Exercise])


def dump_history(history: WorkoutHistory) -> bytes:
    return _history_adapter.dump_json(history, by_alias=True)


def load_history(data: bytes) -> WorkoutHistory:
    return _history_adapter.validate_json(data)


def dump_exercises(exercises: List[Exercise]) -> bytes:
    return _exercise_list_adapter.dump_json(exercises, by_alias=True)


def load_exercises(data: bytes) -> List[Exercise]:
    return _exercise_list_adapter.validate_json(data)


def dump_profile(profile: UserProfile) -> bytes:
    return profile.model_dump_json(by_alias=True).encode("utf-8")


def load_profile(data: bytes) -> UserProfile:
    return UserProfile.model_validate_json(data)
