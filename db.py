import sqlite3
import logging
from contextlib import contextmanager
from typing import List, Tuple, Optional, Callable, TypeVar

from pydantic import ValidationError

from models import (
    Exercise,
    UserProfile,
    WorkoutHistory,
    dump_exercises,
    dump_history,
    dump_profile,
    load_exercises,
    load_history,
    load_profile,
)

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class Database:
    """Provides SQLite connection management and schema initialization."""

    _SCHEMA = """CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value BLOB NOT NULL
        );"""

    def __init__(self, db_path: str = "roobench.db") -> None:
        self._db_path = db_path
        self._ensure_schema()

    @contextmanager
    def _connection(self):
        connection = sqlite3.connect(self._db_path)
        try:
            yield connection
            connection.commit()
        finally:
            connection.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            conn.execute(self._SCHEMA)


class BaseRepository(Database):
    """Base repository providing helper methods."""

    def execute(self, query: str, params: Tuple = ()) -> int:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid

    def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.fetchall()


class KeyValueRepository(BaseRepository):
    """Whole-value blob storage addressed by string keys."""

    def get(self, key: str) -> bytes | None:
        rows = self.fetch_all("SELECT value FROM kv_store WHERE key = ?;", (key,))
        return bytes(rows[0][0]) if rows else None

    def set(self, key: str, data: bytes) -> None:
        self.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value;",
            (key, sqlite3.Binary(data)),
        )


class _RecordRepository:
    """Serializes one value under a fixed key of a ``KeyValueRepository``."""

    key: str = ""

    def __init__(self, store: KeyValueRepository) -> None:
        self.store = store

    def _load(self, decode: Callable[[bytes], T], default: Callable[[], T]) -> Optional[T]:
        data = self.store.get(self.key)
        if data is None:
            return None
        try:
            return decode(data)
        except (ValidationError, ValueError) as exc:
            LOGGER.warning("could not decode %s, using default: %s", self.key, exc)
            return default()


class CustomExerciseRepository(_RecordRepository):
    """Repository for user-defined exercises."""

    key = "customExercises"

    def fetch_all(self) -> List[Exercise]:
        return self._load(load_exercises, list) or []

    def save_all(self, exercises: List[Exercise]) -> None:
        self.store.set(self.key, dump_exercises([e for e in exercises if e.is_custom]))


class WorkoutHistoryRepository(_RecordRepository):
    """Repository for the per-exercise workout history map."""

    key = "workoutHistory"

    def fetch(self) -> Optional[WorkoutHistory]:
        """Return the stored history or ``None`` when absent or undecodable."""
        return self._load(load_history, lambda: None)

    def save(self, history: WorkoutHistory) -> None:
        self.store.set(self.key, dump_history(history))


class ProfileRepository(_RecordRepository):
    """Repository for the single user profile record."""

    key = "userProfileData"

    def fetch(self) -> Optional[UserProfile]:
        return self._load(load_profile, UserProfile)

    def save(self, profile: UserProfile) -> None:
        self.store.set(self.key, dump_profile(profile))
