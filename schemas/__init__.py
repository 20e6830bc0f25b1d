"""Request and response schemas."""

from schemas.user import UserCreate, UserOut
from schemas.exercise import (
    ExerciseCreate,
    ExerciseLog,
    ExerciseOut,
    LogEntry,
    LogQuery,
)

__all__ = [
    "UserCreate",
    "UserOut",
    "ExerciseCreate",
    "ExerciseLog",
    "ExerciseOut",
    "LogEntry",
    "LogQuery",
]
