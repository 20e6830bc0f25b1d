"""Exercise collection schemas."""

import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utils.helpers import coerce_text, parse_date, parse_leading_int


def _optional_date(value):
    if value is None or value == "":
        return None
    try:
        return parse_date(value)
    except ValueError:
        raise ValueError("Invalid date")


class ExerciseCreate(BaseModel):
    """Body of `POST /api/users/{_id}/exercises`."""
    description: str = Field(..., description="What was done")
    duration: int = Field(..., description="Duration in minutes")
    date: Optional[datetime.date] = Field(None, description="Defaults to today")

    @field_validator("description", mode="before")
    @classmethod
    def require_description(cls, value):
        if value is None or value == "":
            raise ValueError("Description required")
        return coerce_text(value)

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, value):
        if value is None or value == "":
            raise ValueError("Duration required")
        duration = parse_leading_int(value)
        if duration is None:
            raise ValueError("Invalid duration")
        return duration

    @field_validator("date", mode="before")
    @classmethod
    def parse_exercise_date(cls, value):
        return _optional_date(value)


class LogQuery(BaseModel):
    """Query string of `GET /api/users/{_id}/logs`."""
    model_config = ConfigDict(populate_by_name=True)

    date_from: Optional[datetime.date] = Field(None, alias="from", description="Inclusive lower bound")
    date_to: Optional[datetime.date] = Field(None, alias="to", description="Inclusive upper bound")
    limit: Optional[int] = Field(None, description="Maximum number of entries")

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def parse_bound(cls, value):
        return _optional_date(value)

    @field_validator("limit", mode="before")
    @classmethod
    def parse_limit(cls, value):
        if value is None or value == "":
            return None
        limit = parse_leading_int(value)
        if limit is None or limit < 1:
            raise ValueError("Invalid limit")
        return limit


class ExerciseOut(BaseModel):
    """Response of `POST /api/users/{_id}/exercises`."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="Owning user identifier")
    username: str
    date: str = Field(..., description="Date rendered like 'Sun Jan 15 2023'")
    duration: int
    description: str


class LogEntry(BaseModel):
    """One exercise in a log."""
    description: str
    duration: int
    date: str


class ExerciseLog(BaseModel):
    """Response of `GET /api/users/{_id}/logs`."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="User identifier")
    username: str
    count: int = Field(..., description="Number of entries in `log`")
    log: List[LogEntry] = Field(default_factory=list)
