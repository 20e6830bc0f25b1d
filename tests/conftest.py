"""Shared fixtures: the app wired to an in-memory store."""

from datetime import date
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from api.main import app
from services.tracker_store import get_tracker_store, to_object_id
from utils.helpers import to_storage_datetime


class InMemoryTrackerStore:
    """Keeps users and exercises in lists, mirroring TrackerStore's interface."""

    def __init__(self):
        self.users: List[Dict[str, Any]] = []
        self.exercises: List[Dict[str, Any]] = []

    async def create_user(self, username: str) -> Dict[str, Any]:
        user = {"_id": ObjectId(), "username": username}
        self.users.append(user)
        return dict(user)

    async def list_users(self) -> List[Dict[str, Any]]:
        return [dict(u) for u in self.users]

    async def get_user(self, user_id: Any) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(user_id)
        for user in self.users:
            if user["_id"] == object_id:
                return dict(user)
        return None

    async def add_exercise(self, user_id, description, duration, exercise_date):
        exercise = {
            "_id": ObjectId(),
            "user_id": user_id,
            "description": description,
            "duration": duration,
            "date": to_storage_datetime(exercise_date),
        }
        self.exercises.append(exercise)
        return dict(exercise)

    async def get_exercises(
        self,
        user_id: ObjectId,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        found = []
        for exercise in self.exercises:
            if exercise["user_id"] != user_id:
                continue
            if date_from and exercise["date"] < to_storage_datetime(date_from):
                continue
            if date_to and exercise["date"] > to_storage_datetime(date_to):
                continue
            found.append(dict(exercise))
        if limit:
            found = found[:limit]
        return found


@pytest.fixture
def store():
    return InMemoryTrackerStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_tracker_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(client):
    response = client.post("/api/users", json={"username": "fcc_test"})
    assert response.status_code == 200
    return response.json()
