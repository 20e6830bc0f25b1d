"""MongoDB-backed storage for users and their exercises."""

from datetime import date
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from models.database import (
    get_database,
    USERS_COLLECTION,
    EXERCISES_COLLECTION,
)
from utils.exceptions import StorageError
from utils.helpers import to_storage_datetime
from utils.logger import setup_logger

logger = setup_logger(__name__)


def to_object_id(value: Any) -> ObjectId:
    """Convert a path identifier to an ObjectId, as a StorageError on failure."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise StorageError(f"Cast to ObjectId failed for value {value!r}: {e}")


def build_exercise_filter(
    user_id: ObjectId,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
) -> Dict[str, Any]:
    """Build the exercises query for a user and an inclusive date range."""
    query: Dict[str, Any] = {"user_id": user_id}
    if date_from or date_to:
        query["date"] = {}
        if date_from:
            query["date"]["$gte"] = to_storage_datetime(date_from)
        if date_to:
            query["date"]["$lte"] = to_storage_datetime(date_to)
    return query


class TrackerStore:
    """Reads and writes the `users` and `exercises` collections.

    Driver failures are re-raised as StorageError with the driver's message.
    """

    def __init__(self, database):
        self.users = database[USERS_COLLECTION]
        self.exercises = database[EXERCISES_COLLECTION]

    async def create_user(self, username: str) -> Dict[str, Any]:
        document = {"username": username}
        try:
            result = await self.users.insert_one(document)
        except PyMongoError as e:
            raise StorageError(str(e))
        document["_id"] = result.inserted_id
        logger.info(f"Created user {result.inserted_id}")
        return document

    async def list_users(self) -> List[Dict[str, Any]]:
        try:
            cursor = self.users.find({}, {"username": 1})
            return await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StorageError(str(e))

    async def get_user(self, user_id: Any) -> Optional[Dict[str, Any]]:
        object_id = to_object_id(user_id)
        try:
            return await self.users.find_one({"_id": object_id})
        except PyMongoError as e:
            raise StorageError(str(e))

    async def add_exercise(
        self,
        user_id: ObjectId,
        description: str,
        duration: int,
        exercise_date: date,
    ) -> Dict[str, Any]:
        document = {
            "user_id": user_id,
            "description": description,
            "duration": duration,
            "date": to_storage_datetime(exercise_date),
        }
        try:
            result = await self.exercises.insert_one(document)
        except PyMongoError as e:
            raise StorageError(str(e))
        document["_id"] = result.inserted_id
        logger.info(f"Logged exercise {result.inserted_id} for user {user_id}")
        return document

    async def get_exercises(
        self,
        user_id: ObjectId,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        query = build_exercise_filter(user_id, date_from, date_to)
        try:
            cursor = self.exercises.find(
                query, {"description": 1, "duration": 1, "date": 1}
            )
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=None)
        except PyMongoError as e:
            raise StorageError(str(e))


def get_tracker_store() -> TrackerStore:
    """FastAPI dependency returning a store bound to the shared connection."""
    try:
        return TrackerStore(get_database())
    except RuntimeError as e:
        raise StorageError(str(e))
