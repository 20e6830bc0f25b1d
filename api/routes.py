"""Exercise tracker REST routes."""

from datetime import date
from typing import Any, Dict, List, Type, TypeVar

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from schemas import (
    ExerciseCreate,
    ExerciseLog,
    ExerciseOut,
    LogEntry,
    LogQuery,
    UserCreate,
    UserOut,
)
from services.tracker_store import TrackerStore, get_tracker_store
from utils.exceptions import NotFoundError, StorageError, TrackerError, ValidationError
from utils.helpers import format_date, serialize_id
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/users", tags=["exercise tracker"])

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


# ---------------------------
# Helpers
# ---------------------------

def validation_message(exc: PydanticValidationError) -> str:
    """Turn the first pydantic error into a short client-facing message."""
    error = exc.errors()[0]
    if error["type"] == "missing":
        field = str(error["loc"][-1]) if error["loc"] else "Field"
        return f"{field.capitalize()} required"
    ctx_error = error.get("ctx", {}).get("error")
    if ctx_error is not None:
        return str(ctx_error)
    return error["msg"]


def parse_model(model: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(validation_message(exc))


async def read_payload(request: Request) -> Dict[str, Any]:
    """Read a JSON or form encoded body into a dict."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    body = await request.body()
    if not body:
        return {}
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("Malformed request body")
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be an object")
    return payload


async def find_user_or_fail(store: TrackerStore, user_id: str) -> Dict[str, Any]:
    user = await store.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


# ---------------------------
# Users
# ---------------------------

@router.post("", response_model=UserOut)
async def create_user(request: Request, store: TrackerStore = Depends(get_tracker_store)):
    """Create a new user."""
    try:
        payload = parse_model(UserCreate, await read_payload(request))
        user = await store.create_user(payload.username)
        return UserOut(**serialize_id(user))
    except TrackerError:
        raise
    except Exception as e:
        logger.error(f"Error creating user: {e}", exc_info=True)
        raise StorageError(str(e))


@router.get("", response_model=List[UserOut])
async def list_users(store: TrackerStore = Depends(get_tracker_store)):
    """List every user."""
    try:
        users = await store.list_users()
        return [UserOut(**serialize_id(u)) for u in users]
    except TrackerError:
        raise
    except Exception as e:
        logger.error(f"Error listing users: {e}", exc_info=True)
        raise StorageError(str(e))


# ---------------------------
# Exercises
# ---------------------------

@router.post("/{user_id}/exercises", response_model=ExerciseOut)
async def add_exercise(
    user_id: str,
    request: Request,
    store: TrackerStore = Depends(get_tracker_store),
):
    """
    Log an exercise for a user.
    The date defaults to today when the body does not carry one.
    """
    try:
        user = await find_user_or_fail(store, user_id)
        payload = parse_model(ExerciseCreate, await read_payload(request))

        exercise = await store.add_exercise(
            user_id=user["_id"],
            description=payload.description,
            duration=payload.duration,
            exercise_date=payload.date or date.today(),
        )

        return ExerciseOut(
            id=str(user["_id"]),
            username=user["username"],
            date=format_date(exercise["date"]),
            duration=exercise["duration"],
            description=exercise["description"],
        )
    except TrackerError:
        raise
    except Exception as e:
        logger.error(f"Error adding exercise for user {user_id}: {e}", exc_info=True)
        raise StorageError(str(e))


@router.get("/{user_id}/logs", response_model=ExerciseLog)
async def get_exercise_log(
    user_id: str,
    request: Request,
    store: TrackerStore = Depends(get_tracker_store),
):
    """
    Return a user's exercise log.
    `from` and `to` bound the dates inclusively, `limit` caps the entry count.
    """
    try:
        user = await find_user_or_fail(store, user_id)
        query = parse_model(LogQuery, dict(request.query_params))

        exercises = await store.get_exercises(
            user["_id"],
            date_from=query.date_from,
            date_to=query.date_to,
            limit=query.limit,
        )

        log = [
            LogEntry(
                description=e["description"],
                duration=e["duration"],
                date=format_date(e["date"]),
            )
            for e in exercises
        ]
        return ExerciseLog(
            id=str(user["_id"]),
            username=user["username"],
            count=len(log),
            log=log,
        )
    except TrackerError:
        raise
    except Exception as e:
        logger.error(f"Error fetching log for user {user_id}: {e}", exc_info=True)
        raise StorageError(str(e))
