"""Error types surfaced by the API as `{"error": ...}` bodies."""


class TrackerError(Exception):
    """Base error carrying the HTTP status it is reported with."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Missing or malformed input field."""

    status_code = 400


class NotFoundError(TrackerError):
    """Referenced user does not exist.

    Reported as 400 rather than 404 so existing clients keep working.
    """

    status_code = 400


class StorageError(TrackerError):
    """Failure inside the persistence layer."""

    status_code = 500
