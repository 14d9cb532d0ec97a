from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

class ErrorKind(str, Enum):
    MISSING_FIELDS = "missing_fields"
    NOT_FOUND = "not_found"
    INVALID_RATING = "invalid_rating"
    INVALID_STATE = "invalid_state"
    INVALID_FIELD = "invalid_field"

class TrackerError(RuntimeError):
    """Base class for every recoverable ticket operation failure.

    A failed operation leaves the store exactly as it was, so callers can
    surface ``user_message`` and carry on.
    """

    kind: ClassVar[ErrorKind | None] = None
    user_message: str = "An unexpected error occurred."

    def __str__(self) -> str:
        return self.user_message

@dataclass(slots=True)
class ValidationError(TrackerError):
    user_message: str = "The provided input is not valid."

@dataclass(slots=True)
class MissingFieldsError(ValidationError):
    kind: ClassVar[ErrorKind] = ErrorKind.MISSING_FIELDS
    user_message: str = "Please fill all fields."
    fields: tuple[str, ...] = ()

@dataclass(slots=True)
class InvalidRatingError(ValidationError):
    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_RATING
    user_message: str = "Rating must be a whole number between 1 and 5."
    rating: Any = None

@dataclass(slots=True)
class InvalidFieldError(ValidationError):
    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_FIELD
    user_message: str = "The provided field value is not allowed."
    field: str | None = None
    value: Any = None

@dataclass(slots=True)
class TicketNotFoundError(TrackerError):
    kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND
    user_message: str = "The requested ticket could not be found."
    ticket_id: str | None = None

@dataclass(slots=True)
class InvalidStateError(TrackerError):
    kind: ClassVar[ErrorKind] = ErrorKind.INVALID_STATE
    user_message: str = "The ticket is not in a valid state for this action."
    ticket_id: str | None = None
    status: str | None = None
