"""Domain error codes for the lesson catalog and order admission.

Every rejection carries an ``ErrorCode`` plus the offending field or
lesson id, so the HTTP layer can render a message the client can act
on without parsing text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_NAME = "INVALID_NAME"
    INVALID_PHONE = "INVALID_PHONE"
    INVALID_ITEMS = "INVALID_ITEMS"
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_TYPE = "INVALID_TYPE"
    UNKNOWN_LESSON = "UNKNOWN_LESSON"
    INSUFFICIENT_SPACE = "INSUFFICIENT_SPACE"
    NOT_FOUND = "NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_NOT_INITIALIZED = "STORE_NOT_INITIALIZED"


@dataclass(eq=False)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str
    field: Optional[str] = None
    lesson_id: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict:
        data = {"error": self.code.value, "message": self.message}
        if self.field is not None:
            data["field"] = self.field
        if self.lesson_id is not None:
            data["lesson_id"] = self.lesson_id
        return data


class InvalidNameError(DomainError):
    """Raised when an order name is empty or contains disallowed characters."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_NAME,
            message="name must contain letters and spaces only",
            field="name",
        )


class InvalidPhoneError(DomainError):
    """Raised when an order phone number is empty or not all digits."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PHONE,
            message="phone must contain digits only",
            field="phone",
        )


class InvalidItemsError(DomainError):
    """Raised when the order items list is malformed."""

    def __init__(self, message: str, index: Optional[int] = None) -> None:
        field = "items" if index is None else f"items[{index}]"
        super().__init__(code=ErrorCode.INVALID_ITEMS, message=message, field=field)
        self.index = index


class InvalidFieldError(DomainError):
    """Raised when a lesson update names a field outside the allow-list."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_FIELD,
            message=f'Field "{field}" not allowed',
            field=field,
        )


class InvalidTypeError(DomainError):
    """Raised when a field value has the wrong type or range."""

    def __init__(self, field: str, expected: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TYPE,
            message=f"{field} must be {expected}",
            field=field,
        )


class UnknownLessonError(DomainError):
    """Raised when an order references a lesson that does not exist."""

    def __init__(self, lesson_id: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_LESSON,
            message=f'Lesson "{lesson_id}" does not exist',
            lesson_id=lesson_id,
        )


class InsufficientSpaceError(DomainError):
    """Raised when a lesson has fewer seats left than an order requests."""

    def __init__(self, lesson_id: str, requested: int, available: Optional[int] = None) -> None:
        message = f'Not enough space in lesson "{lesson_id}" for {requested} seat(s)'
        if available is not None:
            message += f" ({available} left)"
        super().__init__(
            code=ErrorCode.INSUFFICIENT_SPACE,
            message=message,
            lesson_id=lesson_id,
        )
        self.requested = requested
        self.available = available


class NotFoundError(DomainError):
    """Raised by the HTTP layer when a lesson lookup misses."""

    def __init__(self, lesson_id: str) -> None:
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            message="Lesson not found",
            lesson_id=lesson_id,
        )


class StoreUnavailableError(DomainError):
    """Raised when the backing store cannot be reached or fails."""

    def __init__(self, message: str = "Store unavailable", code: ErrorCode = ErrorCode.STORE_UNAVAILABLE) -> None:
        super().__init__(code=code, message=message)


class StoreNotInitializedError(StoreUnavailableError):
    """Raised when the database handle is used before ``init()``."""

    def __init__(self) -> None:
        super().__init__(
            message="Database not initialised. Call init() first.",
            code=ErrorCode.STORE_NOT_INITIALIZED,
        )
