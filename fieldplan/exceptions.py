"""
Domain exceptions for the scheduling core.

Every expected failure of a ScheduleStore operation is one of the typed
errors below; the API layer maps them to HTTP responses. Anything else
(driver errors, connection loss) propagates untouched as an infrastructure
failure.
"""

from enum import Enum

DetailValue = str | int | bool | None


class ErrorType(str, Enum):
    """Error type enumeration for discriminated unions."""

    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"


class DomainError(Exception):
    """Base class for all domain errors with type discrimination."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        details: dict[str, DetailValue] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.details = details or {}

    def to_dict(self) -> dict[str, str | dict[str, DetailValue]]:
        """Convert error to dictionary for API responses."""
        return {
            "type": self.error_type.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(DomainError):
    """Raised when schedule input breaks a validation rule."""

    def __init__(
        self,
        field_name: str,
        value: DetailValue | float,
        message: str,
        details: dict[str, DetailValue] | None = None,
    ) -> None:
        self.field_name = field_name
        self.value = value

        details = details or {}
        details.update(
            {
                "field": field_name,
                "value": str(value) if value is not None else None,
            }
        )
        super().__init__(
            f"Validation failed for field '{field_name}': {message}",
            ErrorType.VALIDATION,
            details,
        )


class ConflictError(DomainError):
    """Raised when a schedule already occupies the owner/year/month/week slot."""

    def __init__(self, owner_id: int, year: int, month: int, week_number: int) -> None:
        details: dict[str, DetailValue] = {
            "owner_id": owner_id,
            "year": year,
            "month": month,
            "week_number": week_number,
        }
        super().__init__(
            "A schedule for this owner, week and month already exists",
            ErrorType.CONFLICT,
            details,
        )
        self.owner_id = owner_id
        self.year = year
        self.month = month
        self.week_number = week_number


class NotFoundError(DomainError):
    """Raised when a schedule id does not exist."""

    def __init__(self, schedule_id: int) -> None:
        super().__init__(
            f"Schedule not found: {schedule_id}",
            ErrorType.NOT_FOUND,
            {"schedule_id": schedule_id},
        )
        self.schedule_id = schedule_id


class UnauthorizedError(DomainError):
    """Raised when a caller that is neither owner nor administrator mutates a schedule."""

    def __init__(self, schedule_id: int, caller_id: int) -> None:
        super().__init__(
            f"Caller {caller_id} may not modify schedule {schedule_id}",
            ErrorType.UNAUTHORIZED,
            {"schedule_id": schedule_id, "caller_id": caller_id},
        )
        self.schedule_id = schedule_id
        self.caller_id = caller_id
