"""Custom exceptions for taskgraph.

Provides a hierarchy of exceptions with stable error codes and
structured error payloads for calling layers.
"""

from typing import Any


class TaskGraphError(Exception):
    """Base exception for all taskgraph errors."""

    error_code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize exception with optional details.

        Args:
            message: Human-readable error message.
            details: Additional error details for debugging.
            cause: Original exception that caused this error.
        """
        self.message = message or self.message
        self.details = details or {}
        self.cause = cause
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for error responses."""
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# Validation errors
class ValidationError(TaskGraphError):
    """Input validation failed."""

    error_code = "VALIDATION_ERROR"
    message = "Input validation failed"


class InvalidEdgeError(ValidationError):
    """Invalid dependency edge data."""

    error_code = "INVALID_EDGE"
    message = "Invalid dependency edge"


class InvalidTaskError(ValidationError):
    """Invalid task data."""

    error_code = "INVALID_TASK"
    message = "Invalid task data"


# Lookup errors
class NotFoundError(TaskGraphError):
    """Resource not found."""

    error_code = "NOT_FOUND"
    message = "Resource not found"


class TaskNotFoundError(NotFoundError):
    """Task not found in the analysed snapshot."""

    error_code = "TASK_NOT_FOUND"
    message = "Task not found"


# Business rule errors
class BusinessLogicError(TaskGraphError):
    """Business logic validation failed."""

    error_code = "BUSINESS_LOGIC_ERROR"
    message = "Business logic validation failed"


class CircularDependencyError(BusinessLogicError):
    """Circular dependency detected."""

    error_code = "CIRCULAR_DEPENDENCY"
    message = "Circular dependency detected"
