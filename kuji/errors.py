"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class ConflictError(AppError):
    """Request conflicts with the current session state."""

    def __init__(self, message: str = "Conflict", details: Any | None = None) -> None:
        super().__init__(code="conflict", message=message, status_code=409, details=details)


class ConfigurationError(AppError):
    """Declared prize counts do not fit in the remaining tickets (or are malformed)."""

    def __init__(self, message: str = "Invalid lottery configuration", details: Any | None = None) -> None:
        super().__init__(code="configuration_error", message=message, status_code=400, details=details)


class DrawUnderflowError(AppError):
    """More tickets requested than are left in the pool."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            code="draw_underflow",
            message=f"Cannot draw {requested} ticket(s); only {available} left",
            status_code=409,
            details={"requested": requested, "available": available},
        )


class ReentrantDrawError(AppError):
    """A draw was requested while the previous one is still being revealed."""

    def __init__(self, message: str = "A draw is already in progress; commit it first") -> None:
        super().__init__(code="draw_in_progress", message=message, status_code=409)
