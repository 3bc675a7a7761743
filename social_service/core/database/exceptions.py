"""Database repository exceptions.

Custom exceptions for repository operations that provide better
error messages and typing than raw SQLAlchemy exceptions.
"""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base exception for repository operations."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize repository error.

        Args:
            message: Error description
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Format error message with details."""
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class NotFoundError(RepositoryError):
    """Entity not found in database.

    Attributes:
        model_name: Name of the model class that wasn't found
        identifier: The key/value that was searched for
    """

    def __init__(self, model_name: str, identifier: dict[str, Any]):
        self.model_name = model_name
        self.identifier = identifier

        id_str = ", ".join(f"{k}={v!s}" for k, v in identifier.items())
        super().__init__(f"{model_name} not found with {id_str}")

    def __repr__(self) -> str:
        return f"NotFoundError(model={self.model_name!r}, identifier={self.identifier!r})"


class IntegrityViolationError(RepositoryError):
    """A write was rejected by a unique or foreign-key constraint.

    Attributes:
        model_name: Name of the model being written
        reason: Short description of the violated constraint
    """

    def __init__(self, model_name: str, reason: str, details: dict[str, Any] | None = None):
        self.model_name = model_name
        self.reason = reason
        super().__init__(f"{model_name} {reason}", details=details)


__all__ = [
    "IntegrityViolationError",
    "NotFoundError",
    "RepositoryError",
]
