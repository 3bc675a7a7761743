"""Custom exception classes for the application.

Every domain failure raised from a resolver derives from ``AppException``.
graphql-core copies ``extensions`` from the original exception onto the
located ``GraphQLError``, so clients receive a stable ``code`` next to the
message.
"""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    Follows RFC 7807 Problem Details naming for its attributes.

    Attributes:
        status_code: HTTP-equivalent status code for the error.
        detail: Human-readable error message.
        type: Error type identifier.
        title: Short, human-readable summary of the problem type.
        code: GraphQL error code exposed in ``extensions``.
        extra: Additional context-specific information about the error.

    Example:
        raise AppException(
            status_code=404,
            detail="User not found",
            type="user-not-found",
            code="NOT_FOUND",
            extra={"user_id": "abc123"},
        )
    """

    code: str = "INTERNAL_ERROR"

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",  # noqa: A002
        title: str | None = None,
        code: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP-equivalent status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            code: GraphQL error code (defaults to the class code).
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        if code is not None:
            self.code = code
        self.extra = extra or {}
        super().__init__(detail)

    @property
    def extensions(self) -> dict[str, Any]:
        """GraphQL error extensions for this exception."""
        return {"code": self.code, **self.extra}

    @staticmethod
    def _default_title(status_code: int) -> str:
        titles = {
            400: "Bad Request",
            404: "Not Found",
            409: "Conflict",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")


class NotFoundException(AppException):
    """Raised when a mutation targets a record that does not exist.

    Example:
        raise NotFoundException(
            detail="Post with ID abc123 not found",
            extra={"post_id": "abc123"},
        )
    """

    code = "NOT_FOUND"

    def __init__(
        self,
        detail: str,
        type: str = "not-found",  # noqa: A002
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=404,
            detail=detail,
            type=type,
            title="Not Found",
            extra=extra,
        )


class ConflictException(AppException):
    """Raised when a write violates a uniqueness or foreign-key constraint.

    Example:
        raise ConflictException(
            detail="User abc is already subscribed to def",
            type="duplicate-subscription",
        )
    """

    code = "CONFLICT"

    def __init__(
        self,
        detail: str,
        type: str = "conflict",  # noqa: A002
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=409,
            detail=detail,
            type=type,
            title="Conflict",
            extra=extra,
        )


class ValidationException(AppException):
    """Raised when mutation input is well-typed but semantically invalid."""

    code = "VALIDATION_ERROR"

    def __init__(
        self,
        detail: str,
        field: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        extra = dict(extra or {})
        if field is not None:
            extra["field"] = field
        super().__init__(
            status_code=422,
            detail=detail,
            type="validation-error",
            title="Unprocessable Entity",
            extra=extra,
        )


__all__ = [
    "AppException",
    "ConflictException",
    "NotFoundException",
    "ValidationException",
]
