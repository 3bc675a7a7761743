"""GraphQL error classification and logging.

Every error leaving an operation is logged once, server-side, with the
operation name and correlation ID. Classification decides both the log
level and, in production, whether ``MaskErrors`` hides the message.

Usage:
    from strawberry.extensions import MaskErrors

    MaskErrors(should_mask_error=should_mask_error)
"""

from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING, Any

from social_service.core.exceptions import AppException

if TYPE_CHECKING:
    from graphql import GraphQLError
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

__all__ = [
    "ErrorCategory",
    "error_category",
    "is_user_facing_error",
    "log_error",
    "should_mask_error",
]


class ErrorCategory:
    """Error codes exposed in ``extensions.code``."""

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    DEPTH_LIMIT = "DEPTH_LIMIT_EXCEEDED"
    GRAPHQL = "GRAPHQL_ERROR"
    INTERNAL = "INTERNAL_ERROR"


USER_FACING_CODES = frozenset({
    ErrorCategory.VALIDATION,
    ErrorCategory.NOT_FOUND,
    ErrorCategory.CONFLICT,
    ErrorCategory.DEPTH_LIMIT,
})


def error_category(error: GraphQLError) -> str:
    """Classify an error by its code, falling back on where it came from.

    Errors without an original exception were produced by graphql-core
    itself (syntax, schema validation, variable coercion).
    """
    code = (error.extensions or {}).get("code")
    if code:
        return str(code)
    if error.original_error is None:
        return ErrorCategory.GRAPHQL
    if isinstance(error.original_error, AppException):
        return error.original_error.code
    return ErrorCategory.INTERNAL


def is_user_facing_error(error: GraphQLError) -> bool:
    """True when the message is meant for the client as-is."""
    category = error_category(error)
    return category in USER_FACING_CODES or category == ErrorCategory.GRAPHQL


def should_mask_error(error: GraphQLError) -> bool:
    return not is_user_facing_error(error)


def log_error(error: GraphQLError, execution_context: ExecutionContext | None = None) -> None:
    """Log error with full details for server-side debugging.

    User-facing errors are expected and logged at INFO; anything else is an
    internal failure and logged at ERROR with the stack trace.
    """
    category = error_category(error)
    log_context: dict[str, Any] = {
        "error_message": error.message,
        "error_code": category,
        "error_path": error.path,
    }

    if execution_context is not None:
        if execution_context.operation_name:
            log_context["operation_name"] = execution_context.operation_name
        correlation_id = getattr(execution_context.context, "correlation_id", None)
        if correlation_id:
            log_context["correlation_id"] = correlation_id

    original = error.original_error
    if original is not None:
        log_context["exception_type"] = type(original).__name__

    if is_user_facing_error(error):
        logger.info("GraphQL user-facing error", extra=log_context)
        return

    if original is not None:
        log_context["stack_trace"] = "".join(
            traceback.format_exception(type(original), original, original.__traceback__),
        )
    logger.error("GraphQL internal error", extra=log_context)
