"""Logging configuration setup.

Everything goes through ``logging.config.dictConfig``: one console handler
on the root logger, JSONL or plain text, and application loggers
propagating up to it.
"""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from social_service.core.settings.logs import LoggingSettings

logger = logging.getLogger(__name__)
_LOGGING_INITIALIZED = False

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def setup_logging(
    log_settings: LoggingSettings | None = None,
    *,
    force: bool = False,
    service_name: str | None = None,
) -> None:
    """Ensure logging is configured once across entrypoints.

    Args:
        log_settings: Optional logging settings instance. If omitted, settings
            are loaded via get_logging_settings().
        force: Reconfigure logging even if it was already initialized.
        service_name: Added as a static ``service`` field to JSON records.
    """
    global _LOGGING_INITIALIZED

    if _LOGGING_INITIALIZED and not force:
        return

    settings_obj = log_settings
    if settings_obj is None:
        from social_service.core.settings import get_logging_settings

        settings_obj = get_logging_settings()

    configure_logging(
        log_level=settings_obj.level,
        json_logs=settings_obj.json_format,
        console_enabled=settings_obj.console_enabled,
        include_uvicorn=settings_obj.include_uvicorn,
        service_name=service_name,
    )
    _LOGGING_INITIALIZED = True


def configure_logging(
    log_level: str = "INFO",
    *,
    json_logs: bool = True,
    console_enabled: bool = True,
    include_uvicorn: bool = True,
    service_name: str | None = None,
) -> None:
    """Apply a dictConfig built from the given options.

    Args:
        log_level: Root logger level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_logs: Emit JSONL records instead of plain text.
        console_enabled: Attach the stderr handler. Without it only
            ``NullHandler`` is installed.
        include_uvicorn: Route uvicorn's loggers through the root handler.
        service_name: Static ``service`` field for JSON records.
    """
    logging.captureWarnings(True)
    logging.config.dictConfig(
        build_logging_config(
            log_level=log_level,
            json_logs=json_logs,
            console_enabled=console_enabled,
            include_uvicorn=include_uvicorn,
            service_name=service_name,
        ),
    )
    logger.debug(
        "Logging configured",
        extra={"log_level": log_level, "json_logs": json_logs},
    )


def build_logging_config(
    *,
    log_level: str,
    json_logs: bool,
    console_enabled: bool,
    include_uvicorn: bool,
    service_name: str | None,
) -> dict[str, Any]:
    """Build the dictConfig mapping."""
    json_formatter: dict[str, Any] = {
        "()": "social_service.infra.logging.formatters.JSONFormatter",
    }
    if service_name:
        json_formatter["static"] = {"service": service_name}

    handlers: dict[str, Any] = {}
    if console_enabled:
        handlers["console"] = {
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
            "formatter": "json" if json_logs else "plain",
            "level": log_level,
        }
    else:
        handlers["null"] = {"class": "logging.NullHandler"}

    loggers: dict[str, Any] = {
        # SQL echo is controlled by DB_ECHO, not the root level
        "sqlalchemy.engine": {"level": "WARNING"},
    }
    if include_uvicorn:
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            loggers[name] = {"handlers": [], "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": json_formatter,
            "plain": {"format": PLAIN_FORMAT},
        },
        "handlers": handlers,
        "root": {"level": log_level, "handlers": list(handlers)},
        "loggers": loggers,
    }


__all__ = ["build_logging_config", "configure_logging", "setup_logging"]
