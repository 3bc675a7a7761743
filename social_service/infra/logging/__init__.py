"""Logging infrastructure."""

from .config import build_logging_config, configure_logging, setup_logging
from .formatters import JSONFormatter

__all__ = ["JSONFormatter", "build_logging_config", "configure_logging", "setup_logging"]
