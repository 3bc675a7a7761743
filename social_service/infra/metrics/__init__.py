"""Prometheus metrics infrastructure."""

from .prometheus import REGISTRY, application_info

__all__ = ["REGISTRY", "application_info"]
