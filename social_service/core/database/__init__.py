"""Core database package: declarative base, mixins, and repository.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming and auto table naming
    - UUIDPKMixin: UUID v4 primary key

Repository:
    - BaseRepository[T]: Generic CRUD and batched key lookups with explicit
      session passing

Exceptions:
    - RepositoryError, NotFoundError, IntegrityViolationError
"""

from __future__ import annotations

from .base import NAMING_CONVENTION, Base, UUIDPKMixin
from .exceptions import IntegrityViolationError, NotFoundError, RepositoryError
from .repository import BaseRepository

__all__ = [
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "IntegrityViolationError",
    "NotFoundError",
    "RepositoryError",
    "UUIDPKMixin",
]
