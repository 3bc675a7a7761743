"""Minimal generic repository for SQLAlchemy models.

Provides basic CRUD operations with explicit session passing, plus the
batched ``fetch_by_keys`` lookup the GraphQL loaders are built on.
For complex queries, use the session directly - this is a convenience, not a cage.

Example:
    class PostRepository(BaseRepository[Post]):
        async def fetch_by_author_ids(self, session, author_ids):
            return await self.fetch_by_keys(session, Post.author_id, author_ids)

    post_repo = PostRepository(Post)
    post = await post_repo.get(session, post_id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete as sql_delete
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from social_service.core.database.exceptions import IntegrityViolationError, NotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute


class BaseRepository[T]:
    """Minimal generic repository for CRUD operations.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - list(session) -> Sequence[T]
        - fetch_by_keys(session, attr, keys) -> Sequence[T]
        - create(session, instance) -> T
        - update(session, instance, values) -> T
        - delete_by_id(session, id) -> None (raises NotFoundError)

    Session is always explicit - no hidden state.
    """

    __slots__ = ("_logger", "model")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., User, Post)
        """
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value
            options: SQLAlchemy loader options (e.g., joinedload)

        Returns:
            Entity if found, None otherwise
        """
        stmt = select(self.model).where(self._pk_attr() == id)
        if options:
            stmt = stmt.options(*options)
        result = await session.execute(stmt)
        instance = result.unique().scalar_one_or_none()

        self._logger.debug(
            "db.get: %s(%s) -> %s",
            self.model.__name__,
            id,
            "found" if instance is not None else "not found",
        )
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T:
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id, options=options)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def list(
        self,
        session: AsyncSession,
        *,
        options: Iterable[Any] | None = None,
    ) -> Sequence[T]:
        """List all entities.

        Args:
            session: Database session
            options: SQLAlchemy loader options

        Returns:
            Sequence of entities
        """
        stmt = select(self.model)
        if options:
            stmt = stmt.options(*options)
        result = await session.execute(stmt)
        items = result.unique().scalars().all()

        self._logger.debug("db.list: %s -> %d items", self.model.__name__, len(items))
        return items

    async def fetch_by_keys(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        keys: Sequence[Any],
        *,
        options: Iterable[Any] | None = None,
    ) -> Sequence[T]:
        """Fetch every entity whose ``attr`` is in ``keys`` with one statement.

        The result carries no ordering or cardinality guarantee relative to
        ``keys``; callers group rows by the key attribute themselves.

        Args:
            session: Database session
            attr: Model attribute to match (primary or foreign key)
            keys: Key values to look up
            options: SQLAlchemy loader options

        Returns:
            Matching entities in backend order
        """
        if not keys:
            return []

        stmt = select(self.model).where(attr.in_(list(keys)))
        if options:
            stmt = stmt.options(*options)
        result = await session.execute(stmt)
        items = result.unique().scalars().all()

        self._logger.debug(
            "db.fetch_by_keys: %s.%s in %d keys -> %d rows",
            self.model.__name__,
            attr.key,
            len(keys),
            len(items),
        )
        return items

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values, and refreshes.

        Raises:
            IntegrityViolationError: If a unique or foreign-key constraint fails
        """
        session.add(instance)
        await self._flush(session, "could not be created")
        await session.refresh(instance)

        self._logger.debug(
            "db.create: %s(id=%s)", self.model.__name__, getattr(instance, "id", None),
        )
        return instance

    async def update(
        self,
        session: AsyncSession,
        instance: T,
        values: Mapping[str, Any],
    ) -> T:
        """Apply ``values`` to a tracked entity and flush.

        Keys mapped to ``None`` are skipped so partial inputs leave
        existing columns untouched.

        Raises:
            IntegrityViolationError: If a unique or foreign-key constraint fails
        """
        for name, value in values.items():
            if value is not None:
                setattr(instance, name, value)
        await self._flush(session, "could not be updated")
        await session.refresh(instance)
        return instance

    async def delete_by_id(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
    ) -> None:
        """Delete an entity by primary key with a single DELETE statement.

        Raises:
            NotFoundError: If no row matched
            IntegrityViolationError: If dependent rows block the delete
        """
        stmt = sql_delete(self.model).where(self._pk_attr() == id)
        try:
            result = await session.execute(stmt)
        except IntegrityError as exc:
            raise IntegrityViolationError(
                self.model.__name__, "is still referenced", details={"id": str(id)},
            ) from exc

        if not result.rowcount:
            raise NotFoundError(self.model.__name__, {"id": id})

        self._logger.info(
            "Entity deleted",
            extra={"entity": self.model.__name__, "id": str(id), "operation": "db.delete"},
        )

    async def _flush(self, session: AsyncSession, reason: str) -> None:
        try:
            await session.flush()
        except IntegrityError as exc:
            self._logger.info(
                "Integrity violation",
                extra={"entity": self.model.__name__, "error": str(exc.orig)},
            )
            raise IntegrityViolationError(self.model.__name__, reason) from exc

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        return getattr(self.model, "id")  # noqa: B009


__all__ = ["BaseRepository"]
