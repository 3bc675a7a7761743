"""GraphQL context for request-scoped dependencies.

The context is created fresh for each GraphQL request and provides:
- Database session (for root queries and mutations)
- DataLoaders (for N+1 prevention, cache scoped to this request)
- Correlation ID (for log correlation)

Following Strawberry's FastAPI integration pattern:
https://strawberry.rocks/docs/integrations/fastapi#context_getter
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from strawberry.fastapi import BaseContext

from social_service.features.graphql.dataloaders import create_dataloaders

if TYPE_CHECKING:
    import asyncio

    from sqlalchemy.ext.asyncio import AsyncSession
    from starlette.background import BackgroundTasks
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.websockets import WebSocket

    from social_service.features.graphql.dataloaders import DataLoaders


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations.

    Standard fields (per Strawberry docs):
    - request: The HTTP request (or None outside HTTP, e.g. in tests)
    - response: The HTTP response (for setting headers/cookies)
    - background_tasks: FastAPI BackgroundTasks for async operations

    Custom fields:
    - session: Database session (request-scoped)
    - loaders: DataLoaders (request-scoped, tied to session)
    - correlation_id: Taken from the ``X-Request-ID`` header when present

    Example usage in resolver:
        @strawberry.field
        async def post(self, info: Info[GraphQLContext, None], id: UUID) -> PostType | None:
            post = await info.context.loaders.posts.load(id)
            return PostType.from_model(post) if post else None
    """

    # Standard Strawberry/FastAPI context fields
    request: Request | WebSocket | None = None
    response: Response | None = None
    background_tasks: BackgroundTasks | None = None

    # Custom application fields
    session: AsyncSession = field(default=None)  # type: ignore[assignment]
    loaders: DataLoaders = field(default=None)  # type: ignore[assignment]
    correlation_id: str | None = None

    @classmethod
    def for_session(
        cls,
        session: AsyncSession,
        *,
        max_batch_size: int | None = None,
        **kwargs: object,
    ) -> GraphQLContext:
        """Build a context with a fresh loader set bound to ``session``."""
        return cls(
            session=session,
            loaders=create_dataloaders(session, max_batch_size=max_batch_size),
            **kwargs,  # type: ignore[arg-type]
        )

    @property
    def session_lock(self) -> asyncio.Lock:
        """Lock guarding ``session``; shared with every loader."""
        return self.loaders.session_lock


__all__ = ["GraphQLContext"]
