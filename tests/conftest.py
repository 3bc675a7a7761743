"""Pytest configuration and shared fixtures.

This module provides reusable fixtures for testing across the entire test suite.
Fixtures are organized by category to make them easy to discover and extend.

Organization:
    - Database Fixtures: in-memory SQLite engine, session and statement counter
    - Data Fixtures: a small social graph of users, profiles, posts and subscriptions
    - Application Fixtures: FastAPI app and HTTP client bound to the test database

When adding new features:
    1. Add fixtures to the appropriate section below
    2. Use @pytest.fixture with clear docstrings
    3. Make fixtures composable (fixtures can depend on other fixtures)
"""

from __future__ import annotations

import os
import uuid
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory SQLite engine with the schema and seeded tiers.

    ``StaticPool`` keeps a single connection, so every session opened on this
    engine (including the ones the HTTP client opens) sees the same database.

    Example:
        async def test_with_db(db_engine):
            async with db_engine.connect() as conn:
                ...
    """
    from social_service.infra.database import create_schema, enable_sqlite_foreign_keys

    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory configured like the application's."""
    return async_sessionmaker(db_engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Create a database session for testing.

    Example:
        async def test_create_user(db_session):
            db_session.add(User(name="Ann", balance=1.0))
            await db_session.commit()
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@dataclass
class StatementCounter:
    """Records every statement sent to the database cursor."""

    statements: list[str] = field(default_factory=list)

    def __call__(self, conn: Any, cursor: Any, statement: str, *_args: Any) -> None:
        self.statements.append(statement)

    @property
    def selects(self) -> list[str]:
        return [s for s in self.statements if s.lstrip().upper().startswith("SELECT")]

    def reset(self) -> None:
        self.statements.clear()


@pytest.fixture
def statement_counter(db_engine: AsyncEngine) -> Generator[StatementCounter]:
    """Count statements executed on the test engine.

    Example:
        async def test_batched(statement_counter, execute):
            statement_counter.reset()
            await execute("{ users { id posts { id } } }")
            assert len(statement_counter.selects) == 2
    """
    counter = StatementCounter()
    event.listen(db_engine.sync_engine, "before_cursor_execute", counter)
    yield counter
    event.remove(db_engine.sync_engine, "before_cursor_execute", counter)


# ============================================================================
# Data Fixtures
# ============================================================================


@dataclass(frozen=True)
class SocialGraph:
    """Identifiers of the sample data.

    Alice and Bob have profiles, Carol has none. Alice wrote two posts and
    Bob one. Alice and Carol follow Bob, and Bob follows Alice.
    """

    alice: uuid.UUID
    bob: uuid.UUID
    carol: uuid.UUID
    alice_profile: uuid.UUID
    bob_profile: uuid.UUID
    alice_posts: tuple[uuid.UUID, ...]
    bob_posts: tuple[uuid.UUID, ...]


@pytest.fixture
async def social_graph(db_session: AsyncSession) -> SocialGraph:
    """Populate the database with a small social graph."""
    from social_service.core.models import (
        MemberTypeId,
        Post,
        Profile,
        SubscriptionEdge,
        User,
    )

    alice = User(name="Alice", balance=120.5)
    bob = User(name="Bob", balance=40.0)
    carol = User(name="Carol", balance=0.0)
    db_session.add_all([alice, bob, carol])
    await db_session.flush()

    alice_profile = Profile(
        is_male=False, year_of_birth=1990, user_id=alice.id, member_type_id=MemberTypeId.BASIC,
    )
    bob_profile = Profile(
        is_male=True, year_of_birth=1985, user_id=bob.id, member_type_id=MemberTypeId.BUSINESS,
    )
    alice_posts = [
        Post(title="Hello", content="First post", author_id=alice.id),
        Post(title="Again", content="Second post", author_id=alice.id),
    ]
    bob_posts = [Post(title="Bob here", content="Only post", author_id=bob.id)]
    db_session.add_all([alice_profile, bob_profile, *alice_posts, *bob_posts])
    db_session.add_all(
        [
            SubscriptionEdge(subscriber_id=alice.id, author_id=bob.id),
            SubscriptionEdge(subscriber_id=carol.id, author_id=bob.id),
            SubscriptionEdge(subscriber_id=bob.id, author_id=alice.id),
        ],
    )
    await db_session.flush()

    graph = SocialGraph(
        alice=alice.id,
        bob=bob.id,
        carol=carol.id,
        alice_profile=alice_profile.id,
        bob_profile=bob_profile.id,
        alice_posts=tuple(post.id for post in alice_posts),
        bob_posts=tuple(post.id for post in bob_posts),
    )
    await db_session.commit()
    return graph


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    """Create a FastAPI application bound to the test database.

    The lifespan is skipped; the session dependency is overridden so every
    request gets its own session on the test engine.
    """
    from social_service.app.main import create_app
    from social_service.core.dependencies import get_db_session

    application = create_app(with_lifespan=False)

    async def override_get_db_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing.

    Example:
        async def test_metrics(client):
            response = await client.get("/metrics")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
