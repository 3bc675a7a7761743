"""Database management commands.

Example:bash
    # Create tables and seed membership tiers
    social-service db init

    # Insert missing membership tiers only
    social-service db seed

    # Drop all tables (development only!)
    social-service db drop-all --confirm
"""

import sys

import click
from sqlalchemy import text

from social_service.cli.utils import coro, error, info, success, warning
from social_service.core.settings import get_db_settings


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Verify connectivity, create tables and seed membership tiers."""
    from social_service.infra.database import close_database, init_database

    info("Initializing database...")
    try:
        await init_database()
    except Exception as e:
        error(f"Database initialization failed: {e}")
        sys.exit(1)
    finally:
        await close_database()
    success("Database initialized")


@db.command()
@coro
async def seed() -> None:
    """Insert the membership tiers that are missing."""
    from social_service.core.repositories import get_member_type_repository
    from social_service.infra.database import close_database, get_async_session

    try:
        async with get_async_session() as session:
            created = await get_member_type_repository().seed(session)
            await session.commit()
    finally:
        await close_database()

    if created:
        success(f"Seeded member types: {', '.join(m.value for m in created)}")
    else:
        info("Member types already present")


@db.command()
@coro
async def status() -> None:
    """Show row counts per table."""
    from social_service.core import models  # noqa: F401
    from social_service.core.database import Base
    from social_service.infra.database import close_database, get_async_session

    info(f"Database: {_display_url()}")
    try:
        async with get_async_session() as session:
            for table in Base.metadata.sorted_tables:
                result = await session.execute(text(f"SELECT COUNT(*) FROM {table.name}"))  # noqa: S608
                click.echo(f"  {table.name:<16} {result.scalar_one()}")
    except Exception as e:
        error(f"Could not read tables: {e}")
        sys.exit(1)
    finally:
        await close_database()


@db.command(name="drop-all")
@click.option("--confirm", is_flag=True, help="Confirm dropping every table")
@coro
async def drop_all(confirm: bool) -> None:
    """Drop all tables (development only!)."""
    from social_service.core import models  # noqa: F401
    from social_service.core.database import Base
    from social_service.infra.database import close_database, engine

    if not confirm:
        warning("This drops every table. Re-run with --confirm to proceed.")
        sys.exit(1)

    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
    finally:
        await close_database()
    success("All tables dropped")


def _display_url() -> str:
    from sqlalchemy.engine import make_url

    return make_url(get_db_settings().database_url).render_as_string(hide_password=True)
