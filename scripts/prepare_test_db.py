from __future__ import annotations

import asyncio

import asyncpg
import structlog
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import create_async_engine

import app.db.models  # noqa: F401
from app.core.config import get_settings
from app.core.integration_db_safety import assert_safe_integration_db
from app.core.logging import configure_logging
from app.db.models.base import Base

logger = structlog.get_logger("scripts.prepare_test_db")


async def _create_database_if_missing(database_url: str) -> bool:
    parsed = make_url(database_url)
    if parsed.username is None:
        raise RuntimeError("DATABASE_URL username is required.")

    conn = await asyncpg.connect(
        host=parsed.host or "localhost",
        port=int(parsed.port or 5432),
        user=parsed.username,
        password=parsed.password,
        database="postgres",
    )
    try:
        exists = await conn.fetchval("SELECT 1 FROM pg_database WHERE datname = $1", parsed.database)
        if exists:
            return False
        # Name already vetted by assert_safe_integration_db.
        await conn.execute(f'CREATE DATABASE "{parsed.database}"')
        return True
    finally:
        await conn.close()


async def _create_tables(database_url: str) -> None:
    engine = create_async_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


async def prepare_test_database(database_url: str) -> None:
    assert_safe_integration_db(database_url)
    created = await _create_database_if_missing(database_url)
    await _create_tables(database_url)
    logger.info(
        "test_database_ready",
        database=make_url(database_url).database,
        created=created,
        tables=len(Base.metadata.tables),
    )


def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    asyncio.run(prepare_test_database(settings.database_url))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
