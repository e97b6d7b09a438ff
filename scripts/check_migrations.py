"""Fail if Alembic migrations are out of sync with the directory models.

Run against a database that has been migrated to head:

    python -m scripts.check_migrations
"""

from __future__ import annotations

import asyncio

from alembic.autogenerate import compare_metadata
from alembic.migration import MigrationContext
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from app import models  # noqa: F401  # Ensure models are registered
from app.config import settings
from app.database import Base, build_async_url


def _compare(connection) -> list[object]:
    context = MigrationContext.configure(connection, opts={"compare_type": True})
    return compare_metadata(context, Base.metadata)


async def main() -> int:
    engine = create_async_engine(build_async_url(settings.database_url))
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
        diffs = await conn.run_sync(_compare)
    await engine.dispose()

    if diffs:
        print("Directory models and migrations have diverged:")
        for diff in diffs:
            print(f"  {diff}")
        return 1

    print("Migrations match the directory models.")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
