"""
Schema version check.

The data-access layer is written against one known schema. At startup the
store's Alembic revision is compared with the revision this build expects
and the process refuses to start on a mismatch.
"""

from __future__ import annotations

from typing import Optional

import sqlalchemy as sa
import structlog
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

log = structlog.get_logger()

# Alembic head this code is written against
EXPECTED_REVISION = "0003_member_application"


class SchemaVersionError(RuntimeError):
    """The store's schema revision does not match EXPECTED_REVISION."""


def _read_revision(sync_conn) -> Optional[str]:
    if not sa.inspect(sync_conn).has_table("alembic_version"):
        return None
    return sync_conn.execute(sa.text("SELECT version_num FROM alembic_version")).scalar()


async def get_schema_revision(conn: AsyncConnection) -> Optional[str]:
    """Return the current Alembic revision, or None if the store is unversioned."""
    return await conn.run_sync(_read_revision)


async def verify_schema_revision(engine: AsyncEngine) -> str:
    async with engine.connect() as conn:
        revision = await get_schema_revision(conn)

    if revision is None:
        raise SchemaVersionError(
            "Database has no alembic_version table. Run `alembic upgrade head`."
        )
    if revision != EXPECTED_REVISION:
        raise SchemaVersionError(
            f"Database schema is at revision {revision!r}, expected "
            f"{EXPECTED_REVISION!r}. Run `alembic upgrade head`."
        )
    log.info("schema.verified", revision=revision)
    return revision
