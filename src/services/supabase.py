"""Supabase Postgres access with RLS context.

Every connection handed out by ``get_connection`` runs inside a transaction
where ``app.current_user_id`` is set with ``set_config(..., true)``, so
Postgres Row-Level Security policies see the requesting user and the
setting disappears when the transaction ends.

Uses ``asyncpg`` directly; the Supabase Python client has no way to scope
session variables to a transaction.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import asyncpg

from src.config import Settings, get_settings

logger = logging.getLogger("menoai.db")

# Module-level connection pool, initialized once at app startup
_pool: asyncpg.Pool | None = None


async def init_pool(settings: Settings | None = None) -> asyncpg.Pool:
    """Create the asyncpg connection pool. Call once at app startup."""
    global _pool
    s = settings or get_settings()
    _pool = await asyncpg.create_pool(
        s.supabase_db_url,
        min_size=s.db_pool_min_size,
        max_size=s.db_pool_max_size,
        command_timeout=s.db_command_timeout,
    )
    logger.info(
        "Database pool initialized (min=%d, max=%d)",
        s.db_pool_min_size,
        s.db_pool_max_size,
    )
    return _pool


async def close_pool() -> None:
    """Drain the pool. Call at app shutdown."""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None
        logger.info("Database pool closed")


def get_pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("Database pool not initialized; call init_pool() first")
    return _pool


@asynccontextmanager
async def get_connection(
    user_id: str | None = None,
) -> AsyncGenerator[asyncpg.Connection, None]:
    """Acquire a connection with the RLS identity set.

    Usage::

        async with get_connection(user_id=user_id) as conn:
            rows = await conn.fetch("SELECT * FROM symptom_logs WHERE user_id = $1", user_id)
    """
    pool = get_pool()
    async with pool.acquire() as conn:
        async with conn.transaction():
            if user_id:
                await conn.execute(
                    "SELECT set_config('app.current_user_id', $1, true)", str(user_id)
                )
            yield conn


async def fetch(
    query: str,
    *args: Any,
    user_id: str | None = None,
) -> list[asyncpg.Record]:
    """Fetch rows with RLS context."""
    async with get_connection(user_id=user_id) as conn:
        return await conn.fetch(query, *args)
