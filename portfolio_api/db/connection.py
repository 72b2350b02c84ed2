"""SQLite connection management.

Note: Uses a single aiosqlite connection for all operations. This serializes
all DB access, which is acceptable for a read-mostly portfolio with low write
volume. For higher concurrency, consider a pooled server database.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Iterable

import aiosqlite

from portfolio_api.core.errors import DatabaseAppError
from portfolio_api.db.schema import DEMO_SEED_STATEMENTS, SCHEMA_STATEMENTS

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"


class Database:
    """Owns the aiosqlite connection for the application lifetime."""

    def __init__(self, path: str, *, timeout_seconds: float = 5.0) -> None:
        self._path = path
        self._timeout = timeout_seconds
        self._conn: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    @property
    def path(self) -> str:
        return self._path

    @property
    def is_connected(self) -> bool:
        return self._conn is not None

    async def connect(self, *, seed_demo_data: bool = False) -> None:
        """Open the connection, create the schema and optionally seed demo rows.

        Raises:
            DatabaseAppError: If the database cannot be opened or initialized.
        """
        async with self._lock:
            if self._conn is not None:
                return

            if self._path != MEMORY_PATH:
                Path(self._path).parent.mkdir(parents=True, exist_ok=True)

            conn: aiosqlite.Connection | None = None
            try:
                conn = await aiosqlite.connect(self._path, timeout=self._timeout)
                conn.row_factory = aiosqlite.Row
                await conn.execute("PRAGMA foreign_keys=ON")
                for statement in SCHEMA_STATEMENTS:
                    await conn.execute(statement)
                await conn.commit()
            except aiosqlite.Error as exc:
                if conn is not None:
                    await self._close_quietly(conn)
                raise DatabaseAppError(
                    code="database_unavailable",
                    message="Failed to initialize database",
                    details={"path": self._path},
                ) from exc

            self._conn = conn

        if seed_demo_data:
            await self._seed_if_empty()

        logger.info("db.connected", extra={"db_path": self._path, "seeded": seed_demo_data})

    async def _close_quietly(self, conn: aiosqlite.Connection) -> None:
        try:
            await conn.close()
        except aiosqlite.Error as exc:
            logger.warning("db.close_failed", extra={"error_msg": str(exc)})

    async def close(self) -> None:
        async with self._lock:
            if self._conn is None:
                return
            await self._close_quietly(self._conn)
            self._conn = None
        logger.info("db.closed", extra={"db_path": self._path})

    def _require_connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise DatabaseAppError(
                code="database_unavailable",
                message="Database connection is not open",
            )
        return self._conn

    async def fetch_one(self, sql: str, params: Iterable[Any] = ()) -> aiosqlite.Row | None:
        conn = self._require_connection()
        try:
            async with conn.execute(sql, tuple(params)) as cur:
                return await cur.fetchone()
        except aiosqlite.Error as exc:
            raise DatabaseAppError(code="database_error", message="Database query failed") from exc

    async def fetch_all(self, sql: str, params: Iterable[Any] = ()) -> list[aiosqlite.Row]:
        conn = self._require_connection()
        try:
            async with conn.execute(sql, tuple(params)) as cur:
                return list(await cur.fetchall())
        except aiosqlite.Error as exc:
            raise DatabaseAppError(code="database_error", message="Database query failed") from exc

    async def execute(self, sql: str, params: Iterable[Any] = ()) -> int:
        """Run a write statement and commit.

        Returns:
            Number of affected rows.
        """
        conn = self._require_connection()
        try:
            cur = await conn.execute(sql, tuple(params))
            await conn.commit()
            return cur.rowcount
        except aiosqlite.Error as exc:
            await conn.rollback()
            raise DatabaseAppError(code="database_error", message="Database write failed") from exc

    async def ping(self) -> None:
        """Round-trip a trivial query within the configured timeout.

        Raises:
            DatabaseAppError: If the connection is closed, broken or too slow.
        """
        conn = self._require_connection()
        try:
            async with asyncio.timeout(self._timeout):
                async with conn.execute("SELECT 1") as cur:
                    await cur.fetchone()
        except (aiosqlite.Error, TimeoutError) as exc:
            raise DatabaseAppError(
                code="database_unhealthy",
                message="Database health check failed",
            ) from exc

    async def _seed_if_empty(self) -> None:
        row = await self.fetch_one("SELECT COUNT(*) AS n FROM profiles")
        if row is not None and row["n"]:
            return

        conn = self._require_connection()
        try:
            for sql, params in DEMO_SEED_STATEMENTS:
                await conn.execute(sql, params)
            await conn.commit()
        except aiosqlite.Error as exc:
            await conn.rollback()
            raise DatabaseAppError(code="database_error", message="Failed to seed demo data") from exc
        logger.info("db.seeded", extra={"statements": len(DEMO_SEED_STATEMENTS)})
