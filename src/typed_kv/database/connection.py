"""Database connection management.

Provides the base ConnectionMixin with connection lifecycle and the two
statement helpers the key-value operations are built on.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from pathlib import Path
from typing import Any, Self

import aiosqlite

from ..config import StoreConfig
from ..exceptions import EngineError

logger = logging.getLogger(__name__)


class ConnectionMixin:
    """Base mixin providing database connection management.

    Manages the aiosqlite connection lifecycle and wraps every engine
    failure in EngineError.
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        config: StoreConfig | None = None,
    ) -> None:
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. Use ":memory:" for testing.
                     Overrides config.db_path when given.
            config: Store configuration. Defaults to StoreConfig().
        """
        self.config = config or StoreConfig()
        if db_path is None:
            db_path = self.config.db_path
        if isinstance(db_path, str):
            self.db_path = Path(db_path) if db_path != ":memory:" else db_path  # type: ignore[assignment]
        else:
            self.db_path = db_path
        self._conn: aiosqlite.Connection | None = None
        self._write_lock = asyncio.Lock()
        self._connect_lock = asyncio.Lock()

    async def __aenter__(self) -> Self:
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    async def connect(self) -> None:
        """Open database connection.

        Does nothing if the connection is already open. Concurrent callers
        share a single connection.

        Raises:
            EngineError: If the database cannot be opened.
        """
        async with self._connect_lock:
            if self._conn is not None:
                return

            db_path = str(self.db_path) if isinstance(self.db_path, Path) else self.db_path
            if db_path != ":memory:":
                resolved_path = Path(db_path).resolve()
                logger.info("Database: %s (exists: %s)", resolved_path, resolved_path.exists())
            try:
                conn = await aiosqlite.connect(db_path, timeout=self.config.timeout)
            except sqlite3.Error as e:
                msg = f"Cannot open database {db_path}: {e}"
                raise EngineError(msg) from e
            conn.row_factory = aiosqlite.Row
            self._conn = conn

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None
            logger.info("Database closed: %s", self.db_path)

    async def _ensure_connected(self) -> aiosqlite.Connection:
        """Ensure database is connected and return the connection."""
        if self._conn is None:
            await self.connect()
        if self._conn is None:
            msg = "Database not connected"
            raise EngineError(msg)
        return self._conn

    # =========================================================================
    # Statement Helpers
    # =========================================================================

    async def execute_statement(
        self,
        query: str,
        params: tuple[Any, ...] | None = None,
    ) -> int:
        """Execute a DDL/DML statement and commit it.

        The statement runs under the write lock. On failure the open
        transaction is rolled back before the error propagates.

        Args:
            query: SQL statement with positional (?) parameters.
            params: Optional statement parameters.

        Returns:
            Number of rows affected.

        Raises:
            EngineError: If the engine rejects the statement.
        """
        conn = await self._ensure_connected()

        async with self._write_lock:
            try:
                cursor = await conn.execute(query, params or ())
                await conn.commit()
            except sqlite3.Error as e:
                await self._rollback(conn)
                msg = f"Statement failed: {e}"
                raise EngineError(msg) from e
            return cursor.rowcount

    async def query_row(
        self,
        query: str,
        params: tuple[Any, ...] | None = None,
    ) -> aiosqlite.Row | None:
        """Execute a SELECT query and return its first row.

        Args:
            query: SQL SELECT query with positional (?) parameters.
            params: Optional query parameters.

        Returns:
            The first result row, or None if the query matched nothing.

        Raises:
            EngineError: If the engine rejects the query.
        """
        conn = await self._ensure_connected()

        try:
            async with conn.execute(query, params or ()) as cursor:
                return await cursor.fetchone()
        except sqlite3.Error as e:
            msg = f"Query failed: {e}"
            raise EngineError(msg) from e

    async def execute_schema(self, query: str) -> None:
        """Execute an idempotent DDL statement without taking the write lock.

        Only for statements such as CREATE TABLE IF NOT EXISTS, which SQLite
        runs outside any implicit transaction, so readers can ensure the
        schema without waiting on writers.

        Raises:
            EngineError: If the engine rejects the statement.
        """
        conn = await self._ensure_connected()

        try:
            await conn.execute(query)
        except sqlite3.Error as e:
            msg = f"Schema statement failed: {e}"
            raise EngineError(msg) from e

    async def _rollback(self, conn: aiosqlite.Connection) -> None:
        try:
            await conn.rollback()
        except sqlite3.Error as e:
            logger.warning("Rollback failed: %s", e)
