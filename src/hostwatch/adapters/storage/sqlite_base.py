"""Base class for SQLite storage adapters."""

import asyncio
import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiosqlite

from hostwatch.core.exceptions import PersistenceError

MEMORY_DB = ":memory:"


class SQLiteStorageBase:
    """Shared connection handling and query helpers for SQLite adapters.

    A file database is opened per operation, so adapters pointing at the
    same file see each other's commits; the file is switched to WAL on
    first use. A ``:memory:`` database only exists while its connection is
    open, so one connection is kept until ``close``.

    Subclasses set ``_schema`` (one table each) and query through
    ``_fetchone``, ``_fetchall``, ``_execute`` and ``_insert``. Writes are
    committed before returning. Any sqlite failure surfaces as
    PersistenceError.
    """

    _schema: str

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._schema_ready = False
        self._schema_lock: asyncio.Lock | None = None
        self._memory_conn: aiosqlite.Connection | None = None

    @property
    def _in_memory(self) -> bool:
        return self._db_path == MEMORY_DB

    def _error(self, detail: object) -> PersistenceError:
        return PersistenceError(f"{type(self).__name__}: {detail}")

    async def _prepare(self) -> None:
        if self._schema_ready:
            return
        # bound to the running loop on first use
        if self._schema_lock is None:
            self._schema_lock = asyncio.Lock()
        async with self._schema_lock:
            if self._schema_ready:
                return
            if self._in_memory:
                conn = await aiosqlite.connect(MEMORY_DB)
                await conn.executescript(self._schema)
                self._memory_conn = conn
            else:
                async with aiosqlite.connect(self._db_path) as db:
                    await db.execute("PRAGMA journal_mode=WAL")
                    await db.executescript(self._schema)
            self._schema_ready = True

    async def close(self) -> None:
        """Drop the kept ``:memory:`` connection; its data goes with it."""
        if self._memory_conn is not None:
            await self._memory_conn.close()
            self._memory_conn = None
        self._schema_ready = False

    @asynccontextmanager
    async def async_connection(self) -> AsyncIterator[aiosqlite.Connection]:
        """Yield a ready connection with the schema applied.

        Raises:
            PersistenceError: If opening, preparing or any statement fails,
                or the in-memory connection was closed underneath.
        """
        try:
            await self._prepare()
            if not self._in_memory:
                async with aiosqlite.connect(self._db_path) as db:
                    yield db
                return
            conn = self._memory_conn
            if conn is None:
                raise self._error("in-memory connection is closed")
            yield conn
        except sqlite3.Error as err:
            raise self._error(err) from err

    async def _fetchone(self, query: str, params: tuple[Any, ...] = ()) -> Any:
        async with self.async_connection() as db:
            async with db.execute(query, params) as cursor:
                return await cursor.fetchone()

    async def _fetchall(self, query: str, params: tuple[Any, ...] = ()) -> list[Any]:
        async with self.async_connection() as db:
            async with db.execute(query, params) as cursor:
                return list(await cursor.fetchall())

    async def _execute(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Run a write statement and commit it.

        Returns:
            Number of rows affected.
        """
        async with self.async_connection() as db:
            cursor = await db.execute(query, params)
            affected = cursor.rowcount
            await db.commit()
            return affected

    async def _insert(self, query: str, params: tuple[Any, ...] = ()) -> int:
        """Run an INSERT, commit it and return the new row id."""
        async with self.async_connection() as db:
            cursor = await db.execute(query, params)
            row_id = cursor.lastrowid
            await db.commit()
            if row_id is None:
                raise self._error("insert returned no row id")
            return row_id
