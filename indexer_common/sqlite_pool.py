"""SQLite connection pool holding a single connection."""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import parse_qsl, quote, unquote, urlencode

import aiosqlite

_log = logging.getLogger(__name__)


class SqlitePoolError(Exception):
    """Raised when a SQLite pool cannot be created."""


@dataclass(frozen=True)
class SqliteConfig:
    """Configuration for SqlitePool; defaults to an in-memory database."""

    cnn_url: str = "sqlite::memory:"


@dataclass(frozen=True)
class _ConnectOptions:
    database: str
    uri: bool


def _trim_prefix(text: str, prefix: str) -> str:
    while text.startswith(prefix):
        text = text[len(prefix):]
    return text


def _connect_options(cnn_url: str) -> _ConnectOptions:
    url = _trim_prefix(_trim_prefix(cnn_url, "sqlite://"), "sqlite:")
    database, _, params = url.partition("?")
    in_memory = database == ":memory:"
    read_only = False
    extra: dict[str, str] = {}

    for key, value in parse_qsl(params, keep_blank_values=True):
        if key == "mode":
            if value == "ro":
                read_only = True
            elif value in ("rw", "rwc"):
                pass
            elif value == "memory":
                in_memory = True
            else:
                raise ValueError(f"unknown value {value!r} for `mode`")
        elif key == "cache":
            if value not in ("private", "shared"):
                raise ValueError(f"unknown value {value!r} for `cache`")
            extra["cache"] = value
        elif key == "immutable":
            if value not in ("true", "false"):
                raise ValueError(f"unknown value {value!r} for `immutable`")
            if value == "true":
                extra["immutable"] = "1"
        elif key == "vfs":
            extra["vfs"] = value
        else:
            raise ValueError(
                f"unknown query parameter `{key}` while parsing connection URL"
            )

    if in_memory:
        return _ConnectOptions(":memory:", uri=False)

    query = {"mode": "ro" if read_only else "rwc", **extra}
    return _ConnectOptions(
        f"file:{quote(unquote(database))}?{urlencode(query)}", uri=True
    )


class SqlitePool:
    """A pool with at most one connection; statements are serialized."""

    def __init__(self, connection: aiosqlite.Connection) -> None:
        self._connection = connection
        self._lock = asyncio.Lock()

    @classmethod
    async def connect(cls, config: Optional[SqliteConfig] = None) -> SqlitePool:
        """Open a pool for the given configuration, creating the file if missing."""
        config = SqliteConfig() if config is None else config
        try:
            options = _connect_options(config.cnn_url)
        except ValueError as error:
            raise SqlitePoolError(
                "cannot convert config into sqlite connect options"
            ) from error
        try:
            connection = await aiosqlite.connect(
                options.database, uri=options.uri, isolation_level=None
            )
        except sqlite3.Error as error:
            raise SqlitePoolError("cannot create sqlite connection pool") from error
        pool = cls(connection)
        _log.debug("created pool", extra={"pool": repr(pool)})
        return pool

    async def execute(self, sql: str, parameters: Iterable[Any] = ()) -> int:
        """Execute a statement and return the number of affected rows."""
        async with self._lock:
            cursor = await self._connection.execute(sql, tuple(parameters))
            try:
                return cursor.rowcount
            finally:
                await cursor.close()

    async def fetch_all(
        self, sql: str, parameters: Iterable[Any] = ()
    ) -> list[tuple[Any, ...]]:
        """Run a query and return all rows as tuples."""
        async with self._lock:
            rows = await self._connection.execute_fetchall(sql, tuple(parameters))
        return [tuple(row) for row in rows]

    async def close(self) -> None:
        """Close the underlying connection."""
        await self._connection.close()

    async def __aenter__(self) -> SqlitePool:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def __repr__(self) -> str:
        return "SqlitePool(max_connections=1)"