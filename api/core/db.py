"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. The FastAPI lifespan creates one instance
per process, stores it on `app.state.db` and closes it on shutdown (see
`api/main.py`). Route handlers receive it through the `get_db` dependency.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
import os
import ssl
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

from .settings import DatabaseSettings

logger = logging.getLogger(__name__)

VERIFIED_SSL_MODES = {"require", "verify-ca", "verify-full"}
OPPORTUNISTIC_SSL_MODES = {"allow", "prefer"}


def ssl_mode(url: str) -> str:
    """
    Effective libpq sslmode: the URL's `sslmode`, else PGSSLMODE, else "prefer".
    """
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        if key == "sslmode" and value:
            return value.lower()
    return os.environ.get("PGSSLMODE", "").strip().lower() or "prefer"


def _strip_sslmode(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def unverified_ssl_context() -> ssl.SSLContext:
    """
    TLS context that accepts any server certificate (self-signed included).
    """
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def verified_ssl_context(mode: str) -> ssl.SSLContext:
    """
    TLS context checking the server certificate against the system CA store.

    `verify-full` and `require` also check the hostname; `verify-ca` does not.
    """
    context = ssl.create_default_context()
    if mode == "verify-ca":
        context.check_hostname = False
    return context


def connect_options(config: DatabaseSettings) -> dict[str, Any]:
    """
    Keyword arguments for `asyncpg.create_pool` built from settings.

    An explicit context replaces whatever sslmode the URL asks for:
    - flag on: TLS without certificate checks;
    - flag off and sslmode require/verify-ca/verify-full: TLS with checks
      (asyncpg alone would skip them for `require`);
    - otherwise the URL goes through untouched (`disable`, or the opportunistic
      `allow`/`prefer`, which asyncpg never verifies).
    """
    options: dict[str, Any] = {
        "dsn": config.url,
        "min_size": config.min_size,
        "max_size": config.max_size,
        "command_timeout": config.command_timeout,
    }
    mode = ssl_mode(config.url)
    if config.ssl_no_verify:
        options["dsn"] = _strip_sslmode(config.url)
        options["ssl"] = unverified_ssl_context()
    elif mode in VERIFIED_SSL_MODES:
        options["dsn"] = _strip_sslmode(config.url)
        options["ssl"] = verified_ssl_context(mode)
    return options


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, pool: asyncpg.Pool, *, acquire_timeout: float | None = None) -> None:
        self._pool = pool
        self._acquire_timeout = acquire_timeout

    @classmethod
    async def connect(cls, config: DatabaseSettings) -> Database:
        mode = ssl_mode(config.url)
        if config.ssl_no_verify:
            logger.warning("db_ssl_verification_disabled server certificates are not checked")
        elif mode in OPPORTUNISTIC_SSL_MODES:
            logger.warning(
                "db_ssl_unverified sslmode=%s server certificates are not checked; "
                "use sslmode=verify-full to require them",
                mode,
            )
        pool = await asyncpg.create_pool(**connect_options(config))
        logger.info("db_pool_ready min_size=%s max_size=%s", config.min_size, config.max_size)
        return cls(pool, acquire_timeout=config.acquire_timeout)

    @property
    def pool(self) -> asyncpg.Pool:
        return self._pool

    async def close(self) -> None:
        await self._pool.close()
        logger.info("db_pool_closed")

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self._pool.acquire(timeout=self._acquire_timeout) as conn:
            row = await conn.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self._pool.acquire(timeout=self._acquire_timeout) as conn:
            rows = await conn.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return its status tag.
        """
        async with self._pool.acquire(timeout=self._acquire_timeout) as conn:
            return await conn.execute(sql, *args)


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database is not initialized. It is created in the app lifespan.")
    return db
