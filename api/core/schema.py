"""
Idempotent schema bootstrap, run once at startup.

There is no migration tool: tables that already exist are left as they are.
"""

from __future__ import annotations

import logging

from .db import Database

logger = logging.getLogger(__name__)

TABLES: dict[str, str] = {
    "customer_sites": """
        CREATE TABLE IF NOT EXISTS customer_sites (
            id SERIAL PRIMARY KEY,
            title TEXT,
            location TEXT,
            image_url TEXT NOT NULL,
            description TEXT,
            created_at TIMESTAMP DEFAULT NOW()
        )
    """,
    "projects": """
        CREATE TABLE IF NOT EXISTS projects (
            id SERIAL PRIMARY KEY,
            title TEXT NOT NULL,
            location TEXT NOT NULL,
            image_url TEXT NOT NULL,
            description TEXT,
            created_at TIMESTAMP DEFAULT NOW()
        )
    """,
}


async def init_schema(db: Database) -> None:
    for table, ddl in TABLES.items():
        await db.execute(ddl)
        logger.info("%s table ready", table)
