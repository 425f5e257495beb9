"""
Resource persistence (raw SQL).

Table and column names come from `Resource` definitions in code, never from
requests; values are always bound as parameters.
"""

from __future__ import annotations

from typing import Any

from core.db import Database

from .resource import Resource


async def list_rows(db: Database, resource: Resource) -> list[dict[str, Any]]:
    """
    Return every row, newest first.
    """
    return await db.fetch_all(
        f"""
        SELECT {resource.select_columns}
        FROM {resource.table}
        ORDER BY created_at DESC
        """
    )


async def insert_row(db: Database, resource: Resource, values: dict[str, Any]) -> dict[str, Any]:
    placeholders = ", ".join(f"${i}" for i in range(1, len(resource.columns) + 1))
    row = await db.fetch_one(
        f"""
        INSERT INTO {resource.table} ({", ".join(resource.columns)})
        VALUES ({placeholders})
        RETURNING {resource.select_columns}
        """,
        *(values.get(column) for column in resource.columns),
    )
    if row is None:
        raise RuntimeError(f"Failed to insert into {resource.table}.")
    return row


async def delete_row(db: Database, resource: Resource, row_id: str) -> None:
    # The id is bound as text and cast by Postgres; no existence check.
    await db.execute(
        f"""
        DELETE FROM {resource.table}
        WHERE id = $1::text::integer
        """,
        row_id,
    )
