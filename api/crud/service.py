"""
Resource business logic: required-field checks and value normalization.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel

from core.db import Database

from . import repository
from .resource import Resource


def _clean(value: Any) -> Any:
    # Empty strings are stored as NULL, like absent fields.
    if isinstance(value, str) and value == "":
        return None
    return value


def missing_fields(resource: Resource, payload: BaseModel) -> list[str]:
    return [field for field in resource.required if not getattr(payload, field, None)]


def required_message(fields: list[str]) -> str:
    if len(fields) == 1:
        return f"{fields[0]} is required"
    return f"{', '.join(fields[:-1])} and {fields[-1]} are required"


def validate_create(resource: Resource, payload: BaseModel) -> dict[str, Any]:
    """
    Check required fields and return the column values to insert.

    Raises a 400 HTTPException naming the missing fields.
    """
    missing = missing_fields(resource, payload)
    if missing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=required_message(missing),
        )
    return {column: _clean(getattr(payload, column, None)) for column in resource.columns}


async def list_items(db: Database, resource: Resource) -> list[dict[str, Any]]:
    return await repository.list_rows(db, resource)


async def create_item(db: Database, resource: Resource, values: dict[str, Any]) -> dict[str, Any]:
    """
    Insert already validated values (see `validate_create`).
    """
    return await repository.insert_row(db, resource, values)


async def delete_item(db: Database, resource: Resource, item_id: str) -> None:
    await repository.delete_row(db, resource, item_id)
