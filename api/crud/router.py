"""
Router factory: the same three endpoints for every resource.

Annotations here are evaluated eagerly (no `from __future__ import annotations`)
because the endpoint signatures refer to the resource's schema classes, which
FastAPI must see as real types.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status

from core.db import Database, get_db

from . import service
from .resource import Resource

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def _internal_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR,
    )


def build_router(resource: Resource) -> APIRouter:
    router = APIRouter(prefix=resource.prefix)
    create_schema = resource.create_schema

    @router.get("", response_model=list[resource.response_schema])
    async def list_items(db: Database = Depends(get_db)) -> Any:
        """
        List all rows, newest first.
        """
        try:
            return await service.list_items(db, resource)
        except Exception as exc:
            logger.exception("%s_list_failed", resource.name)
            raise _internal_error() from exc

    @router.post(
        "",
        response_model=resource.response_schema,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_item(
        payload: create_schema | None = None,
        db: Database = Depends(get_db),
    ) -> Any:
        """
        Create a row and return it with its generated id and created_at.
        """
        if payload is None:
            payload = create_schema()
        values = service.validate_create(resource, payload)
        try:
            return await service.create_item(db, resource, values)
        except Exception as exc:
            logger.exception("%s_create_failed", resource.name)
            raise _internal_error() from exc

    @router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_item(item_id: str, db: Database = Depends(get_db)) -> Response:
        """
        Delete a row by id. Deleting a missing id still answers 204.
        """
        try:
            await service.delete_item(db, resource, item_id)
        except Exception as exc:
            logger.exception("%s_delete_failed id=%s", resource.name, item_id)
            raise _internal_error() from exc
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
