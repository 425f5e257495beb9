"""
Customer site API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class CustomerSiteCreate(BaseModel):
    # Only image_url is mandatory; the check lives in crud.service so that a
    # missing field answers 400 with a readable message.
    image_url: str | None = None
    title: str | None = None
    location: str | None = None
    description: str | None = None


class CustomerSiteResponse(BaseModel):
    id: int
    title: str | None = None
    location: str | None = None
    # Nullable in tables created before image_url became mandatory.
    image_url: str | None = None
    description: str | None = None
    created_at: datetime | None = None
