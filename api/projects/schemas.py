"""
Project API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class ProjectCreate(BaseModel):
    title: str | None = None
    location: str | None = None
    image_url: str | None = None
    description: str | None = None


class ProjectResponse(BaseModel):
    id: int
    title: str
    location: str
    image_url: str
    description: str | None = None
    created_at: datetime | None = None
