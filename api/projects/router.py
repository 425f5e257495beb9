"""
Project endpoints: /api/projects.
"""

from __future__ import annotations

from crud.resource import Resource
from crud.router import build_router

from . import schemas

resource = Resource(
    name="project",
    path="projects",
    table="projects",
    columns=("title", "location", "image_url", "description"),
    required=("title", "location", "image_url"),
    create_schema=schemas.ProjectCreate,
    response_schema=schemas.ProjectResponse,
)

router = build_router(resource)
