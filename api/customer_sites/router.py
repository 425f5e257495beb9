"""
Customer site endpoints: /api/customer-sites.
"""

from __future__ import annotations

from crud.resource import Resource
from crud.router import build_router

from . import schemas

resource = Resource(
    name="customer_site",
    path="customer-sites",
    table="customer_sites",
    columns=("title", "location", "image_url", "description"),
    required=("image_url",),
    create_schema=schemas.CustomerSiteCreate,
    response_schema=schemas.CustomerSiteResponse,
)

router = build_router(resource)
