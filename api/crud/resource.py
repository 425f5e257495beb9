"""
Resource definitions: which table, which columns, which fields are mandatory.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel


@dataclass(frozen=True)
class Resource:
    # Singular label used in log events, e.g. "customer_site".
    name: str
    # URL segment under /api, e.g. "customer-sites".
    path: str
    table: str
    # Writable columns, in SELECT/INSERT order. `id` and `created_at` are implied.
    columns: tuple[str, ...]
    required: tuple[str, ...]
    create_schema: type[BaseModel]
    response_schema: type[BaseModel]

    def __post_init__(self) -> None:
        unknown = [field for field in self.required if field not in self.columns]
        if unknown:
            raise ValueError(f"Required fields not in columns for {self.table}: {unknown}")

    @property
    def prefix(self) -> str:
        return f"/api/{self.path}"

    @property
    def select_columns(self) -> str:
        return ", ".join(("id", *self.columns, "created_at"))
