"""
Operation parameters and results.

Each dispatcher operation takes one immutable parameter model and returns
one result model, all pydantic ``BaseModel`` subclasses.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .operators import SortOrder

Identifier = str | int


class _Params(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class PaginationSpec(_Params):
    """1-indexed page and page size."""

    page: int = Field(default=1, ge=1)
    per_page: int = Field(default=25, ge=1, alias="perPage")


class SortSpec(_Params):
    field: str = "id"
    order: SortOrder = SortOrder.ASC

    @field_validator("order", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class GetListParams(_Params):
    pagination: PaginationSpec = Field(default_factory=PaginationSpec)
    sort: SortSpec = Field(default_factory=SortSpec)
    filter: dict[str, Any] = Field(default_factory=dict)


class GetOneParams(_Params):
    id: Identifier


class GetManyParams(_Params):
    ids: list[Identifier]


class GetManyReferenceParams(GetListParams):
    """Listing scoped to records whose ``target`` field equals ``id``."""

    target: str | None = None
    id: Identifier | None = None


class CreateParams(_Params):
    data: dict[str, Any]


class UpdateParams(_Params):
    id: Identifier
    data: dict[str, Any]


class UpdateManyParams(_Params):
    ids: list[Identifier]
    data: dict[str, Any]


class DeleteParams(_Params):
    id: Identifier


class DeleteManyParams(_Params):
    ids: list[Identifier]


# -- results ------------------------------------------------------------------


class ListResult(BaseModel):
    data: list[dict[str, Any]]
    total: int


class RecordResult(BaseModel):
    data: dict[str, Any]


class ManyResult(BaseModel):
    data: list[dict[str, Any]]


class IdsResult(BaseModel):
    data: list[Any]
