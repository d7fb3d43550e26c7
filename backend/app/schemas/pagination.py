"""Shared pagination schemas for list endpoints."""

import math
import uuid
from typing import Generic, Literal, TypeVar

from fastapi import Query
from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_PAGE_LIMIT = 20
MAX_PAGE_LIMIT = 100


class ListQuery(BaseModel):
    """Page/search/filter/sort request shared by every list endpoint."""

    page: int = Field(default=1, ge=1, description="Page number (starts at 1)")
    limit: int = Field(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT, description="Max items per page")
    search: str | None = Field(default=None, description="Substring matched against the resource's search columns")
    filter_value: str | None = Field(default=None, description="Value to search for in specific columns")
    filter_fields: str | None = Field(
        default=None, description="Comma-separated column names to search in (used with filter_value)"
    )
    sort: str | None = Field(default=None, description="Column to sort by; unknown names use the default sort")
    order: Literal["asc", "desc"] = "desc"


def list_query_params(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    search: str | None = None,
    filter_value: str | None = None,
    filter_fields: str | None = None,
    sort: str | None = None,
    order: Literal["asc", "desc"] = "desc",
) -> ListQuery:
    """FastAPI dependency: validate list query-string params into a ListQuery."""
    return ListQuery(
        page=page,
        limit=limit,
        search=search,
        filter_value=filter_value,
        filter_fields=filter_fields,
        sort=sort,
        order=order,
    )


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


def build_pagination_meta(query: ListQuery, total: int) -> PaginationMeta:
    """Meta for a page: total_pages = ceil(total / limit), has_more = page < total_pages."""
    total_pages = math.ceil(total / query.limit)
    return PaginationMeta(
        page=query.page,
        limit=query.limit,
        total=total,
        total_pages=total_pages,
        has_more=query.page < total_pages,
    )


class Paginated(BaseModel, Generic[T]):
    """Standard list response: one page of rows plus pagination meta."""

    data: list[T]
    meta: PaginationMeta


class BulkDelete(BaseModel):
    ids: list[uuid.UUID] = Field(min_length=1, max_length=100)


class BulkDeleteResponse(BaseModel):
    deleted: int
