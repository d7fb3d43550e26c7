"""
Generic paginated, searchable, sortable list query shared by every resource slice.

Each slice passes a PaginatedListConfig naming its table, the columns free-text
search runs over, and a whitelist mapping query-param names to columns. The
whitelist is the only path from client input to ORDER BY and targeted filters.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import ColumnElement

from app.schemas.pagination import ListQuery, PaginationMeta, build_pagination_meta

logger = logging.getLogger(__name__)

DEFAULT_SORT_KEY = "created_at"


@dataclass(frozen=True)
class PaginatedListConfig:
    table: Any  # ORM model class
    sort_columns: Mapping[str, Any]  # whitelist: query-param name -> column (sort and filter_fields)
    search_columns: Sequence[Any] = ()
    default_sort: str = DEFAULT_SORT_KEY
    extra_where: ColumnElement[bool] | None = None  # always AND-ed in (tenant scoping)

    @property
    def default_sort_column(self) -> Any:
        column = self.sort_columns.get(self.default_sort)
        if column is None:
            column = self.table.created_at
        return column


@dataclass
class ListPage:
    data: list[Any]
    meta: PaginationMeta


def _any_of(conditions: list[ColumnElement[bool]]) -> ColumnElement[bool] | None:
    if not conditions:
        return None
    if len(conditions) == 1:
        return conditions[0]
    return or_(*conditions)


def _all_of(conditions: list[ColumnElement[bool]]) -> ColumnElement[bool] | None:
    if not conditions:
        return None
    if len(conditions) == 1:
        return conditions[0]
    return and_(*conditions)


def resolve_filter_columns(filter_fields: str, sort_columns: Mapping[str, Any]) -> list[Any]:
    """Split comma-separated field names and keep only whitelisted ones, in request order."""
    resolved = []
    for name in (f.strip() for f in filter_fields.split(",")):
        column = sort_columns.get(name)
        if column is None:
            logger.debug("Dropping non-whitelisted filter field %r", name)
            continue
        resolved.append(column)
    return resolved


def build_search_condition(query: ListQuery, config: PaginatedListConfig) -> ColumnElement[bool] | None:
    """
    Targeted filter (filter_value + filter_fields) wins over standard search.
    If every requested filter field is unknown, no condition is produced and the
    list comes back unfiltered.
    """
    if query.filter_value and query.filter_fields:
        columns = resolve_filter_columns(query.filter_fields, config.sort_columns)
        if columns:
            pattern = f"%{query.filter_value}%"
            return _any_of([col.ilike(pattern) for col in columns])
    if query.search and config.search_columns:
        pattern = f"%{query.search}%"
        return _any_of([col.ilike(pattern) for col in config.search_columns])
    return None


def build_where(query: ListQuery, config: PaginatedListConfig) -> ColumnElement[bool] | None:
    conditions = []
    search_condition = build_search_condition(query, config)
    if search_condition is not None:
        conditions.append(search_condition)
    if config.extra_where is not None:
        conditions.append(config.extra_where)
    return _all_of(conditions)


def resolve_sort_column(query: ListQuery, config: PaginatedListConfig) -> Any:
    """Whitelisted sort column, else the default. The raw sort string never reaches SQL."""
    if query.sort:
        column = config.sort_columns.get(query.sort)
        if column is not None:
            return column
        logger.debug("Unknown sort key %r, using default %r", query.sort, config.default_sort)
    return config.default_sort_column


async def paginated_list(
    session_maker: async_sessionmaker[AsyncSession],
    query: ListQuery,
    config: PaginatedListConfig,
) -> ListPage:
    """
    Fetch one page of rows plus pagination meta.

    Row fetch and count run concurrently, each on its own session from
    session_maker (an AsyncSession does not allow concurrent statements); both
    use the same WHERE clause. Store errors propagate to the caller.
    """
    where = build_where(query, config)
    sort_column = resolve_sort_column(query, config)
    order_by = sort_column.asc() if query.order == "asc" else sort_column.desc()
    offset = (query.page - 1) * query.limit

    rows_stmt = select(config.table).order_by(order_by).offset(offset).limit(query.limit)
    count_stmt = select(func.count()).select_from(config.table)
    if where is not None:
        rows_stmt = rows_stmt.where(where)
        count_stmt = count_stmt.where(where)

    logger.debug(
        "paginated_list %s page=%d limit=%d sort=%s %s filtered=%s",
        config.table.__tablename__,
        query.page,
        query.limit,
        sort_column.key,
        query.order,
        where is not None,
    )

    async def fetch_rows() -> list[Any]:
        async with session_maker() as session:
            r = await session.execute(rows_stmt)
            return list(r.scalars().all())

    async def fetch_total() -> int:
        async with session_maker() as session:
            r = await session.execute(count_stmt)
            return r.scalar() or 0

    rows, total = await asyncio.gather(fetch_rows(), fetch_total())
    return ListPage(data=rows, meta=build_pagination_meta(query, total))
