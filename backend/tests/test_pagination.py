"""Unit tests for ListQuery validation and pagination meta arithmetic (no DB)."""

import math

import pytest
from pydantic import ValidationError

from app.models.user import User
from app.schemas.pagination import BulkDelete, ListQuery, build_pagination_meta
from app.services.paginated_list import (
    PaginatedListConfig,
    build_where,
    resolve_filter_columns,
    resolve_sort_column,
)
from app.services.users import USER_LIST_CONFIG


def test_list_query_defaults():
    query = ListQuery()
    assert query.page == 1
    assert query.limit == 20
    assert query.order == "desc"
    assert query.search is None
    assert query.sort is None


@pytest.mark.parametrize("field,value", [("page", 0), ("limit", 0), ("limit", 101), ("order", "sideways")])
def test_list_query_rejects_out_of_range(field, value):
    with pytest.raises(ValidationError):
        ListQuery(**{field: value})


@pytest.mark.parametrize(
    "total,limit,page",
    [(0, 20, 1), (1, 20, 1), (20, 20, 1), (21, 20, 1), (21, 20, 2), (100, 1, 100), (7, 3, 4)],
)
def test_meta_formula(total, limit, page):
    meta = build_pagination_meta(ListQuery(page=page, limit=limit), total)
    assert meta.page == page
    assert meta.limit == limit
    assert meta.total == total
    assert meta.total_pages == math.ceil(total / limit)
    assert meta.has_more == (page < meta.total_pages)


def test_meta_has_no_more_when_empty():
    meta = build_pagination_meta(ListQuery(page=1, limit=20), 0)
    assert meta.total_pages == 0
    assert meta.has_more is False


def test_bulk_delete_requires_ids():
    with pytest.raises(ValidationError):
        BulkDelete(ids=[])


def test_resolve_filter_columns_keeps_only_whitelisted():
    columns = resolve_filter_columns(" name ,password_hash,, email", USER_LIST_CONFIG.sort_columns)
    assert len(columns) == 2
    assert columns[0] is User.name
    assert columns[1] is User.email


def test_resolve_sort_column_falls_back_to_default():
    assert resolve_sort_column(ListQuery(sort="name"), USER_LIST_CONFIG) is User.name
    assert resolve_sort_column(ListQuery(sort="password_hash"), USER_LIST_CONFIG) is User.created_at
    assert resolve_sort_column(ListQuery(), USER_LIST_CONFIG) is User.created_at


def test_default_sort_column_without_whitelist_entry_uses_created_at():
    config = PaginatedListConfig(table=User, sort_columns={"name": User.name}, default_sort="missing")
    assert config.default_sort_column is User.created_at


def test_build_where_empty_when_nothing_requested():
    assert build_where(ListQuery(), USER_LIST_CONFIG) is None
    assert build_where(ListQuery(filter_value="x", filter_fields="nope"), USER_LIST_CONFIG) is None


def test_build_where_never_mentions_unlisted_columns():
    where = build_where(ListQuery(filter_value="x", filter_fields="password_hash,name"), USER_LIST_CONFIG)
    sql = str(where.compile())
    assert "password_hash" not in sql
    assert "name" in sql
