"""Tests for users API: list (pagination contract over HTTP), CRUD, bulk delete."""

import pytest
from httpx import AsyncClient


async def _create(client: AsyncClient, headers: dict, email: str, name: str, role: str = "user") -> dict:
    resp = await client.post(
        "/api/v1/users",
        json={"email": email, "name": name, "password": "password123", "role": role},
        headers=headers,
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.asyncio
async def test_list_users_envelope(client: AsyncClient, auth_headers: dict):
    resp = await client.get("/api/v1/users", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["meta"] == {"page": 1, "limit": 20, "total": 1, "total_pages": 1, "has_more": False}
    assert data["data"][0]["email"] == "admin@test.com"
    assert "password_hash" not in data["data"][0]


@pytest.mark.asyncio
async def test_list_users_search_and_sort(client: AsyncClient, auth_headers: dict):
    await _create(client, auth_headers, "zoe@test.com", "Zoe Zimmer")
    await _create(client, auth_headers, "bob@test.com", "Bob Baker")
    resp = await client.get(
        "/api/v1/users?search=test.com&sort=name&order=asc&limit=2",
        headers=auth_headers,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert [u["name"] for u in data["data"]] == ["Admin", "Bob Baker"]
    assert data["meta"]["total"] == 3
    assert data["meta"]["total_pages"] == 2
    assert data["meta"]["has_more"] is True


@pytest.mark.asyncio
async def test_list_users_filter_fields(client: AsyncClient, auth_headers: dict):
    await _create(client, auth_headers, "zoe@test.com", "Zoe Zimmer")
    resp = await client.get(
        "/api/v1/users?filter_value=zimmer&filter_fields=password_hash,name",
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert [u["email"] for u in resp.json()["data"]] == ["zoe@test.com"]


@pytest.mark.asyncio
@pytest.mark.parametrize("params", ["limit=0", "limit=101", "page=0", "order=up"])
async def test_list_users_rejects_bad_params(client: AsyncClient, auth_headers: dict, params: str):
    resp = await client.get(f"/api/v1/users?{params}", headers=auth_headers)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_create_user_duplicate_email(client: AsyncClient, auth_headers: dict):
    resp = await client.post(
        "/api/v1/users",
        json={"email": "admin@test.com", "name": "Dup", "password": "password123"},
        headers=auth_headers,
    )
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_get_update_delete_user(client: AsyncClient, auth_headers: dict):
    created = await _create(client, auth_headers, "carol@test.com", "Carol")
    uid = created["id"]

    resp = await client.get(f"/api/v1/users/{uid}", headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Carol"

    resp = await client.patch(f"/api/v1/users/{uid}", json={"name": "Carol Chen", "role": "admin"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Carol Chen"
    assert resp.json()["role"] == "admin"

    resp = await client.delete(f"/api/v1/users/{uid}", headers=auth_headers)
    assert resp.status_code == 204
    resp = await client.get(f"/api/v1/users/{uid}", headers=auth_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_bulk_delete_users(client: AsyncClient, auth_headers: dict):
    a = await _create(client, auth_headers, "a@test.com", "A")
    b = await _create(client, auth_headers, "b@test.com", "B")
    resp = await client.request(
        "DELETE",
        "/api/v1/users/bulk",
        json={"ids": [a["id"], b["id"]]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"deleted": 2}
    resp = await client.get("/api/v1/users", headers=auth_headers)
    assert resp.json()["meta"]["total"] == 1
