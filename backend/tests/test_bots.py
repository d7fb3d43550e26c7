"""Tests for bots API: CRUD, list, bulk delete."""

import pytest
from httpx import AsyncClient


async def _create_bot(client: AsyncClient, headers: dict, name: str = "Shop Assistant") -> dict:
    resp = await client.post(
        "/api/v1/bots",
        json={"name": name, "system_prompt": "You are a helpful e-commerce assistant."},
        headers=headers,
    )
    assert resp.status_code == 201
    return resp.json()


@pytest.mark.asyncio
async def test_create_bot_defaults(client: AsyncClient, auth_headers: dict, admin_user):
    admin_id, _, _ = admin_user
    data = await _create_bot(client, auth_headers)
    assert data["name"] == "Shop Assistant"
    assert data["model"] == "gemini-2.0-flash"
    assert data["welcome_message"] == "Hi! How can I help you today?"
    assert data["is_active"] is True
    assert data["user_id"] == str(admin_id)


@pytest.mark.asyncio
async def test_create_bot_validation(client: AsyncClient, auth_headers: dict):
    resp = await client.post("/api/v1/bots", json={"name": "", "system_prompt": "x"}, headers=auth_headers)
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_bots_empty(client: AsyncClient, auth_headers: dict):
    resp = await client.get("/api/v1/bots", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["data"] == []
    assert data["meta"]["total"] == 0
    assert data["meta"]["total_pages"] == 0
    assert data["meta"]["has_more"] is False


@pytest.mark.asyncio
async def test_list_bots_search_and_sort(client: AsyncClient, auth_headers: dict):
    for name in ("Support Bot", "Sales Bot", "FAQ Helper"):
        await _create_bot(client, auth_headers, name)
    resp = await client.get("/api/v1/bots?search=bot&sort=name&order=asc", headers=auth_headers)
    assert resp.status_code == 200
    assert [b["name"] for b in resp.json()["data"]] == ["Sales Bot", "Support Bot"]

    resp = await client.get("/api/v1/bots?sort=system_prompt&limit=1&page=3", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["data"]) == 1
    assert data["meta"]["has_more"] is False


@pytest.mark.asyncio
async def test_update_bot(client: AsyncClient, auth_headers: dict):
    bot = await _create_bot(client, auth_headers)
    resp = await client.patch(
        f"/api/v1/bots/{bot['id']}",
        json={"name": "Renamed", "is_active": False},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Renamed"
    assert resp.json()["is_active"] is False
    assert resp.json()["system_prompt"] == bot["system_prompt"]


@pytest.mark.asyncio
async def test_get_missing_bot(client: AsyncClient, auth_headers: dict):
    resp = await client.get("/api/v1/bots/00000000-0000-0000-0000-000000000000", headers=auth_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_bot(client: AsyncClient, auth_headers: dict):
    bot = await _create_bot(client, auth_headers)
    resp = await client.delete(f"/api/v1/bots/{bot['id']}", headers=auth_headers)
    assert resp.status_code == 204
    resp = await client.delete(f"/api/v1/bots/{bot['id']}", headers=auth_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_bulk_delete_counts_existing_rows_only(client: AsyncClient, auth_headers: dict):
    a = await _create_bot(client, auth_headers, "A")
    b = await _create_bot(client, auth_headers, "B")
    resp = await client.request(
        "DELETE",
        "/api/v1/bots/bulk",
        json={"ids": [a["id"], b["id"], "00000000-0000-0000-0000-000000000000"]},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"deleted": 2}
