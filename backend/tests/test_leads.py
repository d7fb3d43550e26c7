"""Tests for leads API: upsert on (bot, sender), list search/filter, CRUD."""

import pytest
from httpx import AsyncClient


@pytest.fixture
def lead_payload():
    return {"sender_id": "visitor-1", "name": "John Doe", "email": "john@example.com", "phone": "+56912345678"}


async def _bot_id(client: AsyncClient, headers: dict) -> str:
    resp = await client.post("/api/v1/bots", json={"name": "Leads Bot", "system_prompt": "p"}, headers=headers)
    return resp.json()["id"]


@pytest.mark.asyncio
async def test_create_lead_then_upsert_keeps_fields(client: AsyncClient, auth_headers: dict, lead_payload: dict):
    bot = await _bot_id(client, auth_headers)
    resp = await client.post(
        "/api/v1/leads",
        json={**lead_payload, "bot_id": bot, "metadata": {"source": "widget"}},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    first = resp.json()
    assert first["metadata"] == {"source": "widget"}

    resp = await client.post(
        "/api/v1/leads",
        json={"bot_id": bot, "sender_id": "visitor-1", "phone": "+56900000000"},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    second = resp.json()
    assert second["id"] == first["id"]
    assert second["phone"] == "+56900000000"
    assert second["name"] == "John Doe"
    assert second["email"] == "john@example.com"
    assert second["metadata"] == {"source": "widget"}

    resp = await client.get("/api/v1/leads", headers=auth_headers)
    assert resp.json()["meta"]["total"] == 1


@pytest.mark.asyncio
async def test_create_lead_invalid_email(client: AsyncClient, auth_headers: dict):
    bot = await _bot_id(client, auth_headers)
    resp = await client.post(
        "/api/v1/leads",
        json={"bot_id": bot, "sender_id": "v", "email": "not-an-email"},
        headers=auth_headers,
    )
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_list_leads_filter_by_phone(client: AsyncClient, auth_headers: dict):
    bot = await _bot_id(client, auth_headers)
    await client.post(
        "/api/v1/leads",
        json={"bot_id": bot, "sender_id": "v1", "name": "Ana", "phone": "51983724476"},
        headers=auth_headers,
    )
    await client.post(
        "/api/v1/leads",
        json={"bot_id": bot, "sender_id": "v2", "name": "Ben 5198", "phone": "11111111"},
        headers=auth_headers,
    )
    resp = await client.get("/api/v1/leads?filter_value=5198&filter_fields=phone", headers=auth_headers)
    assert [lead["name"] for lead in resp.json()["data"]] == ["Ana"]

    resp = await client.get(f"/api/v1/leads?bot_id={bot}&search=5198", headers=auth_headers)
    assert resp.json()["meta"]["total"] == 2


@pytest.mark.asyncio
async def test_update_and_delete_lead(client: AsyncClient, auth_headers: dict, lead_payload: dict):
    bot = await _bot_id(client, auth_headers)
    lead = (await client.post("/api/v1/leads", json={**lead_payload, "bot_id": bot}, headers=auth_headers)).json()

    resp = await client.patch(f"/api/v1/leads/{lead['id']}", json={"name": None, "metadata": {"vip": True}}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] is None
    assert resp.json()["metadata"] == {"vip": True}

    resp = await client.delete(f"/api/v1/leads/{lead['id']}", headers=auth_headers)
    assert resp.status_code == 204
    resp = await client.get(f"/api/v1/leads/{lead['id']}", headers=auth_headers)
    assert resp.status_code == 404
