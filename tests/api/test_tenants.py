"""Tests for tenant bootstrap: shared-secret gate, validation, default roles, owner grant."""

import os

import pytest
from httpx import AsyncClient

from tenantguard.core.config import get_settings

pytestmark = pytest.mark.requires_db

SECRET_HEADERS = {"X-Create-Tenant-Secret": os.environ["CREATE_TENANT_SECRET"]}


async def test_create_tenant_missing_body_returns_422(client: AsyncClient) -> None:
    """POST /api/v1/tenants with no body returns 422."""
    response = await client.post("/api/v1/tenants", json={}, headers=SECRET_HEADERS)
    assert response.status_code == 422


@pytest.mark.parametrize(
    "body",
    [
        {"code": "", "name": "Acme", "owner_actor_id": "u1"},
        {"code": "Acme_Corp", "name": "Acme", "owner_actor_id": "u1"},
        {"code": "acme", "name": "", "owner_actor_id": "u1"},
        {"code": "acme", "name": "x" * 256, "owner_actor_id": "u1"},
        {"code": "acme", "name": "Acme"},
    ],
)
async def test_create_tenant_invalid_body_returns_422(client: AsyncClient, body) -> None:
    response = await client.post("/api/v1/tenants", json=body, headers=SECRET_HEADERS)
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_create_tenant_without_secret_returns_401(client: AsyncClient) -> None:
    body = {"code": "acme", "name": "Acme", "owner_actor_id": "u1"}
    missing = await client.post("/api/v1/tenants", json=body)
    wrong = await client.post(
        "/api/v1/tenants", json=body, headers={"X-Create-Tenant-Secret": "nope"}
    )
    assert missing.status_code == 401
    assert wrong.status_code == 401


async def test_create_tenant_unconfigured_returns_503(
    client: AsyncClient, monkeypatch
) -> None:
    monkeypatch.delenv("CREATE_TENANT_SECRET", raising=False)
    get_settings.cache_clear()
    response = await client.post(
        "/api/v1/tenants",
        json={"code": "acme", "name": "Acme", "owner_actor_id": "u1"},
        headers=SECRET_HEADERS,
    )
    assert response.status_code == 503


async def test_create_tenant_seeds_default_roles_and_owner(
    client: AsyncClient, create_tenant, headers_for
) -> None:
    tenant = await create_tenant("acme", owner_actor_id="founder")

    assert set(tenant["default_role_ids"]) == {"Admin", "Manager", "Team Member", "Viewer"}
    assert tenant["owner_role_id"] == tenant["default_role_ids"]["Admin"]

    response = await client.get(
        "/api/v1/actors/founder/roles", headers=headers_for("founder", tenant["tenant_id"])
    )
    assert response.status_code == 200
    assert [r["name"] for r in response.json()] == ["Admin"]


async def test_create_duplicate_tenant_returns_409(client: AsyncClient, create_tenant) -> None:
    await create_tenant("acme")
    response = await client.post(
        "/api/v1/tenants",
        json={"code": "acme", "name": "Acme Again", "owner_actor_id": "u2"},
        headers=SECRET_HEADERS,
    )
    assert response.status_code == 409
    assert response.json()["error"] == "TENANT_ALREADY_EXISTS"
