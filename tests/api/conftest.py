"""Fixtures for API tests: tenants bootstrapped over HTTP and per-actor headers."""

import os
from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from httpx import AsyncClient

CREATE_TENANT_SECRET = os.environ["CREATE_TENANT_SECRET"]

HeadersFor = Callable[..., dict[str, str]]


def _actor_headers(actor_id: str, tenant_id: str | None = None) -> dict[str, str]:
    headers = {"X-Actor-ID": actor_id}
    if tenant_id is not None:
        headers["X-Tenant-ID"] = tenant_id
    return headers


@pytest.fixture
def headers_for() -> HeadersFor:
    """Trusted-header identity for (actor_id, tenant_id), as a gateway would set it."""
    return _actor_headers


@pytest.fixture
def create_tenant(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """POST /api/v1/tenants and return the response body."""

    async def _create(code: str, owner_actor_id: str = "owner-1") -> dict[str, Any]:
        response = await client.post(
            "/api/v1/tenants",
            json={"code": code, "name": code.upper(), "owner_actor_id": owner_actor_id},
            headers={"X-Create-Tenant-Secret": CREATE_TENANT_SECRET},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def as_owner(
    create_tenant,
) -> Callable[[str], Awaitable[tuple[dict[str, Any], dict[str, str]]]]:
    """Create a tenant and return (tenant body, headers of its owner)."""

    async def _create(code: str) -> tuple[dict[str, Any], dict[str, str]]:
        tenant = await create_tenant(code)
        return tenant, _actor_headers("owner-1", tenant["tenant_id"])

    return _create
