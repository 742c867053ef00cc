"""Audit records API: decisions and outcomes are recorded and queryable per tenant."""

from datetime import datetime

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.requires_db


async def test_decisions_and_outcomes_are_recorded(
    client: AsyncClient, as_owner, headers_for
) -> None:
    tenant, owner = await as_owner("acme")
    await client.post("/api/v1/clients", json={"name": "Acme"}, headers=owner)
    await client.get("/api/v1/clients", headers=headers_for("stranger", tenant["tenant_id"]))

    response = await client.get("/api/v1/audit-records", headers=owner)

    assert response.status_code == 200
    records = response.json()
    assert all(r["tenant_id"] == tenant["tenant_id"] for r in records)
    create = [r for r in records if r["subject"] == "clients:create"]
    assert {r["outcome"] for r in create} == {"allow", "success"}
    success = next(r for r in create if r["outcome"] == "success")
    assert success["metadata"]["method"] == "POST"
    assert success["metadata"]["path"] == "/api/v1/clients"
    denied = [r for r in records if r["outcome"] == "deny"]
    assert [(r["actor_id"], r["metadata"]["reason"]) for r in denied] == [
        ("stranger", "NO_ROLES")
    ]
    timestamps = [datetime.fromisoformat(r["timestamp"]) for r in records]
    assert timestamps == sorted(timestamps, reverse=True)


async def test_failed_operation_is_recorded_as_failure(client: AsyncClient, as_owner) -> None:
    _, headers = await as_owner("acme")
    await client.post("/api/v1/roles", json={"name": "Dup"}, headers=headers)
    await client.post("/api/v1/roles", json={"name": "DUP"}, headers=headers)

    response = await client.get(
        "/api/v1/audit-records",
        params={"subject": "roles:create", "outcome": "failure"},
        headers=headers,
    )

    (failure,) = response.json()
    assert failure["metadata"]["error"] == "DuplicateNameException"


async def test_audit_query_is_tenant_pinned(
    client: AsyncClient, create_tenant, headers_for
) -> None:
    org1 = await create_tenant("org-1", owner_actor_id="alice")
    org2 = await create_tenant("org-2", owner_actor_id="bob")
    await client.get("/api/v1/clients", headers=headers_for("alice", org1["tenant_id"]))

    response = await client.get(
        "/api/v1/audit-records",
        params={"actor_id": "alice"},
        headers=headers_for("bob", org2["tenant_id"]),
    )

    assert response.status_code == 200
    assert response.json() == []


async def test_audit_query_requires_settings_view(
    client: AsyncClient, as_owner, headers_for
) -> None:
    tenant, owner = await as_owner("acme")
    roles = tenant["default_role_ids"]
    # Viewer can read settings; a custom role with only clients:view cannot.
    perms = (await client.get("/api/v1/permissions", headers=owner)).json()
    clients_view = next(
        p["id"] for p in perms if (p["feature_area"], p["action_type"]) == ("clients", "view")
    )
    custom = await client.post(
        "/api/v1/roles",
        json={"name": "Clients Only", "permission_ids": [clients_view]},
        headers=owner,
    )
    await client.post(
        "/api/v1/actors/u1/roles", json={"role_id": custom.json()["id"]}, headers=owner
    )
    await client.post("/api/v1/actors/u2/roles", json={"role_id": roles["Viewer"]}, headers=owner)

    u1 = await client.get(
        "/api/v1/audit-records", headers=headers_for("u1", tenant["tenant_id"])
    )
    u2 = await client.get(
        "/api/v1/audit-records", headers=headers_for("u2", tenant["tenant_id"])
    )

    assert u1.status_code == 403
    assert u2.status_code == 200


async def test_audit_query_rejects_inverted_range(client: AsyncClient, as_owner) -> None:
    _, headers = await as_owner("acme")
    response = await client.get(
        "/api/v1/audit-records",
        params={"since": "2026-01-02T00:00:00Z", "until": "2026-01-01T00:00:00Z"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"
