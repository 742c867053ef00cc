"""Roles, permissions and actor-roles API: CRUD and the 400 error mappings."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.requires_db


async def _permission_id(client: AsyncClient, headers, code: str) -> str:
    response = await client.get("/api/v1/permissions", headers=headers)
    assert response.status_code == 200
    by_code = {f"{p['feature_area']}:{p['action_type']}": p["id"] for p in response.json()}
    return by_code[code]


async def test_list_permission_catalog(client: AsyncClient, as_owner) -> None:
    _, headers = await as_owner("acme")
    response = await client.get("/api/v1/permissions", headers=headers)
    assert response.status_code == 200
    pairs = {(p["feature_area"], p["action_type"]) for p in response.json()}
    assert ("clients", "view") in pairs
    assert ("roles", "delete") in pairs


async def test_role_crud(client: AsyncClient, as_owner) -> None:
    tenant, headers = await as_owner("acme")
    view = await _permission_id(client, headers, "invoices:view")
    edit = await _permission_id(client, headers, "invoices:edit")

    created = await client.post(
        "/api/v1/roles",
        json={"name": "Billing Clerk", "description": "Invoices", "permission_ids": [view]},
        headers=headers,
    )
    assert created.status_code == 201, created.text
    role = created.json()
    assert role["tenant_id"] == tenant["tenant_id"]
    assert role["is_default"] is False
    assert role["permission_ids"] == [view]

    listed = await client.get("/api/v1/roles", headers=headers)
    assert "Billing Clerk" in {r["name"] for r in listed.json()}

    patched = await client.patch(
        f"/api/v1/roles/{role['id']}",
        json={"permission_ids": [view, edit]},
        headers=headers,
    )
    assert patched.status_code == 200
    assert sorted(patched.json()["permission_ids"]) == sorted([view, edit])

    deleted = await client.delete(f"/api/v1/roles/{role['id']}", headers=headers)
    assert deleted.status_code == 204
    gone = await client.get(f"/api/v1/roles/{role['id']}", headers=headers)
    assert gone.status_code == 404


async def test_duplicate_role_name_returns_400(client: AsyncClient, as_owner) -> None:
    _, headers = await as_owner("acme")
    await client.post("/api/v1/roles", json={"name": "Billing Clerk"}, headers=headers)

    response = await client.post(
        "/api/v1/roles", json={"name": "billing clerk"}, headers=headers
    )

    assert response.status_code == 400
    assert response.json()["error"] == "DUPLICATE_NAME"


async def test_unknown_permission_id_returns_400(client: AsyncClient, as_owner) -> None:
    _, headers = await as_owner("acme")
    response = await client.post(
        "/api/v1/roles",
        json={"name": "Ghost", "permission_ids": ["nope"]},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_delete_held_role_returns_400_role_in_use(
    client: AsyncClient, as_owner
) -> None:
    _, headers = await as_owner("acme")
    role = (
        await client.post("/api/v1/roles", json={"name": "Temp"}, headers=headers)
    ).json()
    assigned = await client.post(
        "/api/v1/actors/u1/roles", json={"role_id": role["id"]}, headers=headers
    )
    assert assigned.status_code == 201

    response = await client.delete(f"/api/v1/roles/{role['id']}", headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "ROLE_IN_USE"
    still_there = await client.get(f"/api/v1/roles/{role['id']}", headers=headers)
    assert still_there.status_code == 200


async def test_default_role_edits_return_400_protected(client: AsyncClient, as_owner) -> None:
    tenant, headers = await as_owner("acme")
    viewer_id = tenant["default_role_ids"]["Viewer"]

    renamed = await client.patch(
        f"/api/v1/roles/{viewer_id}", json={"name": "Read Only"}, headers=headers
    )
    emptied = await client.patch(
        f"/api/v1/roles/{viewer_id}", json={"permission_ids": []}, headers=headers
    )
    deleted = await client.delete(f"/api/v1/roles/{viewer_id}", headers=headers)
    described = await client.patch(
        f"/api/v1/roles/{viewer_id}", json={"description": "Look only"}, headers=headers
    )

    for response in (renamed, emptied, deleted):
        assert response.status_code == 400
        assert response.json()["error"] == "PROTECTED_ROLE"
    assert described.status_code == 200
    assert described.json()["description"] == "Look only"


async def test_assign_list_and_revoke_actor_roles(client: AsyncClient, as_owner) -> None:
    tenant, headers = await as_owner("acme")
    viewer_id = tenant["default_role_ids"]["Viewer"]

    first = await client.post(
        "/api/v1/actors/u1/roles", json={"role_id": viewer_id}, headers=headers
    )
    again = await client.post(
        "/api/v1/actors/u1/roles", json={"role_id": viewer_id}, headers=headers
    )
    assert first.status_code == 201
    assert first.json()["granted_by"] == "owner-1"
    assert again.json()["id"] == first.json()["id"]

    held = await client.get("/api/v1/actors/u1/roles", headers=headers)
    assert [r["name"] for r in held.json()] == ["Viewer"]

    for _ in range(2):
        revoked = await client.delete(f"/api/v1/actors/u1/roles/{viewer_id}", headers=headers)
        assert revoked.status_code == 204
    assert (await client.get("/api/v1/actors/u1/roles", headers=headers)).json() == []


async def test_role_changes_apply_to_the_next_request(
    client: AsyncClient, as_owner, headers_for
) -> None:
    """No cached permissions: a grant or revoke is visible on the very next call."""
    tenant, owner = await as_owner("acme")
    viewer_id = tenant["default_role_ids"]["Viewer"]
    u1 = headers_for("u1", tenant["tenant_id"])

    assert (await client.get("/api/v1/clients", headers=u1)).status_code == 403
    await client.post("/api/v1/actors/u1/roles", json={"role_id": viewer_id}, headers=owner)
    assert (await client.get("/api/v1/clients", headers=u1)).status_code == 200
    await client.delete(f"/api/v1/actors/u1/roles/{viewer_id}", headers=owner)
    assert (await client.get("/api/v1/clients", headers=u1)).status_code == 403
