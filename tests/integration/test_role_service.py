"""RoleService integration tests: role rules and assignments against SQLite."""

import pytest

from tenantguard.application.services.role_service import RoleService
from tenantguard.domain.exceptions import (
    DuplicateNameException,
    ProtectedRoleException,
    ResourceNotFoundException,
    RoleInUseException,
    ValidationException,
)
from tenantguard.infrastructure.persistence.repositories import (
    AssignmentRepository,
    PermissionRepository,
    RolePermissionRepository,
    RoleRepository,
)


pytestmark = pytest.mark.requires_db


def _role_service(db_session) -> RoleService:
    return RoleService(
        RoleRepository(db_session),
        RolePermissionRepository(db_session),
        AssignmentRepository(db_session),
        PermissionRepository(db_session),
    )


async def _permission_id(db_session, feature_area: str, action_type: str) -> str:
    permission = await PermissionRepository(db_session).get_by_pair(feature_area, action_type)
    assert permission is not None
    return permission.id


async def test_create_role_with_permissions(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-create")
    view = await _permission_id(db_session, "invoices", "view")
    service = _role_service(db_session)

    created = await service.create_role(
        org.tenant.id, "  Billing   Clerk ", "Handles invoices", [view]
    )

    assert created.name == "Billing Clerk"
    assert created.role.is_default is False
    assert created.permission_ids == frozenset({view})
    fetched = await service.get_role(org.tenant.id, created.id)
    assert fetched == created


@pytest.mark.parametrize(
    "pairs",
    [
        [],
        [("invoices", "view")],
        [("invoices", "view"), ("invoices", "edit"), ("clients", "export")],
    ],
    ids=["empty", "single", "several"],
)
async def test_held_role_reads_back_exactly_its_permissions(
    db_session, session_factory, tenant_factory, pairs
) -> None:
    org = await tenant_factory("org-roundtrip")
    wanted = frozenset([await _permission_id(db_session, *pair) for pair in pairs])
    service = _role_service(db_session)
    created = await service.create_role(org.tenant.id, "Round Trip", None, wanted)
    await service.assign_role(org.tenant.id, "rt-actor", created.id, granted_by="owner-1")
    await db_session.commit()

    async with session_factory() as fresh:
        held = await _role_service(fresh).list_actor_roles(org.tenant.id, "rt-actor")

    assert [(r.id, r.permission_ids) for r in held] == [(created.id, wanted)]


async def test_create_role_rejects_duplicate_name_case_insensitively(
    db_session, tenant_factory
) -> None:
    org = await tenant_factory("org-dup")
    service = _role_service(db_session)
    await service.create_role(org.tenant.id, "Billing Clerk")

    with pytest.raises(DuplicateNameException):
        await service.create_role(org.tenant.id, "billing clerk")
    # Default role names are taken too.
    with pytest.raises(DuplicateNameException):
        await service.create_role(org.tenant.id, "VIEWER")


async def test_create_role_rejects_unknown_permission_and_blank_name(
    db_session, tenant_factory
) -> None:
    org = await tenant_factory("org-invalid")
    service = _role_service(db_session)

    with pytest.raises(ValidationException):
        await service.create_role(org.tenant.id, "Ghost", permission_ids=["no-such-permission"])
    with pytest.raises(ValidationException):
        await service.create_role(org.tenant.id, "   ")


async def test_update_custom_role_replaces_permission_set(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-update")
    view = await _permission_id(db_session, "deals", "view")
    edit = await _permission_id(db_session, "deals", "edit")
    service = _role_service(db_session)
    role = await service.create_role(org.tenant.id, "Deal Desk", permission_ids=[view])

    updated = await service.update_role(
        org.tenant.id,
        role.id,
        name="Deal Desk Lead",
        description="Owns the pipeline",
        permission_ids=[view, edit],
    )

    assert updated.name == "Deal Desk Lead"
    assert updated.role.description == "Owns the pipeline"
    assert updated.permission_ids == frozenset({view, edit})
    assert (await service.get_role(org.tenant.id, role.id)).permission_ids == frozenset(
        {view, edit}
    )


async def test_rename_onto_existing_name_is_rejected(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-rename")
    service = _role_service(db_session)
    await service.create_role(org.tenant.id, "Alpha")
    beta = await service.create_role(org.tenant.id, "Beta")

    with pytest.raises(DuplicateNameException):
        await service.update_role(org.tenant.id, beta.id, name="ALPHA")


async def test_default_role_permissions_and_name_are_fixed(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-protected")
    viewer = org.default_roles["Viewer"]
    service = _role_service(db_session)
    current = (await service.get_role(org.tenant.id, viewer.id)).permission_ids
    delete = await _permission_id(db_session, "clients", "delete")

    with pytest.raises(ProtectedRoleException):
        await service.update_role(
            org.tenant.id, viewer.id, permission_ids=[*current, delete]
        )
    with pytest.raises(ProtectedRoleException):
        await service.update_role(org.tenant.id, viewer.id, name="Read Only")

    # Description edits, case-only renames and resubmitting the same set are allowed.
    updated = await service.update_role(
        org.tenant.id,
        viewer.id,
        name="viewer",
        description="Can look, cannot touch",
        permission_ids=current,
    )
    assert updated.role.description == "Can look, cannot touch"
    assert updated.permission_ids == current


async def test_default_role_cannot_be_deleted(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-nodelete")
    viewer = org.default_roles["Viewer"]
    service = _role_service(db_session)

    with pytest.raises(ProtectedRoleException):
        await service.delete_role(org.tenant.id, viewer.id)
    assert (await service.get_role(org.tenant.id, viewer.id)).id == viewer.id


async def test_delete_unheld_custom_role(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-delete")
    view = await _permission_id(db_session, "files", "view")
    service = _role_service(db_session)
    role = await service.create_role(org.tenant.id, "Temp", permission_ids=[view])

    await service.delete_role(org.tenant.id, role.id)

    with pytest.raises(ResourceNotFoundException):
        await service.get_role(org.tenant.id, role.id)
    assert await RolePermissionRepository(db_session).get_permission_ids(role.id) == frozenset()


async def test_delete_held_role_fails_with_role_in_use(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-inuse")
    service = _role_service(db_session)
    role = await service.create_role(org.tenant.id, "Temp")
    await service.assign_role(org.tenant.id, "u1", role.id, granted_by="owner-1")

    with pytest.raises(RoleInUseException):
        await service.delete_role(org.tenant.id, role.id)

    assert (await service.get_role(org.tenant.id, role.id)).id == role.id
    assert [a.role_id for a in await service.list_assignments(org.tenant.id, "u1")] == [role.id]


async def test_assign_and_revoke_are_idempotent(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-idem")
    viewer = org.default_roles["Viewer"]
    service = _role_service(db_session)

    first = await service.assign_role(org.tenant.id, "u1", viewer.id, granted_by="owner-1")
    second = await service.assign_role(org.tenant.id, "u1", viewer.id, granted_by="owner-1")
    assert first.id == second.id
    assert len(await service.list_assignments(org.tenant.id, "u1")) == 1

    assert await service.revoke_role(org.tenant.id, "u1", viewer.id) is True
    assert await service.revoke_role(org.tenant.id, "u1", viewer.id) is False
    assert await service.list_actor_roles(org.tenant.id, "u1") == []


async def test_assign_rejects_blank_actor(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-blank")
    service = _role_service(db_session)

    with pytest.raises(ValidationException):
        await service.assign_role(org.tenant.id, "  ", org.default_roles["Viewer"].id)


async def test_roles_are_invisible_across_tenants(db_session, tenant_factory) -> None:
    org1 = await tenant_factory("org-a")
    org2 = await tenant_factory("org-b")
    service = _role_service(db_session)
    role = await service.create_role(org1.tenant.id, "Private")

    with pytest.raises(ResourceNotFoundException):
        await service.get_role(org2.tenant.id, role.id)
    with pytest.raises(ResourceNotFoundException):
        await service.assign_role(org2.tenant.id, "u1", role.id)
    with pytest.raises(ResourceNotFoundException):
        await service.update_role(org2.tenant.id, role.id, description="hijacked")
    with pytest.raises(ResourceNotFoundException):
        await service.delete_role(org2.tenant.id, role.id)
    assert (await service.get_role(org1.tenant.id, role.id)).role.description is None


async def test_owner_holds_admin_after_tenant_creation(db_session, tenant_factory) -> None:
    org = await tenant_factory("org-owner", owner_actor_id="founder")
    service = _role_service(db_session)

    held = await service.list_actor_roles(org.tenant.id, "founder")

    assert [r.name for r in held] == ["Admin"]
    assert held[0].id == org.owner_role.id
    assert set(org.default_roles) == {"Admin", "Manager", "Team Member", "Viewer"}
    assert all(r.is_default for r in org.default_roles.values())
