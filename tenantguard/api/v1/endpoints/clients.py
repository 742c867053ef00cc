"""Clients API: the reference tenant-scoped entity (guarded by clients:*).

Every call passes the resolved tenant from the guard to the repository;
a client owned by another tenant is indistinguishable from a missing one.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tenantguard.api.v1.dependencies import (
    get_client_repo,
    get_client_repo_for_write,
    guard,
)
from tenantguard.application.services.authorization_service import AuthorizationContext
from tenantguard.infrastructure.persistence.repositories import ClientRepository
from tenantguard.schemas.client import ClientCreate, ClientResponse, ClientUpdate

router = APIRouter()

# Optional columns a PATCH may set to null; null for anything else means "unchanged".
_CLEARABLE_FIELDS = frozenset({"email", "phone", "notes"})


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    context: Annotated[AuthorizationContext, Depends(guard("clients", "create"))],
    body: ClientCreate,
    client_repo: Annotated[ClientRepository, Depends(get_client_repo_for_write)],
):
    created = await client_repo.create(context.tenant_id, body.model_dump())
    return ClientResponse.model_validate(created)


@router.get("", response_model=list[ClientResponse])
async def list_clients(
    context: Annotated[AuthorizationContext, Depends(guard("clients", "view"))],
    client_repo: Annotated[ClientRepository, Depends(get_client_repo)],
    status: str | None = None,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
):
    filters = {"status": status} if status else None
    clients = await client_repo.list(context.tenant_id, filters, skip=skip, limit=limit)
    return [ClientResponse.model_validate(c) for c in clients]


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    context: Annotated[AuthorizationContext, Depends(guard("clients", "view"))],
    client_id: str,
    client_repo: Annotated[ClientRepository, Depends(get_client_repo)],
):
    return ClientResponse.model_validate(await client_repo.find(context.tenant_id, client_id))


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    context: Annotated[AuthorizationContext, Depends(guard("clients", "edit"))],
    client_id: str,
    body: ClientUpdate,
    client_repo: Annotated[ClientRepository, Depends(get_client_repo_for_write)],
):
    patch = {
        key: value
        for key, value in body.model_dump(exclude_unset=True).items()
        if value is not None or key in _CLEARABLE_FIELDS
    }
    updated = await client_repo.update(context.tenant_id, client_id, patch)
    return ClientResponse.model_validate(updated)


@router.delete("/{client_id}", status_code=204)
async def delete_client(
    context: Annotated[AuthorizationContext, Depends(guard("clients", "delete"))],
    client_id: str,
    client_repo: Annotated[ClientRepository, Depends(get_client_repo_for_write)],
) -> None:
    await client_repo.delete(context.tenant_id, client_id)
