"""
Client Management Endpoints Module

Administrator-only CRUD over client records, their permission lists and
passwords. Client creation is idempotent on the name (ignoring case).
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from docportal.api import deps
from docportal.models.client import Client
from docportal.schemas.client import (
    ClientAdminRead, ClientCreate, ClientUpdate, PermissionsUpdate,
)
from docportal.services.auth_gate import AuthSession
from docportal.services.credential_store import ClientStore
from docportal.services.document_store import DocumentStore

router = APIRouter()


def to_admin_read(client: Client, documents: DocumentStore) -> ClientAdminRead:
    counts = documents.count_by_owner()
    return ClientAdminRead.from_client(client, document_count=counts.get(client.id, 0))


@router.get("", response_model=List[ClientAdminRead])
def list_clients(
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    admin: AuthSession = Depends(deps.get_current_admin),
):
    """
    Retrieve all clients in creation order, including their passwords and
    how many documents each one owns.
    """
    counts = documents.count_by_owner()
    return [
        ClientAdminRead.from_client(client, document_count=counts.get(client.id, 0))
        for client in clients.list()
    ]


@router.post("", response_model=ClientAdminRead)
def create_client(
    client_in: ClientCreate,
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    admin: AuthSession = Depends(deps.get_current_admin),
):
    """
    Create a client with a generated password.

    If a client with the same name already exists (ignoring case) it is
    returned unchanged.
    """
    client = clients.create(
        client_in.name,
        email=client_in.email,
        contract_type=client_in.contract_type,
    )
    return to_admin_read(client, documents)


@router.get("/{client_id}", response_model=ClientAdminRead)
def read_client(
    client_id: str,
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    admin: AuthSession = Depends(deps.get_current_admin),
):
    client = clients.get(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return to_admin_read(client, documents)


@router.patch("/{client_id}", response_model=ClientAdminRead)
def update_client(
    client_id: str,
    client_in: ClientUpdate,
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    admin: AuthSession = Depends(deps.get_current_admin),
):
    """
    Rename a client or change its contract type / email.

    Only the fields sent are changed; an explicit null email clears it.

    Raises:
        HTTPException 404: If the client doesn't exist
    """
    if not clients.get(client_id):
        raise HTTPException(status_code=404, detail="Client not found")

    update_data = client_in.model_dump(exclude_unset=True)
    clients.update(client_id, **update_data)
    return to_admin_read(clients.get(client_id), documents)


@router.delete("/{client_id}")
def delete_client(
    client_id: str,
    clients: ClientStore = Depends(deps.get_client_store),
    admin: AuthSession = Depends(deps.get_current_admin),
):
    """
    Delete a client.

    Its documents stay stored as orphans. Deleting an unknown id succeeds.
    """
    clients.delete(client_id)
    return {"status": "success", "detail": "Client deleted"}


@router.put("/{client_id}/permissions", response_model=ClientAdminRead)
def update_permissions(
    client_id: str,
    permissions_in: PermissionsUpdate,
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    admin: AuthSession = Depends(deps.get_current_admin),
):
    """
    Replace the list of clients whose documents this client may read.

    The client's own id is ignored if present.

    Raises:
        HTTPException 404: If the client doesn't exist
        HTTPException 400: If any listed id is not a known client
    """
    if not clients.get(client_id):
        raise HTTPException(status_code=404, detail="Client not found")

    known = set(clients.ids())
    unknown = [other for other in permissions_in.viewable_client_ids if other not in known]
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown client ids: {unknown}")

    viewable = [other for other in permissions_in.viewable_client_ids if other != client_id]
    clients.set_permissions(client_id, viewable)
    return to_admin_read(clients.get(client_id), documents)


@router.post("/{client_id}/password", response_model=ClientAdminRead)
def regenerate_password(
    client_id: str,
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    admin: AuthSession = Depends(deps.get_current_admin),
):
    """
    Issue a new random password for the client.
    """
    if clients.regenerate_password(client_id) is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return to_admin_read(clients.get(client_id), documents)
