"""
Permission Resolver Module

Computes which clients' documents a session may read.
"""
from typing import Optional, Set

from docportal.models.user import UserRole
from docportal.services.credential_store import ClientStore


def visible_owner_ids(clients: ClientStore, role: UserRole, client_id: Optional[str] = None) -> Set[str]:
    """
    Ids of the clients whose documents are visible to the session.

    Admin: every existing client id, read from the store on each call.
    Client: its own id plus its viewable_client_ids. Ids that no longer
    resolve to a client are dropped, and permissions are not followed
    transitively.
    """
    existing = set(clients.ids())
    if role == UserRole.ADMIN:
        return existing

    if not client_id or client_id not in existing:
        return set()

    client = clients.get(client_id)
    visible = {client_id}
    visible.update(other for other in (client.viewable_client_ids or []) if other in existing)
    return visible
