"""
Credential Store Module

Client records and their credentials. Each mutating method is a single
committed transaction on the injected session. Operations on an unknown id are
no-ops: callers work with ids from a previous listing.
"""
import logging
from typing import Any, Iterable, List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from docportal.core.security import generate_password
from docportal.models.client import Client, ContractType, utc_now_iso

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("name", "contract_type", "email")


class ClientStore:
    """Store of Client records, ordered by insertion."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[Client]:
        """All clients in store order."""
        return list(self.db.exec(select(Client).order_by(Client.position)).all())

    def ids(self) -> List[str]:
        return list(self.db.exec(select(Client.id).order_by(Client.position)).all())

    def get(self, client_id: str) -> Optional[Client]:
        return self.db.get(Client, client_id)

    def find_by_name(self, name: str) -> Optional[Client]:
        """Case-insensitive exact match on the client name."""
        wanted = (name or "").lower()
        for client in self.list():
            if client.name.lower() == wanted:
                return client
        return None

    def create(
        self,
        name: str,
        email: Optional[str] = None,
        contract_type: ContractType = ContractType.NO_CONTRACT,
        commit: bool = True,
    ) -> Client:
        """
        Create a client with a fresh password.

        Idempotent: if a client with the same name (ignoring case) exists it is
        returned unchanged. With commit=False the record is only flushed and
        the caller owns the transaction.
        """
        existing = self.find_by_name(name)
        if existing:
            return existing

        client = Client(
            name=name,
            password=generate_password(),
            email=email,
            contract_type=contract_type,
            viewable_client_ids=[],
            position=self._next_position(),
        )
        self.db.add(client)
        if not commit:
            self.db.flush()
            return client
        self.db.commit()
        self.db.refresh(client)
        logger.info("Created client %r (%s)", client.name, client.id)
        return client

    def update(self, client_id: str, **changes: Any) -> None:
        """
        Partial update of name, contract_type and email.

        Only the fields passed are touched. name and contract_type are
        required, so None leaves them unchanged; email=None clears the email.
        """
        client = self.get(client_id)
        if not client:
            return
        for field, value in changes.items():
            if field not in UPDATABLE_FIELDS:
                raise TypeError(f"Field {field!r} cannot be updated")
            if value is None and field != "email":
                continue
            setattr(client, field, value)
        self.db.add(client)
        self.db.commit()

    def delete(self, client_id: str) -> None:
        """
        Remove the client record.

        Documents and other clients' permission lists are left untouched.
        """
        client = self.get(client_id)
        if not client:
            return
        self.db.delete(client)
        self.db.commit()
        logger.info("Deleted client %s", client_id)

    def set_permissions(self, client_id: str, viewable_ids: Iterable[str]) -> None:
        """Replace the client's viewable ids. Self-references and duplicates are dropped."""
        client = self.get(client_id)
        if not client:
            return
        cleaned: List[str] = []
        for other_id in viewable_ids:
            if other_id == client_id or other_id in cleaned:
                continue
            cleaned.append(other_id)
        client.viewable_client_ids = cleaned
        self.db.add(client)
        self.db.commit()

    def record_login(self, client_id: str) -> None:
        client = self.get(client_id)
        if not client:
            return
        client.last_login = utc_now_iso()
        self.db.add(client)
        self.db.commit()

    def regenerate_password(self, client_id: str) -> Optional[str]:
        """Issue a new password. Returns it, or None for an unknown id."""
        client = self.get(client_id)
        if not client:
            return None
        client.password = generate_password()
        self.db.add(client)
        self.db.commit()
        return client.password

    def _next_position(self) -> int:
        current = self.db.exec(select(func.max(Client.position))).one()
        return (current or 0) + 1
