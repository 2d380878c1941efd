"""
Client Model Module

This module defines the Client model representing the companies whose work
orders and delivery notes are stored in the portal. A client is also a login
identity: its name is the username and the generated password is the secret.
"""
from enum import Enum
from typing import List, Optional
from sqlmodel import SQLModel, Field, JSON, Column
import uuid

from datetime import datetime, timezone


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ContractType(str, Enum):
    """
    Commercial agreement with the client. Informational only.
    """
    NO_CONTRACT = "sin_contrato"
    HOUR_PACK = "pack_horas"
    MONTHLY = "mensual"

    @property
    def label(self) -> str:
        return CONTRACT_LABELS[self]


CONTRACT_LABELS = {
    ContractType.NO_CONTRACT: "Sin contrato",
    ContractType.HOUR_PACK: "Pack por horas",
    ContractType.MONTHLY: "Mensual",
}


class Client(SQLModel, table=True):
    """
    Client model representing a company and its portal credential.

    Attributes:
        id: Unique identifier (UUID) automatically generated for each client
        name: Company name, used as login identifier and as the matching key
            for uploaded documents
        password: Generated plaintext password
        email: Optional contact address
        viewable_client_ids: Ids of other clients whose documents this client
            may read ("super client"). Never contains the client's own id.
        contract_type: Commercial agreement, see ContractType
        last_login: ISO timestamp of the last successful login
        position: Insertion sequence, defines store order
        created_at: ISO timestamp of when the client record was created
    """
    __tablename__ = "clients"

    # Primary key - auto-generated UUID for global uniqueness
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    name: str = Field(nullable=False, index=True)
    password: str = Field(nullable=False)
    email: Optional[str] = None

    # Permission list stored as JSON array; replaced wholesale, never mutated in place
    viewable_client_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    contract_type: ContractType = Field(default=ContractType.NO_CONTRACT)
    last_login: Optional[str] = None

    position: int = Field(default=0, index=True)
    created_at: Optional[str] = Field(default_factory=utc_now_iso)

    @property
    def is_super_client(self) -> bool:
        """Helper to check if the client can read other clients' documents."""
        return bool(self.viewable_client_ids)
