from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional
from docportal.models.client import ContractType


def _strip_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("name must not be empty")
    return value


# Properties to receive via API on creation
class ClientCreate(BaseModel):
    name: str
    email: Optional[EmailStr] = None
    contract_type: ContractType = ContractType.NO_CONTRACT

    @field_validator("name")
    @classmethod
    def clean_name(cls, value: str) -> str:
        return _strip_name(value)


# Properties to receive via API on update
class ClientUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    contract_type: Optional[ContractType] = None

    @field_validator("name")
    @classmethod
    def clean_name(cls, value: Optional[str]) -> Optional[str]:
        return _strip_name(value)


class PermissionsUpdate(BaseModel):
    viewable_client_ids: List[str] = Field(default_factory=list)


# Properties returned to a logged-in client about itself
class ClientRead(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    contract_type: ContractType
    contract_label: str
    viewable_client_ids: List[str] = []
    is_super_client: bool = False
    last_login: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_client(cls, client) -> "ClientRead":
        return cls(
            id=client.id,
            name=client.name,
            email=client.email,
            contract_type=client.contract_type,
            contract_label=client.contract_type.label,
            viewable_client_ids=list(client.viewable_client_ids or []),
            is_super_client=client.is_super_client,
            last_login=client.last_login,
            created_at=client.created_at,
        )


# Admin view includes the credential so it can be handed to the client
class ClientAdminRead(ClientRead):
    password: str
    document_count: int = 0

    @classmethod
    def from_client(cls, client, document_count: int = 0) -> "ClientAdminRead":
        base = ClientRead.from_client(client).model_dump()
        return cls(password=client.password, document_count=document_count, **base)
