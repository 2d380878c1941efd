from .user import UserRole
from .client import Client, ContractType
from .document import DocumentRecord, DocumentStatus

__all__ = [
    "UserRole",
    "Client", "ContractType",
    "DocumentRecord", "DocumentStatus",
]
