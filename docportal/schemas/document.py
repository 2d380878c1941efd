from enum import Enum
from pydantic import BaseModel
from typing import Dict, List, Optional

from docportal.schemas.analysis import ExtractedData

# Display name for documents whose owner no longer exists
UNKNOWN_OWNER_NAME = "Desconocido"


class DocumentStats(BaseModel):
    total_hours: float = 0
    resolved_count: int = 0
    materials: Dict[str, float] = {}
    document_count: int = 0


# Properties to return to client
class DocumentRead(BaseModel):
    id: str
    client_id: str
    client_name: str
    file_name: str
    upload_date: str
    mime_type: str
    status: str
    data: Optional[ExtractedData] = None
    shared: bool = False  # Owned by another client the viewer has access to
    orphaned: bool = False  # Owner client was deleted


class UploadStatus(str, Enum):
    ASSIGNED = "assigned"
    UNMATCHED = "unmatched"
    ERROR = "error"


class UploadOutcome(BaseModel):
    file_name: str
    status: UploadStatus
    message: str
    document_id: Optional[str] = None
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    client_created: bool = False
    extracted_client_name: Optional[str] = None
    confidence: float = 0


class UploadReport(BaseModel):
    outcomes: List[UploadOutcome] = []
    assigned_count: int = 0
    message: str = ""
