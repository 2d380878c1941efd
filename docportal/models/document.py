"""
Document Model Module

This module defines the DocumentRecord model for uploaded work orders and
delivery notes. A record is created once per successfully matched upload and
never changes afterwards.
"""
from enum import Enum
from typing import Any, Dict, Optional
from sqlmodel import SQLModel, Field, JSON, Column
import uuid

from docportal.models.client import utc_now_iso
from docportal.schemas.analysis import ExtractedData


class DocumentStatus(str, Enum):
    PROCESSING = "processing"
    ASSIGNED = "assigned"
    ERROR = "error"


class DocumentRecord(SQLModel, table=True):
    """
    Uploaded document owned by a client.

    client_id is deliberately not a foreign key: deleting a client leaves its
    documents in place as orphans.

    Attributes:
        id: Unique identifier (UUID)
        client_id: Id of the owning client at upload time
        file_name: Original upload file name
        upload_date: ISO timestamp of the upload
        mime_type: Declared media type of the payload
        file_data: Base64-encoded payload, kept for download
        status: Processing status, "assigned" for stored records
        extracted: ExtractedData dump, None when the analyzer returned no data
        position: Insertion sequence; listings show the newest first
    """
    __tablename__ = "documents"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    client_id: str = Field(nullable=False, index=True)

    file_name: str = Field(nullable=False)
    upload_date: str = Field(default_factory=utc_now_iso)
    mime_type: str = Field(default="application/pdf")
    file_data: Optional[str] = None

    status: DocumentStatus = Field(default=DocumentStatus.ASSIGNED)
    extracted: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    position: int = Field(default=0, index=True)

    @property
    def data(self) -> Optional[ExtractedData]:
        """Extracted data as a typed object, or None if absent."""
        if not self.extracted:
            return None
        return ExtractedData.model_validate(self.extracted)
