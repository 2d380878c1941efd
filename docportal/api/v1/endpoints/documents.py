"""
Document Endpoints Module

Upload (administrator only), listing, statistics and download of work orders.
Every read is limited to the documents whose owner is in the session's visible
owner set; the administrator may additionally ask for orphaned documents.
"""
import base64
import binascii
from typing import Dict, List, Optional
from urllib.parse import quote
from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from docportal.api import deps
from docportal.models.document import DocumentRecord
from docportal.schemas.document import (
    UNKNOWN_OWNER_NAME, DocumentRead, DocumentStats, UploadReport,
)
from docportal.services.analyzer import DocumentAnalyzer
from docportal.services.auth_gate import AuthSession
from docportal.services.credential_store import ClientStore
from docportal.services.document_store import DocumentStore, filter_by_file_name
from docportal.services.ingest import DocumentIngestor, IncomingFile
from docportal.services.matcher import ClientMatcher
from docportal.services.permissions import visible_owner_ids
from docportal.services.statistics import aggregate

router = APIRouter()


def visible_documents(
    session: AuthSession,
    clients: ClientStore,
    documents: DocumentStore,
    include_orphans: bool = False,
) -> List[DocumentRecord]:
    if session.is_admin and include_orphans:
        return documents.list_all()
    owners = visible_owner_ids(clients, session.role, session.client_id)
    return documents.list_by_owners(owners)


def to_read(doc: DocumentRecord, names: Dict[str, str], session: AuthSession) -> DocumentRead:
    orphaned = doc.client_id not in names
    return DocumentRead(
        id=doc.id,
        client_id=doc.client_id,
        client_name=names.get(doc.client_id, UNKNOWN_OWNER_NAME),
        file_name=doc.file_name,
        upload_date=doc.upload_date,
        mime_type=doc.mime_type,
        status=doc.status.value,
        data=doc.data,
        shared=not session.is_admin and doc.client_id != session.client_id,
        orphaned=orphaned,
    )


@router.post("/upload", response_model=UploadReport)
def upload_documents(
    files: List[UploadFile] = File(...),
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    analyzer: DocumentAnalyzer = Depends(deps.get_analyzer),
    admin: AuthSession = Depends(deps.get_current_admin),
):
    """
    Analyze and assign uploaded documents.

    Files are processed in upload order. Each file gets its own outcome:
    assigned (possibly to a newly created client), unmatched, or error.
    """
    incoming = [
        IncomingFile(
            file_name=upload.filename or "document.pdf",
            payload=upload.file.read(),
            mime_type=upload.content_type or "application/pdf",
        )
        for upload in files
    ]
    ingestor = DocumentIngestor(analyzer, ClientMatcher(clients), documents)
    return ingestor.ingest(incoming)


@router.get("", response_model=List[DocumentRead])
def list_documents(
    q: Optional[str] = None,
    include_orphans: bool = False,
    skip: int = 0,
    limit: int = 100,
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    session: AuthSession = Depends(deps.get_current_session),
):
    """
    Retrieve the documents visible to the session, newest first.

    Args:
        q: Optional case-insensitive file name filter
        include_orphans: Admin only; also list documents whose client was deleted
        skip: Number of records to skip (for pagination)
        limit: Maximum number of records to return
    """
    docs = filter_by_file_name(visible_documents(session, clients, documents, include_orphans), q)
    names = {client.id: client.name for client in clients.list()}
    return [to_read(doc, names, session) for doc in docs[skip:skip + limit]]


@router.get("/stats", response_model=DocumentStats)
def document_stats(
    include_orphans: bool = False,
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    session: AuthSession = Depends(deps.get_current_session),
):
    """
    Total hours, resolved count and material units over the visible documents.
    """
    return aggregate(visible_documents(session, clients, documents, include_orphans))


def _get_visible_document(
    document_id: str,
    session: AuthSession,
    clients: ClientStore,
    documents: DocumentStore,
) -> DocumentRecord:
    doc = documents.get(document_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Document not found")
    if session.is_admin:
        return doc
    if doc.client_id not in visible_owner_ids(clients, session.role, session.client_id):
        raise HTTPException(status_code=403, detail="Not authorized")
    return doc


@router.get("/{document_id}", response_model=DocumentRead)
def read_document(
    document_id: str,
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    session: AuthSession = Depends(deps.get_current_session),
):
    """
    Raises:
        HTTPException 404: If the document doesn't exist
        HTTPException 403: If the document's owner is not visible to the session
    """
    doc = _get_visible_document(document_id, session, clients, documents)
    names = {client.id: client.name for client in clients.list()}
    return to_read(doc, names, session)


@router.get("/{document_id}/download")
def download_document(
    document_id: str,
    clients: ClientStore = Depends(deps.get_client_store),
    documents: DocumentStore = Depends(deps.get_document_store),
    session: AuthSession = Depends(deps.get_current_session),
):
    """
    Return the original file as an attachment.
    """
    doc = _get_visible_document(document_id, session, clients, documents)
    if not doc.file_data:
        raise HTTPException(status_code=404, detail="Document has no stored file")
    try:
        content = base64.b64decode(doc.file_data)
    except (binascii.Error, ValueError):
        raise HTTPException(status_code=500, detail="Stored file is corrupt")
    return Response(
        content=content,
        media_type=doc.mime_type,
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(doc.file_name)}"},
    )
