"""
Document Ingest Module

Processes an upload batch one file at a time, in upload order:
analyze -> match client -> store document. A failure on one file is logged and
reported in that file's outcome; the rest of the batch still runs.
"""
import base64
import logging
from dataclasses import dataclass
from typing import Iterable

from docportal.models.document import DocumentRecord, DocumentStatus
from docportal.schemas.document import UploadOutcome, UploadReport, UploadStatus
from docportal.services.analyzer import DocumentAnalyzer
from docportal.services.document_store import DocumentStore
from docportal.services.matcher import ClientMatcher

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/pdf"


@dataclass
class IncomingFile:
    file_name: str
    payload: bytes
    mime_type: str = DEFAULT_MIME_TYPE


class DocumentIngestor:
    def __init__(self, analyzer: DocumentAnalyzer, matcher: ClientMatcher, documents: DocumentStore):
        self.analyzer = analyzer
        self.matcher = matcher
        self.documents = documents

    def ingest(self, files: Iterable[IncomingFile]) -> UploadReport:
        files = list(files)
        outcomes = []
        for index, incoming in enumerate(files, start=1):
            logger.info("Analyzing %s (%d/%d)", incoming.file_name, index, len(files))
            try:
                outcome = self.ingest_one(incoming)
            except Exception as exc:
                logger.exception("Error processing file %s", incoming.file_name)
                self.documents.db.rollback()
                outcome = UploadOutcome(
                    file_name=incoming.file_name,
                    status=UploadStatus.ERROR,
                    message=f"Error processing {incoming.file_name}: {exc}",
                )
            outcomes.append(outcome)

        assigned = sum(1 for outcome in outcomes if outcome.status == UploadStatus.ASSIGNED)
        return UploadReport(
            outcomes=outcomes,
            assigned_count=assigned,
            message=f"Processing complete. {assigned} documents assigned.",
        )

    def ingest_one(self, incoming: IncomingFile) -> UploadOutcome:
        mime_type = incoming.mime_type or DEFAULT_MIME_TYPE
        analysis = self.analyzer.analyze(incoming.payload, mime_type)

        # Client creation and the document append commit together
        match = self.matcher.resolve(analysis.client_name, commit=False)
        if match is None:
            logger.warning("Could not match client for %s", incoming.file_name)
            return UploadOutcome(
                file_name=incoming.file_name,
                status=UploadStatus.UNMATCHED,
                message=f"Could not identify client for {incoming.file_name}",
                extracted_client_name=analysis.client_name,
                confidence=analysis.confidence,
            )

        record = DocumentRecord(
            client_id=match.client.id,
            file_name=incoming.file_name,
            mime_type=mime_type,
            file_data=base64.b64encode(incoming.payload).decode("ascii"),
            status=DocumentStatus.ASSIGNED,
            extracted=analysis.data.model_dump() if analysis.data is not None else None,
        )
        record = self.documents.append(record, commit=False)
        self.documents.db.commit()

        if match.created:
            message = f"New client detected: {match.client.name}"
        else:
            message = f"Assigned to {match.client.name}"
        return UploadOutcome(
            file_name=incoming.file_name,
            status=UploadStatus.ASSIGNED,
            message=message,
            document_id=record.id,
            client_id=match.client.id,
            client_name=match.client.name,
            client_created=match.created,
            extracted_client_name=analysis.client_name,
            confidence=analysis.confidence,
        )
