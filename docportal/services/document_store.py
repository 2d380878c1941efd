"""
Document Store Module

Append-only store of DocumentRecords. Listings return the newest document
first; the order is stable between calls.
"""
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlmodel import Session, select

from docportal.models.document import DocumentRecord


class DocumentStore:
    def __init__(self, db: Session):
        self.db = db

    def append(self, record: DocumentRecord, commit: bool = True) -> DocumentRecord:
        """Add a record. The owning client id is not validated."""
        record.position = self._next_position()
        self.db.add(record)
        if not commit:
            self.db.flush()
            return record
        self.db.commit()
        self.db.refresh(record)
        return record

    def get(self, document_id: str) -> Optional[DocumentRecord]:
        return self.db.get(DocumentRecord, document_id)

    def list_all(self) -> List[DocumentRecord]:
        statement = select(DocumentRecord).order_by(DocumentRecord.position.desc())
        return list(self.db.exec(statement).all())

    def list_by_owners(self, owner_ids: Iterable[str]) -> List[DocumentRecord]:
        """All records whose client_id is in owner_ids."""
        owners = set(owner_ids)
        if not owners:
            return []
        statement = (
            select(DocumentRecord)
            .where(DocumentRecord.client_id.in_(owners))
            .order_by(DocumentRecord.position.desc())
        )
        return list(self.db.exec(statement).all())

    def count_by_owner(self) -> Dict[str, int]:
        """Number of stored documents per client id."""
        statement = select(DocumentRecord.client_id, func.count()).group_by(DocumentRecord.client_id)
        return {client_id: count for client_id, count in self.db.exec(statement).all()}

    def _next_position(self) -> int:
        current = self.db.exec(select(func.max(DocumentRecord.position))).one()
        return (current or 0) + 1


def filter_by_file_name(documents: Iterable[DocumentRecord], q: Optional[str]) -> List[DocumentRecord]:
    """Keep documents whose file name contains q, ignoring case."""
    documents = list(documents)
    if not q:
        return documents
    needle = q.lower()
    return [doc for doc in documents if needle in doc.file_name.lower()]
