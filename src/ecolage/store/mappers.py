"""Mapper functions to convert SQLAlchemy models into domain values."""

from ecolage.domain import entities as domain
from ecolage.store.base import DocumentSnapshot
from ecolage.store.models import DocumentRecord


def document_to_domain(record: DocumentRecord) -> domain.Document:
    """Convert a SQLAlchemy DocumentRecord to a domain Document."""
    return domain.Document(id=record.doc_id, data=dict(record.data or {}))


def document_to_snapshot(record: DocumentRecord) -> DocumentSnapshot:
    """Convert a SQLAlchemy DocumentRecord to a subscription DocumentSnapshot."""
    return DocumentSnapshot(id=record.doc_id, data=dict(record.data or {}))
