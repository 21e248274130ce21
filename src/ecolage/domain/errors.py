"""Shared domain error messages and error types."""

from typing import Optional


CONNECTIVITY_CODE = "unavailable"
OFFLINE_KEYWORD = "offline"


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class StoreError(DomainError):
    """A document store operation failed.

    Args:
        message: Human readable message, shown as-is to the user
        code: Optional machine readable code reported by the store
    """

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code


class ConnectivityError(StoreError):
    """The store could not be reached (offline or unavailable)."""

    def __init__(self, message: str, code: Optional[str] = CONNECTIVITY_CODE):
        super().__init__(message, code=code)


class DocumentNotFoundError(StoreError):
    """A mutation targeted a document identifier that does not exist."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(document_not_found(collection, doc_id), code="not-found")
        self.collection = collection
        self.doc_id = doc_id


def is_connectivity_error(error: BaseException) -> bool:
    """Return True if an error means the store is unreachable.

    Matches ``ConnectivityError`` instances, any error carrying the
    ``unavailable`` code, and any error whose message mentions ``offline``.
    """
    if isinstance(error, ConnectivityError):
        return True
    if getattr(error, "code", None) == CONNECTIVITY_CODE:
        return True
    message = getattr(error, "message", None) or str(error)
    return OFFLINE_KEYWORD in str(message)


def error_message(error: BaseException) -> str:
    """Return the display message of an error."""
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or error.__class__.__name__


def document_not_found(collection: str, doc_id: str) -> str:
    """Return message for a missing document."""
    return f"Document '{doc_id}' not found in collection '{collection}'"


def class_amount_not_found(class_name: str) -> str:
    """Return message for a class without configured tuition."""
    return f"No tuition amount configured for class '{class_name}'"


def unknown_allowances(names: list[str]) -> str:
    """Return message for allowance categories outside the known set."""
    return f"Unknown allowance categor{'ies' if len(names) != 1 else 'y'}: {', '.join(names)}"
