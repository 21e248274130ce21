"""Abstract document store interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ecolage.domain.entities import Document


@dataclass(frozen=True)
class DocumentSnapshot:
    """One document as delivered by a live subscription."""

    id: str
    data: Mapping[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of the document fields (without the identifier)."""
        return dict(self.data)


@dataclass(frozen=True)
class Snapshot:
    """Full content of a collection at one point in time, in store order."""

    docs: tuple[DocumentSnapshot, ...]

    def to_documents(self) -> list[Document]:
        return [Document(id=doc.id, data=doc.to_dict()) for doc in self.docs]


SnapshotCallback = Callable[[Snapshot], None]
ErrorCallback = Callable[[Exception], None]


class Subscription(ABC):
    """Handle on a live subscription."""

    @abstractmethod
    def unsubscribe(self) -> None:
        """Stop delivery. Calling it more than once has no further effect."""
        pass

    @property
    @abstractmethod
    def active(self) -> bool:
        """True until the subscription is cancelled."""
        pass


class CollectionAccessor(ABC):
    """Access to one named collection of a document store."""

    supports_realtime: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Collection name."""
        pass

    @abstractmethod
    def get_all(self) -> list[Document]:
        """Return every document, in the store's natural order."""
        pass

    @abstractmethod
    def get(self, doc_id: str) -> Optional[Document]:
        """Get a document by identifier."""
        pass

    @abstractmethod
    def create(self, data: Mapping[str, Any]) -> str:
        """Insert a document. Returns the identifier assigned by the store."""
        pass

    @abstractmethod
    def update(self, doc_id: str, data: Mapping[str, Any]) -> None:
        """Merge fields into an existing document.

        Raises:
            DocumentNotFoundError: If no document has this identifier
        """
        pass

    @abstractmethod
    def delete(self, doc_id: str) -> None:
        """Delete a document. Deleting a missing document is not an error."""
        pass

    @abstractmethod
    def set(self, doc_id: str, data: Mapping[str, Any], merge: bool = True) -> None:
        """Create or overwrite a document under a caller-chosen identifier.

        With ``merge`` the fields are merged into an existing document instead
        of replacing it.
        """
        pass

    def subscribe(self, on_snapshot: SnapshotCallback, on_error: ErrorCallback) -> Subscription:
        """Open a live subscription delivering full snapshots.

        Only available when ``supports_realtime`` is True.
        """
        raise NotImplementedError(f"Collection '{self.name}' does not support live subscriptions")


class DocumentStore(ABC):
    """Abstract document store for ecolage."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create whatever storage structures the store needs."""
        pass

    @abstractmethod
    def collection(self, name: str) -> CollectionAccessor:
        """Return an accessor for a named collection."""
        pass
