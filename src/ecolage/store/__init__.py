"""Document store layer for ecolage."""

from ecolage.store.base import CollectionAccessor, DocumentStore
from ecolage.store.factories import create_sqlite_store
from ecolage.store.sync import CollectionSync, SyncState

__all__ = ["CollectionAccessor", "DocumentStore", "create_sqlite_store", "CollectionSync", "SyncState"]
