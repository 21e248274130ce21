"""Keep a view of one store collection in sync with the store.

A ``CollectionSync`` loads a collection once, or follows it through a live
subscription, and exposes the result as an immutable ``SyncState`` that is
replaced wholesale on every change. It also forwards create/update/delete
calls to the store while tracking which of them are in flight.

There is no optimistic update and no ordering between mutations and
snapshots: the view shows whatever the last snapshot contained.
"""

import logging
import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional

from ecolage.domain.entities import Document
from ecolage.domain.errors import (
    StoreError,
    ValidationError,
    error_message,
    is_connectivity_error,
)
from ecolage.store.base import CollectionAccessor, Snapshot, Subscription

logger = logging.getLogger(__name__)

OFFLINE_LIVE_MESSAGE = "Mode hors ligne: Les données peuvent ne pas être à jour"
OFFLINE_FETCH_MESSAGE = "Mode hors ligne: Impossible de charger les nouvelles données"
OFFLINE_CONNECT_MESSAGE = "Mode hors ligne: Les données ne peuvent pas être chargées"


@dataclass(frozen=True)
class SyncState:
    """What a view of a collection currently shows."""

    data: tuple[Document, ...] = ()
    loading: bool = True
    error: Optional[str] = None
    offline: bool = False
    creating: bool = False
    updating: bool = False
    deleting: bool = False

    @property
    def busy(self) -> bool:
        return self.creating or self.updating or self.deleting

    def items(self) -> list[dict[str, Any]]:
        """Documents as plain dicts with their identifier merged in."""
        return [doc.as_dict() for doc in self.data]


StateCallback = Callable[[SyncState], None]


def _without_id(data: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if key != "id"}


class CollectionSync:
    """Synchronized view of one collection.

    Args:
        accessor: Collection to follow
        realtime: Follow the collection through a live subscription when the
            accessor supports it; otherwise load it once
        on_change: Called with every new state
    """

    def __init__(
        self,
        accessor: CollectionAccessor,
        realtime: bool = False,
        on_change: Optional[StateCallback] = None,
    ):
        self._accessor = accessor
        self._realtime = realtime
        self._on_change = on_change
        self._lock = threading.RLock()
        self._state = SyncState()
        self._subscription: Optional[Subscription] = None
        # Bumped on every start/stop; callbacks carrying an older value are stale
        self._generation = 0
        self._active = False

    @property
    def collection_name(self) -> str:
        return self._accessor.name

    @property
    def state(self) -> SyncState:
        with self._lock:
            return self._state

    @property
    def active(self) -> bool:
        with self._lock:
            return self._active

    @property
    def live(self) -> bool:
        """True while a live subscription is open."""
        with self._lock:
            return self._subscription is not None

    def __enter__(self) -> "CollectionSync":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # State handling
    def _set(self, **changes: Any) -> None:
        with self._lock:
            self._state = replace(self._state, **changes)
            state = self._state
        if self._on_change is not None:
            self._on_change(state)

    def _set_if_current(self, generation: int, **changes: Any) -> bool:
        with self._lock:
            if generation != self._generation:
                return False
            self._state = replace(self._state, **changes)
            state = self._state
        if self._on_change is not None:
            self._on_change(state)
        return True

    def _teardown(self) -> Optional[Subscription]:
        with self._lock:
            self._generation += 1
            self._active = False
            subscription, self._subscription = self._subscription, None
        return subscription

    # Subscription lifecycle
    def start(self) -> None:
        """Load the collection, or open a live subscription on it.

        An already active view is torn down first, so the new load always
        uses a fresh subscription.

        Raises:
            StoreError: If loading fails for a reason other than connectivity
        """
        previous = self._teardown()
        if previous is not None:
            previous.unsubscribe()

        with self._lock:
            self._generation += 1
            generation = self._generation
            self._active = True
        self._set(loading=True, error=None, offline=False)

        if self._realtime and self._accessor.supports_realtime:
            self._subscribe(generation)
        else:
            self._fetch(generation)

    def stop(self) -> None:
        """Cancel the live subscription, if any. Safe to call repeatedly."""
        subscription = self._teardown()
        if subscription is not None:
            subscription.unsubscribe()
            logger.debug("Unsubscribed from '%s'", self.collection_name)

    def retry(self) -> None:
        """Reload after a failure, replacing any previous subscription."""
        logger.info("Retrying '%s'", self.collection_name)
        self.start()

    def _subscribe(self, generation: int) -> None:
        try:
            subscription = self._accessor.subscribe(
                lambda snapshot: self._handle_snapshot(generation, snapshot),
                lambda error: self._handle_subscription_error(generation, error),
            )
        except Exception as e:
            message = error_message(e)
            if is_connectivity_error(e):
                logger.warning("Offline, cannot follow '%s': %s", self.collection_name, message)
                self._set_if_current(
                    generation, loading=False, error=OFFLINE_CONNECT_MESSAGE, offline=True
                )
                return
            logger.error("Cannot follow '%s': %s", self.collection_name, message)
            self._set_if_current(generation, loading=False, error=message)
            if isinstance(e, StoreError):
                raise
            raise StoreError(message, code=getattr(e, "code", None)) from e

        with self._lock:
            if generation == self._generation:
                self._subscription = subscription
                logger.debug("Subscribed to '%s'", self.collection_name)
                return
        # Stopped while the subscription was being opened
        subscription.unsubscribe()

    def _fetch(self, generation: int) -> None:
        try:
            documents = self._accessor.get_all()
        except Exception as e:
            message = error_message(e)
            if is_connectivity_error(e):
                logger.warning("Offline, cannot load '%s': %s", self.collection_name, message)
                self._set_if_current(
                    generation, data=(), loading=False, error=OFFLINE_FETCH_MESSAGE, offline=True
                )
                return
            logger.error("Cannot load '%s': %s", self.collection_name, message)
            self._set_if_current(generation, loading=False, error=message)
            if isinstance(e, StoreError):
                raise
            raise StoreError(message, code=getattr(e, "code", None)) from e

        self._set_if_current(generation, data=tuple(documents), loading=False)

    def _handle_snapshot(self, generation: int, snapshot: Snapshot) -> None:
        changes: dict[str, Any] = {"data": tuple(snapshot.to_documents()), "loading": False}
        if self.state.offline:
            changes.update(error=None, offline=False)
        self._set_if_current(generation, **changes)

    def _handle_subscription_error(self, generation: int, error: Exception) -> None:
        message = error_message(error)
        if is_connectivity_error(error):
            logger.warning("Offline, showing cached '%s': %s", self.collection_name, message)
            # Keep the last snapshot on screen
            self._set_if_current(generation, loading=False, error=OFFLINE_LIVE_MESSAGE, offline=True)
        else:
            logger.error("Live subscription on '%s' failed: %s", self.collection_name, message)
            self._set_if_current(generation, loading=False, error=message)

    # Mutations
    def _mutate(self, flag: str, description: str, action: Callable[[], Any]) -> Any:
        self._set(**{flag: True})
        try:
            return action()
        except Exception as e:
            message = error_message(e)
            logger.error("Failed to %s: %s", description, message)
            self._set(error=message)
            if isinstance(e, StoreError):
                raise
            raise StoreError(message, code=getattr(e, "code", None)) from e
        finally:
            self._set(**{flag: False})

    def create(self, data: Mapping[str, Any]) -> str:
        """Add a document. Returns the identifier assigned by the store.

        Raises:
            StoreError: If the store rejects the write
        """
        payload = _without_id(data)
        return self._mutate(
            "creating",
            f"add a document to '{self.collection_name}'",
            lambda: self._accessor.create(payload),
        )

    def update(self, doc_id: str, data: Mapping[str, Any]) -> None:
        """Merge fields into an existing document.

        Raises:
            ValidationError: If no identifier is given
            StoreError: If the store rejects the write
        """
        if not doc_id:
            raise ValidationError("A document identifier is required to update")
        payload = _without_id(data)
        self._mutate(
            "updating",
            f"update '{self.collection_name}/{doc_id}'",
            lambda: self._accessor.update(doc_id, payload),
        )

    def remove(self, doc_id: str) -> None:
        """Delete a document.

        Raises:
            ValidationError: If no identifier is given
            StoreError: If the store rejects the delete
        """
        if not doc_id:
            raise ValidationError("A document identifier is required to delete")
        self._mutate(
            "deleting",
            f"delete '{self.collection_name}/{doc_id}'",
            lambda: self._accessor.delete(doc_id),
        )
