"""Gateway over the Firestore document store used by every game component."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions

from socialbingo.core.constants import (
    APP_ROOT,
    GAMES_COLLECTION,
    PARTICIPANTS_COLLECTION_PREFIX,
)
from socialbingo.errors import DuplicateResourceError, NotFoundError, StoreError

if TYPE_CHECKING:
    from google.cloud.firestore_v1.base_document import DocumentSnapshot
    from google.cloud.firestore_v1.client import Client

logger = logging.getLogger(__name__)

DocumentCallback = Callable[[dict[str, Any] | None], None]
QueryCallback = Callable[[list[dict[str, Any]]], None]


def snapshot_to_dict(snapshot: DocumentSnapshot) -> dict[str, Any] | None:
    """Convert a document snapshot into a plain dict carrying its id."""
    if not snapshot.exists:
        return None
    data = snapshot.to_dict() or {}
    data["id"] = snapshot.id
    return data


class Subscription:
    """Handle on a live listener.

    Release it with ``unsubscribe()`` or by leaving a ``with`` block. Releasing
    twice is harmless.
    """

    def __init__(
        self,
        path: str,
        watch: Any,
        on_release: Callable[[Subscription], None] | None = None,
    ) -> None:
        """Wrap an SDK watch object."""
        self.path = path
        self._watch = watch
        self._on_release = on_release
        self._lock = threading.Lock()
        self.active = True

    def unsubscribe(self) -> None:
        """Stop receiving snapshots."""
        with self._lock:
            if not self.active:
                return
            self.active = False
        try:
            self._watch.unsubscribe()
        finally:
            if self._on_release:
                self._on_release(self)
        logger.debug(f"Released listener on {self.path}")

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.unsubscribe()


class SessionStore:
    """Document store operations needed by the game core.

    One instance is built per application and handed to every service, so no
    component reaches for a process-wide client. Failures from the Google API
    surface as ``StoreError``; nothing is retried here.
    """

    def __init__(self, db: Client | None, app_id: str) -> None:
        """Bind the gateway to a Firestore client and an app namespace."""
        self.db = db
        self.app_id = app_id
        self._subscriptions: set[Subscription] = set()
        self._subscriptions_lock = threading.Lock()

    # Paths

    def _data_root(self) -> str:
        return f"{APP_ROOT}/{self.app_id}/public/data"

    def games_path(self) -> str:
        """Return the collection path holding every game."""
        return f"{self._data_root()}/{GAMES_COLLECTION}"

    def game_path(self, game_id: str) -> str:
        """Return the document path of one game."""
        return f"{self.games_path()}/{game_id}"

    def participants_path(self, game_id: str) -> str:
        """Return the collection path of a game's participant records."""
        return f"{self._data_root()}/{PARTICIPANTS_COLLECTION_PREFIX}{game_id}"

    def participant_path(self, game_id: str, user_id: str) -> str:
        """Return the document path of one participant record."""
        return f"{self.participants_path(game_id)}/{user_id}"

    # One-shot operations

    def create_document(self, path: str, data: dict[str, Any]) -> None:
        """Create a document, failing if it already exists."""
        try:
            self.db.document(path).create(data)
        except google_exceptions.AlreadyExists as e:
            raise DuplicateResourceError(f"Document {path} already exists.") from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Error creating {path}: {e}")
            raise StoreError() from e

    def read_document(self, path: str) -> dict[str, Any] | None:
        """Read a document once; ``None`` when it does not exist."""
        try:
            snapshot = self.db.document(path).get()
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Error reading {path}: {e}")
            raise StoreError() from e
        return snapshot_to_dict(snapshot)

    def merge_document(self, path: str, data: dict[str, Any]) -> None:
        """Overlay the given fields, creating the document if needed."""
        try:
            self.db.document(path).set(data, merge=True)
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Error merging into {path}: {e}")
            raise StoreError() from e

    def increment_field(self, path: str, field: str, delta: int = 1) -> None:
        """Atomically add ``delta`` to a numeric field on the server."""
        try:
            self.db.document(path).update({field: firestore.Increment(delta)})
        except google_exceptions.NotFound as e:
            raise NotFoundError(f"Document {path} not found.") from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Error incrementing {field} on {path}: {e}")
            raise StoreError() from e

    def _query(
        self,
        collection_path: str,
        order_by: str | None,
        descending: bool,
        limit: int | None,
    ) -> Any:
        query = self.db.collection(collection_path)
        if order_by:
            direction = (
                firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            )
            query = query.order_by(order_by, direction=direction)
        if limit:
            query = query.limit(limit)
        return query

    def query_documents(
        self,
        collection_path: str,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Read an ordered, bounded set of documents once."""
        query = self._query(collection_path, order_by, descending, limit)
        try:
            docs = list(query.stream())
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Error querying {collection_path}: {e}")
            raise StoreError() from e
        return [data for data in map(snapshot_to_dict, docs) if data is not None]

    # Live listeners

    def _track(self, path: str, watch: Any) -> Subscription:
        subscription = Subscription(path, watch, on_release=self._untrack)
        with self._subscriptions_lock:
            self._subscriptions.add(subscription)
        return subscription

    def _untrack(self, subscription: Subscription) -> None:
        with self._subscriptions_lock:
            self._subscriptions.discard(subscription)

    def subscribe_document(self, path: str, on_change: DocumentCallback) -> Subscription:
        """Push the document's value now and on every change.

        ``on_change`` receives ``None`` while the document does not exist.
        """

        def callback(snapshots: list[Any], changes: Any, read_time: Any) -> None:
            on_change(snapshot_to_dict(snapshots[0]) if snapshots else None)

        try:
            watch = self.db.document(path).on_snapshot(callback)
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Error subscribing to {path}: {e}")
            raise StoreError() from e
        return self._track(path, watch)

    def subscribe_query(
        self,
        collection_path: str,
        on_change: QueryCallback,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> Subscription:
        """Push the full ordered result set now and on every change."""
        query = self._query(collection_path, order_by, descending, limit)

        def callback(snapshots: list[Any], changes: Any, read_time: Any) -> None:
            on_change(
                [data for data in map(snapshot_to_dict, snapshots) if data is not None]
            )

        try:
            watch = query.on_snapshot(callback)
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"Error subscribing to {collection_path}: {e}")
            raise StoreError() from e
        return self._track(collection_path, watch)

    @property
    def open_subscriptions(self) -> int:
        """Number of listeners not yet released."""
        with self._subscriptions_lock:
            return len(self._subscriptions)

    def close(self) -> None:
        """Release every listener that is still open."""
        with self._subscriptions_lock:
            pending = list(self._subscriptions)
        for subscription in pending:
            subscription.unsubscribe()
        if pending:
            logger.info(f"Closed {len(pending)} open listener(s)")
