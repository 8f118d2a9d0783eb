"""Live view of one game for one participant."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from socialbingo.store import SnapshotChannel
from socialbingo.utils import to_jsonable

from .presence import order_participants
from .services import GameService

if TYPE_CHECKING:
    from socialbingo.store import SessionStore, Subscription

    from .models import Game, Participant

logger = logging.getLogger(__name__)

LOADING = "loading"
NOT_FOUND = "not_found"
READY = "ready"

GAME_SOURCE = "game"
PARTICIPANTS_SOURCE = "participants"


class GameSync:
    """Keeps one client's picture of a game current.

    Opening subscribes to the game document. The first time the game is seen
    the caller is joined and the participant collection is subscribed too.
    Every snapshot replaces the previous state outright: participants are
    re-ordered from the full list, never patched.

    Use it as a context manager so the listeners are released however the
    observing scope ends.
    """

    def __init__(self, store: SessionStore, game_id: str, user_id: str) -> None:
        """Prepare the view; nothing is subscribed until ``open``."""
        self.store = store
        self.game_id = game_id
        self.user_id = user_id
        self.status = LOADING
        self.game: Game | None = None
        self.participants: list[Participant] = []
        self.me: Participant | None = None
        self.joined = False
        self._channel = SnapshotChannel()
        self._subscriptions: list[Subscription] = []

    def open(self) -> GameSync:
        """Start listening to the game document."""
        self._subscriptions.append(
            self.store.subscribe_document(
                self.store.game_path(self.game_id), self._channel.sink(GAME_SOURCE)
            )
        )
        return self

    def close(self) -> None:
        """Release every listener this view opened."""
        while self._subscriptions:
            self._subscriptions.pop().unsubscribe()

    def __enter__(self) -> GameSync:
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def apply(self, source: str, snapshot: Any) -> None:
        """Fold one snapshot into the view."""
        if source == GAME_SOURCE:
            self._apply_game(snapshot)
        elif source == PARTICIPANTS_SOURCE:
            self._apply_participants(snapshot)

    def _apply_game(self, game: Game | None) -> None:
        if game is None:
            self.status = NOT_FOUND
            self.game = None
            return
        self.status = READY
        self.game = game
        if self.joined:
            return
        self.joined = True
        GameService.ensure_joined(self.store, self.game_id, self.user_id)
        self._subscriptions.append(
            self.store.subscribe_query(
                self.store.participants_path(self.game_id),
                self._channel.sink(PARTICIPANTS_SOURCE),
            )
        )

    def _apply_participants(self, records: list[Participant]) -> None:
        self.participants = order_participants(records)
        self.me = next(
            (p for p in self.participants if p.get("userId") == self.user_id), None
        )

    def pump(self, timeout: float | None = None) -> bool:
        """Apply the next queued snapshot; False if none arrived in time."""
        item = self._channel.get(timeout=timeout)
        if item is None:
            return False
        self.apply(*item)
        return True

    def state(self) -> dict[str, Any]:
        """Serialisable snapshot of the whole view."""
        return to_jsonable({
            "status": self.status,
            "gameId": self.game_id,
            "game": self.game,
            "participants": self.participants,
            "me": self.me,
        })

    def events(self, timeout: float | None = None) -> Iterator[dict[str, Any] | None]:
        """Yield the state after every applied snapshot.

        ``None`` is yielded when nothing arrived within ``timeout`` so the
        caller can keep its connection alive.
        """
        yield self.state()
        while True:
            if self.pump(timeout=timeout):
                yield self.state()
            else:
                logger.debug(f"No updates for game {self.game_id}")
                yield None
