"""Service layer for game creation, joining and per-participant state."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore
from flask import current_app

from socialbingo.core.constants import (
    GAME_ID_ALPHABET,
    GAME_ID_LENGTH,
    TOTAL_CELLS,
)
from socialbingo.errors import NotFoundError, ValidationError

from .generator import LayoutGenerator, parse_items, validate_items
from .names import generate_funny_name
from .presence import order_participants

if TYPE_CHECKING:
    from socialbingo.store import SessionStore

    from .models import Game, Participant


def new_game_id(rng: Any = None) -> str:
    """Return a short random game id. Collisions are accepted as negligible."""
    if rng is None:
        rng = random
    return "".join(rng.choice(GAME_ID_ALPHABET) for _ in range(GAME_ID_LENGTH))


class GameService:
    """Handles business logic and data access for games."""

    @staticmethod
    def create_game(
        store: SessionStore, creator_id: str, items_text: str, rng: Any = None
    ) -> dict[str, Any]:
        """Validate the item list, lay out a board and persist it."""
        items = parse_items(items_text)
        validate_items(items)

        layout = LayoutGenerator.generate(items, rng=rng)
        game_id = new_game_id(rng)
        store.create_document(
            store.game_path(game_id),
            {
                "layout": layout,
                "createdAt": firestore.SERVER_TIMESTAMP,
                "creatorId": creator_id,
                "participantCount": 0,
            },
        )
        current_app.logger.info(
            f"Game {game_id} created by {creator_id} with {len(items)} items"
        )
        return {"id": game_id, "layout": layout}

    @staticmethod
    def get_game(store: SessionStore, game_id: str) -> Game:
        """Fetch a game or raise ``NotFoundError``."""
        game = store.read_document(store.game_path(game_id))
        if game is None:
            raise NotFoundError("Game not found.")
        return game  # type: ignore[return-value]

    @staticmethod
    def get_participant(
        store: SessionStore, game_id: str, user_id: str
    ) -> Participant | None:
        """Fetch one participant record, if it exists."""
        return store.read_document(store.participant_path(game_id, user_id))  # type: ignore[return-value]

    @staticmethod
    def list_participants(store: SessionStore, game_id: str) -> list[Participant]:
        """Every participant of a game in presence order."""
        records = store.query_documents(store.participants_path(game_id))
        return order_participants(records)  # type: ignore[arg-type]

    @staticmethod
    def ensure_joined(store: SessionStore, game_id: str, user_id: str) -> bool:
        """Create the caller's participant record if it does not exist yet.

        Returns True when a record was created. The read and the create are
        separate calls, so two first joins racing for the same identity can
        both create and both increment ``participantCount``.
        """
        participant_path = store.participant_path(game_id, user_id)
        if store.read_document(participant_path) is not None:
            return False

        name = generate_funny_name()
        store.merge_document(
            participant_path,
            {
                "name": name,
                "checkedIndices": [],
                "userId": user_id,
                "lastActive": firestore.SERVER_TIMESTAMP,
            },
        )
        store.increment_field(store.game_path(game_id), "participantCount", 1)
        current_app.logger.info(f"{user_id} joined game {game_id} as {name}")
        return True

    @staticmethod
    def toggle_cell(
        store: SessionStore, game_id: str, user_id: str, index: int
    ) -> list[int]:
        """Flip one cell in the caller's marked set and return the new set.

        Gap cells are ignored. The read only decides the direction; the write
        is an atomic array union or remove, so toggles from another tab of the
        same identity are not overwritten. Every real toggle also refreshes
        ``lastActive``, which moves the caller to the front of the presence
        ordering.
        """
        if not 0 <= index < TOTAL_CELLS:
            raise ValidationError(f"Cell {index} is outside the board.")

        game = GameService.get_game(store, game_id)
        participant = GameService.get_participant(store, game_id, user_id)
        if participant is None:
            raise NotFoundError("Join the game before marking cells.")

        checked = set(participant.get("checkedIndices") or [])
        layout = game.get("layout") or []
        if index >= len(layout) or layout[index] is None:
            return sorted(checked)

        if index in checked:
            checked.discard(index)
            change = firestore.ArrayRemove([index])
        else:
            checked.add(index)
            change = firestore.ArrayUnion([index])
        store.merge_document(
            store.participant_path(game_id, user_id),
            {"checkedIndices": change, "lastActive": firestore.SERVER_TIMESTAMP},
        )
        return sorted(checked)

    @staticmethod
    def rename_participant(
        store: SessionStore, game_id: str, user_id: str, name: str | None
    ) -> str:
        """Change the caller's display name; also counts as activity."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Name cannot be empty.")
        if GameService.get_participant(store, game_id, user_id) is None:
            raise NotFoundError("Join the game before changing your name.")
        store.merge_document(
            store.participant_path(game_id, user_id),
            {"name": name, "lastActive": firestore.SERVER_TIMESTAMP},
        )
        return name
