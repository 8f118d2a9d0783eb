"""Recent games feed."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from socialbingo.core.constants import (
    EMPTY_BOARD_PREVIEW,
    PREVIEW_ITEM_COUNT,
    PREVIEW_SEPARATOR,
    PREVIEW_TRUNCATION,
    RECENT_GAMES_LIMIT,
)

from .models import GameSummary

if TYPE_CHECKING:
    from socialbingo.store import SessionStore, Subscription


def build_preview(layout: Sequence[str | None] | None) -> str:
    """Join the first few items of a layout into a one-line teaser."""
    if not layout:
        return EMPTY_BOARD_PREVIEW
    items = [cell for cell in layout if cell]
    preview = PREVIEW_SEPARATOR.join(items[:PREVIEW_ITEM_COUNT])
    if len(items) > PREVIEW_ITEM_COUNT:
        preview += PREVIEW_TRUNCATION
    return preview


def summarize_game(game: dict[str, Any]) -> GameSummary:
    """Reduce a game document to what the feed shows."""
    return {
        "id": game["id"],
        "preview": build_preview(game.get("layout")),
        "participantCount": game.get("participantCount") or 0,
    }


def list_recent_games(store: SessionStore) -> list[GameSummary]:
    """Fetch the most recently created games once."""
    games = store.query_documents(
        store.games_path(),
        order_by="createdAt",
        descending=True,
        limit=RECENT_GAMES_LIMIT,
    )
    return [summarize_game(game) for game in games]


class RecentGamesFeed:
    """Live view of the most recently created games."""

    def __init__(self, store: SessionStore) -> None:
        """Prepare a feed; nothing is subscribed until ``subscribe``."""
        self.store = store
        self.games: list[GameSummary] = []

    def subscribe(
        self, on_change: Callable[[list[GameSummary]], None] | None = None
    ) -> Subscription:
        """Start listening; ``on_change`` gets the full summary list each time."""

        def refresh(games: list[dict[str, Any]]) -> None:
            self.games = [summarize_game(game) for game in games]
            if on_change:
                on_change(self.games)

        return self.store.subscribe_query(
            self.store.games_path(),
            refresh,
            order_by="createdAt",
            descending=True,
            limit=RECENT_GAMES_LIMIT,
        )
