"""Data models for the game blueprint."""

from __future__ import annotations

from typing import Any, TypedDict

from socialbingo.core.types import FirestoreDocument


class Game(FirestoreDocument, total=False):
    """A game document in Firestore."""

    layout: list[str | None]
    creatorId: str
    participantCount: int


class Participant(TypedDict, total=False):
    """One identity's marked cells and display name within a game."""

    userId: str
    name: str
    checkedIndices: list[int]
    lastActive: Any


class GameSummary(TypedDict):
    """An entry in the recent games feed."""

    id: str
    preview: str
    participantCount: int
