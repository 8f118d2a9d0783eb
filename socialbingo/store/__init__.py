"""Access to the real-time document store."""

from .channel import SnapshotChannel
from .gateway import SessionStore, Subscription

__all__ = ["SessionStore", "SnapshotChannel", "Subscription"]
