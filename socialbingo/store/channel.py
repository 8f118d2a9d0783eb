"""Funnel listener callbacks into a single consumer."""

from __future__ import annotations

import queue
from collections.abc import Callable
from typing import Any


class SnapshotChannel:
    """Queue of ``(source, snapshot)`` pairs fed by store listeners.

    Listener callbacks may run on SDK threads; the consumer reads the channel
    on its own thread and applies each full snapshot in arrival order.
    """

    def __init__(self) -> None:
        """Create an empty channel."""
        self._queue: queue.Queue[tuple[str, Any]] = queue.Queue()

    def sink(self, source: str) -> Callable[[Any], None]:
        """Return a listener callback that tags its snapshots with ``source``."""

        def push(snapshot: Any) -> None:
            self._queue.put((source, snapshot))

        return push

    def get(self, timeout: float | None = None) -> tuple[str, Any] | None:
        """Return the next snapshot, or ``None`` if none arrived in time."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
