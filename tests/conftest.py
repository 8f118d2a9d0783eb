"""Common utilities for tests."""

from __future__ import annotations

from typing import Any

from socialbingo import create_app
from tests.mock_utils import MockSessionStore

ITEMS_10 = [f"Item {n}" for n in range(1, 11)]
ITEMS_20 = [f"Item {n}" for n in range(1, 21)]

# Cells 0-5 hold items, 6-11 are gaps, the rest alternate.
SAMPLE_LAYOUT: list[Any] = (
    [f"Cell {n}" for n in range(6)]
    + [None] * 6
    + [f"Cell {n}" if n % 2 == 0 else None for n in range(12, 24)]
)


def make_app(store: MockSessionStore | None = None, **config: Any) -> Any:
    """Build a testing app around an in-memory store."""
    test_config = {
        "TESTING": True,
        "SERVER_NAME": "localhost",
        "STREAM_HEARTBEAT_SECONDS": 0.01,
    }
    test_config.update(config)
    return create_app(test_config, store=store or MockSessionStore())
