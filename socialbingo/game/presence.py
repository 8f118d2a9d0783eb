"""Presence ordering of participant records."""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from typing import Any

from .models import Participant


def recency_key(value: Any) -> float:
    """Map a ``lastActive`` value to seconds; missing values sort oldest."""
    if value is None:
        return float("-inf")
    if hasattr(value, "to_datetime"):
        value = value.to_datetime()
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return value.timestamp()
    if isinstance(value, (int, float)):
        return float(value)
    return float("-inf")


def order_participants(records: Iterable[Participant]) -> list[Participant]:
    """Most recently active first; ties fall back to ``userId``."""
    by_user = sorted(records, key=lambda p: str(p.get("userId", "")))
    return sorted(by_user, key=lambda p: recency_key(p.get("lastActive")), reverse=True)
