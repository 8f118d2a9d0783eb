"""Board layout generation."""

from __future__ import annotations

import random
from collections.abc import MutableSequence, Sequence
from typing import Any

from socialbingo.core.constants import COLS, MAX_ITEMS, MIN_ITEMS, ROWS
from socialbingo.errors import ValidationError


def parse_items(text: str | None) -> list[str]:
    """Split free text into items, one per non-blank line."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def validate_items(items: Sequence[str]) -> None:
    """Reject item lists the generator cannot lay out."""
    if not MIN_ITEMS <= len(items) <= MAX_ITEMS:
        raise ValidationError(
            f"Please enter between {MIN_ITEMS} and {MAX_ITEMS} items "
            f"(got {len(items)})."
        )


def fisher_yates(values: MutableSequence[Any], rng: Any = random) -> None:
    """Shuffle ``values`` in place, walking from the last index down."""
    for i in range(len(values) - 1, 0, -1):
        j = rng.randint(0, i)
        values[i], values[j] = values[j], values[i]


class LayoutGenerator:
    """Turns a validated list of items into a flat ROWS x COLS layout."""

    @staticmethod
    def distribute(items: Sequence[str]) -> list[list[str | None]]:
        """Deal items into row buckets round-robin."""
        rows: list[list[str | None]] = [[] for _ in range(ROWS)]
        for index, item in enumerate(items):
            rows[index % ROWS].append(item)
        return rows

    @staticmethod
    def generate(items: Sequence[str], rng: Any = None) -> list[str | None]:
        """Build a layout with every item once and ``None`` in the gaps.

        The whole list is shuffled first so input order leaves no trace, then
        dealt round-robin so no two rows differ by more than one item. Each
        row is padded with gaps to COLS and shuffled again on its own.
        """
        if rng is None:
            rng = random
        shuffled = list(items)
        fisher_yates(shuffled, rng)

        layout: list[str | None] = []
        for row in LayoutGenerator.distribute(shuffled):
            row.extend([None] * (COLS - len(row)))
            fisher_yates(row, rng)
            layout.extend(row)
        return layout
