"""Display name generation for new participants."""

from __future__ import annotations

import random
from typing import Any

from socialbingo.core.constants import (
    ADJECTIVES,
    COLORS,
    NAME_NUMBER_MAX,
    NAME_SEPARATOR,
    NOUNS,
)


def generate_funny_name(rng: Any = None) -> str:
    """Return a name like ``Red-Funky-Badger-7``. Uniqueness is not guaranteed."""
    if rng is None:
        rng = random
    color = rng.choice(COLORS)
    adjective = rng.choice(ADJECTIVES)
    noun = rng.choice(NOUNS)
    number = rng.randint(1, NAME_NUMBER_MAX)
    return NAME_SEPARATOR.join([color, adjective, noun, str(number)])
