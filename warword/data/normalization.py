"""Shared helpers for word normalization and chaos text."""

from __future__ import annotations

import random
from typing import Optional

from ..core.constants import ALPHABET


def clean_word(text: Optional[str]) -> str:
    """Return ``text`` stripped and uppercased; spaces inside the word are kept."""

    if not text:
        return ""
    return text.strip().upper()


def scramble_text(text: str, rng: random.Random) -> str:
    """Replace every non-space character of ``text`` with a random lowercase letter."""

    return "".join(" " if char == " " else rng.choice(ALPHABET) for char in text)


__all__ = ["clean_word", "scramble_text"]
