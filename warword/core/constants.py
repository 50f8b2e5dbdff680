"""Shared constants and enumerations for terrain maps and the word puzzle."""

from __future__ import annotations

from enum import Enum
from typing import Tuple


class TerrainBand(str, Enum):
    """Terrain classes ordered from lowest to highest elevation."""

    DEEP_WATER = "~"
    SHORE = "."
    PLAINS = ","
    FOREST = "+"
    HILLS = "^"
    MOUNTAINS = "A"


class SlotStyle(str, Enum):
    """Visual flags a letter slot can carry."""

    PLACEHOLDER_UNDERSCORE = "placeholder-underscore"
    FIXED_LETTER = "fixed-letter"
    CHAOS = "chaos"


# Upper bounds for every band except the last; a height lands in the first
# band whose bound it is strictly below.
BAND_THRESHOLDS: Tuple[float, ...] = (0.3, 0.4, 0.5, 0.65, 0.8)
BAND_ORDER: Tuple[TerrainBand, ...] = tuple(TerrainBand)
WATER_BANDS = frozenset({TerrainBand.DEEP_WATER.value, TerrainBand.SHORE.value})

CITY_MARKER = "#"

LABEL_CATEGORIES: Tuple[Tuple[str, ...], ...] = (
    ("ENEMY", "FOE", "HOSTILE", "OPFOR", "ADVERSARY"),
    ("ALLY", "FRIEND", "FRIENDLY", "PARTNER", "COHORT"),
    ("SUSPECT", "UNKNOWN", "MYSTERY", "QUERY", "SHADOW"),
    ("TARGET", "OBJECTIVE", "MARK", "GOAL", "AIM"),
)

ALPHABET = "abcdefghijklmnopqrstuvwxyz"
ALPHABET_UPPER = ALPHABET.upper()

LETTER_COUNT = 7
FALLBACK_WORD = "WARWORD"
SPACE_GLYPH = "_"

# Seconds
QUIET_PERIOD = 0.2
LETTER_TICK = 0.06
DEFINITION_TICK = 0.04
CONTEXT_TICK = 0.04

DEFAULT_MAP_COLOR = "#e6e6e6"
