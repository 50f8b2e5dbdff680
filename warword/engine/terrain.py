"""Procedural ASCII terrain generation.

Two phases:
  1. Height field: fractal value noise shaped by a radial island mask, then
     classified into terrain bands. Deterministic for a given seed.
  2. Decoration: city markers and one tactical label, placed with an
     independent random source.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..core.constants import (
    BAND_ORDER,
    BAND_THRESHOLDS,
    CITY_MARKER,
    LABEL_CATEGORIES,
    WATER_BANDS,
)
from ..core.models import LabelPlacement, TerrainGrid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

_BAND_SYMBOLS = np.array([band.value for band in BAND_ORDER])


@dataclass
class TerrainConfig:
    """Configuration values driving terrain generation."""

    scale: float = 0.1
    octaves: int = 4
    persistence: float = 0.5
    min_cities: int = 2
    max_cities: int = 4
    margin: int = 5
    seed_range: float = 1000.0

    def __post_init__(self) -> None:
        if self.octaves < 1:
            raise ValueError("octaves must be at least 1")
        if self.min_cities < 0 or self.max_cities < self.min_cities:
            raise ValueError("city bounds must satisfy 0 <= min_cities <= max_cities")


# ----------------------------------------------------------------------
# Height field
# ----------------------------------------------------------------------
def noise2d(x: np.ndarray, y: np.ndarray, seed: float = 0.0) -> np.ndarray:
    """Hash-like pseudo-random value in ``[0, 1)`` for each coordinate pair."""
    n = np.sin(x * 12.9898 + y * 78.233 + seed) * 43758.5453
    return n - np.floor(n)


def fbm(
    x: np.ndarray,
    y: np.ndarray,
    octaves: int = 4,
    persistence: float = 0.5,
    seed: float = 0.0,
) -> np.ndarray:
    """Sum ``octaves`` layers of noise, each at double frequency, normalised to ``[0, 1)``."""
    total = np.zeros(np.broadcast(x, y).shape, dtype=float)
    frequency = 1.0
    amplitude = 1.0
    max_value = 0.0
    for octave in range(octaves):
        total += noise2d(x * frequency, y * frequency, seed + octave) * amplitude
        max_value += amplitude
        amplitude *= persistence
        frequency *= 2.0
    return total / max_value


def island_mask(width: int, height: int) -> np.ndarray:
    """Radial falloff: 1 at the centre, 0 at the edge midpoints and beyond."""
    ys, xs = np.mgrid[0:height, 0:width].astype(float)
    dx = (xs - width / 2) / (width / 2)
    dy = (ys - height / 2) / (height / 2)
    return np.maximum(0.0, 1.0 - np.sqrt(dx * dx + dy * dy))


def classify(values: np.ndarray) -> np.ndarray:
    """Map heights to band symbols by the first threshold each value is strictly below."""
    indices = np.searchsorted(BAND_THRESHOLDS, values, side="right")
    return _BAND_SYMBOLS[indices]


def height_field(width: int, height: int, seed: float, config: Optional[TerrainConfig] = None) -> np.ndarray:
    config = config or TerrainConfig()
    ys, xs = np.mgrid[0:height, 0:width].astype(float)
    noise = fbm(xs * config.scale, ys * config.scale, config.octaves, config.persistence, seed)
    return noise * island_mask(width, height)


# ----------------------------------------------------------------------
# Generator
# ----------------------------------------------------------------------
class TerrainGenerator:
    """Builds :class:`TerrainGrid` maps from a size and a seed."""

    def __init__(self, config: Optional[TerrainConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or TerrainConfig()
        self.rng = rng or random.Random()

    def generate_base(self, width: int, height: int, seed: float) -> Tuple[str, ...]:
        """Return classified rows without decoration."""
        if width <= 0 or height <= 0:
            return ()
        symbols = classify(height_field(width, height, seed, self.config))
        return tuple("".join(row) for row in symbols)

    def generate(self, width: int, height: int, seed: Optional[float] = None) -> TerrainGrid:
        if width <= 0 or height <= 0:
            LOGGER.debug("Skipping terrain for degenerate size %sx%s", width, height)
            return TerrainGrid()
        if seed is None:
            seed = self.rng.random() * self.config.seed_range

        rows = [list(row) for row in self.generate_base(width, height, seed)]
        cities = self._place_cities(rows, width, height)
        label = self._place_label(rows, width, height)
        LOGGER.debug(
            "Generated %sx%s terrain (seed=%.3f, cities=%d, label=%s)",
            width,
            height,
            seed,
            len(cities),
            label.text if label else None,
        )
        return TerrainGrid(
            rows=tuple("".join(row) for row in rows),
            seed=seed,
            cities=tuple(cities),
            label=label,
        )

    # ------------------------------------------------------------------
    # Decoration
    # ------------------------------------------------------------------
    def _margin_coordinate(self, extent: int) -> int:
        margin = self.config.margin
        span = extent - 2 * margin
        if span <= 0:
            return margin
        return margin + self.rng.randrange(span)

    def _place_cities(self, rows: List[List[str]], width: int, height: int) -> List[Tuple[int, int]]:
        placed: List[Tuple[int, int]] = []
        count = self.rng.randint(self.config.min_cities, self.config.max_cities)
        for _ in range(count):
            col = self._margin_coordinate(width)
            row = self._margin_coordinate(height)
            if not (0 <= row < height and 0 <= col < width):
                continue
            # No retry when the cell is water: fewer cities is acceptable.
            if rows[row][col] in WATER_BANDS:
                continue
            rows[row][col] = CITY_MARKER
            placed.append((row, col))
        return placed

    def _place_label(self, rows: List[List[str]], width: int, height: int) -> LabelPlacement:
        category = self.rng.choice(LABEL_CATEGORIES)
        text = self.rng.choice(category)
        margin = self.config.margin

        # Interior rows when there are any, otherwise the last row.
        row = 1 + self.rng.randrange(height - 2) if height > 2 else height - 1
        col_span = width - len(text) - 2 * margin
        col = margin + self.rng.randrange(col_span) if col_span > 0 else max(min(margin, width - len(text)), 0)

        # Labels overwrite whatever is underneath, cities included, and are
        # clipped so every row keeps the grid width.
        visible = text[: max(width - col, 0)]
        rows[row][col : col + len(visible)] = list(visible)
        return LabelPlacement(text=text, row=row, col=col)


def generate(
    width: int,
    height: int,
    seed: Optional[float] = None,
    rng: Optional[random.Random] = None,
    config: Optional[TerrainConfig] = None,
) -> TerrainGrid:
    """Convenience wrapper around :meth:`TerrainGenerator.generate`."""
    return TerrainGenerator(config, rng).generate(width, height, seed)
