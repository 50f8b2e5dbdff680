"""Plain-text helpers for terrain maps and letter boards."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Dict, Sequence

from ..core.constants import CITY_MARKER, SlotStyle, TerrainBand

if TYPE_CHECKING:
    from ..core.models import SlotView, TerrainGrid


BAND_NAMES = {
    TerrainBand.DEEP_WATER.value: "deep water",
    TerrainBand.SHORE.value: "shore",
    TerrainBand.PLAINS.value: "plains",
    TerrainBand.FOREST.value: "forest",
    TerrainBand.HILLS.value: "hills",
    TerrainBand.MOUNTAINS.value: "mountains",
    CITY_MARKER: "city",
}


def format_terrain(grid: TerrainGrid) -> str:
    return grid.to_text()


def format_board(slots: Sequence[SlotView]) -> str:
    """Render slots as ``[A][B][_]``; empty underscore placeholders show as ``_``."""
    cells = []
    for slot in slots:
        if slot.text:
            symbol = slot.text
        elif SlotStyle.PLACEHOLDER_UNDERSCORE in slot.styles:
            symbol = "_"
        else:
            symbol = " "
        if SlotStyle.FIXED_LETTER in slot.styles:
            cells.append(f"<{symbol}>")
        else:
            cells.append(f"[{symbol}]")
    return "".join(cells)


def band_counts(grid: TerrainGrid) -> Dict[str, int]:
    """Count cells per terrain band name; label letters are counted as ``label``."""
    counts: Counter = Counter()
    for row in grid:
        for char in row:
            counts[BAND_NAMES.get(char, "label")] += 1
    return dict(counts)

