"""Draw terrain maps into host surfaces and keep them sized to the container."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..core.constants import DEFAULT_MAP_COLOR
from ..core.models import TerrainGrid
from ..engine.terrain import TerrainGenerator
from ..utils.logger import get_logger
from ..utils.pretty import format_terrain
from .surfaces import MapSurface, ResizeSubscription


LOGGER = get_logger(__name__)


@dataclass
class MapOptions:
    """Presentation settings for :class:`MapRenderer`.

    The grid size is derived from the container size with a monospace
    approximation: each character is ``font_size * char_width_ratio`` wide
    and ``line_height`` tall.
    """

    color: str = DEFAULT_MAP_COLOR
    font_size: float = 12.0
    line_height: float = 12.0
    char_width_ratio: float = 0.6
    seed: Optional[float] = None

    def __post_init__(self) -> None:
        if self.font_size <= 0 or self.line_height <= 0 or self.char_width_ratio <= 0:
            raise ValueError("font metrics must be positive")

    @property
    def char_width(self) -> float:
        return self.font_size * self.char_width_ratio

    def grid_size(self, width: float, height: float) -> Tuple[int, int]:
        """Return ``(cols, rows)`` that fit in a ``width`` x ``height`` pixel area."""
        return math.floor(width / self.char_width), math.floor(height / self.line_height)


class MapRenderer:
    """Generates a map sized to a surface and keeps one resize observer per surface."""

    def __init__(
        self,
        options: Optional[MapOptions] = None,
        generator: Optional[TerrainGenerator] = None,
    ) -> None:
        self.options = options or MapOptions()
        self.generator = generator or TerrainGenerator()
        self._observers: Dict[int, Tuple[MapSurface, ResizeSubscription]] = {}

    def draw_map(self, surface: Optional[MapSurface]) -> Optional[TerrainGrid]:
        if surface is None:
            return None
        size = surface.available_size()
        if not size:
            return None
        cols, rows = self.options.grid_size(*size)
        if cols <= 0 or rows <= 0:
            LOGGER.debug("Surface too small for a map (%sx%s px)", *size)
            return None

        grid = self.generator.generate(cols, rows, self.options.seed)
        surface.show_map(format_terrain(grid), self.options.color)
        return grid

    def enable_auto_resize(self, surface: Optional[MapSurface], draw: bool = True) -> bool:
        """Redraw ``surface`` whenever it resizes; returns ``False`` when unsupported.

        ``draw=False`` skips the immediate draw for callers that already drew.
        """
        if surface is None:
            return False
        observe = getattr(surface, "observe_resize", None)
        if observe is None:
            LOGGER.debug("Surface %r cannot report resizes", surface)
            return False

        self.disable_auto_resize(surface)
        subscription = observe(lambda: self.draw_map(surface))
        self._observers[id(surface)] = (surface, subscription)
        if draw:
            self.draw_map(surface)
        return True

    def disable_auto_resize(self, surface: Optional[MapSurface]) -> None:
        if surface is None:
            return
        registered = self._observers.pop(id(surface), None)
        if registered is not None:
            registered[1].disconnect()

    def observed(self, surface: MapSurface) -> bool:
        return id(surface) in self._observers

    def close(self) -> None:
        for surface, _ in list(self._observers.values()):
            self.disable_auto_resize(surface)
