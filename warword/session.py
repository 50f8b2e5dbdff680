"""Session wiring: one puzzle engine, one map renderer, one set of surfaces."""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.puzzle import PuzzleConfig, PuzzleEngine
from .engine.terrain import TerrainConfig, TerrainGenerator
from .io.map_renderer import MapOptions, MapRenderer
from .io.surfaces import LetterBoard, MapSurface, TextView
from .utils.logger import get_logger
from .utils.pretty import band_counts


LOGGER = get_logger(__name__)


class WarwordSession:
    """Created when the host page starts, closed when its surfaces go away.

    Every word change redraws the background map.
    """

    def __init__(
        self,
        board: LetterBoard,
        definition_view: TextView,
        context_view: Optional[TextView] = None,
        map_surface: Optional[MapSurface] = None,
        dictionary_config: Optional[DictionaryConfig] = None,
        puzzle_config: Optional[PuzzleConfig] = None,
        map_options: Optional[MapOptions] = None,
        terrain_config: Optional[TerrainConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.board = board
        self.definition_view = definition_view
        self.context_view = context_view
        self.map_surface = map_surface
        self.dictionary_config = dictionary_config or DictionaryConfig()
        self.puzzle_config = puzzle_config or PuzzleConfig()
        self.rng = rng or random.Random(self.puzzle_config.seed)
        self.renderer = MapRenderer(map_options, TerrainGenerator(terrain_config, self.rng))
        self.engine: Optional[PuzzleEngine] = None

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def open(self, dictionary: Optional[WordDictionary] = None) -> PuzzleEngine:
        """Load the dictionary (unless given), start the engine and the map."""
        if self.engine is not None:
            return self.engine
        if dictionary is None:
            dictionary = WordDictionary.load_or_empty(self.dictionary_config)

        self.engine = PuzzleEngine(
            dictionary,
            self.board,
            self.definition_view,
            self.context_view,
            config=self.puzzle_config,
            background=self.redraw_map,
            rng=self.rng,
        )
        self.engine.start()
        # start() already drew the first map through the background hook.
        self.renderer.enable_auto_resize(self.map_surface, draw=False)
        LOGGER.info("Session opened with %d dictionary entries", len(dictionary))
        return self.engine

    async def open_async(self) -> PuzzleEngine:
        """Like :meth:`open` but loads the dictionary off the event loop."""
        dictionary = await asyncio.to_thread(WordDictionary.load_or_empty, self.dictionary_config)
        return self.open(dictionary)

    def redraw_map(self) -> None:
        grid = self.renderer.draw_map(self.map_surface)
        if grid is not None and LOGGER.isEnabledFor(logging.DEBUG):
            LOGGER.debug("Map %dx%d redrawn: %s", grid.width, grid.height, band_counts(grid))

    def pointer_moved(self) -> None:
        if self.engine is not None:
            self.engine.pointer_moved()

    def close(self) -> None:
        if self.engine is not None:
            self.engine.close()
            self.engine = None
        self.renderer.close()
        LOGGER.info("Session closed")

    def __enter__(self) -> "WarwordSession":
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
