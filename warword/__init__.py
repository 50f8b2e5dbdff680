"""ASCII terrain backdrop and pointer-driven word puzzle.

This package exposes the public API surface via:

- ``warword.engine.terrain.TerrainGenerator``: procedural ASCII maps.
- ``warword.engine.puzzle.PuzzleEngine``: the chaos/idle word puzzle.
- ``warword.io.map_renderer.MapRenderer``: sizes and redraws maps on host surfaces.
- ``warword.session.WarwordSession``: wires all of the above together.
"""

from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.puzzle import PuzzleConfig, PuzzleEngine
from .engine.terrain import TerrainConfig, TerrainGenerator, generate
from .io.map_renderer import MapOptions, MapRenderer
from .session import WarwordSession

__all__ = [
    "DictionaryConfig",
    "WordDictionary",
    "PuzzleConfig",
    "PuzzleEngine",
    "TerrainConfig",
    "TerrainGenerator",
    "generate",
    "MapOptions",
    "MapRenderer",
    "WarwordSession",
]

__version__ = "0.1.0"
