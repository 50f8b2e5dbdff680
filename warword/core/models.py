"""Data models shared by the terrain generator and the puzzle engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterator, Optional, Tuple

from .constants import SlotStyle


@dataclass(frozen=True)
class DictionaryEntry:
    """A word with its definition and context alternatives."""

    word: str
    definitions: Tuple[str, ...] = ()
    contexts: Tuple[str, ...] = ()

    @property
    def is_usable(self) -> bool:
        return bool(self.word and self.word.strip())


@dataclass(frozen=True)
class Placement:
    """A word placed at ``offset`` among the letter slots."""

    word: str
    offset: int
    definition: str = ""
    context: str = ""

    @property
    def end(self) -> int:
        return self.offset + len(self.word)

    def covers(self, index: int) -> bool:
        return self.offset <= index < self.end

    def char_at(self, index: int) -> Optional[str]:
        """Return the letter shown at slot ``index`` or ``None`` outside the word."""
        if not self.covers(index):
            return None
        return self.word[index - self.offset]


@dataclass
class PuzzleState:
    """Mutable state owned by a single :class:`~warword.engine.puzzle.PuzzleEngine`."""

    current_word: Optional[str] = None
    current_offset: int = 0
    fixed_index: Optional[int] = None
    current_definition: str = ""
    current_context: str = ""
    mouse_moving: bool = False


@dataclass(frozen=True)
class SlotView:
    """What a single letter slot should display."""

    text: str = ""
    styles: FrozenSet[SlotStyle] = frozenset()


@dataclass(frozen=True)
class BoardState:
    """Board-wide style state pushed to a letter board."""

    chaos: bool = False
    fixed_index: Optional[int] = None


@dataclass(frozen=True)
class LabelPlacement:
    text: str
    row: int
    col: int


@dataclass(frozen=True)
class TerrainGrid:
    """Character rows of a generated map.

    Rows all share the same width. An empty grid has no rows and is what
    degenerate requests produce.
    """

    rows: Tuple[str, ...] = ()
    seed: Optional[float] = None
    cities: Tuple[Tuple[int, int], ...] = ()
    label: Optional[LabelPlacement] = None

    @property
    def height(self) -> int:
        return len(self.rows)

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    def is_empty(self) -> bool:
        return not self.rows

    def to_text(self) -> str:
        return "\n".join(self.rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, index: int) -> str:
        return self.rows[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self.rows)
