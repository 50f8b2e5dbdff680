"""Word puzzle state machine driven by pointer activity.

Idle -> Chaos happens on the first pointer move. Chaos -> Idle happens once
the pointer has been quiet for ``quiet_period`` seconds; at that point the
engine swaps in a new word that shares the letter of the pinned slot.
"""

from __future__ import annotations

import asyncio
import dataclasses
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.constants import (
    ALPHABET_UPPER,
    CONTEXT_TICK,
    DEFINITION_TICK,
    FALLBACK_WORD,
    LETTER_COUNT,
    LETTER_TICK,
    QUIET_PERIOD,
    SPACE_GLYPH,
    SlotStyle,
)
from ..core.models import BoardState, DictionaryEntry, Placement, PuzzleState, SlotView
from ..data.dictionary import WordDictionary
from ..data.normalization import clean_word, scramble_text
from ..io.surfaces import LetterBoard, TextView
from ..utils.logger import get_logger
from ..utils.pretty import format_board
from .scheduler import Debouncer, PeriodicTask
from .selection import choose_candidate, choose_initial, find_candidates, target_letter


LOGGER = get_logger(__name__)


@dataclass
class PuzzleConfig:
    letter_count: int = LETTER_COUNT
    quiet_period: float = QUIET_PERIOD
    letter_tick: float = LETTER_TICK
    definition_tick: float = DEFINITION_TICK
    context_tick: float = CONTEXT_TICK
    fallback_word: str = FALLBACK_WORD
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        self.fallback_word = clean_word(self.fallback_word)
        if self.letter_count < 1:
            raise ValueError("letter_count must be at least 1")
        if len(self.fallback_word) > self.letter_count:
            raise ValueError(
                f"fallback word {self.fallback_word!r} does not fit in {self.letter_count} slots"
            )
        if min(self.letter_tick, self.definition_tick, self.context_tick) <= 0:
            raise ValueError("tick intervals must be positive")
        if self.quiet_period < 0:
            raise ValueError("quiet_period must not be negative")


class ChaosText:
    """A text view that flickers random letters while its task runs."""

    def __init__(self, view: TextView, interval: float, rng: random.Random, name: str) -> None:
        self.view = view
        self.rng = rng
        self.text = ""
        self.task = PeriodicTask(interval, self._tick, name=name)

    @property
    def running(self) -> bool:
        return self.task.running

    def set(self, text: str, animate: bool) -> None:
        self.text = text
        if animate:
            self.start()
        else:
            self.stop()

    def start(self) -> bool:
        return self.task.start()

    def stop(self) -> None:
        """Halt the flicker and put the true text back."""
        self.task.stop()
        self.view.set_text(self.text)

    def _tick(self) -> None:
        self.view.set_text(scramble_text(self.text, self.rng))


class PuzzleEngine:
    """Owns the puzzle state and the timers that animate it."""

    def __init__(
        self,
        dictionary: WordDictionary,
        board: LetterBoard,
        definition_view: TextView,
        context_view: Optional[TextView] = None,
        config: Optional[PuzzleConfig] = None,
        background: Optional[Callable[[], object]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or PuzzleConfig()
        self.dictionary = dictionary
        self.board = board
        self.background = background
        self.rng = rng or random.Random(self.config.seed)
        self._state = PuzzleState()
        self._closed = False

        self._letter_chaos = PeriodicTask(self.config.letter_tick, self._letter_tick, name="letter-chaos")
        self._definition = ChaosText(definition_view, self.config.definition_tick, self.rng, "definition-chaos")
        self._context = (
            ChaosText(context_view, self.config.context_tick, self.rng, "context-chaos")
            if context_view is not None
            else None
        )
        self._debouncer = Debouncer(self.config.quiet_period, self.pointer_stopped)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def state(self) -> PuzzleState:
        """Snapshot of the current state."""
        return dataclasses.replace(self._state)

    @property
    def placement(self) -> Placement:
        state = self._state
        return Placement(
            word=state.current_word or "",
            offset=state.current_offset,
            definition=state.current_definition,
            context=state.current_context,
        )

    @property
    def chaos_active(self) -> bool:
        return self._letter_chaos.running

    def timers_running(self) -> List[str]:
        tasks = [self._letter_chaos, self._definition.task]
        if self._context is not None:
            tasks.append(self._context.task)
        return [task.name for task in tasks if task.running]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> Placement:
        """Choose the first word and render it."""
        placement = choose_initial(self._fitting_entries(), self.config.letter_count, self.rng)
        if placement is None:
            LOGGER.warning(
                "No usable dictionary entries; falling back to %s", self.config.fallback_word
            )
            placement = Placement(word=self.config.fallback_word, offset=0)
        self._apply(placement)
        self._render()
        return self.placement

    def close(self) -> None:
        """Cancel every timer. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._debouncer.cancel()
        self._letter_chaos.stop()
        self._definition.task.stop()
        if self._context is not None:
            self._context.task.stop()
        LOGGER.debug("Puzzle engine closed")

    # ------------------------------------------------------------------
    # Pointer handlers
    # ------------------------------------------------------------------
    def pointer_moved(self) -> None:
        """Enter (or stay in) chaos and restart the quiet-period countdown.

        Must be called from the event loop thread; without a running loop this
        raises ``RuntimeError`` and leaves the state untouched.
        """
        if self._closed:
            return
        asyncio.get_running_loop()
        state = self._state
        state.mouse_moving = True
        if state.current_word is not None:
            if state.fixed_index is None:
                state.fixed_index = self._pick_fixed_index()
            if self._letter_chaos.start():
                self.board.set_style_state(BoardState(chaos=True, fixed_index=state.fixed_index))
            self._definition.start()
            if self._context is not None:
                self._context.start()
        self._debouncer.trigger()

    def pointer_stopped(self) -> None:
        """Leave chaos and settle on a word consistent with the pinned slot."""
        self._debouncer.cancel()
        self._state.mouse_moving = False
        self._letter_chaos.stop()
        self._definition.stop()
        if self._context is not None:
            self._context.stop()
        self._settle()
        self.board.set_style_state(BoardState())

    # ------------------------------------------------------------------
    # Text setters
    # ------------------------------------------------------------------
    def set_definition(self, text: str) -> None:
        self._state.current_definition = text
        self._definition.set(text, animate=self._state.mouse_moving)

    def set_context(self, text: str) -> None:
        self._state.current_context = text
        if self._context is not None:
            self._context.set(text, animate=self._state.mouse_moving)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _fitting_entries(self) -> List[DictionaryEntry]:
        return self.dictionary.usable(max_length=self.config.letter_count)

    def _pick_fixed_index(self) -> int:
        word = self._state.current_word or ""
        if not word:
            return self.rng.randrange(self.config.letter_count)
        return self._state.current_offset + self.rng.randrange(len(word))

    def _settle(self) -> None:
        state = self._state
        fixed = state.fixed_index
        if fixed is None:
            self._render()
            return

        target = target_letter(state.current_word, state.current_offset, fixed)
        candidates = find_candidates(
            self._fitting_entries(), fixed, target, self.config.letter_count, self.rng
        )
        choice = choose_candidate(candidates, self.rng)
        if choice is None:
            LOGGER.debug("No word matches %r at slot %d; keeping %s", target, fixed, state.current_word)
        else:
            LOGGER.debug(
                "Picked %s at offset %d from %d candidates (slot %d = %r)",
                choice.word,
                choice.offset,
                len(candidates),
                fixed,
                target,
            )
            self._apply(choice)
        self._render()
        state.fixed_index = None

    def _apply(self, placement: Placement) -> None:
        self._state.current_word = placement.word
        self._state.current_offset = placement.offset
        self.set_definition(placement.definition)
        self.set_context(placement.context)
        if self.background is not None:
            self.background()

    def _glyph(self, index: int) -> str:
        char = self.placement.char_at(index)
        if char is None:
            return ""
        return SPACE_GLYPH if char == " " else char

    def slot_views(self) -> List[SlotView]:
        """Idle rendering of the current word."""
        fixed = self._state.fixed_index
        placement = self.placement
        slots = []
        for index in range(self.config.letter_count):
            styles = set()
            if index == fixed:
                styles.add(SlotStyle.FIXED_LETTER)
            if not placement.covers(index):
                styles.add(SlotStyle.PLACEHOLDER_UNDERSCORE)
            slots.append(SlotView(text=self._glyph(index), styles=frozenset(styles)))
        return slots

    def chaos_slot_views(self) -> List[SlotView]:
        """One chaos frame: random letters everywhere except the pinned slot."""
        fixed = self._state.fixed_index
        slots = []
        for index in range(self.config.letter_count):
            if index == fixed:
                slots.append(
                    SlotView(
                        text=self._glyph(index),
                        styles=frozenset({SlotStyle.FIXED_LETTER, SlotStyle.CHAOS}),
                    )
                )
            else:
                slots.append(
                    SlotView(text=self.rng.choice(ALPHABET_UPPER), styles=frozenset({SlotStyle.CHAOS}))
                )
        return slots

    def _render(self) -> None:
        slots = self.slot_views()
        self.board.render_grid(slots)
        LOGGER.debug("Board %s", format_board(slots))

    def _letter_tick(self) -> None:
        self.board.render_grid(self.chaos_slot_views())
