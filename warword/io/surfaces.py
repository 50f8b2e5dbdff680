"""Rendering capabilities the engines draw onto.

The host page (or any other front end) implements these protocols. The
``Memory*`` classes keep everything in plain attributes and back the tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence, Tuple

from ..core.models import BoardState, SlotView


class LetterBoard(Protocol):
    """Row of letter slots."""

    def render_grid(self, slots: Sequence[SlotView]) -> None:
        ...

    def set_style_state(self, state: BoardState) -> None:
        ...


class TextView(Protocol):
    def set_text(self, value: str) -> None:
        ...


class ResizeSubscription(Protocol):
    def disconnect(self) -> None:
        ...


class MapSurface(Protocol):
    """Container the terrain map is drawn into.

    Surfaces that can report resizes additionally expose
    ``observe_resize(callback) -> ResizeSubscription``.
    """

    def available_size(self) -> Optional[Tuple[float, float]]:
        """Return ``(width, height)`` in pixels, or ``None`` when unknown."""

    def show_map(self, text: str, color: str) -> None:
        ...


@dataclass
class MemoryLetterBoard:
    slots: List[SlotView] = field(default_factory=list)
    state: BoardState = field(default_factory=BoardState)
    renders: int = 0

    def render_grid(self, slots: Sequence[SlotView]) -> None:
        self.slots = list(slots)
        self.renders += 1

    def set_style_state(self, state: BoardState) -> None:
        self.state = state

    @property
    def text(self) -> str:
        """Slot texts joined, with blanks shown as spaces."""
        return "".join(slot.text or " " for slot in self.slots)


@dataclass
class MemoryTextView:
    text: str = ""
    history: List[str] = field(default_factory=list)

    def set_text(self, value: str) -> None:
        self.text = value
        self.history.append(value)


class _Subscription:
    def __init__(self, surface: "MemoryMapSurface", callback: Callable[[], None]) -> None:
        self._surface = surface
        self.callback = callback

    def disconnect(self) -> None:
        if self in self._surface.observers:
            self._surface.observers.remove(self)


class MemoryMapSurface:
    """In-memory map container with optional resize notifications."""

    def __init__(self, width: float = 0.0, height: float = 0.0, resizable: bool = True) -> None:
        self.width = width
        self.height = height
        self.text: Optional[str] = None
        self.color: Optional[str] = None
        self.draws = 0
        self.observers: List[_Subscription] = []
        if resizable:
            self.observe_resize = self._observe_resize

    def available_size(self) -> Optional[Tuple[float, float]]:
        return (self.width, self.height)

    def show_map(self, text: str, color: str) -> None:
        self.text = text
        self.color = color
        self.draws += 1

    def _observe_resize(self, callback: Callable[[], None]) -> _Subscription:
        subscription = _Subscription(self, callback)
        self.observers.append(subscription)
        return subscription

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        for subscription in list(self.observers):
            subscription.callback()
