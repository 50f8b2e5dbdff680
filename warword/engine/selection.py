"""Word selection consistent with a pinned letter slot."""

from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence

from ..core.models import DictionaryEntry, Placement


def pick_alternative(options: Sequence[str], rng: random.Random) -> str:
    """Choose one definition or context uniformly; empty when there is none."""
    if not options:
        return ""
    return rng.choice(options)


def random_offset(word: str, letter_count: int, rng: random.Random) -> int:
    return rng.randrange(max(letter_count - len(word) + 1, 1))


def target_letter(word: Optional[str], offset: int, fixed_index: int) -> Optional[str]:
    """Letter the current word shows at ``fixed_index``, or ``None`` outside its span."""
    if not word:
        return None
    index = fixed_index - offset
    if 0 <= index < len(word):
        return word[index]
    return None


def find_candidates(
    entries: Iterable[DictionaryEntry],
    fixed_index: int,
    target: Optional[str],
    letter_count: int,
    rng: Optional[random.Random] = None,
) -> List[Placement]:
    """Return every (word, offset) placement that covers ``fixed_index``.

    When ``target`` is given the word must carry that letter at the pinned
    slot; otherwise any covering placement qualifies. Entries without a word
    are skipped. ``rng`` resolves definition and context alternatives.
    """

    rng = rng or random.Random()
    candidates: List[Placement] = []
    for entry in entries:
        if not entry.is_usable:
            continue
        word = entry.word.upper()
        for offset in range(0, letter_count - len(word) + 1):
            index = fixed_index - offset
            if not 0 <= index < len(word):
                continue
            if target is not None and word[index] != target:
                continue
            candidates.append(
                Placement(
                    word=word,
                    offset=offset,
                    definition=pick_alternative(entry.definitions, rng),
                    context=pick_alternative(entry.contexts, rng),
                )
            )
    return candidates


def choose_candidate(candidates: Sequence[Placement], rng: random.Random) -> Optional[Placement]:
    if not candidates:
        return None
    return rng.choice(candidates)


def choose_initial(
    entries: Sequence[DictionaryEntry], letter_count: int, rng: random.Random
) -> Optional[Placement]:
    """Pick any usable word at a uniformly random offset.

    ``entries`` are expected to fit the slots already, see
    :meth:`WordDictionary.usable`.
    """
    pool = [entry for entry in entries if entry.is_usable]
    if not pool:
        return None
    entry = rng.choice(pool)
    word = entry.word.upper()
    return Placement(
        word=word,
        offset=random_offset(word, letter_count, rng),
        definition=pick_alternative(entry.definitions, rng),
        context=pick_alternative(entry.contexts, rng),
    )
