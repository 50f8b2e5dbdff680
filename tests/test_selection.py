import random
import unittest

from warword.core.models import DictionaryEntry
from warword.engine.selection import (
    choose_candidate,
    choose_initial,
    find_candidates,
    pick_alternative,
    target_letter,
)


def entry(word: str, definition: str = "") -> DictionaryEntry:
    return DictionaryEntry(word=word, definitions=(definition,) if definition else ())


class TargetLetterTests(unittest.TestCase):
    def test_letter_inside_span(self) -> None:
        self.assertEqual(target_letter("CANNON", 1, 3), "N")
        self.assertEqual(target_letter("CANNON", 1, 1), "C")

    def test_outside_span_or_empty_word(self) -> None:
        self.assertIsNone(target_letter("CANNON", 1, 0))
        self.assertIsNone(target_letter("CANNON", 0, 6))
        self.assertIsNone(target_letter("", 0, 0))
        self.assertIsNone(target_letter(None, 0, 0))


class FindCandidatesTests(unittest.TestCase):
    def test_collects_every_matching_word_and_offset(self) -> None:
        entries = [entry("CANNON", "a large gun"), entry("CAT"), entry("gun")]
        candidates = find_candidates(entries, fixed_index=3, target="N", letter_count=7)
        pairs = sorted((c.word, c.offset) for c in candidates)
        self.assertEqual(pairs, [("CANNON", 0), ("CANNON", 1), ("GUN", 1)])
        cannon = [c for c in candidates if c.word == "CANNON"][0]
        self.assertEqual(cannon.definition, "a large gun")

    def test_candidates_respect_bounds_and_pinned_letter(self) -> None:
        words = ["RIFLE", "SABRE", "LANCE", "ARROW", "SPEAR", "AXE", "BOW", "CANNON", "DAGGER", "MUSKET"]
        entries = [entry(word) for word in words]
        for letter_count in (6, 7, 9):
            for fixed in range(letter_count):
                for target in ("A", "E", "R"):
                    for candidate in find_candidates(entries, fixed, target, letter_count):
                        self.assertGreaterEqual(candidate.offset, 0)
                        self.assertLessEqual(candidate.offset + len(candidate.word), letter_count)
                        self.assertEqual(candidate.word[fixed - candidate.offset], target)

    def test_without_target_any_covering_placement_qualifies(self) -> None:
        candidates = find_candidates([entry("CAT")], fixed_index=6, target=None, letter_count=7)
        self.assertEqual([(c.word, c.offset) for c in candidates], [("CAT", 4)])

    def test_words_longer_than_slots_never_qualify(self) -> None:
        self.assertEqual(find_candidates([entry("ARTILLERY")], 2, None, 7), [])

    def test_blank_entries_are_ignored(self) -> None:
        entries = [DictionaryEntry(word=""), DictionaryEntry(word="   "), entry("GUN")]
        candidates = find_candidates(entries, fixed_index=0, target="G", letter_count=7)
        self.assertEqual([(c.word, c.offset) for c in candidates], [("GUN", 0)])

    def test_no_match_leaves_choice_empty(self) -> None:
        candidates = find_candidates([entry("AB")], fixed_index=6, target="Z", letter_count=7)
        self.assertEqual(candidates, [])
        self.assertIsNone(choose_candidate(candidates, random.Random(0)))


class ChoiceTests(unittest.TestCase):
    def test_initial_offset_is_uniform_over_valid_positions(self) -> None:
        offsets = set()
        for seed in range(60):
            placement = choose_initial([entry("CANNON", "a large gun")], 7, random.Random(seed))
            assert placement is not None
            offsets.add(placement.offset)
            self.assertEqual(placement.word, "CANNON")
            self.assertEqual(placement.definition, "a large gun")
        self.assertEqual(offsets, {0, 1})

    def test_initial_skips_blank_entries(self) -> None:
        self.assertIsNone(choose_initial([DictionaryEntry(word="  ")], 7, random.Random(0)))
        self.assertIsNone(choose_initial([], 7, random.Random(0)))

    def test_pick_alternative(self) -> None:
        rng = random.Random(2)
        self.assertEqual(pick_alternative((), rng), "")
        seen = {pick_alternative(("gun", "cannon"), rng) for _ in range(40)}
        self.assertEqual(seen, {"gun", "cannon"})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
