import json
import random
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests

from warword.core.exceptions import DictionaryLoadError
from warword.data.dictionary import DictionaryConfig, WordDictionary, load_dictionary, parse_payload
from warword.data.normalization import clean_word, scramble_text


class NormalizationTests(unittest.TestCase):
    def test_clean_word_uppercases_and_keeps_inner_spaces(self) -> None:
        self.assertEqual(clean_word("  red sky "), "RED SKY")
        self.assertEqual(clean_word(None), "")

    def test_scramble_preserves_spaces_and_length(self) -> None:
        text = "a large gun"
        scrambled = scramble_text(text, random.Random(4))
        self.assertEqual(len(scrambled), len(text))
        self.assertEqual(
            [i for i, c in enumerate(scrambled) if c == " "],
            [i for i, c in enumerate(text) if c == " "],
        )
        self.assertTrue(all(c == " " or c.islower() for c in scrambled))


class PayloadTests(unittest.TestCase):
    def test_bare_list_payload(self) -> None:
        entries = parse_payload([{"word": "cannon", "definition": "a large gun"}])
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].word, "cannon")
        self.assertEqual(entries[0].definitions, ("a large gun",))
        self.assertEqual(entries[0].contexts, ())

    def test_object_with_list_property(self) -> None:
        entries = parse_payload(
            {"list": [{"word": "flak", "definition": ["anti-aircraft fire", "criticism"], "context": ["ww2"]}]}
        )
        self.assertEqual(entries[0].definitions, ("anti-aircraft fire", "criticism"))
        self.assertEqual(entries[0].contexts, ("ww2",))

    def test_non_object_items_are_dropped_and_missing_words_blank(self) -> None:
        entries = parse_payload([42, "x", {"definition": "orphan"}, {"word": "tank"}])
        self.assertEqual([e.word for e in entries], ["", "tank"])
        self.assertFalse(entries[0].is_usable)

    def test_unexpected_shape_raises(self) -> None:
        with self.assertRaises(DictionaryLoadError):
            parse_payload({"entries": []})
        with self.assertRaises(DictionaryLoadError):
            parse_payload("nope")


class LoadTests(unittest.TestCase):
    def test_load_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "dictionary.json"
            path.write_text(
                json.dumps({"list": [{"word": "mortar", "definition": "short cannon"}]}),
                encoding="utf-8",
            )
            dictionary = WordDictionary.load(DictionaryConfig(source=path))
            self.assertEqual(len(dictionary), 1)
            self.assertEqual(dictionary.usable()[0].word, "MORTAR")

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(DictionaryLoadError):
                load_dictionary(DictionaryConfig(source=Path(tmpdir) / "absent.json"))

    def test_invalid_json_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(DictionaryLoadError):
                load_dictionary(DictionaryConfig(source=path))

    def test_load_or_empty_degrades_and_logs(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            config = DictionaryConfig(source=Path(tmpdir) / "absent.json")
            with self.assertLogs("warword.data.dictionary", level="ERROR"):
                dictionary = WordDictionary.load_or_empty(config)
            self.assertEqual(len(dictionary), 0)
            self.assertEqual(dictionary.usable(), [])

    @patch("warword.data.dictionary.requests.get")
    def test_remote_source_uses_requests(self, mock_get: MagicMock) -> None:
        response = MagicMock()
        response.json.return_value = [{"word": "bunker"}]
        mock_get.return_value = response

        config = DictionaryConfig(source="https://example.org/dictionary.json", timeout_seconds=3)
        entries = load_dictionary(config)

        mock_get.assert_called_once_with("https://example.org/dictionary.json", timeout=3)
        response.raise_for_status.assert_called_once()
        self.assertEqual(entries[0].word, "bunker")

    @patch("warword.data.dictionary.requests.get")
    def test_remote_failure_becomes_load_error(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = requests.ConnectionError("offline")
        config = DictionaryConfig(source="http://example.org/dictionary.json")
        with self.assertRaises(DictionaryLoadError):
            load_dictionary(config)
        with self.assertLogs("warword.data.dictionary", level="ERROR"):
            self.assertEqual(len(WordDictionary.load_or_empty(config)), 0)


class WordDictionaryTests(unittest.TestCase):
    def test_usable_filters_blank_words_and_uppercases(self) -> None:
        dictionary = WordDictionary.from_payload(
            [{"word": "  "}, {"word": "gun"}, {"word": "artillery"}, {}]
        )
        self.assertEqual(len(dictionary), 4)
        self.assertEqual([e.word for e in dictionary.usable()], ["GUN", "ARTILLERY"])
        self.assertEqual([e.word for e in dictionary.usable(max_length=7)], ["GUN"])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
