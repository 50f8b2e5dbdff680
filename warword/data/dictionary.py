"""Dictionary loading and candidate pools for the word puzzle."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

import requests

from ..core.exceptions import DictionaryLoadError
from ..core.models import DictionaryEntry
from ..utils.logger import get_logger
from .normalization import clean_word


LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Where to read the dictionary JSON from.

    ``source`` is either a filesystem path or an ``http(s)`` URL.
    """

    source: Path | str = "dictionary.json"
    timeout_seconds: float = 10.0
    encoding: str = "utf-8"

    @property
    def is_remote(self) -> bool:
        return str(self.source).startswith(("http://", "https://"))


def _alternatives(value: Any) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value if item is not None)
    return (str(value),)


def parse_entry(raw: Any) -> Optional[DictionaryEntry]:
    """Build a :class:`DictionaryEntry` from one JSON item, or ``None`` if it is not an object."""

    if not isinstance(raw, dict):
        return None
    word = raw.get("word")
    return DictionaryEntry(
        word=word if isinstance(word, str) else "",
        definitions=_alternatives(raw.get("definition")),
        contexts=_alternatives(raw.get("context")),
    )


def parse_payload(data: Any) -> List[DictionaryEntry]:
    """Accept a bare list of entries or an object holding them under ``list``."""

    if isinstance(data, dict) and isinstance(data.get("list"), list):
        items = data["list"]
    elif isinstance(data, list):
        items = data
    else:
        raise DictionaryLoadError(
            f"Unexpected dictionary payload of type {type(data).__name__}"
        )
    entries = [entry for entry in (parse_entry(item) for item in items) if entry is not None]
    skipped = len(items) - len(entries)
    if skipped:
        LOGGER.debug("Ignored %d non-object dictionary items", skipped)
    return entries


def load_dictionary(config: DictionaryConfig) -> List[DictionaryEntry]:
    """Read and parse the dictionary named by ``config``.

    Raises :class:`DictionaryLoadError` for missing files, HTTP failures and
    malformed JSON.
    """

    if config.is_remote:
        try:
            response = requests.get(str(config.source), timeout=config.timeout_seconds)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise DictionaryLoadError(f"Dictionary request failed: {exc}") from exc
        except ValueError as exc:
            raise DictionaryLoadError(f"Dictionary response is not JSON: {exc}") from exc
    else:
        path = Path(config.source)
        if not path.exists():
            raise DictionaryLoadError(f"Missing dictionary JSON: {path}")
        try:
            data = json.loads(path.read_text(encoding=config.encoding))
        except (OSError, ValueError) as exc:
            raise DictionaryLoadError(str(exc)) from exc
    return parse_payload(data)


class WordDictionary:
    """Read-only collection of dictionary entries."""

    def __init__(self, entries: Iterable[DictionaryEntry] = ()) -> None:
        self._entries: Tuple[DictionaryEntry, ...] = tuple(entries)
        self._usable: Tuple[DictionaryEntry, ...] = tuple(
            DictionaryEntry(
                word=clean_word(entry.word),
                definitions=entry.definitions,
                contexts=entry.contexts,
            )
            for entry in self._entries
            if entry.is_usable
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @classmethod
    def load(cls, config: DictionaryConfig) -> "WordDictionary":
        entries = load_dictionary(config)
        LOGGER.info("Loaded %d dictionary entries from %s", len(entries), config.source)
        return cls(entries)

    @classmethod
    def load_or_empty(cls, config: DictionaryConfig) -> "WordDictionary":
        """Like :meth:`load` but degrade to an empty dictionary on failure."""
        try:
            return cls.load(config)
        except DictionaryLoadError as exc:
            LOGGER.error("Failed to load dictionary: %s", exc)
            return cls()

    @classmethod
    def from_payload(cls, data: Any) -> "WordDictionary":
        return cls(parse_payload(data))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._entries)

    def usable(self, max_length: Optional[int] = None) -> List[DictionaryEntry]:
        """Entries with a non-blank word, normalized to uppercase.

        ``max_length`` drops words that could not fit the letter slots.
        """
        if max_length is None:
            return list(self._usable)
        return [entry for entry in self._usable if len(entry.word) <= max_length]
