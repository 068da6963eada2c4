"""Word sources consumed by the puzzle generator.

A word source answers one question: which uppercase words of a given length
contain a given letter. An empty answer is valid; failures are reported as
:class:`SourceUnavailableError`.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

import requests

from ..core.exceptions import SourceUnavailableError
from ..utils.logger import get_logger
from .dictionary import WordDictionary
from .normalization import is_playable_word


LOGGER = get_logger(__name__)

DEFAULT_WORD_API_URL = "https://api.datamuse.com/words"


class WordSource(Protocol):
    """Capability implemented by every word provider."""

    def fetch_candidates(self, length: int, required_letter: Optional[str] = None) -> Sequence[str]:
        ...


class DictionaryWordSource:
    """Serve candidates from a local :class:`WordDictionary`."""

    def __init__(self, dictionary: Optional[WordDictionary] = None) -> None:
        self.dictionary = dictionary or WordDictionary()

    def fetch_candidates(self, length: int, required_letter: Optional[str] = None) -> Sequence[str]:
        return self.dictionary.find_candidates(length, required_letter)


@dataclass
class HttpWordSourceConfig:
    base_url: str = field(
        default_factory=lambda: os.environ.get("SEARCHLE_WORD_API_URL", DEFAULT_WORD_API_URL)
    )
    timeout_seconds: float = 10.0
    max_results: int = 1000


class HttpWordSource:
    """Query a Datamuse-style ``/words?sp=`` endpoint for spelling patterns.

    One request per word length is issued and cached; the letter filter runs
    locally, so concurrent lookups for the same length share a response.
    """

    def __init__(
        self,
        config: Optional[HttpWordSourceConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or HttpWordSourceConfig()
        self._session = session or requests.Session()
        self._cache: Dict[int, List[str]] = {}
        self._lock = threading.Lock()
        self._length_locks: Dict[int, threading.Lock] = {}

    def fetch_candidates(self, length: int, required_letter: Optional[str] = None) -> Sequence[str]:
        words = self._words_of_length(length)
        if required_letter:
            letter = required_letter.upper()
            return [word for word in words if letter in word]
        return list(words)

    def _words_of_length(self, length: int) -> List[str]:
        with self._lock:
            length_lock = self._length_locks.setdefault(length, threading.Lock())
        # One request per length, even for concurrent lookups.
        with length_lock:
            cached = self._cache.get(length)
            if cached is None:
                cached = self._request(length)
                self._cache[length] = cached
        return cached

    def _request(self, length: int) -> List[str]:
        params = {"sp": "?" * length, "max": self.config.max_results}
        try:
            response = self._session.get(
                self.config.base_url,
                params=params,
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise SourceUnavailableError(f"Word API request failed: {exc}") from exc
        words = self._parse_words(payload, length)
        LOGGER.debug("Word API returned %s words of length %s", len(words), length)
        return words

    @staticmethod
    def _parse_words(payload: Any, length: int) -> List[str]:
        if not isinstance(payload, list):
            raise SourceUnavailableError("Word API response is not a list")
        seen = set()
        words: List[str] = []
        for item in payload:
            raw = item.get("word") if isinstance(item, dict) else item
            if not isinstance(raw, str):
                continue
            word = raw.strip().upper()
            if len(word) != length or not is_playable_word(word) or word in seen:
                continue
            seen.add(word)
            words.append(word)
        return words
