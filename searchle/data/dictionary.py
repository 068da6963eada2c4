"""Local word dictionary with a per-length letter index."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .normalization import is_playable_word
from .wordlist import DEFAULT_WORDS


LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading and filtering."""

    path: Path | str | None = None
    min_length: int = 2
    max_length: int = 24


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one per line. Blank lines and # comments are skipped."""

    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


class WordDictionary:
    """Loads uppercase A-Z words and answers length/letter queries."""

    def __init__(self, config: Optional[DictionaryConfig] = None, words: Optional[Iterable[str]] = None) -> None:
        self.config = config or DictionaryConfig()
        self._surfaces_by_length: Dict[int, Set[str]] = defaultdict(set)
        # length -> letter -> surfaces containing that letter anywhere
        self._letter_index: Dict[int, Dict[str, Set[str]]] = defaultdict(lambda: defaultdict(set))
        self._load(words)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _load(self, words: Optional[Iterable[str]]) -> None:
        if words is None:
            words = self._read_source()
        skipped = 0
        for raw in words:
            word = raw.strip()
            if not is_playable_word(word):
                skipped += 1
                continue
            self._add(word.upper())
        LOGGER.debug("Dictionary loaded %s words (%s skipped)", len(self), skipped)

    def _read_source(self) -> Iterable[str]:
        if self.config.path is None:
            return (word for bucket in DEFAULT_WORDS.values() for word in bucket)
        source = Path(self.config.path)
        if not source.exists():
            raise DictionaryLoadError(f"Missing word list: {source}")
        try:
            return parse_words_file(source)
        except (OSError, UnicodeDecodeError) as exc:
            raise DictionaryLoadError(str(exc)) from exc

    def _add(self, surface: str) -> None:
        length = len(surface)
        if length < self.config.min_length or length > self.config.max_length:
            return
        self._surfaces_by_length[length].add(surface)
        length_index = self._letter_index[length]
        for char in set(surface):
            length_index[char].add(surface)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return sum(len(words) for words in self._surfaces_by_length.values())

    def find_candidates(self, length: int, required_letter: Optional[str] = None) -> List[str]:
        """Words of ``length`` containing ``required_letter`` at least once, sorted."""

        if required_letter:
            matching = self._letter_index.get(length, {}).get(required_letter.upper(), set())
        else:
            matching = self._surfaces_by_length.get(length, set())
        return sorted(matching)

