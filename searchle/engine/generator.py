"""Puzzle generation.

Each attempt picks a horizontal word, shuffles the target vertical lengths
across its letter positions, fans out one word-source query per position and
joins them before choosing distinct vertical words. An attempt that fails any
gate is discarded whole and the next one starts from a new horizontal word.
"""

from __future__ import annotations

import random
import threading
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..core.constants import HORIZONTAL_LENGTH, MAX_GENERATION_RETRIES, TARGET_VERTICAL_LENGTHS
from ..core.exceptions import (GenerationCancelledError, GenerationError, MalformedPuzzleError,
                               RetryExhaustedError, SourceUnavailableError)
from ..core.models import Puzzle, VerticalWord, WordPlacement
from ..data.normalization import clean_word
from ..data.word_source import WordSource
from ..utils.logger import get_logger
from .grid import PuzzleGrid


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    horizontal_length: int = HORIZONTAL_LENGTH
    target_lengths: Tuple[int, ...] = TARGET_VERTICAL_LENGTHS
    max_retries: int = MAX_GENERATION_RETRIES
    seed: Optional[int] = None
    max_workers: Optional[int] = None
    anchor_x: int = 0
    anchor_y: Optional[int] = None

    def __post_init__(self) -> None:
        self.target_lengths = tuple(self.target_lengths)
        if len(self.target_lengths) != self.horizontal_length:
            raise ValueError(
                f"Need one target length per letter: {len(self.target_lengths)} "
                f"lengths for a {self.horizontal_length}-letter word"
            )
        if self.horizontal_length < 2 or any(length < 2 for length in self.target_lengths):
            raise ValueError("Word lengths must be at least 2")
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")

    @property
    def total_steps(self) -> int:
        return self.horizontal_length + 1

    def resolved_anchor_y(self) -> int:
        # Tall enough that the longest vertical never reaches a negative row.
        if self.anchor_y is not None:
            return self.anchor_y
        return max(self.target_lengths) - 1


@dataclass(frozen=True)
class GenerationProgress:
    completed: int
    total: int
    attempt: int


ProgressCallback = Callable[[GenerationProgress], None]


class PuzzleGenerator:
    """Produce structurally valid puzzles from a :class:`WordSource`."""

    def __init__(self, source: WordSource, config: Optional[GeneratorConfig] = None) -> None:
        self.source = source
        self.config = config or GeneratorConfig()
        self.rng = random.Random(self.config.seed)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(
        self,
        progress: Optional[ProgressCallback] = None,
        cancel: Optional[threading.Event] = None,
    ) -> Puzzle:
        last_error: Optional[BaseException] = None
        for attempt in range(1, self.config.max_retries + 1):
            self._check_cancel(cancel)
            LOGGER.info("Generation attempt %s/%s", attempt, self.config.max_retries)
            try:
                puzzle = self._attempt(attempt, progress, cancel)
            except GenerationCancelledError:
                raise
            except (SourceUnavailableError, MalformedPuzzleError, GenerationError) as exc:
                LOGGER.warning("Generation attempt %s failed: %s", attempt, exc)
                last_error = exc
                continue
            LOGGER.info(
                "Puzzle generated on attempt %s: %s / %s",
                attempt,
                puzzle.horizontal.word,
                ", ".join(v.word for v in puzzle.verticals),
            )
            return puzzle
        raise RetryExhaustedError(self.config.max_retries, last_error)

    # ------------------------------------------------------------------
    # Single attempt
    # ------------------------------------------------------------------
    def _attempt(
        self,
        attempt: int,
        progress: Optional[ProgressCallback],
        cancel: Optional[threading.Event],
    ) -> Puzzle:
        horizontal = self._pick_horizontal()
        lengths = list(self.config.target_lengths)
        self.rng.shuffle(lengths)
        self._report(progress, 1, attempt)

        candidates = self._fetch_verticals(horizontal, lengths, attempt, progress)
        self._check_cancel(cancel)

        used = {horizontal}
        chosen: List[Optional[str]] = []
        for index, letter in enumerate(horizontal):
            pool = self._distinct(candidates.get(index, ()), used)
            if not pool:
                LOGGER.debug(
                    "No unused %s-letter word containing %s for position %s",
                    lengths[index],
                    letter,
                    index,
                )
                chosen.append(None)
                continue
            word = self.rng.choice(pool)
            used.add(word)
            chosen.append(word)

        puzzle = self._build(horizontal, chosen)
        self._validate(puzzle, chosen)
        return puzzle

    def _pick_horizontal(self) -> str:
        length = self.config.horizontal_length
        pool = [
            word
            for word in self._distinct(self.source.fetch_candidates(length, None), set())
            if len(word) == length
        ]
        if not pool:
            raise SourceUnavailableError(f"No {length}-letter horizontal word available")
        return self.rng.choice(pool)

    def _fetch_verticals(
        self,
        horizontal: str,
        lengths: Sequence[int],
        attempt: int,
        progress: Optional[ProgressCallback],
    ) -> Dict[int, Sequence[str]]:
        workers = self.config.max_workers or len(horizontal)
        candidates: Dict[int, Sequence[str]] = {}
        completed = 1
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(self.source.fetch_candidates, lengths[index], letter): index
                for index, letter in enumerate(horizontal)
            }
            for future in as_completed(futures):
                index = futures[future]
                candidates[index] = future.result()
                completed += 1
                self._report(progress, completed, attempt)
        return candidates

    @staticmethod
    def _distinct(words: Sequence[str], used: set) -> List[str]:
        pool: List[str] = []
        seen = set(used)
        for raw in words:
            word = clean_word(raw)
            if not word or word in seen:
                continue
            seen.add(word)
            pool.append(word)
        return pool

    def _build(self, horizontal: str, chosen: Sequence[Optional[str]]) -> Puzzle:
        verticals = tuple(
            VerticalWord(word=word, intersect_index=index)
            for index, word in enumerate(chosen)
            if word is not None
        )
        placement = WordPlacement(
            word=horizontal,
            x=self.config.anchor_x,
            y=self.config.resolved_anchor_y(),
        )
        return Puzzle(horizontal=placement, verticals=verticals)

    # ------------------------------------------------------------------
    # Gates
    # ------------------------------------------------------------------
    def _validate(self, puzzle: Puzzle, chosen: Sequence[Optional[str]]) -> None:
        missing = [index for index, word in enumerate(chosen) if word is None]
        if missing:
            raise GenerationError(f"Unfilled positions {missing} for '{puzzle.horizontal.word}'")

        realized = Counter(len(v.word) for v in puzzle.verticals)
        if realized != Counter(self.config.target_lengths):
            raise GenerationError(
                f"Length distribution {sorted(realized.elements())} does not match "
                f"{sorted(self.config.target_lengths)}"
            )

        words = puzzle.words
        if len(set(words)) != len(words):
            raise GenerationError(f"Repeated word in {list(words)}")

        grid = PuzzleGrid(puzzle)
        if not grid.is_complete:
            raise MalformedPuzzleError(
                f"Verticals without their crossing letter: {[v.word for v in grid.dropped]}"
            )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _report(self, progress: Optional[ProgressCallback], completed: int, attempt: int) -> None:
        if progress is None:
            return
        try:
            progress(GenerationProgress(completed=completed, total=self.config.total_steps, attempt=attempt))
        except Exception as exc:
            LOGGER.warning("Progress callback failed: %s", exc)

    @staticmethod
    def _check_cancel(cancel: Optional[threading.Event]) -> None:
        if cancel is not None and cancel.is_set():
            raise GenerationCancelledError("Generation cancelled")
