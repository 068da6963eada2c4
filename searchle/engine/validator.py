"""Attempt scoring and win detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional

from ..core.constants import ALPHABET, CellState, ScoreMerge
from ..core.models import CellKey, CellScore
from .grid import PuzzleGrid, WordPath


@dataclass(frozen=True)
class AttemptResult:
    cell_states: Dict[CellKey, CellScore]
    won: bool


def classify(entered: str, expected: str, letters: Iterable[str]) -> CellState:
    if entered == expected:
        return CellState.CORRECT
    if entered and entered in letters:
        return CellState.PRESENT
    return CellState.INCORRECT


def score_word(path: WordPath, entries: Mapping[CellKey, str]) -> Dict[CellKey, CellScore]:
    """Score every letter of one word against that word only."""

    letters = path.letters
    scores: Dict[CellKey, CellScore] = {}
    for key, expected in zip(path.keys, path.word):
        entered = entries.get(key) or ""
        scores[key] = CellScore(state=classify(entered, expected, letters), letter=entered)
    return scores


def is_win(grid: PuzzleGrid, entries: Mapping[CellKey, str]) -> bool:
    """Every solution cell holds exactly its letter. Independent of scoring."""

    return all((entries.get(cell.key) or "") == cell.letter for cell in grid.cells)


class AttemptValidator:
    """Scores an attempt word by word and merges shared coordinates.

    With ``ScoreMerge.PRECEDENCE`` a coordinate scored by two words keeps the
    best state (CORRECT > PRESENT > INCORRECT). ``ScoreMerge.LAST_WRITE``
    keeps whichever word was scored last, verticals after the horizontal.
    """

    def __init__(self, grid: PuzzleGrid, merge: ScoreMerge = ScoreMerge.PRECEDENCE) -> None:
        self.grid = grid
        self.merge = ScoreMerge(merge)

    def score(self, entries: Mapping[CellKey, str]) -> Dict[CellKey, CellScore]:
        merged: Dict[CellKey, CellScore] = {}
        for path in self.grid.paths:
            for key, score in score_word(path, entries).items():
                current = merged.get(key)
                if (
                    current is None
                    or self.merge == ScoreMerge.LAST_WRITE
                    or score.state.rank > current.state.rank
                ):
                    merged[key] = score
        return merged

    def evaluate(self, entries: Mapping[CellKey, str]) -> AttemptResult:
        return AttemptResult(cell_states=self.score(entries), won=is_win(self.grid, entries))


def keyboard_states(cell_states: Mapping[CellKey, CellScore]) -> Dict[str, CellState]:
    """Best state seen for each entered letter, for an on-screen keyboard.

    Letters that were never scored are absent from the result.
    """

    best: Dict[str, CellState] = {}
    for score in cell_states.values():
        letter = score.letter
        if not letter or letter not in ALPHABET:
            continue
        current: Optional[CellState] = best.get(letter)
        if current is None or score.state.rank > current.rank:
            best[letter] = score.state
    return best
