"""Shared constants and enumerations for the Searchle engine."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

MAX_ATTEMPTS = 6
STORAGE_KEY = "searchle:v1"
HORIZONTAL_LENGTH = 6
TARGET_VERTICAL_LENGTHS: Tuple[int, ...] = (6, 5, 5, 4, 4, 4)
MAX_GENERATION_RETRIES = 25


class CellState(str, Enum):
    """Tri-state classification of one entered letter."""

    CORRECT = "correct"
    PRESENT = "present"
    INCORRECT = "incorrect"

    @property
    def rank(self) -> int:
        return _STATE_RANK[self]


_STATE_RANK: Dict[CellState, int] = {
    CellState.INCORRECT: 0,
    CellState.PRESENT: 1,
    CellState.CORRECT: 2,
}


class GameStatus(str, Enum):
    """Lifecycle states of a game session."""

    LOADING = "LOADING"
    ACTIVE = "ACTIVE"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST)


class ScoreMerge(str, Enum):
    """How scores for a coordinate shared by two words are combined."""

    PRECEDENCE = "precedence"
    LAST_WRITE = "last_write"


class NavKey(str, Enum):
    """Non-letter input keys understood by the navigation mapper."""

    BACKSPACE = "Backspace"
    TAB = "Tab"
    ENTER = "Enter"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"


ARROW_STEPS: Dict[NavKey, Tuple[int, int]] = {
    NavKey.ARROW_UP: (0, -1),
    NavKey.ARROW_DOWN: (0, 1),
    NavKey.ARROW_LEFT: (-1, 0),
    NavKey.ARROW_RIGHT: (1, 0),
}
