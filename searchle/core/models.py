"""Data models supporting the Searchle engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional, Tuple

from .constants import CellState
from ..data.normalization import is_playable_word
from .exceptions import MalformedPuzzleError


class CellKey(NamedTuple):
    """Identity of a grid coordinate."""

    x: int
    y: int

    def to_string(self) -> str:
        return f"{self.x},{self.y}"

    @classmethod
    def parse(cls, text: str) -> "CellKey":
        """Parse the ``"x,y"`` form used in persisted records."""

        raw_x, sep, raw_y = str(text).partition(",")
        if not sep:
            raise ValueError(f"Invalid cell key: {text!r}")
        return cls(int(raw_x.strip()), int(raw_y.strip()))

    def moved(self, dx: int, dy: int) -> "CellKey":
        return CellKey(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class WordPlacement:
    """The horizontal base word anchored at ``(x, y)``."""

    word: str
    x: int = 0
    y: int = 0


@dataclass(frozen=True)
class VerticalWord:
    """A vertical word crossing the horizontal word at ``intersect_index``."""

    word: str
    intersect_index: int


@dataclass(frozen=True)
class Puzzle:
    """One horizontal word plus the vertical words crossing it."""

    horizontal: WordPlacement
    verticals: Tuple[VerticalWord, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "verticals", tuple(self.verticals))

    @property
    def words(self) -> Tuple[str, ...]:
        return (self.horizontal.word,) + tuple(v.word for v in self.verticals)

    def intersect_letter(self, vertical: VerticalWord) -> str:
        return self.horizontal.word[vertical.intersect_index]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "horizontal": {
                "word": self.horizontal.word,
                "x": self.horizontal.x,
                "y": self.horizontal.y,
            },
            "verticals": [
                {"word": v.word, "intersectIndex": v.intersect_index}
                for v in self.verticals
            ],
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Puzzle":
        try:
            horizontal = payload["horizontal"]
            placement = WordPlacement(
                word=str(horizontal["word"]).upper(),
                x=int(horizontal.get("x", 0)),
                y=int(horizontal.get("y", 0)),
            )
            verticals = tuple(
                VerticalWord(
                    word=str(item["word"]).upper(),
                    intersect_index=int(item["intersectIndex"]),
                )
                for item in payload.get("verticals", [])
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            raise MalformedPuzzleError(f"Invalid puzzle payload: {exc}") from exc
        for word in (placement.word, *(v.word for v in verticals)):
            if not is_playable_word(word):
                raise MalformedPuzzleError(f"Word '{word}' must contain only letters A-Z")
        for vertical in verticals:
            if not 0 <= vertical.intersect_index < len(placement.word):
                raise MalformedPuzzleError(
                    f"Intersect index {vertical.intersect_index} outside '{placement.word}'"
                )
        return cls(horizontal=placement, verticals=verticals)


@dataclass(frozen=True)
class Cell:
    """Solution letter at an absolute grid coordinate."""

    x: int
    y: int
    letter: str

    @property
    def key(self) -> CellKey:
        return CellKey(self.x, self.y)


@dataclass(frozen=True)
class CellScore:
    """Result of scoring one cell: its state and the letter that was entered."""

    state: CellState
    letter: str = ""


@dataclass
class SessionRecord:
    """Persisted slice of a session, tagged with the puzzle fingerprint."""

    entries: Dict[CellKey, str] = field(default_factory=dict)
    attempts: int = 0
    puzzle_fingerprint: str = ""
    status: Optional[str] = None

    def to_jsonable(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "entries": {key.to_string(): letter for key, letter in self.entries.items()},
            "attempts": self.attempts,
            "puzzleKey": self.puzzle_fingerprint,
        }
        if self.status:
            payload["status"] = self.status
        return payload

    @classmethod
    def from_jsonable(cls, payload: Dict[str, Any]) -> "SessionRecord":
        raw_entries = payload.get("entries") or {}
        if not isinstance(raw_entries, dict):
            raise ValueError("entries must be a mapping")
        entries: Dict[CellKey, str] = {}
        for raw_key, letter in raw_entries.items():
            entries[CellKey.parse(raw_key)] = str(letter or "").upper()
        attempts = int(payload.get("attempts") or 0)
        if attempts < 0:
            raise ValueError("attempts must not be negative")
        return cls(
            entries=entries,
            attempts=attempts,
            puzzle_fingerprint=str(payload.get("puzzleKey") or ""),
            status=payload.get("status") or None,
        )


SAMPLE_PUZZLE = Puzzle(
    horizontal=WordPlacement(word="CREATE", x=0, y=4),
    verticals=(
        VerticalWord(word="FACT", intersect_index=0),
        VerticalWord(word="RIVER", intersect_index=1),
        VerticalWord(word="EASY", intersect_index=2),
        VerticalWord(word="APPLE", intersect_index=3),
        VerticalWord(word="TRAP", intersect_index=4),
        VerticalWord(word="EVER", intersect_index=5),
    ),
)
