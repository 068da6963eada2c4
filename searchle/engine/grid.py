"""Grid coordinate resolution and the immutable puzzle grid view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..core.exceptions import OverlapConflictError
from ..core.models import Cell, CellKey, Puzzle, VerticalWord
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class WordPath:
    """A solution word and the coordinates its letters occupy, in word order."""

    word: str
    keys: Tuple[CellKey, ...]

    @property
    def letters(self) -> FrozenSet[str]:
        return frozenset(self.word)


def horizontal_path(puzzle: Puzzle) -> WordPath:
    base = puzzle.horizontal
    keys = tuple(CellKey(base.x + i, base.y) for i in range(len(base.word)))
    return WordPath(word=base.word, keys=keys)


def vertical_path(puzzle: Puzzle, vertical: VerticalWord) -> Optional[WordPath]:
    """Place a vertical word through its anchor, or ``None`` if it cannot cross.

    The first occurrence of the anchor letter inside the vertical word sits on
    the horizontal row; the remaining letters extend up and down from it.
    """

    base = puzzle.horizontal
    if not 0 <= vertical.intersect_index < len(base.word):
        return None
    anchor_letter = base.word[vertical.intersect_index]
    offset = vertical.word.find(anchor_letter)
    if offset == -1:
        return None
    anchor_x = base.x + vertical.intersect_index
    keys = tuple(
        CellKey(anchor_x, base.y - (offset - k)) for k in range(len(vertical.word))
    )
    return WordPath(word=vertical.word, keys=keys)


def word_paths(puzzle: Puzzle) -> Tuple[List[WordPath], List[VerticalWord]]:
    """Return placed word paths (horizontal first) and the verticals that were dropped."""

    paths = [horizontal_path(puzzle)]
    dropped: List[VerticalWord] = []
    for vertical in puzzle.verticals:
        path = vertical_path(puzzle, vertical)
        if path is None:
            LOGGER.warning(
                "Dropping vertical '%s': no '%s' to cross at index %s",
                vertical.word,
                puzzle.horizontal.word[vertical.intersect_index : vertical.intersect_index + 1],
                vertical.intersect_index,
            )
            dropped.append(vertical)
            continue
        paths.append(path)
    return paths, dropped


def row_major(keys: Iterable[CellKey]) -> List[CellKey]:
    return sorted(keys, key=lambda key: (key.y, key.x))


def merge_paths(paths: Sequence[WordPath]) -> Dict[CellKey, str]:
    """Merge word placements into one letter per coordinate.

    Shared coordinates must agree; a disagreement raises
    :class:`OverlapConflictError` instead of letting one word overwrite another.
    """

    letters: Dict[CellKey, str] = {}
    owners: Dict[CellKey, str] = {}
    for path in paths:
        for key, letter in zip(path.keys, path.word):
            existing = letters.get(key)
            if existing is not None and existing != letter:
                raise OverlapConflictError(
                    f"'{owners[key]}' and '{path.word}' disagree at {key.to_string()}: "
                    f"{existing} != {letter}"
                )
            letters[key] = letter
            owners.setdefault(key, path.word)
    return letters


def resolve_cells(puzzle: Puzzle) -> List[Cell]:
    """Convert a puzzle into its deduplicated cells in row-major order."""

    paths, _ = word_paths(puzzle)
    letters = merge_paths(paths)
    return [Cell(x=key.x, y=key.y, letter=letters[key]) for key in row_major(letters)]


class PuzzleGrid:
    """Read-only view over a resolved puzzle shared by the session components."""

    def __init__(self, puzzle: Puzzle) -> None:
        self.puzzle = puzzle
        paths, dropped = word_paths(puzzle)
        letters = merge_paths(paths)
        self.paths: Tuple[WordPath, ...] = tuple(paths)
        self.dropped: Tuple[VerticalWord, ...] = tuple(dropped)
        self.cells: Tuple[Cell, ...] = tuple(
            Cell(x=key.x, y=key.y, letter=letters[key]) for key in row_major(letters)
        )
        self.keys: Tuple[CellKey, ...] = tuple(cell.key for cell in self.cells)
        self._letters: Dict[CellKey, str] = {cell.key: cell.letter for cell in self.cells}
        self._order: Dict[CellKey, int] = {key: index for index, key in enumerate(self.keys)}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, key: object) -> bool:
        return key in self._letters

    def letter_at(self, key: CellKey) -> str:
        return self._letters[key]

    def order_index(self, key: CellKey) -> int:
        """Row-major position of ``key``; doubles as the reveal cascade index."""

        return self._order[key]

    def step(self, key: CellKey, delta: int) -> CellKey:
        """Move ``delta`` cells through the row-major order, wrapping around."""

        index = self._order[key]
        return self.keys[(index + delta) % len(self.keys)]

    @property
    def fingerprint(self) -> str:
        """Solution letters concatenated in row-major cell order.

        Used to recognise a persisted session for the same puzzle. It compares
        letters only, so two layouts spelling the same sequence collide.
        """

        return "".join(cell.letter for cell in self.cells)

    @property
    def is_complete(self) -> bool:
        return not self.dropped

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def offset(self) -> Tuple[int, int]:
        return (min(key.x for key in self.keys), min(key.y for key in self.keys))

    @property
    def size(self) -> Tuple[int, int]:
        """Width and height of the bounding box in cells."""

        min_x, min_y = self.offset
        width = max(key.x for key in self.keys) - min_x + 1
        height = max(key.y for key in self.keys) - min_y + 1
        return width, height
