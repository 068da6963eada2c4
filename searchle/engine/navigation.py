"""Map key presses onto session mutations, independent of the input device."""

from __future__ import annotations

from typing import Optional

from ..core.constants import ARROW_STEPS, NavKey
from ..core.models import CellKey
from ..data.normalization import normalize_letter
from .grid import PuzzleGrid
from .session import GameSession


KEY_ALIASES = {
    "backspace": NavKey.BACKSPACE,
    "delete": NavKey.BACKSPACE,
    "tab": NavKey.TAB,
    "enter": NavKey.ENTER,
    "return": NavKey.ENTER,
    "arrowup": NavKey.ARROW_UP,
    "up": NavKey.ARROW_UP,
    "arrowdown": NavKey.ARROW_DOWN,
    "down": NavKey.ARROW_DOWN,
    "arrowleft": NavKey.ARROW_LEFT,
    "left": NavKey.ARROW_LEFT,
    "arrowright": NavKey.ARROW_RIGHT,
    "right": NavKey.ARROW_RIGHT,
}


def parse_key(key: str) -> Optional[NavKey]:
    return KEY_ALIASES.get(key.strip().lower()) if key else None


def tab_target(grid: PuzzleGrid, active: Optional[CellKey], reverse: bool = False) -> CellKey:
    """Next (or previous) cell in row-major order, wrapping at either end.

    With no active cell, Tab lands on the first cell and Shift+Tab on the last.
    """

    if active is None or active not in grid:
        return grid.keys[-1] if reverse else grid.keys[0]
    return grid.step(active, -1 if reverse else 1)


def arrow_target(grid: PuzzleGrid, active: CellKey, key: NavKey) -> Optional[CellKey]:
    """Adjacent coordinate in the arrow's direction, if a solution cell is there."""

    dx, dy = ARROW_STEPS[key]
    candidate = active.moved(dx, dy)
    return candidate if candidate in grid else None


class InputMapper:
    """Translate one key event at a time into calls on a :class:`GameSession`."""

    def __init__(self, session: GameSession) -> None:
        self.session = session

    def handle(self, key: str, shift: bool = False) -> bool:
        """Apply ``key``; return True when the session changed."""

        session = self.session
        if not session.accepts_input or session.grid is None:
            return False

        nav = parse_key(key)
        if nav == NavKey.ENTER:
            return session.submit() is not None
        if nav == NavKey.TAB:
            return session.select_cell(tab_target(session.grid, session.active_cell, reverse=shift))

        if session.active_cell is None:
            return False
        if nav == NavKey.BACKSPACE:
            return session.clear_entry()
        if nav in ARROW_STEPS:
            target = arrow_target(session.grid, session.active_cell, nav)
            return target is not None and session.select_cell(target)

        letter = normalize_letter(key)
        if letter:
            return session.set_entry(letter)
        return False
