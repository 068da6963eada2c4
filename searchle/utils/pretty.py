"""Plain-text board rendering for the console front end."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Dict

from ..core.constants import ALPHABET, CellState
from ..core.models import CellKey

if TYPE_CHECKING:
    from ..engine.session import GameSession


STATE_MARKS = {
    CellState.CORRECT: "=",
    CellState.PRESENT: "~",
    CellState.INCORRECT: "x",
}


def format_board(session: GameSession) -> str:
    """Render the grid with entered letters and last-attempt marks.

    Each cell is three characters: the letter (``_`` when empty), then the
    state mark of the last submit, wrapped in brackets for the active cell.
    """

    grid = session.grid
    if grid is None:
        return "(loading)"
    min_x, min_y = grid.offset
    width, height = grid.size
    lines = []
    for row in range(height):
        tokens = []
        for col in range(width):
            key = CellKey(min_x + col, min_y + row)
            if key not in grid:
                tokens.append("   ")
                continue
            letter = session.entries.get(key) or "_"
            score = session.cell_states.get(key)
            mark = STATE_MARKS[score.state] if score is not None else " "
            if key == session.active_cell:
                tokens.append(f"[{letter}{mark}")
            else:
                tokens.append(f" {letter}{mark}")
        lines.append(" ".join(tokens).rstrip())
    return "\n".join(lines)


def format_keyboard(states: Dict[str, CellState]) -> str:
    return " ".join(
        f"{letter}{STATE_MARKS[states[letter]]}" if letter in states else f"{letter} "
        for letter in ALPHABET
    ).rstrip()


def format_status(session: GameSession) -> str:
    limit = session.config.max_attempts
    line = f"Attempts: {session.attempts}/{limit}"
    if session.accepts_input:
        line += f" ({session.attempts_left} left)"
    if session.game_won:
        line += "  You won!"
    elif session.game_over:
        line += "  Game over!"
    elif session.generation_error:
        line += f"  Puzzle generation failed: {session.generation_error}"
    return line


def print_session(session: GameSession, *, stream=None) -> None:
    """Print status line, board and keyboard summary."""

    stream = stream or sys.stdout
    print(format_status(session), file=stream)
    print(format_board(session), file=stream)
    if session.cell_states:
        print(file=stream)
        print(format_keyboard(session.keyboard()), file=stream)
