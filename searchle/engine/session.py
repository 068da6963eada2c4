"""Session state machine: entries, active cell, attempts and termination."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from ..core.constants import MAX_ATTEMPTS, STORAGE_KEY, CellState, GameStatus, ScoreMerge
from ..core.exceptions import InvalidTransitionError
from ..core.models import CellKey, CellScore, Puzzle, SessionRecord
from ..data.normalization import normalize_letter
from ..io.telemetry import (ERROR, GAME_OVER, GAME_WIN, NullTelemetrySink, TelemetryEvent, TelemetrySink,
                            emit_safely)
from ..utils.logger import get_logger
from .grid import PuzzleGrid
from .session_store import MemorySessionStore, SessionStore
from .validator import AttemptResult, AttemptValidator, keyboard_states


LOGGER = get_logger(__name__)


@dataclass
class GameConfig:
    max_attempts: int = MAX_ATTEMPTS
    storage_key: str = STORAGE_KEY
    score_merge: ScoreMerge = ScoreMerge.PRECEDENCE

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.score_merge = ScoreMerge(self.score_merge)


@dataclass(frozen=True)
class SessionState:
    """Point-in-time copy of a session for presentation layers."""

    status: GameStatus
    entries: Dict[CellKey, str] = field(default_factory=dict)
    attempts: int = 0
    active_cell: Optional[CellKey] = None
    cell_states: Dict[CellKey, CellScore] = field(default_factory=dict)

    @property
    def game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def game_won(self) -> bool:
        return self.status == GameStatus.WON


class GameSession:
    """Owns the mutable state of one game.

    The session starts in ``LOADING``. A front end calls
    :meth:`begin_generation` before producing a puzzle and hands the result to
    :meth:`load_puzzle` with the returned token; results carrying an outdated
    token are ignored, so a new-game request can supersede a generation still
    in flight.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        store: Optional[SessionStore] = None,
        telemetry: Optional[TelemetrySink] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.store: SessionStore = store if store is not None else MemorySessionStore(
            self.config.storage_key
        )
        self.telemetry: TelemetrySink = telemetry if telemetry is not None else NullTelemetrySink()
        self.status = GameStatus.LOADING
        self.grid: Optional[PuzzleGrid] = None
        self.validator: Optional[AttemptValidator] = None
        self.entries: Dict[CellKey, str] = {}
        self.attempts = 0
        self.active_cell: Optional[CellKey] = None
        self.cell_states: Dict[CellKey, CellScore] = {}
        self.generation_error: Optional[str] = None
        self._generation = 0

    # ------------------------------------------------------------------
    # Derived flags
    # ------------------------------------------------------------------
    @property
    def game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def game_won(self) -> bool:
        return self.status == GameStatus.WON

    @property
    def accepts_input(self) -> bool:
        return self.status == GameStatus.ACTIVE

    @property
    def attempts_left(self) -> int:
        return max(0, self.config.max_attempts - self.attempts)

    def keyboard(self) -> Dict[str, CellState]:
        return keyboard_states(self.cell_states)

    def snapshot(self) -> SessionState:
        return SessionState(
            status=self.status,
            entries=dict(self.entries),
            attempts=self.attempts,
            active_cell=self.active_cell,
            cell_states=dict(self.cell_states),
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def begin_generation(self) -> int:
        """Enter ``LOADING`` and return the token the next puzzle must carry."""

        self._generation += 1
        self.status = GameStatus.LOADING
        self.generation_error = None
        return self._generation

    def _is_stale(self, token: Optional[int]) -> bool:
        if token is not None and token != self._generation:
            LOGGER.info("Ignoring result of superseded generation %s", token)
            return True
        return False

    def load_puzzle(self, puzzle: Union[Puzzle, PuzzleGrid], token: Optional[int] = None) -> bool:
        """Activate ``puzzle``, resuming the stored session when it matches."""

        if self._is_stale(token):
            return False
        grid = puzzle if isinstance(puzzle, PuzzleGrid) else PuzzleGrid(puzzle)
        self.grid = grid
        self.validator = AttemptValidator(grid, self.config.score_merge)
        self.entries = {key: "" for key in grid.keys}
        self.attempts = 0
        self.active_cell = None
        self.cell_states = {}
        self.generation_error = None
        self.status = GameStatus.ACTIVE

        record = self._read_record(grid.fingerprint)
        if record is None:
            self.store.clear()
        else:
            self._restore(record)
        LOGGER.info(
            "Puzzle ready: %s cells, %s/%s attempts used (%s)",
            len(grid),
            self.attempts,
            self.config.max_attempts,
            self.status.value,
        )
        return True

    def _read_record(self, fingerprint: str) -> Optional[SessionRecord]:
        try:
            return self.store.load(fingerprint)
        except Exception as exc:
            LOGGER.warning("Session store read failed: %s", exc)
            return None

    def _restore(self, record: SessionRecord) -> None:
        assert self.grid is not None
        for key, letter in record.entries.items():
            if key in self.grid:
                self.entries[key] = normalize_letter(letter)
        self.attempts = record.attempts
        status = None
        if record.status:
            try:
                status = GameStatus(record.status)
            except ValueError:
                LOGGER.warning("Ignoring unknown stored status %r", record.status)
        if status is not None and status.is_terminal:
            self.status = status
        elif self.attempts >= self.config.max_attempts:
            self.status = GameStatus.LOST

    def fail_generation(self, error: Union[str, BaseException], token: Optional[int] = None) -> bool:
        """Record a terminal generation failure; the session stays in ``LOADING``."""

        if self._is_stale(token):
            return False
        self.status = GameStatus.LOADING
        self.generation_error = str(error)
        LOGGER.error("Puzzle generation failed: %s", self.generation_error)
        emit_safely(self.telemetry, TelemetryEvent(type=ERROR, message=self.generation_error))
        return True

    def new_game(self) -> int:
        """Drop all state and the stored slot, then start loading again."""

        self.store.clear()
        self.grid = None
        self.validator = None
        self.entries = {}
        self.attempts = 0
        self.active_cell = None
        self.cell_states = {}
        return self.begin_generation()

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------
    def select_cell(self, key: CellKey) -> bool:
        if not self.accepts_input or self.grid is None or key not in self.grid:
            return False
        if self.active_cell == key:
            return False
        self.active_cell = key
        LOGGER.debug("Active cell -> %s", key.to_string())
        return True

    def set_entry(self, letter: str) -> bool:
        """Write ``letter`` into the active cell."""

        if not self.accepts_input or self.active_cell is None:
            return False
        value = normalize_letter(letter)
        if not value or self.entries.get(self.active_cell) == value:
            return False
        self.entries[self.active_cell] = value
        self._persist()
        return True

    def clear_entry(self) -> bool:
        if not self.accepts_input or self.active_cell is None:
            return False
        if not self.entries.get(self.active_cell):
            return False
        self.entries[self.active_cell] = ""
        self._persist()
        return True

    # ------------------------------------------------------------------
    # Submitting
    # ------------------------------------------------------------------
    def submit(self) -> Optional[AttemptResult]:
        """Score the current entries; ``None`` once the game is over."""

        if self.status == GameStatus.LOADING or self.validator is None or self.grid is None:
            raise InvalidTransitionError("Cannot submit before a puzzle is loaded")
        if self.game_over:
            return None

        result = self.validator.evaluate(self.entries)
        self.attempts += 1
        self.cell_states = result.cell_states

        if result.won:
            self.status = GameStatus.WON
            LOGGER.info("Puzzle solved in %s attempts", self.attempts)
            emit_safely(self.telemetry, TelemetryEvent(type=GAME_WIN, attempts=self.attempts))
        elif self.attempts >= self.config.max_attempts:
            self.status = GameStatus.LOST
            self.entries = {cell.key: cell.letter for cell in self.grid.cells}
            LOGGER.info("Out of attempts after %s tries; solution revealed", self.attempts)
            emit_safely(self.telemetry, TelemetryEvent(type=GAME_OVER, attempts=self.attempts))

        self._persist()
        return result

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def _persist(self) -> None:
        if self.grid is None:
            return
        record = SessionRecord(
            entries=dict(self.entries),
            attempts=self.attempts,
            puzzle_fingerprint=self.grid.fingerprint,
            status=self.status.value if self.game_over else None,
        )
        try:
            self.store.save(record)
        except Exception as exc:
            LOGGER.warning("Session save skipped: %s", exc)
