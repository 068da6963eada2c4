"""Wire generator, session, store and telemetry together for a front end."""

from __future__ import annotations

import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from typing import Optional

from ..core.exceptions import GenerationCancelledError, MalformedPuzzleError, RetryExhaustedError
from ..core.models import Puzzle
from ..utils.logger import get_logger
from .generator import ProgressCallback, PuzzleGenerator
from .navigation import InputMapper
from .session import GameSession


LOGGER = get_logger(__name__)


@dataclass
class PendingGeneration:
    token: int
    future: "Future[Puzzle]"
    cancel: threading.Event


class GameController:
    """Run the LOADING phase and route input for one :class:`GameSession`.

    Either ``generator`` or ``puzzle`` must be given; a fixed puzzle is reused
    for every new game.
    """

    def __init__(
        self,
        session: GameSession,
        generator: Optional[PuzzleGenerator] = None,
        puzzle: Optional[Puzzle] = None,
    ) -> None:
        if generator is None and puzzle is None:
            raise ValueError("GameController needs a generator or a fixed puzzle")
        self.session = session
        self.generator = generator
        self.puzzle = puzzle
        self.input = InputMapper(session)
        self._pending: Optional[PendingGeneration] = None

    # ------------------------------------------------------------------
    # Synchronous flow
    # ------------------------------------------------------------------
    def start(self, progress: Optional[ProgressCallback] = None) -> bool:
        """Load the first puzzle, resuming any stored session that matches it."""

        return self._run(self.session.begin_generation(), progress)

    def new_game(self, progress: Optional[ProgressCallback] = None) -> bool:
        """Discard the current game and stored slot, then load a new puzzle."""

        self._cancel_pending()
        return self._run(self.session.new_game(), progress)

    def _run(self, token: int, progress: Optional[ProgressCallback]) -> bool:
        try:
            puzzle = self._produce(progress, None)
        except RetryExhaustedError as exc:
            self.session.fail_generation(exc, token)
            return False
        return self._load(puzzle, token)

    # ------------------------------------------------------------------
    # Background flow
    # ------------------------------------------------------------------
    def request_new_game(
        self,
        executor: Executor,
        progress: Optional[ProgressCallback] = None,
    ) -> PendingGeneration:
        """Start generating on ``executor``; an earlier request is superseded."""

        self._cancel_pending()
        token = self.session.new_game()
        cancel = threading.Event()
        future = executor.submit(self._produce, progress, cancel)
        self._pending = PendingGeneration(token=token, future=future, cancel=cancel)
        return self._pending

    def complete(self, pending: PendingGeneration) -> bool:
        """Apply a finished background generation on the caller's thread."""

        if self._pending is pending:
            self._pending = None
        try:
            puzzle = pending.future.result()
        except GenerationCancelledError:
            LOGGER.info("Generation %s was cancelled", pending.token)
            return False
        except RetryExhaustedError as exc:
            self.session.fail_generation(exc, pending.token)
            return False
        return self._load(puzzle, pending.token)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel.set()
            self._pending = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _load(self, puzzle: Puzzle, token: int) -> bool:
        try:
            return self.session.load_puzzle(puzzle, token)
        except MalformedPuzzleError as exc:
            self.session.fail_generation(exc, token)
            return False

    def _produce(
        self,
        progress: Optional[ProgressCallback],
        cancel: Optional[threading.Event],
    ) -> Puzzle:
        if self.puzzle is not None:
            return self.puzzle
        assert self.generator is not None
        return self.generator.generate(progress=progress, cancel=cancel)

    def press(self, key: str, shift: bool = False) -> bool:
        return self.input.handle(key, shift=shift)
