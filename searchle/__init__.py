"""Searchle: a crossword-style word-guessing puzzle engine.

This package exposes the public API surface via:

- ``searchle.engine.generator.PuzzleGenerator``: builds puzzles from a word source.
- ``searchle.engine.session.GameSession``: attempt state machine and persistence.
- ``searchle.engine.controller.GameController``: wires both for a front end.
- ``searchle.data.word_source`` implementations: local dictionary and HTTP API.
"""

from .core.models import SAMPLE_PUZZLE, Puzzle, VerticalWord, WordPlacement
from .engine.controller import GameController
from .engine.generator import GeneratorConfig, PuzzleGenerator
from .engine.grid import PuzzleGrid, resolve_cells
from .engine.session import GameConfig, GameSession

__all__ = [
    "GameConfig",
    "GameController",
    "GameSession",
    "GeneratorConfig",
    "Puzzle",
    "PuzzleGenerator",
    "PuzzleGrid",
    "SAMPLE_PUZZLE",
    "VerticalWord",
    "WordPlacement",
    "resolve_cells",
]

__version__ = "0.1.0"
