"""Console entrypoint for the Searchle word-guessing puzzle."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from searchle.core.constants import MAX_ATTEMPTS, MAX_GENERATION_RETRIES, ScoreMerge
from searchle.core.exceptions import SearchleError
from searchle.core.models import SAMPLE_PUZZLE, CellKey, Puzzle
from searchle.data.dictionary import DictionaryConfig, WordDictionary
from searchle.data.word_source import DictionaryWordSource, HttpWordSource, WordSource
from searchle.engine.controller import GameController
from searchle.engine.generator import GenerationProgress, GeneratorConfig, PuzzleGenerator
from searchle.engine.grid import PuzzleGrid
from searchle.engine.session import GameConfig, GameSession
from searchle.engine.session_store import JsonFileSessionStore, MemorySessionStore, SessionStore
from searchle.io.telemetry import HttpTelemetrySink, LoggingTelemetrySink, TelemetrySink
from searchle.utils.logger import configure_logging
from searchle.utils.pretty import print_session


HELP_TEXT = """Commands:
  a-z              type a letter into the active cell
  up/down/left/right, tab, stab (shift+tab), bs (backspace)
  go X,Y           activate the cell at X,Y
  across WORD      type WORD moving right;  down WORD  type WORD moving down
  enter | submit   check the grid
  new              start a new game
  save FILE        write the current puzzle as JSON
  help, quit"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Play Searchle: one horizontal word crossed by vertical words",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--sample", action="store_true", help="Play the built-in CREATE puzzle")
    source.add_argument("--puzzle", type=Path, help="Play a puzzle JSON file")
    source.add_argument(
        "--word-api",
        action="store_true",
        help="Generate from the HTTP word API (SEARCHLE_WORD_API_URL) instead of a local list",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        help="Word list for generation, one word per line (# comments ignored)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--max-attempts", type=int, default=MAX_ATTEMPTS, help="Attempts per game")
    parser.add_argument(
        "--max-retries",
        type=int,
        default=MAX_GENERATION_RETRIES,
        help="Generation attempts before giving up",
    )
    parser.add_argument(
        "--score-merge",
        type=str,
        choices=[m.value for m in ScoreMerge],
        default=ScoreMerge.PRECEDENCE.value,
        help="How a letter shared by two words is scored",
    )
    parser.add_argument(
        "--state-file",
        type=Path,
        help="Persist the session to this JSON file (default: in memory only)",
    )
    parser.add_argument("--telemetry-url", type=str, help="POST game events to this endpoint")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def load_puzzle_file(path: Path) -> Puzzle:
    """Read a puzzle JSON file; its words must lay out without conflicts."""

    puzzle = Puzzle.from_dict(json.loads(path.read_text(encoding="utf-8")))
    PuzzleGrid(puzzle)
    return puzzle


def build_source(args: argparse.Namespace) -> WordSource:
    if args.word_api:
        return HttpWordSource()
    return DictionaryWordSource(WordDictionary(DictionaryConfig(path=args.words_file)))


def build_controller(args: argparse.Namespace) -> GameController:
    config = GameConfig(max_attempts=args.max_attempts, score_merge=ScoreMerge(args.score_merge))
    store: SessionStore
    if args.state_file:
        store = JsonFileSessionStore(path=args.state_file, storage_key=config.storage_key)
    else:
        store = MemorySessionStore(config.storage_key)
    telemetry: TelemetrySink = (
        HttpTelemetrySink(args.telemetry_url) if args.telemetry_url else LoggingTelemetrySink()
    )
    session = GameSession(config, store=store, telemetry=telemetry)

    if args.sample:
        return GameController(session, puzzle=SAMPLE_PUZZLE)
    if args.puzzle:
        return GameController(session, puzzle=load_puzzle_file(args.puzzle))
    generator = PuzzleGenerator(
        build_source(args),
        GeneratorConfig(seed=args.seed, max_retries=args.max_retries),
    )
    return GameController(session, generator=generator)


def show_progress(progress: GenerationProgress) -> None:
    print(
        f"\rGenerating puzzle (attempt {progress.attempt}): "
        f"{progress.completed}/{progress.total}",
        end="",
        file=sys.stderr,
        flush=True,
    )


def parse_cell(text: str) -> Optional[CellKey]:
    try:
        return CellKey.parse(text)
    except ValueError:
        return None


def run_command(controller: GameController, line: str, out: TextIO) -> bool:
    """Apply one console command; return False when the player quits."""

    parts = line.strip().split()
    if not parts:
        return True
    command, rest = parts[0].lower(), parts[1:]
    session = controller.session

    if command in ("quit", "exit", "q"):
        return False
    if command in ("help", "?"):
        print(HELP_TEXT, file=out)
    elif command == "new":
        controller.new_game(progress=show_progress)
        print(file=sys.stderr)
    elif command == "go" and rest:
        key = parse_cell(rest[0])
        if key is None or not session.select_cell(key):
            print(f"No playable cell at {rest[0]}", file=out)
    elif command in ("across", "down") and rest:
        step = "right" if command == "across" else "down"
        for char in rest[0]:
            controller.press(char)
            controller.press(step)
    elif command == "save" and rest and session.grid is not None:
        Path(rest[0]).write_text(
            json.dumps(session.grid.puzzle.to_dict(), indent=2), encoding="utf-8"
        )
    elif command == "stab":
        controller.press("Tab", shift=True)
    elif command == "submit":
        controller.press("Enter")
    elif command == "bs":
        controller.press("Backspace")
    else:
        controller.press(parts[0])
    return True


def main(argv: List[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.max_attempts < 1:
        parser.error("--max-attempts must be at least 1")
    if args.max_retries < 1:
        parser.error("--max-retries must be at least 1")

    try:
        controller = build_controller(args)
    except (OSError, ValueError, SearchleError) as exc:
        parser.error(str(exc))

    controller.start(progress=show_progress)
    print(file=sys.stderr)
    out = sys.stdout
    print(HELP_TEXT, file=out)
    while True:
        print(file=out)
        print_session(controller.session, stream=out)
        try:
            line = input("> ")
        except EOFError:
            break
        if not run_command(controller, line, out):
            break


if __name__ == "__main__":  # pragma: no cover
    main()
