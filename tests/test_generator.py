import threading
import unittest
from collections import Counter
from typing import List, Optional

from searchle.core.exceptions import (GenerationCancelledError, GenerationError, MalformedPuzzleError,
                                      RetryExhaustedError, SourceUnavailableError)
from searchle.engine.generator import GenerationProgress, GeneratorConfig, PuzzleGenerator
from searchle.engine.grid import PuzzleGrid


class FakeSource:
    """Two candidates per query, each starting with the required letter."""

    def __init__(self, horizontal: str = "BANDIT") -> None:
        self.horizontal = horizontal
        self.calls: List[tuple] = []
        self._lock = threading.Lock()

    def fetch_candidates(self, length: int, required_letter: Optional[str] = None) -> List[str]:
        with self._lock:
            self.calls.append((length, required_letter))
        if required_letter is None:
            return [self.horizontal] if len(self.horizontal) == length else []
        return [self.vertical(length, required_letter, "X"), self.vertical(length, required_letter, "Y")]

    def vertical(self, length: int, letter: str, filler: str) -> str:
        return letter + filler * (length - 1)


class FlakySource(FakeSource):
    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures

    def fetch_candidates(self, length: int, required_letter: Optional[str] = None) -> List[str]:
        if required_letter is None and self.failures > 0:
            self.failures -= 1
            raise SourceUnavailableError("word service down")
        return super().fetch_candidates(length, required_letter)


class WrongLengthSource(FakeSource):
    def vertical(self, length: int, letter: str, filler: str) -> str:
        return letter + filler * length


class MissingLetterSource(FakeSource):
    def vertical(self, length: int, letter: str, filler: str) -> str:
        shifted = chr((ord(letter) - ord("A") + 1) % 26 + ord("A"))
        return shifted + filler * (length - 1)


class GeneratorSuccessTests(unittest.TestCase):
    def test_generates_valid_puzzle(self) -> None:
        source = FakeSource()
        generator = PuzzleGenerator(source, GeneratorConfig(seed=3))
        puzzle = generator.generate()

        self.assertEqual(puzzle.horizontal.word, "BANDIT")
        self.assertEqual(len(puzzle.verticals), 6)
        self.assertEqual([v.intersect_index for v in puzzle.verticals], list(range(6)))
        self.assertEqual(
            Counter(len(v.word) for v in puzzle.verticals),
            Counter(generator.config.target_lengths),
        )
        self.assertEqual(len(set(puzzle.words)), len(puzzle.words))
        self.assertTrue(PuzzleGrid(puzzle).is_complete)

    def test_default_anchor_keeps_rows_non_negative(self) -> None:
        puzzle = PuzzleGenerator(FakeSource(), GeneratorConfig(seed=1)).generate()
        self.assertEqual(puzzle.horizontal.y, 5)
        self.assertTrue(all(cell.y >= 0 for cell in PuzzleGrid(puzzle).cells))

    def test_one_query_per_position(self) -> None:
        source = FakeSource()
        PuzzleGenerator(source, GeneratorConfig(seed=3)).generate()
        letters = sorted(letter for _, letter in source.calls if letter is not None)
        self.assertEqual(letters, sorted("BANDIT"))

    def test_progress_is_monotonic_and_ends_complete(self) -> None:
        reports: List[GenerationProgress] = []
        PuzzleGenerator(FakeSource(), GeneratorConfig(seed=3)).generate(progress=reports.append)

        completed = [report.completed for report in reports]
        self.assertEqual(completed, sorted(completed))
        self.assertEqual(completed[0], 1)
        self.assertEqual(completed[-1], 7)
        self.assertTrue(all(report.total == 7 for report in reports))

    def test_failing_progress_callback_does_not_abort(self) -> None:
        def explode(_: GenerationProgress) -> None:
            raise RuntimeError("display closed")

        puzzle = PuzzleGenerator(FakeSource(), GeneratorConfig(seed=3)).generate(progress=explode)
        self.assertEqual(puzzle.horizontal.word, "BANDIT")

    def test_seed_makes_generation_repeatable(self) -> None:
        first = PuzzleGenerator(FakeSource(), GeneratorConfig(seed=11)).generate()
        second = PuzzleGenerator(FakeSource(), GeneratorConfig(seed=11)).generate()
        self.assertEqual(first, second)


class GeneratorRetryTests(unittest.TestCase):
    def test_retries_after_source_failure(self) -> None:
        reports: List[GenerationProgress] = []
        generator = PuzzleGenerator(FlakySource(failures=2), GeneratorConfig(seed=3, max_retries=5))
        puzzle = generator.generate(progress=reports.append)
        self.assertEqual(puzzle.horizontal.word, "BANDIT")
        self.assertEqual(reports[-1].attempt, 3)

    def test_gives_up_after_max_retries(self) -> None:
        generator = PuzzleGenerator(FlakySource(failures=10), GeneratorConfig(max_retries=3))
        with self.assertRaises(RetryExhaustedError) as ctx:
            generator.generate()
        self.assertEqual(ctx.exception.attempts, 3)
        self.assertIsInstance(ctx.exception.last_error, SourceUnavailableError)

    def test_empty_horizontal_pool_exhausts(self) -> None:
        generator = PuzzleGenerator(FakeSource(horizontal="TOOLONGWORD"), GeneratorConfig(max_retries=2))
        with self.assertRaises(RetryExhaustedError):
            generator.generate()

    def test_length_mismatch_is_rejected(self) -> None:
        generator = PuzzleGenerator(WrongLengthSource(), GeneratorConfig(seed=3, max_retries=2))
        with self.assertRaises(RetryExhaustedError) as ctx:
            generator.generate()
        self.assertIsInstance(ctx.exception.last_error, GenerationError)
        self.assertNotIsInstance(ctx.exception.last_error, MalformedPuzzleError)

    def test_vertical_without_crossing_letter_is_rejected(self) -> None:
        generator = PuzzleGenerator(MissingLetterSource(), GeneratorConfig(seed=3, max_retries=2))
        with self.assertRaises(RetryExhaustedError) as ctx:
            generator.generate()
        self.assertIsInstance(ctx.exception.last_error, MalformedPuzzleError)


class GeneratorCancelTests(unittest.TestCase):
    def test_preset_cancel_stops_before_querying(self) -> None:
        source = FakeSource()
        cancel = threading.Event()
        cancel.set()
        with self.assertRaises(GenerationCancelledError):
            PuzzleGenerator(source, GeneratorConfig(seed=3)).generate(cancel=cancel)
        self.assertEqual(source.calls, [])

    def test_cancel_during_fetch_is_not_retried(self) -> None:
        cancel = threading.Event()

        def cancel_midway(report: GenerationProgress) -> None:
            if report.completed >= 3:
                cancel.set()

        generator = PuzzleGenerator(FakeSource(), GeneratorConfig(seed=3, max_retries=5))
        with self.assertRaises(GenerationCancelledError):
            generator.generate(progress=cancel_midway, cancel=cancel)


class GeneratorConfigTests(unittest.TestCase):
    def test_needs_one_length_per_letter(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(horizontal_length=5)

    def test_rejects_short_lengths(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(horizontal_length=2, target_lengths=(1, 3))

    def test_rejects_zero_retries(self) -> None:
        with self.assertRaises(ValueError):
            GeneratorConfig(max_retries=0)

    def test_explicit_anchor(self) -> None:
        self.assertEqual(GeneratorConfig(anchor_y=9).resolved_anchor_y(), 9)
        self.assertEqual(GeneratorConfig(target_lengths=(3, 3, 3, 3, 3, 7)).resolved_anchor_y(), 6)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
