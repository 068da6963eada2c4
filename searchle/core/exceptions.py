"""Custom exception hierarchy for the Searchle engine."""

from __future__ import annotations

from typing import Optional


class SearchleError(Exception):
    """Base exception for engine failures."""


class SourceUnavailableError(SearchleError):
    """Raised when a word source query fails or yields nothing usable."""


class MalformedPuzzleError(SearchleError):
    """Raised when a puzzle definition breaks a structural rule."""


class OverlapConflictError(MalformedPuzzleError):
    """Raised when two words place different letters on the same coordinate."""


class GenerationError(SearchleError):
    """Raised when a generation attempt fails a validation gate."""


class RetryExhaustedError(GenerationError):
    """Raised when every bounded generation attempt has failed."""

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None) -> None:
        message = f"Unable to generate puzzle after {attempts} attempts"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class GenerationCancelledError(GenerationError):
    """Raised when generation is abandoned through its cancel signal."""


class PersistenceCorruptError(SearchleError):
    """Raised when a persisted session record cannot be decoded."""


class InvalidTransitionError(SearchleError):
    """Raised when a session operation is not allowed in the current state."""


class DictionaryLoadError(SearchleError):
    """Raised when a word list file cannot be read."""
