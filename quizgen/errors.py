"""Exception hierarchy for quiz construction and grading."""
from __future__ import annotations

from pathlib import Path


class QuizError(Exception):
    """Base exception for all quizgen errors."""


class ProviderError(QuizError):
    """A single lexical provider failed to answer a lookup."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class DataError(QuizError):
    """A word's lexical data cannot produce a valid question.

    Recoverable: the caller drops the word and picks another one.
    """


class PoolExhaustedError(DataError):
    """The word pool has no words left to offer."""

    def __init__(self, message: str = "word pool is exhausted"):
        super().__init__(message)


class ApiError(QuizError):
    """Every configured provider failed for one lookup."""

    def __init__(self, message: str, last_error: Exception | None = None):
        super().__init__(message)
        self.last_error = last_error


class FileError(QuizError):
    """Reading or writing a word list or persisted quiz state failed."""

    def __init__(self, path: Path | str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = Path(path)


class MissingStateError(FileError):
    """Persisted state is absent or truncated (not found / unexpected end)."""


class SessionStateError(QuizError):
    """A session was answered or graded out of order."""
