"""Candidate words for a run, sampled without replacement."""
from __future__ import annotations

import random
from collections.abc import Iterable
from pathlib import Path

from quizgen.errors import PoolExhaustedError
from quizgen.parsers.word_list_parser import parse_word_list


class WordPool:
    """A shrinking set of distinct words.

    Words are deduplicated case-insensitively (the first spelling seen is
    kept). Each ``select()`` removes the chosen word, so no word is offered
    twice in one run.
    """

    def __init__(self, words: Iterable[str], rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self._words: list[str] = []
        seen: set[str] = set()
        for w in words:
            w = w.strip()
            if not w or w.lower() in seen:
                continue
            seen.add(w.lower())
            self._words.append(w)

    @classmethod
    def from_files(cls, paths: Iterable[Path], rng: random.Random | None = None) -> WordPool:
        words: list[str] = []
        for path in paths:
            words.extend(parse_word_list(path))
        return cls(words, rng=rng)

    def remaining(self) -> int:
        return len(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def select(self) -> str:
        if not self._words:
            raise PoolExhaustedError()
        index = self.rng.randrange(len(self._words))
        # swap-remove keeps selection O(1); order inside the pool is irrelevant
        self._words[index], self._words[-1] = self._words[-1], self._words[index]
        return self._words.pop()

    def select_many(self, count: int) -> list[str]:
        """Take *count* distinct words, or none at all if too few remain."""
        if count > len(self._words):
            raise PoolExhaustedError(
                f"need {count} words but only {len(self._words)} remain in the pool"
            )
        return [self.select() for _ in range(count)]

    def discard(self, words: Iterable[str]) -> int:
        """Remove *words* (case-insensitively) without offering them. Returns count removed."""
        drop = {w.strip().lower() for w in words}
        before = len(self._words)
        self._words = [w for w in self._words if w.lower() not in drop]
        return before - len(self._words)
