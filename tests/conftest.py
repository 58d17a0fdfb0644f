"""Shared test fixtures."""
from __future__ import annotations

import random

import pytest

from quizgen.errors import ProviderError
from quizgen.models import (
    ANTONYMS,
    DEFINITIONS,
    EXAMPLES,
    SYNONYMS,
    LexicalResult,
    MultipleChoiceQuestion,
)
from quizgen.provider_chain import ProviderChain
from quizgen.providers.base import LexicalProvider


class FakeProvider(LexicalProvider):
    """In-memory provider keyed by (word, attribute).

    Values are either a list of strings (resolved word == requested word),
    a ``(resolved_word, values)`` tuple, or an exception to raise.
    """

    def __init__(self, data=None, name="fake"):
        self.data = data or {}
        self._name = name
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    def _answer(self, word: str, attribute: str) -> LexicalResult:
        self.calls.append((word, attribute))
        entry = self.data.get((word, attribute))
        if entry is None:
            raise ProviderError(self._name, f"no {attribute} for {word!r}")
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, tuple):
            resolved, values = entry
        else:
            resolved, values = word, entry
        return LexicalResult(attribute, resolved, list(values), self._name)

    def get_definitions(self, word):
        return self._answer(word, DEFINITIONS)

    def get_synonyms(self, word):
        return self._answer(word, SYNONYMS)

    def get_antonyms(self, word):
        return self._answer(word, ANTONYMS)

    def get_examples(self, word):
        return self._answer(word, EXAMPLES)

    def name(self) -> str:
        return self._name

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sample_words():
    return ["cat", "dog", "happy", "sad", "quick", "bright", "calm", "brave"]


@pytest.fixture
def lexicon():
    """Lexical data for a handful of words, enough for 4-choice questions."""
    return {
        ("cat", SYNONYMS): ["feline", "kitty", "tom", " CAT "],
        ("cat", EXAMPLES): ["The cat slept on the warm windowsill."],
        ("cat", DEFINITIONS): ["a small domesticated carnivorous mammal"],
        ("happy", SYNONYMS): ["glad", "joyful", "content", "cheerful"],
        ("happy", ANTONYMS): ["sad", "unhappy", "miserable"],
        ("happy", EXAMPLES): ["She was happy to see her old friends."],
        ("happy", DEFINITIONS): ["feeling or showing pleasure"],
        ("sad", SYNONYMS): ["unhappy", "sorrowful", "downcast"],
        ("sad", EXAMPLES): ["It was a sad day for everyone."],
        ("sad", DEFINITIONS): ["feeling sorrow"],
        ("quick", SYNONYMS): ["fast", "rapid"],  # too few for 4 choices
        ("quick", EXAMPLES): ["a quick response"],
    }


@pytest.fixture
def fake_provider(lexicon):
    return FakeProvider(lexicon)


@pytest.fixture
def chain(fake_provider):
    return ProviderChain([fake_provider])


@pytest.fixture
def sample_question():
    return MultipleChoiceQuestion(
        statement="The cat slept on the warm windowsill.",
        choices=["feline", "cat", "kitty", "tom"],
        solution="B",
        word="cat",
        attribute=EXAMPLES,
    )


@pytest.fixture
def word_list_content():
    return """\
# animals
cat
  dog

happy
Cat
"""
