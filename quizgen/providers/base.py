from __future__ import annotations

from abc import ABC, abstractmethod

from quizgen.models import ANTONYMS, DEFINITIONS, EXAMPLES, SYNONYMS, LexicalResult


class LexicalProvider(ABC):
    """One external source of definitions, synonyms, antonyms and examples.

    Implementations raise on any failure; the result's ``word`` is the word
    the source actually resolved, which may differ from the one requested.
    """

    @abstractmethod
    def get_definitions(self, word: str) -> LexicalResult:
        ...

    @abstractmethod
    def get_synonyms(self, word: str) -> LexicalResult:
        ...

    @abstractmethod
    def get_antonyms(self, word: str) -> LexicalResult:
        ...

    @abstractmethod
    def get_examples(self, word: str) -> LexicalResult:
        ...

    @abstractmethod
    def name(self) -> str:
        ...

    def lookup(self, word: str, attribute: str) -> LexicalResult:
        getters = {
            DEFINITIONS: self.get_definitions,
            SYNONYMS: self.get_synonyms,
            ANTONYMS: self.get_antonyms,
            EXAMPLES: self.get_examples,
        }
        if attribute not in getters:
            raise ValueError(f"Unknown lexical attribute: {attribute}")
        return getters[attribute](word)

    def close(self) -> None:
        """Release network resources. Default: nothing to release."""
