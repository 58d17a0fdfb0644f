from __future__ import annotations

import re
import string
from dataclasses import dataclass

DEFINITIONS = "definitions"
SYNONYMS = "synonyms"
ANTONYMS = "antonyms"
EXAMPLES = "examples"

ATTRIBUTES = (DEFINITIONS, SYNONYMS, ANTONYMS, EXAMPLES)

CHOICE_LETTERS = string.ascii_uppercase
MASK = "_____"


def choice_letter(index: int) -> str:
    if index < 0 or index >= len(CHOICE_LETTERS):
        raise ValueError(f"choice index out of range: {index}")
    return CHOICE_LETTERS[index]


def choice_index(letter: str) -> int:
    return CHOICE_LETTERS.index(letter)


def is_choice_letter(value: object, choice_count: int = len(CHOICE_LETTERS)) -> bool:
    return isinstance(value, str) and len(value) == 1 and value in CHOICE_LETTERS[:choice_count]


def parse_choice(text: str | None, choice_count: int) -> str | None:
    """Parse a submitted answer into a choice letter.

    Accepts a letter (any case) or a 1-based number. Anything else,
    including an out-of-range choice, is treated as no answer.
    """
    if text is None:
        return None
    text = text.strip().rstrip(".)").upper()
    if len(text) == 1 and text in CHOICE_LETTERS[:choice_count]:
        return text
    if text.isdigit() and 1 <= int(text) <= choice_count:
        return CHOICE_LETTERS[int(text) - 1]
    return None


def mask_word(statement: str, word: str) -> str:
    """Blank out the first occurrence of *word* in *statement*."""
    if not word:
        return statement
    return re.sub(re.escape(word), MASK, statement, count=1, flags=re.IGNORECASE)


def same_word(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


@dataclass
class LexicalResult:
    attribute: str  # definitions | synonyms | antonyms | examples
    word: str  # the word the provider resolved, checked against the request
    values: list[str]
    provider: str = ""


@dataclass
class MultipleChoiceQuestion:
    statement: str
    choices: list[str]
    solution: str  # choice letter
    word: str
    attribute: str = EXAMPLES

    @property
    def choice_count(self) -> int:
        return len(self.choices)

    @property
    def solution_text(self) -> str:
        return self.choices[choice_index(self.solution)]

    def display_statement(self) -> str:
        return mask_word(self.statement, self.word)

    def ask(self) -> str:
        lines = [self.display_statement(), ""]
        for i, choice in enumerate(self.choices):
            lines.append(f"        {choice_letter(i)}. {choice}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            "statement": self.statement,
            "choices": list(self.choices),
            "solution": self.solution,
            "word": self.word,
            "attribute": self.attribute,
        }

    @classmethod
    def from_dict(cls, data: dict) -> MultipleChoiceQuestion:
        choices = data["choices"]
        if not isinstance(choices, list) or not choices:
            raise ValueError("choices must be a non-empty list")
        solution = data["solution"]
        if not is_choice_letter(solution, len(choices)):
            raise ValueError(f"solution {solution!r} out of range for {len(choices)} choices")
        return cls(
            statement=data["statement"],
            choices=[str(c) for c in choices],
            solution=solution,
            word=data.get("word", ""),
            attribute=data.get("attribute", EXAMPLES),
        )
