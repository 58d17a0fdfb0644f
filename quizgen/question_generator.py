"""Build multiple-choice vocabulary questions from provider data."""
from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from quizgen.errors import DataError, PoolExhaustedError
from quizgen.models import (
    ANTONYMS,
    CHOICE_LETTERS,
    DEFINITIONS,
    EXAMPLES,
    SYNONYMS,
    MultipleChoiceQuestion,
    choice_letter,
    same_word,
)

if TYPE_CHECKING:
    from quizgen.provider_chain import ProviderChain
    from quizgen.word_pool import WordPool

_log = logging.getLogger("quizgen.qgen")

MIN_CHOICES = 2

# Statement attribute for the synonym-distractor strategy, keyed by quiz kind
SYNONYM_STATEMENTS = {
    SYNONYMS: EXAMPLES,
    EXAMPLES: EXAMPLES,
    DEFINITIONS: DEFINITIONS,
}

# Pool-distractor attributes shown as a joined list rather than one picked value
JOINED_ATTRIBUTES = (SYNONYMS, ANTONYMS)

STATEMENT_LABELS = {
    SYNONYMS: "Synonyms",
    ANTONYMS: "Antonyms",
    DEFINITIONS: "Definition",
}


def _usable_values(values: list[str], word: str) -> list[str]:
    """Trim, drop blanks and self-matches, dedupe case-insensitively (order kept)."""
    seen: set[str] = set()
    result: list[str] = []
    for v in values:
        v = v.strip()
        key = v.lower()
        if not v or same_word(v, word) or key in seen:
            continue
        seen.add(key)
        result.append(v)
    return result


def _check_choice_count(choice_count: int) -> None:
    if not MIN_CHOICES <= choice_count <= len(CHOICE_LETTERS):
        raise ValueError(
            f"choice_count must be between {MIN_CHOICES} and {len(CHOICE_LETTERS)} (got {choice_count})"
        )


def validate_question(question: MultipleChoiceQuestion, choice_count: int) -> str | None:
    """Check the structural invariants of a built question.

    Returns ``None`` when valid, or a human-readable reason on failure.
    """
    if len(question.choices) != choice_count:
        return f"expected {choice_count} choices, got {len(question.choices)}"

    lower_choices = [c.strip().lower() for c in question.choices]
    if len(set(lower_choices)) != len(lower_choices):
        dupes = {c for c in lower_choices if lower_choices.count(c) > 1}
        return f"duplicate choices: {sorted(dupes)}"

    matches = [i for i, c in enumerate(question.choices) if same_word(c, question.word)]
    if len(matches) != 1:
        return f"target word {question.word!r} appears {len(matches)} times among the choices"

    if question.solution != choice_letter(matches[0]):
        return f"solution {question.solution} does not point at {question.word!r}"

    if not question.statement.strip():
        return "empty statement"
    return None


class SynonymDistractorBuilder:
    """Distractors are the target's own synonyms.

    The statement is an example sentence or a definition of the target, so
    the task is picking the one word that fits it among near-synonyms.
    """

    def __init__(
        self,
        chain: ProviderChain,
        choice_count: int = 4,
        statement_attribute: str = EXAMPLES,
        rng: random.Random | None = None,
    ):
        _check_choice_count(choice_count)
        if statement_attribute not in (EXAMPLES, DEFINITIONS):
            raise ValueError(f"Unsupported statement attribute: {statement_attribute}")
        self.chain = chain
        self.choice_count = choice_count
        self.statement_attribute = statement_attribute
        self.rng = rng or random.Random()

    def build(self, word: str) -> MultipleChoiceQuestion:
        needed = self.choice_count - 1

        synonyms = self.chain.lookup(word, SYNONYMS)
        if not same_word(synonyms.word, word):
            raise DataError(f"synonyms resolved {synonyms.word!r} instead of {word!r}")
        candidates = _usable_values(synonyms.values, word)
        if len(candidates) < needed:
            raise DataError(f"only {len(candidates)} synonyms for {word!r}, need {needed}")

        statements = self.chain.lookup(word, self.statement_attribute)
        # Both lookups may come from different providers; they must agree on the word
        if statements.word != synonyms.word:
            raise DataError(
                f"{self.statement_attribute} resolved {statements.word!r}, "
                f"synonyms resolved {synonyms.word!r}"
            )
        usable = [s.strip() for s in statements.values if s.strip()]
        if not usable:
            raise DataError(f"no {self.statement_attribute} for {word!r}")
        statement = self.rng.choice(usable)

        choices = self.rng.sample(candidates, needed) + [word]
        self.rng.shuffle(choices)
        solution = next(i for i, c in enumerate(choices) if same_word(c, word))

        question = MultipleChoiceQuestion(
            statement=statement,
            choices=choices,
            solution=choice_letter(solution),
            word=word,
            attribute=self.statement_attribute,
        )
        reason = validate_question(question, self.choice_count)
        if reason:
            raise DataError(reason)
        return question


class PoolDistractorBuilder:
    """Distractors are other words drawn (and consumed) from the word pool."""

    def __init__(
        self,
        chain: ProviderChain,
        pool: WordPool,
        attribute: str = SYNONYMS,
        choice_count: int = 4,
        rng: random.Random | None = None,
    ):
        _check_choice_count(choice_count)
        if attribute not in (DEFINITIONS, SYNONYMS, ANTONYMS, EXAMPLES):
            raise ValueError(f"Unknown lexical attribute: {attribute}")
        self.chain = chain
        self.pool = pool
        self.attribute = attribute
        self.choice_count = choice_count
        self.rng = rng or random.Random()

    def _statement(self, values: list[str]) -> str:
        if self.attribute in JOINED_ATTRIBUTES:
            picked = self.rng.sample(values, self.choice_count - 1)
            return f"{STATEMENT_LABELS[self.attribute]}: {', '.join(picked)}"
        picked = self.rng.choice(values)
        if self.attribute == EXAMPLES:
            return picked
        return f"{STATEMENT_LABELS[self.attribute]}: {picked}"

    def build(self, word: str) -> MultipleChoiceQuestion:
        result = self.chain.lookup(word, self.attribute)
        if not same_word(result.word, word):
            raise DataError(f"{self.attribute} resolved {result.word!r} instead of {word!r}")

        values = _usable_values(result.values, word)
        required = self.choice_count - 1 if self.attribute in JOINED_ATTRIBUTES else 1
        if len(values) < required:
            raise DataError(f"only {len(values)} {self.attribute} for {word!r}, need {required}")
        statement = self._statement(values)

        # PoolExhaustedError is a DataError; the caller decides whether to stop
        choices = self.pool.select_many(self.choice_count - 1)
        position = self.rng.randrange(self.choice_count)
        choices.insert(position, word)

        question = MultipleChoiceQuestion(
            statement=statement,
            choices=choices,
            solution=choice_letter(position),
            word=word,
            attribute=self.attribute,
        )
        reason = validate_question(question, self.choice_count)
        if reason:
            raise DataError(reason)
        return question


def make_builder(
    kind: str,
    distractors: str,
    chain: ProviderChain,
    pool: WordPool,
    choice_count: int = 4,
    rng: random.Random | None = None,
) -> SynonymDistractorBuilder | PoolDistractorBuilder:
    """Pick the generation strategy for a quiz kind.

    ``distractors="synonyms"`` uses the target's synonyms as wrong answers
    (kinds: synonyms/examples -> example sentence, definitions -> definition).
    ``distractors="pool"`` draws wrong answers from the word pool and accepts
    any lexical attribute as the kind.
    """
    if distractors == "synonyms":
        if kind not in SYNONYM_STATEMENTS:
            raise ValueError(f"Quiz kind {kind!r} is not supported with synonym distractors")
        return SynonymDistractorBuilder(chain, choice_count, SYNONYM_STATEMENTS[kind], rng)
    if distractors == "pool":
        return PoolDistractorBuilder(chain, pool, kind, choice_count, rng)
    raise ValueError(f"Unknown distractor source: {distractors}")


def generate_questions(
    builder: SynonymDistractorBuilder | PoolDistractorBuilder,
    pool: WordPool,
    count: int,
    seed: list[MultipleChoiceQuestion] | None = None,
) -> list[MultipleChoiceQuestion]:
    """Top up *seed* with freshly built questions until *count* are ready.

    Words whose data cannot make a valid question are skipped. Stops early
    when the pool runs dry. ``ApiError`` propagates and aborts the run.
    """
    questions = list(seed or [])
    skipped = 0
    while len(questions) < count:
        try:
            word = pool.select()
        except PoolExhaustedError:
            _log.warning("Word pool exhausted: %d/%d questions built", len(questions), count)
            break
        try:
            question = builder.build(word)
        except PoolExhaustedError as e:
            _log.warning("Cannot draw distractors for %r: %s", word, e)
            break
        except DataError as e:
            skipped += 1
            _log.info("Skipping %r: %s", word, e)
            continue
        questions.append(question)
        _log.info("[%d/%d] Built question for %r", len(questions), count, word)

    if skipped:
        _log.info("Skipped %d words with unusable data", skipped)
    return questions
