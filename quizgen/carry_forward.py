"""Re-use questions missed in the previous run."""
from __future__ import annotations

import logging
import random
from pathlib import Path

from quizgen.errors import FileError, MissingStateError
from quizgen.grading import parse_answer_pairs
from quizgen.models import MultipleChoiceQuestion, is_choice_letter
from quizgen.question_generator import validate_question
from quizgen.storage import read_json

_log = logging.getLogger("quizgen.carry")


def load_previous(
    questions_path: Path,
    answers_path: Path,
) -> tuple[list[MultipleChoiceQuestion], list[tuple[str, str | None]]] | None:
    """Load the last run's questions and answer pairs.

    Returns None when either file is missing or truncated (start fresh).
    Any other read or parse failure raises ``FileError``.
    """
    try:
        raw_questions = read_json(questions_path)
        raw_answers = read_json(answers_path)
    except MissingStateError as e:
        _log.info("No previous session to carry forward (%s)", e)
        return None

    if not isinstance(raw_questions, list):
        raise FileError(questions_path, "questions must be a list")
    questions = []
    for i, item in enumerate(raw_questions):
        try:
            question = MultipleChoiceQuestion.from_dict(item)
        except (KeyError, TypeError, ValueError) as e:
            raise FileError(questions_path, f"question {i} is malformed: {e}") from e
        reason = validate_question(question, question.choice_count)
        if reason:
            raise FileError(questions_path, f"question {i} is invalid: {reason}")
        questions.append(question)

    pairs = parse_answer_pairs(raw_answers, Path(answers_path))
    if len(pairs) != len(questions):
        raise FileError(
            answers_path,
            f"{len(pairs)} answers do not match {len(questions)} saved questions",
        )
    for i, (question, (expected, submitted)) in enumerate(zip(questions, pairs)):
        if expected != question.solution:
            raise FileError(
                answers_path,
                f"answer {i} expects {expected} but question {i} is solved by {question.solution}",
            )
        if submitted is not None and not is_choice_letter(submitted, question.choice_count):
            raise FileError(
                answers_path,
                f"answer {i} submitted {submitted} for a {question.choice_count}-choice question",
            )
    return questions, pairs


def select_carry_forward(
    questions: list[MultipleChoiceQuestion],
    pairs: list[tuple[str, str | None]],
    requested: int,
    ratio: float,
    rng: random.Random | None = None,
) -> list[MultipleChoiceQuestion]:
    """Pick questions answered incorrectly last time, capped at ``ratio * requested``.

    Questions left unanswered are not carried forward, only wrong answers.
    """
    if not 0.0 <= ratio <= 1.0:
        raise ValueError(f"carry-forward ratio must be within [0, 1] (got {ratio})")
    rng = rng or random.Random()

    missed = [
        q for q, (expected, submitted) in zip(questions, pairs)
        if submitted is not None and submitted != expected
    ]
    rng.shuffle(missed)
    limit = int(requested * ratio)
    selected = missed[:limit]
    _log.info("Carrying forward %d of %d missed questions", len(selected), len(missed))
    return selected
