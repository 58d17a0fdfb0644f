"""One quiz run: seed from the last run, generate, ask, grade, persist."""
from __future__ import annotations

import logging
import os
import random
from collections.abc import Mapping
from typing import TYPE_CHECKING

from quizgen.carry_forward import load_previous, select_carry_forward
from quizgen.question_generator import generate_questions, make_builder
from quizgen.session import Prompt, Session, Show, start_quiz

if TYPE_CHECKING:
    from quizgen.config import Settings
    from quizgen.grading import GradeReport
    from quizgen.models import MultipleChoiceQuestion
    from quizgen.provider_chain import ProviderChain
    from quizgen.providers.base import LexicalProvider
    from quizgen.word_pool import WordPool

_log = logging.getLogger("quizgen.quiz")


def create_providers(settings: Settings, environ: Mapping[str, str] = os.environ) -> list[LexicalProvider]:
    """Instantiate configured providers in priority order.

    Providers whose API keys are not set in the environment are skipped.
    """
    providers: list[LexicalProvider] = []
    for name in settings.providers:
        if name == "words_api":
            key = environ.get("WORDS_API_KEY", "")
            if not key:
                _log.warning("WORDS_API_KEY not set, skipping words_api")
                continue
            from quizgen.providers.words_api import WordsApiProvider
            providers.append(WordsApiProvider(key, settings.words_api_url, settings.http_timeout))
        elif name == "webster":
            collegiate = environ.get("WEBSTER_COLLEGIATE_KEY", "")
            thesaurus = environ.get("WEBSTER_THESAURUS_KEY", "")
            if not collegiate or not thesaurus:
                _log.warning("WEBSTER_COLLEGIATE_KEY/WEBSTER_THESAURUS_KEY not set, skipping webster")
                continue
            from quizgen.providers.webster import WebsterProvider
            providers.append(WebsterProvider(collegiate, thesaurus, settings.webster_url, settings.http_timeout))
        else:
            raise ValueError(f"Unknown lexical provider: {name}")
    return providers


def prepare_questions(
    settings: Settings,
    chain: ProviderChain,
    pool: WordPool,
    rng: random.Random | None = None,
) -> list[MultipleChoiceQuestion]:
    rng = rng or random.Random()
    seed: list[MultipleChoiceQuestion] = []
    if settings.load_previous:
        previous = load_previous(settings.questions_full_path, settings.answers_full_path)
        if previous is not None:
            seed = select_carry_forward(
                *previous,
                requested=settings.quiz_length,
                ratio=settings.carry_forward_ratio,
                rng=rng,
            )
            # carried words must not come up again as fresh questions or distractors
            pool.discard(q.word for q in seed)

    builder = make_builder(
        settings.quiz_kind,
        settings.distractors,
        chain,
        pool,
        choice_count=settings.choice_count,
        rng=rng,
    )
    return generate_questions(builder, pool, settings.quiz_length, seed=seed)


def run_quiz(
    settings: Settings,
    chain: ProviderChain,
    pool: WordPool,
    rng: random.Random | None = None,
    prompt: Prompt = input,
    show: Show = print,
) -> GradeReport:
    questions = prepare_questions(settings, chain, pool, rng)
    if len(questions) < settings.quiz_length:
        show(f"Only {len(questions)} of {settings.quiz_length} questions could be built.\n")

    session = Session(questions)
    report = start_quiz(session, settings.quiz_mode, prompt, show)
    show(report.render(questions))

    session.save(settings.questions_full_path)
    report.save(settings.answers_full_path)
    return report
