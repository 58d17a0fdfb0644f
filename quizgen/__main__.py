"""CLI entry point for quizgen.

Usage:
  python -m quizgen quiz [--kind KIND] [--distractors synonyms|pool] [--mode interactive|batch]
                         [--length N] [--choices N] [--source FILE ...] [--load]
  python -m quizgen lookup WORD [--attribute ATTR]
  python -m quizgen report
  python -m quizgen config [--set KEY=VALUE ...]
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

from quizgen.errors import QuizError


def main():
    args = sys.argv[1:]
    command = args[0] if args and not args[0].startswith("--") else "quiz"
    if args and command == args[0]:
        args = args[1:]

    try:
        if command == "quiz":
            _quiz(args)
        elif command == "lookup":
            _lookup(args)
        elif command == "report":
            _report()
        elif command == "config":
            _config(args)
        else:
            print(f"Unknown command: {command}")
            print("Commands: quiz, lookup, report, config")
            sys.exit(1)
    except (QuizError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _parse_multi_flag(args: list[str], name: str) -> list[str]:
    return [args[i + 1] for i, a in enumerate(args) if a == name and i + 1 < len(args)]


def _load(args: list[str]):
    from quizgen.config import load_settings

    settings = load_settings()
    settings.quiz_kind = _parse_flag(args, "--kind", settings.quiz_kind)
    settings.distractors = _parse_flag(args, "--distractors", settings.distractors)
    settings.quiz_mode = _parse_flag(args, "--mode", settings.quiz_mode)
    settings.quiz_length = int(_parse_flag(args, "--length", str(settings.quiz_length)))
    settings.choice_count = int(_parse_flag(args, "--choices", str(settings.choice_count)))
    sources = _parse_multi_flag(args, "--source")
    if sources:
        settings.word_files = [str(Path(s).resolve()) for s in sources]
    if "--load" in args:
        settings.load_previous = True

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(name)s | %(message)s",
    )
    return settings


def _chain(settings):
    from quizgen.provider_chain import ProviderChain
    from quizgen.quiz import create_providers

    providers = create_providers(settings)
    if not providers:
        print("No lexical provider is configured. Set WORDS_API_KEY and/or "
              "WEBSTER_COLLEGIATE_KEY + WEBSTER_THESAURUS_KEY.")
        sys.exit(1)
    return ProviderChain(providers)


def _quiz(args: list[str]):
    from quizgen.quiz import run_quiz
    from quizgen.session import QUIZ_MODES
    from quizgen.word_pool import WordPool

    settings = _load(args)
    if settings.quiz_mode not in QUIZ_MODES:
        print(f"Unknown quiz mode: {settings.quiz_mode} (choose from {', '.join(QUIZ_MODES)})")
        sys.exit(1)

    files = settings.resolved_word_files()
    if not files:
        print(f"No word lists found. Pass --source FILE or add *.txt files to {settings.data_dir}")
        sys.exit(1)
    pool = WordPool.from_files(files)
    if pool.remaining() == 0:
        print("Word lists are empty.")
        sys.exit(1)

    chain = _chain(settings)
    print(f"Building {settings.quiz_length} {settings.quiz_kind} questions "
          f"from {pool.remaining()} words using {', '.join(chain.names())}...\n")
    try:
        report = run_quiz(settings, chain, pool)
    finally:
        chain.close()
    print(f"\nYour final grade: {report.score():.1f}%")


def _lookup(args: list[str]):
    from quizgen.models import ATTRIBUTES, SYNONYMS

    if not args or args[0].startswith("--"):
        print("Usage: python -m quizgen lookup WORD [--attribute ATTR]")
        sys.exit(1)
    word = args[0].strip()
    attribute = _parse_flag(args, "--attribute", SYNONYMS)
    if attribute not in ATTRIBUTES:
        print(f"Unknown attribute: {attribute} (choose from {', '.join(ATTRIBUTES)})")
        sys.exit(1)

    settings = _load(args[1:])
    chain = _chain(settings)
    try:
        result = chain.lookup(word, attribute)
    finally:
        chain.close()

    print(f"{result.attribute} for {result.word!r} (via {result.provider}):")
    for value in result.values:
        print(f"  - {value}")
    if not result.values:
        print("  (none)")


def _report():
    from quizgen.carry_forward import load_previous
    from quizgen.grading import CORRECT_MARK, WRONG_MARK

    settings = _load([])
    previous = load_previous(settings.questions_full_path, settings.answers_full_path)
    if previous is None:
        print("No previous quiz found.")
        return
    questions, pairs = previous

    correct = 0
    for i, (q, (expected, submitted)) in enumerate(zip(questions, pairs), 1):
        ok = submitted is not None and submitted == expected
        correct += ok
        mark = CORRECT_MARK if ok else WRONG_MARK
        print(f"{i}. {mark} {q.word}: {expected} ({q.solution_text}), answered {submitted or '-'}")
    total = len(pairs)
    score = correct / total * 100 if total else 0.0
    print(f"\nScore: {score:.1f}% ({correct}/{total})")


def _config(args: list[str]):
    import json

    from quizgen.config import save_settings

    settings = _load([])
    assignments = _parse_multi_flag(args, "--set")
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep:
            print(f"Expected KEY=VALUE after --set, got {item!r}")
            sys.exit(1)
        settings.set_value(key.strip(), value)
    if assignments:
        save_settings(settings)
    print(json.dumps(settings.to_dict(), indent=4))


if __name__ == "__main__":
    main()
