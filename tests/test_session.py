"""Tests for the session lifecycle and the batch/interactive runners."""
from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from quizgen.errors import SessionStateError
from quizgen.models import MultipleChoiceQuestion
from quizgen.session import (
    ANSWERED,
    BATCH,
    INTERACTIVE,
    UNANSWERED,
    Session,
    batch_quiz,
    interactive_quiz,
    start_quiz,
)

T0 = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_questions():
    return [
        MultipleChoiceQuestion("The cat slept.", ["feline", "cat", "kitty", "tom"], "B", "cat"),
        MultipleChoiceQuestion("She was happy.", ["happy", "glad", "joyful", "content"], "A", "happy"),
        MultipleChoiceQuestion("A sad day.", ["unhappy", "sorrowful", "downcast", "sad"], "D", "sad"),
    ]


class FakeConsole:
    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts: list[str] = []
        self.shown: list[str] = []
        self.events: list[str] = []

    def prompt(self, text: str) -> str:
        self.prompts.append(text)
        self.events.append("prompt")
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    def show(self, text: str) -> None:
        self.shown.append(text)
        if text:
            self.events.append("show")


class FakeClock:
    def __init__(self):
        self.ticks = 0

    def __call__(self) -> datetime:
        self.ticks += 1
        return T0 + timedelta(seconds=30 * (self.ticks - 1))


class TestSessionStateMachine:
    def test_new_session_is_unanswered(self):
        s = Session(make_questions())
        assert s.state == UNANSWERED
        assert len(s) == 3

    def test_answer_produces_answered_session(self):
        s = Session(make_questions())
        answered = s.answer(["B", "a", "C"])
        assert answered.state == ANSWERED
        assert answered.answers == ["B", "A", "C"]
        assert answered.questions == s.questions

    def test_missing_trailing_answers_are_none(self):
        answered = Session(make_questions()).answer(["B"])
        assert answered.answers == ["B", None, None]

    def test_invalid_submission_is_no_answer(self):
        answered = Session(make_questions()).answer(["Z", "banana", None])
        assert answered.answers == [None, None, None]

    def test_too_many_submissions(self):
        with pytest.raises(ValueError):
            Session(make_questions()).answer(["A", "B", "C", "D"])

    def test_cannot_answer_twice(self):
        s = Session(make_questions())
        s.answer(["B"])
        with pytest.raises(SessionStateError):
            s.answer(["B"])

    def test_cannot_reanswer_answered_session(self):
        answered = Session(make_questions()).answer([])
        with pytest.raises(SessionStateError):
            answered.answer(["A"])

    def test_grade_requires_answers(self):
        with pytest.raises(SessionStateError):
            Session(make_questions()).grade(T0, T0)

    def test_graded_at_most_once(self):
        answered = Session(make_questions()).answer(["B", "A", "D"])
        report = answered.grade(T0, T0 + timedelta(seconds=5))
        assert report.graded_answers == [("B", "B"), ("A", "A"), ("D", "D")]
        with pytest.raises(SessionStateError):
            answered.grade(T0, T0)

    def test_save_writes_questions(self, tmp_path):
        path = tmp_path / "questions.json"
        Session(make_questions()).save(path)
        data = json.loads(path.read_text())
        assert [d["solution"] for d in data] == ["B", "A", "D"]


class TestBatchQuiz:
    def test_shows_everything_before_prompting(self):
        console = FakeConsole(["B", "A", "D"])
        report = batch_quiz(Session(make_questions()), console.prompt, console.show, FakeClock())
        assert console.events == ["show"] * 3 + ["prompt"] * 3
        assert report.score() == 100.0
        assert console.prompts[0] == "Enter your answer for question 1: "

    def test_elapsed_time(self):
        report = batch_quiz(Session(make_questions()), FakeConsole(["B"]).prompt, lambda _: None, FakeClock())
        assert report.elapsed == timedelta(seconds=30)

    def test_eof_means_no_answer(self):
        console = FakeConsole(["B"])
        report = batch_quiz(Session(make_questions()), console.prompt, console.show, FakeClock())
        assert report.graded_answers == [("B", "B"), ("A", None), ("D", None)]


class TestInteractiveQuiz:
    def test_alternates_show_and_prompt(self):
        console = FakeConsole(["B", "2", "x"])
        report = interactive_quiz(Session(make_questions()), console.prompt, console.show, FakeClock())
        assert console.events == ["show", "prompt"] * 3
        assert report.graded_answers == [("B", "B"), ("A", "B"), ("D", None)]

    def test_statement_is_masked(self):
        console = FakeConsole(["B", "A", "D"])
        interactive_quiz(Session(make_questions()), console.prompt, console.show, FakeClock())
        assert "The _____ slept." in console.shown[0]


class TestStartQuiz:
    def test_modes_grade_identically(self):
        for mode in (INTERACTIVE, BATCH):
            console = FakeConsole(["B", "C", "D"])
            report = start_quiz(Session(make_questions()), mode, console.prompt, console.show, FakeClock())
            assert report.graded_answers == [("B", "B"), ("A", "C"), ("D", "D")]

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            start_quiz(Session(make_questions()), "speed-round")

    def test_empty_session(self):
        report = start_quiz(Session([]), BATCH, FakeConsole([]).prompt, lambda _: None, FakeClock())
        assert report.total == 0
        assert report.score() == 0.0
