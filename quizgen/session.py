"""Quiz sessions: the unanswered -> answered lifecycle and the two ways of taking one."""
from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from quizgen.errors import SessionStateError
from quizgen.grading import GradeReport
from quizgen.models import MultipleChoiceQuestion, parse_choice
from quizgen.storage import write_json

UNANSWERED = "unanswered"
ANSWERED = "answered"

INTERACTIVE = "interactive"
BATCH = "batch"
QUIZ_MODES = (INTERACTIVE, BATCH)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session:
    """An ordered set of questions that is answered once and graded once.

    ``answer()`` hands back a new, answered session and retires this one;
    calling it again on either object raises ``SessionStateError``.
    """

    def __init__(self, questions: Sequence[MultipleChoiceQuestion]):
        self.questions = list(questions)
        self.state = UNANSWERED
        self.answers: list[str | None] = []
        self._submitted = False
        self._graded = False

    def __len__(self) -> int:
        return len(self.questions)

    def answer(self, submissions: Sequence[str | None]) -> Session:
        """Record answers aligned by position; missing trailing entries mean no answer.

        Submissions that are not a valid choice for their question are
        recorded as no answer.
        """
        if self.state != UNANSWERED:
            raise SessionStateError("session is already answered")
        if self._submitted:
            raise SessionStateError("answers were already submitted for this session")
        if len(submissions) > len(self.questions):
            raise ValueError(
                f"{len(submissions)} submissions for {len(self.questions)} questions"
            )

        answers: list[str | None] = []
        for i, question in enumerate(self.questions):
            raw = submissions[i] if i < len(submissions) else None
            answers.append(parse_choice(raw, question.choice_count))

        self._submitted = True
        answered = Session(self.questions)
        answered.state = ANSWERED
        answered.answers = answers
        return answered

    def grade(self, started_at: datetime, ended_at: datetime) -> GradeReport:
        if self.state != ANSWERED:
            raise SessionStateError("session must be answered before grading")
        if self._graded:
            raise SessionStateError("session was already graded")
        self._graded = True
        pairs = [(q.solution, a) for q, a in zip(self.questions, self.answers)]
        return GradeReport(started_at=started_at, ended_at=ended_at, graded_answers=pairs)

    def save(self, path: Path) -> None:
        write_json(path, [q.to_dict() for q in self.questions])


Prompt = Callable[[str], str]
Show = Callable[[str], None]


def _read_answer(prompt: Prompt, text: str) -> str | None:
    try:
        return prompt(text)
    except EOFError:
        return None


def batch_quiz(
    session: Session,
    prompt: Prompt = input,
    show: Show = print,
    clock: Callable[[], datetime] = _utcnow,
) -> GradeReport:
    """Show every question first, then collect every answer in order."""
    started_at = clock()
    for i, question in enumerate(session.questions, 1):
        show(f"Question {i}: {question.ask()}\n")

    submissions = []
    for i in range(1, len(session) + 1):
        submissions.append(_read_answer(prompt, f"Enter your answer for question {i}: "))
    ended_at = clock()

    return session.answer(submissions).grade(started_at, ended_at)


def interactive_quiz(
    session: Session,
    prompt: Prompt = input,
    show: Show = print,
    clock: Callable[[], datetime] = _utcnow,
) -> GradeReport:
    """Show one question at a time and collect its answer before moving on."""
    started_at = clock()
    submissions = []
    for i, question in enumerate(session.questions, 1):
        show(f"Question {i}: {question.ask()}")
        submissions.append(_read_answer(prompt, "Your answer: "))
        show("")
    ended_at = clock()

    return session.answer(submissions).grade(started_at, ended_at)


def start_quiz(
    session: Session,
    mode: str = INTERACTIVE,
    prompt: Prompt = input,
    show: Show = print,
    clock: Callable[[], datetime] = _utcnow,
) -> GradeReport:
    if mode == INTERACTIVE:
        return interactive_quiz(session, prompt, show, clock)
    if mode == BATCH:
        return batch_quiz(session, prompt, show, clock)
    raise ValueError(f"Unknown quiz mode: {mode}")
