"""Scoring, rendering and persisting a graded quiz."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING

from quizgen.errors import FileError
from quizgen.models import is_choice_letter
from quizgen.storage import read_json, write_json

if TYPE_CHECKING:
    from quizgen.models import MultipleChoiceQuestion

CORRECT_MARK = "✔"
WRONG_MARK = "✘"


@dataclass
class GradeReport:
    started_at: datetime
    ended_at: datetime
    # (expected, submitted-or-None) per question, in session order
    graded_answers: list[tuple[str, str | None]] = field(default_factory=list)

    @property
    def elapsed(self) -> timedelta:
        return self.ended_at - self.started_at

    @property
    def total(self) -> int:
        return len(self.graded_answers)

    def is_correct(self, index: int) -> bool:
        expected, submitted = self.graded_answers[index]
        return submitted is not None and submitted == expected

    @property
    def correct(self) -> int:
        return sum(1 for i in range(self.total) if self.is_correct(i))

    def score(self) -> float:
        if self.total == 0:
            return 0.0
        return self.correct / self.total * 100

    def render(self, questions: list[MultipleChoiceQuestion] | None = None) -> str:
        lines = [
            f"Time taken: {self.elapsed}",
            f"Score: {self.score():.1f}%",
        ]
        for i, (expected, submitted) in enumerate(self.graded_answers):
            mark = CORRECT_MARK if self.is_correct(i) else WRONG_MARK
            line = f"{i + 1}. {mark} {expected}"
            if questions is not None and i < len(questions):
                line += f" ({questions[i].solution_text})"
            if not self.is_correct(i):
                line += f", you answered {submitted}" if submitted else ", no answer"
            lines.append(line)
        return "\n".join(lines)

    def save(self, path: Path) -> None:
        write_json(path, [[expected, submitted] for expected, submitted in self.graded_answers])


def parse_answer_pairs(data: object, path: Path) -> list[tuple[str, str | None]]:
    """Validate persisted answer pairs, raising ``FileError`` on bad structure."""
    if not isinstance(data, list):
        raise FileError(path, "answers must be a list of [expected, submitted] pairs")
    pairs: list[tuple[str, str | None]] = []
    for i, item in enumerate(data):
        if not isinstance(item, list) or len(item) != 2:
            raise FileError(path, f"answer {i} is not an [expected, submitted] pair")
        expected, submitted = item
        if not is_choice_letter(expected) or (submitted is not None and not is_choice_letter(submitted)):
            raise FileError(path, f"answer {i} holds an invalid choice: {item!r}")
        pairs.append((expected, submitted))
    return pairs


def load_answers(path: Path) -> list[tuple[str, str | None]]:
    return parse_answer_pairs(read_json(path), Path(path))
