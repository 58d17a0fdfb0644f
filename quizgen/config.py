"""Run settings, persisted as ``config.json`` at the project root."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = PROJECT_ROOT / "config.json"

DEFAULTS = {
    "quiz_kind": "synonyms",
    "distractors": "synonyms",
    "quiz_mode": "interactive",
    "quiz_length": 10,
    "choice_count": 4,
    "word_files": [],
    "load_previous": False,
    "carry_forward_ratio": 0.5,
    "providers": ["words_api", "webster"],
    "questions_path": "previous_questions.json",
    "answers_path": "previous_answers.json",
    "words_api_url": "https://wordsapiv1.p.rapidapi.com",
    "webster_url": "https://www.dictionaryapi.com",
    "http_timeout": 30.0,
    "log_level": "WARNING",
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}
_NULL = {"", "none", "null"}


@dataclass
class Settings:
    quiz_kind: str = DEFAULTS["quiz_kind"]
    distractors: str = DEFAULTS["distractors"]
    quiz_mode: str = DEFAULTS["quiz_mode"]
    quiz_length: int = DEFAULTS["quiz_length"]
    choice_count: int = DEFAULTS["choice_count"]
    word_files: list[str] = field(default_factory=lambda: list(DEFAULTS["word_files"]))
    load_previous: bool = DEFAULTS["load_previous"]
    carry_forward_ratio: float = DEFAULTS["carry_forward_ratio"]
    providers: list[str] = field(default_factory=lambda: list(DEFAULTS["providers"]))
    questions_path: str = DEFAULTS["questions_path"]
    answers_path: str = DEFAULTS["answers_path"]
    words_api_url: str = DEFAULTS["words_api_url"]
    webster_url: str = DEFAULTS["webster_url"]
    http_timeout: float | None = DEFAULTS["http_timeout"]
    log_level: str = DEFAULTS["log_level"]

    @property
    def data_dir(self) -> Path:
        return PROJECT_ROOT / "data"

    @property
    def questions_full_path(self) -> Path:
        return PROJECT_ROOT / self.questions_path

    @property
    def answers_full_path(self) -> Path:
        return PROJECT_ROOT / self.answers_path

    def resolved_word_files(self) -> list[Path]:
        """Configured word lists (relative to the project root), else ``data/*.txt``."""
        if not self.word_files:
            return sorted(self.data_dir.glob("*.txt"))
        return [PROJECT_ROOT / f for f in self.word_files]

    def to_dict(self) -> dict:
        return asdict(self)

    def set_value(self, key: str, text: str) -> None:
        """Set one field from its command-line text form.

        Lists are comma separated, ``http_timeout`` accepts ``none``.
        """
        if key not in DEFAULTS:
            raise ValueError(f"Unknown setting: {key}")
        default = DEFAULTS[key]
        text = text.strip()
        if isinstance(default, bool):
            if text.lower() not in _TRUE | _FALSE:
                raise ValueError(f"{key} expects a boolean, got {text!r}")
            value = text.lower() in _TRUE
        elif isinstance(default, list):
            value = [part.strip() for part in text.split(",") if part.strip()]
        elif isinstance(default, int):
            value = int(text)
        elif isinstance(default, float):
            value = None if key == "http_timeout" and text.lower() in _NULL else float(text)
        else:
            value = text
        setattr(self, key, value)


def load_settings() -> Settings:
    if not CONFIG_PATH.exists():
        return Settings()
    raw = json.loads(CONFIG_PATH.read_text())
    known = {f.name for f in fields(Settings)}
    return Settings(**{k: v for k, v in raw.items() if k in known})


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
