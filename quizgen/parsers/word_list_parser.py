"""Parse plain-text word lists into normalized words.

One word (or short phrase) per line. Surrounding whitespace is trimmed;
blank lines and ``#`` comment lines are skipped:

    # GRE list, week 3
    obdurate
      laconic
"""
from __future__ import annotations

from pathlib import Path

from quizgen.errors import FileError


def parse_word_list(path: Path) -> list[str]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(path, f"cannot read word list: {e}") from e

    words: list[str] = []
    for line in text.splitlines():
        word = line.strip()
        if not word or word.startswith("#"):
            continue
        words.append(word)
    return words
