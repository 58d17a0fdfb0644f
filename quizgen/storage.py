"""JSON files for persisted quiz state."""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from quizgen.errors import FileError, MissingStateError


_LITERALS = ("null", "true", "false")
_NUMBER_CHARS = set("0123456789+-.eE")
_NUMBER_PREFIX_RE = re.compile(r"-|-?(0|[1-9][0-9]*)(\.[0-9]*)?([eE][+-]?[0-9]*)?")


def _ends_early(text: str, e: json.JSONDecodeError) -> bool:
    """True when decoding failed only because *text* stops mid-document."""
    if e.msg.startswith("Unterminated string"):
        return True
    tail = text[e.pos:].strip()
    if not tail:
        return True
    # a cut inside a literal or number is reported at or after the token's start
    if any(lit.startswith(tail) and tail != lit for lit in _LITERALS):
        return True
    start = e.pos
    while start > 0 and text[start - 1] in _NUMBER_CHARS:
        start -= 1
    return _NUMBER_PREFIX_RE.fullmatch(text[start:].rstrip()) is not None


def write_json(path: Path, data: Any) -> None:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as e:
        raise FileError(path, f"cannot write: {e}") from e


def read_json(path: Path) -> Any:
    """Read a JSON file.

    Raises ``MissingStateError`` when the file does not exist or its data
    ends early (empty or truncated), ``FileError`` for any other failure.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise MissingStateError(path, "not found") from e
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(path, f"cannot read: {e}") from e

    if not text.strip():
        raise MissingStateError(path, "unexpected end of data")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        if _ends_early(text, e):
            raise MissingStateError(path, f"unexpected end of data: {e}") from e
        raise FileError(path, f"invalid JSON: {e}") from e
