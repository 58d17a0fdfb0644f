"""Merriam-Webster Collegiate Dictionary + Thesaurus provider.

Definitions and examples come from the collegiate endpoint, synonyms and
antonyms from the thesaurus endpoint; each needs its own key. Only the first
entry of a response is used.

Collegiate entries nest their text inside ``def[].sseq``: a list of blocks,
each a list of ``[tag, payload]`` pairs. Only ``"sense"`` payloads are read;
their ``dt`` list holds ``["text", str]`` and ``["vis", [{"t": str}]]``
elements (definition text and verbal illustrations respectively).
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator

import httpx

from quizgen.errors import ProviderError
from quizgen.models import ANTONYMS, DEFINITIONS, EXAMPLES, SYNONYMS, LexicalResult
from quizgen.providers.base import LexicalProvider

log = logging.getLogger("quizgen.providers")

MARKUP_RE = re.compile(r"\{[^{}]*\}")
HOMOGRAPH_RE = re.compile(r":\d+$")


def clean_markup(text: str) -> str | None:
    """Strip ``{bc}``/``{it}``-style formatting tokens; None if nothing is left."""
    cleaned = MARKUP_RE.sub("", text).strip()
    return cleaned or None


def _entry_word(entry: dict) -> str:
    # "cat:1" -> "cat" for homograph entries
    return HOMOGRAPH_RE.sub("", entry["meta"]["id"])


def _iter_dt(entry: dict) -> Iterator[list]:
    for section in entry.get("def", []):
        for block in section.get("sseq", []):
            for item in block:
                if not isinstance(item, list) or len(item) != 2:
                    continue
                tag, payload = item
                if tag != "sense" or not isinstance(payload, dict):
                    continue
                for element in payload.get("dt", []):
                    if isinstance(element, list) and len(element) == 2:
                        yield element


class WebsterProvider(LexicalProvider):
    def __init__(
        self,
        collegiate_key: str,
        thesaurus_key: str,
        base_url: str = "https://www.dictionaryapi.com",
        timeout: float | None = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.collegiate_key = collegiate_key
        self.thesaurus_key = thesaurus_key
        self.client = httpx.Client(timeout=timeout, transport=transport)

    def _first_entry(self, word: str, reference: str, key: str) -> dict:
        url = f"{self.base_url}/api/v3/references/{reference}/json/{word}"
        try:
            resp = self.client.get(url, params={"key": key})
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(self.name(), f"HTTP error {e.response.status_code} {e.response.text}") from e
        except httpx.HTTPError as e:
            raise ProviderError(self.name(), f"request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(self.name(), f"invalid JSON: {e}") from e

        if not isinstance(data, list) or not data:
            raise ProviderError(self.name(), "empty response")
        log.debug("%s %s/%s: %d entries", self.name(), reference, word, len(data))
        entry = data[0]
        # Unknown words come back as a list of spelling suggestions
        if not isinstance(entry, dict) or "id" not in entry.get("meta", {}):
            raise ProviderError(self.name(), f"no entry for {word!r}")
        return entry

    def get_definitions(self, word: str) -> LexicalResult:
        entry = self._first_entry(word, "collegiate", self.collegiate_key)
        definitions = [d for d in entry.get("shortdef", []) if d]
        if not definitions:
            for tag, value in _iter_dt(entry):
                cleaned = clean_markup(value) if tag == "text" else None
                if cleaned:
                    definitions.append(cleaned)
        return LexicalResult(DEFINITIONS, _entry_word(entry), definitions, self.name())

    def get_examples(self, word: str) -> LexicalResult:
        entry = self._first_entry(word, "collegiate", self.collegiate_key)
        examples = []
        for tag, value in _iter_dt(entry):
            if tag != "vis":
                continue
            for vis in value:
                cleaned = clean_markup(vis.get("t", ""))
                if cleaned:
                    examples.append(cleaned)
        return LexicalResult(EXAMPLES, _entry_word(entry), examples, self.name())

    def get_synonyms(self, word: str) -> LexicalResult:
        entry = self._first_entry(word, "thesaurus", self.thesaurus_key)
        synonyms = [s for group in entry["meta"].get("syns", []) for s in group]
        return LexicalResult(SYNONYMS, _entry_word(entry), synonyms, self.name())

    def get_antonyms(self, word: str) -> LexicalResult:
        entry = self._first_entry(word, "thesaurus", self.thesaurus_key)
        antonyms = [a for group in entry["meta"].get("ants", []) for a in group]
        return LexicalResult(ANTONYMS, _entry_word(entry), antonyms, self.name())

    def name(self) -> str:
        return "webster"

    def close(self) -> None:
        self.client.close()
