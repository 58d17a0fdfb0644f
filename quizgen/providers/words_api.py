from __future__ import annotations

import logging
import time

import httpx

from quizgen.errors import ProviderError
from quizgen.models import ANTONYMS, DEFINITIONS, EXAMPLES, SYNONYMS, LexicalResult
from quizgen.providers.base import LexicalProvider

log = logging.getLogger("quizgen.providers")

WORDS_API_HOST = "wordsapiv1.p.rapidapi.com"


class WordsApiProvider(LexicalProvider):
    def __init__(
        self,
        api_key: str,
        base_url: str = f"https://{WORDS_API_HOST}",
        timeout: float | None = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "x-rapidapi-host": WORDS_API_HOST,
                "x-rapidapi-key": api_key,
            },
        )

    def _get(self, word: str, attribute: str) -> dict:
        url = f"{self.base_url}/words/{word}/{attribute}"
        t0 = time.monotonic()
        try:
            resp = self.client.get(url)
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(self.name(), f"HTTP error {e.response.status_code} {e.response.text}") from e
        except httpx.HTTPError as e:
            raise ProviderError(self.name(), f"request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(self.name(), f"invalid JSON: {e}") from e
        log.debug("%s %s/%s (%.2fs)", self.name(), word, attribute, time.monotonic() - t0)
        if not isinstance(data, dict) or "word" not in data:
            raise ProviderError(self.name(), f"unexpected response shape for {word!r}")
        return data

    def get_definitions(self, word: str) -> LexicalResult:
        data = self._get(word, DEFINITIONS)
        # Definitions come back as objects: {"definition": ..., "partOfSpeech": ...}
        values = [d["definition"] for d in data.get(DEFINITIONS, []) if d.get("definition")]
        return LexicalResult(DEFINITIONS, data["word"], values, self.name())

    def get_synonyms(self, word: str) -> LexicalResult:
        data = self._get(word, SYNONYMS)
        return LexicalResult(SYNONYMS, data["word"], list(data.get(SYNONYMS, [])), self.name())

    def get_antonyms(self, word: str) -> LexicalResult:
        data = self._get(word, ANTONYMS)
        return LexicalResult(ANTONYMS, data["word"], list(data.get(ANTONYMS, [])), self.name())

    def get_examples(self, word: str) -> LexicalResult:
        data = self._get(word, EXAMPLES)
        return LexicalResult(EXAMPLES, data["word"], list(data.get(EXAMPLES, [])), self.name())

    def name(self) -> str:
        return "words_api"

    def close(self) -> None:
        self.client.close()
