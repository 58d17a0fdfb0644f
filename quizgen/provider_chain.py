"""Ordered fallback across lexical providers."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from quizgen.errors import ApiError
from quizgen.models import ATTRIBUTES, LexicalResult

if TYPE_CHECKING:
    from quizgen.providers.base import LexicalProvider

_log = logging.getLogger("quizgen.chain")


class ProviderChain:
    """Try providers in priority order; the first one that answers wins.

    Every lookup starts again from the first provider, so a failure for one
    word or attribute never disqualifies a provider for the next lookup.
    """

    def __init__(self, providers: list[LexicalProvider]):
        if not providers:
            raise ValueError("ProviderChain needs at least one provider")
        self.providers = list(providers)

    def lookup(self, word: str, attribute: str) -> LexicalResult:
        if attribute not in ATTRIBUTES:
            raise ValueError(f"Unknown lexical attribute: {attribute}")
        last_error: Exception | None = None
        for provider in self.providers:
            try:
                result = provider.lookup(word, attribute)
            except Exception as e:
                _log.info("%s failed for %s/%s: %s", provider.name(), word, attribute, e)
                last_error = e
                continue
            _log.debug("%s answered %s/%s", provider.name(), word, attribute)
            return result

        names = ", ".join(p.name() for p in self.providers)
        _log.warning("All providers failed for %s/%s (%s)", word, attribute, names)
        raise ApiError(
            f"All providers failed to look up {attribute} for {word!r}: {last_error}",
            last_error=last_error,
        ) from last_error

    def names(self) -> list[str]:
        return [p.name() for p in self.providers]

    def close(self) -> None:
        for provider in self.providers:
            provider.close()
