"""Third pass: down-weight terms already covered by higher-ranked compounds."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from .config import TaggerSettings
from .terms import TagSet, Term, TermType

logger = logging.getLogger(__name__)


def to_bigrams(phrase: str) -> list[str]:
    words = phrase.split(" ")
    return [f"{first} {second}" for first, second in zip(words, words[1:])]


class Reconciler:
    """Walk a score-sorted tag set once, highest score first.

    A term can only be down-weighted by something that already outranks it,
    so one pass is enough and two terms never penalize each other.
    """

    def __init__(self, settings: TaggerSettings, *, stemmer: Callable[[str], str] | None = None) -> None:
        self._settings = settings
        self._stemmer = stemmer

    def _normalize(self, token: str) -> str:
        token = token.lower()
        if self._stemmer is not None:
            return self._stemmer(token)
        return token

    def _components(self, phrase: str) -> Iterable[str]:
        return (self._normalize(word) for word in phrase.lower().split(" "))

    def reconcile(self, pooled: TagSet) -> TagSet:
        settings = self._settings
        compound_bigrams: set[str] = set()
        components: set[str] = set()
        downweighted = 0
        result = TagSet()

        for term in pooled:
            if term.term_type is TermType.CAPITALIZED_COMPOUND:
                compound_bigrams.update(to_bigrams(term.value.lower()))
                components.update(self._components(term.value))
            elif term.term_type is TermType.SIMPLE_BIGRAM:
                if term.value.lower() in compound_bigrams:
                    term.add_boost(settings.bigram_already_detected_boost)
                    downweighted += 1
                components.update(self._components(term.value))
            elif self._normalize(term.value) in components:
                term.add_boost(settings.term_from_compound_downweight)
                downweighted += 1

            if not settings.uses_default_separator:
                self._apply_separator(term)
            result.add(term)

        result.sort_by_score()
        logger.debug("reconcile.completed terms=%s downweighted=%s", len(result), downweighted)
        return result

    def _apply_separator(self, term: Term) -> None:
        term.set_value(term.value.replace(" ", self._settings.separator))


__all__ = ["Reconciler", "to_bigrams"]
