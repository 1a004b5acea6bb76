"""Second pass: filter candidates, apply boosts and pool the survivors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from .config import TaggerSettings
from .terms import FrequencyList, TagSet, Term, TermType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompoundResolution:
    keep_compound: bool
    boost_bigram_instead: bool = False

    @property
    def suppress_bigram(self) -> bool:
        return self.keep_compound


def resolve_compound(compound: Term, bigram: Term | None) -> CompoundResolution:
    """Decide between a capitalized compound and the bigram with the same id.

    When the lower-case bigram occurs more often, the capitalized form is
    treated as a capitalized instance of it (a title, say) and only the
    bigram survives. Otherwise the compound wins and the bigram is dropped.
    """

    if bigram is None:
        return CompoundResolution(keep_compound=True)
    if bigram.frequency > compound.frequency:
        return CompoundResolution(keep_compound=False, boost_bigram_instead=True)
    return CompoundResolution(keep_compound=True)


class Scorer:
    """Convert per-generator frequency lists into one pooled, score-sorted tag set."""

    def __init__(
        self,
        settings: TaggerSettings,
        *,
        is_white_listed: Callable[[str], bool],
    ) -> None:
        self._settings = settings
        self._is_white_listed = is_white_listed

    def passes_frequency_filter(self, term: Term) -> bool:
        return (
            term.frequency > self._settings.term_frequency_cutoff
            or self._is_white_listed(term.value)
            or term.ignore_frequency_cutoff
        )

    def apply_boosts(self, term: Term) -> None:
        settings = self._settings
        if self._is_white_listed(term.value):
            term.add_boost(settings.white_list_boost)
        if not term.is_compound:
            # Capitalization checks must see the original casing.
            if term.value[:1].isupper():
                term.add_boost(settings.capitalization_boost)
            if term.value.isupper():
                term.add_boost(settings.capitalization_boost)
        if settings.lowercase:
            term.set_value(term.value.lower())

    def score(
        self,
        singles: FrequencyList,
        compounds: FrequencyList,
        bigrams: FrequencyList,
    ) -> TagSet:
        """Score the lists in order; compounds must be seen before their bigrams."""

        pooled = TagSet()
        suppressed: set[str] = set()
        lists: Sequence[FrequencyList] = (singles, compounds, bigrams)
        for frequency_list in lists:
            for term in frequency_list:
                if term.term_type is TermType.SIMPLE_BIGRAM and term.canonical_id in suppressed:
                    continue
                if not self.passes_frequency_filter(term):
                    continue
                if term.term_type is TermType.CAPITALIZED_COMPOUND:
                    bigram = bigrams.get(term.canonical_id)
                    resolution = resolve_compound(term, bigram)
                    if resolution.boost_bigram_instead and bigram is not None:
                        bigram.add_boost(self._settings.capitalization_boost)
                    if not resolution.keep_compound:
                        continue
                    if bigram is not None and resolution.suppress_bigram:
                        suppressed.add(bigram.canonical_id)
                self.apply_boosts(term)
                if term.score > self._settings.score_cutoff:
                    pooled.add(term)
        pooled.sort_by_score()
        logger.debug(
            "scoring.pooled singles=%s compounds=%s bigrams=%s suppressed=%s pooled=%s",
            len(singles),
            len(compounds),
            len(bigrams),
            len(suppressed),
            len(pooled),
        )
        return pooled


__all__ = ["CompoundResolution", "Scorer", "resolve_compound"]
