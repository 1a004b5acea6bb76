"""Tag suggestion for a block of text using unsupervised lexical heuristics."""

from __future__ import annotations

import logging
import time

from .config import TaggerSettings
from .generators import generate_candidates
from .observability import MetricsRecorder
from .preprocess import PreparedText, prepare_text
from .reconcile import Reconciler
from .scoring import Scorer
from .stemming import StemCache, Stemmer
from .terms import TagSet
from .vocabulary import Vocabulary, VocabularyCache

logger = logging.getLogger(__name__)


class AutoTagger:
    """Suggest ranked tags for a text.

    Each instance owns its stem and vocabulary caches; the frequency lists
    and tag sets built by :meth:`analyze` live only for that call.
    """

    def __init__(
        self,
        settings: TaggerSettings | None = None,
        *,
        vocabulary: Vocabulary | None = None,
        stemmer: Stemmer | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        self.settings = settings or TaggerSettings()
        self.vocabulary = vocabulary or self.settings.build_vocabulary()
        self._lookups = VocabularyCache(self.vocabulary)
        self._stems = StemCache(stemmer) if self.settings.apply_stemming else None
        self._metrics = metrics
        self._last_duration_ms = 0.0
        self._last_word_count = 0

    @property
    def last_analysis_duration_ms(self) -> float:
        return self._last_duration_ms

    @property
    def last_word_count(self) -> int:
        return self._last_word_count

    def is_white_listed(self, term: str) -> bool:
        return self._lookups.is_white_listed(term)

    def is_black_listed(self, term: str) -> bool:
        return self._lookups.is_black_listed(term)

    def prepare(self, text: str) -> PreparedText:
        return prepare_text(
            text,
            self.vocabulary,
            remove_short_numbers=self.settings.remove_short_numbers,
        )

    def analyze(self, text: str, max_tags: int | None = None) -> TagSet:
        """Return at most ``max_tags`` tags for ``text``, highest score first."""

        if not isinstance(text, str):
            raise TypeError(f"text must be a string, not {type(text).__name__}")
        if max_tags is None:
            max_tags = self.settings.default_max_tags
        if max_tags < 0:
            raise ValueError("max_tags must be zero or greater")

        start = time.perf_counter()
        settings = self.settings
        stemmer = self._stems.stem if self._stems is not None else None

        prepared = self.prepare(text)
        singles, compounds, bigrams = generate_candidates(
            prepared,
            token_length_cutoff=settings.token_length_cutoff,
            compound_boost=settings.capitalized_compound_boost,
            bigram_boost=settings.bigram_boost,
            is_black_listed=self.is_black_listed,
            stemmer=stemmer,
        )

        pooled = Scorer(settings, is_white_listed=self.is_white_listed).score(singles, compounds, bigrams)
        tag_set = Reconciler(settings, stemmer=stemmer).reconcile(pooled)
        tag_set.truncate(max_tags)

        elapsed = time.perf_counter() - start
        self._last_duration_ms = elapsed * 1000.0
        self._last_word_count = prepared.word_count
        logger.debug(
            "tagger.analyze words=%s singles=%s compounds=%s bigrams=%s tags=%s duration_ms=%.2f",
            prepared.word_count,
            len(singles),
            len(compounds),
            len(bigrams),
            len(tag_set),
            self._last_duration_ms,
        )
        if self._metrics is not None:
            self._metrics.record_timing("tagger.analyze", elapsed)
            self._metrics.increment("tagger.words", value=prepared.word_count)
            self._metrics.increment("tagger.tags", value=len(tag_set))
        return tag_set


__all__ = ["AutoTagger"]
