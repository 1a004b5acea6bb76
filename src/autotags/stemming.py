"""Stemming helpers with a per-tagger root cache."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from nltk.stem import PorterStemmer

logger = logging.getLogger(__name__)

Stemmer = Callable[[str], str]


def porter_stemmer() -> Stemmer:
    """Return NLTK's Porter stemmer as a plain callable."""

    return PorterStemmer().stem


class StemCache:
    """Memoize stem lookups since stemming dominates single-term processing."""

    def __init__(self, stemmer: Stemmer | None = None) -> None:
        self._stemmer = stemmer or porter_stemmer()
        self._roots: dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._roots)

    def stem(self, token: str) -> str:
        token = token.lower()
        with self._lock:
            cached = self._roots.get(token)
        if cached is not None:
            return cached
        try:
            root = self._stemmer(token)
        except Exception as exc:  # noqa: BLE001 - a bad stem must not abort ranking
            logger.debug("stem.failed token=%s error=%s", token, exc)
            return token
        if not isinstance(root, str) or not root:
            return token
        with self._lock:
            self._roots.setdefault(token, root)
        return root

    __call__ = stem


__all__ = ["StemCache", "Stemmer", "porter_stemmer"]
