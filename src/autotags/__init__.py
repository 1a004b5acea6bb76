"""AutoTags: unsupervised tag suggestions for a block of text."""

from __future__ import annotations

from .config import ConfigurationError, TaggerSettings
from .tagger import AutoTagger
from .terms import FrequencyList, TagSet, Term, TermType
from .vocabulary import BOUNDARY, Vocabulary, VocabularyLoadError, load_vocabulary

__all__ = [
    "BOUNDARY",
    "AutoTagger",
    "ConfigurationError",
    "FrequencyList",
    "TagSet",
    "TaggerSettings",
    "Term",
    "TermType",
    "Vocabulary",
    "VocabularyLoadError",
    "create_app",
    "load_vocabulary",
]


def __getattr__(name: str):  # pragma: no cover - small helper
    if name == "create_app":
        from .app import create_app

        return create_app
    raise AttributeError(f"module 'autotags' has no attribute {name}")
