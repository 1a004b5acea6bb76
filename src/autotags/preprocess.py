"""Text preprocessing: separators, sentence boundaries and stopword removal."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

from .vocabulary import BOUNDARY, Vocabulary

# Everything except word characters, apostrophes and boundary punctuation separates tokens.
_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9_'.!?:;\n\r\f\t]+")
_BOUNDARY_RE = re.compile(r"(?:[ ]*[.!?:;\n\r\f\t][ ]*)+")


@dataclass(slots=True)
class PreparedText:
    """Intermediate forms of one input text.

    ``boundary_text`` keeps original casing and stopwords and is what the
    capitalization matcher scans; ``boundary_tokens`` is the same text split
    into tokens for bigram detection. ``tokens`` has stopwords and boundary
    markers removed and feeds single-term detection.
    """

    boundary_text: str
    stripped_text: str
    boundary_tokens: List[str] = field(default_factory=list)
    tokens: List[str] = field(default_factory=list)

    @property
    def word_count(self) -> int:
        return sum(1 for token in self.boundary_tokens if token != BOUNDARY)


def mark_boundaries(text: str) -> str:
    """Collapse separators to single spaces and replace sentence breaks with the marker."""

    collapsed = _SEPARATOR_RE.sub(" ", f" {text} ")
    return _BOUNDARY_RE.sub(f" {BOUNDARY} ", collapsed)


def strip_stopwords(text: str, vocabulary: Vocabulary, *, remove_short_numbers: bool = True) -> str:
    pattern = vocabulary.stopword_pattern(remove_short_numbers=remove_short_numbers)
    return pattern.sub(" ", text)


def _split_tokens(text: str) -> list[str]:
    return [token for token in text.split(" ") if token]


def prepare_text(text: str, vocabulary: Vocabulary, *, remove_short_numbers: bool = True) -> PreparedText:
    boundary_text = mark_boundaries(text)
    stripped_text = strip_stopwords(
        boundary_text,
        vocabulary,
        remove_short_numbers=remove_short_numbers,
    )
    return PreparedText(
        boundary_text=boundary_text,
        stripped_text=stripped_text,
        boundary_tokens=_split_tokens(boundary_text),
        tokens=_split_tokens(stripped_text),
    )


__all__ = ["PreparedText", "mark_boundaries", "prepare_text", "strip_stopwords"]
