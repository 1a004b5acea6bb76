"""Term, frequency list and tag set containers used by the tagging pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Iterator


class TermType(str, Enum):
    SINGLE = "SINGLE"
    CAPITALIZED_COMPOUND = "CAPITALIZED_COMPOUND"
    SIMPLE_BIGRAM = "SIMPLE_BIGRAM"


@dataclass(slots=True, eq=False)
class Term:
    """One candidate tag and its accumulated frequency and boost.

    ``canonical_id`` is derived from ``value``: lower-cased and, for single
    terms, reduced to its root by ``stemmer`` when one is attached. Always
    change the value through :meth:`set_value` so the id stays in step.
    """

    value: str
    term_type: TermType = TermType.SINGLE
    boost: float = 1.0
    frequency: int = 1
    ignore_frequency_cutoff: bool = False
    stemmer: Callable[[str], str] | None = field(default=None, repr=False)
    canonical_id: str = field(init=False, default="")

    def __post_init__(self) -> None:
        self.set_value(self.value)

    @property
    def is_compound(self) -> bool:
        return self.term_type is not TermType.SINGLE

    @property
    def score(self) -> float:
        return self.frequency * self.boost

    def set_value(self, value: str) -> None:
        self.value = value
        if self.stemmer is not None and not self.is_compound:
            identity = self.stemmer(value)
        else:
            identity = value
        self.canonical_id = identity.lower()

    def add_boost(self, factor: float) -> None:
        self.boost *= factor

    def increment_frequency(self) -> None:
        self.frequency += 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "frequency": self.frequency,
            "score": self.score,
            "termType": self.term_type.value,
        }

    def __str__(self) -> str:
        return self.value


class FrequencyList:
    """Map canonical ids to terms, merging repeated occurrences."""

    def __init__(self, terms: Iterable[Term] | None = None) -> None:
        self._terms: dict[str, Term] = {}
        for term in terms or ():
            self.add(term)

    def add(self, term: Term) -> Term:
        existing = self._terms.get(term.canonical_id)
        if existing is None:
            self._terms[term.canonical_id] = term
            return term
        # The most recent occurrence decides the surface form.
        existing.increment_frequency()
        existing.set_value(term.value)
        return existing

    def get(self, canonical_id: str) -> Term | None:
        return self._terms.get(canonical_id)

    def __contains__(self, canonical_id: object) -> bool:
        return canonical_id in self._terms

    def __iter__(self) -> Iterator[Term]:
        return iter(list(self._terms.values()))

    def __len__(self) -> int:
        return len(self._terms)


class TagSet:
    """Ordered, rankable collection of terms returned to callers."""

    DEFAULT_SEPARATOR = ", "

    def __init__(self, tags: Iterable[Term] | None = None, *, separator: str = DEFAULT_SEPARATOR) -> None:
        self.tags: list[Term] = list(tags or [])
        self.separator = separator

    def add(self, term: Term) -> None:
        self.tags.append(term)

    def sort_by_score(self) -> None:
        # list.sort is stable, so equal scores keep their relative order.
        self.tags.sort(key=lambda term: term.score, reverse=True)

    def truncate(self, size: int) -> None:
        del self.tags[max(0, size):]

    def values(self) -> list[str]:
        return [term.value for term in self.tags]

    def to_dicts(self) -> list[dict[str, Any]]:
        return [term.to_dict() for term in self.tags]

    def to_string(self, separator: str | None = None) -> str:
        if separator is not None:
            self.separator = separator
        return self.separator.join(self.values())

    def __str__(self) -> str:
        return self.to_string()

    def __iter__(self) -> Iterator[Term]:
        return iter(self.tags)

    def __len__(self) -> int:
        return len(self.tags)

    def __getitem__(self, index: int) -> Term:
        return self.tags[index]


__all__ = ["FrequencyList", "TagSet", "Term", "TermType"]
