"""Candidate generators: single terms, capitalized compounds and bigrams."""

from __future__ import annotations

import re
from typing import Callable, Iterable, Sequence

from .preprocess import PreparedText
from .terms import FrequencyList, Term, TermType

SINGLE_TERM_BASE_BOOST = 0.75

# Two to four capitalized words, optionally joined by "of" and allowing
# PayPal / McKinley style words. Heuristic: sentence-initial words slip in.
CAPITALIZED_COMPOUND_RE = re.compile(
    r"(?:[A-Z][a-z]*)?[A-Z][a-z]+ (?:of )?(?:Mc|Mac)?[A-Z][a-z]+(?:[ \-][A-Z][a-z]*)?(?:[ ][A-Z][a-z]*)?"
)

BlackListCheck = Callable[[str], bool]
Stemmer = Callable[[str], str]


def generate_single_terms(
    tokens: Sequence[str],
    *,
    token_length_cutoff: int,
    stemmer: Stemmer | None = None,
) -> FrequencyList:
    frequency_list = FrequencyList()
    for token in tokens:
        if len(token) > token_length_cutoff:
            frequency_list.add(
                Term(
                    token,
                    TermType.SINGLE,
                    boost=SINGLE_TERM_BASE_BOOST,
                    ignore_frequency_cutoff=False,
                    stemmer=stemmer,
                )
            )
    return frequency_list


def find_capitalized_compounds(text: str) -> list[str]:
    return [match.group(0) for match in CAPITALIZED_COMPOUND_RE.finditer(text)]


def generate_capitalized_compounds(
    text: str,
    *,
    boost: float,
    is_black_listed: BlackListCheck,
) -> FrequencyList:
    """Collect proper-noun style compounds such as organisations and names.

    A match that starts with a black-listed word is dropped entirely, which
    keeps sentence-initial stopwords ("The", "In") out of the compounds.
    """

    frequency_list = FrequencyList()
    for phrase in find_capitalized_compounds(text):
        first_word = phrase.split(" ", 1)[0]
        if is_black_listed(first_word):
            continue
        frequency_list.add(
            Term(
                phrase,
                TermType.CAPITALIZED_COMPOUND,
                boost=boost,
                ignore_frequency_cutoff=True,
            )
        )
    return frequency_list


def iter_bigrams(tokens: Sequence[str]) -> Iterable[tuple[str, str]]:
    return zip(tokens, tokens[1:])


def generate_bigrams(
    tokens: Sequence[str],
    *,
    boost: float,
    token_length_cutoff: int,
    is_black_listed: BlackListCheck,
) -> FrequencyList:
    frequency_list = FrequencyList()
    for first, second in iter_bigrams(tokens):
        if len(first) <= token_length_cutoff or len(second) <= token_length_cutoff:
            continue
        if is_black_listed(first) or is_black_listed(second):
            continue
        frequency_list.add(
            Term(
                f"{first} {second}",
                TermType.SIMPLE_BIGRAM,
                boost=boost,
                ignore_frequency_cutoff=False,
            )
        )
    return frequency_list


def generate_candidates(
    prepared: PreparedText,
    *,
    token_length_cutoff: int,
    compound_boost: float,
    bigram_boost: float,
    is_black_listed: BlackListCheck,
    stemmer: Stemmer | None = None,
) -> tuple[FrequencyList, FrequencyList, FrequencyList]:
    """Run all three generators; the order of the returned lists matters for scoring."""

    singles = generate_single_terms(
        prepared.tokens,
        token_length_cutoff=token_length_cutoff,
        stemmer=stemmer,
    )
    compounds = generate_capitalized_compounds(
        prepared.boundary_text,
        boost=compound_boost,
        is_black_listed=is_black_listed,
    )
    bigrams = generate_bigrams(
        prepared.boundary_tokens,
        boost=bigram_boost,
        token_length_cutoff=token_length_cutoff,
        is_black_listed=is_black_listed,
    )
    return singles, compounds, bigrams


__all__ = [
    "CAPITALIZED_COMPOUND_RE",
    "SINGLE_TERM_BASE_BOOST",
    "find_capitalized_compounds",
    "generate_bigrams",
    "generate_candidates",
    "generate_capitalized_compounds",
    "generate_single_terms",
    "iter_bigrams",
]
