from __future__ import annotations

from autotags.stemming import StemCache
from autotags.terms import FrequencyList, TagSet, Term, TermType


def test_term_score_is_frequency_times_boost() -> None:
    term = Term("cat", boost=0.75, frequency=2)
    term.add_boost(2.0)
    assert term.score == 3.0
    term.increment_frequency()
    assert term.score == 4.5


def test_set_value_keeps_canonical_id_in_step() -> None:
    term = Term("Running", stemmer=StemCache().stem)
    assert term.canonical_id == "run"

    term.set_value("Walks")
    assert term.value == "Walks"
    assert term.canonical_id == "walk"


def test_compound_ids_are_not_stemmed() -> None:
    term = Term("New Yorkers", TermType.CAPITALIZED_COMPOUND, stemmer=StemCache().stem)
    assert term.canonical_id == "new yorkers"
    assert term.is_compound


def test_frequency_list_merges_by_canonical_id() -> None:
    frequency_list = FrequencyList()
    first = frequency_list.add(Term("Paris"))
    merged = frequency_list.add(Term("paris"))

    assert merged is first
    assert len(frequency_list) == 1
    assert first.frequency == 2
    assert first.value == "paris"
    assert "paris" in frequency_list


def test_tag_set_sort_is_stable_and_truncates() -> None:
    alpha = Term("alpha", boost=1.0)
    beta = Term("beta", boost=2.0)
    gamma = Term("gamma", boost=1.0)
    tag_set = TagSet([alpha, beta, gamma])

    tag_set.sort_by_score()
    assert tag_set.values() == ["beta", "alpha", "gamma"]

    tag_set.truncate(2)
    assert len(tag_set) == 2
    assert str(tag_set) == "beta, alpha"
    assert tag_set.to_string(" | ") == "beta | alpha"


def test_tag_set_to_dicts() -> None:
    tag_set = TagSet([Term("new york", TermType.CAPITALIZED_COMPOUND, boost=3.5, frequency=2)])
    assert tag_set.to_dicts() == [
        {"value": "new york", "frequency": 2, "score": 7.0, "termType": "CAPITALIZED_COMPOUND"}
    ]
