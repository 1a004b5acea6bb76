from __future__ import annotations

import io
import logging

import pytest

from autotags.observability import MetricsRecorder
from autotags.tagger import AutoTagger
from autotags.terms import TermType

NEW_YORK = "New York is great. We visited New York. New York rocks."


def test_repeated_inflections_collapse_to_one_tag(make_tagger) -> None:
    tags = make_tagger().analyze("the cat sat. the cat ran.")

    assert tags.values() == ["cat"]
    assert tags[0].frequency == 2
    assert tags[0].score == pytest.approx(1.5)


def test_compound_outranks_its_parts(make_tagger) -> None:
    tags = make_tagger().analyze(NEW_YORK)

    assert tags.values() == ["new york", "new", "york"]
    top = tags[0]
    assert top.term_type is TermType.CAPITALIZED_COMPOUND
    assert top.frequency == 3
    assert top.score == pytest.approx(10.5)
    assert all(term.score == pytest.approx(0.984375) for term in tags[1:])


def test_compound_downweights_single_seen_elsewhere(make_tagger) -> None:
    tags = make_tagger().analyze("Apple Computer is great. Computer science is hard.")

    by_value = {term.value: term for term in tags}
    assert by_value["apple computer"].score == pytest.approx(3.5)
    assert by_value["computer"].boost == pytest.approx(0.75 * 1.75 * 0.25)
    assert tags[0].value == "apple computer"


def test_frequent_lowercase_bigram_beats_capitalized_form(make_tagger) -> None:
    tags = make_tagger().analyze(
        "machine learning is fun. Machine Learning rocks. machine learning again."
    )

    assert tags[0].value == "machine learning"
    assert tags[0].term_type is TermType.SIMPLE_BIGRAM
    assert tags[0].frequency == 3
    assert tags[0].score == pytest.approx(13.125)
    assert all(term.term_type is not TermType.CAPITALIZED_COMPOUND for term in tags)


def test_bigrams_inside_compound_are_downweighted(make_tagger) -> None:
    tags = make_tagger().analyze("Golden Gate Bridge is red. Golden Gate Bridge is tall.")

    assert tags.values() == [
        "golden gate bridge",
        "golden gate",
        "gate bridge",
        "golden",
        "gate",
        "bridge",
    ]
    assert [term.score for term in tags] == pytest.approx([7.0, 1.25, 1.25, 0.65625, 0.65625, 0.65625])


def test_all_caps_word_is_boosted_twice(make_tagger) -> None:
    tags = make_tagger().analyze("NASA NASA launches.")

    assert tags.values() == ["nasa"]
    assert tags[0].boost == pytest.approx(0.75 * 1.75 * 1.75)


def test_bigrams_do_not_span_sentences(make_tagger) -> None:
    tags = make_tagger(term_frequency_cutoff=0).analyze("cats. Dogs cats. Dogs")

    assert "cats dogs" not in tags.values()
    assert "dogs cats" in tags.values()


def test_white_listed_term_survives_single_occurrence(make_tagger) -> None:
    tags = make_tagger().analyze("A zebra appeared near the river.")

    assert tags.values() == ["zebra"]
    assert tags[0].score == pytest.approx(1.125)


def test_default_vocabulary_white_lists_bigram() -> None:
    tagger = AutoTagger()
    tags = tagger.analyze(
        "Artificial intelligence is changing how we work. artificial intelligence research grows."
    )

    assert tags[0].value == "artificial intelligence"
    assert tags[0].score == pytest.approx(7.5)
    assert tagger.is_white_listed("Artificial Intelligence")


def test_max_tags_and_ordering(make_tagger) -> None:
    text = (
        "Python programs parse text. Python parsers tokenize text quickly. "
        "Parsing text with Python is common. Tokenizers split text into tokens."
    )
    tagger = make_tagger()

    tags = tagger.analyze(text, 3)
    assert len(tags) <= 3
    scores = [term.score for term in tagger.analyze(text)]
    assert scores == sorted(scores, reverse=True)
    assert tagger.analyze(text, 0).values() == []


def test_fresh_taggers_agree(make_tagger) -> None:
    first = make_tagger().analyze(NEW_YORK).to_dicts()
    second = make_tagger().analyze(NEW_YORK).to_dicts()
    assert first == second


def test_blank_input_yields_no_tags(make_tagger) -> None:
    tagger = make_tagger()
    assert len(tagger.analyze("")) == 0
    assert len(tagger.analyze("   \n\t  ")) == 0
    assert tagger.last_word_count == 0


def test_invalid_arguments(make_tagger) -> None:
    tagger = make_tagger()
    with pytest.raises(TypeError):
        tagger.analyze(None)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        tagger.analyze("text", -1)


def test_separator_and_casing_options(make_tagger) -> None:
    assert make_tagger(separator="-").analyze(NEW_YORK)[0].value == "new-york"
    assert make_tagger(lowercase=False).analyze(NEW_YORK)[0].value == "New York"


def test_stemming_toggle_controls_merging(make_tagger) -> None:
    text = "cats cat cats cat"

    stemmed = [term for term in make_tagger().analyze(text) if term.term_type is TermType.SINGLE]
    assert [(term.value, term.frequency) for term in stemmed] == [("cat", 4)]

    plain = [
        term
        for term in make_tagger(apply_stemming=False).analyze(text)
        if term.term_type is TermType.SINGLE
    ]
    assert sorted(term.value for term in plain) == ["cat", "cats"]
    assert all(term.frequency == 2 for term in plain)
    # Unstemmed singles are still matched against bigram components.
    assert all(term.boost == pytest.approx(0.75 * 0.25) for term in plain)


def test_analysis_records_metrics(vocabulary) -> None:
    logger = logging.getLogger("autotags.tests.metrics")
    buffer = io.StringIO()
    handler = logging.StreamHandler(buffer)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    metrics = MetricsRecorder(namespace="autotags.test", logger=logger)

    try:
        tagger = AutoTagger(vocabulary=vocabulary, metrics=metrics)
        tagger.analyze(NEW_YORK)
    finally:
        logger.removeHandler(handler)

    output = buffer.getvalue()
    assert "autotags.test.tagger.analyze" in output
    assert "autotags.test.tagger.words value=11" in output
    assert "autotags.test.tagger.tags value=3" in output
    assert tagger.last_word_count == 11
    assert tagger.last_analysis_duration_ms >= 0.0


def test_default_vocabulary_strips_contractions() -> None:
    tags = AutoTagger().analyze("It's raining. It's cold. Don't worry about rain. Don't panic.")

    assert tags.values() == ["rain"]
    assert tags[0].score == pytest.approx(1.5)


def test_word_count_is_not_a_prometheus_label(vocabulary) -> None:
    metrics = MetricsRecorder(prometheus_enabled=True)
    tagger = AutoTagger(vocabulary=vocabulary, metrics=metrics)

    for text in ("one", "one two", "one two three", "one two three four"):
        tagger.analyze(text)

    payload = metrics.render_prometheus().decode()
    series = [line for line in payload.splitlines() if line.startswith("autotags_tagger_analyze_count")]
    assert series == ["autotags_tagger_analyze_count 4.0"]
    assert "autotags_tagger_words_total 10.0" in payload
