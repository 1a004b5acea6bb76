from __future__ import annotations

import pytest

from autotags.config import TaggerSettings
from autotags.tagger import AutoTagger
from autotags.vocabulary import Vocabulary

SMALL_BLACK_LIST = ("the", "is", "a", "an", "of", "and", "in", "it", "we", "i", "are", "to")


@pytest.fixture()
def vocabulary() -> Vocabulary:
    return Vocabulary(white_list=["artificial intelligence", "zebra"], black_list=SMALL_BLACK_LIST)


@pytest.fixture()
def make_tagger(vocabulary: Vocabulary):
    def _make(**overrides) -> AutoTagger:
        return AutoTagger(TaggerSettings(**overrides), vocabulary=vocabulary)

    return _make
