from __future__ import annotations

from autotags.stemming import StemCache


def test_stem_cache_memoizes_roots() -> None:
    calls: list[str] = []

    def stemmer(token: str) -> str:
        calls.append(token)
        return token.rstrip("s")

    stems = StemCache(stemmer)
    assert stems.stem("Cats") == "cat"
    assert stems("cats") == "cat"
    assert calls == ["cats"]
    assert len(stems) == 1


def test_stem_cache_falls_back_to_token_on_failure() -> None:
    def broken(token: str) -> str:
        raise RuntimeError("boom")

    stems = StemCache(broken)
    assert stems.stem("Widgets") == "widgets"
    assert StemCache(lambda token: "").stem("Widgets") == "widgets"


def test_default_stemmer_is_porter() -> None:
    stems = StemCache()
    assert stems.stem("connections") == "connect"
