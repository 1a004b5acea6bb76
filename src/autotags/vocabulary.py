"""White-list and black-list vocabularies used to steer tag selection."""

from __future__ import annotations

import logging
import re
import threading
from pathlib import Path
from typing import Final, Iterable

import yaml

logger = logging.getLogger(__name__)

# Compound terms are never formed across this token.
BOUNDARY: Final[str] = "##!##"

_SHORT_NUMBERS_EXPRESSION: Final[str] = "[0-9]{1,3}"

# Tokens keep apostrophes, so "it's" and "don't" reach the black list whole.
_CONTRACTION_SUFFIX: Final[str] = "'(?:s|t|m|d|ll|re|ve)"
_CONTRACTION_RE = re.compile(r"^(.+?)%s$" % _CONTRACTION_SUFFIX)

DEFAULT_WHITE_LIST: Final[tuple[str, ...]] = ("artificial intelligence", "complex models")

DEFAULT_BLACK_LIST: Final[tuple[str, ...]] = (
    "a", "about", "above", "across", "after", "afterwards", "again", "against",
    "all", "almost", "alone", "along", "already", "also", "although", "always", "am", "among",
    "amongst", "amoungst", "amount", "an", "and", "another", "any", "anyhow", "anyone",
    "anything", "anyway", "anywhere", "are", "around", "as", "at", "back", "based", "be",
    "became", "because", "become", "becomes", "becoming", "been", "before", "beforehand",
    "behind", "being", "below", "beside", "besides", "between", "beyond", "bill", "both",
    "bottom", "but", "by", "call", "can", "cannot", "cant", "co", "combines", "coming",
    "computer", "con", "could", "couldnt", "cry", "currently", "de", "describe", "detail",
    "did", "didn", "do", "does", "doesn", "don", "done", "down", "due", "during", "each", "eg",
    "eight", "either", "eleven", "else", "elsewhere", "empty", "end", "enough", "especially",
    "etc", "even", "ever", "every", "everyone", "everything", "everywhere", "except", "far",
    "few", "fifteen", "fify", "fill", "find", "fire", "first", "five", "for", "former",
    "formerly", "forty", "found", "four", "from", "front", "full", "further", "get", "give",
    "gmt", "go", "going", "got", "had", "has", "hasnt", "have", "having", "he", "hello",
    "hence", "her", "here", "hereafter", "hereby", "herein", "hereupon", "hers", "herself",
    "hi", "him", "himself", "his", "how", "however", "hundred", "i", "ie", "if", "in", "inc",
    "include", "includes", "including", "indeed", "interest", "into", "is", "isn", "it", "its",
    "itself", "just", "keep", "know", "largely", "last", "latter", "latterly", "least",
    "leave", "less", "like", "likely", "likes", "look", "looked", "lot", "ltd", "made", "make",
    "many", "me", "meanwhile", "might", "mill", "mine", "miss", "more", "moreover", "most",
    "mostly", "move", "mr", "mrs", "much", "must", "my", "myself", "name", "namely",
    "neither", "never", "nevertheless", "next", "nine", "no", "nobody", "none", "noone",
    "nor", "not", "nothing", "now", "nowhere", "of", "off", "often", "ok", "on", "once", "one",
    "only", "onto", "or", "other", "others", "otherwise", "our", "ours", "ourselves", "out",
    "over", "own", "part", "per", "percent", "perhaps", "please", "put", "quite", "rather",
    "re", "read", "remain", "remains", "s", "said", "sake", "same", "say", "says", "see",
    "seem", "seemed", "seeming", "seems", "serious", "several", "she", "should", "show",
    "side", "since", "sincere", "six", "sixty", "so", "some", "somehow", "someone",
    "something", "sometime", "sometimes", "somewhere", "still", "such", "system", "t",
    "take", "takes", "tell", "ten", "than", "that", "the", "their", "them", "themselves",
    "then", "thence", "there", "thereafter", "thereby", "therefore", "therein", "thereupon",
    "these", "they", "thick", "thin", "thing", "third", "this", "those", "though", "three",
    "through", "throughout", "thru", "thus", "to", "together", "told", "too", "took", "top",
    "toward", "towards", "try", "twelve", "twenty", "two", "un", "under", "until", "up",
    "upon", "us", "use", "uses", "using", "very", "via", "want", "was", "wasn", "way", "we",
    "well", "were", "what", "whatever", "when", "whence", "whenever", "where", "whereafter",
    "whereas", "whereby", "wherein", "whereupon", "wherever", "whether", "which", "while",
    "whither", "who", "whoever", "whole", "whom", "whose", "why", "will", "with", "within",
    "without", "would", "yeah", "year", "yes", "yet", "you", "your", "yours", "yourself",
    "yourselves",
)


class VocabularyLoadError(RuntimeError):
    """Raised when a vocabulary file cannot be loaded."""


def _normalize_entries(entries: Iterable[object], *, label: str) -> tuple[str, ...]:
    ordered: list[str] = []
    seen: set[str] = set()
    for entry in entries:
        if not isinstance(entry, str):
            logger.warning("vocabulary.entry_skipped list=%s entry=%r", label, entry)
            continue
        cleaned = entry.strip().lower()
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            ordered.append(cleaned)
    return tuple(ordered)


class Vocabulary:
    """Immutable, ordered white-list and black-list of lower-cased terms.

    The boundary marker is always black-listed so stopword stripping removes
    stray markers while bigram and compound detection still refuse to cross
    them.
    """

    def __init__(
        self,
        white_list: Iterable[object] | None = None,
        black_list: Iterable[object] | None = None,
    ) -> None:
        self._white_list = _normalize_entries(white_list or (), label="white_list")
        black = _normalize_entries(black_list or (), label="black_list")
        if BOUNDARY.lower() not in black:
            black = (BOUNDARY.lower(),) + black
        self._black_list = black
        self._white_set = frozenset(self._white_list)
        self._black_set = frozenset(self._black_list)
        self._stopword_patterns: dict[bool, re.Pattern[str]] = {}

    @classmethod
    def default(cls) -> "Vocabulary":
        return cls(DEFAULT_WHITE_LIST, DEFAULT_BLACK_LIST)

    @property
    def white_list(self) -> tuple[str, ...]:
        return self._white_list

    @property
    def black_list(self) -> tuple[str, ...]:
        return self._black_list

    def contains_white(self, term: str) -> bool:
        return term.lower() in self._white_set

    def contains_black(self, term: str) -> bool:
        """Black-listed words also match with a clitic ending attached."""

        lowered = term.lower()
        if lowered in self._black_set:
            return True
        contraction = _CONTRACTION_RE.match(lowered)
        return contraction is not None and contraction.group(1) in self._black_set

    def stopword_pattern(self, *, remove_short_numbers: bool) -> re.Pattern[str]:
        """Pattern matching runs of whitespace-delimited stopwords."""

        pattern = self._stopword_patterns.get(remove_short_numbers)
        if pattern is None:
            alternatives = [re.escape(word) for word in self._black_list]
            if remove_short_numbers:
                alternatives.insert(0, _SHORT_NUMBERS_EXPRESSION)
            pattern = re.compile(
                r"\s(?:(?:%s)(?:%s)?\s)+" % ("|".join(alternatives), _CONTRACTION_SUFFIX),
                re.IGNORECASE,
            )
            self._stopword_patterns[remove_short_numbers] = pattern
        return pattern


class VocabularyCache:
    """Per-tagger memo of white-list and black-list lookups keyed by raw term."""

    def __init__(self, vocabulary: Vocabulary) -> None:
        self.vocabulary = vocabulary
        self._white: dict[str, bool] = {}
        self._black: dict[str, bool] = {}
        self._lock = threading.Lock()

    def is_white_listed(self, term: str) -> bool:
        return self._lookup(term, self._white, self.vocabulary.contains_white)

    def is_black_listed(self, term: str) -> bool:
        return self._lookup(term, self._black, self.vocabulary.contains_black)

    def _lookup(self, term: str, cache: dict[str, bool], check) -> bool:
        with self._lock:
            cached = cache.get(term)
        if cached is not None:
            return cached
        try:
            found = bool(check(term))
        except (AttributeError, TypeError) as exc:
            logger.debug("vocabulary.lookup_failed term=%r error=%s", term, exc)
            return False
        with self._lock:
            cache.setdefault(term, found)
        return found


def load_vocabulary(path: str | Path) -> Vocabulary:
    """Load vocabularies from YAML; fall back to the defaults if the file is missing.

    The file holds a mapping with optional ``white_list`` and ``black_list``
    sequences. A missing key keeps the corresponding default list.
    """

    vocabulary_path = Path(path)
    if not vocabulary_path.exists():
        logger.info("vocabulary.defaults path=%s reason=missing", vocabulary_path)
        return Vocabulary.default()

    try:
        data = yaml.safe_load(vocabulary_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise VocabularyLoadError(f"Invalid vocabulary file {vocabulary_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise VocabularyLoadError(
            f"Vocabulary file {vocabulary_path} must contain a mapping with white_list/black_list"
        )

    lists: dict[str, list[object]] = {}
    for key, default in (("white_list", DEFAULT_WHITE_LIST), ("black_list", DEFAULT_BLACK_LIST)):
        value = data.get(key)
        if value is None:
            lists[key] = list(default)
        elif isinstance(value, str):
            lists[key] = [value]
        elif isinstance(value, list):
            lists[key] = value
        else:
            raise VocabularyLoadError(f"'{key}' in {vocabulary_path} must be a list of strings")

    vocabulary = Vocabulary(lists["white_list"], lists["black_list"])
    logger.info(
        "vocabulary.loaded path=%s white=%s black=%s",
        vocabulary_path,
        len(vocabulary.white_list),
        len(vocabulary.black_list),
    )
    return vocabulary


__all__ = [
    "BOUNDARY",
    "DEFAULT_BLACK_LIST",
    "DEFAULT_WHITE_LIST",
    "Vocabulary",
    "VocabularyCache",
    "VocabularyLoadError",
    "load_vocabulary",
]
