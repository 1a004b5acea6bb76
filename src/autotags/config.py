"""Configuration helpers for the AutoTags tagger."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from typing import Any, Final, Mapping

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_TOKEN_LENGTH_CUTOFF: Final[int] = 2
_DEFAULT_TERM_FREQUENCY_CUTOFF: Final[int] = 1
_DEFAULT_SCORE_CUTOFF: Final[float] = 0.0
_DEFAULT_WHITE_LIST_BOOST: Final[float] = 1.5
_DEFAULT_CAPITALIZATION_BOOST: Final[float] = 1.75
_DEFAULT_CAPITALIZED_COMPOUND_BOOST: Final[float] = 3.5
_DEFAULT_BIGRAM_BOOST: Final[float] = 2.5
_DEFAULT_BIGRAM_ALREADY_DETECTED_BOOST: Final[float] = 0.25
_DEFAULT_TERM_FROM_COMPOUND_DOWNWEIGHT: Final[float] = 0.25
_DEFAULT_SEPARATOR: Final[str] = " "
_DEFAULT_MAX_TAGS: Final[int] = 10
_DEFAULT_METRICS_NAMESPACE: Final[str] = "autotags"

# Boost preset that favours compound terms over single words.
_EMPHASIS_COMPOUND_BOOST: Final[float] = 7.0
_EMPHASIS_BIGRAM_BOOST: Final[float] = 5.0

_BOOST_FIELDS: Final[tuple[str, ...]] = (
    "white_list_boost",
    "capitalization_boost",
    "capitalized_compound_boost",
    "bigram_boost",
    "bigram_already_detected_boost",
    "term_from_compound_downweight",
)
_INT_FIELDS: Final[tuple[str, ...]] = ("token_length_cutoff", "term_frequency_cutoff", "default_max_tags")
_FLOAT_FIELDS: Final[tuple[str, ...]] = ("score_cutoff",) + _BOOST_FIELDS
_BOOL_FIELDS: Final[tuple[str, ...]] = (
    "lowercase",
    "remove_short_numbers",
    "apply_stemming",
    "metrics_enabled",
    "prometheus_enabled",
)
_STR_FIELDS: Final[tuple[str, ...]] = ("separator", "metrics_namespace")


class ConfigurationError(ValueError):
    """Raised when tagger settings are invalid."""


def _env_optional_bool(name: str) -> bool | None:
    """Read an optional boolean environment variable."""

    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "on"}:
        return True
    if value in {"0", "false", "no", "off"}:
        return False
    msg = f"Environment variable {name} must be a boolean value (true/false)."
    raise ConfigurationError(msg)


def _env_optional_int(name: str) -> int | None:
    """Read an optional integer environment variable."""

    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable {name} must be an integer") from exc


def _env_optional_float(name: str) -> float | None:
    """Read an optional float environment variable."""

    raw = os.getenv(name)
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable {name} must be a float") from exc


def _env_int(name: str, default: int) -> int:
    value = _env_optional_int(name)
    return default if value is None else value


def _env_float(name: str, default: float) -> float:
    """Read a float environment variable with a fallback (preserving zero)."""

    value = _env_optional_float(name)
    return default if value is None else value


def _env_bool(name: str, default: bool) -> bool:
    value = _env_optional_bool(name)
    return default if value is None else value


@dataclass(slots=True)
class TaggerSettings:
    """Switches and dials for one tagger instance."""

    token_length_cutoff: int = _DEFAULT_TOKEN_LENGTH_CUTOFF
    term_frequency_cutoff: int = _DEFAULT_TERM_FREQUENCY_CUTOFF
    score_cutoff: float = _DEFAULT_SCORE_CUTOFF
    white_list_boost: float = _DEFAULT_WHITE_LIST_BOOST
    capitalization_boost: float = _DEFAULT_CAPITALIZATION_BOOST
    capitalized_compound_boost: float = _DEFAULT_CAPITALIZED_COMPOUND_BOOST
    bigram_boost: float = _DEFAULT_BIGRAM_BOOST
    bigram_already_detected_boost: float = _DEFAULT_BIGRAM_ALREADY_DETECTED_BOOST
    term_from_compound_downweight: float = _DEFAULT_TERM_FROM_COMPOUND_DOWNWEIGHT
    separator: str = _DEFAULT_SEPARATOR
    lowercase: bool = True
    remove_short_numbers: bool = True
    apply_stemming: bool = True
    vocabulary_path: str | None = None
    default_max_tags: int = _DEFAULT_MAX_TAGS
    metrics_enabled: bool = True
    metrics_namespace: str = _DEFAULT_METRICS_NAMESPACE
    prometheus_enabled: bool = False

    def __post_init__(self) -> None:
        self._check_types()
        if self.token_length_cutoff < 0:
            raise ConfigurationError("token_length_cutoff must be zero or greater")
        if self.term_frequency_cutoff < 0:
            raise ConfigurationError("term_frequency_cutoff must be zero or greater")
        if self.score_cutoff < 0:
            raise ConfigurationError("score_cutoff must be zero or greater")
        if self.default_max_tags < 0:
            raise ConfigurationError("default_max_tags must be zero or greater")
        for name in _BOOST_FIELDS:
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be a positive factor")
        if not self.separator:
            raise ConfigurationError("separator must not be empty")

    def _check_types(self) -> None:
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, not {type(value).__name__}")
        for name in _FLOAT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, not {type(value).__name__}")
        for name in _BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigurationError(f"{name} must be a boolean, not {type(value).__name__}")
        for name in _STR_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigurationError(f"{name} must be a string, not {type(value).__name__}")
        if self.vocabulary_path is not None and not isinstance(self.vocabulary_path, str):
            raise ConfigurationError("vocabulary_path must be a string path or None")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TaggerSettings":
        """Build settings from a mapping, rejecting keys that are not settings."""

        known = {item.name for item in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ConfigurationError(f"Unknown tagger settings: {', '.join(unknown)}")
        return cls(**dict(data))

    @classmethod
    def from_env(cls) -> "TaggerSettings":
        """Create settings by reading ``AUTOTAGS_*`` environment variables."""

        return cls(
            token_length_cutoff=_env_int("AUTOTAGS_TOKEN_LENGTH_CUTOFF", _DEFAULT_TOKEN_LENGTH_CUTOFF),
            term_frequency_cutoff=_env_int(
                "AUTOTAGS_TERM_FREQUENCY_CUTOFF", _DEFAULT_TERM_FREQUENCY_CUTOFF
            ),
            score_cutoff=_env_float("AUTOTAGS_SCORE_CUTOFF", _DEFAULT_SCORE_CUTOFF),
            white_list_boost=_env_float("AUTOTAGS_WHITE_LIST_BOOST", _DEFAULT_WHITE_LIST_BOOST),
            capitalization_boost=_env_float(
                "AUTOTAGS_CAPITALIZATION_BOOST", _DEFAULT_CAPITALIZATION_BOOST
            ),
            capitalized_compound_boost=_env_float(
                "AUTOTAGS_CAPITALIZED_COMPOUND_BOOST", _DEFAULT_CAPITALIZED_COMPOUND_BOOST
            ),
            bigram_boost=_env_float("AUTOTAGS_BIGRAM_BOOST", _DEFAULT_BIGRAM_BOOST),
            bigram_already_detected_boost=_env_float(
                "AUTOTAGS_BIGRAM_ALREADY_DETECTED_BOOST",
                _DEFAULT_BIGRAM_ALREADY_DETECTED_BOOST,
            ),
            term_from_compound_downweight=_env_float(
                "AUTOTAGS_TERM_FROM_COMPOUND_DOWNWEIGHT",
                _DEFAULT_TERM_FROM_COMPOUND_DOWNWEIGHT,
            ),
            separator=os.getenv("AUTOTAGS_SEPARATOR", _DEFAULT_SEPARATOR),
            lowercase=_env_bool("AUTOTAGS_LOWERCASE", True),
            remove_short_numbers=_env_bool("AUTOTAGS_REMOVE_SHORT_NUMBERS", True),
            apply_stemming=_env_bool("AUTOTAGS_APPLY_STEMMING", True),
            vocabulary_path=os.getenv("AUTOTAGS_VOCABULARY_PATH") or None,
            default_max_tags=_env_int("AUTOTAGS_DEFAULT_MAX_TAGS", _DEFAULT_MAX_TAGS),
            metrics_enabled=_env_bool("AUTOTAGS_METRICS_ENABLED", True),
            metrics_namespace=os.getenv("AUTOTAGS_METRICS_NAMESPACE", _DEFAULT_METRICS_NAMESPACE),
            prometheus_enabled=_env_bool("AUTOTAGS_PROMETHEUS_ENABLED", False),
        )

    @property
    def uses_default_separator(self) -> bool:
        return self.separator == _DEFAULT_SEPARATOR

    def with_compound_emphasis(self) -> "TaggerSettings":
        """Return a copy using the compound-emphasis preset (compound 7.0, bigram 5.0)."""

        return replace(
            self,
            capitalized_compound_boost=_EMPHASIS_COMPOUND_BOOST,
            bigram_boost=_EMPHASIS_BIGRAM_BOOST,
        )

    def build_metrics_recorder(self) -> "MetricsRecorder":
        """Instantiate the configured metrics recorder."""

        from .observability import MetricsRecorder

        return MetricsRecorder(
            enabled=self.metrics_enabled,
            namespace=self.metrics_namespace,
            prometheus_enabled=self.prometheus_enabled,
        )

    def build_vocabulary(self) -> "Vocabulary":
        """Load the configured vocabulary file, or the built-in lists."""

        from .vocabulary import Vocabulary, load_vocabulary

        if self.vocabulary_path:
            return load_vocabulary(self.vocabulary_path)
        return Vocabulary.default()


__all__ = ["ConfigurationError", "TaggerSettings"]
