"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class FilterKey(str, Enum):
    """Filter names accepted by the query engine.

    Values are the lower-case query parameter names so that a normalized
    clause key can be passed straight to ``FilterKey(...)``.
    """

    LANGUAGE = "language"
    VARIANT = "variant"
    ALPHABET = "alphabet"
    CONTINENT = "continent"
    COUNTRY = "country"
    DIACRITIC = "diacritic"
    BASE = "base"
    DECOMPOSE = "decompose"


class FilterErrorKind(str, Enum):
    """Kinds of in-band outcomes reported instead of a dataset."""

    UNKNOWN_FILTER_KEY = "unknown_filter_key"
    EMPTY_VALUE_LIST = "empty_value_list"
    NO_MATCH = "no_match"
    EMPTY_INTERMEDIATE_RESULT = "empty_intermediate_result"
    INVALID_RESPONSE_SHAPE = "invalid_response_shape"


__all__ = ["FilterKey", "FilterErrorKind"]
