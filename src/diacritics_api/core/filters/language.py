"""Language and variant filters.

A language or a variant can be named three ways: by its code (the structural
key, e.g. ``de`` or ``swiss``), by its English name from the metadata, or by
its native name. All three are tried and their matches are merged.
"""

from __future__ import annotations

from typing import List

from ..config import (
    LANGUAGE_FIELD,
    LANGUAGE_NATIVE_FIELD,
    VARIANT_FIELD,
    VARIANT_NATIVE_FIELD,
)
from ..enums import FilterKey
from ..lookup import LanguageMatches, filter_by_language, find_by_metadata, merge_languages
from ..models import Dataset, FilterResult
from ._common import not_found


def _match_language_codes(values: List[str], context: Dataset) -> LanguageMatches:
    wanted = set(values)
    return {
        lang: list(variants)
        for lang, variants in context.languages.items()
        if lang.lower() in wanted
    }


def _match_variant_codes(values: List[str], context: Dataset) -> LanguageMatches:
    wanted = set(values)
    matches: LanguageMatches = {}
    for lang, variant, _ in context.variants():
        if variant.lower() in wanted:
            matches.setdefault(lang, []).append(variant)
    return matches


class LanguageFilter:
    """Filter by ISO 639-1 code, English language name or native language name."""

    key = FilterKey.LANGUAGE

    def apply(self, values: List[str], context: Dataset) -> FilterResult:
        matches = merge_languages(
            _match_language_codes(values, context),
            find_by_metadata(LANGUAGE_FIELD, values, context),
            find_by_metadata(LANGUAGE_NATIVE_FIELD, values, context),
        )
        if not matches:
            return not_found(self.key, values)
        return filter_by_language(matches, context)


class VariantFilter:
    """Filter by variant code, English variant name or native variant name."""

    key = FilterKey.VARIANT

    def apply(self, values: List[str], context: Dataset) -> FilterResult:
        matches = merge_languages(
            _match_variant_codes(values, context),
            find_by_metadata(VARIANT_FIELD, values, context),
            find_by_metadata(VARIANT_NATIVE_FIELD, values, context),
        )
        if not matches:
            return not_found(self.key, values)
        return filter_by_language(matches, context)
