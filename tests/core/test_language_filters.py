"""Tests for the language and variant filters."""

from __future__ import annotations

import pytest
from conftest import variant_map

from diacritics_api.core.enums import FilterErrorKind, FilterKey
from diacritics_api.core.filters import LanguageFilter, VariantFilter
from diacritics_api.core.models import Dataset, FilterMessage


class TestLanguageFilter:
    @pytest.mark.parametrize("value", ["de", "german", "deutsch"])
    def test_code_english_and_native_name(self, dataset, value):
        result = LanguageFilter().apply([value], dataset)
        assert variant_map(result) == {"de": ["standard", "swiss"]}

    def test_native_name_with_non_ascii(self, dataset):
        result = LanguageFilter().apply(["русский"], dataset)
        assert variant_map(result) == {"ru": ["standard"]}

    def test_several_values_union(self, dataset):
        result = LanguageFilter().apply(["de", "french"], dataset)
        assert variant_map(result) == {"de": ["standard", "swiss"], "fr": ["standard"]}

    def test_unknown_values_are_ignored_when_others_match(self, dataset):
        result = LanguageFilter().apply(["xx", "fr"], dataset)
        assert variant_map(result) == {"fr": ["standard"]}

    def test_not_found_quotes_requested_values(self, dataset):
        result = LanguageFilter().apply(["xx", "yy"], dataset)
        assert result == FilterMessage("Languages 'xx', 'yy' weren't found", FilterErrorKind.NO_MATCH)

    def test_only_sees_the_given_context(self, dataset):
        narrowed = LanguageFilter().apply(["fr"], dataset)
        result = LanguageFilter().apply(["de"], narrowed)
        assert isinstance(result, FilterMessage)
        assert result.message == "Languages 'de' weren't found"

    def test_registered_key(self):
        assert LanguageFilter.key is FilterKey.LANGUAGE


class TestVariantFilter:
    @pytest.mark.parametrize("value", ["swiss", "swiss german", "schweizerdeutsch"])
    def test_code_english_and_native_name(self, dataset, value):
        result = VariantFilter().apply([value], dataset)
        assert variant_map(result) == {"de": ["swiss"]}

    def test_standard_variant_code_matches_every_language(self, dataset):
        result = VariantFilter().apply(["standard"], dataset)
        assert variant_map(result) == {
            "de": ["standard"],
            "fr": ["standard"],
            "ru": ["standard"],
        }

    def test_not_found(self, dataset):
        result = VariantFilter().apply(["nope"], dataset)
        assert isinstance(result, FilterMessage)
        assert result.message == "Variants 'nope' weren't found"

    def test_empty_context_reports_not_found(self):
        result = VariantFilter().apply(["swiss"], Dataset())
        assert isinstance(result, FilterMessage)
