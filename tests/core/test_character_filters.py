"""Tests for the diacritic, base and decompose filters."""

from __future__ import annotations

import copy

from conftest import char_map

from diacritics_api.core.filters import BaseFilter, DecomposeFilter, DiacriticFilter
from diacritics_api.core.models import Dataset, FilterMessage


class TestDiacriticFilter:
    def test_selects_and_prunes(self, dataset):
        result = DiacriticFilter().apply(["ä"], dataset)
        assert char_map(result) == {"de": {"standard": ["ä"], "swiss": ["ä"]}}

    def test_several_values(self, dataset):
        result = DiacriticFilter().apply(["é", "ç"], dataset)
        assert char_map(result) == {"fr": {"standard": ["ç", "é"]}}

    def test_upper_case_diacritic_keys_match(self, raw_dataset):
        raw_dataset["de"]["standard"]["data"]["Ä"] = {"mapping": {"base": "A", "decompose": "Ae"}}
        result = DiacriticFilter().apply(["ä"], Dataset.from_dict(raw_dataset))
        assert char_map(result)["de"]["standard"] == ["Ä", "ä"]

    def test_not_found(self, dataset):
        result = DiacriticFilter().apply(["ø"], dataset)
        assert isinstance(result, FilterMessage)
        assert result.message == "Diacritics 'ø' weren't found"


class TestBaseFilter:
    def test_prunes_other_characters(self, dataset):
        result = BaseFilter().apply(["a"], dataset)
        assert char_map(result) == {
            "de": {"standard": ["ä"], "swiss": ["ä"]},
            "fr": {"standard": ["à"]},
        }

    def test_latin_and_cyrillic_bases_differ(self, dataset):
        result = BaseFilter().apply(["e"], dataset)
        assert char_map(result) == {"fr": {"standard": ["è", "é"]}}

    def test_metadata_is_carried_over(self, dataset):
        result = BaseFilter().apply(["c"], dataset)
        assert result.languages["fr"]["standard"].metadata == dataset.languages["fr"]["standard"].metadata

    def test_not_found(self, dataset):
        result = BaseFilter().apply(["q", "z"], dataset)
        assert isinstance(result, FilterMessage)
        assert result.message == "Bases 'q', 'z' weren't found"


class TestDecomposeFilter:
    def test_decompose_value(self, dataset):
        result = DecomposeFilter().apply(["ss"], dataset)
        assert char_map(result) == {"de": {"standard": ["ß"]}}

    def test_not_found(self, dataset):
        result = DecomposeFilter().apply(["xx"], dataset)
        assert isinstance(result, FilterMessage)
        assert result.message == "Decomposes 'xx' weren't found"


def test_character_filters_never_modify_the_input(dataset, raw_dataset):
    snapshot = copy.deepcopy(raw_dataset)
    BaseFilter().apply(["a"], dataset)
    DiacriticFilter().apply(["ü"], dataset)
    DecomposeFilter().apply(["oe"], dataset)
    assert dataset.to_dict() == snapshot
