"""Tests for the clause dispatcher (run_filters) and its query properties."""

from __future__ import annotations

import copy

import pytest
from conftest import char_map, variant_map

from diacritics_api.core.enums import FilterErrorKind
from diacritics_api.core.filters import CountryFilter, LanguageFilter
from diacritics_api.core.models import Dataset, FilterMessage
from diacritics_api.core.registry import run_filters


class TestDispatcherMessages:
    def test_no_clauses_returns_input_unchanged(self, dataset):
        assert run_filters(dataset, []) is dataset
        assert run_filters(dataset, {}) is dataset

    def test_unknown_key(self, dataset):
        result = run_filters(dataset, {"foo": "bar"})
        assert result == FilterMessage(
            "Invalid filter parameter 'foo'", FilterErrorKind.UNKNOWN_FILTER_KEY
        )

    def test_unknown_key_stops_processing(self, dataset):
        result = run_filters(dataset, [("foo", "bar"), ("language", "xx")])
        assert result.message == "Invalid filter parameter 'foo'"

    @pytest.mark.parametrize("raw", ["", " ", ",, ,", []])
    def test_empty_value_list(self, dataset, raw):
        result = run_filters(dataset, [("language", raw)])
        assert result == FilterMessage(
            "No values for parameter 'language' provided", FilterErrorKind.EMPTY_VALUE_LIST
        )

    def test_empty_value_checked_before_key(self, dataset):
        result = run_filters(dataset, [("foo", "")])
        assert result.message == "No values for parameter 'foo' provided"

    def test_first_no_match_is_returned(self, dataset):
        result = run_filters(dataset, [("base", "a"), ("decompose", "xx"), ("language", "yy")])
        assert result.message == "Decomposes 'xx' weren't found"
        assert result.kind is FilterErrorKind.NO_MATCH

    def test_key_is_case_and_space_insensitive(self, dataset):
        result = run_filters(dataset, [(" Language ", "fr")])
        assert variant_map(result) == {"fr": ["standard"]}

    def test_repeated_parameter_values_are_joined(self, dataset):
        result = run_filters(dataset, [("language", ["de", "fr,ru"])])
        assert sorted(result.languages) == ["de", "fr", "ru"]


class TestQueryProperties:
    def test_case_insensitivity(self, dataset):
        assert run_filters(dataset, {"language": "DE"}) == run_filters(dataset, {"language": "de"})
        assert run_filters(dataset, {"alphabet": "LATN"}) == run_filters(dataset, {"alphabet": "latn"})

    def test_or_within_a_key(self, dataset):
        both = run_filters(dataset, {"language": "de,fr"})
        de = run_filters(dataset, {"language": "de"})
        fr = run_filters(dataset, {"language": "fr"})
        assert both.languages == {**de.languages, **fr.languages}

    def test_and_across_keys_equals_sequential_application(self, dataset):
        combined = run_filters(dataset, [("language", "de"), ("country", "at")])
        sequential = CountryFilter().apply(["at"], LanguageFilter().apply(["de"], dataset))
        assert combined == sequential
        assert variant_map(combined) == {"de": ["standard"]}

    def test_and_with_character_filters_uses_pruned_context(self, dataset):
        result = run_filters(dataset, [("base", "a"), ("decompose", "ae")])
        # fr survives "base=a" through "à" but "à" decomposes to "a"
        assert char_map(result) == {"de": {"standard": ["ä"], "swiss": ["ä"]}}

    def test_non_mutation(self, dataset, raw_dataset):
        snapshot = copy.deepcopy(raw_dataset)
        for clauses in (
            {"language": "de", "base": "u"},
            {"diacritic": "é,à"},
            {"variant": "swiss", "decompose": "oe"},
        ):
            run_filters(dataset, clauses)
        assert dataset.to_dict() == snapshot

    @pytest.mark.parametrize(
        "clauses",
        [
            {"language": "de"},
            {"base": "a"},
            {"country": "ch", "diacritic": "ä,ç"},
            {"variant": "standard", "decompose": "e"},
        ],
    )
    def test_idempotence(self, dataset, clauses):
        once = run_filters(dataset, clauses)
        twice = run_filters(once, clauses)
        assert twice == once

    def test_not_found_quotes_requested_value(self, dataset):
        assert run_filters(dataset, {"language": "XX"}).to_dict() == {
            "message": "Languages 'xx' weren't found"
        }

    def test_null_metadata_is_inapplicable(self):
        raw = {
            "de": {
                "standard": {
                    "metadata": {"language": "German", "variant": None, "country": ["DE", None]},
                    "data": {"ä": {"mapping": {"base": "a", "decompose": "ae"}}},
                }
            }
        }
        ds = Dataset.from_dict(copy.deepcopy(raw))
        assert run_filters(ds, {}).to_dict() == raw
        assert run_filters(ds, {"variant": "none"}).to_dict() == {
            "message": "Variants 'none' weren't found"
        }
        assert run_filters(ds, {"country": "none"}).to_dict() == {
            "message": "Countries 'none' weren't found"
        }
        assert run_filters(ds, {"country": "de"}).to_dict() == raw


@pytest.fixture
def example_dataset() -> Dataset:
    return Dataset.from_dict(
        {
            "de": {
                "standard": {
                    "metadata": {
                        "language": "German",
                        "languageNative": "Deutsch",
                        "alphabet": "Latn",
                        "continent": ["EU"],
                        "country": ["DE", "AT", "CH"],
                    },
                    "data": {"ä": {"mapping": {"base": "a", "decompose": "ae"}}},
                }
            }
        }
    )


class TestExampleScenarios:
    def test_no_clauses(self, example_dataset):
        assert run_filters(example_dataset, {}).to_dict() == example_dataset.to_dict()

    def test_language(self, example_dataset):
        assert run_filters(example_dataset, {"language": "de"}) == example_dataset

    def test_unknown_language(self, example_dataset):
        result = run_filters(example_dataset, {"language": "xx"})
        assert result.to_dict() == {"message": "Languages 'xx' weren't found"}

    def test_base(self, example_dataset):
        assert run_filters(example_dataset, {"base": "a"}) == example_dataset

    def test_base_then_missing_decompose(self, example_dataset):
        result = run_filters(example_dataset, {"base": "a", "decompose": "xx"})
        assert result.to_dict() == {"message": "Decomposes 'xx' weren't found"}

    def test_invalid_parameter(self, example_dataset):
        result = run_filters(example_dataset, {"foo": "bar"})
        assert result.to_dict() == {"message": "Invalid filter parameter 'foo'"}
