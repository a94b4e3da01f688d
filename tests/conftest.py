"""Shared pytest configuration and fixtures for the diacritics filter tests."""

import copy
import json
from pathlib import Path
from typing import Any, Dict

import pytest

from diacritics_api.core.models import Dataset


def _entry(base: str, decompose: str) -> Dict[str, Any]:
    return {"mapping": {"base": base, "decompose": decompose}}


SAMPLE_DATASET: Dict[str, Any] = {
    "de": {
        "standard": {
            "metadata": {
                "alphabet": "Latn",
                "continent": ["EU"],
                "country": ["DE", "AT", "CH"],
                "language": "German",
                "languageNative": "Deutsch",
            },
            "data": {
                "ä": _entry("a", "ae"),
                "ö": _entry("o", "oe"),
                "ü": _entry("u", "ue"),
                "ß": _entry("s", "ss"),
            },
        },
        "swiss": {
            "metadata": {
                "alphabet": "Latn",
                "continent": ["EU"],
                "country": ["CH"],
                "language": "German",
                "languageNative": "Deutsch",
                "variant": "Swiss German",
                "variantNative": "Schweizerdeutsch",
            },
            "data": {
                "ä": _entry("a", "ae"),
                "ö": _entry("o", "oe"),
                "ü": _entry("u", "ue"),
            },
        },
    },
    "fr": {
        "standard": {
            "metadata": {
                "alphabet": "Latn",
                "continent": ["EU"],
                "country": ["FR", "BE", "CH"],
                "language": "French",
                "languageNative": "Français",
            },
            "data": {
                "é": _entry("e", "e"),
                "è": _entry("e", "e"),
                "à": _entry("a", "a"),
                "ç": _entry("c", "c"),
            },
        },
    },
    "ru": {
        "standard": {
            "metadata": {
                "alphabet": "Cyrl",
                "continent": ["EU", "AS"],
                "country": ["RU"],
                "language": "Russian",
                "languageNative": "Русский",
            },
            # Cyrillic "е", not Latin "e"
            "data": {"ё": _entry("е", "е")},
        },
    },
}


@pytest.fixture
def raw_dataset() -> Dict[str, Any]:
    """A fresh copy of the raw sample database."""
    return copy.deepcopy(SAMPLE_DATASET)


@pytest.fixture
def dataset(raw_dataset: Dict[str, Any]) -> Dataset:  # pylint: disable=redefined-outer-name
    return Dataset.from_dict(raw_dataset)


@pytest.fixture
def dataset_file(tmp_path: Path, raw_dataset: Dict[str, Any]) -> Path:  # pylint: disable=redefined-outer-name
    """Sample database written to a JSON file."""
    path = tmp_path / "diacritics.json"
    path.write_text(json.dumps(raw_dataset, ensure_ascii=False), encoding="utf-8")
    return path


def variant_map(result: Dataset) -> Dict[str, list]:
    """language -> sorted variant codes, for compact assertions."""
    return {lang: sorted(variants) for lang, variants in result.languages.items()}


def char_map(result: Dataset) -> Dict[str, Dict[str, list]]:
    """language -> variant -> sorted character keys."""
    return {
        lang: {variant: sorted(entry.data) for variant, entry in variants.items()}
        for lang, variants in result.languages.items()
    }
