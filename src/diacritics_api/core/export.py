"""Flatten a (filtered) dataset into a table, one row per character."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from .config import (
    ALPHABET_FIELD,
    CONTINENT_FIELD,
    COUNTRY_FIELD,
    LANGUAGE_FIELD,
    LANGUAGE_NATIVE_FIELD,
    VARIANT_FIELD,
    VARIANT_NATIVE_FIELD,
)
from .models import Dataset, Metadata, iter_char_entries

EXPORT_COLUMNS = [
    "language_code",
    "variant_code",
    "language",
    "language_native",
    "variant",
    "variant_native",
    "alphabet",
    "continent",
    "country",
    "diacritic",
    "base",
    "decompose",
]

_METADATA_COLUMNS = {
    "language": LANGUAGE_FIELD,
    "language_native": LANGUAGE_NATIVE_FIELD,
    "variant": VARIANT_FIELD,
    "variant_native": VARIANT_NATIVE_FIELD,
    "alphabet": ALPHABET_FIELD,
    "continent": CONTINENT_FIELD,
    "country": COUNTRY_FIELD,
}


def _metadata_cell(metadata: Metadata, field: str) -> str:
    # Multi-valued fields are joined with "|" to stay in one CSV cell
    value = metadata.get(field)
    if value is None:
        return ""
    return "|".join(value.values)


def dataset_to_frame(dataset: Dataset) -> pd.DataFrame:
    """Return a DataFrame with EXPORT_COLUMNS, one row per character entry."""
    rows: List[Dict[str, Any]] = []
    for lang, variant, char, entry in iter_char_entries(dataset):
        metadata = dataset.languages[lang][variant].metadata
        row: Dict[str, Any] = {"language_code": lang, "variant_code": variant}
        for column, field in _METADATA_COLUMNS.items():
            row[column] = _metadata_cell(metadata, field)
        row["diacritic"] = char
        row["base"] = entry.base if isinstance(entry.base, str) else ""
        row["decompose"] = entry.decompose if isinstance(entry.decompose, str) else ""
        rows.append(row)
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def write_csv(dataset: Dataset, output_path: Path) -> int:
    """Write the flattened dataset to CSV and return the number of rows."""
    df = dataset_to_frame(dataset)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False, encoding="utf-8")
    return len(df)
