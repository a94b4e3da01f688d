"""Core query engine public API.

Exposes the typed dataset model, the filter registry and dispatcher, and the
helpers used by the CLI, HTTP and MCP layers. The engine is pure: it reads a
Dataset and returns a new, narrowed Dataset or a FilterMessage.
"""

from .enums import FilterErrorKind, FilterKey
from .models import (
    CharEntry,
    Dataset,
    DatasetError,
    FilterMessage,
    FilterResult,
    Metadata,
    MetadataValue,
    VariantEntry,
    to_payload,
)
from .lookup import (
    copy_dataset,
    filter_by_language,
    find_by_metadata,
    join_values,
    merge_languages,
)
from .registry import FILTER_REGISTRY, parse_values, resolve_filter, run_filters
from .loader import load_dataset
from .store import DatasetStore

__all__ = [
    "FilterErrorKind",
    "FilterKey",
    "CharEntry",
    "Dataset",
    "DatasetError",
    "FilterMessage",
    "FilterResult",
    "Metadata",
    "MetadataValue",
    "VariantEntry",
    "to_payload",
    "copy_dataset",
    "filter_by_language",
    "find_by_metadata",
    "join_values",
    "merge_languages",
    "FILTER_REGISTRY",
    "parse_values",
    "resolve_filter",
    "run_filters",
    "load_dataset",
    "DatasetStore",
]
