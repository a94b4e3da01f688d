"""Filter registry and dispatcher.

This module turns query clauses into a filtered dataset:
- FILTER_REGISTRY: FilterKey -> filter operation instance
- parse_values(): splits a raw clause value into normalized values
- run_filters(): applies clauses left to right (AND), values within a clause OR
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, Union

from .config import (
    INVALID_PARAMETER_TEMPLATE,
    INVALID_RESPONSE_MESSAGE,
    NO_ENTRIES_MESSAGE,
    NO_VALUES_TEMPLATE,
)
from .enums import FilterErrorKind, FilterKey
from .filters import (
    AlphabetFilter,
    BaseFilter,
    ContinentFilter,
    CountryFilter,
    DecomposeFilter,
    DiacriticFilter,
    FilterOperation,
    LanguageFilter,
    VariantFilter,
)
from .models import Dataset, FilterMessage, FilterResult

logger = logging.getLogger(__name__)

RawValue = Union[str, Sequence[str]]
Clauses = Union[Mapping[str, RawValue], Iterable[Tuple[str, RawValue]]]


# Registry of all available filters, keyed by the query parameter they serve
FILTER_REGISTRY: Dict[FilterKey, FilterOperation] = {
    FilterKey.LANGUAGE: LanguageFilter(),
    FilterKey.VARIANT: VariantFilter(),
    FilterKey.ALPHABET: AlphabetFilter(),
    FilterKey.CONTINENT: ContinentFilter(),
    FilterKey.COUNTRY: CountryFilter(),
    FilterKey.DIACRITIC: DiacriticFilter(),
    FilterKey.BASE: BaseFilter(),
    FilterKey.DECOMPOSE: DecomposeFilter(),
}


def parse_values(raw: RawValue) -> List[str]:
    """Split a clause value into trimmed, lower-cased, non-empty values.

    A list (a query parameter given more than once) is joined with commas
    first, so ``["de", "fr,it"]`` and ``"de,fr,it"`` are equivalent.

    Examples:
        >>> parse_values(" DE, fr ,,")
        ['de', 'fr']
    """
    if raw is None:
        return []
    if not isinstance(raw, str):
        raw = ",".join(str(v) for v in raw)
    return [piece.strip().lower() for piece in raw.split(",") if piece.strip()]


def resolve_filter(key: str) -> Union[FilterOperation, None]:
    """Look up the operation for a clause key (case and whitespace insensitive)."""
    try:
        filter_key = FilterKey(key.strip().lower())
    except ValueError:
        return None
    return FILTER_REGISTRY.get(filter_key)


def _iter_clauses(clauses: Clauses) -> Iterable[Tuple[str, RawValue]]:
    if isinstance(clauses, Mapping):
        return clauses.items()
    return clauses


def run_filters(context: Dataset, clauses: Clauses) -> FilterResult:
    """Apply query clauses to a dataset.

    Args:
        context: The full dataset or an already filtered one. Never modified.
        clauses: Ordered ``(key, raw_value)`` pairs, or a mapping of them.

    Returns:
        The narrowed Dataset, the unchanged ``context`` when there are no
        clauses, or a FilterMessage for the first clause that failed.

    Examples:
        >>> run_filters(dataset, [("language", "de"), ("alphabet", "Latn")])
        Dataset(languages={'de': {...}})
        >>> run_filters(dataset, {"foo": "bar"}).message
        "Invalid filter parameter 'foo'"
    """
    result: FilterResult = context
    for key, raw in _iter_clauses(clauses):
        values = parse_values(raw)
        if not values:
            logger.debug("Empty value list for %r", key)
            return FilterMessage(
                message=NO_VALUES_TEMPLATE.format(key=key),
                kind=FilterErrorKind.EMPTY_VALUE_LIST,
            )

        operation = resolve_filter(key)
        if operation is None:
            logger.debug("No filter registered for %r", key)
            return FilterMessage(
                message=INVALID_PARAMETER_TEMPLATE.format(key=key),
                kind=FilterErrorKind.UNKNOWN_FILTER_KEY,
            )

        logger.debug("Applying %s filter with %s", operation.key.value, values)
        result = operation.apply(values, result)

        if isinstance(result, FilterMessage):
            return result
        if not isinstance(result, Dataset):
            logger.error("Filter %s returned %s", operation.key.value, type(result).__name__)
            return FilterMessage(
                message=INVALID_RESPONSE_MESSAGE,
                kind=FilterErrorKind.INVALID_RESPONSE_SHAPE,
            )
        if result.is_empty():
            return FilterMessage(
                message=NO_ENTRIES_MESSAGE,
                kind=FilterErrorKind.EMPTY_INTERMEDIATE_RESULT,
            )
    return result


__all__ = [
    "FILTER_REGISTRY",
    "parse_values",
    "resolve_filter",
    "run_filters",
]
