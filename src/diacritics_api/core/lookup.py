"""Lookup, narrowing and pruning helpers shared by the filters.

A "match map" is a ``Dict[language, List[variant]]`` naming the
language/variant pairs that satisfied a criterion. Filters build one or more
match maps, merge them and narrow the context with `filter_by_language`.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Set

from .models import CharEntry, Dataset, VariantEntry

LanguageMatches = Dict[str, List[str]]


def _add_match(matches: LanguageMatches, lang: str, variant: str) -> None:
    variants = matches.setdefault(lang, [])
    if variant not in variants:
        variants.append(variant)


def find_by_metadata(field: str, values: Iterable[str], context: Dataset) -> LanguageMatches:
    """Find every language/variant whose metadata ``field`` equals any of ``values``.

    Comparison is case-insensitive on both sides. Variants that do not carry
    the field are skipped; e.g. ``variant`` is absent on standard variants.

    Args:
        field: Metadata field name (e.g. "alphabet").
        values: Acceptable values.
        context: Dataset to search (may already be narrowed).

    Returns:
        Match map of language code -> variant codes, in visit order.

    Examples:
        >>> find_by_metadata("alphabet", ["latn"], dataset)
        {'de': ['standard'], 'fr': ['standard']}
    """
    wanted = {v.lower() for v in values}
    matches: LanguageMatches = {}
    for lang, variant, entry in context.variants():
        value = entry.metadata.get(field)
        if value is None:
            continue
        if value.matches(wanted):
            matches.setdefault(lang, []).append(variant)
    return matches


def filter_by_language(matches: LanguageMatches, context: Dataset) -> Dataset:
    """Narrow ``context`` to the pairs listed in ``matches``.

    Variant entries are carried over by reference. Pairs that are not present
    in the context are ignored, so the result is always a structural subset.
    """
    languages: Dict[str, Dict[str, VariantEntry]] = {}
    for lang, variants in matches.items():
        source = context.languages.get(lang)
        if source is None:
            continue
        for variant in variants:
            if variant not in source:
                continue
            languages.setdefault(lang, {})[variant] = source[variant]
    return Dataset(languages=languages)


def merge_languages(*match_maps: LanguageMatches) -> LanguageMatches:
    """Union match maps per language, keeping each variant once in first-seen order."""
    merged: LanguageMatches = {}
    for match_map in match_maps:
        for lang, variants in match_map.items():
            for variant in variants:
                _add_match(merged, lang, variant)
    return merged


def join_values(values: Iterable[str]) -> str:
    """Format values for messages: ``['de', 'fr']`` -> ``"'de', 'fr'"``."""
    return ", ".join(f"'{v}'" for v in values)


def copy_dataset(dataset: Dataset) -> Dataset:
    """Structural copy: new language/variant maps and new character tables.

    Metadata and character entries are immutable and shared with the source.
    """
    languages: Dict[str, Dict[str, VariantEntry]] = {}
    for lang, variant, entry in dataset.variants():
        languages.setdefault(lang, {})[variant] = replace(
            entry,
            data=dict(entry.data),
            extra=dict(entry.extra),
        )
    return Dataset(languages=languages)


def _comparison_value(char: str, entry: CharEntry, prop: Optional[str]) -> Optional[str]:
    # No property means the diacritic itself is compared
    if prop is None:
        return char.lower()
    value = entry.mapping.get(prop)
    if not isinstance(value, str):
        return None
    return value.lower()


def _matches(char: str, entry: CharEntry, prop: Optional[str], wanted: Set[str]) -> bool:
    value = _comparison_value(char, entry, prop)
    return value is not None and value in wanted


def select_by_data(
    values: Iterable[str], context: Dataset, prop: Optional[str] = None
) -> LanguageMatches:
    """Find variants having at least one character whose value is in ``values``.

    Args:
        values: Requested values (lower-cased).
        context: Dataset to search.
        prop: Mapping property to compare (e.g. "base"); None compares the
            diacritic key itself.

    Returns:
        Match map; each variant is listed once even if several characters match.
    """
    wanted = set(values)
    matches: LanguageMatches = {}
    for lang, variant, entry in context.variants():
        for char, char_entry in entry.data.items():
            if _matches(char, char_entry, prop, wanted):
                _add_match(matches, lang, variant)
                break
    return matches


def remove_non_matching_data(
    values: Iterable[str], context: Dataset, prop: Optional[str] = None
) -> Dataset:
    """Return a copy of ``context`` without characters whose value is not in ``values``.

    The input is never modified. Variants whose table ends up empty are kept.
    """
    wanted = set(values)
    pruned = copy_dataset(context)
    for _, _, entry in pruned.variants():
        for char in list(entry.data):
            if not _matches(char, entry.data[char], prop, wanted):
                del entry.data[char]
    return pruned


__all__ = [
    "LanguageMatches",
    "find_by_metadata",
    "filter_by_language",
    "merge_languages",
    "join_values",
    "copy_dataset",
    "select_by_data",
    "remove_non_matching_data",
]
