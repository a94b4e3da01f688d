"""Filters that match a single metadata field (alphabet, continent, country)."""

from __future__ import annotations

from typing import List

from ..config import ALPHABET_FIELD, CONTINENT_FIELD, COUNTRY_FIELD
from ..enums import FilterKey
from ..lookup import filter_by_language, find_by_metadata
from ..models import Dataset, FilterResult
from ._common import not_found


class MetadataFilter:
    """Keep variants whose metadata ``field`` equals any requested value."""

    def __init__(self, key: FilterKey, field: str) -> None:
        self.key = key
        self.field = field

    def apply(self, values: List[str], context: Dataset) -> FilterResult:
        matches = find_by_metadata(self.field, values, context)
        if not matches:
            return not_found(self.key, values)
        return filter_by_language(matches, context)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key.value!r}, field={self.field!r})"


class AlphabetFilter(MetadataFilter):
    """ISO 15924 script code, e.g. ``Latn``."""

    def __init__(self) -> None:
        super().__init__(FilterKey.ALPHABET, ALPHABET_FIELD)


class ContinentFilter(MetadataFilter):
    """ISO 3166 continent code, e.g. ``EU``."""

    def __init__(self) -> None:
        super().__init__(FilterKey.CONTINENT, CONTINENT_FIELD)


class CountryFilter(MetadataFilter):
    def __init__(self) -> None:
        super().__init__(FilterKey.COUNTRY, COUNTRY_FIELD)
