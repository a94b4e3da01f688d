"""Character-level filters (diacritic, base, decompose).

These filters work in two phases. First the variants that contain at least
one matching character are selected and the context is narrowed to them.
Then a copy of the narrowed context is pruned so that only the matching
characters remain in each character table.
"""

from __future__ import annotations

from typing import List, Optional

from ..config import BASE_PROPERTY, DECOMPOSE_PROPERTY
from ..enums import FilterKey
from ..lookup import filter_by_language, remove_non_matching_data, select_by_data
from ..models import Dataset, FilterResult
from ._common import not_found


class CharacterFilter:
    """Keep characters whose ``prop`` value (or the character itself) is requested.

    Args:
        key: Filter key the instance is registered under.
        prop: Mapping property to compare; None compares the diacritic key.
    """

    def __init__(self, key: FilterKey, prop: Optional[str] = None) -> None:
        self.key = key
        self.prop = prop

    def apply(self, values: List[str], context: Dataset) -> FilterResult:
        matches = select_by_data(values, context, self.prop)
        if not matches:
            return not_found(self.key, values)
        narrowed = filter_by_language(matches, context)
        return remove_non_matching_data(values, narrowed, self.prop)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key={self.key.value!r}, prop={self.prop!r})"


class DiacriticFilter(CharacterFilter):
    def __init__(self) -> None:
        super().__init__(FilterKey.DIACRITIC)


class BaseFilter(CharacterFilter):
    def __init__(self) -> None:
        super().__init__(FilterKey.BASE, BASE_PROPERTY)


class DecomposeFilter(CharacterFilter):
    def __init__(self) -> None:
        super().__init__(FilterKey.DECOMPOSE, DECOMPOSE_PROPERTY)
