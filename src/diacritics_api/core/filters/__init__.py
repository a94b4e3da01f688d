"""Filter operations base interface.

This module defines the protocol (interface) that all filter operations must
implement. Each operation narrows a dataset by one criterion (a language, an
alphabet, a base character, ...).

To implement a new filter:

1. Add a member to `FilterKey` in core/enums.py and a kind label in core/config.py
2. Define a class that implements the FilterOperation protocol
3. Add an instance to FILTER_REGISTRY in core/registry.py

Example:
    ```python
    # filters/my_filter.py
    from typing import List
    from diacritics_api.core.enums import FilterKey
    from diacritics_api.core.models import Dataset, FilterResult

    class MyFilter:
        key = FilterKey.LANGUAGE

        def apply(self, values: List[str], context: Dataset) -> FilterResult:
            # Narrowing logic here
            return context
    ```
"""

from __future__ import annotations

from typing import List, Protocol

from ..enums import FilterKey
from ..models import Dataset, FilterResult


class FilterOperation(Protocol):
    """Protocol defining the interface for filter operations.

    Attributes:
        key: The filter key this operation is registered under.

    Methods:
        apply: Narrow a context by a list of acceptable values.
    """

    key: FilterKey

    def apply(self, values: List[str], context: Dataset) -> FilterResult:
        """Run the filter.

        Args:
            values: Acceptable values, already trimmed and lower-cased. Any of
                them may match (logical OR).
            context: Dataset to narrow; the full database or the result of a
                previous filter.

        Returns:
            A new, narrowed Dataset, or a FilterMessage naming the requested
            values when nothing matched. The context is never modified.
        """
        ...


from .characters import BaseFilter, CharacterFilter, DecomposeFilter, DiacriticFilter  # noqa: E402
from .language import LanguageFilter, VariantFilter  # noqa: E402
from .metadata import AlphabetFilter, ContinentFilter, CountryFilter, MetadataFilter  # noqa: E402

__all__ = [
    "FilterOperation",
    "LanguageFilter",
    "VariantFilter",
    "MetadataFilter",
    "AlphabetFilter",
    "ContinentFilter",
    "CountryFilter",
    "CharacterFilter",
    "DiacriticFilter",
    "BaseFilter",
    "DecomposeFilter",
]
