from __future__ import annotations

from typing import Iterable

from ..config import NOT_FOUND_TEMPLATE, get_filter_kind
from ..enums import FilterErrorKind, FilterKey
from ..lookup import join_values
from ..models import FilterMessage


def not_found(key: FilterKey, values: Iterable[str]) -> FilterMessage:
    """Message quoting the requested values, e.g. "Languages 'xx' weren't found"."""
    return FilterMessage(
        message=NOT_FOUND_TEMPLATE.format(kind=get_filter_kind(key), values=join_values(values)),
        kind=FilterErrorKind.NO_MATCH,
    )
