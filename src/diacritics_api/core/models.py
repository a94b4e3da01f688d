"""Typed dataset model.

This module defines the in-memory shape of the diacritics database:
- Dataset: language code -> variant code -> VariantEntry
- VariantEntry: metadata plus the character table of one variant
- Metadata / MetadataValue: descriptive fields, each a string or a list of strings
- CharEntry: one diacritic with its mapping (base letter, decomposition)
- FilterMessage: in-band outcome returned instead of a dataset

The raw JSON form is only touched by `Dataset.from_dict()` and
`Dataset.to_dict()`; everything else works on the typed entities.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Set, Tuple, Union

from .config import BASE_PROPERTY, DECOMPOSE_PROPERTY
from .enums import FilterErrorKind


class DatasetError(ValueError):
    """Raised when raw data cannot be read as a diacritics dataset."""


@dataclass(frozen=True)
class MetadataValue:
    """A metadata field that is either a single string or a list of strings.

    Only string values take part in matching. Anything else (``null``,
    numbers, nested objects) leaves ``values`` empty, so the field never
    matches, and is still written back unchanged by ``to_raw()``.

    Attributes:
        values: The string value(s), in source order.
        multiple: True when the source value was a list (e.g. ``continent``).
        raw: The value as read from the database JSON.

    Examples:
        >>> MetadataValue.from_raw("Latn").matches({"latn"})
        True
        >>> MetadataValue.from_raw(["DE", "AT"]).to_raw()
        ['DE', 'AT']
        >>> MetadataValue.from_raw(None).values
        ()
    """

    values: Tuple[str, ...]
    multiple: bool = False
    raw: Any = field(default=None, compare=False)

    @classmethod
    def from_raw(cls, raw: Any) -> "MetadataValue":
        if isinstance(raw, (list, tuple)):
            values = tuple(v for v in raw if isinstance(v, str))
            return cls(values=values, multiple=True, raw=list(raw))
        if isinstance(raw, str):
            return cls(values=(raw,), multiple=False, raw=raw)
        return cls(values=(), multiple=False, raw=raw)

    def to_raw(self) -> Any:
        if self.raw is not None or not self.values:
            return copy.deepcopy(self.raw)
        if self.multiple:
            return list(self.values)
        return self.values[0]

    def matches(self, wanted: Set[str]) -> bool:
        """True if any value equals one of ``wanted`` (already lower-cased)."""
        return any(v.lower() in wanted for v in self.values)


@dataclass(frozen=True)
class Metadata:
    """Descriptive fields of a variant, keyed by field name."""

    fields: Dict[str, MetadataValue] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "Metadata":
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise DatasetError(f"metadata must be an object, got {type(raw).__name__}")
        return cls(fields={str(k): MetadataValue.from_raw(v) for k, v in raw.items()})

    def get(self, name: str) -> Optional[MetadataValue]:
        return self.fields.get(name)

    def to_raw(self) -> Dict[str, Any]:
        return {k: v.to_raw() for k, v in self.fields.items()}


@dataclass(frozen=True)
class CharEntry:
    """A single diacritic's mapping information.

    Attributes:
        mapping: Mapping properties, at least ``base`` and ``decompose``.
        extra: Any other per-character keys, kept verbatim.
        has_mapping: False when the source entry had no ``mapping`` key.
    """

    mapping: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)
    has_mapping: bool = True

    @classmethod
    def from_raw(cls, char: str, raw: Any) -> "CharEntry":
        if not isinstance(raw, Mapping):
            raise DatasetError(f"entry for {char!r} must be an object")
        mapping = raw.get("mapping", {})
        if not isinstance(mapping, Mapping):
            raise DatasetError(f"mapping for {char!r} must be an object")
        extra = {k: v for k, v in raw.items() if k != "mapping"}
        return cls(mapping=dict(mapping), extra=extra, has_mapping="mapping" in raw)

    @property
    def base(self) -> Optional[str]:
        return self.mapping.get(BASE_PROPERTY)

    @property
    def decompose(self) -> Optional[str]:
        return self.mapping.get(DECOMPOSE_PROPERTY)

    def to_raw(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        if self.has_mapping:
            out["mapping"] = dict(self.mapping)
        return out


@dataclass(frozen=True)
class VariantEntry:
    """Metadata and character table of one language variant.

    ``has_metadata`` / ``has_data`` record whether the source entry carried
    those keys; ``to_raw()`` writes them back only in that case. A ``null``
    metadata value is kept in ``extra`` as-is.
    """

    metadata: Metadata
    data: Dict[str, CharEntry]
    extra: Dict[str, Any] = field(default_factory=dict)
    has_metadata: bool = True
    has_data: bool = True

    @classmethod
    def from_raw(cls, where: str, raw: Any) -> "VariantEntry":
        if not isinstance(raw, Mapping):
            raise DatasetError(f"{where} must be an object")
        data = raw.get("data", {})
        if not isinstance(data, Mapping):
            raise DatasetError(f"{where}.data must be an object")
        metadata = raw.get("metadata")
        reserved = ("data",) if metadata is None else ("metadata", "data")
        extra = {k: v for k, v in raw.items() if k not in reserved}
        return cls(
            metadata=Metadata.from_raw(metadata),
            data={str(ch): CharEntry.from_raw(ch, e) for ch, e in data.items()},
            extra=extra,
            has_metadata=metadata is not None,
            has_data="data" in raw,
        )

    def to_raw(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.extra)
        if self.has_metadata:
            out["metadata"] = self.metadata.to_raw()
        if self.has_data:
            out["data"] = {ch: e.to_raw() for ch, e in self.data.items()}
        return out


@dataclass(frozen=True)
class Dataset:
    """Languages -> variants -> VariantEntry.

    A Dataset is treated as read-only once built. Filters always return a new
    Dataset; the only code that removes entries works on a fresh copy.
    """

    languages: Dict[str, Dict[str, VariantEntry]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Any) -> "Dataset":
        """Build a Dataset from the parsed database JSON.

        Raises:
            DatasetError: If the structure is not language -> variant -> entry.
        """
        if not isinstance(raw, Mapping):
            raise DatasetError(f"dataset must be an object, got {type(raw).__name__}")
        languages: Dict[str, Dict[str, VariantEntry]] = {}
        for lang, variants in raw.items():
            if not isinstance(variants, Mapping):
                raise DatasetError(f"language {lang!r} must map variant codes to entries")
            languages[str(lang)] = {
                str(variant): VariantEntry.from_raw(f"{lang}.{variant}", entry)
                for variant, entry in variants.items()
            }
        return cls(languages=languages)

    def to_dict(self) -> Dict[str, Any]:
        return {
            lang: {variant: entry.to_raw() for variant, entry in variants.items()}
            for lang, variants in self.languages.items()
        }

    def variants(self) -> Iterator[Tuple[str, str, VariantEntry]]:
        """Yield ``(language, variant, entry)`` for every variant."""
        for lang, variants in self.languages.items():
            for variant, entry in variants.items():
                yield lang, variant, entry

    def language_codes(self) -> List[str]:
        return list(self.languages)

    def is_empty(self) -> bool:
        return not self.languages

    def __len__(self) -> int:
        return len(self.languages)


@dataclass(frozen=True)
class FilterMessage:
    """In-band filter outcome used instead of a dataset.

    Attributes:
        message: User-facing text.
        kind: Which condition produced the message.
    """

    message: str
    kind: FilterErrorKind = FilterErrorKind.NO_MATCH

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message}


FilterResult = Union[Dataset, FilterMessage]


def to_payload(result: FilterResult) -> Dict[str, Any]:
    """Return the response body for a filter result.

    Either the (possibly narrowed) dataset structure or ``{"message": ...}``.
    """
    return result.to_dict()


def iter_char_entries(dataset: Dataset) -> Iterable[Tuple[str, str, str, CharEntry]]:
    """Yield ``(language, variant, character, entry)`` for every character."""
    for lang, variant, entry in dataset.variants():
        for char, char_entry in entry.data.items():
            yield lang, variant, char, char_entry
