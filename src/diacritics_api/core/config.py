"""Engine configuration constants.

This module centralizes the metadata field names the filters look at and the
user-facing message templates. Adjust the field names here if the upstream
database renames a metadata property.

Message kinds:
    - "<Kind> '<v1>', '<v2>' weren't found": a filter matched nothing
    - "Invalid filter parameter '<key>'": the clause key is not registered
    - "No values for parameter '<key>' provided": the clause value was empty
"""

from __future__ import annotations

from typing import Dict

from .enums import FilterKey

# ============================================================================
# METADATA FIELD NAMES
# ============================================================================

LANGUAGE_FIELD = "language"
LANGUAGE_NATIVE_FIELD = "languageNative"
VARIANT_FIELD = "variant"
VARIANT_NATIVE_FIELD = "variantNative"
ALPHABET_FIELD = "alphabet"  # ISO 15924, e.g. Latn
CONTINENT_FIELD = "continent"  # ISO 3166 continent code(s), e.g. EU
COUNTRY_FIELD = "country"

# Character mapping properties
BASE_PROPERTY = "base"
DECOMPOSE_PROPERTY = "decompose"


# ============================================================================
# MESSAGES
# ============================================================================

NOT_FOUND_TEMPLATE = "{kind} {values} weren't found"
INVALID_PARAMETER_TEMPLATE = "Invalid filter parameter '{key}'"
NO_VALUES_TEMPLATE = "No values for parameter '{key}' provided"
NO_ENTRIES_MESSAGE = "No entries found"
INVALID_RESPONSE_MESSAGE = "Invalid filter response"

# Kind label per filter, used in not-found messages
FILTER_KINDS: Dict[FilterKey, str] = {
    FilterKey.LANGUAGE: "Languages",
    FilterKey.VARIANT: "Variants",
    FilterKey.ALPHABET: "Alphabets",
    FilterKey.CONTINENT: "Continents",
    FilterKey.COUNTRY: "Countries",
    FilterKey.DIACRITIC: "Diacritics",
    FilterKey.BASE: "Bases",
    FilterKey.DECOMPOSE: "Decomposes",
}


# ============================================================================
# SHELL DEFAULTS
# ============================================================================

DEFAULT_DATASET_URL = "https://git.io/vXN2T"
DEFAULT_TIMEOUT_SEC = 60.0
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_MCP_PORT = 8765


def get_filter_kind(key: FilterKey) -> str:
    """Get the plural label used in not-found messages for a filter.

    Args:
        key: Registered filter key.

    Returns:
        Capitalized plural label, e.g. "Languages".

    Raises:
        ValueError: If the key has no label configured.

    Examples:
        >>> get_filter_kind(FilterKey.BASE)
        'Bases'
    """
    if key not in FILTER_KINDS:
        raise ValueError(f"Unknown filter key: {key}")
    return FILTER_KINDS[key]
