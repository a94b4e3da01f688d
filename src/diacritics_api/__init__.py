"""Diacritics API: query engine over the diacritics language database.

The `core` package holds the filter engine and the typed dataset model.
The `interfaces` package wires it to a CLI, an HTTP route and an MCP server.
"""

__all__ = [
    "__version__",
]

__version__ = "0.2.0"
