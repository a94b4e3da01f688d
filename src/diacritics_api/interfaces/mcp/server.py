"""
Minimal MCP server exposing the diacritics filter engine.

Tools:
 - filter_diacritics
 - list_languages
 - reload_dataset

In HTTP mode the plain ``GET /`` query route is served next to the MCP
endpoint.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any, Dict, Optional

from diacritics_api.core.config import (
    DEFAULT_MCP_PORT,
    DEFAULT_TIMEOUT_SEC,
    LANGUAGE_FIELD,
    LANGUAGE_NATIVE_FIELD,
)
from diacritics_api.core.models import DatasetError, to_payload
from diacritics_api.core.registry import run_filters
from diacritics_api.core.store import DatasetStore
from diacritics_api.interfaces.http.app import query_payload

try:
    from mcp.server.fastmcp import FastMCP
except Exception as exc:
    raise RuntimeError(
        "The 'mcp' package is required for the MCP server. Install with: pip install mcp"
    ) from exc

from starlette.requests import Request
from starlette.responses import JSONResponse, Response


# Global configuration
_STORE = DatasetStore()
_LOCATION: Optional[str] = None
_TIMEOUT_SEC: float = DEFAULT_TIMEOUT_SEC
_SERVER = FastMCP("diacritics-api")

# Configure logging for MCP server
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr)  # MCP uses stdout for protocol
    ],
)
logger = logging.getLogger(__name__)


@_SERVER.tool("filter_diacritics")
async def filter_diacritics(filters: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Filter the diacritics database.

    Keys: language, variant, alphabet, continent, country, diacritic, base,
    decompose. Values may be comma-separated (any of them matches); keys are
    combined (all of them must match). Returns the narrowed database or
    {"message": ...}.
    """
    if not _STORE.loaded:
        return {"message": "Dataset not loaded"}
    result = run_filters(_STORE.current(), list((filters or {}).items()))
    return to_payload(result)


@_SERVER.tool("list_languages")
async def list_languages() -> Dict[str, Any]:
    """Return language codes with their variant codes and names."""
    if not _STORE.loaded:
        return {"message": "Dataset not loaded"}
    out: Dict[str, Any] = {}
    for lang, variant, entry in _STORE.current().variants():
        name = entry.metadata.get(LANGUAGE_FIELD)
        native = entry.metadata.get(LANGUAGE_NATIVE_FIELD)
        info = out.setdefault(
            lang,
            {
                "language": name.values[0] if name and name.values else None,
                "language_native": native.values[0] if native and native.values else None,
                "variants": [],
            },
        )
        info["variants"].append(variant)
    return {"languages": out, "total_languages": len(out)}


@_SERVER.tool("reload_dataset")
async def reload_dataset(location: Optional[str] = None) -> Dict[str, Any]:
    """Reload the dataset from ``location`` (or the startup location) and swap it in."""
    target = location or _LOCATION
    if not target:
        return {"error": "No dataset location configured"}
    try:
        dataset = _STORE.reload(target, timeout_sec=_TIMEOUT_SEC)
    except (FileNotFoundError, DatasetError) as e:
        logger.error("Error in reload_dataset: %s", e)
        return {"error": str(e)}
    return {"location": target, "total_languages": len(dataset)}


@_SERVER.custom_route("/", methods=["GET"])
async def query_route(request: Request) -> Response:
    status, body = query_payload(_STORE, request.query_params.multi_items())
    return JSONResponse(body, status_code=status)


def _load(location: str, timeout_sec: float) -> None:
    global _LOCATION, _TIMEOUT_SEC
    _LOCATION = location
    _TIMEOUT_SEC = timeout_sec
    dataset = _STORE.reload(location, timeout_sec=timeout_sec)
    logger.info("Dataset ready: %d languages", len(dataset))


def run(location: str, *, timeout_sec: float = DEFAULT_TIMEOUT_SEC) -> None:
    """Run MCP server over stdio."""
    logger.info("Starting MCP server with dataset: %s", location)
    _load(location, timeout_sec)
    asyncio.run(_SERVER.run_stdio_async())


async def _run_http(host: str, port: int) -> None:
    """Start HTTP server with explicit uvicorn configuration."""
    import uvicorn

    app = _SERVER.streamable_http_app()
    config = uvicorn.Config(
        app,
        host=host,
        port=int(port),
        log_level="info",
    )
    server = uvicorn.Server(config)
    await server.serve()


def run_http(
    location: str,
    *,
    host: str = "127.0.0.1",
    port: int = DEFAULT_MCP_PORT,
    timeout_sec: float = DEFAULT_TIMEOUT_SEC,
) -> None:
    """Run MCP server over HTTP."""
    logger.info("Starting HTTP MCP server on %s:%d", host, port)
    _load(location, timeout_sec)
    asyncio.run(_run_http(host, port))
