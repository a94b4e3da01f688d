"""HTTP transport for the filter engine.

``GET /?language=de&base=a`` maps each query parameter to one clause and
returns the engine payload as JSON. Engine outcomes (datasets and messages)
are always returned with status 200; only a missing dataset or an unmatched
request (any other path, or a non-GET method) produce error statuses.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Tuple

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from diacritics_api.core.models import to_payload
from diacritics_api.core.registry import run_filters
from diacritics_api.core.store import DatasetStore

logger = logging.getLogger(__name__)

NOT_FOUND_TEXT = "Sorry, something went wrong"
NOT_LOADED_MESSAGE = "Dataset not loaded"


def group_query_items(items: Iterable[Tuple[str, str]]) -> List[Tuple[str, List[str]]]:
    """Group repeated query parameters, keeping first-seen key order."""
    grouped: Dict[str, List[str]] = {}
    for key, value in items:
        grouped.setdefault(key, []).append(value)
    return list(grouped.items())


def query_payload(store: DatasetStore, items: Iterable[Tuple[str, str]]) -> Tuple[int, Dict[str, Any]]:
    """Run the query for raw query-string items and return ``(status, body)``."""
    if not store.loaded:
        return 503, {"message": NOT_LOADED_MESSAGE}
    result = run_filters(store.current(), group_query_items(items))
    return 200, to_payload(result)


def create_app(store: DatasetStore) -> Starlette:
    """Build the ASGI application serving ``store``."""

    async def filter_endpoint(request: Request) -> Response:
        status, body = query_payload(store, request.query_params.multi_items())
        return JSONResponse(body, status_code=status)

    async def not_found(request: Request, exc: Exception) -> Response:
        logger.debug("No route for %s", request.url.path)
        return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)

    return Starlette(
        routes=[Route("/", filter_endpoint, methods=["GET"])],
        exception_handlers={404: not_found, 405: not_found},
    )


def run(store: DatasetStore, *, host: str, port: int) -> None:
    """Serve the application with uvicorn (blocking)."""
    logger.info("Server started: http://%s:%d", host, port)
    uvicorn.run(create_app(store), host=host, port=int(port), log_level="info")
