from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

import httpx

from .config import DEFAULT_TIMEOUT_SEC
from .models import Dataset, DatasetError

logger = logging.getLogger(__name__)


def is_url(location: Union[str, Path]) -> bool:
    return str(location).startswith(("http://", "https://"))


def load_dataset_file(path: Path) -> Dataset:
    """Read and parse a database JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        DatasetError: If the file is not valid JSON or not dataset-shaped.
    """
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise DatasetError(f"Failed to parse dataset JSON {path}: {e}") from e
    dataset = Dataset.from_dict(raw)
    logger.info("Loaded %d languages from %s", len(dataset), path)
    return dataset


def fetch_dataset(
    url: str,
    *,
    timeout_sec: float = DEFAULT_TIMEOUT_SEC,
    client: Optional[httpx.Client] = None,
) -> Dataset:
    """Download and parse the database JSON from ``url``.

    Redirects are followed (the default URL is a short link).

    Raises:
        DatasetError: On HTTP errors, invalid JSON or an invalid structure.
    """
    own_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout_sec, follow_redirects=True)
    try:
        logger.info("Fetching dataset from %s", url)
        response = client.get(url)
        response.raise_for_status()
        raw = response.json()
    except httpx.HTTPError as e:
        raise DatasetError(f"Failed to fetch dataset from {url}: {e}") from e
    except ValueError as e:
        raise DatasetError(f"Dataset at {url} is not valid JSON: {e}") from e
    finally:
        if own_client:
            client.close()
    dataset = Dataset.from_dict(raw)
    logger.info("Loaded %d languages from %s", len(dataset), url)
    return dataset


def load_dataset(
    location: Union[str, Path], *, timeout_sec: float = DEFAULT_TIMEOUT_SEC
) -> Dataset:
    """Load a dataset from a local path or an http(s) URL."""
    if is_url(location):
        return fetch_dataset(str(location), timeout_sec=timeout_sec)
    return load_dataset_file(Path(location))
