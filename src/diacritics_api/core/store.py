"""Shared holder for the loaded dataset.

The dataset is never modified after it is built. Reloading builds a complete
new Dataset first and then replaces the reference in one assignment, so a
request either sees the old snapshot or the new one.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_TIMEOUT_SEC
from .loader import load_dataset
from .models import Dataset

logger = logging.getLogger(__name__)


class DatasetStore:
    """Single swappable reference to the read-only dataset."""

    def __init__(self, dataset: Optional[Dataset] = None) -> None:
        self._dataset = dataset
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._dataset is not None

    def current(self) -> Dataset:
        """Return the current snapshot.

        Raises:
            RuntimeError: If no dataset has been loaded yet.
        """
        dataset = self._dataset
        if dataset is None:
            raise RuntimeError("Dataset not loaded")
        return dataset

    def swap(self, dataset: Dataset) -> Optional[Dataset]:
        """Replace the snapshot and return the previous one."""
        with self._lock:
            previous = self._dataset
            self._dataset = dataset
        logger.debug("Dataset swapped (%d languages)", len(dataset))
        return previous

    def reload(
        self, location: Union[str, Path], *, timeout_sec: float = DEFAULT_TIMEOUT_SEC
    ) -> Dataset:
        """Load ``location`` and swap it in. The old snapshot stays on failure."""
        dataset = load_dataset(location, timeout_sec=timeout_sec)
        self.swap(dataset)
        return dataset
