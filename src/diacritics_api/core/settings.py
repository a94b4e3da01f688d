from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config import DEFAULT_DATASET_URL, DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT_SEC

DEFAULT_SETTINGS_PATH = Path("config/settings.yaml")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the CLI and servers.

    Attributes:
        dataset_url: Remote database JSON, used when ``dataset_path`` is unset.
        dataset_path: Local database JSON; takes precedence over the URL.
        timeout_sec: HTTP timeout for fetching the dataset.
        host: Bind address for the HTTP server.
        port: Port for the HTTP server.
    """

    dataset_url: str = DEFAULT_DATASET_URL
    dataset_path: Optional[str] = None
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @property
    def dataset_location(self) -> str:
        return self.dataset_path or self.dataset_url

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-None override applied."""
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{name}' section must be a mapping")
    return section


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from YAML; a missing default file yields defaults.

    Expected layout::

        dataset:
          url: https://git.io/vXN2T
          path: null
          timeout_sec: 60
        server:
          host: 127.0.0.1
          port: 8080

    Raises:
        FileNotFoundError: If an explicitly given file does not exist.
        ValueError: If a section or value has the wrong type.
        yaml.YAMLError: If the file is not valid YAML.
    """
    settings_file = path or DEFAULT_SETTINGS_PATH
    if not settings_file.exists():
        if path is not None:
            raise FileNotFoundError(f"Settings file not found: {settings_file}")
        logger.debug("No settings file at %s, using defaults", settings_file)
        return Settings()

    with settings_file.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {settings_file}")

    dataset = _section(data, "dataset")
    server = _section(data, "server")
    defaults = Settings()
    try:
        return Settings(
            dataset_url=str(dataset.get("url") or defaults.dataset_url),
            dataset_path=str(dataset["path"]) if dataset.get("path") else None,
            timeout_sec=float(dataset.get("timeout_sec", defaults.timeout_sec)),
            host=str(server.get("host") or defaults.host),
            port=int(server.get("port", defaults.port)),
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid settings in {settings_file}: {e}") from e
