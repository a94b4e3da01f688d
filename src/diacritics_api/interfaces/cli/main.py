import argparse
import importlib
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

import colorlog
import yaml

from diacritics_api.core.enums import FilterKey
from diacritics_api.core.loader import is_url, load_dataset
from diacritics_api.core.models import Dataset, DatasetError, FilterMessage, to_payload
from diacritics_api.core.registry import run_filters
from diacritics_api.core.settings import Settings, load_settings

FILTER_KEY_CHOICES = [k.value for k in FilterKey]

try:
    from diacritics_api import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover - defensive fallback
    _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def parse_clause_args(items: Optional[List[str]]) -> List[Tuple[str, str]]:
    """Turn ``["language=de,fr", "base=a"]`` into ordered clauses.

    Raises:
        ValueError: If an item has no ``=`` or an empty key.
    """
    clauses: List[Tuple[str, str]] = []
    for item in items or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Expected KEY=VALUE, got: {item!r}")
        clauses.append((key, value))
    return clauses


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Load the settings file and apply command-line overrides."""
    config = getattr(args, "config", None)
    settings = load_settings(Path(config) if config else None)
    dataset = getattr(args, "dataset", None)
    if dataset and is_url(dataset):
        # An explicit URL wins over a dataset path from the settings file
        settings = replace(settings, dataset_url=dataset, dataset_path=None)
    elif dataset:
        settings = replace(settings, dataset_path=dataset)
    port = getattr(args, "port", None)
    return settings.with_overrides(
        host=getattr(args, "host", None),
        port=int(port) if port else None,
    )


def _load(settings: Settings) -> Optional[Dataset]:
    try:
        return load_dataset(settings.dataset_location, timeout_sec=settings.timeout_sec)
    except (FileNotFoundError, DatasetError) as e:
        logging.error("Failed to load dataset: %s", e)
        return None


def _prepare(args: argparse.Namespace) -> Tuple[int, Optional[Settings], List[Tuple[str, str]]]:
    try:
        clauses = parse_clause_args(getattr(args, "filters", None))
    except ValueError as e:
        logging.error("%s", e)
        return 2, None, []
    try:
        settings = resolve_settings(args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logging.error("Failed to load settings: %s", e)
        return 2, None, []
    return 0, settings, clauses


def cmd_query(args: argparse.Namespace) -> int:
    """Filter the dataset and print the JSON payload.

    Returns 0 for a dataset result and 1 when the engine answered with a
    message (unknown key, nothing found, ...).
    """
    code, settings, clauses = _prepare(args)
    if settings is None:
        return code
    dataset = _load(settings)
    if dataset is None:
        return 3

    result = run_filters(dataset, clauses)
    indent = None if getattr(args, "compact", False) else 2
    print(json.dumps(to_payload(result), ensure_ascii=False, indent=indent))
    if isinstance(result, FilterMessage):
        logging.warning("%s", result.message)
        return 1
    logging.info("Matched %d languages", len(result))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Filter the dataset and write a flattened CSV (one row per character)."""
    code, settings, clauses = _prepare(args)
    if settings is None:
        return code
    dataset = _load(settings)
    if dataset is None:
        return 3

    result = run_filters(dataset, clauses)
    if isinstance(result, FilterMessage):
        logging.warning("%s", result.message)
        return 1

    # pandas is only needed here, keep CLI startup light
    export_mod = importlib.import_module("diacritics_api.core.export")
    output = Path(args.output)
    try:
        rows = export_mod.write_csv(result, output)
    except OSError as e:
        logging.error("Failed writing CSV %s: %s", output, e)
        return 1
    logging.info("Saved CSV: %s (%d rows)", output, rows)
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Load the dataset, then serve the HTTP query route."""
    code, settings, _ = _prepare(args)
    if settings is None:
        return code
    from diacritics_api.core.store import DatasetStore
    from diacritics_api.interfaces.http.app import run

    dataset = _load(settings)
    if dataset is None:
        return 3
    try:
        run(DatasetStore(dataset), host=settings.host, port=settings.port)
    except KeyboardInterrupt:
        pass
    return 0


def cmd_mcp_server(args: argparse.Namespace) -> int:
    """Start the MCP server.

    Default: stdio. If --port is set, run HTTP transport at host:port.
    """
    code, settings, _ = _prepare(args)
    if settings is None:
        return code
    try:
        mcp_server = importlib.import_module("diacritics_api.interfaces.mcp.server")
    except (ModuleNotFoundError, AttributeError, ImportError, RuntimeError) as e:
        logging.error(
            "Failed to import MCP server. Ensure 'mcp' is installed. Error: %s",
            e,
        )
        return 3
    location = settings.dataset_location
    try:
        if getattr(args, "port", None):
            mcp_server.run_http(
                location,
                host=settings.host,
                port=settings.port,
                timeout_sec=settings.timeout_sec,
            )
        else:
            mcp_server.run(location, timeout_sec=settings.timeout_sec)
    except (FileNotFoundError, DatasetError) as e:
        logging.error("Failed to load dataset: %s", e)
        return 3
    except KeyboardInterrupt:
        pass
    return 0


def _add_filters_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "filters",
        nargs="*",
        metavar="KEY=VALUE",
        help=(
            "Filter clauses, applied left to right. Keys: "
            + ", ".join(FILTER_KEY_CHOICES)
            + ". Comma-separated values match any of them."
        ),
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="diacritics-api",
        description=f"Diacritics API (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to settings.yaml (defaults to config/settings.yaml when present)",
    )
    p.add_argument(
        "--dataset",
        default=None,
        help="Dataset JSON path or http(s) URL (overrides the settings file)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_query = sub.add_parser("query", help="Filter the dataset and print JSON")
    _add_filters_argument(p_query)
    p_query.add_argument("--compact", action="store_true", help="Print JSON on one line")
    p_query.set_defaults(func=cmd_query)

    p_export = sub.add_parser("export", help="Filter the dataset and write a CSV")
    _add_filters_argument(p_export)
    p_export.add_argument(
        "--output",
        required=True,
        help="CSV file to write (one row per diacritic)",
    )
    p_export.set_defaults(func=cmd_export)

    p_serve = sub.add_parser("serve", help="Run the HTTP query server")
    p_serve.add_argument("--host", default=None, help="Host to bind (default 127.0.0.1)")
    p_serve.add_argument("--port", default=None, help="Port to bind (default 8080)")
    p_serve.set_defaults(func=cmd_serve)

    p_mcp = sub.add_parser("mcp-server", help="Run minimal MCP server (stdio or HTTP)")
    p_mcp.add_argument(
        "--port",
        default=None,
        help="If set, run HTTP transport on the given port",
    )
    p_mcp.add_argument(
        "--host",
        default=None,
        help="Host to bind for HTTP transport (default 127.0.0.1)",
    )
    p_mcp.set_defaults(func=cmd_mcp_server)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
