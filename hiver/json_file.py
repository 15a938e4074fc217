"""JSON file persistence shared by the local stores."""

import json
import os
from pathlib import Path
from typing import Any, Callable, TypeVar

from loguru import logger
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from hiver.errors import StoreUnavailable

T = TypeVar("T")


def load_json(filepath: str | None) -> Any:
    """Load a store file. Returns None when no file exists yet."""
    if not filepath or not Path(filepath).exists():
        return None
    try:
        with open(filepath, "r") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Failed to load store file {filepath}: {e}")
        raise StoreUnavailable(f"Could not read {filepath}") from e


def load_store(filepath: str | None, parse: Callable[[dict[str, Any]], T]) -> T | None:
    """Load a store file and build the store state from it with parse.

    Returns None when no file exists yet. Missing top-level keys are up to
    parse; records that do not match their model raise StoreUnavailable.
    """
    data = load_json(filepath)
    if data is None:
        return None
    try:
        return parse(data)
    except (AttributeError, KeyError, TypeError, ValidationError) as e:
        logger.error(f"Malformed store file {filepath}: {e}")
        raise StoreUnavailable(f"Could not parse {filepath}") from e


def dump_json(filepath: str, data: dict[str, Any]) -> None:
    """Write data to a sibling temp file and move it over filepath."""
    path = Path(filepath)
    tmp_path = path.with_name(f"{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w") as f:
            json.dump(data, f)
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error(f"Failed to write store file {filepath}: {e}")
        raise StoreUnavailable(f"Could not write {filepath}") from e


async def write_json(filepath: str, data: dict[str, Any]) -> None:
    """dump_json on a worker thread, so the event loop is not blocked by disk I/O."""
    await run_in_threadpool(dump_json, filepath, data)
