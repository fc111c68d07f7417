"""Key-value store kept in a ``*.stamps`` JSON file next to the executable."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from .errors import WasmPackError


def get_stamp_value(key: str, data: Any) -> str:
    """Return the string stored under ``key`` in the parsed stamps data."""
    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, str):
        raise WasmPackError(f"cannot get stamp value for key '{key}'")
    return value


def get_stamps_file_path() -> Path:
    """Return the path of the stamps file used as the store."""
    try:
        exe = Path(sys.argv[0]).resolve()
        return exe.with_suffix(".stamps")
    except (IndexError, ValueError, OSError) as exc:
        raise WasmPackError("cannot get stamps file path") from exc


def read_stamps_file_to_json() -> Any:
    """Read the stamps file and return its parsed JSON content."""
    path = get_stamps_file_path()
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WasmPackError("cannot find or read stamps file") from exc
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise WasmPackError("stamps file doesn't contain valid JSON") from exc


def save_stamp_value(key: str, value: str) -> None:
    """Store ``value`` under ``key``, keeping the other entries."""
    try:
        data = read_stamps_file_to_json()
    except WasmPackError:
        data = {}
    if not isinstance(data, dict):
        raise WasmPackError("stamps file doesn't contain JSON object")
    data[key] = value
    _write_stamps_file(data)


def _write_stamps_file(data: dict) -> None:
    path = get_stamps_file_path()
    try:
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as exc:
        raise WasmPackError("cannot write to stamps file") from exc