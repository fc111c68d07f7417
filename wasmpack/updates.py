"""Looking up the latest wasm-pack release, at most once a day."""

from __future__ import annotations

import json
import sys
import urllib.error
import urllib.request
from datetime import datetime
from importlib import metadata
from pathlib import Path

from .errors import WasmPackError

CRATES_IO_URL = "https://crates.io/api/v1/crates/wasm-pack"
_CHECK_INTERVAL_HOURS = 24
_TIMEOUT_SECONDS = 30


def _local_version() -> str:
    try:
        return metadata.version("wasmpack")
    except metadata.PackageNotFoundError:
        return "unknown"


def stamp_file_value(contents: str, word: str) -> str | None:
    """Return the value on the first line of ``contents`` starting with ``word``."""
    line = next((line for line in contents.splitlines() if line.startswith(word)), None)
    if line is None:
        return None
    parts = line.split()
    return parts[1] if len(parts) > 1 else None


def fetch_latest_version() -> str:
    """Ask crates.io for the newest published wasm-pack version."""
    request = urllib.request.Request(
        CRATES_IO_URL, headers={"User-Agent": f"wasm-pack/{_local_version()}"}
    )
    try:
        with urllib.request.urlopen(request, timeout=_TIMEOUT_SECONDS) as response:
            status = response.status
            body = response.read()
    except urllib.error.HTTPError as exc:
        status, body = exc.code, b""
    except (urllib.error.URLError, OSError) as exc:
        raise WasmPackError(f"failed to reach {CRATES_IO_URL}") from exc

    if not 200 <= status < 300:
        raise WasmPackError(
            f"Received a bad HTTP status code ({status}) when checking for newer "
            f"wasm-pack version at: {CRATES_IO_URL}"
        )
    try:
        version = json.loads(body.decode("utf-8", errors="replace"))["crate"]["max_version"]
    except (json.JSONDecodeError, KeyError, TypeError) as exc:
        raise WasmPackError("unexpected response from crates.io") from exc
    if not isinstance(version, str):
        raise WasmPackError("unexpected response from crates.io")
    return version


def _stamp_path() -> Path:
    return Path(sys.argv[0]).resolve().with_suffix(".stamp")


def _read_stamp_file() -> str | None:
    try:
        return _stamp_path().read_text(encoding="utf-8")
    except (OSError, ValueError):
        return None


def _override_stamp_file(now: datetime, version: str | None) -> None:
    text = f"created {now.isoformat()}"
    if version is not None:
        text += f"\nversion {version}"
    try:
        _stamp_path().write_text(text, encoding="utf-8")
    except (OSError, ValueError):
        pass


def _fetch_and_stamp(now: datetime) -> str:
    # The stamp is rewritten even on failure so that a failing check is
    # also retried only once a day.
    try:
        version = fetch_latest_version()
    except WasmPackError:
        _override_stamp_file(now, None)
        raise
    _override_stamp_file(now, version)
    return version


def _parse_time(text: str) -> datetime | None:
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    return moment if moment.tzinfo is not None else None


def latest_wasm_pack_version() -> str | None:
    """Return the latest wasm-pack version, from the stamp file when recent."""
    now = datetime.now().astimezone()
    contents = _read_stamp_file()
    if contents is None:
        return _fetch_and_stamp(now)

    created = stamp_file_value(contents, "created")
    last_updated = _parse_time(created) if created is not None else None
    if last_updated is None:
        return None

    hours = int((now - last_updated).total_seconds() / 3600)
    if hours > _CHECK_INTERVAL_HOURS:
        return _fetch_and_stamp(now)
    return stamp_file_value(contents, "version")