import json
import sys
import urllib.error
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from wasmpack.errors import WasmPackError
from wasmpack.updates import (
    fetch_latest_version,
    latest_wasm_pack_version,
    stamp_file_value,
)


class _Response:
    def __init__(self, body, status=200):
        self._body = body
        self.status = status

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def _crate_body(version):
    return json.dumps({"crate": {"max_version": version}}).encode()


@pytest.fixture
def stamp(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "wasm-pack")])
    return tmp_path / "wasm-pack.stamp"


def test_stamp_file_value_finds_word():
    contents = "created 2020-01-01T00:00:00+00:00\nversion 0.9.1"
    assert stamp_file_value(contents, "version") == "0.9.1"
    assert stamp_file_value(contents, "created") == "2020-01-01T00:00:00+00:00"


def test_stamp_file_value_missing():
    assert stamp_file_value("created now", "version") is None
    assert stamp_file_value("version", "version") is None


def test_fetch_latest_version_reads_max_version():
    with patch("urllib.request.urlopen", return_value=_Response(_crate_body("0.9.1"))) as opened:
        assert fetch_latest_version() == "0.9.1"
    request = opened.call_args.args[0]
    assert request.full_url == "https://crates.io/api/v1/crates/wasm-pack"


def test_fetch_latest_version_bad_status():
    error = urllib.error.HTTPError("u", 500, "err", hdrs=None, fp=None)
    with patch("urllib.request.urlopen", side_effect=error):
        with pytest.raises(WasmPackError, match=r"bad HTTP status code \(500\)"):
            fetch_latest_version()


def test_fetch_latest_version_bad_json():
    with patch("urllib.request.urlopen", return_value=_Response(b"{}")):
        with pytest.raises(WasmPackError):
            fetch_latest_version()


def test_fresh_stamp_is_used_without_fetching(stamp):
    created = datetime.now().astimezone().isoformat()
    stamp.write_text(f"created {created}\nversion 0.8.0")
    with patch("urllib.request.urlopen") as opened:
        assert latest_wasm_pack_version() == "0.8.0"
    assert opened.call_count == 0


def test_stale_stamp_triggers_fetch_and_rewrite(stamp):
    created = (datetime.now().astimezone() - timedelta(days=2)).isoformat()
    stamp.write_text(f"created {created}\nversion 0.8.0")
    with patch("urllib.request.urlopen", return_value=_Response(_crate_body("0.9.1"))):
        assert latest_wasm_pack_version() == "0.9.1"
    assert stamp_file_value(stamp.read_text(), "version") == "0.9.1"


def test_missing_stamp_fetches_and_creates_it(stamp):
    with patch("urllib.request.urlopen", return_value=_Response(_crate_body("0.9.1"))):
        assert latest_wasm_pack_version() == "0.9.1"
    contents = stamp.read_text()
    created = stamp_file_value(contents, "created")
    assert datetime.fromisoformat(created).tzinfo is not None


def test_unparseable_stamp_time_gives_none(stamp):
    stamp.write_text("created yesterday\nversion 0.8.0")
    with patch("urllib.request.urlopen") as opened:
        assert latest_wasm_pack_version() is None
    assert opened.call_count == 0


def test_failed_fetch_still_writes_stamp(stamp):
    error = urllib.error.URLError("offline")
    with patch("urllib.request.urlopen", side_effect=error):
        with pytest.raises(WasmPackError):
            latest_wasm_pack_version()
    contents = stamp.read_text()
    assert stamp_file_value(contents, "version") is None
    assert stamp_file_value(contents, "created") is not None and contents.startswith("created ")