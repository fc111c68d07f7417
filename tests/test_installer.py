import io
import sys

import pytest

from wasmpack.errors import WasmPackError
from wasmpack.installer import confirm_can_overwrite, install


class _TtyInput(io.StringIO):
    def isatty(self):
        return True


@pytest.fixture
def layout(tmp_path, monkeypatch):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    rustup = bin_dir / "rustup"
    rustup.write_text("rustup")
    exe = tmp_path / "wasm-pack-init"
    exe.write_bytes(b"new binary")
    monkeypatch.setattr(sys, "argv", [str(exe)])
    monkeypatch.setattr(sys, "stdin", io.StringIO("\n"))
    monkeypatch.setattr("wasmpack.installer.shutil.which", lambda name: str(rustup))
    return bin_dir


def _installed(bin_dir):
    return [p for p in bin_dir.iterdir() if p.name.startswith("wasm-pack")]


def test_force_flag_skips_prompt(tmp_path, monkeypatch, capsys):
    stdin = _TtyInput("n\n")
    monkeypatch.setattr(sys, "stdin", stdin)
    result = confirm_can_overwrite(tmp_path / "wasm-pack", ["-f"])
    assert result is None
    assert stdin.read() == "n\n"
    assert "would you like to overwrite" not in capsys.readouterr().err


def test_non_tty_without_force_raises(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO("y\n"))
    with pytest.raises(WasmPackError, match="pass `-f`"):
        confirm_can_overwrite(tmp_path / "wasm-pack", [])


@pytest.mark.parametrize("answer", ["y\n", "Yes\n"])
def test_yes_answer_allows_overwrite(tmp_path, monkeypatch, capsys, answer):
    stdin = _TtyInput(answer)
    monkeypatch.setattr(sys, "stdin", stdin)
    confirm_can_overwrite(tmp_path / "wasm-pack", [])
    assert stdin.read() == ""
    assert "would you like to overwrite this file?" in capsys.readouterr().err


@pytest.mark.parametrize("answer", ["n\n", "\n", ""])
def test_other_answer_aborts(tmp_path, monkeypatch, answer):
    monkeypatch.setattr(sys, "stdin", _TtyInput(answer))
    with pytest.raises(WasmPackError, match="aborting installation"):
        confirm_can_overwrite(tmp_path / "wasm-pack", [])


def test_install_copies_executable(layout, capsys):
    with pytest.raises(SystemExit) as exit_info:
        install([])
    assert exit_info.value.code == 0
    installed = _installed(layout)
    assert len(installed) == 1
    assert installed[0].read_bytes() == b"new binary"
    assert "successfully installed wasm-pack" in capsys.readouterr().out


def test_install_without_rustup_reports(layout, monkeypatch, capsys):
    monkeypatch.setattr("wasmpack.installer.shutil.which", lambda name: None)
    with pytest.raises(SystemExit) as exit_info:
        install([])
    assert exit_info.value.code == 0
    assert "failed to find an installation of `rustup`" in capsys.readouterr().err
    assert _installed(layout) == []


def test_install_refuses_to_overwrite_without_force(layout, capsys):
    with pytest.raises(SystemExit):
        install([])
    existing = _installed(layout)[0]
    existing.write_bytes(b"old binary")

    with pytest.raises(SystemExit):
        install([])
    assert existing.read_bytes() == b"old binary"
    assert "existing wasm-pack installation found" in capsys.readouterr().err


def test_install_overwrites_with_force(layout):
    with pytest.raises(SystemExit):
        install([])
    existing = _installed(layout)[0]
    existing.write_bytes(b"old binary")

    with pytest.raises(SystemExit):
        install(["-f"])
    assert existing.read_bytes() == b"new binary"