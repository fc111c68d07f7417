"""Self-installation of the running executable as ``wasm-pack``."""

from __future__ import annotations

import os
import shutil
import sys
from pathlib import Path
from typing import NoReturn, Sequence

from .errors import WasmPackError

_EXE_SUFFIX = ".exe" if os.name == "nt" else ""


def _report(error: BaseException) -> None:
    print(error, file=sys.stderr)
    cause = error.__cause__
    while cause is not None:
        print(f"Caused by: {cause}", file=sys.stderr)
        cause = cause.__cause__


def install(argv: Sequence[str] | None = None) -> NoReturn:
    """Install the running executable next to ``rustup``, then exit with status 0."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        _do_install(args)
    except WasmPackError as exc:
        _report(exc)

    # A console window opened for the installer would vanish at once on exit.
    if os.name == "nt":
        print("Press enter to close this window...")
        try:
            sys.stdin.readline()
        except OSError:
            pass

    raise SystemExit(0)


def _do_install(args: list[str]) -> None:
    rustup = shutil.which("rustup")
    if rustup is None:
        raise WasmPackError(
            "failed to find an installation of `rustup` in `PATH`, "
            "is rustup already installed?"
        )
    rustup_path = Path(rustup)
    installation_dir = rustup_path.parent
    if installation_dir == rustup_path:
        raise WasmPackError("can't install when `rustup` is at the root of the filesystem")
    destination = installation_dir / f"wasm-pack{_EXE_SUFFIX}"

    if destination.exists():
        confirm_can_overwrite(destination, args)

    me = Path(sys.argv[0]).resolve()
    try:
        shutil.copy(me, destination)
    except OSError as exc:
        raise WasmPackError(f"failed to copy executable to `{destination}`") from exc
    print(f"info: successfully installed wasm-pack to `{destination}`")


def confirm_can_overwrite(dst: Path | str, argv: Sequence[str] | None = None) -> None:
    """Raise unless overwriting ``dst`` is forced with ``-f`` or confirmed by the user."""
    args = list(sys.argv[1:] if argv is None else argv)
    if "-f" in args:
        return

    if not sys.stdin.isatty():
        raise WasmPackError(
            f"existing wasm-pack installation found at `{dst}`, pass `-f` to "
            "force installation over this file, otherwise aborting "
            "installation now"
        )

    print(f"info: existing wasm-pack installation found at `{dst}`", file=sys.stderr)
    print("info: would you like to overwrite this file? [y/N]: ", end="", file=sys.stderr)
    sys.stderr.flush()
    try:
        line = sys.stdin.readline()
    except OSError as exc:
        raise WasmPackError("failed to read stdin") from exc

    if line.startswith(("y", "Y")):
        return
    raise WasmPackError("aborting installation")