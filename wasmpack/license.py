"""Copying the crate's license file(s) into the output package directory."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Any

from .progressbar import PBAR

_NO_LICENSE = "origin crate has no LICENSE"


def glob_license_files(path: Path | str) -> list[str]:
    """Return the names of the entries in ``path`` whose names start with LICENSE."""
    return sorted(entry.name for entry in Path(path).glob("LICENSE*"))


def _copy_or_report(source: Path, destination: Path) -> None:
    try:
        shutil.copyfile(source, destination)
    except OSError:
        PBAR.info(_NO_LICENSE)


def copy_from_crate(crate_data: Any, path: Path | str, out_dir: Path | str) -> None:
    """Copy the crate's license file(s) into ``out_dir``.

    With a ``license`` key every ``LICENSE*`` file in the crate directory is
    copied; otherwise the file named by ``license-file`` is copied, if any.
    """
    path = Path(path)
    out_dir = Path(out_dir)
    if not path.is_dir():
        raise ValueError("crate directory should exist")
    if not out_dir.is_dir():
        raise ValueError("crate's pkg directory should exist")

    license_name = crate_data.crate_license()
    license_file = crate_data.crate_license_file()

    if license_name is not None:
        try:
            files = glob_license_files(path)
        except OSError:
            PBAR.info(_NO_LICENSE)
            return
        if not files:
            PBAR.info(
                "License key is set in Cargo.toml but no LICENSE file(s) were found; "
                "Please add the LICENSE file(s) to your project directory"
            )
            return
        for name in files:
            _copy_or_report(path / name, out_dir / name)
    elif license_file is not None:
        _copy_or_report(path / license_file, out_dir / license_file)