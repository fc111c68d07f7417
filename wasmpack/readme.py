"""Copying the crate's README into the output package directory."""

from __future__ import annotations

import shutil
from pathlib import Path

from .errors import WasmPackError
from .progressbar import PBAR


def copy_from_crate(path: Path | str, out_dir: Path | str) -> None:
    """Copy ``README.md`` from the crate directory into ``out_dir``."""
    path = Path(path)
    out_dir = Path(out_dir)
    if not path.is_dir():
        raise ValueError("crate directory should exist")
    if not out_dir.is_dir():
        raise ValueError("crate's pkg directory should exist")

    crate_readme = path / "README.md"
    if crate_readme.exists():
        try:
            shutil.copyfile(crate_readme, out_dir / "README.md")
        except OSError as exc:
            raise WasmPackError("failed to copy README") from exc
    else:
        PBAR.warn("origin crate has no README")