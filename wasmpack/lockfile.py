"""Reading the ``Cargo.lock`` file of a crate's workspace."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import WasmPackError


@dataclass(frozen=True)
class _Package:
    name: str
    version: str


@dataclass
class Lockfile:
    """The package entries of a ``Cargo.lock`` file."""

    packages: list[_Package] = field(default_factory=list)

    @classmethod
    def from_crate(cls, crate_data: Any) -> Lockfile:
        """Read the ``Cargo.lock`` at the root of the crate's workspace."""
        path = Path(crate_data.workspace_root()) / "Cargo.lock"
        if not path.is_file():
            raise WasmPackError(f'Could not find lockfile at "{path}"')
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise WasmPackError(f"failed to read: {path}") from exc
        try:
            return cls._parse(text)
        except (tomllib.TOMLDecodeError, ValueError) as exc:
            raise WasmPackError(f"failed to parse: {path}") from exc

    @classmethod
    def _parse(cls, text: str) -> Lockfile:
        data = tomllib.loads(text)
        entries = data.get("package")
        if not isinstance(entries, list):
            raise ValueError("missing field `package`")
        packages = []
        for entry in entries:
            if not isinstance(entry, dict):
                raise ValueError("package entry is not a table")
            name, version = entry.get("name"), entry.get("version")
            if not isinstance(name, str) or not isinstance(version, str):
                raise ValueError("package entry needs a string `name` and `version`")
            packages.append(_Package(name, version))
        return cls(packages)

    def _package_version(self, name: str) -> str | None:
        return next((pkg.version for pkg in self.packages if pkg.name == name), None)

    def wasm_bindgen_version(self) -> str | None:
        """Return the locked version of ``wasm-bindgen``, if any."""
        return self._package_version("wasm-bindgen")

    def require_wasm_bindgen(self) -> str:
        """Return the locked version of ``wasm-bindgen`` or raise if it is absent."""
        version = self.wasm_bindgen_version()
        if version is None:
            raise WasmPackError(
                'Ensure that you have "wasm-bindgen" as a dependency in your '
                "Cargo.toml file:\n"
                "[dependencies]\n"
                'wasm-bindgen = "0.2"'
            )
        return version

    def wasm_bindgen_test_version(self) -> str | None:
        """Return the locked version of ``wasm-bindgen-test``, if any."""
        return self._package_version("wasm-bindgen-test")