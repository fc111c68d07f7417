"""Reading crate metadata from Cargo.toml and cargo, and writing package.json."""

from __future__ import annotations

import enum
import json
import os
import subprocess
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from .errors import WasmPackError
from .npm_package import (
    CommonJSPackage,
    ESModulesPackage,
    NoModulesPackage,
    NpmPackage,
    Repository,
)
from .profile import BuildProfile, WasmPackProfile
from .progressbar import PBAR

WASM_PACK_METADATA_KEY = "package.metadata.wasm-pack"
_LEVENSHTEIN_THRESHOLD = 1

_PROFILE_SCHEMA: dict[str, Any] = {
    "wasm-bindgen": {
        "debug-js-glue": None,
        "demangle-name-section": None,
        "dwarf-debug-info": None,
    },
    "wasm-opt": None,
}

# Keys that are read from Cargo.toml; a value of None means the whole value is used.
_MANIFEST_SCHEMA: dict[str, Any] = {
    "package": {
        "name": None,
        "description": None,
        "license": None,
        "license-file": None,
        "repository": None,
        "homepage": None,
        "metadata": {
            "wasm-pack": {
                "profile": {profile.value: _PROFILE_SCHEMA for profile in BuildProfile},
            },
        },
    },
}


class Target(enum.Enum):
    """The JavaScript environment the generated package is meant for."""

    NODEJS = "nodejs"
    NO_MODULES = "no-modules"
    BUNDLER = "bundler"
    WEB = "web"
    WEB_BUNDLER = "web-bundler"


def levenshtein(a: str, b: str) -> int:
    """Return the edit distance between ``a`` and ``b``."""
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (char_a != char_b),
                )
            )
        previous = current
    return previous[-1]


@dataclass
class _CargoPackage:
    name: str
    description: str | None = None
    license: str | None = None
    license_file: str | None = None
    repository: str | None = None
    homepage: str | None = None
    profiles: dict[BuildProfile, WasmPackProfile] = field(default_factory=dict)


@dataclass
class ManifestAndUnusedKeys:
    """A parsed Cargo.toml together with the wasm-pack keys it did not use."""

    manifest: _CargoPackage
    unused_keys: set[str]


def _table(value: Any, where: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise WasmPackError(f"{where}: expected a table")
    return value


def _parse_package(data: dict) -> _CargoPackage:
    if "package" not in data:
        raise WasmPackError("missing field `package`")
    package = _table(data["package"], "package")
    name = package.get("name")
    if name is None:
        raise WasmPackError("package: missing field `name`")
    if not isinstance(name, str):
        raise WasmPackError(f"package.name: expected a string, found {name!r}")

    def optional(key: str) -> str | None:
        value = package.get(key)
        if value is None or isinstance(value, str):
            return value
        raise WasmPackError(f"package.{key}: expected a string, found {value!r}")

    metadata = _table(package.get("metadata"), "package.metadata")
    wasm_pack = _table(metadata.get("wasm-pack"), WASM_PACK_METADATA_KEY)
    profiles = _table(wasm_pack.get("profile"), f"{WASM_PACK_METADATA_KEY}.profile")

    return _CargoPackage(
        name=name,
        description=optional("description"),
        license=optional("license"),
        license_file=optional("license-file"),
        repository=optional("repository"),
        homepage=optional("homepage"),
        profiles={
            profile: WasmPackProfile.from_toml(profiles.get(profile.value), profile)
            for profile in BuildProfile
        },
    )


def _ignored_keys(data: dict, schema: dict, prefix: str) -> Iterator[str]:
    for key, value in data.items():
        path = f"{prefix}.{key}" if prefix else key
        if key not in schema:
            yield path
        elif schema[key] is not None and isinstance(value, dict):
            yield from _ignored_keys(value, schema[key], path)


def _is_wasm_pack_key(path: str) -> bool:
    return path.startswith("package.metadata") and (
        "wasm-pack" in path
        or levenshtein(WASM_PACK_METADATA_KEY, path) <= _LEVENSHTEIN_THRESHOLD
    )


def parse_crate_data(manifest_path: Path | str) -> ManifestAndUnusedKeys:
    """Parse a Cargo.toml file, collecting misspelt or unknown wasm-pack keys."""
    manifest_path = Path(manifest_path)
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise WasmPackError(f"failed to read: {manifest_path}") from exc
    try:
        data = tomllib.loads(text)
        manifest = _parse_package(data)
    except (tomllib.TOMLDecodeError, WasmPackError) as exc:
        raise WasmPackError(f"failed to parse manifest: {manifest_path}") from exc

    unused = {
        path
        for path in _ignored_keys(data, _MANIFEST_SCHEMA, "")
        if _is_wasm_pack_key(path)
    }
    return ManifestAndUnusedKeys(manifest=manifest, unused_keys=unused)


def warn_for_unused_keys(manifest_and_keys: ManifestAndUnusedKeys) -> None:
    """Print a warning for every unknown wasm-pack key, in sorted order."""
    for path in sorted(manifest_and_keys.unused_keys):
        PBAR.warn(
            f'"{path}" is an unknown key and will be ignored. Please check your Cargo.toml.'
        )


def _cargo_metadata(manifest_path: Path) -> dict:
    cargo = os.environ.get("CARGO", "cargo")
    command = [
        cargo,
        "metadata",
        "--format-version",
        "1",
        "--manifest-path",
        str(manifest_path),
    ]
    try:
        result = subprocess.run(command, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise WasmPackError(f"failed to run `{cargo} metadata`") from exc
    if result.returncode != 0:
        raise WasmPackError(f"`cargo metadata` exited with an error: {result.stderr.strip()}")
    try:
        metadata = json.loads(result.stdout)
    except json.JSONDecodeError as exc:
        raise WasmPackError("`cargo metadata` produced invalid JSON") from exc
    if not isinstance(metadata, dict):
        raise WasmPackError("`cargo metadata` produced unexpected output")
    return metadata


@dataclass
class _NpmData:
    name: str
    files: list[str]
    dts_file: str | None
    main: str
    homepage: str | None
    keywords: list[str] | None


class CrateData:
    """Metadata learned about a crate from its Cargo.toml and from cargo."""

    def __init__(self, crate_path: Path | str, out_name: str | None = None) -> None:
        crate_path = Path(crate_path)
        manifest_path = crate_path / "Cargo.toml"
        if not manifest_path.is_file():
            raise WasmPackError(
                "crate directory is missing a `Cargo.toml` file; is "
                f"`{crate_path}` the wrong directory?"
            )

        self._metadata = _cargo_metadata(manifest_path)

        parsed = parse_crate_data(manifest_path)
        warn_for_unused_keys(parsed)
        self._manifest = parsed.manifest

        package = next(
            (
                pkg
                for pkg in self._metadata.get("packages", [])
                if pkg.get("name") == self._manifest.name
            ),
            None,
        )
        if package is None:
            raise WasmPackError("failed to find package in metadata")
        self._package: dict = package
        self.out_name = out_name

    def configured_profile(self, profile: BuildProfile) -> WasmPackProfile:
        """Return the wasm-pack settings for ``profile``."""
        return self._manifest.profiles[profile]

    def check_crate_config(self) -> None:
        """Raise if the crate is not configured to build a cdylib."""
        any_cdylib = any(
            "cdylib" in target.get("crate_types", [])
            for target in self._package.get("targets", [])
            if "cdylib" in target.get("kind", [])
        )
        if not any_cdylib:
            raise WasmPackError(
                "crate-type must be cdylib to compile to wasm32-unknown-unknown. "
                "Add the following to your Cargo.toml file:\n\n"
                "[lib]\n"
                'crate-type = ["cdylib", "rlib"]'
            )

    def crate_name(self) -> str:
        """Return the crate's library name with dashes replaced by underscores."""
        lib = next(
            (
                target
                for target in self._package.get("targets", [])
                if "cdylib" in target.get("kind", [])
            ),
            None,
        )
        name = lib["name"] if lib is not None else self._package["name"]
        return name.replace("-", "_")

    def name_prefix(self) -> str:
        """Return the prefix used for output file names."""
        return self.out_name if self.out_name is not None else self.crate_name()

    def crate_license(self) -> str | None:
        """Return the ``license`` field of the crate."""
        return self._manifest.license

    def crate_license_file(self) -> str | None:
        """Return the ``license-file`` field of the crate."""
        return self._manifest.license_file

    def target_directory(self) -> Path:
        """Return the directory where cargo places build artifacts."""
        return Path(self._metadata["target_directory"])

    def workspace_root(self) -> Path:
        """Return the root directory of the crate's cargo workspace."""
        return Path(self._metadata["workspace_root"])

    def write_package_json(
        self,
        out_dir: Path | str,
        scope: str | None,
        disable_dts: bool,
        target: Target,
    ) -> None:
        """Write ``package.json`` for ``target`` into ``out_dir``."""
        out_dir = Path(out_dir)
        package = self._npm_package(scope, disable_dts, out_dir, target)
        path = out_dir / "package.json"
        text = json.dumps(package.to_dict(), indent=2, ensure_ascii=False)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise WasmPackError(f"failed to write: {path}") from exc

    def _npm_data(
        self,
        scope: str | None,
        add_js_bg_to_package_json: bool,
        disable_dts: bool,
        out_dir: Path,
    ) -> _NpmData:
        prefix = self.name_prefix()
        js_file = f"{prefix}.js"
        files = [f"{prefix}_bg.wasm", js_file]
        if add_js_bg_to_package_json:
            files.append(f"{prefix}_bg.js")

        pkg_name = self._package["name"]
        npm_name = f"@{scope}/{pkg_name}" if scope is not None else pkg_name

        dts_file = None
        if not disable_dts:
            dts_file = f"{prefix}.d.ts"
            files.append(dts_file)

        keywords = list(self._package.get("keywords") or []) or None

        try:
            files.extend(
                sorted(
                    entry.name
                    for entry in out_dir.iterdir()
                    if entry.is_file()
                    and entry.name.startswith("LICENSE")
                    and entry.name != "LICENSE"
                )
            )
        except OSError:
            pass

        return _NpmData(
            name=npm_name,
            files=files,
            dts_file=dts_file,
            main=js_file,
            homepage=self._manifest.homepage,
            keywords=keywords,
        )

    def _license(self) -> str | None:
        if self._manifest.license is not None:
            return self._manifest.license
        if self._manifest.license_file is not None:
            return f"SEE LICENSE IN {self._manifest.license_file}"
        return None

    def _npm_package(
        self, scope: str | None, disable_dts: bool, out_dir: Path, target: Target
    ) -> NpmPackage:
        data = self._npm_data(scope, target is Target.BUNDLER, disable_dts, out_dir)
        self._check_optional_fields()

        repository = self._manifest.repository
        common: dict[str, Any] = {
            "name": data.name,
            "collaborators": list(self._package.get("authors") or []),
            "description": self._manifest.description,
            "version": str(self._package["version"]),
            "license": self._license(),
            "repository": Repository(type="git", url=repository)
            if repository is not None
            else None,
            "files": data.files,
            "homepage": data.homepage,
            "types": data.dts_file,
            "keywords": data.keywords,
        }
        match target:
            case Target.NODEJS:
                return CommonJSPackage(main=data.main, **common)
            case Target.NO_MODULES:
                return NoModulesPackage(browser=data.main, **common)
            case _:
                return ESModulesPackage(module=data.main, side_effects=False, **common)

    def _check_optional_fields(self) -> None:
        missing = []
        if self._manifest.description is None:
            missing.append("description")
        if self._manifest.repository is None:
            missing.append("repository")
        if self._manifest.license is None and self._manifest.license_file is None:
            missing.append("license")

        match missing:
            case [only]:
                PBAR.info(
                    f"Optional field missing from Cargo.toml: '{only}'. "
                    "This is not necessary, but recommended"
                )
            case [first, second]:
                PBAR.info(
                    f"Optional fields missing from Cargo.toml: '{first}', '{second}'. "
                    "These are not necessary, but recommended"
                )
            case [first, second, third]:
                PBAR.info(
                    f"Optional fields missing from Cargo.toml: '{first}', '{second}', "
                    f"and '{third}'. These are not necessary, but recommended"
                )