"""Per-profile configuration from ``[package.metadata.wasm-pack.profile]``."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any

from .errors import WasmPackError

_METADATA_PREFIX = "package.metadata.wasm-pack.profile"

_BINDGEN_KEYS = {
    "debug-js-glue": "debug_js_glue",
    "demangle-name-section": "demangle_name_section",
    "dwarf-debug-info": "dwarf_debug_info",
}


class BuildProfile(enum.Enum):
    """The build profile being used."""

    DEV = "dev"
    RELEASE = "release"
    PROFILING = "profiling"


@dataclass
class WasmPackProfile:
    """Settings for wasm-bindgen and wasm-opt within one build profile."""

    debug_js_glue: bool | None = None
    demangle_name_section: bool | None = None
    dwarf_debug_info: bool | None = None
    wasm_opt: bool | list[str] | None = None

    @classmethod
    def default_for(cls, profile: BuildProfile) -> WasmPackProfile:
        """Return the built-in defaults for ``profile``."""
        if profile is BuildProfile.DEV:
            return cls(
                debug_js_glue=True,
                demangle_name_section=True,
                dwarf_debug_info=False,
                wasm_opt=None,
            )
        return cls(
            debug_js_glue=False,
            demangle_name_section=True,
            dwarf_debug_info=False,
            wasm_opt=True,
        )

    @classmethod
    def from_toml(cls, data: Any, profile: BuildProfile) -> WasmPackProfile:
        """Build a profile from its parsed TOML table, filling in defaults."""
        where = f"{_METADATA_PREFIX}.{profile.value}"
        result = cls()
        if data is not None:
            if not isinstance(data, dict):
                raise WasmPackError(f"{where}: expected a table")
            bindgen = data.get("wasm-bindgen")
            if bindgen is not None:
                if not isinstance(bindgen, dict):
                    raise WasmPackError(f"{where}.wasm-bindgen: expected a table")
                for key, attr in _BINDGEN_KEYS.items():
                    value = bindgen.get(key)
                    if value is None:
                        continue
                    if not isinstance(value, bool):
                        raise WasmPackError(
                            f"{where}.wasm-bindgen.{key}: expected a boolean, "
                            f"found {value!r}"
                        )
                    setattr(result, attr, value)
            result.wasm_opt = _parse_wasm_opt(data.get("wasm-opt"), f"{where}.wasm-opt")
        result.update_with_defaults(cls.default_for(profile))
        return result

    def update_with_defaults(self, defaults: WasmPackProfile) -> None:
        """Fill every unset setting from ``defaults``."""
        for attr in _BINDGEN_KEYS.values():
            if getattr(self, attr) is None:
                setattr(self, attr, getattr(defaults, attr))
        if self.wasm_opt is None:
            opt = defaults.wasm_opt
            self.wasm_opt = list(opt) if isinstance(opt, list) else opt

    def wasm_opt_args(self) -> list[str] | None:
        """Arguments for wasm-opt, or None when it is disabled."""
        if self.wasm_opt is None or self.wasm_opt is False:
            return None
        if self.wasm_opt is True:
            return ["-O"]
        return list(self.wasm_opt)


def _parse_wasm_opt(value: Any, where: str) -> bool | list[str] | None:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, list) and all(isinstance(arg, str) for arg in value):
        return list(value)
    raise WasmPackError(
        f"{where}: expected a boolean or a list of strings, found {value!r}"
    )