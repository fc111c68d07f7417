"""Running npm to pack, publish and log in."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Any

from .errors import WasmPackError

DEFAULT_NPM_REGISTRY = "https://registry.npmjs.org/"
"""The npm registry used when no custom registry is given."""

_NPM = "npm.cmd" if os.name == "nt" else "npm"

_log = logging.getLogger(__name__)


def _run(args: list[str], cwd: Path | str, name: str, context: str) -> None:
    command = [_NPM, *args]
    _log.info("Running %s", command)
    try:
        try:
            result = subprocess.run(command, cwd=cwd, check=False)
        except OSError as exc:
            raise WasmPackError(f"failed to execute `{name}`") from exc
        if result.returncode != 0:
            raise WasmPackError(
                f"failed to execute `{name}`: exited with exit status {result.returncode}"
            )
    except WasmPackError as exc:
        raise WasmPackError(context) from exc


def npm_pack(path: Path | str) -> None:
    """Run ``npm pack`` in ``path``."""
    _run(["pack"], path, "npm pack", "Packaging up your code failed")


def npm_publish(path: Path | str, access: Any = None, tag: str | None = None) -> None:
    """Run ``npm publish`` in ``path`` with an optional access flag and tag."""
    args = ["publish"]
    if access is not None:
        args.append(str(access))
    if tag is not None:
        args += ["--tag", tag]
    _run(args, path, "npm publish", "Publishing to npm failed")


def npm_login(
    registry: str = DEFAULT_NPM_REGISTRY,
    scope: str | None = None,
    always_auth: bool = False,
    auth_type: str | None = None,
) -> None:
    """Run ``npm login`` interactively against ``registry``."""
    args = ["login", f"--registry={registry}"]
    if scope is not None:
        args.append(f"--scope={scope}")
    if always_auth:
        args.append("--always_auth")
    if auth_type is not None:
        args.append(f"--auth_type={auth_type}")

    command = [_NPM, *args]
    _log.info("Running %s", command)
    try:
        result = subprocess.run(command, check=False)
    except OSError as exc:
        raise WasmPackError("failed to execute `npm login`") from exc
    if result.returncode != 0:
        raise WasmPackError(f"Login to registry {registry} failed")