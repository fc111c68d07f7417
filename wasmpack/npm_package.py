"""The shapes of the generated ``package.json`` for each target."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

_REQUIRED = "required"
_IF_SOME = "if_some"
_IF_NONEMPTY = "if_nonempty"


def _serialize(entries: list[tuple[str, Any, str]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value, rule in entries:
        if rule == _IF_SOME and value is None:
            continue
        if rule == _IF_NONEMPTY and not value:
            continue
        if isinstance(value, Repository):
            value = value.to_dict()
        elif isinstance(value, list):
            value = list(value)
        result[key] = value
    return result


@dataclass
class Repository:
    """The ``repository`` entry of a package.json."""

    type: str
    url: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "url": self.url}


@dataclass
class CommonJSPackage:
    """package.json for the Node.js target."""

    name: str
    version: str
    main: str
    collaborators: list[str] = field(default_factory=list)
    description: str | None = None
    license: str | None = None
    repository: Repository | None = None
    files: list[str] = field(default_factory=list)
    homepage: str | None = None
    types: str | None = None
    keywords: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return _serialize([
            ("name", self.name, _REQUIRED),
            ("collaborators", self.collaborators, _IF_NONEMPTY),
            ("description", self.description, _IF_SOME),
            ("version", self.version, _REQUIRED),
            ("license", self.license, _IF_SOME),
            ("repository", self.repository, _IF_SOME),
            ("files", self.files, _IF_NONEMPTY),
            ("main", self.main, _REQUIRED),
            ("homepage", self.homepage, _IF_SOME),
            ("types", self.types, _IF_SOME),
            ("keywords", self.keywords, _IF_SOME),
        ])


@dataclass
class ESModulesPackage:
    """package.json for the bundler and web targets."""

    name: str
    version: str
    module: str
    collaborators: list[str] = field(default_factory=list)
    description: str | None = None
    license: str | None = None
    repository: Repository | None = None
    files: list[str] = field(default_factory=list)
    homepage: str | None = None
    types: str | None = None
    side_effects: bool = False
    keywords: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return _serialize([
            ("name", self.name, _REQUIRED),
            ("collaborators", self.collaborators, _IF_NONEMPTY),
            ("description", self.description, _IF_SOME),
            ("version", self.version, _REQUIRED),
            ("license", self.license, _IF_SOME),
            ("repository", self.repository, _IF_SOME),
            ("files", self.files, _IF_NONEMPTY),
            ("module", self.module, _REQUIRED),
            ("homepage", self.homepage, _IF_SOME),
            ("types", self.types, _IF_SOME),
            ("sideEffects", self.side_effects, _REQUIRED),
            ("keywords", self.keywords, _IF_SOME),
        ])


@dataclass
class NoModulesPackage:
    """package.json for the no-modules target."""

    name: str
    version: str
    browser: str
    collaborators: list[str] = field(default_factory=list)
    description: str | None = None
    license: str | None = None
    repository: Repository | None = None
    files: list[str] = field(default_factory=list)
    homepage: str | None = None
    types: str | None = None
    keywords: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return _serialize([
            ("name", self.name, _REQUIRED),
            ("collaborators", self.collaborators, _IF_NONEMPTY),
            ("description", self.description, _IF_SOME),
            ("version", self.version, _REQUIRED),
            ("license", self.license, _IF_SOME),
            ("repository", self.repository, _IF_SOME),
            ("files", self.files, _IF_NONEMPTY),
            ("browser", self.browser, _REQUIRED),
            ("homepage", self.homepage, _IF_SOME),
            ("types", self.types, _IF_SOME),
            ("keywords", self.keywords, _IF_SOME),
        ])


NpmPackage = Union[CommonJSPackage, ESModulesPackage, NoModulesPackage]