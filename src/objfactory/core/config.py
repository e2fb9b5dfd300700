# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""objfactory settings: packaged defaults, an optional config file, env overrides.

Keys are dotted paths (``objfactory.copy.max_workers``). An environment
variable named after the key wins over every file: the ``objfactory.``
prefix is dropped, the rest upper-cased with dots and dashes turned into
underscores, and ``OBJFACTORY_`` put in front (``OBJFACTORY_COPY_MAX_WORKERS``).
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import tomllib
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path
from typing import Any, TypeVar, get_origin, get_type_hints

import yaml  # type: ignore[import-untyped]

T = TypeVar("T")

DEFAULTS_RESOURCE = "objfactory-defaults.yaml"
CONFIG_FILE_NAMES = ("objfactory.yaml", "objfactory.toml")

_PREFIX_ATTR = "__objfactory_config_prefix__"
_TRUTHY = frozenset({"true", "1", "yes", "on"})


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Bind a dataclass to the settings found under *prefix*."""

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def env_var_for(key: str) -> str:
    """Environment variable that overrides *key*."""
    name = key.removeprefix("objfactory.")
    return "OBJFACTORY_" + name.upper().replace(".", "_").replace("-", "_")


class Config:
    """Nested settings read through dotted keys."""

    def __init__(self, data: Mapping[str, Any] | None = None, sources: Iterable[str] = ()) -> None:
        self._data: dict[str, Any] = dict(data or {})
        self._sources = list(sources)

    @property
    def sources(self) -> list[str]:
        """Where the settings came from, lowest precedence first."""
        return list(self._sources)

    @classmethod
    def from_sources(cls, base_dir: str | Path, *, load_defaults: bool = True) -> Config:
        """Look for objfactory.yaml/.toml in *base_dir*/config, then in *base_dir*.

        Later files override earlier ones; the packaged defaults sit beneath all.
        """
        base_dir = Path(base_dir)
        found = [
            directory / name
            for directory in (base_dir / "config", base_dir)
            for name in CONFIG_FILE_NAMES
            if (directory / name).is_file()
        ]
        return cls._layered(found, load_defaults)

    @classmethod
    def from_file(cls, path: str | Path, *, load_defaults: bool = True) -> Config:
        """Settings from one YAML or TOML file; a missing file contributes nothing."""
        path = Path(path)
        return cls._layered([path] if path.is_file() else [], load_defaults)

    @classmethod
    def _layered(cls, files: list[Path], load_defaults: bool) -> Config:
        data: dict[str, Any] = {}
        sources: list[str] = []
        if load_defaults:
            resource = importlib.resources.files("objfactory.resources").joinpath(DEFAULTS_RESOURCE)
            data = yaml.safe_load(resource.read_text(encoding="utf-8")) or {}
            sources.append(f"package:{DEFAULTS_RESOURCE}")
        for path in files:
            data = _overlay(data, _read(path))
            sources.append(str(path))
        return cls(data, sources)

    def get(self, key: str, default: Any = None) -> Any:
        """Value at *key*: its environment override, else the loaded value, else *default*."""
        override = os.environ.get(env_var_for(key))
        if override is not None:
            return override
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]
        return default if node is None else node

    def section(self, prefix: str) -> dict[str, Any]:
        """The mapping under *prefix*, empty when absent."""
        node = self.get(prefix)
        return dict(node) if isinstance(node, Mapping) else {}

    def bind(self, properties_cls: type[T]) -> T:
        """Build a ``@config_properties`` dataclass from the settings under its prefix.

        Fields without a setting keep their dataclass default. Environment
        strings are converted to the field's declared bool, int, float or
        mapping type; a string bound to a mapping field sets its ``root`` key.
        """
        prefix = getattr(properties_cls, _PREFIX_ATTR, None)
        if prefix is None or not dataclasses.is_dataclass(properties_cls):
            raise ValueError(f"{properties_cls.__name__} is not a @config_properties dataclass")

        hints = get_type_hints(properties_cls)
        values: dict[str, Any] = {}
        for field in dataclasses.fields(properties_cls):
            raw = self.get(f"{prefix}.{field.name}")
            if raw is not None:
                values[field.name] = _convert(raw, hints.get(field.name))
        return properties_cls(**values)


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with path.open("rb") as fh:
            return tomllib.load(fh)
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def _overlay(base: Mapping[str, Any], top: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in top.items():
        below = merged.get(key)
        merged[key] = _overlay(below, value) if isinstance(below, Mapping) and isinstance(value, Mapping) else value
    return merged


def _convert(raw: Any, expected: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    if expected is bool:
        return raw.strip().lower() in _TRUTHY
    if expected is int or expected is float:
        return expected(raw)
    if expected is dict or get_origin(expected) is dict:
        return {"root": raw}
    return raw
