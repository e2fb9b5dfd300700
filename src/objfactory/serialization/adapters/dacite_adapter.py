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
"""Dataclass-oriented serializer adapter: stdlib ``json`` text + ``dacite``.

Serialization flattens dataclasses, enums, temporal and numeric wrapper
values into JSON. Deserialization structures the decoded data back into the
requested type, delegating dataclass construction (including everything
nested inside them) to :func:`dacite.from_dict`.
"""

from __future__ import annotations

import collections.abc as abc
import dataclasses
import json
import types
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Annotated, Any, Union, get_args, get_origin
from uuid import UUID

import dacite

_NONE_TYPE = type(None)

_ISO_TYPES = (datetime, date, time)
_STRING_TYPES = (UUID, Decimal, Fraction, PurePath)


def _encode(obj: Any) -> Any:
    """``json.dumps`` default hook for values json cannot encode natively."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: getattr(obj, f.name) for f in dataclasses.fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, _ISO_TYPES):
        return obj.isoformat()
    if isinstance(obj, timedelta):
        return obj.total_seconds()
    if isinstance(obj, _STRING_TYPES):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return list(obj)
    model_dump = getattr(obj, "model_dump", None)
    if callable(model_dump):
        return model_dump(mode="json")
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _is_instance(data: Any, member: Any) -> bool:
    return get_origin(member) is None and isinstance(member, type) and isinstance(data, member)


def _timedelta_hook(value: Any) -> timedelta:
    return value if isinstance(value, timedelta) else timedelta(seconds=float(value))


class DaciteSerializerAdapter:
    """SerializerAdapter for dataclass-shaped object graphs."""

    def __init__(self, config: dacite.Config | None = None) -> None:
        self._config = config or dacite.Config(
            type_hooks={
                datetime: datetime.fromisoformat,
                date: date.fromisoformat,
                time: time.fromisoformat,
                timedelta: _timedelta_hook,
                UUID: UUID,
                Decimal: Decimal,
                Fraction: Fraction,
            },
            cast=[Enum, tuple, set, frozenset],
        )

    def serialize(self, value: Any) -> str:
        return json.dumps(value, default=_encode)

    def deserialize(self, text: str, type_: Any) -> Any:
        return self._structure(json.loads(text), type_)

    # ------------------------------------------------------------------
    # Structuring
    # ------------------------------------------------------------------

    def _structure(self, data: Any, type_: Any) -> Any:
        if data is None or type_ is Any or type_ is object:
            return data

        origin = get_origin(type_)
        if origin is Annotated:
            return self._structure(data, get_args(type_)[0])
        if origin is Union or origin is types.UnionType:
            return self._structure_union(data, type_)
        if origin is not None:
            return self._structure_generic(data, origin, get_args(type_))

        if not isinstance(type_, type):
            return data
        if dataclasses.is_dataclass(type_):
            return dacite.from_dict(type_, data, config=self._config)
        if issubclass(type_, Enum):
            return type_(data)
        if issubclass(type_, _ISO_TYPES):
            return type_.fromisoformat(data)
        if issubclass(type_, timedelta):
            return _timedelta_hook(data)
        if issubclass(type_, (bool, int, float, str, *_STRING_TYPES)):
            return data if isinstance(data, type_) else type_(data)
        if issubclass(type_, (abc.Mapping, abc.Collection)) and not isinstance(data, str):
            return self._structure_generic(data, type_, ())
        return data

    def _structure_union(self, data: Any, type_: Any) -> Any:
        failures: list[str] = []
        members = [member for member in get_args(type_) if member is not _NONE_TYPE]
        # A member the decoded value already is wins over one it would be cast to.
        members.sort(key=lambda member: not _is_instance(data, member))
        for member in members:
            try:
                return self._structure(data, member)
            except (TypeError, ValueError, dacite.DaciteError) as exc:
                failures.append(f"{getattr(member, '__name__', member)}: {exc}")
        raise ValueError(f"Value does not match any member of {type_}: {'; '.join(failures)}")

    def _structure_generic(self, data: Any, origin: type, args: tuple[Any, ...]) -> Any:
        if issubclass(origin, abc.Mapping):
            key_type, value_type = args if len(args) == 2 else (Any, Any)
            items = {self._structure(k, key_type): self._structure(v, value_type) for k, v in data.items()}
            return items if origin in (dict, abc.Mapping, abc.MutableMapping) else origin(items)

        if issubclass(origin, tuple):
            if len(args) == 2 and args[1] is Ellipsis:
                return tuple(self._structure(item, args[0]) for item in data)
            if args:
                return tuple(self._structure(item, arg) for item, arg in zip(data, args))
            return tuple(data)

        element_type = args[0] if args else Any
        items = [self._structure(item, element_type) for item in data]
        if origin in (list, abc.Sequence, abc.MutableSequence, abc.Collection, abc.Iterable):
            return items
        if origin in (abc.Set, abc.MutableSet):
            return set(items)
        return origin(items)
