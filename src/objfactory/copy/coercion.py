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
"""Value coercion: how a source value becomes the destination value.

The declared-type half of each rule is decided once, by :func:`classify`,
when a copy plan is built. :meth:`ValueCoercionEngine.resolve` applies the
value-dependent half on every copy.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from objfactory.copy.classifier import boxed_equivalent, primitive_default
from objfactory.copy.cloning import CloneEngine
from objfactory.copy.types import FieldDescriptor, TypeInfo, ValueKind


def classify(source: TypeInfo, destination: TypeInfo) -> ValueKind:
    """Pick the coercion rule for a pair of declared types; first match wins.

    Collections and mappings compare by container class alone, Optional
    dropped: ``list[ItemDto]`` and ``Optional[list[Item]]`` are the same
    type, and the clone retypes the elements for the destination.
    """
    if source.annotation == destination.annotation or _same_container(source, destination):
        return ValueKind.SAME_TYPE
    if boxed_equivalent(source, destination):
        return ValueKind.WRAPPER_TO_PRIMITIVE
    if boxed_equivalent(destination, source):
        return ValueKind.PRIMITIVE_TO_WRAPPER
    if source.enum or destination.enum:
        return ValueKind.ENUM
    if source.container_kind or destination.container_kind:
        return ValueKind.CONTAINER_MISMATCH
    return ValueKind.CLONE


def _same_container(source: TypeInfo, destination: TypeInfo) -> bool:
    return source.container_kind and destination.container_kind and source.container is destination.container


def convert_enum(source: TypeInfo, destination: TypeInfo, value: Any) -> Any:
    """Convert between enums and strings by member name.

    str -> enum looks the value up by member name, enum -> str yields the
    member name, and enum -> enum matches members of the two enums by name.
    Anything without a match becomes ``None``.
    """
    if destination.enum:
        if source.base is str:
            return _member_named(destination.container, value)
        if source.enum and isinstance(value, Enum):
            return _member_named(destination.container, value.name)
    if source.enum and isinstance(value, Enum) and destination.base is str:
        return value.name
    return None


def _member_named(enum_type: Any, name: Any) -> Any:
    if not isinstance(name, str):
        return None
    return enum_type.__members__.get(name)


class ValueCoercionEngine:
    """Produces the value written into a destination field."""

    def __init__(self, cloner: CloneEngine) -> None:
        self._cloner = cloner

    def resolve(
        self,
        source: FieldDescriptor,
        destination: FieldDescriptor,
        value: Any,
        kind: ValueKind | None = None,
    ) -> Any:
        """Resolve *value*, read from *source*, for *destination*.

        *kind* is the rule chosen at plan-build time; it is computed here
        when omitted.
        """
        source_info = source.type_info
        destination_info = destination.type_info
        if kind is None:
            kind = classify(source_info, destination_info)

        if kind is ValueKind.WRAPPER_TO_PRIMITIVE and value is None:
            return primitive_default(destination_info)
        if kind is ValueKind.PRIMITIVE_TO_WRAPPER and value == primitive_default(source_info):
            return None
        if kind is ValueKind.ENUM:
            return convert_enum(source_info, destination_info, value)
        if kind is ValueKind.CONTAINER_MISMATCH:
            return None
        return self._cloner.clone(value, destination.annotation, source.annotation)
