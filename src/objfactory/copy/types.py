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
"""Value types shared by the copy engine: cache keys, field descriptors, plans."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True, slots=True)
class ClassPairKey:
    """(source type, destination type) identity used as a cache key."""

    source: type
    destination: type


@dataclass(frozen=True, slots=True)
class TypeInfo:
    """Classification of one declared annotation.

    annotation is the normalised form (Annotated stripped, X | None
    rewritten as Optional[X]); base additionally drops the
    Optional wrapper. container is the runtime class behind base
    (the generic origin for parameterised types) or None when base
    is not backed by a class.
    """

    annotation: Any
    base: Any
    container: type | None
    args: tuple[Any, ...]
    optional: bool = False
    primitive: bool = False
    enum: bool = False
    wrapper: bool = False
    scalar_array: bool = False
    collection: bool = False
    mapping: bool = False
    resolved: bool = True

    @property
    def primitive_or_enum(self) -> bool:
        return self.primitive or self.enum

    @property
    def simple(self) -> bool:
        """Values of this type are cloned through a binary round trip."""
        return self.wrapper or self.scalar_array

    @property
    def container_kind(self) -> bool:
        return self.collection or self.mapping


@dataclass(frozen=True, eq=False, slots=True)
class FieldDescriptor:
    """One declared field of a class.

    Descriptors compare by identity: the catalog creates exactly one per
    (declaring class, name) and every cache refers to that instance.
    """

    owner: type
    name: str
    annotation: Any
    type_info: TypeInfo
    excluded: bool = False
    copy_name: str | None = None
    constant: bool = False

    @property
    def key(self) -> str:
        """Normalised join key: the rename directive if set, else the name."""
        return (self.copy_name or self.name).lower().strip()

    def __repr__(self) -> str:
        return f"FieldDescriptor({self.owner.__qualname__}.{self.name})"


class ValueKind(Enum):
    """How a field pair produces its destination value, fixed at plan-build time."""

    SAME_TYPE = "same_type"
    WRAPPER_TO_PRIMITIVE = "wrapper_to_primitive"
    PRIMITIVE_TO_WRAPPER = "primitive_to_wrapper"
    ENUM = "enum"
    CONTAINER_MISMATCH = "container_mismatch"
    CLONE = "clone"


Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]


@dataclass(frozen=True, slots=True)
class FieldPair:
    """A source field joined to its destination field, with resolved accessors."""

    source: FieldDescriptor
    destination: FieldDescriptor
    getter: Getter
    setter: Setter
    kind: ValueKind


@dataclass(frozen=True, slots=True)
class CopyPlan:
    """Immutable field mapping for one (source type, destination type) pair."""

    key: ClassPairKey
    pairs: tuple[FieldPair, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[FieldPair]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    @property
    def mapping(self) -> dict[FieldDescriptor, FieldDescriptor]:
        """The {source field: destination field} association."""
        return {pair.source: pair.destination for pair in self.pairs}
