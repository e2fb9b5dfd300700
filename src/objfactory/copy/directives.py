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
"""Exclusion and rename directives declared by application types.

Class-level directives are decorators that tag the class; field-level
directives are ``Annotated`` markers::

    @copy_exclusions("password")
    @dataclass
    class UserDto:
        id: int
        internal_notes: Annotated[str, CopyExclude()] = ""
        full_name: Annotated[str, CopyName("name")] = ""
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any, TypeVar, get_args, get_origin

T = TypeVar("T")

COPY_EXCLUSIONS_ATTR = "__objfactory_copy_exclusions__"
OBJECT_CONSTRUCTOR_ATTR = "__objfactory_object_constructor__"


@dataclass(frozen=True, slots=True)
class CopyExclude:
    """Marks a field as never copied, whichever side declares it."""


@dataclass(frozen=True, slots=True)
class CopyName:
    """Matches the field under *value* instead of its declared name."""

    value: str


def copy_exclusions(*names: str) -> Callable[[type[T]], type[T]]:
    """Exclude *names* from copies where the class is the source or the destination."""

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, COPY_EXCLUSIONS_ATTR, frozenset(names))
        return cls

    return decorator


def object_constructor(*, exclude: tuple[str, ...] | list[str] = ()) -> Callable[[type[T]], type[T]]:
    """Exclude names from copies that build this class (destination side only)."""

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, OBJECT_CONSTRUCTOR_ATTR, frozenset(exclude))
        return cls

    return decorator


def class_exclusions(cls: type, include_object_constructor: bool) -> frozenset[str]:
    """Union of class-level exclusions declared on *cls* and its base classes.

    Each class contributes only what it declares itself, so a decorated base
    is read once however many subclasses inherit the attribute.
    """
    exclusions: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        own = vars(klass)
        if include_object_constructor:
            exclusions.update(own.get(OBJECT_CONSTRUCTOR_ATTR, ()))
        exclusions.update(own.get(COPY_EXCLUSIONS_ATTR, ()))
    return frozenset(exclusions)


def field_directives(annotation: Any) -> tuple[bool, str | None]:
    """Read ``(excluded, copy_name)`` from an annotation's ``Annotated`` metadata.

    The marker classes themselves are accepted in place of instances, and a
    blank ``CopyName`` is ignored.
    """
    excluded = False
    copy_name: str | None = None
    while get_origin(annotation) is Annotated:
        for meta in annotation.__metadata__:
            if meta is CopyExclude or isinstance(meta, CopyExclude):
                excluded = True
            elif isinstance(meta, CopyName) and meta.value.strip() and copy_name is None:
                copy_name = meta.value
        annotation = get_args(annotation)[0]
    return excluded, copy_name
