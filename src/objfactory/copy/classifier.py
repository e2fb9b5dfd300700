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
"""Type classification for the copy engine.

Answers, for a declared annotation, whether it is a primitive, an enum, a
boxed ("simple") scalar, an array of scalars, a collection or a mapping.
Results are memoised per annotation; annotations that cannot be hashed are
classified on every call.
"""

from __future__ import annotations

import array
import collections.abc as abc
import inspect
import numbers
import types
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from functools import lru_cache
from pathlib import PurePath
from typing import Annotated, Any, ForwardRef, TypeVar, Union, get_args, get_origin
from uuid import UUID

from objfactory.copy.types import TypeInfo

_NONE_TYPE = type(None)

PRIMITIVE_DEFAULTS: dict[type, Any] = {bool: False, int: 0, float: 0.0, complex: 0j}

SIMPLE_TYPES: tuple[type, ...] = (
    str,
    bytes,
    Decimal,
    Fraction,
    numbers.Number,
    datetime,
    date,
    time,
    timedelta,
    UUID,
    PurePath,
)

_SCALAR_ARRAYS: tuple[type, ...] = (bytearray, array.array)
_NOT_COLLECTIONS: tuple[type, ...] = (str, bytes, bytearray, tuple, array.array, abc.Mapping)


def strip_annotated(tp: Any) -> Any:
    """Drop Annotated metadata, returning the underlying annotation."""
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def normalize(tp: Any) -> Any:
    """Strip Annotated and rewrite X | Y unions as typing.Union."""
    tp = strip_annotated(tp)
    if isinstance(tp, types.UnionType) or get_origin(tp) is Union:
        return Union[tuple(normalize(arg) for arg in get_args(tp))]  # noqa: UP007
    return tp


def unwrap_optional(tp: Any) -> tuple[Any, bool]:
    """Split Optional[X] into (X, True); anything else is (tp, False)."""
    if get_origin(tp) is Union:
        args = get_args(tp)
        if _NONE_TYPE in args:
            rest = tuple(arg for arg in args if arg is not _NONE_TYPE)
            if len(rest) == 1:
                return rest[0], True
            return Union[rest], True  # noqa: UP007
    return tp, False


def is_unresolved(tp: Any) -> bool:
    """True for annotations that do not name a concrete type."""
    return tp is Any or tp is object or isinstance(tp, (str, ForwardRef, TypeVar))


def describe(tp: Any) -> TypeInfo:
    """Classify *tp*, memoised when the annotation is hashable."""
    try:
        hash(tp)
    except TypeError:
        return _describe(tp)
    return _describe_cached(tp)


@lru_cache(maxsize=2048)
def _describe_cached(tp: Any) -> TypeInfo:
    return _describe(tp)


def _describe(tp: Any) -> TypeInfo:
    annotation = normalize(tp)
    if is_unresolved(annotation):
        return TypeInfo(annotation, annotation, None, (), resolved=False)

    base, optional = unwrap_optional(annotation)
    origin = get_origin(base)
    if isinstance(origin, type):
        container: type | None = origin
        args = get_args(base)
    elif origin is None and isinstance(base, type):
        container, args = base, ()
    else:
        return TypeInfo(annotation, base, None, get_args(base), optional=optional)

    if issubclass(container, Enum):
        return TypeInfo(annotation, base, container, args, optional=optional, enum=True)

    primitive = container in PRIMITIVE_DEFAULTS and not optional and origin is None
    wrapper = not primitive and (container in PRIMITIVE_DEFAULTS or issubclass(container, SIMPLE_TYPES))
    scalar_array = issubclass(container, _SCALAR_ARRAYS) or (
        container is tuple and bool(args) and all(_is_scalar_member(arg) for arg in args)
    )
    mapping = issubclass(container, abc.Mapping)
    collection = issubclass(container, abc.Collection) and not issubclass(container, _NOT_COLLECTIONS)
    return TypeInfo(
        annotation,
        base,
        container,
        args,
        optional=optional,
        primitive=primitive,
        wrapper=wrapper,
        scalar_array=scalar_array,
        collection=collection,
        mapping=mapping,
    )


def _is_scalar_member(arg: Any) -> bool:
    if arg is Ellipsis:
        return True
    info = describe(arg)
    return info.primitive or info.wrapper


# ---------------------------------------------------------------------------
# Predicates over declared types
# ---------------------------------------------------------------------------


def is_primitive(tp: Any) -> bool:
    return describe(tp).primitive


def is_enum(tp: Any) -> bool:
    return describe(tp).enum


def is_primitive_or_enum(tp: Any) -> bool:
    return describe(tp).primitive_or_enum


def is_wrapper(tp: Any) -> bool:
    return describe(tp).wrapper


def is_simple_type(tp: Any) -> bool:
    return describe(tp).simple


def is_collection_or_map(tp: Any) -> bool:
    return describe(tp).container_kind


def same_type(left: Any, right: Any) -> bool:
    """Declared-type equality after normalisation."""
    return normalize(left) == normalize(right)


def boxed_equivalent(wrapper: TypeInfo, primitive: TypeInfo) -> bool:
    """True when *wrapper* is Optional of exactly the primitive *primitive*."""
    return primitive.primitive and wrapper.wrapper and wrapper.optional and wrapper.base is primitive.base


def primitive_default(info: TypeInfo) -> Any:
    """Zero value of a primitive annotation (False, 0, 0.0, 0j)."""
    return PRIMITIVE_DEFAULTS[info.container]  # type: ignore[index]


def is_concrete(tp: Any) -> bool:
    """True when *tp* can be handed to a deserializer as a target type.

    Type variables, Any, object, forward references and abstract
    classes are not concrete; a parameterised type is concrete when all of
    its arguments are.
    """
    tp = normalize(tp)
    if is_unresolved(tp):
        return False
    origin = get_origin(tp)
    if origin is not None:
        return all(arg is Ellipsis or is_concrete(arg) for arg in get_args(tp))
    if isinstance(tp, type):
        return not inspect.isabstract(tp)
    return False


# ---------------------------------------------------------------------------
# Predicates over runtime values
# ---------------------------------------------------------------------------


def is_collection_value(value: Any) -> bool:
    return isinstance(value, abc.Collection) and not isinstance(value, _NOT_COLLECTIONS)


def is_mapping_value(value: Any) -> bool:
    return isinstance(value, abc.Mapping)
