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
"""Clone engine: independent copies of single values.

- ``None``, primitives and enums are returned as they are.
- Simple scalars (boxed numbers, text, temporal values, UUIDs, scalar arrays)
  go through a binary ``pickle`` round trip when the target is simple too,
  through the text serializer otherwise.
- Collections and mappings go through the text serializer, targeting the
  declared generic type when its arguments are concrete, otherwise a type
  rebuilt from the run-time types of the elements (a Union when they are
  mixed).
- Anything else goes through the text serializer into the declared target
  type, which is what turns a ``UserDto`` into a ``User``.
"""

from __future__ import annotations

import collections.abc as abc
import pickle
from typing import Any, Optional, Union

import structlog

from objfactory.copy.classifier import describe, is_concrete, is_mapping_value
from objfactory.copy.types import TypeInfo
from objfactory.kernel.exceptions import CloneError
from objfactory.serialization.ports.outbound import SerializerAdapter

logger = structlog.get_logger(__name__)


def _type_name(value: Any) -> str:
    return type(value).__qualname__


class CloneEngine:
    """Clones values through a binary round trip or a text serializer."""

    def __init__(self, serializer: SerializerAdapter) -> None:
        self._serializer = serializer

    @property
    def serializer(self) -> SerializerAdapter:
        return self._serializer

    def clone(self, value: Any, target_type: Any = None, source_type: Any = None) -> Any:
        """Return an independent copy of *value* shaped as *target_type*.

        *source_type* is the declared type *value* was read from; it defaults
        to *target_type*. Missing or unresolved declarations (``Any``,
        ``object``, unevaluated forward references) fall back to the run-time
        type of *value*.

        Raises:
            CloneError: A serialization round trip failed.
        """
        if value is None:
            return None
        target = self._info(target_type, value)
        source = target if source_type is None else self._info(source_type, value)

        if source.primitive_or_enum:
            return value
        if source.simple:
            if target.simple or target.primitive:
                return self.binary_clone(value)
            return self.text_clone(value, target.annotation)
        if source.container_kind:
            return self._clone_container(value, target)
        return self.text_clone(value, target.annotation)

    def binary_clone(self, value: Any) -> Any:
        """Copy *value* through ``pickle``."""
        try:
            return pickle.loads(pickle.dumps(value))
        except Exception as exc:
            raise CloneError(_type_name(value), reason=str(exc)) from exc

    def text_clone(self, value: Any, target_type: Any) -> Any:
        """Serialize *value* to text and deserialize it as *target_type*."""
        try:
            return self._serializer.deserialize(self._serializer.serialize(value), target_type)
        except CloneError:
            raise
        except Exception as exc:
            raise CloneError(_type_name(value), reason=str(exc)) from exc

    @staticmethod
    def _info(declared: Any, value: Any) -> TypeInfo:
        if declared is None:
            return describe(type(value))
        info = describe(declared)
        return info if info.resolved else describe(type(value))

    def _clone_container(self, value: Any, target: TypeInfo) -> Any:
        if target.container is not None and target.args and all(is_concrete(arg) for arg in target.args):
            return self.text_clone(value, target.annotation)

        sampled = _sampled_type(value, target)
        if sampled is None:
            logger.warning(
                "collection_element_type_unresolved",
                type=_type_name(value),
                declared=repr(target.annotation),
            )
            return None
        return self.text_clone(value, sampled)


def _sampled_type(value: Any, target: TypeInfo) -> Any:
    """Parameterise the target container with the run-time types of its elements."""
    container = target.container if target.container_kind else type(value)
    if is_mapping_value(value):
        value_type = _observed_type(value.values())
        if value_type is None:
            return None
        return _parameterize(container, (_observed_type(value.keys()), value_type), dict)

    element_type = _observed_type(value)
    if element_type is None:
        return None
    return _parameterize(container, (element_type,), set if isinstance(value, abc.Set) else list)


def _observed_type(items: abc.Iterable[Any]) -> Any:
    """Union of the distinct non-None types in *items*, Optional when None occurs."""
    seen: dict[type, None] = {}
    has_nulls = False
    for item in items:
        if item is None:
            has_nulls = True
        else:
            seen.setdefault(type(item))
    if not seen:
        return None
    observed = next(iter(seen)) if len(seen) == 1 else Union[tuple(seen)]  # noqa: UP007
    return Optional[observed] if has_nulls else observed  # noqa: UP007


def _parameterize(container: Any, args: tuple[Any, ...], fallback: type) -> Any:
    subscript = args[0] if len(args) == 1 else args
    try:
        return container[subscript]
    except TypeError:
        logger.debug("container_not_subscriptable", type=getattr(container, "__qualname__", repr(container)))
        return fallback[subscript]
