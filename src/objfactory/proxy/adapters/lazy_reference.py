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
"""In-process lazy reference: a typed placeholder around a loader callable."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class LazyReference(Generic[T]):
    """Placeholder for a *target_type* value produced by *loader* on first use.

    The loader runs at most once; later calls to :meth:`get` return the
    loaded value.

    Usage::

        owner = LazyReference(User, lambda: repository.find(user_id))
        owner.is_loaded   # False
        owner.get()       # loads
    """

    __slots__ = ("_target_type", "_loader", "_value", "_lock")

    def __init__(self, target_type: type[T], loader: Callable[[], T]) -> None:
        self._target_type = target_type
        self._loader = loader
        self._value: Any = _UNSET
        self._lock = threading.Lock()

    @classmethod
    def of(cls, value: T) -> LazyReference[T]:
        """An already-loaded reference to *value*."""
        reference = cls(type(value), lambda: value)
        reference._value = value
        return reference

    @property
    def target_type(self) -> type[T]:
        return self._target_type

    @property
    def is_loaded(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T:
        if self._value is _UNSET:
            with self._lock:
                if self._value is _UNSET:
                    self._value = self._loader()
        return self._value

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "unloaded"
        return f"LazyReference({self._target_type.__qualname__}, {state})"


class LazyReferenceResolver:
    """LazyProxyResolver for :class:`LazyReference` placeholders."""

    def is_lazy_placeholder(self, value: Any) -> bool:
        return isinstance(value, LazyReference)

    def is_uninitialized(self, placeholder: LazyReference[Any]) -> bool:
        return not placeholder.is_loaded

    def real_type(self, placeholder: LazyReference[Any]) -> type:
        return placeholder.target_type

    def materialize(self, placeholder: LazyReference[Any]) -> Any:
        return placeholder.get()
