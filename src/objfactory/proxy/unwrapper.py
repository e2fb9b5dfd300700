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
"""Replacement of lazy placeholders by real values before copying."""

from __future__ import annotations

from collections import OrderedDict, defaultdict, deque
from collections.abc import Callable, Collection, Mapping
from collections.abc import Set as AbstractSet
from typing import Any

import structlog

from objfactory.copy.classifier import is_collection_value, is_mapping_value
from objfactory.copy.instantiation import new_instance
from objfactory.proxy.ports.outbound import LazyProxyResolver

logger = structlog.get_logger(__name__)


class ProxyUnwrapper:
    """Swaps lazy placeholders for real values without forcing lazy loads.

    - A placeholder that was never loaded becomes a blank instance of its
      real type; a loaded one becomes its loaded value.
    - A collection or mapping is rebuilt only when it holds a placeholder
      (as an element, key or value); otherwise it is returned unchanged.
    """

    def __init__(
        self,
        resolver: LazyProxyResolver,
        instantiate: Callable[[type], Any] = new_instance,
    ) -> None:
        self._resolver = resolver
        self._instantiate = instantiate

    def unwrap(self, value: Any) -> Any:
        if self._resolver.is_lazy_placeholder(value):
            return self._unwrap_placeholder(value)
        if is_mapping_value(value):
            return self._unwrap_mapping(value)
        if is_collection_value(value):
            return self._unwrap_collection(value)
        return value

    def _unwrap_placeholder(self, placeholder: Any) -> Any:
        if self._resolver.is_uninitialized(placeholder):
            return self._instantiate(self._resolver.real_type(placeholder))
        return self._resolver.materialize(placeholder)

    def _unwrap_collection(self, collection: Collection[Any]) -> Collection[Any]:
        is_placeholder = self._resolver.is_lazy_placeholder
        if not any(is_placeholder(item) for item in collection):
            return collection
        return _rebuild_collection(collection, [self.unwrap(item) for item in collection])

    def _unwrap_mapping(self, mapping: Mapping[Any, Any]) -> Mapping[Any, Any]:
        is_placeholder = self._resolver.is_lazy_placeholder
        if not any(is_placeholder(key) or is_placeholder(item) for key, item in mapping.items()):
            return mapping
        items = {self.unwrap(key): self.unwrap(item) for key, item in mapping.items()}
        return _rebuild_mapping(mapping, items)


def _rebuild_collection(original: Collection[Any], items: list[Any]) -> Collection[Any]:
    """Same concrete type as *original* when it can be built from *items*."""
    try:
        return type(original)(items)  # type: ignore[call-arg]
    except (TypeError, ValueError) as exc:
        logger.debug("collection_rebuild_fallback", type=type(original).__qualname__, reason=str(exc))
    if isinstance(original, AbstractSet):
        return set(items)
    if isinstance(original, deque):
        return deque(items)
    return list(items)


def _rebuild_mapping(original: Mapping[Any, Any], items: dict[Any, Any]) -> Mapping[Any, Any]:
    if isinstance(original, defaultdict):
        return defaultdict(original.default_factory, items)
    try:
        return type(original)(items)  # type: ignore[call-arg]
    except (TypeError, ValueError) as exc:
        logger.debug("collection_rebuild_fallback", type=type(original).__qualname__, reason=str(exc))
    if isinstance(original, OrderedDict):
        return OrderedDict(items)
    return dict(items)
