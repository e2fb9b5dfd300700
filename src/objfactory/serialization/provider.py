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
"""SerializerProvider: registry multiplexing serializer adapters by type."""

from __future__ import annotations

import threading
from collections.abc import Mapping

import structlog

from objfactory.config.auto import AutoConfiguration
from objfactory.kernel.exceptions import AdapterNotConfiguredError
from objfactory.serialization.adapters import create_adapter
from objfactory.serialization.ports.outbound import SerializerAdapter
from objfactory.serialization.types import SerializationType

logger = structlog.get_logger(__name__)


class SerializerProvider:
    """Holds the registered serializer adapters and the elected default.

    Construct one per application and share it by reference. With
    ``auto_initialize`` enabled, the first :meth:`get_adapter` call on an
    empty provider registers every importable back-end.

    Usage::

        provider = SerializerProvider()
        provider.initialize({SerializationType.PYDANTIC: PydanticSerializerAdapter()},
                            SerializationType.PYDANTIC)
        adapter = provider.get_adapter()
    """

    def __init__(self, *, preferred: str = "auto", auto_initialize: bool = True) -> None:
        self._adapters: dict[SerializationType, SerializerAdapter] = {}
        self._default: SerializationType | None = None
        self._preferred = preferred
        self._auto_initialize = auto_initialize
        self._lock = threading.RLock()

    @property
    def registered_types(self) -> list[SerializationType]:
        return list(self._adapters)

    @property
    def default_type(self) -> SerializationType | None:
        return self._default

    def initialize(
        self,
        adapters: Mapping[SerializationType, SerializerAdapter],
        default_type: SerializationType,
    ) -> None:
        """Register *adapters* and elect *default_type*.

        Has no effect once any adapter is registered; an empty mapping leaves
        the provider empty.
        """
        with self._lock:
            if self._adapters or not adapters:
                return
            self._adapters.update(adapters)
            self._default = default_type
            logger.info(
                "serializer_provider_initialized",
                adapters=[kind.value for kind in self._adapters],
                default=default_type.value,
            )

    def register(self, kind: SerializationType, adapter: SerializerAdapter) -> None:
        """Register (or replace) the adapter for *kind*."""
        with self._lock:
            self._adapters[kind] = adapter

    def elect_default(self, kind: SerializationType) -> None:
        """Make *kind* the default; it must already be registered."""
        with self._lock:
            if kind not in self._adapters:
                raise AdapterNotConfiguredError(kind.value, reason="cannot elect an unregistered adapter")
            self._default = kind

    def initialize_if_empty(self) -> None:
        """Register every importable back-end and elect the preferred default.

        Raises:
            AdapterNotConfiguredError: No back-end library is importable, or
                the preferred back-end is not among the available ones.
        """
        with self._lock:
            if self._adapters:
                return
            available = AutoConfiguration.available_serializers()
            if not available:
                raise AdapterNotConfiguredError(
                    None,
                    reason="no serialization library is importable (install pydantic or dacite)",
                )
            if self._preferred == "auto":
                default = available[0]
            else:
                default = SerializationType.from_name(self._preferred)
                if default not in available:
                    raise AdapterNotConfiguredError(default.value, reason="library is not importable")
            self.initialize({kind: create_adapter(kind) for kind in available}, default)

    def get_adapter(self, kind: SerializationType | None = None) -> SerializerAdapter:
        """Return the adapter for *kind*, or the elected default when omitted."""
        if not self._adapters and self._auto_initialize:
            self.initialize_if_empty()

        target = kind if kind is not None else self._default
        if target is None:
            raise AdapterNotConfiguredError(None, reason="register an adapter and elect a default first")
        adapter = self._adapters.get(target)
        if adapter is None:
            raise AdapterNotConfiguredError(target.value)
        return adapter
