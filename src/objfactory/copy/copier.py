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
"""ObjectCopier: public entry point of the structural copy engine."""

from __future__ import annotations

import threading
from collections.abc import Callable, Collection, Iterable
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from typing import Any, TypeVar, overload

from objfactory.copy.catalog import FieldCatalog
from objfactory.copy.cloning import CloneEngine
from objfactory.copy.coercion import ValueCoercionEngine
from objfactory.copy.instantiation import new_instance
from objfactory.copy.types import CopyPlan, FieldPair
from objfactory.kernel.exceptions import (
    EmptyInputError,
    InvalidTargetError,
    NullDestinationError,
    NullSourceError,
)
from objfactory.proxy.adapters.lazy_reference import LazyReferenceResolver
from objfactory.proxy.ports.outbound import LazyProxyResolver
from objfactory.proxy.unwrapper import ProxyUnwrapper
from objfactory.serialization.provider import SerializerProvider
from objfactory.serialization.types import SerializationType

T = TypeVar("T")
C = TypeVar("C")


class ObjectCopier:
    """Copies objects field by field, across types that share field names.

    For each field pair of the cached :class:`CopyPlan` the copier reads the
    source value, replaces lazy placeholders, coerces the value for the
    destination field and writes it. Pairs of one copy run concurrently on a
    shared worker pool; every call returns only after all pairs are applied.

    Usage::

        copier = ObjectCopier()
        entity = copier.copy(dto, UserEntity)
        copier.copy_into(dto, existing_entity)
        entities = copier.copy_all(dtos, UserEntity)

    Args:
        catalog: Field/plan registry; a private one is created when omitted.
        serializers: Provider of the text serializer used for clones.
        serialization_type: Serializer back-end to use instead of the
            provider's default.
        proxy_resolver: Lazy placeholder boundary; defaults to
            :class:`LazyReferenceResolver`.
        executor: Worker pool for field pairs. When omitted the copier owns
            a ``ThreadPoolExecutor`` created on first use.
        max_workers: Size of the owned pool (``None`` for the default).
        parallel: ``False`` applies field pairs one after another.

    Raises:
        AdapterNotConfiguredError: The serializer provider has no usable
            adapter.
    """

    def __init__(
        self,
        catalog: FieldCatalog | None = None,
        serializers: SerializerProvider | None = None,
        *,
        serialization_type: SerializationType | None = None,
        proxy_resolver: LazyProxyResolver | None = None,
        executor: Executor | None = None,
        max_workers: int | None = None,
        parallel: bool = True,
    ) -> None:
        self._catalog = catalog if catalog is not None else FieldCatalog()
        self._serializers = serializers if serializers is not None else SerializerProvider()
        self._coercion = ValueCoercionEngine(CloneEngine(self._serializers.get_adapter(serialization_type)))
        self._unwrapper = ProxyUnwrapper(proxy_resolver if proxy_resolver is not None else LazyReferenceResolver())
        self._executor = executor
        self._owns_executor = executor is None
        self._max_workers = max_workers
        self._parallel = parallel
        self._executor_lock = threading.Lock()
        self._worker_state = threading.local()

    @property
    def catalog(self) -> FieldCatalog:
        return self._catalog

    # ------------------------------------------------------------------
    # Single objects
    # ------------------------------------------------------------------

    @overload
    def copy(self, source: T) -> T: ...

    @overload
    def copy(self, source: Any, dest_type: type[T]) -> T: ...

    def copy(self, source: Any, dest_type: type[Any] | None = None) -> Any:
        """Return a new *dest_type* (default: the source's type) filled from *source*.

        Raises:
            NullSourceError: *source* is ``None``.
            InstantiationError: No blank *dest_type* instance can be made.
        """
        if source is None:
            raise NullSourceError()
        destination = new_instance(dest_type if dest_type is not None else type(source))
        self.copy_into(source, destination)
        return destination

    def copy_into(self, source: Any, destination: Any) -> None:
        """Copy every mapped field of *source* into the existing *destination*.

        Fields present on only one side are left untouched.

        Raises:
            NullSourceError: *source* is ``None``.
            NullDestinationError: *destination* is ``None``.
            FieldAccessError: A field could not be read or written.
            CloneError: A value could not be cloned.
        """
        if source is None:
            raise NullSourceError()
        if destination is None:
            raise NullDestinationError()

        plan = self._catalog.plan_for(type(source), type(destination))
        if not self._parallel or len(plan) < 2 or getattr(self._worker_state, "active", False):
            for pair in plan:
                self._apply(pair, source, destination)
            return
        self._apply_concurrently(plan, source, destination)

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    @overload
    def copy_all(self, sources: Collection[T] | None) -> list[T]: ...

    @overload
    def copy_all(self, sources: Collection[Any] | None, dest_type: type[T]) -> list[T]: ...

    def copy_all(self, sources: Collection[Any] | None, dest_type: type[Any] | None = None) -> list[Any]:
        """Copy each element of *sources*, as *dest_type* when given, into a list.

        Raises:
            EmptyInputError: *sources* is ``None`` or empty.
        """
        self._verify_sources(sources)
        return [self.copy(source, dest_type) for source in sources]  # type: ignore[union-attr]

    def copy_all_into(
        self,
        sources: Collection[Any] | None,
        collection_factory: Callable[[], C] | None,
        dest_type: type[Any] | None = None,
    ) -> C:
        """Copy each element of *sources* into a collection made by *collection_factory*.

        The factory is called with no arguments; the result is filled with
        ``append`` (sequences, deques) or ``add`` (sets).

        Raises:
            EmptyInputError: *sources* is ``None`` or empty.
            InvalidTargetError: *collection_factory* is ``None``, or its
                result accepts neither ``append`` nor ``add``.
        """
        self._verify_sources(sources)
        if collection_factory is None:
            raise InvalidTargetError()

        target = collection_factory()
        insert = getattr(target, "append", None) or getattr(target, "add", None)
        if not callable(insert):
            raise InvalidTargetError(
                f"The collection type for return ({type(target).__qualname__}) supports neither append nor add."
            )
        for copied in self._copies(sources, dest_type):  # type: ignore[arg-type]
            insert(copied)
        return target

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Shut down the worker pool if this copier created it."""
        with self._executor_lock:
            if self._owns_executor and self._executor is not None:
                self._executor.shutdown(wait=True)
                self._executor = None

    def __enter__(self) -> ObjectCopier:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _verify_sources(sources: Collection[Any] | None) -> None:
        if not sources:
            raise EmptyInputError()

    def _copies(self, sources: Iterable[Any], dest_type: type[Any] | None) -> Iterable[Any]:
        for source in sources:
            yield self.copy(source, dest_type)

    def _apply(self, pair: FieldPair, source: Any, destination: Any) -> None:
        value = self._unwrapper.unwrap(pair.getter(source))
        pair.setter(destination, self._coercion.resolve(pair.source, pair.destination, value, pair.kind))

    def _apply_in_worker(self, pair: FieldPair, source: Any, destination: Any) -> None:
        self._worker_state.active = True
        try:
            self._apply(pair, source, destination)
        finally:
            self._worker_state.active = False

    def _apply_concurrently(self, plan: CopyPlan, source: Any, destination: Any) -> None:
        executor = self._get_executor()
        futures: list[Future[None]] = [
            executor.submit(self._apply_in_worker, pair, source, destination) for pair in plan
        ]
        wait(futures)
        for future in futures:
            future.result()

    def _get_executor(self) -> Executor:
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="objfactory-copy",
                )
            return self._executor
