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
"""FieldCatalog: cached field discovery, field mappings and copy plans."""

from __future__ import annotations

import dataclasses
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeVar

import structlog

from objfactory.copy.accessor import FieldAccessor
from objfactory.copy.classifier import describe, strip_annotated
from objfactory.copy.coercion import classify
from objfactory.copy.directives import field_directives
from objfactory.copy.exclusions import eligible_fields
from objfactory.copy.introspection import declaring_classes, is_constant, own_annotations
from objfactory.copy.types import ClassPairKey, CopyPlan, FieldDescriptor, FieldPair

logger = structlog.get_logger(__name__)

K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class _ClassFields:
    declared: tuple[FieldDescriptor, ...]
    by_key: Mapping[str, FieldDescriptor]


class FieldCatalog:
    """Registry of per-class field keys and per-type-pair copy plans.

    Construct one per application and share it by reference. Every cache is
    populated at most once per key (concurrent callers racing on the same
    key converge on one result) and is never invalidated.

    Caches:
    - per declaring class: its declared fields and their normalised keys;
    - per (source, destination) pair: the source fields eligible for copy;
    - per (source, destination) pair: the resolved :class:`CopyPlan`.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._class_fields: dict[type, _ClassFields] = {}
        self._eligible: dict[ClassPairKey, tuple[FieldDescriptor, ...]] = {}
        self._plans: dict[ClassPairKey, CopyPlan] = {}

    # ------------------------------------------------------------------
    # Field discovery
    # ------------------------------------------------------------------

    def declared_fields(self, cls: type) -> tuple[FieldDescriptor, ...]:
        """Fields declared by *cls* itself, in declaration order."""
        return self._class_entry(cls).declared

    def field_keys(self, cls: type) -> Mapping[str, FieldDescriptor]:
        """Normalised key -> field for the fields declared by *cls* itself."""
        return self._class_entry(cls).by_key

    def fields_of(self, cls: type) -> tuple[FieldDescriptor, ...]:
        """All instance fields of *cls*, inherited ones included.

        Base-class fields come first; a field redeclared by a subclass keeps
        its position but takes the subclass declaration.
        """
        fields: dict[str, FieldDescriptor] = {}
        for klass in declaring_classes(cls):
            for field in self.declared_fields(klass):
                fields[field.name] = field
        return tuple(fields.values())

    # ------------------------------------------------------------------
    # Mappings
    # ------------------------------------------------------------------

    def fields_to_copy(self, source_type: type, destination_type: type) -> tuple[FieldDescriptor, ...]:
        """Source fields that may be copied into *destination_type*."""
        return self._compute_if_absent(
            self._eligible,
            ClassPairKey(source_type, destination_type),
            lambda key: eligible_fields(
                key.source,
                self.fields_of(key.source),
                key.destination,
                self.fields_of(key.destination),
            ),
        )

    def field_mapping(self, source_type: type, destination_type: type) -> dict[FieldDescriptor, FieldDescriptor]:
        """``{source field: destination field}`` joined on normalised keys.

        Destination fields without an eligible source counterpart are absent.
        """
        source_fields = self.fields_to_copy(source_type, destination_type)
        destination_fields = [field for field in self.fields_of(destination_type) if not field.constant]
        if not source_fields or not destination_fields:
            return {}

        source_keys = self._key_map(source_fields)
        destination_keys = self._key_map(destination_fields)
        return {field: destination_keys[key] for key, field in source_keys.items() if key in destination_keys}

    def plan_for(self, source_type: type, destination_type: type) -> CopyPlan:
        """The cached copy plan for the (source, destination) pair."""
        return self._compute_if_absent(
            self._plans,
            ClassPairKey(source_type, destination_type),
            self._build_plan,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _build_plan(self, key: ClassPairKey) -> CopyPlan:
        pairs = tuple(
            FieldPair(
                source=source,
                destination=destination,
                getter=FieldAccessor(key.source, source).get,
                setter=FieldAccessor(key.destination, destination).set,
                kind=classify(source.type_info, destination.type_info),
            )
            for source, destination in self.field_mapping(key.source, key.destination).items()
        )
        logger.debug(
            "copy_plan_built",
            source=key.source.__qualname__,
            destination=key.destination.__qualname__,
            pairs=len(pairs),
        )
        return CopyPlan(key=key, pairs=pairs)

    def _class_entry(self, cls: type) -> _ClassFields:
        return self._compute_if_absent(self._class_fields, cls, self._scan_class)

    def _scan_class(self, cls: type) -> _ClassFields:
        declared: list[FieldDescriptor] = []
        for name, annotation in own_annotations(cls).items():
            if name.startswith("__") and name.endswith("__"):
                continue
            base = strip_annotated(annotation)
            if isinstance(base, dataclasses.InitVar):
                continue
            excluded, copy_name = field_directives(annotation)
            declared.append(
                FieldDescriptor(
                    owner=cls,
                    name=name,
                    annotation=base,
                    type_info=describe(base),
                    excluded=excluded,
                    copy_name=copy_name,
                    constant=is_constant(annotation),
                )
            )
        by_key = _keep_first(((field.key, field) for field in declared), owner=cls)
        return _ClassFields(declared=tuple(declared), by_key=MappingProxyType(by_key))

    def _key_map(self, fields: Iterable[FieldDescriptor]) -> dict[str, FieldDescriptor]:
        """Join key -> field for *fields*, read through the per-class key cache."""
        ordered = tuple(fields)
        wanted = set(ordered)
        owners = dict.fromkeys(field.owner for field in ordered)
        entries = (
            (key, field)
            for owner in owners
            for key, field in self.field_keys(owner).items()
            if field in wanted
        )
        return _keep_first(entries, owner=None)

    def _compute_if_absent(self, cache: dict[K, V], key: K, factory: Callable[[K], V]) -> V:
        value = cache.get(key)
        if value is not None:
            return value
        with self._lock:
            value = cache.get(key)
            if value is None:
                value = factory(key)
                cache[key] = value
            return value


def _keep_first(
    entries: Iterable[tuple[str, FieldDescriptor]],
    owner: type | None,
) -> dict[str, FieldDescriptor]:
    result: dict[str, FieldDescriptor] = {}
    for key, field in entries:
        kept = result.setdefault(key, field)
        if kept is not field:
            logger.warning(
                "duplicate_field_key",
                key=key,
                kept=kept.name,
                ignored=field.name,
                type=(owner or field.owner).__qualname__,
            )
    return result
