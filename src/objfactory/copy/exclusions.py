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
"""Exclusion resolution: which source fields may be copied into a destination."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from objfactory.copy.directives import class_exclusions
from objfactory.copy.types import FieldDescriptor

logger = structlog.get_logger(__name__)


def exclusion_set(
    source_type: type,
    source_fields: Sequence[FieldDescriptor],
    destination_type: type,
    destination_fields: Sequence[FieldDescriptor],
) -> frozenset[FieldDescriptor]:
    """Source fields that must not be copied into *destination_type*.

    The union of:
    - constants;
    - names excluded at class level on the destination (``object_constructor``
      and ``copy_exclusions``) or on the source (``copy_exclusions`` only),
      matched against the source fields' normalised keys;
    - source fields marked ``CopyExclude``;
    - source fields whose destination counterpart is marked ``CopyExclude``.
    """
    excluded: set[FieldDescriptor] = {field for field in source_fields if field.constant}

    _exclude_listed(excluded, source_fields, class_exclusions(destination_type, include_object_constructor=True))
    _exclude_listed(excluded, source_fields, class_exclusions(source_type, include_object_constructor=False))

    excluded.update(field for field in source_fields if field.excluded)

    by_key: dict[str, FieldDescriptor] = {}
    for field in source_fields:
        by_key.setdefault(field.key, field)
    for field in destination_fields:
        if field.excluded and field.key in by_key:
            excluded.add(by_key[field.key])

    return frozenset(excluded)


def eligible_fields(
    source_type: type,
    source_fields: Sequence[FieldDescriptor],
    destination_type: type,
    destination_fields: Sequence[FieldDescriptor],
) -> tuple[FieldDescriptor, ...]:
    """*source_fields* minus the exclusion set, in declaration order."""
    excluded = exclusion_set(source_type, source_fields, destination_type, destination_fields)
    return tuple(field for field in source_fields if field not in excluded)


def _exclude_listed(
    excluded: set[FieldDescriptor],
    source_fields: Sequence[FieldDescriptor],
    names: Iterable[str],
) -> None:
    for name in names:
        wanted = name.lower()
        match = next((field for field in source_fields if field.key == wanted), None)
        if match is None:
            logger.debug("exclusion_not_found", field=name)
            continue
        excluded.add(match)
