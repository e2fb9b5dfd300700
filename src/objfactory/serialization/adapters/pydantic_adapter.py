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
"""Pydantic-backed serializer adapter (the default back-end)."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

import pydantic_core
from pydantic import TypeAdapter


@lru_cache(maxsize=1024)
def _cached_type_adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def type_adapter_for(type_: Any) -> TypeAdapter[Any]:
    """Return a (memoised when hashable) TypeAdapter for *type_*."""
    try:
        hash(type_)
    except TypeError:
        return TypeAdapter(type_)
    return _cached_type_adapter(type_)


class PydanticSerializerAdapter:
    """SerializerAdapter using ``pydantic_core.to_json`` and ``TypeAdapter``.

    Serialization infers the schema from the runtime value, so dataclasses,
    pydantic models, enums, temporal types, UUIDs and containers of those all
    round-trip. Deserialization validates against the requested type, which
    is what turns a serialized ``Foo`` into a brand new ``Bar``.
    """

    def serialize(self, value: Any) -> str:
        return pydantic_core.to_json(value).decode()

    def deserialize(self, text: str, type_: Any) -> Any:
        return type_adapter_for(type_).validate_json(text)
