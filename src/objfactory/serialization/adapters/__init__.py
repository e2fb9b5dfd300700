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
"""Built-in serializer adapter implementations."""

from __future__ import annotations

from objfactory.serialization.ports.outbound import SerializerAdapter
from objfactory.serialization.types import SerializationType


def create_adapter(kind: SerializationType) -> SerializerAdapter:
    """Instantiate the built-in adapter for *kind*, importing its library lazily."""
    if kind is SerializationType.DACITE:
        from objfactory.serialization.adapters.dacite_adapter import DaciteSerializerAdapter

        return DaciteSerializerAdapter()

    from objfactory.serialization.adapters.pydantic_adapter import PydanticSerializerAdapter

    return PydanticSerializerAdapter()


__all__ = ["create_adapter"]
