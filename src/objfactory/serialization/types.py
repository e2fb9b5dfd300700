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
"""Serialization back-end identifiers."""

from __future__ import annotations

from enum import Enum

from objfactory.kernel.exceptions import AdapterNotConfiguredError


class SerializationType(Enum):
    """Text serialization back-ends a SerializerProvider can multiplex.

    The value doubles as the configuration name and as the name of the
    package that must be importable for the back-end to be available.
    """

    PYDANTIC = "pydantic"
    DACITE = "dacite"

    @classmethod
    def from_name(cls, name: str) -> SerializationType:
        """Resolve a configuration name (case-insensitive) to a member."""
        normalized = name.strip().lower()
        for member in cls:
            if member.value == normalized:
                return member
        raise AdapterNotConfiguredError(name, reason="unknown serialization type")
