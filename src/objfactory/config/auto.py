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
"""Provider detection by importability (inspired by Spring Boot auto-config)."""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from objfactory.serialization.types import SerializationType


class AutoConfiguration:
    """Detect available back-end providers by checking importable packages."""

    @staticmethod
    def is_available(module_name: str) -> bool:
        """Check if a Python package is importable."""
        try:
            importlib.import_module(module_name)
            return True
        except ImportError:
            return False

    @staticmethod
    def available_serializers() -> list[SerializationType]:
        """Serialization back-ends whose library is importable, in preference order."""
        # Deferred: objfactory.serialization.provider imports this module.
        from objfactory.serialization.types import SerializationType

        return [kind for kind in SerializationType if AutoConfiguration.is_available(kind.value)]

    @staticmethod
    def detect_serializer_provider() -> SerializationType | None:
        """Detect the preferred available serialization back-end."""
        available = AutoConfiguration.available_serializers()
        return available[0] if available else None
