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
"""Outbound port for lazy-loading placeholders."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LazyProxyResolver(Protocol):
    """Recognises lazy placeholders and resolves them without forcing loads.

    Implementations adapt a lazy-loading layer (an ORM session, a remote
    reference) to the copy engine.
    """

    def is_lazy_placeholder(self, value: Any) -> bool: ...

    def is_uninitialized(self, placeholder: Any) -> bool: ...

    def real_type(self, placeholder: Any) -> type: ...

    def materialize(self, placeholder: Any) -> Any: ...
