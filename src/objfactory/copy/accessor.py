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
"""Field read/write through an ordered chain of access strategies.

1. A public accessor method (``get_<name>``/``is_<name>``, ``set_<name>``)
   when the class defines one.
2. Normal attribute access (``getattr``/``setattr``), which honours
   properties and ``__setattr__`` overrides.
3. Forced access through ``object.__getattribute__``/``object.__setattr__``,
   which also writes frozen dataclasses and frozen pydantic models.

Each strategy is tried only if the previous one raised.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from objfactory.copy.classifier import primitive_default
from objfactory.copy.types import FieldDescriptor
from objfactory.kernel.exceptions import FieldAccessError

logger = structlog.get_logger(__name__)

_Reader = Callable[[Any], Any]
_Writer = Callable[[Any, Any], None]


def _find_method(owner: type, names: tuple[str, ...]) -> str | None:
    for name in names:
        if callable(getattr(owner, name, None)):
            return name
    return None


class FieldAccessor:
    """Reads and writes one field of instances of *owner*.

    Accessor methods are looked up once, on construction; the strategy
    chain itself runs on every call.
    """

    __slots__ = ("_field", "_owner", "_readers", "_writers", "_null_substitute")

    def __init__(self, owner: type, field: FieldDescriptor) -> None:
        self._field = field
        self._owner = owner
        name = field.name

        readers: list[tuple[str, _Reader]] = []
        writers: list[tuple[str, _Writer]] = []
        if not name.startswith("_"):
            getter_names = (f"get_{name}", f"is_{name}") if field.type_info.base is bool else (f"get_{name}",)
            read_method = _find_method(owner, getter_names)
            write_method = _find_method(owner, (f"set_{name}",))
            if read_method is not None:
                readers.append(("method", lambda instance: getattr(instance, read_method)()))
            if write_method is not None:
                writers.append(("method", lambda instance, value: getattr(instance, write_method)(value)))

        readers.append(("attribute", lambda instance: getattr(instance, name)))
        readers.append(("forced", lambda instance: object.__getattribute__(instance, name)))
        writers.append(("attribute", lambda instance, value: setattr(instance, name, value)))
        writers.append(("forced", lambda instance, value: object.__setattr__(instance, name, value)))

        self._readers = tuple(readers)
        self._writers = tuple(writers)
        self._null_substitute = primitive_default(field.type_info) if field.type_info.primitive else None

    @property
    def field(self) -> FieldDescriptor:
        return self._field

    def get(self, instance: Any) -> Any:
        """Read the field from *instance*.

        Raises:
            FieldAccessError: Every strategy failed.
        """
        last_error: Exception | None = None
        for tier, read in self._readers:
            try:
                return read(instance)
            except Exception as exc:
                self._log_fallback("get", tier, exc)
                last_error = exc
        raise FieldAccessError(self._field.name, self._owner, "get") from last_error

    def set(self, instance: Any, value: Any) -> None:
        """Write *value* into the field of *instance*.

        ``None`` written into a primitive field becomes the primitive's zero.

        Raises:
            FieldAccessError: Every strategy failed.
        """
        if value is None:
            value = self._null_substitute
        last_error: Exception | None = None
        for tier, write in self._writers:
            try:
                write(instance, value)
                return
            except Exception as exc:
                self._log_fallback("set", tier, exc)
                last_error = exc
        raise FieldAccessError(self._field.name, self._owner, "set") from last_error

    def _log_fallback(self, operation: str, tier: str, exc: Exception) -> None:
        logger.debug(
            "accessor_fallback",
            field=self._field.name,
            owner=self._owner.__qualname__,
            operation=operation,
            tier=tier,
            reason=str(exc),
        )
