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
"""Blank-instance creation for destination types."""

from __future__ import annotations

import dataclasses
import inspect
from typing import Any, TypeVar

import structlog

from objfactory.copy.introspection import own_annotations
from objfactory.kernel.exceptions import InstantiationError

T = TypeVar("T")

logger = structlog.get_logger(__name__)


def new_instance(cls: type[T]) -> T:
    """Create an instance of *cls* without supplying field values.

    Pydantic models are built with ``model_construct()`` (defaults applied,
    no validation). Other classes are called with no arguments; when the
    constructor requires arguments the instance is allocated with
    ``__new__`` and every declared field receives its default, or ``None``.

    Raises:
        InstantiationError: *cls* is not a class, is abstract, or cannot be
            allocated.
    """
    if not isinstance(cls, type):
        raise InstantiationError(cls, reason="not a class")
    if inspect.isabstract(cls):
        raise InstantiationError(cls, reason="abstract class")

    model_construct = getattr(cls, "model_construct", None)
    if callable(model_construct):
        try:
            return model_construct()
        except Exception as exc:
            raise InstantiationError(cls, reason=str(exc)) from exc

    try:
        return cls()
    except TypeError as exc:
        logger.debug("instantiation_fallback", type=cls.__qualname__, reason=str(exc))

    try:
        instance = cls.__new__(cls)
        for name, value in _declared_defaults(cls).items():
            object.__setattr__(instance, name, value)
    except (TypeError, AttributeError) as exc:
        raise InstantiationError(cls, reason=str(exc)) from exc
    return instance


def _declared_defaults(cls: type) -> dict[str, Any]:
    if dataclasses.is_dataclass(cls):
        defaults: dict[str, Any] = {}
        for field in dataclasses.fields(cls):
            if field.default is not dataclasses.MISSING:
                defaults[field.name] = field.default
            elif field.default_factory is not dataclasses.MISSING:
                defaults[field.name] = field.default_factory()
            else:
                defaults[field.name] = None
        return defaults

    defaults = {}
    for klass in reversed(cls.__mro__):
        for name in own_annotations(klass):
            if name.startswith("__"):
                continue
            value = getattr(cls, name, None)
            defaults[name] = None if inspect.isdatadescriptor(value) else value
    return defaults
