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
"""Declared-field discovery from class annotations."""

from __future__ import annotations

import inspect
from typing import Any, ClassVar, get_origin

import structlog

from objfactory.copy.classifier import strip_annotated

logger = structlog.get_logger(__name__)

_FRAMEWORK_MODULES = ("pydantic", "typing")


def declaring_classes(cls: type) -> list[type]:
    """Classes of *cls*'s MRO that may declare fields, base-most first."""
    return [
        klass
        for klass in reversed(cls.__mro__)
        if klass is not object and not klass.__module__.startswith(_FRAMEWORK_MODULES)
    ]


def own_annotations(klass: type) -> dict[str, Any]:
    """Annotations declared by *klass* itself, evaluated when possible.

    String annotations that cannot be evaluated (names only importable under
    ``TYPE_CHECKING``, classes local to a function) are returned unevaluated;
    the copy engine then treats those fields by their runtime values.
    """
    try:
        return dict(inspect.get_annotations(klass, eval_str=True))
    except (NameError, SyntaxError, TypeError, AttributeError) as exc:
        logger.debug("annotations_unresolved", type=klass.__qualname__, reason=str(exc))
        return dict(inspect.get_annotations(klass))


def is_constant(annotation: Any) -> bool:
    """``ClassVar`` annotations declare constants, which are never copied."""
    annotation = strip_annotated(annotation)
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar
