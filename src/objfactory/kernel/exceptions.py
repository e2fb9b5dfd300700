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
"""Unified exception hierarchy for objfactory.

All library exceptions inherit from ObjFactoryException, so callers can
catch the base class to handle every copy failure, or a specific subclass
for targeted handling.

Categories:
- CopyUsageException: caller mistakes, raised before any field is touched
- CopyInfrastructureException: reflective, instantiation and serialization
  failures surfaced while copying
"""

from __future__ import annotations

from typing import Any


def _type_name(target: Any) -> str:
    return getattr(target, "__qualname__", None) or getattr(target, "__name__", None) or repr(target)


# =============================================================================
# Base Exception
# =============================================================================


class ObjFactoryException(Exception):
    """Base exception for all objfactory errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "COPY_NULL_SOURCE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Usage Exceptions
# =============================================================================


class CopyUsageException(ObjFactoryException):
    """Invalid arguments handed to a copy operation. Never retried."""


class NullSourceError(CopyUsageException):
    """The object to be copied is ``None``."""

    def __init__(self) -> None:
        super().__init__("The object to be copied is null.", code="COPY_NULL_SOURCE")


class NullDestinationError(CopyUsageException):
    """The destination instance is ``None``."""

    def __init__(self) -> None:
        super().__init__("The destination object is null.", code="COPY_NULL_DESTINATION")


class EmptyInputError(CopyUsageException):
    """A bulk copy was asked to copy an empty (or missing) collection."""

    def __init__(self) -> None:
        super().__init__("The collection to be copied has no elements.", code="COPY_EMPTY_INPUT")


class InvalidTargetError(CopyUsageException):
    """The target collection factory of a bulk copy is missing."""

    def __init__(self, message: str = "The specified collection type for return is null.") -> None:
        super().__init__(message, code="COPY_INVALID_TARGET")


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class CopyInfrastructureException(ObjFactoryException):
    """Failures of the reflective or serialization machinery during a copy."""


class FieldAccessError(CopyInfrastructureException):
    """Every accessor strategy failed to read or write a field."""

    def __init__(self, field_name: str, owner: type, operation: str) -> None:
        self.field_name = field_name
        self.owner = owner
        self.operation = operation
        super().__init__(
            f"Error trying to {operation} value of field '{field_name}' on {_type_name(owner)}",
            code="COPY_FIELD_ACCESS",
            context={"field": field_name, "owner": _type_name(owner), "operation": operation},
        )


class CloneError(CopyInfrastructureException):
    """A value could not be cloned through its serialized form."""

    def __init__(self, type_name: str, reason: str = "") -> None:
        self.type_name = type_name
        message = f"Failed making field copy for type '{type_name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code="COPY_CLONE_FAILED", context={"type": type_name})


class AdapterNotConfiguredError(CopyInfrastructureException):
    """No serializer adapter is registered, or no default has been elected."""

    def __init__(self, serialization_type: str | None = None, reason: str = "") -> None:
        self.serialization_type = serialization_type
        if serialization_type is None:
            headline = "No default serializer adapter has been configured"
        else:
            headline = f"No serializer adapter registered for '{serialization_type}'"
        message = f"{headline}: {reason}" if reason else headline
        super().__init__(
            message,
            code="SERIALIZER_NOT_CONFIGURED",
            context={"serialization_type": serialization_type},
        )


class InstantiationError(CopyInfrastructureException):
    """A blank instance of the target type could not be created."""

    def __init__(self, target_type: Any, reason: str = "") -> None:
        self.target_type = target_type
        message = f"Could not instantiate {_type_name(target_type)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code="COPY_INSTANTIATION", context={"type": _type_name(target_type)})
