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
"""Tests for the objfactory exception hierarchy."""

import pytest

from objfactory.kernel.exceptions import (
    AdapterNotConfiguredError,
    CloneError,
    CopyInfrastructureException,
    CopyUsageException,
    EmptyInputError,
    FieldAccessError,
    InstantiationError,
    InvalidTargetError,
    NullDestinationError,
    NullSourceError,
    ObjFactoryException,
)


class Invoice:
    pass


class TestObjFactoryException:
    def test_basic_creation(self):
        exc = ObjFactoryException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_error_code(self):
        exc = ObjFactoryException("bad copy", code="COPY_001")
        assert exc.code == "COPY_001"

    def test_with_context(self):
        exc = ObjFactoryException("failed", code="X", context={"field": "total"})
        assert exc.context["field"] == "total"

    def test_context_defaults_to_empty_dict(self):
        exc = ObjFactoryException("test")
        exc.context["key"] = "value"
        exc2 = ObjFactoryException("test2")
        assert exc2.context == {}


class TestUsageErrors:
    def test_null_source_message(self):
        exc = NullSourceError()
        assert str(exc) == "The object to be copied is null."
        assert exc.code == "COPY_NULL_SOURCE"

    def test_null_destination_message(self):
        exc = NullDestinationError()
        assert str(exc) == "The destination object is null."
        assert exc.code == "COPY_NULL_DESTINATION"

    def test_empty_input_message(self):
        exc = EmptyInputError()
        assert str(exc) == "The collection to be copied has no elements."
        assert exc.code == "COPY_EMPTY_INPUT"

    def test_invalid_target_default_message(self):
        exc = InvalidTargetError()
        assert str(exc) == "The specified collection type for return is null."
        assert exc.code == "COPY_INVALID_TARGET"

    def test_invalid_target_custom_message(self):
        assert str(InvalidTargetError("no append")) == "no append"


class TestInfrastructureErrors:
    def test_field_access_error_names_field_and_owner(self):
        exc = FieldAccessError("total", Invoice, "set")
        assert exc.field_name == "total"
        assert exc.owner is Invoice
        assert exc.operation == "set"
        assert "total" in str(exc)
        assert "Invoice" in str(exc)
        assert exc.context == {"field": "total", "owner": "Invoice", "operation": "set"}

    def test_clone_error_carries_type_name(self):
        exc = CloneError("Invoice", reason="circular reference")
        assert exc.type_name == "Invoice"
        assert str(exc) == "Failed making field copy for type 'Invoice': circular reference"
        assert exc.context == {"type": "Invoice"}

    def test_clone_error_without_reason(self):
        assert str(CloneError("Invoice")) == "Failed making field copy for type 'Invoice'"

    def test_adapter_not_configured_without_type(self):
        exc = AdapterNotConfiguredError()
        assert exc.serialization_type is None
        assert exc.code == "SERIALIZER_NOT_CONFIGURED"
        assert "No default serializer adapter" in str(exc)

    def test_adapter_not_configured_with_type(self):
        exc = AdapterNotConfiguredError("dacite", reason="library is not importable")
        assert exc.serialization_type == "dacite"
        assert str(exc) == "No serializer adapter registered for 'dacite': library is not importable"

    def test_instantiation_error(self):
        exc = InstantiationError(Invoice, reason="abstract class")
        assert exc.target_type is Invoice
        assert str(exc) == "Could not instantiate Invoice: abstract class"


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [NullSourceError, NullDestinationError, EmptyInputError, InvalidTargetError],
    )
    def test_usage_errors(self, exc_type):
        assert issubclass(exc_type, CopyUsageException)
        assert issubclass(exc_type, ObjFactoryException)

    @pytest.mark.parametrize(
        "exc_type",
        [FieldAccessError, CloneError, AdapterNotConfiguredError, InstantiationError],
    )
    def test_infrastructure_errors(self, exc_type):
        assert issubclass(exc_type, CopyInfrastructureException)
        assert issubclass(exc_type, ObjFactoryException)

    def test_catch_all_objfactory_exceptions(self):
        exceptions = [
            NullSourceError(),
            EmptyInputError(),
            CloneError("Invoice"),
            FieldAccessError("total", Invoice, "get"),
        ]
        for exc in exceptions:
            with pytest.raises(ObjFactoryException):
                raise exc
