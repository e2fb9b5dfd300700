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
"""Tests for CloneEngine: binary and text round trips, container sampling."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

import pytest
from structlog.testing import capture_logs

from objfactory.copy.cloning import CloneEngine
from objfactory.kernel.exceptions import CloneError
from objfactory.serialization.adapters.pydantic_adapter import PydanticSerializerAdapter


class Level(Enum):
    LOW = 1
    HIGH = 2


@dataclass
class Address:
    street: str = ""
    city: str = ""


@dataclass
class Contact:
    name: str = ""
    addresses: list[Address] = field(default_factory=list)


@dataclass
class ContactView:
    name: str = ""
    addresses: list[Address] = field(default_factory=list)


class Opaque:
    pass


class RecordingSerializer:
    """Delegates to pydantic and records every call."""

    def __init__(self) -> None:
        self.inner = PydanticSerializerAdapter()
        self.targets: list[Any] = []

    def serialize(self, value: Any) -> str:
        return self.inner.serialize(value)

    def deserialize(self, text: str, type_: Any) -> Any:
        self.targets.append(type_)
        return self.inner.deserialize(text, type_)


class FailingSerializer:
    def __init__(self, error: Exception) -> None:
        self.error = error

    def serialize(self, value: Any) -> str:
        raise self.error

    def deserialize(self, text: str, type_: Any) -> Any:
        raise AssertionError("not reached")


@pytest.fixture
def serializer() -> RecordingSerializer:
    return RecordingSerializer()


@pytest.fixture
def engine(serializer) -> CloneEngine:
    return CloneEngine(serializer)


class TestPassThrough:
    def test_none(self, engine):
        assert engine.clone(None, Address) is None

    def test_primitives_are_returned_as_is(self, engine, serializer):
        assert engine.clone(5, int) == 5
        assert engine.clone(True, bool) is True
        assert serializer.targets == []

    def test_enums_are_returned_as_is(self, engine):
        assert engine.clone(Level.HIGH, Level) is Level.HIGH

    def test_serializer_is_exposed(self, engine, serializer):
        assert engine.serializer is serializer


class TestSimpleValues:
    @pytest.mark.parametrize(
        "value",
        [Decimal("12.50"), datetime(2024, 5, 1, 12, 30), "text", b"raw"],
    )
    def test_binary_round_trip(self, engine, serializer, value):
        assert engine.clone(value, type(value)) == value
        assert serializer.targets == []

    def test_scalar_array_is_independent(self, engine):
        original = bytearray(b"abc")
        copied = engine.clone(original, bytearray)
        assert copied == original
        assert copied is not original

    def test_optional_wrapper_to_primitive_target(self, engine, serializer):
        assert engine.clone(3, int, Optional[int]) == 3
        assert serializer.targets == []


class TestStructuredValues:
    def test_object_is_copied_deeply(self, engine):
        original = Contact("Ann", [Address("Main St", "Springfield")])
        copied = engine.clone(original, Contact)

        assert copied == original
        assert copied is not original
        assert copied.addresses[0] is not original.addresses[0]

    def test_object_is_rebuilt_as_target_type(self, engine, serializer):
        copied = engine.clone(Contact("Ann", [Address("Elm St", "Shelbyville")]), ContactView, Contact)

        assert copied == ContactView("Ann", [Address("Elm St", "Shelbyville")])
        assert serializer.targets == [ContactView]

    def test_missing_declaration_uses_runtime_type(self, engine):
        copied = engine.clone(Address("Oak Ave", "Capital City"))
        assert copied == Address("Oak Ave", "Capital City")

    def test_failure_is_wrapped(self, engine):
        with pytest.raises(CloneError) as exc_info:
            engine.clone(Opaque(), Opaque)

        assert exc_info.value.type_name == "Opaque"
        assert exc_info.value.code == "COPY_CLONE_FAILED"
        assert exc_info.value.__cause__ is not None

    def test_clone_error_is_not_wrapped_twice(self):
        original = CloneError("Inner", reason="boom")
        engine = CloneEngine(FailingSerializer(original))

        with pytest.raises(CloneError) as exc_info:
            engine.clone(Address(), Address)

        assert exc_info.value is original


class TestContainers:
    def test_declared_element_type_is_used(self, engine, serializer):
        original = [Address("Main St", "Springfield")]
        copied = engine.clone(original, list[Address])

        assert copied == original
        assert copied[0] is not original[0]
        assert serializer.targets == [list[Address]]

    def test_mapping_with_declared_types(self, engine):
        original = {"home": Address("Main St", "Springfield")}
        copied = engine.clone(original, dict[str, Address])

        assert copied == original
        assert copied["home"] is not original["home"]

    def test_empty_declared_container(self, engine):
        assert engine.clone([], list[int]) == []

    def test_unresolved_element_type_is_sampled_as_nullable(self, engine, serializer):
        original = [None, Address("Main St", "Springfield")]
        copied = engine.clone(original, list[Any])

        assert copied == original
        assert copied[1] is not original[1]
        assert serializer.targets == [list[Optional[Address]]]

    def test_sample_without_nulls_is_not_optional(self, engine, serializer):
        original = [Address("Main St", "Springfield"), Address("Elm St", "Shelbyville")]
        assert engine.clone(original, list[Any]) == original
        assert serializer.targets == [list[Address]]

    def test_bare_container_is_sampled(self, engine, serializer):
        assert engine.clone({1, 2, 3}, set) == {1, 2, 3}
        assert serializer.targets == [set[int]]

    def test_mapping_samples_value_types(self, engine, serializer):
        original = {"work": None, "home": Address("Main St", "Springfield")}
        copied = engine.clone(original, dict)

        assert copied == original
        assert serializer.targets == [dict[str, Optional[Address]]]

    def test_mixed_elements_are_sampled_as_union(self, engine, serializer):
        original = [1, "two", Address("Main St", "Springfield")]
        copied = engine.clone(original, list[Any])

        assert copied == original
        assert copied[2] is not original[2]
        assert serializer.targets == [list[Union[int, str, Address]]]

    def test_mixed_mapping_values_under_any(self, engine, serializer):
        original = {"a": 1, "b": "two", "c": None}

        assert engine.clone(original, dict[str, Any]) == original
        assert serializer.targets == [dict[str, Optional[Union[int, str]]]]

    def test_empty_unresolved_container_gives_none(self, engine):
        with capture_logs() as logs:
            assert engine.clone([], list) is None

        assert [entry["event"] for entry in logs] == ["collection_element_type_unresolved"]
        assert logs[0]["log_level"] == "warning"

    def test_all_none_elements_give_none(self, engine):
        assert engine.clone([None, None], list[Any]) is None
