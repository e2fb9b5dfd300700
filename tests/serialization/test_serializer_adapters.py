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
"""Tests for the pydantic and dacite serializer adapters."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from uuid import UUID

import pytest
from pydantic import BaseModel

from objfactory.serialization.adapters import create_adapter
from objfactory.serialization.adapters.dacite_adapter import DaciteSerializerAdapter
from objfactory.serialization.adapters.pydantic_adapter import PydanticSerializerAdapter, type_adapter_for
from objfactory.serialization.ports.outbound import SerializerAdapter
from objfactory.serialization.types import SerializationType


class Status(Enum):
    ACTIVE = "active"
    BLOCKED = "blocked"


@dataclass
class Address:
    street: str
    number: int


@dataclass
class Customer:
    id: UUID
    name: str
    status: Status
    address: Address
    created_at: datetime
    credit: Decimal
    tags: set[str] = field(default_factory=set)
    previous: list[Address] = field(default_factory=list)
    nickname: Optional[str] = None


@dataclass
class CustomerSummary:
    id: UUID
    name: str


class AddressModel(BaseModel):
    street: str
    number: int


CUSTOMER_ID = UUID("5f0c3c1e-8d1f-4a8e-9a51-2b0f3e4d6c7a")


def make_customer() -> Customer:
    return Customer(
        id=CUSTOMER_ID,
        name="Ada",
        status=Status.ACTIVE,
        address=Address("Main St", 10),
        created_at=datetime(2024, 5, 1, 12, 30),
        credit=Decimal("12.50"),
        tags={"vip"},
        previous=[Address("Old Rd", 3)],
    )


class TestAdapterConformance:
    @pytest.mark.parametrize("adapter", [PydanticSerializerAdapter(), DaciteSerializerAdapter()])
    def test_implements_port(self, adapter):
        assert isinstance(adapter, SerializerAdapter)

    def test_create_adapter_by_type(self):
        assert isinstance(create_adapter(SerializationType.PYDANTIC), PydanticSerializerAdapter)
        assert isinstance(create_adapter(SerializationType.DACITE), DaciteSerializerAdapter)


class TestPydanticSerializerAdapter:
    def test_serialize_dataclass_to_json_text(self):
        text = PydanticSerializerAdapter().serialize(Address("Main St", 10))
        assert json.loads(text) == {"street": "Main St", "number": 10}

    def test_round_trip_preserves_structure(self):
        adapter = PydanticSerializerAdapter()
        customer = make_customer()
        restored = adapter.deserialize(adapter.serialize(customer), Customer)
        assert restored == customer
        assert restored is not customer
        assert restored.address is not customer.address

    def test_deserialize_into_other_type(self):
        adapter = PydanticSerializerAdapter()
        summary = adapter.deserialize(adapter.serialize(make_customer()), CustomerSummary)
        assert summary == CustomerSummary(id=CUSTOMER_ID, name="Ada")

    def test_dataclass_into_pydantic_model(self):
        adapter = PydanticSerializerAdapter()
        model = adapter.deserialize(adapter.serialize(Address("Main St", 10)), AddressModel)
        assert model == AddressModel(street="Main St", number=10)

    def test_deserialize_generic_type(self):
        adapter = PydanticSerializerAdapter()
        text = adapter.serialize({"home": Address("Main St", 10)})
        restored = adapter.deserialize(text, dict[str, AddressModel])
        assert restored == {"home": AddressModel(street="Main St", number=10)}

    def test_invalid_payload_raises(self):
        adapter = PydanticSerializerAdapter()
        with pytest.raises(ValueError):
            adapter.deserialize('{"street": "Main St"}', Address)

    def test_type_adapter_is_memoised(self):
        assert type_adapter_for(list[Address]) is type_adapter_for(list[Address])


class TestDaciteSerializerAdapter:
    def test_serialize_flattens_wrapper_values(self):
        data = json.loads(DaciteSerializerAdapter().serialize(make_customer()))
        assert data["id"] == str(CUSTOMER_ID)
        assert data["status"] == "active"
        assert data["created_at"] == "2024-05-01T12:30:00"
        assert data["credit"] == "12.50"
        assert data["tags"] == ["vip"]
        assert data["address"] == {"street": "Main St", "number": 10}

    def test_serialize_timedelta_as_seconds(self):
        assert DaciteSerializerAdapter().serialize(timedelta(minutes=2)) == "120.0"

    def test_serialize_unknown_type_raises(self):
        with pytest.raises(TypeError):
            DaciteSerializerAdapter().serialize(object())

    def test_round_trip_preserves_structure(self):
        adapter = DaciteSerializerAdapter()
        customer = make_customer()
        restored = adapter.deserialize(adapter.serialize(customer), Customer)
        assert restored == customer
        assert restored.previous[0] is not customer.previous[0]

    def test_deserialize_into_other_type(self):
        adapter = DaciteSerializerAdapter()
        summary = adapter.deserialize(adapter.serialize(make_customer()), CustomerSummary)
        assert summary == CustomerSummary(id=CUSTOMER_ID, name="Ada")

    def test_deserialize_list_of_dataclasses(self):
        adapter = DaciteSerializerAdapter()
        text = adapter.serialize([Address("A", 1), Address("B", 2)])
        assert adapter.deserialize(text, list[Address]) == [Address("A", 1), Address("B", 2)]

    def test_deserialize_mapping_and_tuple(self):
        adapter = DaciteSerializerAdapter()
        assert adapter.deserialize('{"a": {"street": "A", "number": 1}}', dict[str, Address]) == {
            "a": Address("A", 1)
        }
        assert adapter.deserialize("[1, 2, 3]", tuple[int, ...]) == (1, 2, 3)
        assert adapter.deserialize('["x", "x"]', set[str]) == {"x"}

    def test_deserialize_optional(self):
        adapter = DaciteSerializerAdapter()
        assert adapter.deserialize("null", Optional[Address]) is None
        assert adapter.deserialize('{"street": "A", "number": 1}', Optional[Address]) == Address("A", 1)

    def test_deserialize_scalars(self):
        adapter = DaciteSerializerAdapter()
        assert adapter.deserialize('"active"', Status) is Status.ACTIVE
        assert adapter.deserialize(f'"{CUSTOMER_ID}"', UUID) == CUSTOMER_ID
        assert adapter.deserialize('"2024-05-01T12:30:00"', datetime) == datetime(2024, 5, 1, 12, 30)
        assert adapter.deserialize("90", timedelta) == timedelta(seconds=90)

    def test_union_mismatch_raises(self):
        with pytest.raises(ValueError, match="does not match any member"):
            DaciteSerializerAdapter().deserialize('"not-a-number"', Optional[int])

    def test_union_prefers_member_matching_decoded_value(self):
        adapter = DaciteSerializerAdapter()
        assert adapter.deserialize('["two", 1]', list[Union[str, int]]) == ["two", 1]
        assert adapter.deserialize('[1, "two"]', list[Union[int, str]]) == [1, "two"]
