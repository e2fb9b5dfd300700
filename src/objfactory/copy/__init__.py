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
"""objfactory copy: structural object copy engine."""

from objfactory.copy.catalog import FieldCatalog
from objfactory.copy.cloning import CloneEngine
from objfactory.copy.coercion import ValueCoercionEngine
from objfactory.copy.copier import ObjectCopier
from objfactory.copy.directives import CopyExclude, CopyName, copy_exclusions, object_constructor
from objfactory.copy.instantiation import new_instance
from objfactory.copy.types import ClassPairKey, CopyPlan, FieldDescriptor, FieldPair, ValueKind

__all__ = [
    # Entry point
    "ObjectCopier",
    # Directives
    "CopyExclude",
    "CopyName",
    "copy_exclusions",
    "object_constructor",
    # Engine
    "CloneEngine",
    "FieldCatalog",
    "ValueCoercionEngine",
    "new_instance",
    # Types
    "ClassPairKey",
    "CopyPlan",
    "FieldDescriptor",
    "FieldPair",
    "ValueKind",
]
