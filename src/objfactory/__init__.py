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
"""objfactory: structural object copies across same-shaped types."""

from objfactory.auto_configuration import build_object_copier
from objfactory.copy import (
    CopyExclude,
    CopyName,
    FieldCatalog,
    ObjectCopier,
    copy_exclusions,
    object_constructor,
)
from objfactory.kernel import (
    AdapterNotConfiguredError,
    CloneError,
    EmptyInputError,
    FieldAccessError,
    InstantiationError,
    InvalidTargetError,
    NullDestinationError,
    NullSourceError,
    ObjFactoryException,
)
from objfactory.proxy import LazyReference
from objfactory.serialization import SerializationType, SerializerProvider

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Copy
    "ObjectCopier",
    "FieldCatalog",
    "build_object_copier",
    "CopyExclude",
    "CopyName",
    "copy_exclusions",
    "object_constructor",
    # Serialization
    "SerializationType",
    "SerializerProvider",
    # Proxy
    "LazyReference",
    # Errors
    "ObjFactoryException",
    "NullSourceError",
    "NullDestinationError",
    "EmptyInputError",
    "InvalidTargetError",
    "FieldAccessError",
    "CloneError",
    "AdapterNotConfiguredError",
    "InstantiationError",
]
