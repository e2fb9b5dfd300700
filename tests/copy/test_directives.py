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
"""Tests for class-level and field-level copy directives."""

from dataclasses import dataclass
from typing import Annotated

from objfactory.copy.directives import (
    COPY_EXCLUSIONS_ATTR,
    OBJECT_CONSTRUCTOR_ATTR,
    CopyExclude,
    CopyName,
    class_exclusions,
    copy_exclusions,
    field_directives,
    object_constructor,
)


@copy_exclusions("password")
@dataclass
class Account:
    login: str = ""
    password: str = ""


@object_constructor(exclude=("audit",))
@dataclass
class AdminAccount(Account):
    audit: str = ""


@dataclass
class GuestAccount(AdminAccount):
    pass


@copy_exclusions("token")
@dataclass
class ServiceAccount(Account):
    token: str = ""


class TestClassDirectives:
    def test_copy_exclusions_tags_class(self):
        assert vars(Account)[COPY_EXCLUSIONS_ATTR] == frozenset({"password"})

    def test_object_constructor_tags_class(self):
        assert vars(AdminAccount)[OBJECT_CONSTRUCTOR_ATTR] == frozenset({"audit"})

    def test_walk_collects_base_class_exclusions(self):
        assert class_exclusions(AdminAccount, include_object_constructor=True) == {"password", "audit"}

    def test_object_constructor_only_when_requested(self):
        assert class_exclusions(AdminAccount, include_object_constructor=False) == {"password"}

    def test_inherited_directives_are_read_from_declaring_class(self):
        assert class_exclusions(GuestAccount, include_object_constructor=True) == {"password", "audit"}

    def test_directives_accumulate_across_hierarchy(self):
        assert class_exclusions(ServiceAccount, include_object_constructor=False) == {"password", "token"}

    def test_undecorated_class_has_no_exclusions(self):
        @dataclass
        class Plain:
            value: int = 0

        assert class_exclusions(Plain, include_object_constructor=True) == frozenset()


class TestFieldDirectives:
    def test_plain_annotation(self):
        assert field_directives(int) == (False, None)

    def test_exclude_marker(self):
        assert field_directives(Annotated[int, CopyExclude()]) == (True, None)

    def test_exclude_marker_class(self):
        assert field_directives(Annotated[int, CopyExclude]) == (True, None)

    def test_rename_marker(self):
        assert field_directives(Annotated[str, CopyName("fullName")]) == (False, "fullName")

    def test_blank_rename_is_ignored(self):
        assert field_directives(Annotated[str, CopyName("   ")]) == (False, None)

    def test_both_markers_and_foreign_metadata(self):
        annotation = Annotated[str, "doc", CopyName("alias"), CopyExclude()]
        assert field_directives(annotation) == (True, "alias")
