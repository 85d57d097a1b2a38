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
"""Tests for merging declarations along a class lineage."""

from betterfilters.filters.callbacks import MethodCallback
from betterfilters.filters.host import FilterHost
from betterfilters.filters.inheritance import class_lineage, inherit_filters, inherit_options
from betterfilters.filters.registry import FilterRegistry


class TestInheritFilters:
    def test_derived_callback_replaces_ancestor(self):
        base = FilterRegistry("Base")
        derived = FilterRegistry("Derived")
        base.declare("audit", "base_audit")
        derived.declare("audit", "derived_audit")

        merged = inherit_filters([base, derived])
        assert merged == {"audit": MethodCallback("derived_audit")}

    def test_override_keeps_first_declaration_position(self):
        base = FilterRegistry("Base")
        derived = FilterRegistry("Derived")
        base.declare("first")
        base.declare("second")
        derived.declare("third")
        derived.declare("first", "other")

        assert list(inherit_filters([base, derived])) == ["first", "second", "third"]

    def test_empty_lineage(self):
        assert inherit_filters([]) == {}


class TestInheritOptions:
    def test_records_accumulate_base_first(self):
        base = FilterRegistry("Base")
        derived = FilterRegistry("Derived")
        base.add_options("audit", priority=1)
        derived.add_options("audit", priority=2)
        derived.add_options("audit", priority=3)

        merged = inherit_options([base, derived])
        assert [r.priority for r in merged["audit"]] == [1, 2, 3]

    def test_options_without_declaration_are_kept(self):
        base = FilterRegistry("Base")
        base.add_options("declared_later", only="show")
        assert "declared_later" in inherit_options([base])


class TestClassLineage:
    def test_base_first(self):
        class Base(FilterHost):
            pass

        class Child(Base):
            pass

        assert class_lineage(Child) == [Base.filter_registry(), Child.filter_registry()]

    def test_plain_mixins_are_skipped(self):
        class Base(FilterHost):
            pass

        class Mixin:
            pass

        class Child(Base, Mixin):
            pass

        assert class_lineage(Child) == [Base.filter_registry(), Child.filter_registry()]

    def test_each_class_owns_its_registry(self):
        class Base(FilterHost):
            pass

        class Child(Base):
            pass

        assert Base.filter_registry() is not Child.filter_registry()
