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
"""Tests for constraint resolution — scrubbing, blocking and final ordering."""

from __future__ import annotations

from typing import Any

import pytest

from betterfilters.filters.callbacks import MethodCallback
from betterfilters.filters.options import normalize_options
from betterfilters.filters.registry import FilterRegistry
from betterfilters.filters.resolver import (
    ChainEntry,
    flatten_all,
    resolve_blocking,
    resolve_chain,
    resolve_lineage,
    scrub_constraints,
)
from betterfilters.kernel.exceptions import CycleDetectedException


def _resolve(declarations: dict[str, dict[str, Any]]) -> list[str]:
    """Resolve ``{name: options}`` and return the chain's filter names."""
    filters = {name: MethodCallback(name) for name in declarations}
    options = {name: [normalize_options(opts)] for name, opts in declarations.items() if opts}
    return [entry.name for entry in resolve_chain(filters, options)]


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


class TestOrdering:
    def test_unconstrained_keeps_declaration_order(self):
        assert _resolve({"x": {}, "y": {}, "z": {}}) == ["x", "y", "z"]

    def test_before_and_after_scenario(self):
        result = _resolve(
            {
                "filter_c": {"after": "filter_b"},
                "filter_a": {"before": "filter_c"},
                "filter_b": {},
            }
        )
        assert result == ["filter_a", "filter_b", "filter_c"]

    def test_before_after_equivalence(self):
        with_before = _resolve({"x": {}, "y": {"before": "x"}})
        with_after = _resolve({"x": {"after": "y"}, "y": {}})
        assert with_before == with_after == ["y", "x"]

    def test_priority_breaks_ties(self):
        assert _resolve({"a": {}, "b": {"priority": 10}}) == ["b", "a"]

    def test_constraint_beats_priority(self):
        assert _resolve({"a": {"before": "b"}, "b": {"priority": 10}}) == ["a", "b"]

    def test_unknown_references_are_dropped(self):
        assert _resolve({"a": {"before": "ghost"}, "b": {}}) == ["a", "b"]
        assert _resolve({"b": {}, "a": {"after": "ghost", "blocks": "ghost"}}) == ["b", "a"]

    def test_redundant_before_and_after(self):
        assert _resolve({"b": {"after": "a"}, "a": {"before": "b"}}) == ["a", "b"]

    def test_determinism(self):
        declarations = {
            "n1": {"priority": 2},
            "n2": {"before": "n1"},
            "n3": {"after": "n2", "blocks": "n5"},
            "n4": {"priority": 2},
            "n5": {},
        }
        assert _resolve(declarations) == _resolve(declarations)


# ---------------------------------------------------------------------------
# Blocking
# ---------------------------------------------------------------------------


class TestBlocking:
    def test_blocked_filter_is_removed(self):
        assert _resolve({"a": {"blocks": "b", "priority": 10}, "b": {}, "c": {}}) == ["a", "c"]

    def test_blocker_declared_after_victim(self):
        assert _resolve({"b": {}, "a": {"blocks": "b"}, "c": {}}) == ["a", "c"]

    def test_blocks_do_not_cascade(self):
        result = _resolve({"a": {"blocks": "b"}, "b": {"blocks": "c"}, "c": {}})
        assert result == ["a", "c"]

    def test_blocked_blocker_frees_its_target(self):
        result = _resolve({"a": {"blocks": "b"}, "b": {}, "c": {"blocks": "a"}})
        assert result == ["b", "c"]

    def test_independent_blockers_all_fire(self):
        result = _resolve({"a": {"blocks": "x"}, "b": {"blocks": "y"}, "x": {}, "y": {}})
        assert result == ["a", "b"]

    def test_ordering_edges_to_victims_are_ignored(self):
        result = _resolve({"a": {"before": "b"}, "b": {}, "c": {"blocks": "b"}})
        assert result == ["a", "c"]

    def test_blocking_cycle_raises(self):
        with pytest.raises(CycleDetectedException):
            _resolve({"a": {"blocks": "b"}, "b": {"blocks": "a"}})

    def test_resolve_blocking_reports_victims_in_order(self):
        victims = resolve_blocking(
            {"a": 0, "b": 0, "c": 0, "d": 0},
            {"a": ["c", "b"], "b": [], "c": [], "d": []},
        )
        assert victims == ["c", "b"]

    def test_resolve_blocking_without_blocks(self):
        assert resolve_blocking({"a": 0, "b": 0}, {"a": [], "b": []}) == []


# ---------------------------------------------------------------------------
# Cycles and chain shape
# ---------------------------------------------------------------------------


class TestChain:
    def test_before_cycle_raises(self):
        with pytest.raises(CycleDetectedException):
            _resolve({"a": {"before": "b"}, "b": {"before": "a"}})

    def test_after_cycle_raises(self):
        with pytest.raises(CycleDetectedException):
            _resolve({"a": {"after": "b"}, "b": {"after": "a"}})

    def test_entries_carry_callback_and_only(self):
        filters = {"auth": MethodCallback("check"), "load": MethodCallback("load")}
        options = {"auth": [normalize_options(only=["show", "edit"], before="load")]}
        chain = resolve_chain(filters, options)
        assert chain == [
            ChainEntry("auth", MethodCallback("check"), ("show", "edit")),
            ChainEntry("load", MethodCallback("load"), ()),
        ]

    def test_options_for_undeclared_filters_are_discarded(self):
        filters = {"a": MethodCallback("a")}
        options = {"ghost": [normalize_options(before="a")]}
        assert [e.name for e in resolve_chain(filters, options)] == ["a"]

    def test_importance_merge_applies_before_ordering(self):
        filters = {"a": MethodCallback("a"), "b": MethodCallback("b")}
        options = {
            "b": [
                normalize_options(importance=5, priority=10),
                normalize_options(importance=0, priority=-10),
            ]
        }
        assert [e.name for e in resolve_chain(filters, options)] == ["b", "a"]


class TestScrubConstraints:
    def test_after_becomes_before_on_target(self):
        filters = {"x": MethodCallback("x"), "y": MethodCallback("y")}
        resolved = flatten_all(filters, {"x": [normalize_options(after="y")]})
        before, blocks = scrub_constraints(resolved)
        assert before == {"x": [], "y": ["x"]}
        assert blocks == {"x": [], "y": []}

    def test_unknown_names_removed(self):
        filters = {"x": MethodCallback("x")}
        resolved = flatten_all(filters, {"x": [normalize_options(before=["ghost"], blocks="ghost")]})
        assert scrub_constraints(resolved) == ({"x": []}, {"x": []})


class TestResolveLineage:
    def test_lineage_is_merged_then_resolved(self):
        base = FilterRegistry("Base")
        derived = FilterRegistry("Derived")
        base.declare("load")
        base.declare("audit")
        derived.add_options("audit", before="load")

        assert [e.name for e in resolve_lineage([base, derived])] == ["audit", "load"]
        assert [e.name for e in resolve_lineage([base])] == ["load", "audit"]
