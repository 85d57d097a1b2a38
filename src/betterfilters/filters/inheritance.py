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
"""Inheritance resolution — merge filter declarations along a class lineage.

A lineage is an explicit, base-to-derived sequence of registries. Callbacks
declared further down replace those of ancestors; option records are never
replaced, they accumulate in lineage order.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from betterfilters.filters.options import FilterOptions

if TYPE_CHECKING:
    from betterfilters.filters.registry import FilterRegistry

REGISTRY_ATTR = "__betterfilters_registry__"


def inherit_filters(lineage: Sequence[FilterRegistry]) -> dict[str, Any]:
    """Merged name-to-callback mapping; a name keeps the position of its first declaration."""
    merged: dict[str, Any] = {}
    for registry in lineage:
        merged.update(registry.filters)
    return merged


def inherit_options(lineage: Sequence[FilterRegistry]) -> dict[str, list[FilterOptions]]:
    """All option records per filter name, base records first."""
    merged: dict[str, list[FilterOptions]] = {}
    for registry in lineage:
        for name, records in registry.options.items():
            merged.setdefault(name, []).extend(records)
    return merged


def class_lineage(cls: type) -> list[FilterRegistry]:
    """Registries owned by *cls* and its ancestors, base first."""
    return [
        klass.__dict__[REGISTRY_ATTR]
        for klass in reversed(cls.__mro__)
        if REGISTRY_ATTR in klass.__dict__
    ]
