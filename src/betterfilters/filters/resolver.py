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
"""Constraint resolution — turn declared filters and options into one ordered chain.

Resolution runs in four steps:

1. Drop ``before``/``after``/``blocks`` references to unknown filters and
   rewrite every ``after`` constraint as a ``before`` edge on the other side.
2. Deduplicate ``before`` and ``blocks``.
3. Resolve blocking one executor at a time. Filters taking part in any
   ``blocks`` relation are sorted on the ``blocks`` edges; the first one that
   still blocks somebody fires, its targets become victims, and both the
   executor and all victims leave the candidate set. A victim's own blocks
   therefore never fire: with ``a blocks b`` and ``b blocks c``, ``b`` is
   removed and ``c`` stays. Victims are dropped before the final sort.
4. Sort the survivors on the ``before`` edges, weighted by ``priority``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, NamedTuple

from betterfilters.filters.inheritance import inherit_filters, inherit_options
from betterfilters.filters.options import FilterOptions, ResolvedOptions, flatten_options
from betterfilters.filters.sorting import weighted_topological_sort

if TYPE_CHECKING:
    from betterfilters.filters.registry import FilterRegistry

logger = logging.getLogger(__name__)


class ChainEntry(NamedTuple):
    """One filter of a resolved chain."""

    name: str
    callback: Any
    only: tuple[str, ...]


def flatten_all(
    filters: Mapping[str, Any],
    options: Mapping[str, Sequence[FilterOptions]],
) -> dict[str, ResolvedOptions]:
    """One merged option record per known filter; records for unknown filters are discarded."""
    return {name: flatten_options(options.get(name, ())) for name in filters}


def scrub_constraints(
    resolved: Mapping[str, ResolvedOptions],
) -> tuple[dict[str, list[str]], dict[str, list[str]]]:
    """Return ``(before, blocks)`` edge lists restricted to known filters.

    ``after`` constraints are folded into the ``before`` lists of the filters
    they name.
    """
    before: dict[str, list[str]] = {}
    blocks: dict[str, list[str]] = {}
    for name, opts in resolved.items():
        before[name] = _unique(g for g in opts.before if g in resolved)
        blocks[name] = _unique(g for g in opts.blocks if g in resolved)

    for name, opts in resolved.items():
        for g in opts.after:
            if g in resolved and name not in before[g]:
                before[g].append(name)

    return before, blocks


def resolve_blocking(
    priorities: Mapping[str, int],
    blocks: Mapping[str, Sequence[str]],
) -> list[str]:
    """Return the filters suppressed by ``blocks`` constraints, in the order they were blocked.

    Raises:
        CycleDetectedException: If the ``blocks`` relation among the
            remaining candidates contains a cycle.
    """
    blocked = {target for targets in blocks.values() for target in targets}
    candidates = [name for name in priorities if blocks.get(name) or name in blocked]

    victims: list[str] = []
    while True:
        remaining = set(candidates)
        edges = {name: [t for t in blocks.get(name, ()) if t in remaining] for name in candidates}
        if not any(edges.values()):
            break

        ordered = weighted_topological_sort({name: priorities[name] for name in candidates}, edges)
        executor = next(name for name in ordered if edges[name])

        for victim in blocks[executor]:
            if victim not in victims:
                victims.append(victim)
        logger.debug("Filter '%s' blocks %s", executor, list(blocks[executor]))

        candidates = [name for name in candidates if name != executor and name not in victims]

    return victims


def resolve_chain(
    filters: Mapping[str, Any],
    options: Mapping[str, Sequence[FilterOptions]],
) -> list[ChainEntry]:
    """Resolve declared *filters* and their accumulated *options* into the execution chain.

    Args:
        filters: Filter name to callback, in declaration order.
        options: Filter name to its option records, in accumulation order.

    Raises:
        CycleDetectedException: If the constraints cannot be satisfied.
    """
    resolved = flatten_all(filters, options)
    before, blocks = scrub_constraints(resolved)
    priorities = {name: opts.priority for name, opts in resolved.items()}

    victims = resolve_blocking(priorities, blocks)
    if victims:
        logger.info("Blocked filters removed from chain: %s", victims)

    survivors = [name for name in filters if name not in victims]
    ordered = weighted_topological_sort(
        {name: priorities[name] for name in survivors},
        {name: before[name] for name in survivors if before[name]},
    )
    return [ChainEntry(name, filters[name], resolved[name].only) for name in ordered]


def resolve_lineage(lineage: Sequence[FilterRegistry]) -> list[ChainEntry]:
    """Merge declarations along a base-to-derived *lineage* and resolve them."""
    return resolve_chain(inherit_filters(lineage), inherit_options(lineage))


def _unique(names: Any) -> list[str]:
    unique: list[str] = []
    for name in names:
        if name not in unique:
            unique.append(name)
    return unique
