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
"""Weighted topological sort — Kahn's algorithm with a priority-ordered ready set."""

from __future__ import annotations

import heapq
from collections.abc import Iterable, Mapping

from betterfilters.kernel.exceptions import CycleDetectedException


def weighted_topological_sort(
    nodes: Mapping[str, int],
    edges: Mapping[str, Iterable[str]],
) -> list[str]:
    """Order *nodes* so that every edge ``u -> v`` puts ``u`` before ``v``.

    Among the nodes that are ready (no unprocessed incoming edges) the one
    with the highest priority is taken first; equal priorities fall back to
    the position of the node in *nodes*, so the result depends only on the
    input and never on hash order.

    Args:
        nodes: Node name to priority, in a meaningful (e.g. declaration) order.
        edges: Node name to the names it must precede. Edges that name a node
            missing from *nodes* are ignored.

    Returns:
        Every node exactly once.

    Raises:
        CycleDetectedException: If the edges contain a cycle. No partial
            ordering is returned.
    """
    position = {name: index for index, name in enumerate(nodes)}
    children: dict[str, list[str]] = {name: [] for name in nodes}
    incoming = dict.fromkeys(nodes, 0)

    for source, targets in edges.items():
        if source not in position:
            continue
        for target in targets:
            if target in position:
                children[source].append(target)
                incoming[target] += 1

    ready = [(-nodes[name], position[name], name) for name in nodes if incoming[name] == 0]
    heapq.heapify(ready)

    ordered: list[str] = []
    while ready:
        _, _, current = heapq.heappop(ready)
        ordered.append(current)
        for child in children[current]:
            incoming[child] -= 1
            if incoming[child] == 0:
                heapq.heappush(ready, (-nodes[child], position[child], child))

    if len(ordered) != len(nodes):
        raise CycleDetectedException([name for name in nodes if incoming[name] > 0])
    return ordered
