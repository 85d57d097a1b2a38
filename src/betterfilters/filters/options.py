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
"""Filter option records — normalization of raw declarations and importance-weighted merging.

A filter may receive several option records (typically one per class in its
lineage). Each record is normalized on declaration; at resolution time the
records for a filter are flattened into a single :class:`ResolvedOptions`.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from betterfilters.kernel.exceptions import InvalidOptionsException

SCALAR_FIELDS: tuple[str, ...] = ("importance", "priority")
NAME_FIELDS: tuple[str, ...] = ("before", "after", "blocks", "only")
OPTION_FIELDS: tuple[str, ...] = SCALAR_FIELDS + NAME_FIELDS
_DEFAULTS: dict[str, Any] = {"importance": 0, "priority": 0, "before": (), "after": (), "blocks": (), "only": ()}


@dataclass(frozen=True)
class FilterOptions:
    """A single normalized option record.

    Name collections are tuples: deduplicated, in declaration order, so that
    everything derived from them iterates reproducibly.

    Attributes:
        importance: Weight used only when merging several records.
        priority: Tie-breaker among filters that are ready at the same time
            (higher runs first).
        before: Filters that must run after this one.
        after: Filters that must run before this one.
        blocks: Filters this one suppresses.
        only: Actions this filter is restricted to (empty = every action).
        declared: Fields explicitly supplied by the caller; only these
            override lower-importance records when merging. A record built
            directly, without *declared*, declares every non-default field.
    """

    importance: int = 0
    priority: int = 0
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()
    blocks: tuple[str, ...] = ()
    only: tuple[str, ...] = ()
    declared: frozenset[str] = field(default=frozenset(), compare=False)

    def __post_init__(self) -> None:
        if not self.declared:
            implied = frozenset(name for name in OPTION_FIELDS if getattr(self, name) != _DEFAULTS[name])
            object.__setattr__(self, "declared", implied)


@dataclass(frozen=True)
class ResolvedOptions:
    """The merged options of one filter; ``importance`` has been consumed."""

    priority: int = 0
    before: tuple[str, ...] = ()
    after: tuple[str, ...] = ()
    blocks: tuple[str, ...] = ()
    only: tuple[str, ...] = ()


def as_names(value: Any) -> tuple[str, ...]:
    """Coerce a scalar or an iterable of identifiers into a deduplicated name tuple."""
    if value is None:
        return ()
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        value = (value,)
    names: list[str] = []
    for item in value:
        name = item.decode() if isinstance(item, bytes) else str(item)
        if name not in names:
            names.append(name)
    return tuple(names)


def normalize_options(raw: Mapping[str, Any] | FilterOptions | None = None, **kwargs: Any) -> FilterOptions:
    """Fill in defaults and coerce a raw option record into a :class:`FilterOptions`.

    Accepts a mapping, keyword arguments, or both (keywords win). An existing
    :class:`FilterOptions` is returned unchanged. Names are not checked
    against the known filters here; unknown references are dropped later,
    when the whole filter set is known.

    Raises:
        InvalidOptionsException: If a key is not a filter option.
    """
    if isinstance(raw, FilterOptions) and not kwargs:
        return raw

    values: dict[str, Any] = {}
    if isinstance(raw, FilterOptions):
        values.update({name: getattr(raw, name) for name in raw.declared})
    elif raw is not None:
        values.update(raw)
    values.update(kwargs)

    unknown = sorted(str(key) for key in values if key not in OPTION_FIELDS)
    if unknown:
        raise InvalidOptionsException(
            f"Unknown filter option(s): {', '.join(unknown)}",
            code="FILTER_OPTIONS",
            context={"unknown": unknown},
        )

    normalized: dict[str, Any] = {}
    for name in SCALAR_FIELDS:
        if values.get(name) is not None:
            try:
                normalized[name] = int(values[name])
            except (TypeError, ValueError) as exc:
                raise InvalidOptionsException(
                    f"Filter option '{name}' must be an integer, got {values[name]!r}",
                    code="FILTER_OPTIONS",
                    context={"option": name, "value": values[name]},
                ) from exc
    for name in NAME_FIELDS:
        if values.get(name) is not None:
            normalized[name] = as_names(values[name])

    return FilterOptions(declared=frozenset(normalized), **normalized)


def flatten_options(records: Sequence[FilterOptions]) -> ResolvedOptions:
    """Merge the option records of one filter into a single :class:`ResolvedOptions`.

    Records are stably sorted by ascending ``importance`` and folded left to
    right: a later record's declared fields overwrite earlier values. With
    equal importance the record accumulated last wins.
    """
    merged: dict[str, Any] = {}
    for record in sorted(records, key=lambda r: r.importance):
        for name in record.declared:
            merged[name] = getattr(record, name)
    merged.pop("importance", None)
    return ResolvedOptions(**merged)

