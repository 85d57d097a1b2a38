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
"""FilterRegistry — per-class storage for filter declarations and the memoized chain."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from betterfilters.filters.callbacks import MethodCallback, as_callback
from betterfilters.filters.options import FilterOptions, normalize_options
from betterfilters.filters.resolver import ChainEntry, resolve_lineage
from betterfilters.filters.settings import current_settings

logger = logging.getLogger(__name__)


class FilterRegistry:
    """Declarations made on one class.

    Declarations are expected at class-definition time, before the first
    dispatch. Each change bumps :attr:`revision`; the memoized chain is
    stamped with the revisions of the whole lineage it was resolved from and
    is recomputed as soon as any of them moves.
    """

    def __init__(self, owner: str) -> None:
        self.owner = owner
        self._filters: dict[str, Any] = {}
        self._options: dict[str, list[FilterOptions]] = {}
        self._revision = 0
        self._chain: list[ChainEntry] | None = None
        self._chain_stamp: tuple[tuple[int, int], ...] = ()

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def filters(self) -> Mapping[str, Any]:
        """Callbacks declared on this class, by filter name."""
        return MappingProxyType(self._filters)

    @property
    def options(self) -> Mapping[str, tuple[FilterOptions, ...]]:
        """Option records attached on this class, by filter name."""
        return MappingProxyType({name: tuple(records) for name, records in self._options.items()})

    def declare(self, name: str, callback: Any = None) -> None:
        """Declare a filter, or overwrite the callback of an existing one.

        Without a callback the filter calls the host method of the same name.
        """
        name = str(name)
        if callback is None:
            callback = MethodCallback(name)
        else:
            callback = as_callback(callback, filter_name=name, strict=current_settings().strict_callbacks)

        if name in self._filters:
            logger.debug("Filter '%s' redeclared on %s", name, self.owner)
        self._filters[name] = callback
        self._touch()

    def add_options(self, name: str, raw: Mapping[str, Any] | FilterOptions | None = None, **kwargs: Any) -> FilterOptions:
        """Attach one more option record to *name*; earlier records are kept."""
        record = normalize_options(raw, **kwargs)
        self._options.setdefault(str(name), []).append(record)
        self._touch()
        return record

    def resolved_chain(self, lineage: Sequence[FilterRegistry]) -> list[ChainEntry]:
        """Resolve *lineage* (base first, normally ending with this registry), memoized."""
        stamp = tuple((id(registry), registry.revision) for registry in lineage)
        if self._chain is not None and stamp == self._chain_stamp:
            return list(self._chain)

        chain = resolve_lineage(lineage)
        logger.debug("Resolved filter chain for %s: %s", self.owner, [entry.name for entry in chain])
        if current_settings().cache_chain:
            self._chain = list(chain)
            self._chain_stamp = stamp
        return chain

    def invalidate(self) -> None:
        """Drop the memoized chain."""
        self._chain = None
        self._chain_stamp = ()

    def _touch(self) -> None:
        self._revision += 1
        self.invalidate()

    def __repr__(self) -> str:
        return f"FilterRegistry(owner={self.owner!r}, filters={list(self._filters)!r})"
