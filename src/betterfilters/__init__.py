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
"""betterfilters — ordered, inheritable, action-scoped filter chains.

Filters are named hooks declared on a class. Their ``before``/``after``,
``blocks``, ``priority`` and ``only`` options are merged along the class
hierarchy and resolved into one deterministic chain, which is dispatched
for an action at request time.
"""

from betterfilters.core.bootstrap import configure
from betterfilters.core.config import Config
from betterfilters.filters import (
    CallableCallback,
    ChainEntry,
    FilterHost,
    FilterOptions,
    FilterRegistry,
    InlineCallback,
    MethodCallback,
    before_filter,
    filter_options,
    inline,
    resolve_chain,
    weighted_topological_sort,
)
from betterfilters.kernel.exceptions import (
    BetterFiltersException,
    CycleDetectedException,
    InvalidCallbackException,
    MissingActionException,
)

__all__ = [
    "BetterFiltersException",
    "CallableCallback",
    "ChainEntry",
    "Config",
    "CycleDetectedException",
    "FilterHost",
    "FilterOptions",
    "FilterRegistry",
    "InlineCallback",
    "InvalidCallbackException",
    "MethodCallback",
    "MissingActionException",
    "before_filter",
    "configure",
    "filter_options",
    "inline",
    "resolve_chain",
    "weighted_topological_sort",
]
