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
"""betterfilters filters — declaration, resolution and dispatch of filter chains."""

from betterfilters.filters.callbacks import (
    Callback,
    CallableCallback,
    InlineCallback,
    MethodCallback,
    as_callback,
    inline,
    invoke_callback,
)
from betterfilters.filters.dispatcher import adispatch_chain, dispatch_chain
from betterfilters.filters.host import FilterHost, before_filter, filter_options
from betterfilters.filters.inheritance import class_lineage, inherit_filters, inherit_options
from betterfilters.filters.options import FilterOptions, ResolvedOptions, flatten_options, normalize_options
from betterfilters.filters.registry import FilterRegistry
from betterfilters.filters.resolver import ChainEntry, resolve_chain, resolve_lineage
from betterfilters.filters.settings import FilterSettings, current_settings
from betterfilters.filters.sorting import weighted_topological_sort

__all__ = [
    # Declaration
    "FilterHost",
    "FilterRegistry",
    "before_filter",
    "filter_options",
    # Callbacks
    "Callback",
    "CallableCallback",
    "InlineCallback",
    "MethodCallback",
    "as_callback",
    "inline",
    "invoke_callback",
    # Options
    "FilterOptions",
    "ResolvedOptions",
    "flatten_options",
    "normalize_options",
    # Resolution
    "ChainEntry",
    "class_lineage",
    "inherit_filters",
    "inherit_options",
    "resolve_chain",
    "resolve_lineage",
    "weighted_topological_sort",
    # Dispatch
    "adispatch_chain",
    "dispatch_chain",
    # Settings
    "FilterSettings",
    "current_settings",
]
