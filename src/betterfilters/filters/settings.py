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
"""FilterSettings — configuration bound from the ``betterfilters.filters`` section."""

from __future__ import annotations

from pydantic import BaseModel

from betterfilters.core.config import Config, config_properties


@config_properties(prefix="betterfilters.filters")
class FilterSettings(BaseModel):
    """Behavioural switches for declaration and resolution.

    Attributes:
        strict_callbacks: Reject callbacks of an unknown shape when they are
            declared instead of when the chain is first dispatched.
        cache_chain: Memoize the resolved chain per class. The memo is
            invalidated whenever a declaration in the class lineage changes.
    """

    strict_callbacks: bool = False
    cache_chain: bool = True


_settings = FilterSettings()


def current_settings() -> FilterSettings:
    """Return the active settings (library defaults until configured)."""
    return _settings


def apply_settings(config: Config) -> FilterSettings:
    """Bind :class:`FilterSettings` from *config* and make them active."""
    global _settings
    _settings = config.bind(FilterSettings)
    return _settings


def reset_settings() -> None:
    """Restore the library defaults."""
    global _settings
    _settings = FilterSettings()
