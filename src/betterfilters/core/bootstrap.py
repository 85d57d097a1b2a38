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
"""One-call setup: load configuration, apply filter settings, configure logging."""

from __future__ import annotations

from pathlib import Path

import structlog

from betterfilters.core.config import Config
from betterfilters.filters.settings import apply_settings
from betterfilters.logging.port import LoggingPort
from betterfilters.logging.structlog_adapter import StructlogAdapter

logger = structlog.get_logger("betterfilters.core.bootstrap")


def configure(
    config: Config | None = None,
    *,
    base_dir: str | Path | None = None,
    active_profiles: list[str] | None = None,
    logging_adapter: LoggingPort | None = None,
) -> Config:
    """Configure betterfilters for the running process.

    When *config* is omitted it is loaded with :meth:`Config.from_sources`
    from *base_dir* (the working directory by default). Returns the
    configuration that was applied.
    """
    if config is None:
        config = Config.from_sources(base_dir or Path.cwd(), active_profiles=active_profiles)

    adapter = logging_adapter or StructlogAdapter()
    adapter.configure(config)
    settings = apply_settings(config)

    logger.debug(
        "betterfilters_configured",
        sources=config.loaded_sources,
        strict_callbacks=settings.strict_callbacks,
        cache_chain=settings.cache_chain,
    )
    return config
