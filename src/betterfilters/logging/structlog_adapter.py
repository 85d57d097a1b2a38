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
"""StructlogAdapter — renders betterfilters output through structlog.

The library modules log with the standard ``logging`` module. Configuring the
adapter attaches one structlog-formatted handler to the ``betterfilters``
logger, so those records and any structlog events share a renderer and carry
the ``action`` and ``request_id`` of the current :class:`RequestContext`.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from betterfilters.context.request_context import RequestContext
from betterfilters.core.config import Config

LIBRARY_LOGGER = "betterfilters"

_HANDLER_MARKER = "_betterfilters_handler"


def add_request_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Processor adding the current request's action and id to every event."""
    ctx = RequestContext.current()
    if ctx is not None:
        if ctx.action is not None:
            event_dict.setdefault("action", ctx.action)
        if ctx.request_id is not None:
            event_dict.setdefault("request_id", ctx.request_id)
    return event_dict


class StructlogAdapter:
    """Logging adapter backed by structlog.

    Reads ``betterfilters.logging.format`` (``console`` or ``json``) and
    ``betterfilters.logging.level`` (``root`` for the ``betterfilters``
    logger plus per-module levels, e.g. ``betterfilters.filters.dispatcher:
    DEBUG`` to trace every filter call).
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        """Configure structlog and the library handler from the logging section of config."""
        level_section = dict(config.get_section("betterfilters.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("betterfilters.logging.format", "console")).lower()

        shared = self._shared_processors()
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                *shared,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        self._install_handler(shared)

        self.set_level(LIBRARY_LOGGER, self._root_level)
        for module, level in self._module_levels.items():
            self.set_level(module, level)

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger by name."""
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger."""
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger(name).setLevel(log_level)

    @staticmethod
    def detach() -> None:
        """Remove the handler installed by :meth:`configure` and restore propagation."""
        library_logger = logging.getLogger(LIBRARY_LOGGER)
        for handler in list(library_logger.handlers):
            if getattr(handler, _HANDLER_MARKER, False):
                library_logger.removeHandler(handler)
        library_logger.propagate = True

    def _shared_processors(self) -> list[structlog.types.Processor]:
        return [
            structlog.contextvars.merge_contextvars,
            add_request_context,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

    def _install_handler(self, shared: list[structlog.types.Processor]) -> None:
        renderer: structlog.types.Processor
        if self._format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer()

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared,
                processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
            )
        )
        setattr(handler, _HANDLER_MARKER, True)

        self.detach()
        library_logger = logging.getLogger(LIBRARY_LOGGER)
        library_logger.addHandler(handler)
        library_logger.propagate = False
