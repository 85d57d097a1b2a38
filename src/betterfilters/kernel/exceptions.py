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
"""Unified exception hierarchy for betterfilters.

All library exceptions inherit from BetterFiltersException, enabling unified
error handling. Every failure is raised synchronously to whoever triggered
resolution or dispatch; nothing is retried.

Categories:
- ConfigurationException: Filter declarations that can never be executed
- DispatchException: Failures while running a resolved chain
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Base Exception
# =============================================================================


class BetterFiltersException(Exception):
    """Base exception for all betterfilters errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "FILTER_CYCLE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(BetterFiltersException):
    """Filter declarations are inconsistent or cannot be executed."""


class CycleDetectedException(ConfigurationException):
    """Ordering or blocking constraints form a cycle and cannot be satisfied."""

    def __init__(self, nodes: list[str]) -> None:
        self.nodes = list(nodes)
        super().__init__(
            f"Filter constraints contain a cycle involving: {', '.join(self.nodes)}",
            code="FILTER_CYCLE",
            context={"nodes": self.nodes},
        )


class InvalidCallbackException(ConfigurationException):
    """A filter callback has a shape that cannot be invoked on the host."""

    def __init__(self, filter_name: str, callback: Any, reason: str | None = None) -> None:
        self.filter_name = filter_name
        self.callback = callback
        message = f"Don't know how to call filter '{filter_name}' (callback: {callback!r})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(
            message,
            code="FILTER_CALLBACK",
            context={"filter": filter_name},
        )


class InvalidOptionsException(ConfigurationException):
    """An option record contains keys that are not filter options."""


# =============================================================================
# Dispatch Exceptions
# =============================================================================


class DispatchException(BetterFiltersException):
    """Failure while dispatching a resolved filter chain."""


class MissingActionException(DispatchException):
    """No action identifier was given and none is available from the request context."""

    def __init__(self) -> None:
        super().__init__("No action given", code="FILTER_NO_ACTION")
