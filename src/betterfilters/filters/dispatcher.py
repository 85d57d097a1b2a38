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
"""Chain dispatch — run the filters of a resolved chain that apply to an action."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from betterfilters.context.request_context import RequestContext
from betterfilters.filters.callbacks import invoke_callback
from betterfilters.filters.resolver import ChainEntry
from betterfilters.kernel.exceptions import InvalidCallbackException, MissingActionException

logger = logging.getLogger(__name__)


def current_action(action: Any = None) -> str:
    """Return *action*, or the action of the current request context.

    Raises:
        MissingActionException: If neither is available.
    """
    if action is None:
        ctx = RequestContext.current()
        action = ctx.action if ctx is not None else None
    if action is None or action == "":
        raise MissingActionException()
    return str(action)


def applies_to(entry: ChainEntry, action: str) -> bool:
    """True if *entry* is unrestricted or restricted to *action*."""
    return not entry.only or action in entry.only


def _applicable(chain: Iterable[ChainEntry], action: str) -> Iterator[ChainEntry]:
    for entry in chain:
        if applies_to(entry, action):
            yield entry


def dispatch_chain(host: Any, chain: Iterable[ChainEntry], action: Any = None) -> list[str]:
    """Invoke, in order, every filter of *chain* that applies to *action* against *host*.

    Async filters cannot run here; use :func:`adispatch_chain`.

    Returns:
        Names of the filters that ran.

    Raises:
        MissingActionException: If no action is given or derivable.
        InvalidCallbackException: If a filter's callback cannot be invoked or
            returns an awaitable.
    """
    action = current_action(action)
    executed: list[str] = []
    for entry in _applicable(chain, action):
        logger.debug("Running filter '%s' for %s.%s", entry.name, type(host).__name__, action)
        result = invoke_callback(entry.name, entry.callback, host)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise InvalidCallbackException(
                entry.name, entry.callback, "it is asynchronous; dispatch with adispatch_chain"
            )
        executed.append(entry.name)
    return executed


async def adispatch_chain(host: Any, chain: Iterable[ChainEntry], action: Any = None) -> list[str]:
    """Like :func:`dispatch_chain`, awaiting filters that return an awaitable."""
    action = current_action(action)
    executed: list[str] = []
    for entry in _applicable(chain, action):
        logger.debug("Running filter '%s' for %s.%s", entry.name, type(host).__name__, action)
        result = invoke_callback(entry.name, entry.callback, host)
        if inspect.isawaitable(result):
            await result
        executed.append(entry.name)
    return executed
