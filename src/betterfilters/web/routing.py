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
"""Starlette integration — serve controller actions behind their filter chain."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from betterfilters.context.request_context import RequestContext
from betterfilters.filters.host import FilterHost

logger = logging.getLogger(__name__)


class FilterController(FilterHost):
    """Base class for controllers whose actions run behind a filter chain.

    One instance is created per request. Filters and actions reach the
    request through ``self.request`` and may share state on ``self``.
    Filters may be ``async def``. A filter stops the request by raising,
    e.g. ``HTTPException(403)``.
    """

    def __init__(self, request: Request) -> None:
        self.request = request


async def _maybe_await(result: Any) -> Any:
    """Await the result if it's a coroutine, otherwise return as-is."""
    if inspect.isawaitable(result):
        return await result
    return result


def handle_return_value(result: Any, status_code: int = 200) -> Response:
    """Convert an action's return value into a Starlette Response.

    - ``None`` -> empty response (204 unless status_code explicitly set)
    - ``Response`` -> passed through unchanged
    - ``BaseModel`` -> JSON serialized via model_dump
    - ``dict``, ``list``, ``str``, etc. -> JSON response
    """
    if result is None:
        actual_status = status_code if status_code != 200 else 204
        return Response(status_code=actual_status)

    if isinstance(result, Response):
        return result

    if isinstance(result, BaseModel):
        return JSONResponse(result.model_dump(mode="json"), status_code=status_code)

    return JSONResponse(result, status_code=status_code)


def action_route(
    path: str,
    controller_cls: type[FilterController],
    action: str,
    *,
    methods: Sequence[str] | None = None,
    name: str | None = None,
    status_code: int = 200,
) -> Route:
    """Build a Route that dispatches *controller_cls*'s filters, then calls *action*.

    The endpoint opens a :class:`RequestContext` carrying the action (and the
    ``X-Request-Id`` header when present) for the duration of the request.
    """
    if not callable(getattr(controller_cls, action, None)):
        raise ValueError(f"{controller_cls.__name__} has no action '{action}'")

    async def endpoint(request: Request) -> Response:
        RequestContext.init(request_id=request.headers.get("x-request-id"), action=action)
        try:
            controller = controller_cls(request)
            executed = await controller.adispatch_filters()
            logger.debug("Filters run before %s.%s: %s", controller_cls.__name__, action, executed)
            result = await _maybe_await(getattr(controller, action)())
            return handle_return_value(result, status_code)
        finally:
            RequestContext.clear()

    return Route(
        path,
        endpoint,
        methods=list(methods) if methods is not None else ["GET"],
        name=name or f"{controller_cls.__name__}.{action}",
    )
