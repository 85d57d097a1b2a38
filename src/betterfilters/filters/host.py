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
"""FilterHost — class-level filter declarations and per-instance dispatch.

Usage:
    class PostsController(FilterHost):
        @before_filter(before="load_post", only="show")
        def authorize(self):
            ...

        def load_post(self):
            ...

    PostsController.declare_filter("load_post")
    PostsController().dispatch_filters("show")

Every subclass owns its own :class:`FilterRegistry`; the chain of a class is
resolved from the registries of all its ancestors, base first.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator, Mapping
from typing import Any, TypeVar

from betterfilters.filters.callbacks import InlineCallback
from betterfilters.filters.dispatcher import adispatch_chain, dispatch_chain
from betterfilters.filters.inheritance import REGISTRY_ATTR, class_lineage
from betterfilters.filters.options import FilterOptions
from betterfilters.filters.registry import FilterRegistry
from betterfilters.filters.resolver import ChainEntry

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T", bound=type)

_FILTER_MARKER = "__betterfilters_filters__"


def before_filter(name: str | F | None = None, **options: Any) -> Any:
    """Declare the decorated method as an inline filter of its class.

    Can be used with or without arguments:
        @before_filter
        def load_user(self): ...

        @before_filter("authorize", before="load_user", only=["show"])
        def check_access(self): ...

    The filter is named after the method unless *name* is given. Keyword
    arguments become an option record for the filter.
    """

    def decorator(func: F) -> F:
        declarations = list(getattr(func, _FILTER_MARKER, ()))
        declarations.append((filter_name or func.__name__, options))
        setattr(func, _FILTER_MARKER, declarations)
        return func

    if callable(name):
        func, filter_name = name, None
        return decorator(func)
    filter_name = name
    return decorator


def filter_options(name: str, raw: Mapping[str, Any] | None = None, **options: Any) -> Callable[[T], T]:
    """Class decorator attaching an option record to filter *name*.

    Stackable; every application accumulates one more record.
    """

    def decorator(cls: T) -> T:
        cls.add_filter_options(name, raw, **options)  # type: ignore[attr-defined]
        return cls

    return decorator


class FilterHost:
    """Mixin giving a class filter declarations, a resolved chain and dispatch."""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        registry = FilterRegistry(owner=f"{cls.__module__}.{cls.__qualname__}")
        setattr(cls, REGISTRY_ATTR, registry)

        for value in list(cls.__dict__.values()):
            if not inspect.isfunction(value):
                continue
            for name, options in getattr(value, _FILTER_MARKER, ()):
                registry.declare(name, InlineCallback(value))
                if options:
                    registry.add_options(name, options)

    @classmethod
    def filter_registry(cls) -> FilterRegistry:
        """The registry holding declarations made on this very class."""
        registry = cls.__dict__.get(REGISTRY_ATTR)
        if registry is None:
            raise TypeError(f"{cls.__name__} must subclass FilterHost to declare filters")
        return registry

    @classmethod
    def declare_filter(cls, name: str, callback: Any = None, **options: Any) -> None:
        """Declare filter *name* or overwrite its callback.

        *callback* may be a method name, an :func:`inline` function, or any
        callable; when omitted the method called *name* is used. Keyword
        arguments are attached as an option record.
        """
        registry = cls.filter_registry()
        registry.declare(name, callback)
        if options:
            registry.add_options(name, options)

    @classmethod
    def add_filter_options(
        cls,
        name: str,
        raw: Mapping[str, Any] | FilterOptions | None = None,
        **options: Any,
    ) -> FilterOptions:
        """Accumulate an option record for filter *name* (records are never overwritten)."""
        return cls.filter_registry().add_options(name, raw, **options)

    @classmethod
    def filter_chain(cls) -> list[ChainEntry]:
        """The resolved chain of this class, including inherited filters."""
        return cls.filter_registry().resolved_chain(class_lineage(cls))

    @classmethod
    def iter_filter_chain(cls) -> Iterator[tuple[str, Any, tuple[str, ...]]]:
        """Yield ``(name, callback, only)`` for every filter of the chain."""
        for entry in cls.filter_chain():
            yield entry.name, entry.callback, entry.only

    def dispatch_filters(self, action: Any = None) -> list[str]:
        """Run the filters that apply to *action* (default: the request context's action).

        Returns:
            Names of the filters that ran, in order.
        """
        return dispatch_chain(self, type(self).filter_chain(), action)

    async def adispatch_filters(self, action: Any = None) -> list[str]:
        """Like :meth:`dispatch_filters`, awaiting ``async def`` filters."""
        return await adispatch_chain(self, type(self).filter_chain(), action)
