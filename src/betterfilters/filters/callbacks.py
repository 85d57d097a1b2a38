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
"""Filter callbacks — the three invocable shapes a filter may carry.

- :class:`MethodCallback` names a method of the host (``_private`` and
  name-mangled ``__private`` names included) and calls it without arguments.
- :class:`InlineCallback` wraps a function written as if it were a method of
  the host; it is bound to the host so ``self`` gives access to its state.
- :class:`CallableCallback` wraps any other callable, called with no
  arguments and no implicit host.
"""

from __future__ import annotations

import types
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Union

from betterfilters.kernel.exceptions import InvalidCallbackException


@dataclass(frozen=True)
class MethodCallback:
    """Reference to a host method by name."""

    name: str

    def invoke(self, filter_name: str, host: Any) -> Any:
        method = getattr(host, self.name, None)
        if method is None and self.name.startswith("__") and not self.name.endswith("__"):
            method = _mangled_method(host, self.name)
        if method is None or not callable(method):
            raise InvalidCallbackException(
                filter_name, self, f"{type(host).__name__} has no method '{self.name}'"
            )
        return method()


def _mangled_method(host: Any, name: str) -> Any:
    """Look up a ``__private`` method under the mangled name of each class in the MRO."""
    for klass in type(host).__mro__:
        method = getattr(host, f"_{klass.__name__.lstrip('_')}{name}", None)
        if method is not None:
            return method
    return None


@dataclass(frozen=True)
class InlineCallback:
    """Function evaluated with the host bound as ``self``."""

    function: Callable[[Any], Any]

    def invoke(self, filter_name: str, host: Any) -> Any:
        return types.MethodType(self.function, host)()


@dataclass(frozen=True)
class CallableCallback:
    """Free-standing callable, invoked without the host."""

    target: Callable[[], Any]

    def invoke(self, filter_name: str, host: Any) -> Any:
        return self.target()


Callback = Union[MethodCallback, InlineCallback, CallableCallback]

CALLBACK_TYPES: tuple[type, ...] = (MethodCallback, InlineCallback, CallableCallback)


def as_callback(value: Any, *, filter_name: str = "", strict: bool = False) -> Any:
    """Coerce a declared callback into one of the :data:`Callback` shapes.

    Strings become :class:`MethodCallback`, callables :class:`CallableCallback`,
    and variant instances pass through. Any other value is kept as declared and
    fails when dispatched, unless *strict* is set, in which case it is
    rejected here.

    Raises:
        InvalidCallbackException: In strict mode, for an unrecognized shape.
    """
    if isinstance(value, CALLBACK_TYPES):
        return value
    if isinstance(value, str):
        return MethodCallback(value)
    if callable(value):
        return CallableCallback(value)
    if strict:
        raise InvalidCallbackException(filter_name, value)
    return value


def inline(function: Callable[[Any], Any]) -> InlineCallback:
    """Mark *function* as an inline callback bound to the host at dispatch time."""
    return InlineCallback(function)


def invoke_callback(filter_name: str, callback: Any, host: Any) -> Any:
    """Invoke one filter callback against *host*.

    Raises:
        InvalidCallbackException: If the callback shape is unknown or names a
            method the host does not have.
    """
    if not isinstance(callback, CALLBACK_TYPES):
        raise InvalidCallbackException(filter_name, callback)
    return callback.invoke(filter_name, host)
