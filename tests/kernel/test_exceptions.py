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
"""Tests for the betterfilters exception hierarchy."""

from betterfilters.kernel.exceptions import (
    BetterFiltersException,
    ConfigurationException,
    CycleDetectedException,
    DispatchException,
    InvalidCallbackException,
    InvalidOptionsException,
    MissingActionException,
)


class TestBetterFiltersException:
    def test_basic_creation(self):
        exc = BetterFiltersException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_code_and_context(self):
        exc = BetterFiltersException("bad", code="X_001", context={"filter": "load"})
        assert exc.code == "X_001"
        assert exc.context["filter"] == "load"

    def test_context_not_shared_between_instances(self):
        exc = BetterFiltersException("a")
        exc.context["key"] = "value"
        assert BetterFiltersException("b").context == {}


class TestExceptionHierarchy:
    def test_configuration_errors(self):
        for cls in (CycleDetectedException, InvalidCallbackException, InvalidOptionsException):
            assert issubclass(cls, ConfigurationException)
        assert issubclass(ConfigurationException, BetterFiltersException)

    def test_dispatch_errors(self):
        assert issubclass(MissingActionException, DispatchException)
        assert issubclass(DispatchException, BetterFiltersException)


class TestSpecificExceptions:
    def test_cycle_detected(self):
        exc = CycleDetectedException(["a", "b"])
        assert exc.nodes == ["a", "b"]
        assert exc.code == "FILTER_CYCLE"
        assert "a, b" in str(exc)

    def test_invalid_callback(self):
        exc = InvalidCallbackException("load", 42)
        assert exc.filter_name == "load"
        assert exc.callback == 42
        assert str(exc) == "Don't know how to call filter 'load' (callback: 42)"

    def test_invalid_callback_with_reason(self):
        exc = InvalidCallbackException("load", 42, "not callable")
        assert str(exc).endswith(": not callable")

    def test_missing_action(self):
        exc = MissingActionException()
        assert str(exc) == "No action given"
        assert exc.code == "FILTER_NO_ACTION"
