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
"""Tests for RequestContext — contextvars-backed per-request state."""

from betterfilters.context.request_context import RequestContext


class TestRequestContext:
    def test_no_context_by_default(self):
        assert RequestContext.current() is None

    def test_init_sets_current(self):
        ctx = RequestContext.init(request_id="req-1", action="show")
        assert RequestContext.current() is ctx
        assert ctx.request_id == "req-1"
        assert ctx.action == "show"

    def test_generated_request_id(self):
        ctx = RequestContext.init()
        assert len(ctx.request_id) == 32
        assert ctx.action is None

    def test_action_can_be_set_later(self):
        ctx = RequestContext.init()
        ctx.action = "index"
        assert RequestContext.current().action == "index"

    def test_attributes(self):
        ctx = RequestContext.init()
        ctx.set("user", "alice")
        assert ctx.get("user") == "alice"
        assert ctx.get("missing", "default") == "default"

    def test_clear(self):
        RequestContext.init(action="show")
        RequestContext.clear()
        assert RequestContext.current() is None
