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
"""Shared pytest fixtures.

Filter settings, the request context and logging setup are process-wide;
every test starts from the library defaults and an empty context.
"""

from __future__ import annotations

import pytest
import structlog

from betterfilters.context.request_context import RequestContext
from betterfilters.filters.settings import reset_settings
from betterfilters.logging.structlog_adapter import StructlogAdapter


@pytest.fixture(autouse=True)
def _isolate_global_state():
    reset_settings()
    RequestContext.clear()
    yield
    reset_settings()
    RequestContext.clear()
    StructlogAdapter.detach()
    structlog.reset_defaults()
