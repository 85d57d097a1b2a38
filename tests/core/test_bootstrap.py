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
"""Tests for configure() — settings and logging setup in one call."""

from pathlib import Path

from betterfilters.core.bootstrap import configure
from betterfilters.core.config import Config
from betterfilters.filters.settings import current_settings


class _RecordingAdapter:
    def __init__(self):
        self.configured = None

    def configure(self, config):
        self.configured = config

    def get_logger(self, name):
        return None

    def set_level(self, name, level):
        pass


class TestConfigure:
    def test_applies_filter_settings(self):
        config = Config({"betterfilters": {"filters": {"strict-callbacks": True}}})
        assert configure(config, logging_adapter=_RecordingAdapter()) is config
        assert current_settings().strict_callbacks is True

    def test_configures_logging_adapter(self):
        adapter = _RecordingAdapter()
        config = Config({})
        configure(config, logging_adapter=adapter)
        assert adapter.configured is config

    def test_loads_from_base_dir(self, tmp_path: Path):
        (tmp_path / "betterfilters.yaml").write_text(
            "betterfilters:\n  filters:\n    cache-chain: false\n"
        )
        config = configure(base_dir=tmp_path, logging_adapter=_RecordingAdapter())
        assert current_settings().cache_chain is False
        assert str(tmp_path / "betterfilters.yaml") in config.loaded_sources

    def test_default_logging_adapter(self):
        configure(Config({}))
        assert current_settings().cache_chain is True
