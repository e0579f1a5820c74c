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
"""Tests for StructlogAdapter — default LoggingPort implementation."""

from __future__ import annotations

import logging

from contactapi.core.config import Config
from contactapi.logging.port import LoggingPort
from contactapi.logging.structlog_adapter import StructlogAdapter


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"contactapi": {"logging": {"level": {"root": "DEBUG"}}}}))
        assert adapter._root_level == "DEBUG"

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"contactapi": {"logging": {"format": "json"}}}))
        assert adapter._format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"contactapi": {"logging": {"level": {"root": "INFO", "contactapi.web": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"contactapi.web": "DEBUG"}
        assert logging.getLogger("contactapi.web").level == logging.DEBUG

    def test_level_from_env_string(self, monkeypatch):
        monkeypatch.setenv("CONTACTAPI_LOGGING_LEVEL", "warning")
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "WARNING"
        assert adapter._module_levels == {}


class TestStructlogAdapterGetLogger:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("contactapi.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))


class TestStructlogAdapterSetLevel:
    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("contactapi.cors-test", "ERROR")
        assert logging.getLogger("contactapi.cors-test").level == logging.ERROR
