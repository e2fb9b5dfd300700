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
"""Tests for LoggingPort and the structlog adapter."""

import io
import json
import logging
from typing import Any

import pytest
import structlog

from objfactory.config.properties.logging import LoggingProperties
from objfactory.logging import LoggingPort, StructlogAdapter
from objfactory.logging.structlog_adapter import LIBRARY_LOGGER


@pytest.fixture(autouse=True)
def _restore_logging():
    library = logging.getLogger(LIBRARY_LOGGER)
    handlers, level, propagate = list(library.handlers), library.level, library.propagate
    yield
    structlog.reset_defaults()
    library.handlers[:] = handlers
    library.setLevel(level)
    library.propagate = propagate
    for name in ("objfactory.copy", "objfactory.proxy"):
        logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def stream() -> io.StringIO:
    return io.StringIO()


class TestLoggingPortProtocol:
    def test_conforming_class_is_instance(self):
        class FakeLogging:
            def configure(self, properties: Any) -> None:
                pass

            def get_logger(self, name: str) -> Any:
                pass

            def set_level(self, name: str, level: str) -> None:
                pass

        assert isinstance(FakeLogging(), LoggingPort)

    def test_non_conforming_class_is_not_instance(self):
        class Incomplete:
            def get_logger(self, name: str) -> Any:
                pass

        assert not isinstance(Incomplete(), LoggingPort)

    def test_adapter_implements_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapter:
    def test_json_events_reach_stream(self, stream):
        StructlogAdapter(stream).configure(LoggingProperties(enabled=True, format="json"))

        structlog.get_logger("objfactory.copy.catalog").warning("duplicate_field_key", key="name")

        record = json.loads(stream.getvalue().strip())
        assert record["event"] == "duplicate_field_key"
        assert record["key"] == "name"
        assert record["level"] == "warning"
        assert record["logger"] == "objfactory.copy.catalog"
        assert "timestamp" in record

    def test_console_format(self, stream):
        StructlogAdapter(stream).configure(LoggingProperties(enabled=True))

        structlog.get_logger("objfactory.serialization.provider").info("serializer_provider_initialized")

        assert "serializer_provider_initialized" in stream.getvalue()

    def test_root_level_filters_library_events(self, stream):
        StructlogAdapter(stream).configure(LoggingProperties(enabled=True, level={"root": "WARNING"}))

        structlog.get_logger("objfactory.copy.catalog").debug("copy_plan_built")
        structlog.get_logger("objfactory.copy.catalog").info("copy_plan_built")

        assert stream.getvalue() == ""
        assert logging.getLogger(LIBRARY_LOGGER).level == logging.WARNING

    def test_per_logger_levels(self, stream):
        properties = LoggingProperties(enabled=True, level={"root": "WARNING", "objfactory.copy": "debug"})
        StructlogAdapter(stream).configure(properties)

        structlog.get_logger("objfactory.copy.accessor").debug("accessor_fallback")
        structlog.get_logger("objfactory.proxy.unwrapper").debug("collection_rebuild_fallback")

        output = stream.getvalue()
        assert "accessor_fallback" in output
        assert "collection_rebuild_fallback" not in output
        assert logging.getLogger("objfactory.copy").level == logging.DEBUG

    def test_reconfigure_keeps_one_handler(self, stream):
        adapter = StructlogAdapter(stream)
        adapter.configure(LoggingProperties(enabled=True))
        adapter.configure(LoggingProperties(enabled=True, format="json"))

        library = logging.getLogger(LIBRARY_LOGGER)
        assert library.handlers.count(adapter.handler) == 1
        assert library.propagate is False

    def test_root_logger_is_untouched(self, stream):
        root_handlers = list(logging.getLogger().handlers)
        StructlogAdapter(stream).configure(LoggingProperties(enabled=True))
        assert logging.getLogger().handlers == root_handlers

    def test_get_logger(self):
        logger = StructlogAdapter().get_logger("objfactory.test")
        assert callable(getattr(logger, "info", None))

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("objfactory.proxy", "error")
        assert logging.getLogger("objfactory.proxy").level == logging.ERROR

    def test_unknown_level_means_info(self):
        StructlogAdapter().set_level("objfactory.proxy", "chatty")
        assert logging.getLogger("objfactory.proxy").level == logging.INFO
