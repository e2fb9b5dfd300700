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
"""StructlogAdapter: renders objfactory's structured events through structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from objfactory.config.properties.logging import LoggingProperties

LIBRARY_LOGGER = "objfactory"


class StructlogAdapter:
    """LoggingPort backed by structlog on top of the ``objfactory`` stdlib logger.

    Library modules emit events (``duplicate_field_key``, ``copy_plan_built``
    ...) through ``structlog.get_logger(__name__)``. Once configured, those
    events are rendered as console or JSON lines on *stream* by a handler
    owned by this adapter; the root logger is not touched.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        self._handler.setFormatter(logging.Formatter("%(message)s"))

    @property
    def handler(self) -> logging.Handler:
        return self._handler

    def configure(self, properties: LoggingProperties) -> None:
        """Install the renderer and levels described by *properties*."""
        if properties.format.strip().lower() == "json":
            renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(colors=False)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
        )

        library = logging.getLogger(LIBRARY_LOGGER)
        if self._handler not in library.handlers:
            library.addHandler(self._handler)
        library.propagate = False

        levels = dict(properties.level)
        self.set_level(LIBRARY_LOGGER, levels.pop("root", "INFO"))
        for name, level in levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        """Set *name*'s stdlib level; unknown level names mean INFO."""
        logging.getLogger(name).setLevel(logging.getLevelNamesMapping().get(str(level).strip().upper(), logging.INFO))
