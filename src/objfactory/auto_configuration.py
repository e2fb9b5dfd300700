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
"""Auto-configuration: wires an ObjectCopier from objfactory configuration."""

from __future__ import annotations

from pathlib import Path

import structlog

from objfactory.config.auto import AutoConfiguration
from objfactory.config.properties.copy import CopyProperties
from objfactory.config.properties.logging import LoggingProperties
from objfactory.config.properties.serializer import SerializerProperties
from objfactory.copy.catalog import FieldCatalog
from objfactory.copy.copier import ObjectCopier
from objfactory.core.config import Config
from objfactory.kernel.exceptions import AdapterNotConfiguredError
from objfactory.logging.port import LoggingPort
from objfactory.logging.structlog_adapter import StructlogAdapter
from objfactory.serialization.provider import SerializerProvider
from objfactory.serialization.types import SerializationType

logger = structlog.get_logger(__name__)


class ObjectCopierAutoConfiguration:
    """Builds an ObjectCopier and its collaborators from a Config."""

    def __init__(self, config: Config) -> None:
        self._config = config

    @staticmethod
    def detect_provider() -> SerializationType | None:
        """Detect the best available serialization back-end."""
        return AutoConfiguration.detect_serializer_provider()

    def logging(self, adapter: LoggingPort | None = None) -> LoggingPort | None:
        """Configure objfactory's log output when objfactory.logging.enabled is set.

        Returns the configured adapter (a StructlogAdapter unless *adapter*
        is given), or None when logging is left to the host application.
        """
        properties = self._config.bind(LoggingProperties)
        if not properties.enabled:
            return None
        port = adapter if adapter is not None else StructlogAdapter()
        port.configure(properties)
        return port

    def serializer_provider(self) -> SerializerProvider:
        properties = self._config.bind(SerializerProperties)
        if not properties.enabled:
            raise AdapterNotConfiguredError(
                None,
                reason="the serializer provider is disabled (objfactory.serializer.enabled=false)",
            )
        provider = SerializerProvider(preferred=str(properties.type))
        provider.initialize_if_empty()
        return provider

    def object_copier(self, serializers: SerializerProvider | None = None) -> ObjectCopier:
        properties = self._config.bind(CopyProperties)
        copier = ObjectCopier(
            catalog=FieldCatalog(),
            serializers=serializers if serializers is not None else self.serializer_provider(),
            max_workers=properties.max_workers or None,
            parallel=properties.parallel,
        )
        logger.info("object_copier_configured", parallel=properties.parallel, max_workers=properties.max_workers)
        return copier


def build_object_copier(config: Config | None = None) -> ObjectCopier:
    """Build an ObjectCopier from *config*.

    Without a config, configuration is loaded from the working directory
    (objfactory.yaml/.toml, config/ subdirectory, OBJFACTORY_* env vars) on
    top of the packaged defaults. Logging is configured first when
    objfactory.logging.enabled is set.

    Raises:
        AdapterNotConfiguredError: Serialization is disabled, or no
            configured back-end is importable.
    """
    if config is None:
        config = Config.from_sources(Path.cwd())
    auto = ObjectCopierAutoConfiguration(config)
    auto.logging()
    return auto.object_copier()
