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
"""Recording configuration — properties and dispatcher wiring."""

from __future__ import annotations

import logging

from pydantic import BaseModel

from oprecord.core.config import Config, config_properties
from oprecord.logging.port import LoggingPort
from oprecord.logging.structlog_adapter import StructlogAdapter
from oprecord.recording.after import AfterProcessor
from oprecord.recording.before import BeforeProcessor
from oprecord.recording.dispatcher import OperationDispatcher
from oprecord.recording.registry import StrategyRegistry
from oprecord.recording.strategies import LoggingParamStrategy, LoggingReturnStrategy, NoOpStrategy

logger = logging.getLogger(__name__)


@config_properties(prefix="oprecord.recording")
class RecordingProperties(BaseModel):
    """Settings under ``oprecord.recording``.

    * ``enabled``           -- run the capture/record pipeline at all
    * ``register_defaults`` -- register :class:`NoOpStrategy` when missing
    * ``configure_logging`` -- configure structlog from ``oprecord.logging``
    * ``log_records``       -- register the structured-log strategies
    """

    enabled: bool = True
    register_defaults: bool = True
    configure_logging: bool = False
    log_records: bool = False


def create_dispatcher(
    config: Config | None = None,
    registry: StrategyRegistry | None = None,
    logging_port: LoggingPort | None = None,
) -> OperationDispatcher:
    """Build an :class:`OperationDispatcher` from configuration.

    Default strategies are only registered when the registry holds no
    instance of their type yet.
    """
    config = config if config is not None else Config()
    properties = config.bind(RecordingProperties)
    registry = registry if registry is not None else StrategyRegistry()

    if properties.configure_logging or properties.log_records:
        logging_port = logging_port if logging_port is not None else StructlogAdapter()
        if properties.configure_logging:
            logging_port.configure(config)

    if properties.register_defaults and not registry.contains(NoOpStrategy):
        registry.register(NoOpStrategy())
    if properties.log_records:
        if not registry.contains(LoggingParamStrategy):
            registry.register(LoggingParamStrategy(logging_port=logging_port))
        if not registry.contains(LoggingReturnStrategy):
            registry.register(LoggingReturnStrategy(logging_port=logging_port))

    logger.debug(
        "Operation recording %s with %d strategies",
        "enabled" if properties.enabled else "disabled",
        len(registry.strategies()),
    )
    return OperationDispatcher(
        registry,
        before=BeforeProcessor(registry),
        after=AfterProcessor(registry),
        enabled=properties.enabled,
    )
