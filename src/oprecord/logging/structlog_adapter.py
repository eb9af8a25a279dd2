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
"""StructlogAdapter — LoggingPort backed by structlog."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from oprecord.core.config import Config
from oprecord.logging.port import DEFAULT_RECORDS_LOGGER

_HANDLER_NAME = "oprecord"


class StructlogAdapter:
    """Structured logging for the recording layer.

    Settings under ``oprecord.logging``:

    * ``format``  -- ``console`` or ``json``
    * ``level``   -- ``root`` for the ``oprecord`` namespace, plus per-logger levels
    * ``records`` -- logger that operation records are emitted on

    Only the ``oprecord`` logger namespace (and the records logger, when it
    lives outside it) gets a handler; the host's root logger is left alone.
    """

    def __init__(self, records_logger: str = DEFAULT_RECORDS_LOGGER) -> None:
        self._records_logger = records_logger
        self._level = "INFO"
        self._format = "console"
        self._logger_levels: dict[str, str] = {}

    @property
    def records_logger(self) -> str:
        return self._records_logger

    @property
    def output_format(self) -> str:
        return self._format

    def configure(self, config: Config) -> None:
        levels = dict(config.get_section("oprecord.logging.level"))
        self._level = str(levels.pop("root", "INFO")).upper()
        self._logger_levels = {name: str(level).upper() for name, level in levels.items()}
        self._format = str(config.get("oprecord.logging.format", "console")).lower()
        self._records_logger = str(config.get("oprecord.logging.records", self._records_logger))

        structlog.configure(
            processors=self._processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        self._install_handlers()

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def _processors(self) -> list[structlog.types.Processor]:
        processors: list[structlog.types.Processor] = [
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        if self._format == "json":
            processors.append(structlog.processors.dict_tracebacks)
            processors.append(structlog.processors.JSONRenderer(default=repr))
        else:
            processors.append(structlog.dev.ConsoleRenderer())
        return processors

    def _install_handlers(self) -> None:
        namespaces = [_HANDLER_NAME]
        if self._records_logger.split(".")[0] != _HANDLER_NAME:
            namespaces.append(self._records_logger)

        for namespace in namespaces:
            target = logging.getLogger(namespace)
            for existing in list(target.handlers):
                if existing.get_name() == _HANDLER_NAME:
                    target.removeHandler(existing)
            handler = logging.StreamHandler(sys.stdout)
            handler.set_name(_HANDLER_NAME)
            handler.setFormatter(logging.Formatter("%(message)s"))
            target.addHandler(handler)
            target.setLevel(_level_of(self._level))

        for name, level in self._logger_levels.items():
            logging.getLogger(name).setLevel(_level_of(level))


def _level_of(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO
