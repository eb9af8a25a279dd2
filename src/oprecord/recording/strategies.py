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
"""Built-in strategies — the no-op default and structured-log recorders."""

from __future__ import annotations

import time
from dataclasses import dataclass, field, fields
from typing import Any

from oprecord.logging.port import LoggingPort
from oprecord.logging.structlog_adapter import StructlogAdapter
from oprecord.recording.strategy import OpStrategy, ParamStrategy, ReturnStrategy
from oprecord.recording.types import InvocationContext


class NoOpStrategy(OpStrategy):
    """Default strategy: records nothing."""

    def after_return(self, return_value: Any, context: InvocationContext | None = None) -> None:
        pass


@dataclass
class OperationRecord:
    """One recorded operation, as emitted by the logging strategies."""

    class_name: str | None
    method_name: str | None
    target: Any = None
    action: Any = None
    old_data: Any = None
    new_data: Any = None
    result: Any = None
    timestamp: float = field(default_factory=time.time)

    @classmethod
    def from_context(cls, context: InvocationContext | None, **data: Any) -> OperationRecord:
        if context is None:
            return cls(class_name=None, method_name=None, **data)
        return cls(
            class_name=context.class_name,
            method_name=context.method_name,
            target=context.target,
            action=context.action,
            **data,
        )

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class _RecordLogger:
    def __init__(self, logging_port: LoggingPort | None, logger_name: str | None) -> None:
        port = logging_port if logging_port is not None else StructlogAdapter()
        self.name = logger_name or port.records_logger
        self._logger = port.get_logger(self.name)

    def emit(self, record: OperationRecord) -> None:
        self._logger.info("operation_recorded", record=record.to_dict())


class LoggingParamStrategy(ParamStrategy):
    """Logs the extracted argument of every recorded call."""

    def __init__(self, logger_name: str | None = None, logging_port: LoggingPort | None = None) -> None:
        self._sink = _RecordLogger(logging_port, logger_name)

    @property
    def logger_name(self) -> str:
        return self._sink.name

    def after_action(self, new_data: Any, context: InvocationContext | None = None) -> None:
        self._sink.emit(OperationRecord.from_context(context, new_data=new_data))

    def after_compare(
        self,
        old_data: Any,
        new_data: Any,
        context: InvocationContext | None = None,
    ) -> None:
        self._sink.emit(OperationRecord.from_context(context, old_data=old_data, new_data=new_data))


class LoggingReturnStrategy(ReturnStrategy):
    """Logs the return value of every recorded call."""

    def __init__(self, logger_name: str | None = None, logging_port: LoggingPort | None = None) -> None:
        self._sink = _RecordLogger(logging_port, logger_name)

    @property
    def logger_name(self) -> str:
        return self._sink.name

    def after_return(self, return_value: Any, context: InvocationContext | None = None) -> None:
        self._sink.emit(OperationRecord.from_context(context, result=return_value))
