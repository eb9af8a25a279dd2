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
"""OperationDispatcher — the interception pipeline around one business call.

Per call: ``ENTER -> (CAPTURE)? -> INVOKE -> RECORD -> EXIT``.

* ENTER   — extract the relevant argument ("new data").
* CAPTURE — when :func:`requires_capture` says so, fetch prior state.
* INVOKE  — run the business call. If it raises, the error propagates
  unchanged and RECORD is skipped.
* RECORD  — hand old data, new data and the return value to the strategy.
* EXIT    — return the business result unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from oprecord.recording.after import AfterProcessor
from oprecord.recording.arguments import extract_argument
from oprecord.recording.before import BeforeProcessor
from oprecord.recording.classifier import requires_capture
from oprecord.recording.registry import StrategyRegistry
from oprecord.recording.strategy import capability_of
from oprecord.recording.types import Capability, InvocationContext, OperationDescriptor

logger = logging.getLogger(__name__)


class OperationDispatcher:
    """Runs capture and record around an intercepted call.

    The dispatcher keeps no per-call state: everything for one call travels
    in its :class:`InvocationContext`, so a single dispatcher serves any
    number of concurrent calls.

    Args:
        registry: Registry the strategies are resolved from.
        before: Capture processor (built from *registry* when omitted).
        after: Record processor (built from *registry* when omitted).
        enabled: When ``False`` only the business call is run.
    """

    def __init__(
        self,
        registry: StrategyRegistry,
        before: BeforeProcessor | None = None,
        after: AfterProcessor | None = None,
        enabled: bool = True,
    ) -> None:
        self._registry = registry
        self._before = before or BeforeProcessor(registry)
        self._after = after or AfterProcessor(registry)
        self._enabled = enabled

    @property
    def registry(self) -> StrategyRegistry:
        return self._registry

    @property
    def enabled(self) -> bool:
        return self._enabled

    def dispatch(
        self,
        descriptor: OperationDescriptor | None,
        context: InvocationContext,
        proceed: Callable[[], Any],
    ) -> Any:
        """Run *proceed* (the business call) inside the recording pipeline."""
        if not self._enabled or descriptor is None:
            return proceed()

        new_data, old_data = self._enter(descriptor, context)

        result = proceed()

        self._record(descriptor, context, old_data, new_data, result)
        return result

    async def dispatch_async(
        self,
        descriptor: OperationDescriptor | None,
        context: InvocationContext,
        proceed: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Async variant of :meth:`dispatch` for coroutine business methods.

        Strategy hooks are still called synchronously.
        """
        if not self._enabled or descriptor is None:
            return await proceed()

        new_data, old_data = self._enter(descriptor, context)

        result = await proceed()

        self._record(descriptor, context, old_data, new_data, result)
        return result

    def _enter(self, descriptor: OperationDescriptor, context: InvocationContext) -> tuple[Any, Any]:
        new_data = extract_argument(context.arguments, descriptor.args_type)

        old_data = None
        if requires_capture(descriptor, self._capability(descriptor)):
            old_data = self._before.capture(context, descriptor, new_data)
        return new_data, old_data

    def _record(
        self,
        descriptor: OperationDescriptor,
        context: InvocationContext,
        old_data: Any,
        new_data: Any,
        result: Any,
    ) -> None:
        context.return_value = result
        self._after.record(context, descriptor, old_data, new_data, result)

    def _capability(self, descriptor: OperationDescriptor) -> Capability:
        strategy = self._registry.get_safely(descriptor.strategy)
        if strategy is None:
            logger.debug("No strategy for %r, capture skipped", descriptor.strategy)
            return Capability.BASIC
        return capability_of(strategy)
