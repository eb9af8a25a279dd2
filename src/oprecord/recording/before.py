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
"""BeforeProcessor — captures prior state through the strategy's capture hook."""

from __future__ import annotations

import logging
from typing import Any

from oprecord.recording.registry import StrategyRegistry
from oprecord.recording.strategy import capability_of
from oprecord.recording.types import Capability, InvocationContext, OperationDescriptor

logger = logging.getLogger(__name__)


class BeforeProcessor:
    """Invokes ``before_action`` on the descriptor's strategy.

    Capture is best-effort: a missing descriptor or an unresolvable strategy
    yields ``None``. The result is neither cached nor retried.
    """

    def __init__(self, registry: StrategyRegistry) -> None:
        self._registry = registry

    def capture(
        self,
        context: InvocationContext,
        descriptor: OperationDescriptor | None,
        new_data: Any,
    ) -> Any:
        if descriptor is None or descriptor.strategy is None:
            return None

        strategy = self._registry.get_safely(descriptor.strategy)
        if strategy is None:
            return None

        # Return-only strategies are never asked for prior state.
        if capability_of(strategy) is Capability.RETURN_ONLY:
            return None

        old_data = strategy.before_action(new_data, context)
        if old_data is None:
            old_data = strategy.before_action(new_data)

        logger.debug(
            "Captured prior state for %s (found=%s)",
            context.qualified_name,
            old_data is not None,
        )
        return old_data
