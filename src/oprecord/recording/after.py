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
"""AfterProcessor — delivers old data, new data and return value to a strategy."""

from __future__ import annotations

import logging
from typing import Any

from oprecord.recording.registry import StrategyRegistry
from oprecord.recording.strategy import capability_of
from oprecord.recording.types import InvocationContext, OperationDescriptor

logger = logging.getLogger(__name__)


class AfterProcessor:
    """Selects the recording hook from the strategy's capability.

    Dispatch order:

    1. No descriptor or no strategy key: nothing to record.
    2. Strategy cannot be resolved: nothing to record.
    3. *new_data* present and the strategy records arguments
       (``NEEDS_QUERY`` / ``PARAM_ONLY``): ``after_action(new_data)`` when no
       prior state was captured, ``after_compare(old_data, new_data)``
       otherwise.
    4. *return_value* present and the strategy records return values
       (``RETURN_ONLY``): ``after_return(return_value)``.

    A hook that rejects the call raises
    :class:`~oprecord.kernel.exceptions.UnsupportedOperationError`, which is
    left to propagate.
    """

    def __init__(self, registry: StrategyRegistry) -> None:
        self._registry = registry

    def record(
        self,
        context: InvocationContext,
        descriptor: OperationDescriptor | None,
        old_data: Any,
        new_data: Any,
        return_value: Any,
    ) -> None:
        if descriptor is None or descriptor.strategy is None:
            return

        strategy = self._registry.get_safely(descriptor.strategy)
        if strategy is None:
            return

        capability = capability_of(strategy)

        if new_data is not None and capability.records_arguments:
            if old_data is None:
                strategy.after_action(new_data, context)
            else:
                strategy.after_compare(old_data, new_data, context)
            logger.debug("Recorded %s via %s", context.qualified_name, type(strategy).__name__)

        if return_value is not None and capability.records_return:
            strategy.after_return(return_value, context)
            logger.debug("Recorded return of %s via %s", context.qualified_name, type(strategy).__name__)
