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
"""Exception hierarchy for operation recording.

All library exceptions inherit from OpRecordException so callers can tell a
recording-layer failure apart from a failure of the business method itself.

Categories:
- StrategyResolutionError: no strategy instance for a strategy key
- InvalidStrategyError: a strategy rejected at registration time
- UnsupportedOperationError: a strategy hook invoked outside its capability
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Base Exception
# =============================================================================


class OpRecordException(Exception):
    """Base exception for all operation-recording errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "UNSUPPORTED_OPERATION").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Resolution Exceptions
# =============================================================================


class StrategyResolutionError(OpRecordException):
    """No strategy instance is registered for the requested key."""

    def __init__(self, strategy_key: Any, suggestions: list[str] | None = None) -> None:
        self.strategy_key = strategy_key
        self.suggestions = suggestions or []

        message = f"No recording strategy registered for '{_describe(strategy_key)}'"
        if self.suggestions:
            message += f" (similar: {', '.join(self.suggestions)})"
        super().__init__(
            message,
            code="STRATEGY_NOT_FOUND",
            context={"strategy": _describe(strategy_key)},
        )


class AmbiguousStrategyError(StrategyResolutionError):
    """A strategy type matches more than one registered instance."""

    def __init__(self, strategy_key: Any, candidates: list[str]) -> None:
        self.candidates = candidates
        OpRecordException.__init__(
            self,
            f"Strategy type '{_describe(strategy_key)}' is ambiguous; "
            f"registered candidates: {', '.join(candidates)}",
            code="STRATEGY_NOT_UNIQUE",
            context={"strategy": _describe(strategy_key), "candidates": list(candidates)},
        )
        self.strategy_key = strategy_key
        self.suggestions = list(candidates)


# =============================================================================
# Capability Exceptions
# =============================================================================


class InvalidStrategyError(OpRecordException):
    """A strategy declares a capability the pipeline does not know."""

    def __init__(self, strategy: str, capability: Any) -> None:
        self.strategy = strategy
        self.capability = capability
        super().__init__(
            f"Strategy {strategy} declares unknown capability {capability!r}",
            code="INVALID_STRATEGY",
            context={"strategy": strategy, "capability": repr(capability)},
        )


class UnsupportedOperationError(OpRecordException):
    """A strategy hook was invoked outside the strategy's declared capability.

    Raised from the default implementation of the rejected hook. It always
    surfaces from the recording layer, never from the business method.
    """

    def __init__(self, strategy: str, hook: str, capability: str) -> None:
        self.strategy = strategy
        self.hook = hook
        self.capability = capability
        super().__init__(
            f"Operation recording: {strategy}.{hook}() is not supported by a {capability} strategy",
            code="UNSUPPORTED_OPERATION",
            context={"strategy": strategy, "hook": hook, "capability": capability},
        )


def _describe(key: Any) -> str:
    if isinstance(key, str):
        return key
    return getattr(key, "__qualname__", None) or getattr(key, "__name__", None) or repr(key)
