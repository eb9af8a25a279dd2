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
"""Recording strategies — one base class per capability variant.

A strategy implementation subclasses exactly one of :class:`OpStrategy`,
:class:`NeedsQueryStrategy`, :class:`ParamStrategy` or :class:`ReturnStrategy`
and overrides the hooks it cares about. Hooks that fall outside the declared
capability reject the call with
:class:`~oprecord.kernel.exceptions.UnsupportedOperationError`.

Every hook takes an optional :class:`InvocationContext`; strategies that do
not care about the call site simply ignore it.

Strategy instances are shared by every call of every method pointing at
them, so they must not keep per-call state between hooks.

Usage::

    class UserAudit(NeedsQueryStrategy):
        def __init__(self, repository: UserRepository) -> None:
            self._repository = repository

        def before_action(self, new_data, context=None):
            return self._repository.find(new_data.id)

        def after_compare(self, old_data, new_data, context=None):
            audit_log.write(context.qualified_name, old_data, new_data)
"""

from __future__ import annotations

from typing import Any, ClassVar, NoReturn

from oprecord.kernel.exceptions import UnsupportedOperationError
from oprecord.recording.types import Capability, InvocationContext


class OpStrategy:
    """Basic strategy: arbitrary old/new data, return value unsupported."""

    capability: ClassVar[Capability] = Capability.BASIC

    def before_action(self, new_data: Any, context: InvocationContext | None = None) -> Any:
        """Capture prior state before the business call runs."""
        return None

    def after_action(self, new_data: Any, context: InvocationContext | None = None) -> None:
        """Record an operation for which no prior state was captured."""

    def after_compare(
        self,
        old_data: Any,
        new_data: Any,
        context: InvocationContext | None = None,
    ) -> None:
        """Record an operation with both prior state and new data."""

    def after_return(self, return_value: Any, context: InvocationContext | None = None) -> None:
        """Record the business call's return value."""
        self._reject("after_return")

    def _reject(self, hook: str) -> NoReturn:
        raise UnsupportedOperationError(
            strategy=type(self).__qualname__,
            hook=hook,
            capability=self.capability.value,
        )


class NeedsQueryStrategy(OpStrategy):
    """Prior state is fetched (typically queried) before the call runs.

    Override :meth:`before_action` to fetch the current state and
    :meth:`after_compare` to record the change.
    """

    capability: ClassVar[Capability] = Capability.NEEDS_QUERY

    def after_action(self, new_data: Any, context: InvocationContext | None = None) -> None:
        self._reject("after_action")


class ParamStrategy(OpStrategy):
    """The extracted argument serves as both the old and the new data."""

    capability: ClassVar[Capability] = Capability.PARAM_ONLY

    def before_action(self, new_data: Any, context: InvocationContext | None = None) -> Any:
        return new_data


class ReturnStrategy(OpStrategy):
    """Only the business call's return value is recorded."""

    capability: ClassVar[Capability] = Capability.RETURN_ONLY

    def before_action(self, new_data: Any, context: InvocationContext | None = None) -> Any:
        self._reject("before_action")

    def after_action(self, new_data: Any, context: InvocationContext | None = None) -> None:
        self._reject("after_action")

    def after_compare(
        self,
        old_data: Any,
        new_data: Any,
        context: InvocationContext | None = None,
    ) -> None:
        self._reject("after_compare")

    def after_return(self, return_value: Any, context: InvocationContext | None = None) -> None:
        """Record the business call's return value."""


def capability_of(strategy: Any) -> Capability:
    """Return the capability declared by *strategy* (an instance or a class).

    Objects that declare none are treated as ``BASIC``.
    """
    cls = strategy if isinstance(strategy, type) else type(strategy)
    declared = getattr(cls, "capability", Capability.BASIC)
    return declared if isinstance(declared, Capability) else Capability(declared)
