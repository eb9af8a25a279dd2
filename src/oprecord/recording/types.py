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
"""Recording core types — Capability, OperationDescriptor, InvocationContext."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Capability(str, Enum):
    """The closed set of strategy capability variants.

    * ``BASIC``       — arbitrary old/new data, return value unsupported.
    * ``NEEDS_QUERY`` — prior state is queried before the call runs.
    * ``PARAM_ONLY``  — the argument itself is both "before" and "after".
    * ``RETURN_ONLY`` — only the return value is recorded.
    """

    BASIC = "basic"
    NEEDS_QUERY = "needs_query"
    PARAM_ONLY = "param_only"
    RETURN_ONLY = "return_only"

    @property
    def records_arguments(self) -> bool:
        return self in (Capability.NEEDS_QUERY, Capability.PARAM_ONLY)

    @property
    def records_return(self) -> bool:
        return self is Capability.RETURN_ONLY


def _default_strategy() -> Any:
    from oprecord.recording.strategies import NoOpStrategy

    return NoOpStrategy


@dataclass(frozen=True)
class OperationDescriptor:
    """Immutable recording configuration attached to an interceptable method.

    Attributes:
        strategy: Strategy type (or registered strategy name) to resolve.
            Defaults to :class:`~oprecord.recording.strategies.NoOpStrategy`.
        args_type: Type, or tuple of types, used to pick the one relevant
            argument. ``object`` matches any non-``None`` argument.
        comparable: Request old/new comparison (forces prior-state capture).
        removed: The operation is a deletion (forces prior-state capture).
        target: Optional label of the entity being operated on.
        action: Optional label of the action being performed.
    """

    strategy: Any = field(default_factory=_default_strategy)
    args_type: type | tuple[type, ...] = object
    comparable: bool = False
    removed: bool = False
    target: Any = None
    action: Any = None


@dataclass
class InvocationContext:
    """Ephemeral per-call state, owned by the dispatcher for one call.

    Attributes:
        class_name: Qualified name of the class declaring the method.
        method_name: Name of the method being called.
        args: Positional arguments passed to the method.
        kwargs: Keyword arguments passed to the method.
        target: Entity label copied from the descriptor.
        action: Action label copied from the descriptor.
        return_value: The return value (set after method execution).
    """

    class_name: str
    method_name: str
    args: tuple = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    target: Any = None
    action: Any = None
    return_value: Any = None

    @property
    def qualified_name(self) -> str:
        return f"{self.class_name}.{self.method_name}"

    @property
    def arguments(self) -> list[Any]:
        """Positional arguments followed by keyword values, in call order."""
        return [*self.args, *self.kwargs.values()]
