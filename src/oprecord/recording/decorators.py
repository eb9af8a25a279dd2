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
"""Recording decorators — @op declares an OperationDescriptor on a method."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from oprecord.recording.types import OperationDescriptor

F = TypeVar("F", bound=Callable[..., Any])

_DESCRIPTOR_ATTR = "__oprecord_op__"


def op(
    strategy: Any = None,
    args: type | tuple[type, ...] = object,
    comparable: bool = False,
    removed: bool = False,
    target: Any = None,
    action: Any = None,
) -> Callable[[F], F]:
    """Mark a method for operation recording.

    The decorator only attaches metadata; the method is intercepted once its
    owning object is woven (see :func:`~oprecord.recording.weaver.weave_bean`).

    * ``strategy``   — strategy type or registered name (default: no-op)
    * ``args``       — type of the argument handed to the strategy
    * ``comparable`` — capture prior state for old/new comparison
    * ``removed``    — the operation deletes data; capture it beforehand
    * ``target`` / ``action`` — opaque labels copied onto the context

    Usage::

        @op(strategy=UserAudit, args=UserPatch, comparable=True,
            target=Entity.USER, action=Action.UPDATE)
        def update(self, user_id: int, patch: UserPatch) -> User: ...

    Raises:
        TypeError: *strategy* is neither a type nor a name.
    """
    if strategy is not None and not isinstance(strategy, (type, str)):
        raise TypeError(
            "@op(strategy=...) expects a strategy type or registered name, "
            f"got instance of {type(strategy).__qualname__}"
        )
    fields: dict[str, Any] = {
        "args_type": args,
        "comparable": comparable,
        "removed": removed,
        "target": target,
        "action": action,
    }
    if strategy is not None:
        fields["strategy"] = strategy
    descriptor = OperationDescriptor(**fields)

    def decorator(fn: F) -> F:
        setattr(fn, _DESCRIPTOR_ATTR, descriptor)
        return fn

    return decorator


def get_descriptor(fn: Any) -> OperationDescriptor | None:
    """Return the descriptor declared on *fn* (function or bound method)."""
    descriptor = getattr(fn, _DESCRIPTOR_ATTR, None)
    if descriptor is None:
        descriptor = getattr(getattr(fn, "__func__", None), _DESCRIPTOR_ATTR, None)
    return descriptor if isinstance(descriptor, OperationDescriptor) else None
