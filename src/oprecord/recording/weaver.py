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
"""Recording weaver — wraps @op methods of a bean with the dispatcher."""

from __future__ import annotations

import functools
import inspect
from typing import Any

from oprecord.recording.decorators import get_descriptor
from oprecord.recording.dispatcher import OperationDispatcher
from oprecord.recording.types import InvocationContext, OperationDescriptor

_WOVEN_ATTR = "__oprecord_woven__"


def weave_bean(bean: Any, dispatcher: OperationDispatcher, qualified_prefix: str | None = None) -> int:
    """Weave operation recording into the public ``@op`` methods of *bean*.

    Each matching method is replaced on the instance with a wrapper that
    builds a fresh :class:`InvocationContext` and calls the dispatcher once
    per call. *qualified_prefix* becomes the context's ``class_name``
    (default ``f"{module}.{ClassName}"``).

    Returns the number of woven methods.
    """
    cls = type(bean)
    class_name = qualified_prefix or f"{cls.__module__}.{cls.__qualname__}"
    woven = 0

    for attr_name in dir(bean):
        if attr_name.startswith("_"):
            continue

        attr = getattr(bean, attr_name, None)
        if attr is None or not callable(attr):
            continue

        descriptor = get_descriptor(attr)
        if descriptor is None or getattr(attr, _WOVEN_ATTR, False):
            continue

        if inspect.iscoroutinefunction(attr):
            wrapper = _build_async_wrapper(dispatcher, class_name, attr_name, attr, descriptor)
        else:
            wrapper = _build_sync_wrapper(dispatcher, class_name, attr_name, attr, descriptor)

        setattr(wrapper, _WOVEN_ATTR, True)
        setattr(bean, attr_name, wrapper)
        woven += 1

    return woven


def _new_context(
    class_name: str,
    method_name: str,
    descriptor: OperationDescriptor,
    args: tuple,
    kwargs: dict[str, Any],
) -> InvocationContext:
    return InvocationContext(
        class_name=class_name,
        method_name=method_name,
        args=args,
        kwargs=kwargs,
        target=descriptor.target,
        action=descriptor.action,
    )


def _build_async_wrapper(
    dispatcher: OperationDispatcher,
    class_name: str,
    method_name: str,
    original: Any,
    descriptor: OperationDescriptor,
) -> Any:
    @functools.wraps(original)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _new_context(class_name, method_name, descriptor, args, kwargs)

        async def proceed() -> Any:
            return await original(*args, **kwargs)

        return await dispatcher.dispatch_async(descriptor, context, proceed)

    return wrapper


def _build_sync_wrapper(
    dispatcher: OperationDispatcher,
    class_name: str,
    method_name: str,
    original: Any,
    descriptor: OperationDescriptor,
) -> Any:
    @functools.wraps(original)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = _new_context(class_name, method_name, descriptor, args, kwargs)
        return dispatcher.dispatch(descriptor, context, lambda: original(*args, **kwargs))

    return wrapper
