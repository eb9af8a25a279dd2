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
"""StrategyRegistry — maps strategy types and names to shared instances."""

from __future__ import annotations

import difflib
import logging
from typing import Any, TypeVar, cast

from oprecord.kernel.exceptions import (
    AmbiguousStrategyError,
    InvalidStrategyError,
    StrategyResolutionError,
)
from oprecord.recording.strategy import capability_of

T = TypeVar("T")

logger = logging.getLogger(__name__)


class StrategyRegistry:
    """Explicit registry of constructed, stateless strategy instances.

    Populated once at startup and then only read, so lookups are safe from
    any number of concurrent calls.

    Usage::

        registry = StrategyRegistry()
        registry.register(UserAudit(repository))
        registry.register(OrderAudit(), name="orders")

        registry.resolve(UserAudit)   # by type
        registry.resolve("orders")    # by name
        registry.get_safely(Missing)  # None instead of raising
    """

    def __init__(self) -> None:
        self._by_type: dict[type, Any] = {}
        self._by_name: dict[str, Any] = {}

    def register(self, strategy: Any, name: str = "") -> None:
        """Register *strategy* under its own type and, optionally, *name*.

        Registering a second instance of the same type replaces the first,
        along with any names that pointed at it.

        Raises:
            InvalidStrategyError: the strategy declares an unknown capability.
        """
        if isinstance(strategy, type):
            raise TypeError(f"register() expects a strategy instance, got class {strategy.__qualname__}")
        try:
            capability_of(strategy)
        except ValueError as exc:
            raise InvalidStrategyError(
                type(strategy).__qualname__, getattr(type(strategy), "capability", None)
            ) from exc

        previous = self._by_type.get(type(strategy))
        if previous is not None and previous is not strategy:
            self._by_name = {n: s for n, s in self._by_name.items() if s is not previous}
        self._by_type[type(strategy)] = strategy
        if name:
            self._by_name[name] = strategy

    def resolve(self, key: type[T] | str) -> T:
        """Resolve the strategy registered for *key*.

        A type key matches an instance of exactly that type first, then a
        single registered instance of a subclass.

        Raises:
            StrategyResolutionError: nothing is registered for *key*.
            AmbiguousStrategyError: several subclasses of *key* are registered.
        """
        if isinstance(key, str):
            if key in self._by_name:
                return cast(T, self._by_name[key])
            raise StrategyResolutionError(key, suggestions=self._similar_names(key))

        if not isinstance(key, type):
            raise StrategyResolutionError(key)

        if key in self._by_type:
            return cast(T, self._by_type[key])

        candidates = [inst for cls, inst in self._by_type.items() if issubclass(cls, key)]
        if len(candidates) == 1:
            return cast(T, candidates[0])
        if candidates:
            raise AmbiguousStrategyError(key, candidates=[type(c).__qualname__ for c in candidates])

        raise StrategyResolutionError(key, suggestions=self._similar_names(getattr(key, "__name__", "")))

    def get_safely(self, key: Any) -> Any | None:
        """Resolve *key*, returning ``None`` when resolution fails."""
        if key is None:
            return None
        try:
            return self.resolve(key)
        except StrategyResolutionError as exc:
            logger.debug("Strategy resolution failed, recording disabled: %s", exc)
            return None

    def contains(self, key: Any) -> bool:
        """Check whether *key* resolves to exactly one strategy."""
        return self.get_safely(key) is not None

    def strategies(self) -> list[Any]:
        """Return every distinct registered instance, in registration order."""
        seen: dict[int, Any] = {}
        for inst in [*self._by_type.values(), *self._by_name.values()]:
            seen.setdefault(id(inst), inst)
        return list(seen.values())

    def _similar_names(self, name: str) -> list[str]:
        if not name:
            return []
        known = [*self._by_name, *(cls.__name__ for cls in self._by_type)]
        return difflib.get_close_matches(name, known, n=5, cutoff=0.4)
