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
"""Tests for OperationDispatcher — the capture/invoke/record pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pytest

from oprecord.kernel.exceptions import UnsupportedOperationError
from oprecord.recording.after import AfterProcessor
from oprecord.recording.dispatcher import OperationDispatcher
from oprecord.recording.registry import StrategyRegistry
from oprecord.recording.strategy import NeedsQueryStrategy, OpStrategy, ParamStrategy, ReturnStrategy
from oprecord.recording.types import InvocationContext, OperationDescriptor


@dataclass
class UserPatch:
    id: int
    name: str


# ---------------------------------------------------------------------------
# Helper strategies
# ---------------------------------------------------------------------------


class UserQueryAudit(NeedsQueryStrategy):
    def __init__(self, stored: dict[int, dict[str, Any]]) -> None:
        self.stored = stored
        self.events: list[tuple[Any, ...]] = []

    def before_action(self, new_data, context=None):
        self.events.append(("before_action", new_data))
        return self.stored.get(new_data.id)

    def after_action(self, new_data, context=None):
        self.events.append(("after_action", new_data))

    def after_compare(self, old_data, new_data, context=None):
        self.events.append(("after_compare", old_data, new_data))


class CreateAudit(ParamStrategy):
    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def after_action(self, new_data, context=None):
        self.events.append(("after_action", new_data))

    def after_compare(self, old_data, new_data, context=None):
        self.events.append(("after_compare", old_data, new_data))


class FindAudit(ReturnStrategy):
    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def before_action(self, new_data, context=None):
        self.events.append(("before_action", new_data))

    def after_return(self, return_value, context=None):
        self.events.append(("after_return", return_value, context.method_name))


class DeleteAudit(OpStrategy):
    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def before_action(self, new_data, context=None):
        self.events.append(("before_action", new_data))
        return {"id": new_data}


class SpyAfterProcessor(AfterProcessor):
    def __init__(self, registry: StrategyRegistry) -> None:
        super().__init__(registry)
        self.invocations = 0

    def record(self, *args: Any, **kwargs: Any) -> None:
        self.invocations += 1
        super().record(*args, **kwargs)


def _dispatcher(*strategies: Any, enabled: bool = True) -> OperationDispatcher:
    registry = StrategyRegistry()
    for s in strategies:
        registry.register(s)
    return OperationDispatcher(registry, after=SpyAfterProcessor(registry), enabled=enabled)


def _context(method: str, *args: Any, **kwargs: Any) -> InvocationContext:
    return InvocationContext(class_name="svc.UserService", method_name=method, args=args, kwargs=kwargs)


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_needs_query_update_compares_old_and_new(self) -> None:
        audit = UserQueryAudit({7: {"id": 7, "name": "old"}})
        dispatcher = _dispatcher(audit)
        descriptor = OperationDescriptor(strategy=UserQueryAudit, args_type=UserPatch, comparable=True)
        patch = UserPatch(id=7, name="X")

        result = dispatcher.dispatch(descriptor, _context("update", 7, patch=patch), lambda: "updated")

        assert result == "updated"
        assert audit.events == [
            ("before_action", patch),
            ("after_compare", {"id": 7, "name": "old"}, patch),
        ]

    def test_param_only_create_uses_argument_as_old_and_new(self) -> None:
        audit = CreateAudit()
        dispatcher = _dispatcher(audit)
        data = {"name": "X"}

        dispatcher.dispatch(OperationDescriptor(strategy=CreateAudit), _context("create", data), lambda: None)

        assert len(audit.events) == 1
        hook, old, new = audit.events[0]
        assert hook == "after_compare"
        assert old is data
        assert new is data

    def test_return_only_find_records_return_and_never_captures(self) -> None:
        audit = FindAudit()
        dispatcher = _dispatcher(audit)
        descriptor = OperationDescriptor(strategy=FindAudit, comparable=True, removed=True)

        result = dispatcher.dispatch(descriptor, _context("find", id=7), lambda: {"id": 7, "name": "X"})

        assert result == {"id": 7, "name": "X"}
        assert audit.events == [("after_return", {"id": 7, "name": "X"}, "find")]

    def test_failed_delete_skips_record_and_propagates(self) -> None:
        audit = DeleteAudit()
        dispatcher = _dispatcher(audit)
        error = LookupError("no user 7")

        def delete() -> None:
            raise error

        with pytest.raises(LookupError) as info:
            dispatcher.dispatch(OperationDescriptor(strategy=DeleteAudit), _context("delete", 7), delete)

        assert info.value is error
        assert dispatcher._after.invocations == 0


# ---------------------------------------------------------------------------
# Pipeline behaviour
# ---------------------------------------------------------------------------


class TestDispatchPipeline:
    def test_removed_forces_capture_for_basic_strategy(self) -> None:
        audit = DeleteAudit()
        _dispatcher(audit).dispatch(OperationDescriptor(strategy=DeleteAudit, removed=True), _context("delete", 7), lambda: None)
        assert audit.events == [("before_action", 7)]

    def test_basic_strategy_without_flags_never_captures(self) -> None:
        audit = DeleteAudit()
        _dispatcher(audit).dispatch(OperationDescriptor(strategy=DeleteAudit), _context("delete", 7), lambda: None)
        assert audit.events == []

    def test_capture_happens_before_invoke(self) -> None:
        order: list[str] = []

        class OrderedAudit(ParamStrategy):
            def before_action(self, new_data, context=None):
                order.append("capture")
                return new_data

            def after_compare(self, old_data, new_data, context=None):
                order.append("record")

        def proceed() -> str:
            order.append("invoke")
            return "ok"

        _dispatcher(OrderedAudit()).dispatch(OperationDescriptor(strategy=OrderedAudit), _context("create", 1), proceed)
        assert order == ["capture", "invoke", "record"]

    def test_missing_capture_falls_back_to_single_argument_hook(self) -> None:
        audit = UserQueryAudit({})
        patch = UserPatch(id=9, name="new")
        _dispatcher(audit).dispatch(
            OperationDescriptor(strategy=UserQueryAudit, args_type=UserPatch),
            _context("update", patch),
            lambda: None,
        )
        assert audit.events[-1] == ("after_action", patch)

    def test_return_value_is_set_on_context(self) -> None:
        context = _context("find", 7)
        _dispatcher(FindAudit()).dispatch(OperationDescriptor(strategy=FindAudit), context, lambda: "found")
        assert context.return_value == "found"

    def test_unresolvable_strategy_runs_business_call_only(self) -> None:
        dispatcher = _dispatcher()
        result = dispatcher.dispatch(
            OperationDescriptor(strategy=CreateAudit, comparable=True), _context("create", {"a": 1}), lambda: 42
        )
        assert result == 42

    def test_no_descriptor_runs_business_call_only(self) -> None:
        dispatcher = _dispatcher(CreateAudit())
        assert dispatcher.dispatch(None, _context("create", 1), lambda: "plain") == "plain"
        assert dispatcher._after.invocations == 0

    def test_disabled_dispatcher_skips_recording(self) -> None:
        audit = CreateAudit()
        dispatcher = _dispatcher(audit, enabled=False)
        assert dispatcher.enabled is False
        assert dispatcher.dispatch(OperationDescriptor(strategy=CreateAudit), _context("create", 1), lambda: "ok") == "ok"
        assert audit.events == []

    def test_named_strategy_is_classified_by_instance(self) -> None:
        registry = StrategyRegistry()
        audit = CreateAudit()
        registry.register(audit, name="creates")
        dispatcher = OperationDispatcher(registry)
        dispatcher.dispatch(OperationDescriptor(strategy="creates"), _context("create", "row"), lambda: None)
        assert audit.events == [("after_compare", "row", "row")]

    def test_capability_mismatch_surfaces_after_business_call(self) -> None:
        class StrictQuery(NeedsQueryStrategy):
            pass

        calls: list[str] = []

        def proceed() -> str:
            calls.append("business")
            return "done"

        with pytest.raises(UnsupportedOperationError):
            _dispatcher(StrictQuery()).dispatch(OperationDescriptor(strategy=StrictQuery), _context("update", 1), proceed)
        assert calls == ["business"]


class TestAsyncDispatch:
    @pytest.mark.asyncio
    async def test_async_business_call_is_recorded(self) -> None:
        audit = FindAudit()

        async def find() -> dict[str, Any]:
            return {"id": 7}

        result = await _dispatcher(audit).dispatch_async(OperationDescriptor(strategy=FindAudit), _context("find", 7), find)
        assert result == {"id": 7}
        assert audit.events == [("after_return", {"id": 7}, "find")]

    @pytest.mark.asyncio
    async def test_async_failure_skips_record(self) -> None:
        dispatcher = _dispatcher(CreateAudit())

        async def create() -> None:
            raise ValueError("invalid")

        with pytest.raises(ValueError, match="invalid"):
            await dispatcher.dispatch_async(OperationDescriptor(strategy=CreateAudit), _context("create", 1), create)
        assert dispatcher._after.invocations == 0

    @pytest.mark.asyncio
    async def test_disabled_async_dispatch(self) -> None:
        async def create() -> str:
            return "ok"

        dispatcher = _dispatcher(CreateAudit(), enabled=False)
        assert await dispatcher.dispatch_async(OperationDescriptor(strategy=CreateAudit), _context("create", 1), create) == "ok"
