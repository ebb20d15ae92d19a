"""Testes de adispatch (handlers assíncronos)."""

from __future__ import annotations

import asyncio
import warnings

import pytest

from evstate import ANY, FSM, NoErrorHandlerError
from evstate.domain.transitions import TransitionTable


@pytest.fixture
def fsm(publish_table: TransitionTable) -> FSM:
    return FSM(publish_table, "draft")


class TestAsyncDispatch:
    """adispatch aguarda cada handler antes do próximo."""

    @pytest.mark.asyncio
    async def test_awaits_coroutine_handlers_in_order(self, fsm: FSM) -> None:
        order: list[str] = []

        async def slow_any(obj: dict) -> None:
            await asyncio.sleep(0.01)
            order.append("any")

        async def fast_state(obj: dict) -> None:
            order.append("state-async")

        fsm.register(ANY, slow_any)
        fsm.register("inReview", fast_state)
        fsm.register("inReview", lambda obj: order.append("state-sync"))

        result = await fsm.adispatch("inReview", {})

        assert result is fsm
        assert order == ["any", "state-async", "state-sync"]
        assert fsm.current_state == "inReview"

    @pytest.mark.asyncio
    async def test_state_updated_only_after_last_handler(self, fsm: FSM) -> None:
        seen: list[str] = []

        async def observe() -> None:
            await asyncio.sleep(0)
            seen.append(fsm.current_state)

        fsm.register("inReview", observe)
        await fsm.adispatch("inReview")

        assert seen == ["draft"]
        assert fsm.current_state == "inReview"

    @pytest.mark.asyncio
    async def test_invalid_target_uses_error_path(self, fsm: FSM) -> None:
        with pytest.raises(NoErrorHandlerError):
            await fsm.adispatch("nope")

        seen: list[str] = []
        fsm.set_error_handler(seen.append)

        assert await fsm.adispatch("approved") is False
        assert seen == ["Invalid transition from draft requested: approved"]
        assert fsm.current_state == "draft"

    @pytest.mark.asyncio
    async def test_async_handler_error_propagates(self, fsm: FSM) -> None:
        async def failing(obj: dict) -> None:
            raise ConnectionError("webhook unreachable")

        fsm.register("inReview", failing)

        with pytest.raises(ConnectionError, match="webhook unreachable"):
            await fsm.adispatch("inReview", {})

        assert fsm.current_state == "draft"


class TestSyncDispatchRejectsAwaitables:
    """dispatch síncrono não executa handlers assíncronos pela metade."""

    def test_coroutine_handler_raises_and_keeps_state(self, fsm: FSM) -> None:
        calls: list[str] = []

        async def failing(obj: dict) -> None:
            calls.append("ran")
            raise RuntimeError("never reached")

        fsm.register("inReview", failing)
        fsm.register("inReview", lambda obj: calls.append("after"))

        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            with pytest.raises(TypeError, match="adispatch"):
                fsm.dispatch("inReview", {})

        assert fsm.current_state == "draft"
        assert calls == []

    def test_awaitable_from_wildcard_handler(self, fsm: FSM) -> None:
        """ANY também é verificado; handlers do estado não executam."""
        calls: list[str] = []

        async def notify(obj: dict) -> None:
            calls.append("notify")

        fsm.register(ANY, notify)
        fsm.register("inReview", lambda obj: calls.append("state"))

        with pytest.raises(TypeError):
            fsm.dispatch("inReview", {})

        assert fsm.current_state == "draft"
        assert calls == []
