"""
Unit tests for dispatch strategies
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from eventchannel import (
    DispatchStrategy,
    EventEmitter,
    UnknownStrategyError,
    emit_group_with_strategy,
    emit_namespace_with_strategy,
    on_group,
    register_protected_event,
)


class TestParallelStrategy:
    """Test parallel dispatch"""

    @pytest.mark.asyncio
    async def test_parallel_calls_every_event(self):
        emitter = EventEmitter()
        a = register_protected_event("A", {"group": "g1", "namespace": "n1"})
        b = register_protected_event("B", {"group": "g1", "namespace": "n2"})
        handler_a = AsyncMock(return_value="A")
        handler_b = AsyncMock(return_value="B")
        emitter.on(a, handler_a)
        emitter.on(b, handler_b)

        results = await emit_group_with_strategy("g1", "parallel", 1, emitter)

        handler_a.assert_awaited_once_with(1)
        handler_b.assert_awaited_once_with(1)
        assert results == [["A"], ["B"]]

    @pytest.mark.asyncio
    async def test_parallel_keeps_registration_order(self):
        """Test results follow registration order, not completion order"""
        emitter = EventEmitter()
        slow = register_protected_event("slow", {"group": "g1"})
        fast = register_protected_event("fast", {"group": "g1"})
        completed = []

        async def slow_handler(x):
            await asyncio.sleep(0.05)
            completed.append("slow")
            return f"slow-{x}"

        async def fast_handler(x):
            completed.append("fast")
            return f"fast-{x}"

        emitter.on(slow, slow_handler)
        emitter.on(fast, fast_handler)

        results = await emit_group_with_strategy("g1", DispatchStrategy.PARALLEL, 7, emitter=emitter)

        assert completed == ["fast", "slow"]
        assert results == [["slow-7"], ["fast-7"]]

    @pytest.mark.asyncio
    async def test_parallel_failure_propagates(self):
        emitter = EventEmitter()
        key = register_protected_event("A", {"group": "g1"})
        emitter.on(key, AsyncMock(side_effect=ValueError("parallel boom")))

        with pytest.raises(ValueError, match="parallel boom"):
            await emit_group_with_strategy("g1", "parallel", emitter)


class TestWaterfallStrategy:
    """Test waterfall dispatch"""

    @pytest.mark.asyncio
    async def test_waterfall_threads_result(self):
        """Test each stage receives the previous stage's result"""
        emitter = EventEmitter()
        a = register_protected_event("A", {"group": "g1"})
        b = register_protected_event("B", {"group": "g1"})
        emitter.on(a, lambda v: f"{v}-C")
        emitter.on(b, lambda v: f"{v}-D")

        results = await emit_group_with_strategy("g1", "waterfall", "start", emitter)

        assert results == ["start-C", "start-C-D"]

    @pytest.mark.asyncio
    async def test_waterfall_awaits_async_stages(self):
        emitter = EventEmitter()
        a = register_protected_event("A", {"group": "g1"})
        b = register_protected_event("B", {"group": "g1"})

        async def double(v, step):
            await asyncio.sleep(0.01)
            return v * step

        emitter.on(a, double)
        emitter.on(b, double)

        assert await emit_group_with_strategy("g1", "waterfall", 3, 2, emitter) == [6, 12]

    @pytest.mark.asyncio
    async def test_waterfall_skips_events_without_listeners(self):
        emitter = EventEmitter()
        a = register_protected_event("A", {"group": "g1"})
        register_protected_event("empty", {"group": "g1"})
        c = register_protected_event("C", {"group": "g1"})
        emitter.on(a, lambda v: v + 1)
        emitter.on(c, lambda v: v * 10)

        assert await emit_group_with_strategy("g1", "waterfall", 1, emitter) == [2, 20]

    @pytest.mark.asyncio
    async def test_waterfall_uses_first_listener_only(self):
        """Test additional listeners on an event are not invoked"""
        emitter = EventEmitter()
        key = register_protected_event("A", {"group": "g1"})
        first = Mock(return_value="first")
        second = Mock(return_value="second")
        emitter.on(key, first)
        emitter.on(key, second)

        assert await emit_group_with_strategy("g1", "waterfall", "x", emitter) == ["first"]
        first.assert_called_once_with("x")
        second.assert_not_called()

    @pytest.mark.asyncio
    async def test_waterfall_consumes_once_listener(self):
        """Test a single-fire listener runs once across waterfalls and plain emits"""
        emitter = EventEmitter()
        key = register_protected_event("A", {"group": "g1"})
        single = Mock(return_value="single")
        emitter.once(key, single)

        assert await emit_group_with_strategy("g1", "waterfall", "x", emitter) == ["single"]
        assert await emit_group_with_strategy("g1", "waterfall", "x", emitter) == []
        assert emitter.emit(key, "y") is False

        single.assert_called_once_with("x")
        assert emitter.listener_count(key) == 0

    @pytest.mark.asyncio
    async def test_waterfall_consumes_once_listener_on_channel(self, channel):
        """Test protection does not keep a consumed single-fire listener alive"""
        key = register_protected_event("A", {"group": "g1"})
        single = Mock(return_value="single")
        regular = Mock(return_value="regular")
        channel.once(key, single, priority=1)
        channel.on(key, regular)

        assert await emit_group_with_strategy("g1", "waterfall", "x", channel) == ["single"]
        assert await emit_group_with_strategy("g1", "waterfall", "x", channel) == ["regular"]

        single.assert_called_once_with("x")
        assert channel.listeners(key) == [regular]

    @pytest.mark.asyncio
    async def test_waterfall_without_arguments(self):
        emitter = EventEmitter()
        key = register_protected_event("A", {"group": "g1"})
        handler = Mock(return_value="seeded")
        emitter.on(key, handler)

        assert await emit_group_with_strategy("g1", "waterfall", emitter) == ["seeded"]
        handler.assert_called_once_with(None)

    @pytest.mark.asyncio
    async def test_waterfall_with_group_handler(self):
        """Test group handlers receive the key before the threaded value"""
        emitter = EventEmitter()
        register_protected_event("A", {"group": "g1"})
        register_protected_event("B", {"group": "g1"})
        on_group("g1", lambda key, v: f"{v}>{key.name}", emitter)

        assert await emit_group_with_strategy("g1", "waterfall", "s", emitter) == ["s>A", "s>A>B"]


class TestSeriesStrategy:
    """Test series dispatch"""

    @pytest.mark.asyncio
    async def test_series_runs_in_order_with_original_args(self):
        """Test each event completes before the next starts and sees the original args"""
        emitter = EventEmitter()
        a = register_protected_event("A", {"group": "g1"})
        b = register_protected_event("B", {"group": "g1"})
        log = []

        async def slow(v):
            log.append("A-start")
            await asyncio.sleep(0.02)
            log.append("A-end")
            return f"A:{v}"

        async def fast(v):
            log.append("B-start")
            return f"B:{v}"

        emitter.on(a, slow)
        emitter.on(b, fast)
        emitter.on(b, lambda v: f"B2:{v}")

        results = await emit_group_with_strategy("g1", "series", "x", emitter)

        assert log == ["A-start", "A-end", "B-start"]
        assert results == [["A:x"], ["B:x", "B2:x"]]

    @pytest.mark.asyncio
    async def test_series_failure_stops_dispatch(self):
        emitter = EventEmitter()
        a = register_protected_event("A", {"group": "g1"})
        b = register_protected_event("B", {"group": "g1"})
        after = Mock()
        emitter.on(a, AsyncMock(side_effect=RuntimeError("series boom")))
        emitter.on(b, after)

        with pytest.raises(RuntimeError, match="series boom"):
            await emit_group_with_strategy("g1", "series", emitter)
        after.assert_not_called()


class TestStrategySelection:
    """Test strategy validation and namespace dispatch"""

    @pytest.mark.asyncio
    async def test_unknown_strategy(self):
        emitter = EventEmitter()
        key = register_protected_event("A", {"group": "g1"})
        handler = Mock()
        emitter.on(key, handler)

        with pytest.raises(UnknownStrategyError) as exc_info:
            await emit_group_with_strategy("g1", "random", emitter)

        assert isinstance(exc_info.value, ValueError)
        handler.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_matches_returns_empty(self):
        for strategy in DispatchStrategy:
            assert await emit_group_with_strategy("missing", strategy, 1, EventEmitter()) == []

    @pytest.mark.asyncio
    async def test_namespace_strategy(self):
        emitter = EventEmitter()
        a = register_protected_event("A", {"group": "g1", "namespace": "billing.invoice"})
        b = register_protected_event("B", {"group": "g1", "namespace": "shipping"})
        emitter.on(a, lambda v: f"invoice:{v}")
        emitter.on(b, lambda v: f"shipping:{v}")

        results = await emit_namespace_with_strategy("billing.*", "series", 5, emitter)
        assert results == [["invoice:5"]]

    @pytest.mark.asyncio
    async def test_default_channel_has_no_listeners(self):
        """Test dispatch without an emitter runs against a fresh channel"""
        register_protected_event("A", {"group": "g1"})
        assert await emit_group_with_strategy("g1", "series", 1) == [[]]
