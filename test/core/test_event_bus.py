"""
事件总线测试

测试订阅、优先级、执行线程与异常处理。
"""

import asyncio
import threading

import pytest

from cmdgate.core import CommandEvent

COMMAND = "cmdgate.command"


# =============================================================================
# 基础分发测试
# =============================================================================


class TestPublish:
    """测试事件发布"""

    @pytest.mark.asyncio
    async def test_sync_and_async_handlers(self, event_bus):
        """测试同步与异步处理器都被调用"""
        results = []

        def sync_handler(e):
            results.append("sync")
            return 1

        async def async_handler(e):
            await asyncio.sleep(0.01)
            results.append("async")
            return 2

        event_bus.subscribe(COMMAND, sync_handler, priority=10)
        event_bus.subscribe(COMMAND, async_handler, priority=1)

        returned = await event_bus.publish(CommandEvent(COMMAND, None))

        assert results == ["sync", "async"]
        assert returned == [1, 2]

    @pytest.mark.asyncio
    async def test_priority_order(self, event_bus):
        """测试高优先级先执行"""
        order = []

        event_bus.subscribe(COMMAND, lambda e: order.append("low"), priority=1)
        event_bus.subscribe(COMMAND, lambda e: order.append("high"), priority=100)

        await event_bus.publish(CommandEvent(COMMAND, None))

        assert order == ["high", "low"]

    @pytest.mark.asyncio
    async def test_stop_propagation(self, event_bus):
        """测试阻止传播"""
        order = []

        def first(e):
            order.append("first")
            e.stop_propagation()

        event_bus.subscribe(COMMAND, first, priority=10)
        event_bus.subscribe(COMMAND, lambda e: order.append("second"), priority=1)

        await event_bus.publish(CommandEvent(COMMAND, None))

        assert order == ["first"]


# =============================================================================
# 订阅管理测试
# =============================================================================


class TestSubscription:
    """测试精确匹配与取消订阅"""

    @pytest.mark.asyncio
    async def test_exact_match_only(self, event_bus):
        """测试只有完全相同的事件类型才会触发"""
        received = []
        event_bus.subscribe(COMMAND, lambda e: received.append(e.type))

        await event_bus.publish(CommandEvent(COMMAND, None))
        await event_bus.publish(CommandEvent(f"{COMMAND}.console", None))
        await event_bus.publish(CommandEvent("cmdgate", None))

        assert received == [COMMAND]

    @pytest.mark.asyncio
    async def test_same_priority_keeps_subscription_order(self, event_bus):
        order = []
        event_bus.subscribe(COMMAND, lambda e: order.append("a"))
        event_bus.subscribe(COMMAND, lambda e: order.append("b"))

        await event_bus.publish(CommandEvent(COMMAND, None))

        assert order == ["a", "b"]

    @pytest.mark.asyncio
    async def test_unsubscribe(self, event_bus):
        received = []
        hid = event_bus.subscribe(COMMAND, lambda e: received.append(1))

        assert event_bus.unsubscribe(hid) is True
        assert event_bus.unsubscribe(hid) is False

        await event_bus.publish(CommandEvent(COMMAND, None))
        assert received == []

    @pytest.mark.asyncio
    async def test_shutdown_clears_handlers(self, event_bus):
        received = []
        event_bus.subscribe(COMMAND, lambda e: received.append(1))

        event_bus.shutdown()
        await event_bus.publish(CommandEvent(COMMAND, None))

        assert received == []


# =============================================================================
# 执行线程测试
# =============================================================================


class TestHandlerThread:
    """测试处理器运行的线程"""

    @pytest.mark.asyncio
    async def test_sync_handler_runs_on_loop_thread(self, event_bus):
        """测试同步处理器在事件循环线程上执行"""
        threads = []
        event_bus.subscribe(COMMAND, lambda e: threads.append(threading.current_thread()))

        await event_bus.publish(CommandEvent(COMMAND, None))

        assert threads == [threading.current_thread()]


# =============================================================================
# 异常测试
# =============================================================================


class TestHandlerFailures:
    """测试处理器异常"""

    @pytest.mark.asyncio
    async def test_exception_does_not_stop_others(self, event_bus):
        """测试一个处理器异常不影响其他处理器"""
        results = []

        def bad(e):
            raise ValueError("Handler error")

        event_bus.subscribe(COMMAND, bad, priority=10)
        event_bus.subscribe(COMMAND, lambda e: results.append("good"), priority=1)

        event = CommandEvent(COMMAND, None)
        await event_bus.publish(event)

        assert results == ["good"]
        assert isinstance(event.exceptions[0], ValueError)

    @pytest.mark.asyncio
    async def test_async_exception_recorded(self, event_bus):
        """测试异步处理器的异常同样记录在事件上"""

        async def bad(e):
            raise RuntimeError("async failure")

        event_bus.subscribe(COMMAND, bad)

        event = CommandEvent(COMMAND, None)
        results = await event_bus.publish(event)

        assert results == []
        assert isinstance(event.exceptions[0], RuntimeError)
