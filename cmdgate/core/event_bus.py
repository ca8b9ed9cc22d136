"""
事件总线

宿主把命令调用投递为事件，处理器按事件类型精确匹配、按优先级执行。
同步处理器直接在事件循环线程上调用，异步处理器直接 await。
"""

import asyncio
import uuid
import traceback
from typing import Any, Callable, Dict, List, NamedTuple

from cmdgate.utils import get_log

from .event import CommandEvent

LOG = get_log("EventBus")

EventHandler = Callable[[CommandEvent], Any]


class _Subscription(NamedTuple):
    priority: int
    handler: EventHandler
    hid: uuid.UUID


class EventBus:
    """
    事件总线

    - 精确匹配：event_type 完全相同才会触发
    - 优先级控制：数值越大越先执行，同优先级按订阅顺序执行
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[_Subscription]] = {}

    # ==================== 订阅管理 ====================

    def subscribe(self, event_type: str, handler: EventHandler, priority: int = 0) -> uuid.UUID:
        """
        订阅事件处理程序

        Args:
            event_type: 事件类型
            handler: 事件处理函数（支持同步和异步）
            priority: 处理优先级，数值越大优先级越高

        Returns:
            处理器唯一标识符
        """
        hid = uuid.uuid4()
        bucket = self._handlers.setdefault(event_type, [])
        bucket.append(_Subscription(priority, handler, hid))
        bucket.sort(key=lambda s: -s.priority)
        return hid

    def unsubscribe(self, handler_id: uuid.UUID) -> bool:
        """
        取消订阅事件处理程序

        Returns:
            是否成功移除处理器
        """
        for typ, bucket in list(self._handlers.items()):
            remaining = [s for s in bucket if s.hid != handler_id]
            if len(remaining) == len(bucket):
                continue
            if remaining:
                self._handlers[typ] = remaining
            else:
                del self._handlers[typ]
            return True
        return False

    # ==================== 事件发布 ====================

    async def publish(self, event: CommandEvent) -> List[Any]:
        """
        发布事件并执行所有匹配的处理器

        处理器抛出的异常记录在 event.exceptions 中，不影响后续处理器。

        Returns:
            所有处理器的返回结果列表
        """
        LOG.debug(
            f"发布事件: {event.type} 数据: {str(event.data)[:50]}{'...' if len(str(event.data)) > 50 else ''}"
        )
        for subscription in list(self._handlers.get(event.type, ())):
            if event._propagation_stopped:
                break

            try:
                event._results.append(await self._run_handler(subscription.handler, event))
            except Exception as e:
                event.add_exception(e)

        return event._results.copy()

    async def _run_handler(self, handler: EventHandler, event: CommandEvent) -> Any:
        try:
            if asyncio.iscoroutinefunction(handler):
                return await handler(event)
            return handler(event)
        except Exception as e:
            LOG.error(f"执行处理程序 {getattr(handler, '__name__', handler)} 时发生错误: {e}")
            LOG.debug(f"错误堆栈: {traceback.format_exc()}")
            raise

    # ==================== 生命周期 ====================

    def shutdown(self):
        """关闭事件总线并清理资源"""
        self._handlers.clear()
        LOG.info("EventBus 已关闭，所有处理器已清理")
