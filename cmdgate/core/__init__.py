"""
核心组件

执行者抽象与事件总线。
"""

from .user import User, PermissibleUser, ConsoleUser, permission_matches
from .event import CommandEvent
from .event_bus import EventBus, EventHandler

__all__ = [
    "User",
    "PermissibleUser",
    "ConsoleUser",
    "permission_matches",
    "CommandEvent",
    "EventBus",
    "EventHandler",
]
