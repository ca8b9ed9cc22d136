"""
命令执行者

核心只依赖两个能力：查询权限、接收文本消息。
"""

import sys
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Set, TextIO

from cmdgate.utils import get_log, strip_color, to_ansi

LOG = get_log("User")


class User(ABC):
    """命令执行者抽象"""

    name: str = "unknown"

    @abstractmethod
    def has_permission(self, permission: str) -> bool:
        """是否持有权限节点 permission"""

    @abstractmethod
    def send_message(self, text: str) -> None:
        """向执行者发送一条文本消息"""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


def permission_matches(granted: str, permission: str) -> bool:
    """
    判断已授予的节点是否覆盖目标权限

    支持 "*"（全部）与 "a.b.*"（前缀下的全部节点）。
    """
    if granted == "*" or granted == permission:
        return True
    if granted.endswith(".*"):
        return permission.startswith(granted[:-1])
    return False


class PermissibleUser(User):
    """
    基于权限集合的执行者

    权限在每次查询时实时计算，授予/撤销会立即影响之后的命令执行。
    收到的消息保存在 messages 中，可选转发给 on_message 回调。
    """

    def __init__(
        self,
        name: str,
        permissions: Iterable[str] = (),
        on_message: Optional[Callable[[str], None]] = None,
    ):
        self.name = name
        self._permissions: Set[str] = set(permissions)
        self._on_message = on_message
        self.messages: List[str] = []

    @property
    def permissions(self) -> Set[str]:
        return set(self._permissions)

    def grant(self, *permissions: str) -> None:
        self._permissions.update(permissions)
        LOG.debug(f"{self.name} 获得权限: {', '.join(permissions)}")

    def revoke(self, *permissions: str) -> None:
        self._permissions.difference_update(permissions)
        LOG.debug(f"{self.name} 失去权限: {', '.join(permissions)}")

    def has_permission(self, permission: str) -> bool:
        return any(permission_matches(p, permission) for p in self._permissions)

    def send_message(self, text: str) -> None:
        self.messages.append(text)
        if self._on_message:
            self._on_message(text)

    @property
    def plain_messages(self) -> List[str]:
        """去除颜色码后的消息"""
        return [strip_color(m) for m in self.messages]


class ConsoleUser(User):
    """控制台执行者，拥有全部权限"""

    name = "CONSOLE"

    def __init__(self, stream: Optional[TextIO] = None, ansi: bool = True):
        self._stream = stream
        self._ansi = ansi

    def has_permission(self, permission: str) -> bool:
        return True

    def send_message(self, text: str) -> None:
        stream = self._stream or sys.stdout
        rendered = to_ansi(text) if self._ansi else strip_color(text)
        stream.write(rendered + "\n")
        stream.flush()
