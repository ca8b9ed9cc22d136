"""
命令管理器

负责父命令的注册与查找，把一行文本分发到对应命令。
文本只按空白切分，不做选项解析或类型转换。
"""

import uuid
from typing import Dict, List, Optional, Sequence, TYPE_CHECKING

from cmdgate.utils import get_log, config
from .command import Command
from .errors import ConfigurationError

if TYPE_CHECKING:
    from cmdgate.core import User, EventBus, CommandEvent

LOG = get_log("CommandManager")

COMMAND_EVENT = "cmdgate.command"


class CommandManager:
    """
    命令管理器

    使用示例：
        ```python
        manager = CommandManager()
        manager.register(admin)

        manager.dispatch(user, "/admin ban Steve")

        # 或者挂到事件总线上，由宿主投递命令事件
        manager.bind(event_bus)
        await event_bus.publish(CommandEvent("cmdgate.command", {"user": user, "line": "/admin reload"}))
        ```
    """

    def __init__(self, prefixes: Optional[Sequence[str]] = None):
        """
        Args:
            prefixes: 命令前缀，None 时使用配置中的 command_prefixes
        """
        self._commands: Dict[str, Command] = {}
        self._labels: Dict[str, str] = {}
        self._prefixes = list(prefixes) if prefixes is not None else None
        self._bindings: Dict[uuid.UUID, "EventBus"] = {}

    @property
    def prefixes(self) -> List[str]:
        prefixes = self._prefixes if self._prefixes is not None else config.command_prefixes
        return sorted(prefixes, key=len, reverse=True)

    # -------------------------------------------------------------------------
    # 注册管理
    # -------------------------------------------------------------------------

    def register(self, command: Command) -> Command:
        """
        注册父命令

        Raises:
            ConfigurationError: 名称或别名与已注册命令冲突
        """
        labels = [command.name.lower(), *command.aliases]
        for label in labels:
            if label in self._labels:
                raise ConfigurationError(
                    f"命令 {command.name} 的标签 {label} 已被 {self._labels[label]} 占用"
                )

        key = command.name.lower()
        self._commands[key] = command
        for label in labels:
            self._labels[label] = key
        LOG.info(f"注册命令 {command.name}（{len(command.subcommands)} 个子命令）")
        return command

    def unregister(self, name: str) -> bool:
        """注销父命令及其别名"""
        key = self._labels.get(name.lower())
        if key is None:
            return False
        self._commands.pop(key)
        self._labels = {label: k for label, k in self._labels.items() if k != key}
        LOG.info(f"注销命令 {key}")
        return True

    def get(self, name: str) -> Optional[Command]:
        """按名称或别名查找命令"""
        key = self._labels.get(name.lower())
        return self._commands.get(key) if key else None

    def has(self, name: str) -> bool:
        return name.lower() in self._labels

    def list_commands(self) -> List[str]:
        return [command.name for command in self._commands.values()]

    # -------------------------------------------------------------------------
    # 分发
    # -------------------------------------------------------------------------

    def _strip_prefix(self, label: str) -> str:
        for prefix in self.prefixes:
            if prefix and label.startswith(prefix):
                return label[len(prefix):]
        return label

    def dispatch(self, user: "User", line: str) -> bool:
        """
        分发一行命令文本

        Args:
            user: 命令执行者
            line: 原始文本，如 "/admin ban Steve"

        Returns:
            是否找到并执行了子命令
        """
        tokens = line.split()
        if not tokens:
            return False

        label = self._strip_prefix(tokens[0])
        command = self.get(label)
        if command is None:
            LOG.debug(f"未知命令: {label}")
            return False

        LOG.debug(f"{user!r} 执行命令: {line}")
        return command.execute(user, tokens[1:])

    # -------------------------------------------------------------------------
    # 事件总线
    # -------------------------------------------------------------------------

    async def handle_event(self, event: "CommandEvent") -> bool:
        """
        处理命令事件，event.data 需包含 user 与 line

        子命令在事件循环线程上同步执行。
        """
        data = event.data
        try:
            user, line = data["user"], data["line"]
        except (KeyError, TypeError) as e:
            raise ValueError(f"命令事件数据不完整: {event!r}") from e
        return self.dispatch(user, line)

    def bind(self, event_bus: "EventBus", event_type: str = COMMAND_EVENT, priority: int = 0) -> uuid.UUID:
        """订阅事件总线上的命令事件"""
        hid = event_bus.subscribe(event_type, self.handle_event, priority=priority)
        self._bindings[hid] = event_bus
        LOG.debug(f"已订阅事件 {event_type}")
        return hid

    def unbind(self) -> None:
        """取消全部事件订阅"""
        for hid, event_bus in self._bindings.items():
            event_bus.unsubscribe(hid)
        self._bindings.clear()
