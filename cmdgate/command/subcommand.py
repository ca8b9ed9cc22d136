"""
子命令基类

每个子命令挂在一个父命令下，通过 perform() 执行。perform() 在调用
handle_subcommand() 之前统一完成权限检查，具体子命令无需（也无法）跳过这一步。
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence, TYPE_CHECKING

from cmdgate.utils import get_log, config, translate_color_codes
from .annotations import is_permission_marked
from .errors import ConfigurationError

if TYPE_CHECKING:
    from cmdgate.core import User
    from .command import Command

LOG = get_log("SubCommand")


class SubCommand(ABC):
    """
    子命令

    子类需要提供 name（类属性或属性）并实现 handle_subcommand()。
    权限门控由父命令在注册时根据 @permission 标记自动配置，
    也可以对带裸 @permission 标记的处理器手动调用 set_permission()。
    """

    def __init__(self, command: "Command"):
        """
        Args:
            command: 父命令，构造后不可修改
        """
        if command is None:
            raise ValueError("子命令必须有父命令")
        self._command = command
        self._permission: Optional[str] = None
        self._message: Optional[str] = None

        if not isinstance(self.name, str) or not self.name.strip():
            raise ConfigurationError(f"{self.__class__.__name__} 的名称不能为空")

    @property
    @abstractmethod
    def name(self) -> str:
        """子命令名称（/command name）"""

    def get_name(self) -> str:
        return self.name

    @property
    def command(self) -> "Command":
        return self._command

    def get_command(self) -> "Command":
        """父命令"""
        return self._command

    @property
    def permission(self) -> Optional[str]:
        return self._permission

    @property
    def permission_message(self) -> Optional[str]:
        return self._message

    @property
    def has_permission_gate(self) -> bool:
        return self._permission is not None and self._message is not None

    # -------------------------------------------------------------------------
    # 执行
    # -------------------------------------------------------------------------

    def perform(self, user: "User", args: Sequence[str]) -> None:
        """
        执行子命令

        权限不足时向 user 发送提示并直接返回，不会调用 handle_subcommand()。
        处理器抛出的异常原样向上传播。

        Args:
            user: 命令执行者
            args: 命令参数，args[0] 为子命令名称
        """
        if not self._can(user):
            return

        self.handle_subcommand(user, args)

    @abstractmethod
    def handle_subcommand(self, user: "User", args: Sequence[str]) -> None:
        """
        子命令业务逻辑

        Args:
            user: 命令执行者
            args: 命令参数，args[0] 为子命令名称
        """

    def _can(self, user: "User") -> bool:
        """权限检查，每次执行都重新查询执行者的权限"""
        if not self.has_permission_gate:
            return True

        if not user.has_permission(self._permission):
            LOG.debug(f"{user!r} 缺少权限 {self._permission}，拒绝执行 {self.name}")
            user.send_message(translate_color_codes(config.color_marker, self._message))
            return False

        return True

    # -------------------------------------------------------------------------
    # 配置
    # -------------------------------------------------------------------------

    def set_permission(self, permission: str, message: str) -> None:
        """
        设置权限门控（仅在注册阶段调用）

        handle_subcommand() 必须带有 @permission 标记。

        Args:
            permission: 执行所需的权限节点
            message: 权限不足时的提示，支持颜色码

        Raises:
            ConfigurationError: 处理器未标记，或权限节点/提示缺失
        """
        if not is_permission_marked(type(self).handle_subcommand):
            raise ConfigurationError(
                f"子命令 {self.name} 的 handle_subcommand 未使用 @permission 标记，"
                "不能设置权限。需要权限时请在 handle_subcommand 上添加 @permission"
            )
        if not permission or not message:
            raise ConfigurationError(f"子命令 {self.name} 的权限节点和提示消息必须同时提供")

        if self.has_permission_gate and (permission, message) != (self._permission, self._message):
            LOG.warning(f"子命令 {self.name} 的权限 {self._permission} 被替换为 {permission}")

        self._permission = permission
        self._message = message
        LOG.debug(f"子命令 {self.name} 需要权限 {permission}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, permission={self._permission!r})"
