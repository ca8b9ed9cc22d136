"""
父命令

按 args[0] 把调用路由到子命令。注册子命令时读取处理器上的 @permission 标记并配置权限门控。
"""

from types import MappingProxyType
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, TYPE_CHECKING

from cmdgate.utils import get_log, config, translate_color_codes
from .annotations import PermissionSpec, SUBCOMMAND_ATTR, get_permission_spec, mark_permission
from .errors import ConfigurationError
from .subcommand import SubCommand

if TYPE_CHECKING:
    from cmdgate.core import User

LOG = get_log("Command")

SubcommandFunc = Callable[["User", Sequence[str]], None]


class Command:
    """
    父命令

    使用示例：
        ```python
        admin = Command("admin", aliases=["adm"])
        admin.add_subcommand(ReloadSubCommand(admin))

        @admin.subcommand("ban")
        @permission("admin.ban", "&cNo permission")
        def ban(user, args):
            ...

        admin.execute(user, ["ban", "Steve"])
        ```
    """

    def __init__(
        self,
        name: str,
        aliases: Iterable[str] = (),
        usage: str = "",
    ):
        if not name or not name.strip():
            raise ConfigurationError("命令名称不能为空")
        self.name = name
        self.aliases = tuple(a.lower() for a in aliases)
        self.usage = usage
        self._subcommands: Dict[str, SubCommand] = {}

    # -------------------------------------------------------------------------
    # 子命令注册
    # -------------------------------------------------------------------------

    @property
    def subcommands(self) -> Mapping[str, SubCommand]:
        """已注册子命令（只读，键为小写名称）"""
        return MappingProxyType(self._subcommands)

    def add_subcommand(self, subcommand: SubCommand) -> SubCommand:
        """
        注册子命令

        处理器的 @permission 标记若带有权限节点，则自动设置权限门控；
        未提供提示消息时使用配置中的 default_permission_message。

        Raises:
            ConfigurationError: 子命令不属于本命令，或名称重复
        """
        if subcommand.get_command() is not self:
            raise ConfigurationError(
                f"子命令 {subcommand.name} 的父命令不是 {self.name}"
            )
        key = subcommand.name.lower()
        if key in self._subcommands:
            raise ConfigurationError(f"命令 {self.name} 已存在子命令 {subcommand.name}")

        spec = get_permission_spec(type(subcommand).handle_subcommand)
        if spec is not None and spec.declared:
            subcommand.set_permission(
                spec.value, spec.message or config.default_permission_message
            )

        self._subcommands[key] = subcommand
        LOG.debug(f"命令 {self.name} 注册子命令 {subcommand.name}")
        return subcommand

    def remove_subcommand(self, name: str) -> bool:
        return self._subcommands.pop(name.lower(), None) is not None

    def get_subcommand(self, name: str) -> Optional[SubCommand]:
        return self._subcommands.get(name.lower())

    def subcommand(
        self,
        name: str,
        permission: Optional[str] = None,
        message: Optional[str] = None,
    ) -> Callable[[SubcommandFunc], SubcommandFunc]:
        """
        以函数形式注册子命令

        权限可以直接通过 permission/message 参数声明，也可以在本装饰器之下写 @permission。
        函数注册后再添加 @permission 会抛出 ConfigurationError。

        Args:
            name: 子命令名称
            permission: 执行所需的权限节点
            message: 权限不足时的提示，省略时使用配置中的默认提示
        """
        if message and not permission:
            raise ConfigurationError(f"子命令 {name} 声明了提示消息却没有声明权限节点")

        def decorator(func: SubcommandFunc) -> SubcommandFunc:
            def handle_subcommand(sub: SubCommand, user: "User", args: Sequence[str]) -> None:
                func(user, args)

            spec = get_permission_spec(func)
            if permission:
                if spec is not None and spec.declared:
                    raise ConfigurationError(f"子命令 {name} 重复声明了权限")
                spec = PermissionSpec(permission, message or "")
            if spec is not None:
                mark_permission(handle_subcommand, spec)

            cls = type(
                f"{name.capitalize()}SubCommand",
                (SubCommand,),
                {
                    "name": name,
                    "handle_subcommand": handle_subcommand,
                    "__doc__": func.__doc__,
                    "__module__": func.__module__,
                },
            )
            self.add_subcommand(cls(self))
            setattr(func, SUBCOMMAND_ATTR, f"{self.name} {name}")
            return func

        return decorator

    # -------------------------------------------------------------------------
    # 执行
    # -------------------------------------------------------------------------

    def execute(self, user: "User", args: Sequence[str]) -> bool:
        """
        路由并执行子命令

        Args:
            user: 命令执行者
            args: 命令名之后的参数，args[0] 为子命令名称

        Returns:
            是否找到了对应的子命令（权限被拒绝同样返回 True）
        """
        if not args:
            self.send_usage(user)
            return False

        subcommand = self.get_subcommand(args[0])
        if subcommand is None:
            LOG.debug(f"命令 {self.name} 没有子命令 {args[0]}")
            self._send(user, config.unknown_subcommand_message.format(command=self.name))
            return False

        subcommand.perform(user, list(args))
        return True

    def send_usage(self, user: "User") -> None:
        """发送用法提示"""
        if self.usage:
            text = self.usage
        else:
            names = "|".join(sub.name for sub in self._subcommands.values())
            text = config.usage_message.format(command=self.name, subcommands=names)
        self._send(user, text)

    def _send(self, user: "User", text: str) -> None:
        user.send_message(translate_color_codes(config.color_marker, text))

    def __repr__(self) -> str:
        return f"Command(name={self.name!r}, subcommands={list(self._subcommands)!r})"
