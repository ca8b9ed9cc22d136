"""
权限标记

在子命令的 handle_subcommand 上声明其需要权限检查。标记在配置期读取，而不是每次执行时读取。

使用示例：
    ```python
    class BanSubCommand(SubCommand):
        name = "ban"

        @permission("admin.ban", "&cNo permission")
        def handle_subcommand(self, user, args):
            ...
    ```

裸用 ``@permission`` 只声明处理器允许设置门控，具体权限节点由
``SubCommand.set_permission()`` 提供。
"""

from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Union, overload

from .errors import ConfigurationError

F = TypeVar("F", bound=Callable)

PERMISSION_ATTR = "__cmdgate_permission__"
# 已通过 Command.subcommand() 注册的函数带有此属性，值为 "命令 子命令"
SUBCOMMAND_ATTR = "__cmdgate_subcommand__"


@dataclass(frozen=True)
class PermissionSpec:
    """标记上携带的权限声明"""

    value: str = ""
    message: str = ""

    def __post_init__(self):
        if self.message and not self.value:
            raise ValueError("声明了提示消息却没有声明权限节点")

    @property
    def declared(self) -> bool:
        """标记是否自带权限节点"""
        return bool(self.value)


def mark_permission(func: F, spec: PermissionSpec) -> F:
    """
    在函数上写入权限标记

    Raises:
        ConfigurationError: 函数已注册为子命令，之后写入的标记不会再被读取
    """
    registered = getattr(func, SUBCOMMAND_ATTR, None)
    if registered is not None:
        raise ConfigurationError(
            f"{getattr(func, '__name__', func)!r} 已注册为子命令 {registered}，"
            "@permission 必须写在 @command.subcommand() 之下"
        )
    setattr(func, PERMISSION_ATTR, spec)
    return func


@overload
def permission(value: F) -> F: ...


@overload
def permission(value: Optional[str] = None, message: str = "") -> Callable[[F], F]: ...


def permission(
    value: Union[str, Callable, None] = None, message: str = ""
) -> Union[Callable, Callable[[Callable], Callable]]:
    """
    权限标记装饰器

    Args:
        value: 权限节点，如 "admin.ban"；可省略
        message: 权限不足时发送的提示，支持 "&" 颜色码；省略时使用配置中的默认提示
    """
    if callable(value):
        return mark_permission(value, PermissionSpec())

    spec = PermissionSpec(value or "", message)

    def decorator(func: F) -> F:
        return mark_permission(func, spec)

    return decorator


def get_permission_spec(func: Callable) -> Optional[PermissionSpec]:
    """读取函数上的权限标记，未标记时返回 None"""
    target = getattr(func, "__func__", func)
    spec = getattr(target, PERMISSION_ATTR, None)
    return spec if isinstance(spec, PermissionSpec) else None


def is_permission_marked(func: Callable) -> bool:
    return get_permission_spec(func) is not None
