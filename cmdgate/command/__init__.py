"""命令子系统

带权限门控的子命令分发。
"""

from .annotations import (
    PermissionSpec,
    permission,
    mark_permission,
    get_permission_spec,
    is_permission_marked,
)
from .errors import ConfigurationError
from .subcommand import SubCommand
from .command import Command
from .manager import CommandManager, COMMAND_EVENT

__all__ = [
    "PermissionSpec",
    "permission",
    "mark_permission",
    "get_permission_spec",
    "is_permission_marked",
    "ConfigurationError",
    "SubCommand",
    "Command",
    "CommandManager",
    "COMMAND_EVENT",
]
