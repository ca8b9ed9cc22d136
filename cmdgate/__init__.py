"""
cmdgate

带权限门控的子命令分发。
"""

from cmdgate.command import (
    Command,
    CommandManager,
    ConfigurationError,
    PermissionSpec,
    SubCommand,
    permission,
)
from cmdgate.core import User, PermissibleUser, ConsoleUser, EventBus, CommandEvent
from cmdgate.updater import UpdateChecker

__version__ = "1.0.0"

__all__ = [
    "Command",
    "CommandManager",
    "ConfigurationError",
    "PermissionSpec",
    "SubCommand",
    "permission",
    "User",
    "PermissibleUser",
    "ConsoleUser",
    "EventBus",
    "CommandEvent",
    "UpdateChecker",
]
