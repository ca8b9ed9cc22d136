"""
命令系统错误类型
"""

from cmdgate.utils import get_log, CmdGateError

LOG = get_log("Command")


class ConfigurationError(CmdGateError):
    """
    命令接线期的配置错误

    只在注册/配置阶段抛出，表示宿主插件的编程错误，不应被吞掉。
    """

    logger = LOG
