"""
错误类型定义
"""

from .logger import get_log

LOG = get_log("CmdGate")


class CmdGateError(Exception):
    """cmdgate 错误基类，构造时记录错误日志"""

    logger = LOG

    def __init__(self, info: str):
        self.logger.error(f"{self.__class__.__name__}: {info}")
        self.info = info
        super().__init__(info)


class CmdGateConfigError(CmdGateError):
    """配置文件加载或校验错误"""

    def __init__(self, info: str):
        super().__init__(f"配置错误: {info}")
