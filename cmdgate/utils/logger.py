"""
日志工具

所有模块通过 get_log(name) 获取命名 logger，统一挂载在 "cmdgate" 根 logger 下。
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "cmdgate"
LOG_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s | %(message)s"
DATE_FORMAT = "%H:%M:%S"

_configured = False


def _configure_root(level: Optional[str] = None) -> logging.Logger:
    """首次使用时为根 logger 挂载输出"""
    global _configured
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        _configured = True
    if level:
        root.setLevel(level.upper())
    return root


def set_log_level(level: str) -> None:
    """调整根 logger 级别（如 "DEBUG"、"INFO"）"""
    _configure_root(level)


def get_log(name: Optional[str] = None) -> logging.Logger:
    """
    获取命名 logger

    Args:
        name: logger 名称，None 时返回根 logger

    Returns:
        挂载在 cmdgate 根 logger 下的 logger
    """
    root = _configure_root()
    if not name:
        return root
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
