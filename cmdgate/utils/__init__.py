"""cmdgate 工具包"""

from cmdgate.utils.logger import get_log, set_log_level
from cmdgate.utils.config import cmdgate_config, load_config, CmdGateConfig
from cmdgate.utils.config import cmdgate_config as config
from cmdgate.utils.error import CmdGateError, CmdGateConfigError
from cmdgate.utils.color import translate_color_codes, strip_color, to_ansi, COLOR_CHAR
from cmdgate.utils.network_io import get_text, async_get_text

__all__ = [
    "get_log", "set_log_level",
    "cmdgate_config", "config", "load_config", "CmdGateConfig",
    "CmdGateError", "CmdGateConfigError",
    "translate_color_codes", "strip_color", "to_ansi", "COLOR_CHAR",
    "get_text", "async_get_text",
]
