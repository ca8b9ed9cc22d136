"""
颜色码工具

宿主文本使用 "§" 加一个字符表示颜色与样式，配置与插件中通常用 "&" 代替书写。
"""

import re

COLOR_CHAR = "§"
ALL_CODES = "0123456789AaBbCcDdEeFfKkLlMmNnOoRrXx"

_STRIP_PATTERN = re.compile(f"(?i){COLOR_CHAR}[0-9A-FK-ORX]")

_ANSI_RESET = "\033[0m"
_ANSI_CODES = {
    "0": "\033[0;30m",
    "1": "\033[0;34m",
    "2": "\033[0;32m",
    "3": "\033[0;36m",
    "4": "\033[0;31m",
    "5": "\033[0;35m",
    "6": "\033[0;33m",
    "7": "\033[0;37m",
    "8": "\033[0;90m",
    "9": "\033[0;94m",
    "a": "\033[0;92m",
    "b": "\033[0;96m",
    "c": "\033[0;91m",
    "d": "\033[0;95m",
    "e": "\033[0;93m",
    "f": "\033[0;97m",
    "k": "\033[5m",
    "l": "\033[1m",
    "m": "\033[9m",
    "n": "\033[4m",
    "o": "\033[3m",
    "r": _ANSI_RESET,
}


def translate_color_codes(marker: str, text: str) -> str:
    """
    将替代颜色标记翻译为 "§" 颜色码

    仅当标记后紧跟合法颜色码时才替换，码统一转为小写；其它位置保持原样。

    Args:
        marker: 替代标记字符，通常为 "&"
        text: 原始文本

    Returns:
        翻译后的文本
    """
    if len(marker) != 1:
        raise ValueError(f"颜色标记必须是单个字符: {marker!r}")
    chars = list(text)
    for i in range(len(chars) - 1):
        if chars[i] == marker and chars[i + 1] in ALL_CODES:
            chars[i] = COLOR_CHAR
            chars[i + 1] = chars[i + 1].lower()
    return "".join(chars)


def strip_color(text: str) -> str:
    """去除文本中的全部 "§" 颜色码"""
    return _STRIP_PATTERN.sub("", text)


def to_ansi(text: str) -> str:
    """将 "§" 颜色码渲染为终端 ANSI 转义序列"""
    if COLOR_CHAR not in text:
        return text

    def _replace(match: re.Match) -> str:
        return _ANSI_CODES.get(match.group(0)[1].lower(), "")

    return _STRIP_PATTERN.sub(_replace, text) + _ANSI_RESET
