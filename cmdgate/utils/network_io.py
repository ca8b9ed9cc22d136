"""
网络 IO 工具

阻塞读取在 asyncio.to_thread 中执行，避免阻塞事件循环。
"""

import asyncio
import urllib.request

from .logger import get_log

LOG = get_log("NetworkIO")


def get_text(url: str, timeout: float = 10.0) -> str:
    """同步读取 URL 的文本内容"""
    req = urllib.request.Request(url, headers={"User-Agent": "cmdgate"})
    with urllib.request.urlopen(req, timeout=timeout) as response:
        charset = response.headers.get_content_charset() or "utf-8"
        return response.read().decode(charset)


async def async_get_text(url: str, timeout: float = 10.0) -> str:
    """在后台线程中读取 URL 的文本内容"""
    LOG.debug(f"请求 {url}")
    return await asyncio.to_thread(get_text, url, timeout)
