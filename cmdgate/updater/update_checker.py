"""
更新检查器

在后台任务或守护线程中拉取远端版本号并与本地版本比较，结果通过 has_update() 同步读取。
"""

import asyncio
import http.client
import threading
from typing import Awaitable, Callable, Optional, Union, TYPE_CHECKING

from cmdgate.utils import get_log, config, translate_color_codes, async_get_text

if TYPE_CHECKING:
    from cmdgate.core import User

LOG = get_log("UpdateChecker")

# 接收 (url, timeout)，返回响应文本
VersionFetcher = Callable[[str, float], Awaitable[str]]


class UpdateChecker:
    """Spigot 资源更新检查器"""

    def __init__(
        self,
        plugin_name: str,
        current_version: str,
        resource_id: int,
        download_url: str,
        prefix: Optional[str] = None,
        fetcher: Optional[VersionFetcher] = None,
    ):
        """
        Args:
            plugin_name: 插件名称
            current_version: 本地版本号
            resource_id: Spigot 资源 ID
            download_url: 插件下载页地址（不是 API 地址）
            prefix: 提示前缀，None 时使用配置中的 update_check.prefix
            fetcher: 自定义拉取函数，默认通过 HTTP 读取
        """
        self.plugin_name = plugin_name
        self.current_version = current_version
        self.resource_id = resource_id
        self.download_url = download_url
        self.prefix = prefix if prefix is not None else config.update_check.prefix
        self._fetcher = fetcher or async_get_text
        self._update_available = False
        self.latest_version: Optional[str] = None
        self._task: Optional[asyncio.Task] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def api_url(self) -> str:
        return config.update_check.api_url.format(resource_id=self.resource_id)

    def start(self) -> Optional[Union[asyncio.Task, threading.Thread]]:
        """
        开始检查更新，不阻塞调用方

        在运行中的事件循环内创建后台任务；没有事件循环时在守护线程中执行。

        Returns:
            后台任务或线程；更新检查被禁用时返回 None
        """
        if not config.update_check.enabled:
            LOG.debug("更新检查已禁用")
            return None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._thread = threading.Thread(
                target=asyncio.run,
                args=(self.fetch(),),
                name=f"UpdateChecker-{self.plugin_name}",
                daemon=True,
            )
            self._thread.start()
            return self._thread

        self._task = loop.create_task(self.fetch())
        return self._task

    async def fetch(self) -> bool:
        """
        拉取远端版本

        Returns:
            是否有可用更新；网络错误时记录日志并返回 False
        """
        try:
            text = await self._fetcher(self.api_url, config.update_check.timeout)
        except (OSError, ValueError, asyncio.TimeoutError, http.client.HTTPException) as e:
            LOG.info(f"无法检查更新: {e}")
            return False

        tokens = text.split()
        if tokens:
            self.latest_version = tokens[0]
            self._update_available = self.current_version.lower() != self.latest_version.lower()
            if self._update_available:
                LOG.info(f"{self.plugin_name} 有新版本 {self.latest_version}（当前 {self.current_version}）")
        return self._update_available

    def has_update(self) -> bool:
        return self._update_available

    def send_update_check(self, user: "User") -> None:
        """有更新时向 user 发送提示"""
        if not self._update_available:
            return
        text = (
            f"{self.prefix} &7An update of {self.plugin_name} is available. "
            f"Download it from {self.download_url}"
        )
        user.send_message(translate_color_codes(config.color_marker, text))
