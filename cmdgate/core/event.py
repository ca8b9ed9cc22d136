"""
命令事件

事件总线上传递的数据载体，处理器的返回值和异常都记录在事件上。
"""

from typing import Any, List


class CommandEvent:
    """命令事件"""

    def __init__(self, type: str, data: Any):
        self.type = type
        self.data = data
        self._results: List[Any] = []
        self._exceptions: List[Exception] = []
        self._propagation_stopped = False

    @property
    def results(self) -> List[Any]:
        return self._results.copy()

    @property
    def exceptions(self) -> List[Exception]:
        return self._exceptions.copy()

    def add_exception(self, exc: Exception) -> None:
        self._exceptions.append(exc)

    def stop_propagation(self) -> None:
        """阻止后续（低优先级）处理器执行"""
        self._propagation_stopped = True

    def __repr__(self) -> str:
        return f"CommandEvent(type={self.type!r}, data={self.data!r})"
