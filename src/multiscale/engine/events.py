"""批处理事件模块。

处理流水线可以把进度事件发送给注入的事件接收器。
接收器的任何异常都在 SafeEventSink 内部被捕获并记录，不影响处理结果。
"""

from collections.abc import Callable
from typing import Any, Protocol

from ..utils.logging_helpers import get_logger


logger = get_logger()


class BatchEvent:
    """事件名称"""

    BATCH_STARTED = "batch_started"
    IMAGE_PROCESSED = "image_processed"
    IMAGE_FAILED = "image_failed"
    BATCH_COMPLETED = "batch_completed"


class EventSink(Protocol):
    """事件接收器接口"""

    def emit(self, event: str, details: dict[str, Any]) -> None: ...


class NullEventSink:
    """丢弃所有事件"""

    def emit(self, event: str, details: dict[str, Any]) -> None:
        pass


class LoggingEventSink:
    """把事件写入日志"""

    def __init__(self, level: str = "info"):
        self.level = level

    def emit(self, event: str, details: dict[str, Any]) -> None:
        getattr(logger, self.level, logger.info)(f"事件 {event}: {details}")


class CallbackEventSink:
    """把事件转发给回调函数"""

    def __init__(self, callback: Callable[[str, dict[str, Any]], None]):
        self.callback = callback

    def emit(self, event: str, details: dict[str, Any]) -> None:
        self.callback(event, details)


class SafeEventSink:
    """包装任意接收器，吞掉并记录其异常"""

    def __init__(self, sink: EventSink | None = None):
        self.sink = sink or NullEventSink()

    def emit(self, event: str, details: dict[str, Any]) -> None:
        try:
            self.sink.emit(event, details)
        except Exception as e:
            logger.warning(f"事件发送失败 {event}: {e}")
