"""批处理引擎模块。

包含并发执行、压缩包构建和事件发送。
"""

from .archive import ArchiveBuilder, build_archive_name
from .batch import BatchPackager
from .job_builder import JobBuilder
from .concurrent_executor import ConcurrentExecutor, RasterTask
from .events import (
    BatchEvent,
    CallbackEventSink,
    EventSink,
    LoggingEventSink,
    NullEventSink,
    SafeEventSink,
)


__all__ = [
    "ArchiveBuilder",
    "BatchEvent",
    "BatchPackager",
    "CallbackEventSink",
    "ConcurrentExecutor",
    "EventSink",
    "JobBuilder",
    "LoggingEventSink",
    "NullEventSink",
    "RasterTask",
    "SafeEventSink",
    "build_archive_name",
]
