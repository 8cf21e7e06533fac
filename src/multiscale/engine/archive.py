"""压缩包构建模块。

在内存中收集输出条目，最后一次性写出 zip 数据。
"""

import time
import zipfile
from datetime import datetime
from io import BytesIO

from ..exceptions import ArchiveFinalizeError, ValidationError
from ..models.results import Archive
from ..utils.logging_helpers import get_logger


logger = get_logger()


class ArchiveBuilder:
    """zip 压缩包构建器

    同名条目后写覆盖先写，位置保持首次写入时的顺序。
    构建器只能完成一次。
    """

    def __init__(self, created_at: datetime | None = None):
        self._entries: dict[str, bytes] = {}
        self._created_at = created_at or datetime.now()
        self._finalized = False

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    def add(self, name: str, data: bytes) -> None:
        """写入条目"""
        if self._finalized:
            raise ValidationError(f"压缩包已完成，无法再写入: {name}")
        if name in self._entries:
            logger.debug(f"覆盖已有条目: {name}")
        self._entries[name] = data

    def finalize(self) -> Archive:
        """生成压缩包

        Raises:
            ArchiveFinalizeError: 压缩包写出失败
        """
        if self._finalized:
            raise ArchiveFinalizeError("压缩包已经完成")

        date_time = self._zip_timestamp()
        buffer = BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
                for name, data in self._entries.items():
                    info = zipfile.ZipInfo(name, date_time=date_time)
                    info.compress_type = zipfile.ZIP_DEFLATED
                    zf.writestr(info, data)
        except (OSError, MemoryError, ValueError, zipfile.LargeZipFile) as e:
            logger.error(f"压缩包写出失败: {e}")
            raise ArchiveFinalizeError(f"压缩包写出失败: {e}") from e

        self._finalized = True
        archive = Archive(data=buffer.getvalue(), names=tuple(self._entries))
        logger.debug(f"压缩包完成: {len(archive.names)} 个条目, {archive.size} 字节")
        return archive

    def _zip_timestamp(self) -> tuple[int, int, int, int, int, int]:
        # zip 格式不支持 1980 年以前的时间
        created = max(self._created_at, datetime(1980, 1, 1))
        return (
            created.year,
            created.month,
            created.day,
            created.hour,
            created.minute,
            created.second,
        )


def build_archive_name(prefix: str, timestamp_ms: int | None = None) -> str:
    """下载用的压缩包文件名: ``{prefix}-{毫秒时间戳}.zip``"""
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    return f"{prefix}-{timestamp_ms}.zip"
