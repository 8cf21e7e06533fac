"""处理结果模型。

定义单张图片与整个批次的结果数据结构。
"""

from enum import Enum

from humanize import naturalsize
from pydantic import BaseModel, ConfigDict, Field


class BaseResult(BaseModel):
    """结果基类，包含通用字段和方法"""

    success: bool = Field(description="是否成功")
    error: str | None = Field(None, description="错误信息")

    def is_successful(self) -> bool:
        return self.success and self.error is None

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """格式化文件大小为人类可读格式"""
        return naturalsize(size_bytes, binary=True)


class ResolvedSize(BaseModel):
    """解析后的输出像素尺寸"""

    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    warnings: list[str] = Field(default_factory=list, description="回退提示")

    def as_tuple(self) -> tuple[int, int]:
        return self.width, self.height


class RasterBuffer(BaseModel):
    """编码后的输出图像"""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    format: str = "PNG"

    @property
    def size(self) -> int:
        return len(self.data)


class ImageOutcome(BaseResult):
    """单张图片光栅化的结果，成功或失败都由它承载"""

    index: int = Field(ge=0, description="源图在批次中的位置")
    filename: str = Field(description="原始文件名")
    raster: RasterBuffer | None = Field(None, description="成功时的输出")
    error_type: str | None = Field(None, description="失败时的异常类型")


class OutputEntry(BaseModel):
    """写入压缩包的条目"""

    name: str = Field(description="压缩包内文件名")
    index: int = Field(ge=0)
    original_name: str
    width: int
    height: int
    size: int = Field(description="PNG 字节数")


class ImageFailure(BaseModel):
    """单张图片的失败记录"""

    index: int = Field(ge=0)
    filename: str
    error_type: str
    message: str


class BatchStatus(str, Enum):
    """批次整体状态"""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class BatchResult(BaseResult):
    """批处理结果"""

    status: BatchStatus
    width: int
    height: int
    entries: list[OutputEntry] = Field(default_factory=list)
    failures: list[ImageFailure] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    archive: bytes | None = Field(None, repr=False, description="zip 数据")
    archive_name: str | None = Field(None, description="建议的压缩包文件名")

    def get_total_count(self) -> int:
        return len(self.entries) + len(self.failures)

    def get_success_count(self) -> int:
        return len(self.entries)

    def get_failure_count(self) -> int:
        return len(self.failures)

    def get_entry_names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    def get_archive_size(self) -> int:
        return len(self.archive) if self.archive else 0

    def get_summary(self) -> str:
        """批处理摘要"""
        if self.status == BatchStatus.FAILED:
            return f"批处理失败: {self.error}"

        summary = (
            f"生成 {self.get_success_count()}/{self.get_total_count()} 张 "
            f"{self.width}×{self.height} 图片, "
            f"压缩包 {self.format_size(self.get_archive_size())}"
        )
        if self.failures:
            failed = ", ".join(f.filename for f in self.failures)
            summary += f"；失败: {failed}"
        return summary


class Archive(BaseModel):
    """生成完毕的 zip 压缩包"""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False)
    names: tuple[str, ...] = Field(description="条目名，按写入顺序")

    @property
    def size(self) -> int:
        return len(self.data)
