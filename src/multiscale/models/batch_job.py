"""批处理任务模型。

一次处理运行的不可变输入：有序源图、目标尺寸、像素倍率。
"""

from pydantic import BaseModel, ConfigDict, Field

from .constants import DensityMultiplier
from .profiles import CustomProfile, NamedProfile


class SourceImage(BaseModel):
    """内存中的源图"""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(repr=False, description="原始编码数据")
    filename: str = Field(min_length=1, description="原始文件名")

    @property
    def size(self) -> int:
        return len(self.data)


class BatchJob(BaseModel):
    """批处理任务配置"""

    model_config = ConfigDict(frozen=True)

    images: tuple[SourceImage, ...] = Field(description="按加入顺序排列的源图")
    profile: NamedProfile | CustomProfile = Field(
        discriminator="kind", description="目标尺寸"
    )
    multiplier: DensityMultiplier = Field(
        DensityMultiplier.ONE, description="像素密度倍率"
    )

    @property
    def image_count(self) -> int:
        return len(self.images)

    @property
    def total_bytes(self) -> int:
        return sum(image.size for image in self.images)
