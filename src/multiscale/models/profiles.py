"""目标尺寸配置模型。"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .constants import DeviceCatalog


class NamedProfile(BaseModel):
    """目录中的命名设备"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["named"] = "named"
    profile_id: str = Field(description="设备标识")

    @property
    def identity(self) -> str:
        return self.profile_id


class CustomProfile(BaseModel):
    """用户输入的自定义尺寸

    宽高保留原始输入，由尺寸解析器负责解析和回退。
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["custom"] = "custom"
    width: str | int | float | None = Field(None, description="宽度（逻辑像素）")
    height: str | int | float | None = Field(None, description="高度（逻辑像素）")

    @property
    def identity(self) -> str:
        return DeviceCatalog.CUSTOM_ID


TargetProfile = NamedProfile | CustomProfile


def profile_from_selection(
    device: str,
    width: str | int | float | None = None,
    height: str | int | float | None = None,
) -> TargetProfile:
    """把选择器的取值转换为目标尺寸配置

    ``"custom"`` 对应自定义尺寸，其余值一律视为设备标识。
    """
    if device == DeviceCatalog.CUSTOM_ID:
        return CustomProfile(width=width, height=height)
    return NamedProfile(profile_id=device)
