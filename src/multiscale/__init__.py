"""多设备图片尺寸生成库。

把一组图片拉伸为指定设备屏幕尺寸的 PNG，并打包为 zip。
"""

__version__ = "0.1.0"
__description__ = "多设备图片尺寸生成库，基于 Pillow"

from .engine.batch import BatchPackager
from .models import (
    BatchJob,
    BatchResult,
    BatchStatus,
    CustomProfile,
    DensityMultiplier,
    NamedProfile,
    SourceImage,
)
from .resizer import DeviceResizer, resize_for_device


__all__ = [
    "BatchJob",
    "BatchPackager",
    "BatchResult",
    "BatchStatus",
    "CustomProfile",
    "DensityMultiplier",
    "DeviceResizer",
    "NamedProfile",
    "SourceImage",
    "get_version",
    "resize_for_device",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
