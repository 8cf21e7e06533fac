"""设备尺寸与默认值常量。

设备目录是静态配置：设备标识 -> 逻辑像素 (宽, 高)。
"""

from enum import Enum, IntEnum
from typing import Final


class DensityMultiplier(IntEnum):
    """像素密度倍率"""

    ONE = 1
    TWO = 2
    THREE = 3


class CollisionPolicy(str, Enum):
    """同一压缩包内输出文件名重复时的处理策略"""

    SUFFIX = "suffix"  # 追加 _1、_2 ...
    OVERWRITE = "overwrite"  # 后者覆盖前者


class DeviceCatalog:
    """内置设备尺寸目录"""

    PROFILES: Final[dict[str, tuple[int, int]]] = {
        "AndroidCompact": (412, 917),
        "AndroidMedium": (700, 840),
        "iPhoneXSMax&11ProMax": (414, 896),
        "iPhone16": (393, 852),
        "iPhone16Pro": (402, 874),
        "iPhone16ProMax": (440, 956),
        "iPhone16Plus": (430, 932),
        "iPhone14&15ProMax": (430, 932),
        "iPhone14&15Pro": (393, 852),
        "iPhone13&14": (390, 844),
        "iPhone14Plus": (428, 926),
        "iPhone13mini": (375, 812),
        "iPhoneSE": (320, 568),
    }

    # 选择器中与设备并列的“自定义尺寸”选项
    CUSTOM_ID: Final[str] = "custom"

    @classmethod
    def get(cls, profile_id: str) -> tuple[int, int] | None:
        return cls.PROFILES.get(profile_id)

    @classmethod
    def ids(cls) -> list[str]:
        return list(cls.PROFILES)

    @classmethod
    def selector_label(cls, profile_id: str, multiplier: int = 1) -> str:
        """设备下拉框中的显示文本，尺寸按倍率换算"""
        width, height = cls.PROFILES[profile_id]
        return f"{profile_id} ({width * multiplier}×{height * multiplier})"


class CustomSizeDefaults:
    """自定义尺寸解析失败时的回退值"""

    WIDTH: Final[int] = 375
    HEIGHT: Final[int] = 812


class OutputFormat:
    """输出编码"""

    FORMAT: Final[str] = "PNG"
    MIME_TYPE: Final[str] = "image/png"
    MODE: Final[str] = "RGBA"  # 与画布输出一致


# 可接受的源图扩展名
SOURCE_EXTENSIONS: Final[set[str]] = {".png", ".jpg", ".jpeg"}
