"""尺寸解析模块。

根据目标尺寸配置和像素倍率计算输出像素尺寸。
"""

import math
import re

from ..config import get_config
from ..exceptions import UnknownProfileError, ValidationError
from ..models.constants import CustomSizeDefaults, DensityMultiplier, DeviceCatalog
from ..models.profiles import CustomProfile, NamedProfile
from ..models.results import ResolvedSize
from ..utils.message_formatter import MessageFormatter


# 前导整数：可选空白、可选符号、至少一位数字，后续字符忽略
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_dimension(raw: str | int | float | None) -> int | None:
    """解析单个尺寸值，无法得到正整数时返回 None

    ``"812px"`` 解析为 812，``"12.9"`` 和 ``12.9`` 都解析为 12。
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        value = int(raw)
    else:
        match = _LEADING_INT.match(str(raw))
        if match is None:
            return None
        try:
            value = int(match.group(1))
        except ValueError:
            # 超过解释器整数转换位数上限
            return None
    return value if value > 0 else None


def check_output_limit(width: int, height: int) -> None:
    """检查输出尺寸是否超过单边上限

    Raises:
        ValidationError: 宽或高超过 ``MAX_DIMENSION``
    """
    max_dimension = get_config().raster.MAX_DIMENSION
    if width > max_dimension or height > max_dimension:
        raise ValidationError(f"输出尺寸 {width}×{height} 超过上限 {max_dimension}")


def resolve_size_detailed(
    profile: NamedProfile | CustomProfile, multiplier: DensityMultiplier | int
) -> ResolvedSize:
    """计算输出尺寸，并附带自定义尺寸回退提示

    Raises:
        UnknownProfileError: 命名设备不在目录中
    """
    scale = int(multiplier)
    warnings: list[str] = []

    match profile:
        case NamedProfile(profile_id=profile_id):
            base = DeviceCatalog.get(profile_id)
            if base is None:
                raise UnknownProfileError(profile_id)
            base_width, base_height = base
        case CustomProfile(width=raw_width, height=raw_height):
            base_width = parse_dimension(raw_width)
            if base_width is None:
                base_width = CustomSizeDefaults.WIDTH
                warnings.append(
                    MessageFormatter.size_fallback("宽度", raw_width, base_width)
                )
            base_height = parse_dimension(raw_height)
            if base_height is None:
                base_height = CustomSizeDefaults.HEIGHT
                warnings.append(
                    MessageFormatter.size_fallback("高度", raw_height, base_height)
                )
        case _:
            raise TypeError(f"不支持的尺寸配置类型: {type(profile).__name__}")

    return ResolvedSize(
        width=base_width * scale, height=base_height * scale, warnings=warnings
    )


def resolve_size(
    profile: NamedProfile | CustomProfile, multiplier: DensityMultiplier | int
) -> tuple[int, int]:
    """计算输出像素尺寸 (宽, 高)"""
    return resolve_size_detailed(profile, multiplier).as_tuple()
