"""核心处理模块。

尺寸解析、光栅化与输出命名。
"""

from .name_assigner import NameRegistry, assign_name
from .rasterizer import rasterize, rasterize_task
from .size_resolver import (
    check_output_limit,
    parse_dimension,
    resolve_size,
    resolve_size_detailed,
)


__all__ = [
    "NameRegistry",
    "assign_name",
    "check_output_limit",
    "parse_dimension",
    "rasterize",
    "rasterize_task",
    "resolve_size",
    "resolve_size_detailed",
]
