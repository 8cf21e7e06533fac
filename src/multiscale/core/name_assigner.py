"""输出文件命名模块。

根据目标尺寸、倍率和原始文件名生成压缩包内的条目名。
"""

import itertools
from pathlib import PurePosixPath

from ..models.constants import CollisionPolicy
from ..models.profiles import CustomProfile, NamedProfile
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


def assign_name(
    profile: NamedProfile | CustomProfile,
    width: int,
    height: int,
    multiplier: int,
    original_name: str,
) -> str:
    """生成输出文件名

    自定义尺寸: ``{width}x{height}-{multiplier}x-{original_name}``，
    其中宽高为换算后的输出像素；
    命名设备: ``{profile_id}-{multiplier}x-{original_name}``。
    """
    scale = int(multiplier)
    if isinstance(profile, CustomProfile):
        return f"{width}x{height}-{scale}x-{original_name}"
    return f"{profile.profile_id}-{scale}x-{original_name}"


class NameRegistry:
    """保证同一压缩包内条目名唯一"""

    def __init__(self, policy: CollisionPolicy = CollisionPolicy.SUFFIX):
        self.policy = CollisionPolicy(policy)
        self._names: set[str] = set()
        self.warnings: list[str] = []

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def register(self, name: str) -> str:
        """登记条目名，返回最终使用的名称"""
        if name not in self._names:
            self._names.add(name)
            return name

        if self.policy == CollisionPolicy.OVERWRITE:
            self._record(name, name)
            return name

        unique = self._next_free(name)
        self._names.add(unique)
        self._record(name, unique)
        return unique

    def _next_free(self, name: str) -> str:
        """在扩展名前追加 _1、_2 ... 直到不重复"""
        path = PurePosixPath(name)
        stem, suffix = path.stem, path.suffix
        for counter in itertools.count(1):
            candidate = str(path.with_name(f"{stem}_{counter}{suffix}"))
            if candidate not in self._names:
                return candidate

        return name  # pragma: no cover

    def _record(self, original: str, assigned: str) -> None:
        message = MessageFormatter.duplicate_name(original, assigned)
        logger.warning(message)
        self.warnings.append(message)
