"""统一配置管理模块。

提供默认值，并支持通过环境变量覆盖。
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class RasterDefaults:
    """光栅化相关的默认配置"""

    PNG_COMPRESS_LEVEL: int = 6

    # 单边输出像素上限
    MAX_DIMENSION: int = 16384


@dataclass(frozen=True)
class ProcessingDefaults:
    """批处理相关的默认配置"""

    MAX_WORKERS: int = 4

    # 单张图片的超时时间（秒）
    PER_IMAGE_TIMEOUT: float = 30.0

    # 超过任一阈值时改用进程池
    PROCESS_POOL_MIN_IMAGES: int = 20
    PROCESS_POOL_MIN_AVG_BYTES: int = 5 * 1024 * 1024

    COLLISION_POLICY: str = "suffix"


@dataclass(frozen=True)
class ArchiveDefaults:
    """压缩包相关的默认配置"""

    ARCHIVE_PREFIX: str = "MultiScale"


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.raster = RasterDefaults()
        self.processing = ProcessingDefaults()
        self.archive = ArchiveDefaults()
        self.logging = LoggingDefaults()

        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        if compress_level := os.getenv("MS_PNG_COMPRESS_LEVEL"):
            object.__setattr__(self.raster, "PNG_COMPRESS_LEVEL", int(compress_level))

        if max_workers := os.getenv("MS_MAX_WORKERS"):
            object.__setattr__(self.processing, "MAX_WORKERS", int(max_workers))

        if timeout := os.getenv("MS_IMAGE_TIMEOUT"):
            object.__setattr__(self.processing, "PER_IMAGE_TIMEOUT", float(timeout))

        if policy := os.getenv("MS_COLLISION_POLICY"):
            object.__setattr__(self.processing, "COLLISION_POLICY", policy.lower())

        if prefix := os.getenv("MS_ARCHIVE_PREFIX"):
            object.__setattr__(self.archive, "ARCHIVE_PREFIX", prefix)

        if log_level := os.getenv("MS_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
