"""多设备尺寸生成接口。

在批处理引擎之上提供简洁的用户接口：从内存、文件或目录读取源图，
生成目标设备尺寸的 PNG 并打包为 zip。
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .engine.batch import BatchPackager
from .engine.events import EventSink
from .engine.job_builder import JobBuilder
from .exceptions import EmptyBatchError, ValidationError
from .models import BatchResult, SourceImage
from .utils.file_helpers import find_image_files, load_source_images, write_archive
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()


class DeviceResizer:
    """多设备尺寸生成器。

    每次调用都构建新的不可变任务，实例之间不共享可变状态。
    """

    def __init__(
        self,
        max_workers: int = 4,
        force_executor_type: str | None = None,
        per_image_timeout: float | None = None,
        collision_policy: str | None = None,
        event_sink: EventSink | None = None,
    ):
        """初始化生成器。

        Args:
            max_workers: 最大并发数
            force_executor_type: 强制指定执行器类型 ('thread'/'process'/None为自动选择)
            per_image_timeout: 单张图片超时秒数
            collision_policy: 文件名重复时的处理策略 ('suffix'/'overwrite')
            event_sink: 事件接收器
        """
        if max_workers <= 0:
            raise ValidationError("max_workers 必须大于 0")

        if force_executor_type is not None and force_executor_type not in {
            "thread",
            "process",
        }:
            raise ValidationError(
                "force_executor_type 必须是 'thread', 'process' 或 None"
            )

        if collision_policy is not None and collision_policy not in {
            "suffix",
            "overwrite",
        }:
            raise ValidationError("collision_policy 必须是 'suffix' 或 'overwrite'")

        self.job_builder = JobBuilder()
        self.packager = BatchPackager(
            max_workers=max_workers,
            force_executor_type=force_executor_type,
            per_image_timeout=per_image_timeout,
            collision_policy=collision_policy,
            event_sink=event_sink,
        )

        logger.debug("初始化多设备尺寸生成器")

    def resize_images(
        self,
        images: Sequence[SourceImage],
        device: str = "custom",
        width: str | int | float | None = None,
        height: str | int | float | None = None,
        scale: int = 1,
    ) -> BatchResult:
        """处理内存中的源图。

        Args:
            images: 按顺序排列的源图
            device: 设备标识，``"custom"`` 表示自定义尺寸
            width: 自定义宽度
            height: 自定义高度
            scale: 像素倍率 1/2/3

        Returns:
            BatchResult: 批处理结果，压缩包数据在 ``archive`` 字段

        Raises:
            EmptyBatchError: 没有源图
            ValidationError: 参数无效
            UnknownProfileError: 设备不在目录中
            ArchiveFinalizeError: 压缩包写出失败

        Examples:
            >>> resizer = DeviceResizer()
            >>> result = resizer.resize_images(images, device="iPhoneSE", scale=2)
            >>> print(result.get_entry_names())
        """
        if not images:
            raise EmptyBatchError()

        job = self.job_builder.validate_and_build(
            images, device=device, width=width, height=height, scale=scale
        )
        return self.packager.process(job)

    def resize_files(
        self, paths: Sequence[str | Path], **kwargs: Any
    ) -> BatchResult:
        """按给定顺序处理文件"""
        return self.resize_images(load_source_images(paths), **kwargs)

    def resize_directory(
        self, directory: str | Path, recursive: bool = False, **kwargs: Any
    ) -> BatchResult:
        """处理目录中的全部源图，按文件名排序"""
        directory = Path(directory)
        if not directory.is_dir():
            raise ValidationError(MessageFormatter.path_not_directory(directory))

        paths = list(find_image_files(directory, recursive=recursive))
        if not paths:
            raise EmptyBatchError(f"目录中没有可处理的图片: {directory}")
        return self.resize_files(paths, **kwargs)

    def resize_path(
        self, input_path: str | Path, recursive: bool = False, **kwargs: Any
    ) -> BatchResult:
        """自动识别文件或目录"""
        input_path = Path(input_path)
        if input_path.is_dir():
            return self.resize_directory(input_path, recursive=recursive, **kwargs)
        return self.resize_files([input_path], **kwargs)

    @staticmethod
    def save_archive(result: BatchResult, output_dir: str | Path) -> Path:
        """把结果中的压缩包写入目录

        Raises:
            ValidationError: 结果中没有压缩包
        """
        if result.archive is None or result.archive_name is None:
            raise ValidationError(f"没有可保存的压缩包: {result.error}")
        return write_archive(result.archive, output_dir, result.archive_name)


def resize_for_device(
    input_path: str | Path,
    output_dir: str | Path | None = None,
    **kwargs: Any,
) -> tuple[BatchResult, Path | None]:
    """便捷函数：处理文件或目录并保存压缩包

    Args:
        input_path: 输入文件或目录
        output_dir: 压缩包保存目录，默认与输入同级
        **kwargs: 传给 ``DeviceResizer.resize_path`` 的参数
            (device, width, height, scale, recursive)

    Returns:
        (批处理结果, 压缩包路径)；全部失败时路径为 None
    """
    input_path = Path(input_path)
    resizer = DeviceResizer()
    result = resizer.resize_path(input_path, **kwargs)

    if result.archive is None:
        return result, None

    target_dir = output_dir or (input_path if input_path.is_dir() else input_path.parent)
    return result, resizer.save_archive(result, target_dir)
