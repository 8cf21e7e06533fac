"""批处理器模块。

把一个批处理任务变成一个 zip 压缩包：
解析尺寸、并发光栅化、按源图顺序命名并写入压缩包。
"""

from ..config import get_config
from ..core.name_assigner import NameRegistry, assign_name
from ..core.rasterizer import rasterize_task
from ..core.size_resolver import check_output_limit, resolve_size_detailed
from ..exceptions import EmptyBatchError, ErrorHandler
from ..models.batch_job import BatchJob
from ..models.constants import CollisionPolicy
from ..models.results import (
    BatchResult,
    BatchStatus,
    ImageFailure,
    ImageOutcome,
    OutputEntry,
)
from ..utils.logging_helpers import get_logger
from .archive import ArchiveBuilder, build_archive_name
from .concurrent_executor import ConcurrentExecutor, RasterTask, TaskFunction
from .events import BatchEvent, EventSink, SafeEventSink


logger = get_logger()


class BatchPackager:
    """批处理器

    单张图片失败只记录在结果中，不影响同批其他图片。
    批次级错误（空批次、压缩包写出失败）直接抛出。
    """

    def __init__(
        self,
        max_workers: int | None = None,
        force_executor_type: str | None = None,
        per_image_timeout: float | None = None,
        collision_policy: CollisionPolicy | str | None = None,
        archive_prefix: str | None = None,
        event_sink: EventSink | None = None,
        task_function: TaskFunction = rasterize_task,
    ):
        """初始化批处理器

        Args:
            max_workers: 最大并发数
            force_executor_type: 强制指定执行器类型 ('thread'/'process'/None为自动选择)
            per_image_timeout: 单张图片超时秒数
            collision_policy: 文件名重复时的处理策略
            archive_prefix: 压缩包文件名前缀
            event_sink: 事件接收器
            task_function: 单张图片的处理函数
        """
        cfg = get_config()
        self.max_workers = max_workers or cfg.processing.MAX_WORKERS
        self.per_image_timeout = (
            per_image_timeout
            if per_image_timeout is not None
            else cfg.processing.PER_IMAGE_TIMEOUT
        )
        self.collision_policy = CollisionPolicy(
            collision_policy or cfg.processing.COLLISION_POLICY
        )
        self.archive_prefix = archive_prefix or cfg.archive.ARCHIVE_PREFIX
        self.compress_level = cfg.raster.PNG_COMPRESS_LEVEL
        self.events = SafeEventSink(event_sink)
        self.task_function = task_function
        self.concurrent_executor = ConcurrentExecutor(
            self.max_workers, force_executor_type, self.per_image_timeout
        )

    def process(self, job: BatchJob) -> BatchResult:
        """处理批次

        Raises:
            EmptyBatchError: 批次中没有源图
            UnknownProfileError: 设备不在目录中
            ValidationError: 输出尺寸超过上限
            ArchiveFinalizeError: 压缩包写出失败
        """
        if not job.images:
            raise EmptyBatchError()

        size = resolve_size_detailed(job.profile, job.multiplier)
        width, height = size.as_tuple()
        check_output_limit(width, height)
        for warning in size.warnings:
            logger.warning(warning)

        self.events.emit(
            BatchEvent.BATCH_STARTED,
            {
                "image_count": job.image_count,
                "target_device": job.profile.identity,
                "scale": int(job.multiplier),
                "size": [width, height],
            },
        )
        logger.info(
            f"开始处理 {job.image_count} 张图片 → {job.profile.identity} "
            f"{int(job.multiplier)}x ({width}×{height})"
        )

        tasks = [
            RasterTask(index, image, width, height, self.compress_level)
            for index, image in enumerate(job.images)
        ]
        outcomes = self.concurrent_executor.execute_tasks(tasks, self.task_function)

        return self._package(job, width, height, size.warnings, outcomes)

    def _package(
        self,
        job: BatchJob,
        width: int,
        height: int,
        size_warnings: list[str],
        outcomes: list[ImageOutcome],
    ) -> BatchResult:
        """按源图顺序命名并写入压缩包"""
        registry = NameRegistry(self.collision_policy)
        builder = ArchiveBuilder()
        entries: dict[str, OutputEntry] = {}
        failures: list[ImageFailure] = []

        for outcome in sorted(outcomes, key=lambda o: o.index):
            if not outcome.success or outcome.raster is None:
                failure = ErrorHandler.failure_from_outcome(outcome)
                failures.append(failure)
                self.events.emit(BatchEvent.IMAGE_FAILED, failure.model_dump())
                continue

            name = registry.register(
                assign_name(
                    job.profile, width, height, job.multiplier, outcome.filename
                )
            )
            builder.add(name, outcome.raster.data)
            # 覆盖策略下同名条目被后者替换，保持首次出现的位置
            entries[name] = OutputEntry(
                name=name,
                index=outcome.index,
                original_name=outcome.filename,
                width=outcome.raster.width,
                height=outcome.raster.height,
                size=outcome.raster.size,
            )
            self.events.emit(
                BatchEvent.IMAGE_PROCESSED,
                {"index": outcome.index, "file_name": outcome.filename, "entry": name},
            )

        warnings = [*size_warnings, *registry.warnings]

        if not entries:
            logger.error(f"批次中 {len(failures)} 张图片全部处理失败")
            result = BatchResult(
                success=False,
                error="所有图片处理都失败",
                status=BatchStatus.FAILED,
                width=width,
                height=height,
                failures=failures,
                warnings=warnings,
            )
            self._emit_completed(job, result)
            return result

        archive = builder.finalize()
        result = BatchResult(
            success=True,
            error=None,
            status=BatchStatus.PARTIAL if failures else BatchStatus.SUCCESS,
            width=width,
            height=height,
            entries=list(entries.values()),
            failures=failures,
            warnings=warnings,
            archive=archive.data,
            archive_name=build_archive_name(self.archive_prefix),
        )
        logger.info(result.get_summary())
        self._emit_completed(job, result)
        return result

    def _emit_completed(self, job: BatchJob, result: BatchResult) -> None:
        self.events.emit(
            BatchEvent.BATCH_COMPLETED,
            {
                "image_count": job.image_count,
                "target_device": job.profile.identity,
                "scale": int(job.multiplier),
                "status": result.status.value,
                "failed": result.get_failure_count(),
            },
        )
