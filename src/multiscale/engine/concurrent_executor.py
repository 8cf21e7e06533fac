"""并发执行器模块。

并发执行单张图片的光栅化任务，并按提交顺序收集结果。
"""

from collections.abc import Callable, Sequence
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass

from ..config import get_config
from ..exceptions import ErrorHandler, RasterTimeoutError
from ..models.batch_job import SourceImage
from ..models.results import ImageOutcome
from ..utils.logging_helpers import get_logger


logger = get_logger()

TaskFunction = Callable[..., ImageOutcome]


@dataclass(frozen=True)
class RasterTask:
    """单张图片的任务参数"""

    index: int
    image: SourceImage
    width: int
    height: int
    compress_level: int | None = None


class ConcurrentExecutor:
    """通用并发执行器

    任务全部提交后按提交顺序逐个等待，结果顺序与任务顺序一致。
    单个任务失败或超时只影响该任务。
    """

    def __init__(
        self,
        max_workers: int = 4,
        force_executor_type: str | None = None,
        timeout: float | None = None,
    ):
        """初始化并发执行器

        Args:
            max_workers: 最大并发数
            force_executor_type: 强制指定执行器类型 ('thread'/'process'/None为自动选择)
            timeout: 等待单个任务的最长秒数，None 表示不限
        """
        self.max_workers = max_workers
        self.force_executor_type = force_executor_type
        self.timeout = timeout

    def execute_tasks(
        self,
        tasks: Sequence[RasterTask],
        task_function: TaskFunction,
    ) -> list[ImageOutcome]:
        """执行并发任务

        Args:
            tasks: 任务列表
            task_function: 任务函数，参数与 RasterTask 字段一致

        Returns:
            list[ImageOutcome]: 与 tasks 一一对应的结果
        """
        if not tasks:
            return []

        executor_class = self._choose_executor(tasks)
        executors = [executor_class(max_workers=self.max_workers)]
        stalled = False
        try:
            futures = self._submit_tasks(executors[-1], tasks, task_function)
            results = []
            for position, task in enumerate(tasks):
                outcome = self._collect_result(task, futures[position])
                if outcome.error_type == RasterTimeoutError.__name__:
                    stalled = True
                    # 超时任务仍占用工作线程，排在其后的任务换到新的执行器
                    pending = self._reclaim_pending(futures, position + 1)
                    if pending:
                        executors.append(executor_class(max_workers=self.max_workers))
                        resubmitted = self._submit_tasks(
                            executors[-1], [tasks[i] for i in pending], task_function
                        )
                        for i, future in zip(pending, resubmitted, strict=True):
                            futures[i] = future
                results.append(outcome)
        finally:
            # 超时的任务仍在运行时不等待其结束
            for executor in executors:
                executor.shutdown(wait=not stalled, cancel_futures=True)

        return results

    @staticmethod
    def _reclaim_pending(
        futures: list[Future | ImageOutcome], start: int
    ) -> list[int]:
        """取消尚未开始的任务，返回它们的位置"""
        return [
            i
            for i in range(start, len(futures))
            if isinstance(futures[i], Future) and futures[i].cancel()
        ]

    def _submit_tasks(
        self,
        executor: Executor,
        tasks: Sequence[RasterTask],
        task_function: TaskFunction,
    ) -> list[Future | ImageOutcome]:
        """提交任务到执行器，提交失败的任务直接转换为失败结果"""
        futures: list[Future | ImageOutcome] = []

        for task in tasks:
            try:
                futures.append(
                    executor.submit(
                        task_function,
                        task.index,
                        task.image,
                        task.width,
                        task.height,
                        task.compress_level,
                    )
                )
            except Exception as e:
                futures.append(
                    ErrorHandler.outcome_from_error(
                        e, task.index, task.image.filename, "任务提交"
                    )
                )

        return futures

    def _collect_result(
        self, task: RasterTask, future: Future | ImageOutcome
    ) -> ImageOutcome:
        """等待单个任务完成"""
        if isinstance(future, ImageOutcome):
            return future

        filename = task.image.filename
        try:
            result = future.result(timeout=self.timeout)
        except FuturesTimeoutError:
            future.cancel()
            error = RasterTimeoutError(
                f"处理超时（{self.timeout} 秒）: {filename}", filename
            )
            return ErrorHandler.outcome_from_error(error, task.index, filename)
        except Exception as e:
            return ErrorHandler.outcome_from_error(
                e, task.index, filename, "并发任务处理"
            )

        if result.success:
            logger.debug(f"处理成功: {filename}")
        return result

    def _choose_executor(self, tasks: Sequence[RasterTask]) -> type[Executor]:
        """根据任务数量和源图大小选择执行器

        Returns:
            执行器类 (ThreadPoolExecutor 或 ProcessPoolExecutor)
        """
        if self.force_executor_type == "thread":
            return ThreadPoolExecutor
        if self.force_executor_type == "process":
            return ProcessPoolExecutor

        processing = get_config().processing
        task_count = len(tasks)
        avg_size = sum(task.image.size for task in tasks) / task_count

        if (
            avg_size > processing.PROCESS_POOL_MIN_AVG_BYTES
            or task_count > processing.PROCESS_POOL_MIN_IMAGES
        ):
            logger.debug(
                f"使用ProcessPoolExecutor: 任务数={task_count}, 平均大小={avg_size / 1024 / 1024:.1f}MB"
            )
            return ProcessPoolExecutor

        logger.debug(
            f"使用ThreadPoolExecutor: 任务数={task_count}, 平均大小={avg_size / 1024 / 1024:.1f}MB"
        )
        return ThreadPoolExecutor
