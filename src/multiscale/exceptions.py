"""异常处理模块。

定义统一的异常类，以及把单张图片的异常转换为失败记录的处理器。
"""

from collections.abc import Callable
from functools import wraps
from typing import TypeVar

from PIL.Image import DecompressionBombError, UnidentifiedImageError

from .models.results import ImageFailure, ImageOutcome
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()
T = TypeVar("T")


class MultiScaleError(Exception):
    """错误基类"""

    def __init__(self, message: str, filename: str | None = None):
        super().__init__(message)
        self.message = message
        self.filename = filename


class ValidationError(MultiScaleError):
    """边界参数验证错误"""

    pass


class UnknownProfileError(MultiScaleError):
    """设备标识不在目录中"""

    def __init__(self, profile_id: str):
        super().__init__(f"未知的设备: {profile_id}")
        self.profile_id = profile_id


class DecodeError(MultiScaleError):
    """源图无法解码"""

    pass


class RasterizeError(MultiScaleError):
    """解码以外的光栅化失败"""

    pass


class RasterTimeoutError(MultiScaleError):
    """单张图片处理超时"""

    pass


class EmptyBatchError(MultiScaleError):
    """批次中没有图片"""

    def __init__(self, message: str = "批次中没有源图"):
        super().__init__(message)


class ArchiveFinalizeError(MultiScaleError):
    """压缩包无法生成"""

    pass


# 单张图片级别的错误，只影响该图片
PER_IMAGE_ERRORS = (DecodeError, RasterizeError, RasterTimeoutError)


def handle_image_errors(operation_name: str = "图像处理"):
    """把 Pillow 异常映射为本模块异常的装饰器

    被装饰函数的第一个参数（或 ``image`` 关键字参数）需带有 ``filename``。

    Args:
        operation_name: 操作名称，用于日志记录
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            source = kwargs.get("image", args[0] if args else None)
            filename = getattr(source, "filename", None)
            try:
                return func(*args, **kwargs)
            except MultiScaleError:
                raise
            except UnidentifiedImageError as e:
                logger.debug(f"{operation_name} - 无法识别图像格式: {filename}")
                raise DecodeError(f"无法识别的图像格式: {filename}", filename) from e
            except DecompressionBombError as e:
                logger.debug(f"{operation_name} - 图像过大: {filename}")
                raise DecodeError(f"图像尺寸过大，拒绝解码: {filename}", filename) from e
            except (OSError, SyntaxError) as e:
                # 截断或损坏的数据在 load() 阶段以 OSError/SyntaxError 抛出
                logger.debug(f"{operation_name} - 解码失败: {filename}: {e}")
                raise DecodeError(f"图像解码失败: {filename}: {e}", filename) from e
            except Exception as e:
                logger.debug(f"{operation_name} - 未知错误: {filename}: {e}")
                raise RasterizeError(f"{operation_name}失败: {filename}: {e}", filename) from e

        return wrapper

    return decorator


class ErrorHandler:
    """统一错误处理器

    把单张图片的异常转换为结果对象，并负责记录日志。
    """

    @staticmethod
    def _log_error(
        operation: str, target: str, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录"""
        log_msg = MessageFormatter.format_error(operation, target, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def outcome_from_error(
        error: Exception,
        index: int,
        filename: str,
        operation: str = "图像光栅化",
    ) -> ImageOutcome:
        """单张图片失败时生成的结果"""
        match error:
            case DecodeError() | RasterTimeoutError():
                ErrorHandler._log_error(operation, filename, error, "warning")
            case _:
                ErrorHandler._log_error(operation, filename, error, "error")

        message = error.message if isinstance(error, MultiScaleError) else str(error)
        return ImageOutcome(
            index=index,
            filename=filename,
            success=False,
            error=message,
            error_type=type(error).__name__,
            raster=None,
        )

    @staticmethod
    def failure_from_outcome(outcome: ImageOutcome) -> ImageFailure:
        """把失败的结果转换为批次中的失败记录"""
        return ImageFailure(
            index=outcome.index,
            filename=outcome.filename,
            error_type=outcome.error_type or RasterizeError.__name__,
            message=outcome.error or "未知错误",
        )
