"""任务构建器模块。

把选择器取值和源图组装成批处理任务，并集中做参数验证。
"""

from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..core.size_resolver import check_output_limit, resolve_size
from ..exceptions import ValidationError
from ..models.batch_job import BatchJob, SourceImage
from ..models.constants import DensityMultiplier
from ..models.profiles import CustomProfile, NamedProfile, profile_from_selection
from ..utils.logging_helpers import get_logger


logger = get_logger()


class JobBuilder:
    """批处理任务构建器"""

    def build(
        self,
        images: Sequence[SourceImage],
        device: str = "custom",
        width: str | int | float | None = None,
        height: str | int | float | None = None,
        scale: int = 1,
    ) -> BatchJob:
        """构建任务

        Args:
            images: 按顺序排列的源图
            device: 设备标识，``"custom"`` 表示自定义尺寸
            width: 自定义宽度（原始输入）
            height: 自定义高度（原始输入）
            scale: 像素倍率 1/2/3

        Raises:
            ValidationError: 倍率或源图参数无效
        """
        profile = profile_from_selection(device, width, height)
        return self.build_from_profile(images, profile, scale)

    def build_from_profile(
        self,
        images: Sequence[SourceImage],
        profile: NamedProfile | CustomProfile,
        scale: int | DensityMultiplier = 1,
    ) -> BatchJob:
        try:
            return BatchJob(
                images=tuple(images),
                profile=profile,
                multiplier=DensityMultiplier(scale),
            )
        except ValueError as e:
            # PydanticValidationError 也是 ValueError 的子类
            message = (
                self._format_validation_error(e)
                if isinstance(e, PydanticValidationError)
                else f"不支持的倍率: {scale}，可选 1/2/3"
            )
            raise ValidationError(message) from e

    def validate_and_build(self, images: Sequence[SourceImage], **kwargs: Any) -> BatchJob:
        """构建任务并检查输出尺寸

        Raises:
            ValidationError: 参数无效或输出尺寸超过上限
            UnknownProfileError: 设备不在目录中
        """
        job = self.build(images, **kwargs)
        width, height = resolve_size(job.profile, job.multiplier)
        check_output_limit(width, height)

        logger.debug(f"任务构建完成: {job.image_count} 张图片, {width}×{height}")
        return job

    def _format_validation_error(self, error: PydanticValidationError) -> str:
        """格式化验证错误"""
        messages = []
        for err in error.errors():
            field = ".".join(str(loc) for loc in err["loc"])
            msg = err["msg"]
            if field:
                messages.append(f"{field}: {msg}")
            else:
                messages.append(msg)
        return "; ".join(messages)
