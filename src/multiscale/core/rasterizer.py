"""光栅化模块。

把一张源图解码、拉伸到目标像素尺寸，再编码为 PNG。
可在线程池或进程池中执行。
"""

from io import BytesIO

from PIL import Image, ImageOps

from ..config import get_config
from ..exceptions import ErrorHandler, ValidationError, handle_image_errors
from ..models.batch_job import SourceImage
from ..models.constants import OutputFormat
from ..models.results import ImageOutcome, RasterBuffer
from ..utils.logging_helpers import get_logger


logger = get_logger()


@handle_image_errors("图像光栅化")
def rasterize(
    image: SourceImage,
    width: int,
    height: int,
    compress_level: int | None = None,
) -> RasterBuffer:
    """把源图拉伸为 width×height 的 PNG

    不保持宽高比，源图按两个方向分别缩放以填满目标尺寸。

    Args:
        image: 源图
        width: 输出宽度（像素）
        height: 输出高度（像素）
        compress_level: PNG 压缩级别，默认取配置

    Raises:
        DecodeError: 源图无法解码
        RasterizeError: 其他处理失败
    """
    if width <= 0 or height <= 0:
        raise ValidationError(f"输出尺寸必须为正整数: {width}×{height}", image.filename)

    if compress_level is None:
        compress_level = get_config().raster.PNG_COMPRESS_LEVEL

    with Image.open(BytesIO(image.data)) as img:
        # 等待像素数据完整载入后再绘制
        img.load()
        canvas = _prepare_canvas(img)
        if canvas.size != (width, height):
            canvas = canvas.resize((width, height), Image.Resampling.LANCZOS)

    buffer = BytesIO()
    canvas.save(buffer, format=OutputFormat.FORMAT, compress_level=compress_level)
    logger.debug(f"光栅化完成: {image.filename} → {width}×{height}")

    return RasterBuffer(
        data=buffer.getvalue(),
        width=canvas.width,
        height=canvas.height,
        format=OutputFormat.FORMAT,
    )


def _prepare_canvas(img: Image.Image) -> Image.Image:
    """处理 EXIF 方向并统一为 RGBA"""
    img = ImageOps.exif_transpose(img)
    if img.mode != OutputFormat.MODE:
        img = img.convert(OutputFormat.MODE)
    return img


def rasterize_task(
    index: int,
    image: SourceImage,
    width: int,
    height: int,
    compress_level: int | None = None,
) -> ImageOutcome:
    """执行器中的任务入口，总是返回结果而不抛出异常"""
    try:
        raster = rasterize(image, width, height, compress_level=compress_level)
    except Exception as e:
        return ErrorHandler.outcome_from_error(e, index, image.filename)

    return ImageOutcome(
        index=index,
        filename=image.filename,
        success=True,
        error=None,
        raster=raster,
    )
