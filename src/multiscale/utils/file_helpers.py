"""文件工具模块。

查找和读取源图文件，写出压缩包。
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from ..exceptions import ValidationError
from ..models.batch_job import SourceImage
from ..models.constants import SOURCE_EXTENSIONS
from .logging_helpers import get_logger
from .message_formatter import MessageFormatter


logger = get_logger()


def find_image_files(
    directory: str | Path,
    recursive: bool = False,
    extensions: set[str] | None = None,
) -> Iterator[Path]:
    """按文件名顺序查找目录中的源图文件。

    Args:
        directory: 搜索目录
        recursive: 是否递归搜索子目录
        extensions: 可接受的扩展名，默认 .png/.jpg/.jpeg

    Yields:
        Path: 图像文件路径
    """
    directory = Path(directory)
    extensions = extensions or SOURCE_EXTENSIONS

    if not directory.exists():
        logger.warning(MessageFormatter.directory_not_found(directory))
        return

    if not directory.is_dir():
        logger.warning(MessageFormatter.path_not_directory(directory))
        return

    pattern = "**/*" if recursive else "*"
    try:
        for file_path in sorted(directory.glob(pattern)):
            if file_path.is_file() and file_path.suffix.lower() in extensions:
                yield file_path
    except PermissionError:
        logger.error(MessageFormatter.permission_error(directory, "访问目录"))


def load_source_images(paths: Iterable[str | Path]) -> list[SourceImage]:
    """按给定顺序读取源图

    Raises:
        ValidationError: 文件不存在或无法读取
    """
    images = []
    for path in map(Path, paths):
        if not path.is_file():
            raise ValidationError(MessageFormatter.file_not_found(path), path.name)
        try:
            images.append(SourceImage(data=path.read_bytes(), filename=path.name))
        except OSError as e:
            raise ValidationError(
                MessageFormatter.operation_failed("读取文件", path, e), path.name
            ) from e
    return images


def write_archive(data: bytes, output_dir: str | Path, archive_name: str) -> Path:
    """把压缩包写入目录，返回文件路径"""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / archive_name
    output_path.write_bytes(data)
    logger.debug(f"压缩包已写入: {output_path}")
    return output_path
