"""测试配置文件。

提供测试所需的fixtures和图片生成工具。
"""

import tempfile
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from multiscale.config import reset_config
from multiscale.models import SourceImage


def make_image_bytes(
    size: tuple[int, int] = (100, 60),
    color: str | tuple[int, ...] = "red",
    mode: str = "RGB",
    format: str = "PNG",
) -> bytes:
    """生成带少量图形的测试图片"""
    img = Image.new(mode, size, color=color)
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 0, size[0] // 2, size[1] // 2], fill="white" if mode != "L" else 255)
    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


def make_source(filename: str, **kwargs) -> SourceImage:
    return SourceImage(data=make_image_bytes(**kwargs), filename=filename)


def open_png(data: bytes) -> Image.Image:
    img = Image.open(BytesIO(data))
    img.load()
    return img


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """每个测试使用不受环境变量影响的配置"""
    for name in (
        "MS_MAX_WORKERS",
        "MS_IMAGE_TIMEOUT",
        "MS_PNG_COMPRESS_LEVEL",
        "MS_COLLISION_POLICY",
        "MS_ARCHIVE_PREFIX",
        "MS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def abc_images() -> list[SourceImage]:
    """三张尺寸和宽高比各不相同的源图"""
    return [
        make_source("a.png", size=(100, 60), color="red"),
        make_source("b.png", size=(30, 90), color="green", mode="RGBA"),
        make_source("c.png", size=(640, 1136), color="blue"),
    ]


@pytest.fixture
def broken_image() -> SourceImage:
    """无法解码的数据"""
    return SourceImage(data=b"this is not an image", filename="broken.png")


@pytest.fixture
def truncated_image() -> SourceImage:
    """文件头完整但数据被截断的 PNG"""
    data = make_image_bytes(size=(400, 400), color="orange")
    return SourceImage(data=data[: len(data) // 2], filename="truncated.png")


@pytest.fixture
def image_dir(temp_dir: Path) -> Path:
    """包含 PNG、JPEG 和非图片文件的目录"""
    input_dir = temp_dir / "input"
    input_dir.mkdir()
    (input_dir / "b.png").write_bytes(make_image_bytes(size=(50, 50)))
    (input_dir / "a.jpg").write_bytes(
        make_image_bytes(size=(80, 40), color="purple", format="JPEG")
    )
    (input_dir / "notes.txt").write_text("not an image")
    return input_dir
