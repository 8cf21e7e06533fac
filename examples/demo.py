#!/usr/bin/env python3
"""多设备尺寸生成演示脚本。

生成几张测试图片，按不同设备和倍率打包为 zip。
"""

import tempfile
from io import BytesIO
from pathlib import Path

from PIL import Image, ImageDraw

from multiscale import DeviceResizer, SourceImage
from multiscale.engine import LoggingEventSink
from multiscale.models import DeviceCatalog


def make_sample(name: str, size: tuple[int, int], color: str) -> SourceImage:
    img = Image.new("RGB", size, color=color)
    ImageDraw.Draw(img).ellipse([0, 0, size[0] - 1, size[1] - 1], outline="white", width=3)
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    return SourceImage(data=buffer.getvalue(), filename=name)


def main() -> None:
    images = [
        make_sample("splash.png", (1200, 800), "navy"),
        make_sample("onboarding.png", (600, 1300), "teal"),
        SourceImage(data=b"not an image", filename="broken.png"),
    ]

    print("📱 可选设备 (2x):")
    for profile_id in DeviceCatalog.ids():
        print(f"  - {DeviceCatalog.selector_label(profile_id, 2)}")

    resizer = DeviceResizer(event_sink=LoggingEventSink())
    output_dir = Path(tempfile.mkdtemp(prefix="multiscale-"))

    for device, scale, extra in [
        ("iPhoneSE", 2, {}),
        ("custom", 1, {"width": "abc", "height": "900"}),
    ]:
        result = resizer.resize_images(images, device=device, scale=scale, **extra)
        print(f"\n🎯 {device} {scale}x → {result.width}×{result.height}")
        print(f"  {result.get_summary()}")
        for warning in result.warnings:
            print(f"  ⚠️ {warning}")
        if result.archive is not None:
            print(f"  📦 {resizer.save_archive(result, output_dir)}")


if __name__ == "__main__":
    main()
