"""核心功能测试。

测试尺寸解析、输出命名和光栅化。
"""

from io import BytesIO

import pytest
from PIL import Image

from multiscale.core.name_assigner import NameRegistry, assign_name
from multiscale.core.rasterizer import rasterize, rasterize_task
from multiscale.core.size_resolver import (
    parse_dimension,
    resolve_size,
    resolve_size_detailed,
)
from multiscale.exceptions import DecodeError, UnknownProfileError
from multiscale.models import (
    CollisionPolicy,
    CustomProfile,
    DensityMultiplier,
    DeviceCatalog,
    NamedProfile,
    SourceImage,
    profile_from_selection,
)
from tests.conftest import make_image_bytes, make_source, open_png


class TestSizeResolver:
    """尺寸解析测试"""

    @pytest.mark.parametrize("profile_id", DeviceCatalog.ids())
    @pytest.mark.parametrize("multiplier", [1, 2, 3])
    def test_named_profiles_scale_catalog_size(self, profile_id, multiplier):
        """命名设备尺寸 = 目录尺寸 × 倍率"""
        base_width, base_height = DeviceCatalog.PROFILES[profile_id]
        size = resolve_size(NamedProfile(profile_id=profile_id), multiplier)
        assert size == (base_width * multiplier, base_height * multiplier)

    def test_iphone_se_at_2x(self):
        assert resolve_size(NamedProfile(profile_id="iPhoneSE"), 2) == (640, 1136)

    def test_catalog_matches_selector(self):
        """13 个设备加上自定义选项"""
        assert len(DeviceCatalog.PROFILES) == 13
        assert DeviceCatalog.PROFILES["AndroidCompact"] == (412, 917)
        assert DeviceCatalog.PROFILES["iPhone16ProMax"] == (440, 956)
        assert DeviceCatalog.CUSTOM_ID not in DeviceCatalog.PROFILES

    def test_unknown_profile(self):
        with pytest.raises(UnknownProfileError) as exc_info:
            resolve_size(NamedProfile(profile_id="Nokia3310"), 1)
        assert exc_info.value.profile_id == "Nokia3310"

    @pytest.mark.parametrize("multiplier", list(DensityMultiplier))
    def test_custom_valid(self, multiplier):
        profile = CustomProfile(width="200", height=300)
        assert resolve_size(profile, multiplier) == (200 * multiplier, 300 * multiplier)

    def test_custom_width_falls_back(self):
        """宽度无效时只回退宽度"""
        size = resolve_size_detailed(CustomProfile(width="abc", height="900"), 1)
        assert size.as_tuple() == (375, 900)
        assert len(size.warnings) == 1
        assert "375" in size.warnings[0]

    @pytest.mark.parametrize("bad", ["", "0", "-20", "abc", None, "  "])
    def test_custom_invalid_uses_defaults_times_multiplier(self, bad):
        size = resolve_size_detailed(CustomProfile(width=bad, height=bad), 3)
        assert size.as_tuple() == (375 * 3, 812 * 3)
        assert len(size.warnings) == 2

    def test_oversized_digit_run_falls_back(self):
        size = resolve_size_detailed(CustomProfile(width="9" * 5000, height="900"), 1)
        assert size.as_tuple() == (375, 900)
        assert len(size.warnings) == 1

    def test_float_dimensions_accepted(self):
        profile = CustomProfile(width=12.9, height=40.0)
        assert resolve_size(profile, 2) == (24, 80)

    def test_valid_custom_has_no_warnings(self):
        assert resolve_size_detailed(CustomProfile(width=10, height=20), 1).warnings == []

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("812", 812),
            ("812px", 812),
            ("  42 ", 42),
            ("12.9", 12),
            ("+7", 7),
            (15, 15),
            (12.9, 12),
            (0.5, None),
            (float("nan"), None),
            (float("inf"), None),
            ("9" * 5000, None),
            ("-5", None),
            ("0", None),
            ("px12", None),
            (True, None),
            (None, None),
        ],
    )
    def test_parse_dimension(self, raw, expected):
        assert parse_dimension(raw) == expected

    def test_profile_from_selection(self):
        assert isinstance(profile_from_selection("custom", "1", "2"), CustomProfile)
        named = profile_from_selection("iPhone16")
        assert isinstance(named, NamedProfile)
        assert named.identity == "iPhone16"


class TestNameAssigner:
    """输出命名测试"""

    def test_named_profile(self):
        name = assign_name(NamedProfile(profile_id="iPhoneSE"), 640, 1136, 2, "a.png")
        assert name == "iPhoneSE-2x-a.png"

    def test_custom_profile_uses_output_pixels(self):
        profile = CustomProfile(width="100", height="200")
        name = assign_name(profile, 300, 600, DensityMultiplier.THREE, "photo.jpg")
        assert name == "300x600-3x-photo.jpg"

    def test_original_name_kept_verbatim(self):
        name = assign_name(NamedProfile(profile_id="iPhone14&15Pro"), 1, 1, 1, "my shot.JPEG")
        assert name == "iPhone14&15Pro-1x-my shot.JPEG"


class TestNameRegistry:
    """重名处理测试"""

    def test_unique_names_unchanged(self):
        registry = NameRegistry()
        assert registry.register("x-1x-a.png") == "x-1x-a.png"
        assert registry.register("x-1x-b.png") == "x-1x-b.png"
        assert registry.warnings == []

    def test_suffix_policy(self):
        registry = NameRegistry(CollisionPolicy.SUFFIX)
        names = [registry.register("x-1x-a.png") for _ in range(3)]
        assert names == ["x-1x-a.png", "x-1x-a_1.png", "x-1x-a_2.png"]
        assert len(registry.warnings) == 2

    def test_suffix_skips_taken_names(self):
        registry = NameRegistry("suffix")
        registry.register("x-1x-a_1.png")
        registry.register("x-1x-a.png")
        assert registry.register("x-1x-a.png") == "x-1x-a_2.png"

    def test_suffix_without_extension(self):
        registry = NameRegistry()
        registry.register("x-1x-README")
        assert registry.register("x-1x-README") == "x-1x-README_1"

    def test_overwrite_policy(self):
        registry = NameRegistry(CollisionPolicy.OVERWRITE)
        assert registry.register("x-1x-a.png") == "x-1x-a.png"
        assert registry.register("x-1x-a.png") == "x-1x-a.png"
        assert len(registry.warnings) == 1
        assert "覆盖" in registry.warnings[0]


class TestRasterizer:
    """光栅化测试"""

    @pytest.mark.parametrize(
        ("source_size", "target"),
        [((100, 60), (640, 1136)), ((30, 90), (90, 30)), ((500, 500), (7, 3))],
    )
    def test_output_has_exact_size(self, source_size, target):
        """任意宽高比的源图都被拉伸到目标尺寸"""
        raster = rasterize(make_source("x.png", size=source_size), *target)

        assert (raster.width, raster.height) == target
        img = open_png(raster.data)
        assert img.format == "PNG"
        assert img.size == target
        assert img.mode == "RGBA"

    def test_decodes_jpeg_and_grayscale(self):
        jpeg = make_source("x.jpg", size=(40, 40), format="JPEG")
        gray = make_source("g.png", size=(40, 40), color=128, mode="L")

        assert open_png(rasterize(jpeg, 20, 10).data).size == (20, 10)
        assert open_png(rasterize(gray, 20, 10).data).mode == "RGBA"

    def test_stretch_is_non_uniform(self):
        """左半白右半黑的源图横向拉伸后分界仍在中间"""
        img = Image.new("RGB", (10, 10), "black")
        img.paste((255, 255, 255), (0, 0, 5, 10))
        buffer = BytesIO()
        img.save(buffer, format="PNG")
        raster = rasterize(SourceImage(data=buffer.getvalue(), filename="s.png"), 100, 10)

        out = open_png(raster.data)
        assert out.getpixel((10, 5))[:3] == (255, 255, 255)
        assert out.getpixel((90, 5))[:3] == (0, 0, 0)

    def test_deterministic(self):
        source = make_source("a.png", size=(33, 77))
        assert rasterize(source, 64, 64).data == rasterize(source, 64, 64).data

    def test_decode_error_names_file(self, broken_image):
        with pytest.raises(DecodeError) as exc_info:
            rasterize(broken_image, 10, 10)
        assert exc_info.value.filename == "broken.png"
        assert "broken.png" in exc_info.value.message

    def test_truncated_image_is_decode_error(self, truncated_image):
        with pytest.raises(DecodeError):
            rasterize(truncated_image, 10, 10)

    def test_task_never_raises(self, broken_image):
        outcome = rasterize_task(4, broken_image, 10, 10)
        assert not outcome.success
        assert outcome.index == 4
        assert outcome.error_type == "DecodeError"
        assert outcome.raster is None

    def test_task_success(self):
        outcome = rasterize_task(0, SourceImage(data=make_image_bytes(), filename="ok.png"), 8, 8)
        assert outcome.success
        assert outcome.raster.width == 8
