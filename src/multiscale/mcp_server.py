"""多设备尺寸生成 MCP 服务器。"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from .config import get_config
from .exceptions import (
    EmptyBatchError,
    MultiScaleError,
    UnknownProfileError,
    ValidationError,
)
from .models import BatchResult, DeviceCatalog
from .resizer import DeviceResizer
from .utils.logging_helpers import get_logger, setup_logging
from .utils.message_formatter import MessageFormatter


MCPResizeResponse = dict[str, Any]
MCPProfilesResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def validation_error(message: str, field: str | None = None) -> dict[str, Any]:
        details = {"field": field} if field else None
        return MCPResponseBuilder.error(message, "validation", details)

    @staticmethod
    def file_error(message: str, file_path: str | None = None) -> dict[str, Any]:
        details = {"file_path": file_path} if file_path else None
        return MCPResponseBuilder.error(message, "file", details)

    @staticmethod
    def processing_error(message: str, operation: str | None = None) -> dict[str, Any]:
        details = {"operation": operation} if operation else None
        return MCPResponseBuilder.error(message, "processing", details)


cfg = get_config()
setup_logging(cfg.logging.LOG_LEVEL, cfg.logging.LOG_FORMAT)
logger = get_logger(__name__)

mcp: FastMCP[Any] = FastMCP("多设备尺寸生成服务")


def run_resize(
    input_path: str,
    device: str = "custom",
    width: str | None = None,
    height: str | None = None,
    scale: int = 1,
    output_dir: str | None = None,
) -> MCPResizeResponse:
    """处理文件或目录，保存压缩包并返回摘要"""
    try:
        input_path_obj = Path(input_path)
        if not input_path_obj.exists():
            return MCPResponseBuilder.file_error(
                MessageFormatter.file_not_found(input_path), input_path
            )

        resizer = DeviceResizer(max_workers=cfg.processing.MAX_WORKERS)
        result = resizer.resize_path(
            input_path_obj, device=device, width=width, height=height, scale=scale
        )

        archive_path = None
        if result.archive is not None:
            target_dir = Path(output_dir) if output_dir else (
                input_path_obj if input_path_obj.is_dir() else input_path_obj.parent
            )
            archive_path = resizer.save_archive(result, target_dir)

        return format_batch_result(result, archive_path)

    except UnknownProfileError as e:
        logger.warning(e.message)
        return MCPResponseBuilder.validation_error(e.message, "device")
    except (ValidationError, EmptyBatchError) as e:
        logger.warning(e.message)
        return MCPResponseBuilder.validation_error(e.message)
    except MultiScaleError as e:
        logger.error(MessageFormatter.operation_failed("尺寸生成", input_path, e))
        return MCPResponseBuilder.processing_error(e.message, "尺寸生成")
    except Exception as e:
        logger.error(MessageFormatter.operation_failed("尺寸生成", input_path, e))
        return MCPResponseBuilder.processing_error(
            MessageFormatter.operation_failed("尺寸生成", input_path, e), "尺寸生成"
        )


def format_batch_result(
    result: BatchResult, archive_path: Path | None
) -> MCPResizeResponse:
    """格式化批处理结果为MCP响应格式"""
    return {
        "success": result.success,
        "status": result.status.value,
        "width": result.width,
        "height": result.height,
        "archive_path": str(archive_path) if archive_path else None,
        "archive_size": result.get_archive_size(),
        "entries": result.get_entry_names(),
        "failures": [
            {"file_name": f.filename, "error_type": f.error_type, "error": f.message}
            for f in result.failures
        ],
        "warnings": result.warnings,
        "summary": result.get_summary(),
        "error": result.error,
    }


def list_profiles(scale: int = 1) -> MCPProfilesResponse:
    """按倍率换算后的设备目录"""
    if scale not in (1, 2, 3):
        return MCPResponseBuilder.validation_error(
            MessageFormatter.validation_error("scale", scale, "可选 1/2/3"), "scale"
        )

    return {
        "success": True,
        "scale": scale,
        "profiles": [
            {
                "id": profile_id,
                "width": width * scale,
                "height": height * scale,
                "label": DeviceCatalog.selector_label(profile_id, scale),
            }
            for profile_id, (width, height) in DeviceCatalog.PROFILES.items()
        ],
        "custom_id": DeviceCatalog.CUSTOM_ID,
    }


@mcp.tool()
def resize_for_device(
    input_path: str,
    device: str = "custom",
    width: str | None = None,
    height: str | None = None,
    scale: int = 1,
    output_dir: str | None = None,
) -> MCPResizeResponse:
    """把图片拉伸为指定设备屏幕尺寸的 PNG，并打包为 zip。

    Args:
        input_path: 输入图片文件或目录（目录内按文件名排序）
        device: 设备标识，``"custom"`` 使用 width/height
        width: 自定义宽度（逻辑像素），无效时回退为 375
        height: 自定义高度（逻辑像素），无效时回退为 812
        scale: 像素倍率 1/2/3
        output_dir: 压缩包保存目录，默认与输入同级

    Returns:
        dict: 压缩包路径、条目名、失败列表和提示
    """
    return run_resize(input_path, device, width, height, scale, output_dir)


@mcp.tool()
def list_device_profiles(scale: int = 1) -> MCPProfilesResponse:
    """列出内置设备及其在给定倍率下的像素尺寸。"""
    return list_profiles(scale)


def main() -> None:
    """启动 MCP 服务器"""
    logger.info("启动多设备尺寸生成 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
