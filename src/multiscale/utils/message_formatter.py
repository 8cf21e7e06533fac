"""消息格式化工具模块。

统一日志与错误消息的措辞。
"""

import reprlib
from pathlib import Path
from typing import Any


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def file_not_found(file_path: str | Path) -> str:
        return f"文件不存在: {file_path}"

    @staticmethod
    def directory_not_found(directory: str | Path) -> str:
        return f"目录不存在: {directory}"

    @staticmethod
    def path_not_directory(path: str | Path) -> str:
        return f"路径不是目录: {path}"

    @staticmethod
    def permission_error(path: str | Path, operation: str = "访问") -> str:
        return f"权限错误，无法{operation}: {path}"

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def validation_error(field: str, value: Any, reason: str | None = None) -> str:
        """参数验证错误消息"""
        msg = f"参数验证失败 - {field}: {value}"
        if reason:
            msg += f" ({reason})"
        return msg

    @staticmethod
    def format_error(operation: str, target: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{target}]: {error}"

    @staticmethod
    def size_fallback(axis: str, raw_value: Any, default: int) -> str:
        """自定义尺寸回退到默认值的提示"""
        return f"自定义{axis}无效 ({reprlib.repr(raw_value)})，已使用默认值 {default}"

    @staticmethod
    def duplicate_name(original: str, assigned: str) -> str:
        """重名条目的提示"""
        if original == assigned:
            return f"输出文件名重复: {original}，后者覆盖前者"
        return f"输出文件名重复: {original}，已重命名为 {assigned}"


def format_file_error(operation: str, target: str | Path, error: Exception) -> str:
    """格式化文件操作错误消息"""
    return MessageFormatter.format_error(operation, target, error)
