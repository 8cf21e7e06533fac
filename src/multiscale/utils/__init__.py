"""工具模块包。

提供纯工具函数，不包含业务逻辑。
"""

from .logging_helpers import get_logger, setup_logging
from .message_formatter import MessageFormatter, format_file_error


__all__ = [
    "MessageFormatter",
    "format_file_error",
    "get_logger",
    "setup_logging",
]
