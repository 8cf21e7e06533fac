"""日志工具模块。

按调用模块名获取日志记录器，并提供一次性的日志初始化。
"""

import inspect
import logging


def get_logger(name: str | None = None) -> logging.Logger:
    """获取以调用模块命名的日志记录器。

    Args:
        name: 日志记录器名称，默认使用调用模块的 __name__

    Returns:
        logging.Logger: 日志记录器
    """
    if name is None:
        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "unknown")
        else:
            name = "unknown"

    return logging.getLogger(name)


def setup_logging(level: str, fmt: str) -> None:
    """根据配置初始化根日志记录器"""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=fmt)
