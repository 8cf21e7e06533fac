"""Entry point for python -m multiscale.

默认启动 MCP 服务器。
"""

import sys


def main() -> None:
    """主入口函数 - 启动 MCP 服务器"""
    if len(sys.argv) > 1 and sys.argv[1] in ["--version", "-v"]:
        from . import __version__

        print(f"multiscale {__version__}")
        return

    from .mcp_server import main as server_main

    server_main()


if __name__ == "__main__":
    main()
