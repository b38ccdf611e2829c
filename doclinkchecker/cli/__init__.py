"""
CLI Layer - 命令行接口层

提供命令行入口。
"""

from doclinkchecker.cli.app import app, check, links, version

__all__ = [
    "app",
    "check",
    "links",
    "version",
]
