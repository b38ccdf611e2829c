"""提供统一的日志初始化函数，使用 Rich 输出到 stderr。"""

import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(verbose: bool = False) -> logging.Logger:
    """初始化日志系统并返回项目 logger。"""
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",  # RichHandler 负责时间和级别
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, markup=False)],
        force=True,
    )

    logger = logging.getLogger("doclinkchecker")
    logger.debug("Logging initialized at level %s", logging.getLevelName(level))
    return logger
