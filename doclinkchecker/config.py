"""
配置模块 - 读取 TOML 配置文件

支持两种位置（按优先级）：
1. 文档根目录下的 .doclinkchecker.toml（顶层表）
2. pyproject.toml 中的 [tool.doclinkchecker] 表
"""

import logging
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Literal, Optional

from doclinkchecker.errors import ConfigError

logger = logging.getLogger(__name__)


CONFIG_FILE_NAME = ".doclinkchecker.toml"
PYPROJECT_FILE_NAME = "pyproject.toml"
PYPROJECT_TABLE = ("tool", "doclinkchecker")

RelativeLinkStrategy = Literal["exists", "subfolder"]
RELATIVE_LINK_STRATEGIES: tuple[str, ...] = ("exists", "subfolder")


@dataclass
class CheckerConfig:
    """
    检查器配置

    Attributes:
        docs_folder: 文档根目录（相对于配置文件所在目录）
        exclude: 额外排除的 gitwildmatch 模式
        resource_folders: 存放附件的目录名
        relative_link_strategy: exists 只要求目标存在；subfolder 还要求目标位于文档根目录内
        check_orphaned_resources: 是否报告未被引用的附件
    """
    docs_folder: str = "."
    exclude: list[str] = field(default_factory=list)
    resource_folders: list[str] = field(default_factory=lambda: [".attachments"])
    relative_link_strategy: RelativeLinkStrategy = "exists"
    check_orphaned_resources: bool = False


def find_config(root: Path) -> Optional[Path]:
    """查找 root 目录下的配置文件，找不到返回 None"""
    candidate = root / CONFIG_FILE_NAME
    if candidate.is_file():
        return candidate

    pyproject = root / PYPROJECT_FILE_NAME
    if pyproject.is_file():
        try:
            data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Ignoring unreadable {pyproject}: {e}")
            return None
        if _get_table(data, PYPROJECT_TABLE) is not None:
            return pyproject

    return None


def _get_table(data: dict[str, Any], keys: tuple[str, ...]) -> Optional[dict[str, Any]]:
    for key in keys:
        if not isinstance(data, dict) or key not in data:
            return None
        data = data[key]
    return data if isinstance(data, dict) else None


def _check_str_list(name: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{name}' must be a list of strings")
    return list(value)


def config_from_dict(data: dict[str, Any]) -> CheckerConfig:
    """
    从字典构造配置

    Raises:
        ConfigError: 存在未知键或值类型错误
    """
    known = {f.name for f in fields(CheckerConfig)}
    # TOML 中习惯用连字符
    normalized = {key.replace("-", "_"): value for key, value in data.items()}

    unknown = sorted(set(normalized) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    config = CheckerConfig()

    if "docs_folder" in normalized:
        if not isinstance(normalized["docs_folder"], str):
            raise ConfigError("'docs_folder' must be a string")
        config.docs_folder = normalized["docs_folder"]

    if "exclude" in normalized:
        config.exclude = _check_str_list("exclude", normalized["exclude"])

    if "resource_folders" in normalized:
        config.resource_folders = _check_str_list("resource_folders", normalized["resource_folders"])

    if "relative_link_strategy" in normalized:
        strategy = normalized["relative_link_strategy"]
        if strategy not in RELATIVE_LINK_STRATEGIES:
            raise ConfigError(
                f"'relative_link_strategy' must be one of {', '.join(RELATIVE_LINK_STRATEGIES)}, "
                f"got {strategy!r}"
            )
        config.relative_link_strategy = strategy

    if "check_orphaned_resources" in normalized:
        if not isinstance(normalized["check_orphaned_resources"], bool):
            raise ConfigError("'check_orphaned_resources' must be a boolean")
        config.check_orphaned_resources = normalized["check_orphaned_resources"]

    return config


def load_config(path: Optional[Path]) -> CheckerConfig:
    """
    加载配置文件

    Args:
        path: 配置文件路径；为 None 或文件不存在时返回默认配置

    Returns:
        CheckerConfig 对象

    Raises:
        ConfigError: 文件无法解析或内容无效
    """
    if path is None or not path.exists():
        return CheckerConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    if path.name == PYPROJECT_FILE_NAME:
        data = _get_table(data, PYPROJECT_TABLE) or {}

    logger.debug(f"Loaded configuration from {path}")
    return config_from_dict(data)
