"""Documentation tree scanning.

Collects markdown files and resource files (attachments) below a
documentation root, using pathspec gitwildmatch patterns for exclusions.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

import pathspec

from doclinkchecker.errors import DocumentationRootError

logger = logging.getLogger(__name__)


# Always skipped, in addition to user supplied patterns
DEFAULT_IGNORE_PATTERNS: list[str] = [
    ".git/",
    "node_modules/",
    "venv/",
    ".venv/",
    "__pycache__/",
    ".tox/",
    ".pytest_cache/",
    ".mypy_cache/",
    "_site/",
]

DEFAULT_RESOURCE_FOLDERS: tuple[str, ...] = (".attachments",)


@dataclass
class DocumentationTree:
    """Markdown and resource files found below a documentation root."""
    root: Path
    markdown_files: list[Path] = field(default_factory=list)
    resource_files: list[Path] = field(default_factory=list)


def build_spec(exclude: Iterable[str] = ()) -> pathspec.PathSpec:
    """Build the ignore spec from the default patterns plus ``exclude``."""
    lines = DEFAULT_IGNORE_PATTERNS + list(exclude)
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def is_markdown(path: Path) -> bool:
    return path.suffix.lower() == ".md"


def scan_documentation(
    root: Path,
    exclude: Iterable[str] = (),
    resource_folders: Iterable[str] = DEFAULT_RESOURCE_FOLDERS,
) -> DocumentationTree:
    """
    Scan a documentation root.

    Args:
        root: Documentation root directory
        exclude: Extra gitwildmatch patterns, relative to ``root``
        resource_folders: Directory names whose files count as resources

    Returns:
        DocumentationTree with sorted absolute paths

    Raises:
        DocumentationRootError: ``root`` is missing or not a directory
    """
    root = Path(root).resolve()
    if not root.exists():
        raise DocumentationRootError(f"Documentation root does not exist: {root}")
    if not root.is_dir():
        raise DocumentationRootError(f"Documentation root is not a directory: {root}")

    spec = build_spec(exclude)
    folders = set(resource_folders)
    tree = DocumentationTree(root=root)

    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue

        relative = path.relative_to(root).as_posix()
        if spec.match_file(relative):
            logger.debug(f"Skipping excluded file {relative}")
            continue

        if is_markdown(path):
            tree.markdown_files.append(path)
        elif folders.intersection(path.relative_to(root).parts[:-1]):
            tree.resource_files.append(path)

    logger.info(
        f"Found {len(tree.markdown_files)} markdown files and "
        f"{len(tree.resource_files)} resources in {root}"
    )
    return tree
