"""
CLI 入口模块 - 使用 Typer 构建命令行界面

链接检查流程：
1. 加载配置
2. 扫描文档目录
3. 解析 Markdown 并验证链接
4. 生成报告
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from doclinkchecker.config import (
    RELATIVE_LINK_STRATEGIES,
    CheckerConfig,
    find_config,
    load_config,
)
from doclinkchecker.core import (
    Validator,
    parse_markdown_file,
    scan_documentation,
)
from doclinkchecker.errors import DocLinkCheckerError
from doclinkchecker.logging_setup import setup_logging
from doclinkchecker.reporters import JsonReporter, RichReporter

logger = logging.getLogger(__name__)

# 创建 Typer 应用实例
app = typer.Typer(
    name="doclinkchecker",
    help="DocLinkChecker: Validate links in markdown documentation.",
    add_completion=False,
)

# Rich Console 用于输出
console = Console()

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_USAGE = 2


def _fail(message: str) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(EXIT_USAGE)


def resolve_config(
    target_path: Path,
    config_path: Optional[Path],
    orphans: Optional[bool],
    strategy: Optional[str],
) -> tuple[CheckerConfig, Path]:
    """
    加载配置并应用命令行覆盖

    Returns:
        (配置, 文档根目录)
    """
    if config_path is None:
        config_path = find_config(target_path)
    elif not config_path.is_file():
        raise _fail(f"Config file does not exist: {config_path}")

    config = load_config(config_path)

    if orphans is not None:
        config.check_orphaned_resources = orphans
    if strategy is not None:
        config.relative_link_strategy = strategy  # type: ignore[assignment]

    base = config_path.parent if config_path else target_path
    return config, (base / config.docs_folder).resolve()


@app.command()
def check(
    target: str = typer.Argument(
        ".",
        help="Path to the project or documentation folder to check",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to .doclinkchecker.toml or pyproject.toml",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output",
    ),
    format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (default) or json",
    ),
    orphans: Optional[bool] = typer.Option(
        None,
        "--orphans/--no-orphans",
        help="Report resources that no document links to",
    ),
    strategy: Optional[str] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Relative link strategy: exists or subfolder",
    ),
) -> None:
    """
    Check all links in the markdown files below TARGET.

    Examples:
        doclinkchecker check
        doclinkchecker check ./docs
        doclinkchecker check --format json
        doclinkchecker check --orphans --strategy subfolder
    """
    setup_logging(verbose)

    if format not in ("rich", "json"):
        raise _fail(f"Unknown output format: {format}")
    if strategy is not None and strategy not in RELATIVE_LINK_STRATEGIES:
        raise _fail(f"Unknown strategy: {strategy} (expected {' or '.join(RELATIVE_LINK_STRATEGIES)})")

    target_path = Path(target).resolve()
    if not target_path.exists():
        raise _fail(f"Path does not exist: {target}")
    if not target_path.is_dir():
        raise _fail(f"Path is not a directory: {target}")

    try:
        config, docs_root = resolve_config(target_path, config_file, orphans, strategy)
        tree = scan_documentation(docs_root, config.exclude, config.resource_folders)
    except DocLinkCheckerError as e:
        raise _fail(str(e)) from e

    logger.debug(f"Using {config}")

    if verbose:
        console.print(f"[dim]Documentation root: {escape(str(docs_root))}[/dim]")
        console.print(f"[dim]  - {len(tree.markdown_files)} markdown files[/dim]")
        console.print(f"[dim]  - {len(tree.resource_files)} resources[/dim]")

    validator = Validator(docs_root, config)
    result = validator.check_tree(tree)

    if format == "json":
        reporter = JsonReporter()
    else:
        reporter = RichReporter(console)

    reporter.report(result, target)

    if result.errors > 0:
        raise typer.Exit(EXIT_ISSUES)
    raise typer.Exit(EXIT_OK)


@app.command()
def links(
    file: Path = typer.Argument(
        ...,
        help="Markdown file to inspect",
    ),
) -> None:
    """Show how every link in FILE is classified and resolved."""
    if not file.is_file():
        raise _fail(f"File does not exist: {file}")

    try:
        document = parse_markdown_file(file.resolve())
    except (OSError, UnicodeDecodeError) as e:
        raise _fail(f"Failed to read {file}: {e}") from e

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Type", style="cyan")
    table.add_column("Location")
    table.add_column("Url")
    table.add_column("Full path")
    table.add_column("Topic")

    for link in document.links:
        table.add_row(
            link.link_type.value,
            f"{link.line}:{link.column}",
            escape(link.url),
            escape(link.url_full_path) if link.is_local else "",
            escape(link.url_topic),
        )

    console.print(table)


@app.command()
def version() -> None:
    """Show the version of DocLinkChecker."""
    from doclinkchecker import __version__
    console.print(f"[bold]DocLinkChecker[/bold] v{__version__}")


if __name__ == "__main__":
    app()
