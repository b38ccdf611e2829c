"""
Markdown 解析器模块 - 提取文档中的超链接和标题

使用 markdown-it-py 进行 AST 解析，为每个链接和图片生成 Hyperlink，
并按 GitHub 规则为标题生成锚点 ID。
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import ModuleType

from markdown_it import MarkdownIt
from markdown_it.token import Token

from doclinkchecker.core.hyperlink import Hyperlink

logger = logging.getLogger(__name__)


@dataclass
class Heading:
    """
    标题数据模型

    Attributes:
        level: 标题级别 (1-6)
        title: 标题文本
        id: GitHub 风格的锚点 ID
        line: 在原文件中的行号
    """
    level: int
    title: str
    id: str
    line: int


@dataclass
class MarkdownDocument:
    """
    解析后的 Markdown 文档

    Attributes:
        file_path: 文档路径
        links: 文档中的所有超链接（含图片）
        headings: 文档中的所有标题
        raw_content: 原始 Markdown 内容
    """
    file_path: str
    links: list[Hyperlink] = field(default_factory=list)
    headings: list[Heading] = field(default_factory=list)
    raw_content: str = ""

    @property
    def heading_ids(self) -> set[str]:
        return {heading.id for heading in self.headings}


class _RawLinkMarkdownIt(MarkdownIt):
    """保留链接原文的 MarkdownIt，不对 href/src 做百分号编码"""

    def normalizeLink(self, url: str) -> str:  # noqa: N802
        return url


def _create_parser() -> MarkdownIt:
    return _RawLinkMarkdownIt("commonmark").enable("table")


def generate_heading_id(text: str) -> str:
    """
    生成 GitHub 风格的锚点 ID

    规则：
    1. 转换为小写
    2. 移除非字母数字字符（保留空格、连字符和中文字符）
    3. 空格转换为连字符
    4. 移除连续的连字符

    Args:
        text: 标题文本

    Returns:
        锚点 ID
    """
    result = text.lower()
    result = re.sub(r'[^\w\s\-\u4e00-\u9fff]', '', result)
    result = re.sub(r'\s+', '-', result)
    result = re.sub(r'-+', '-', result)
    return result.strip('-')


class _PositionFinder:
    """在原始行中按顺序定位链接目标，计算行号和列号"""

    def __init__(self, lines: list[str]):
        self.lines = lines
        self._block: tuple[int, int] | None = None
        self._cursor = (0, 0)

    def start_block(self, token_map: list[int] | None) -> None:
        if token_map:
            start, end = token_map
        else:
            start, end = 0, len(self.lines)
        self._block = (start, end)
        self._cursor = (start, 0)

    def locate(self, target: str) -> tuple[int, int]:
        """返回 (行号, 列号)，均为 1-based；找不到时返回块首行和第 1 列"""
        start, end = self._block or (0, len(self.lines))
        line_idx, col_idx = self._cursor
        if target:
            while line_idx < min(end, len(self.lines)):
                pos = self.lines[line_idx].find(target, col_idx)
                if pos != -1:
                    self._cursor = (line_idx, pos + len(target))
                    return line_idx + 1, pos + 1
                line_idx += 1
                col_idx = 0
        return start + 1, 1


def _inline_text(children: list[Token]) -> str:
    """标题的纯文本：只保留 text 和 code_inline，去掉链接目标等标记"""
    parts: list[str] = []
    for child in children:
        if child.type in ('text', 'code_inline'):
            parts.append(child.content)
        elif child.type in ('softbreak', 'hardbreak'):
            parts.append(" ")
    return "".join(parts)


def _iter_link_targets(children: list[Token]):
    for child in children:
        if child.type == 'link_open':
            yield str(child.attrGet('href') or "")
        elif child.type == 'image':
            yield str(child.attrGet('src') or "")
            # 图片的 alt 文本中也可能包含链接
            if child.children:
                yield from _iter_link_targets(child.children)


def parse_markdown(
    content: str,
    file_path: str,
    pathmod: ModuleType = os.path,
) -> MarkdownDocument:
    """
    解析 Markdown 内容

    Args:
        content: Markdown 内容
        file_path: 文档路径，用于构造 Hyperlink
        pathmod: 路径模块，传递给 Hyperlink

    Returns:
        MarkdownDocument 对象
    """
    md = _create_parser()
    tokens = md.parse(content)
    finder = _PositionFinder(content.splitlines())

    links: list[Hyperlink] = []
    headings: list[Heading] = []
    seen_ids: dict[str, int] = {}

    for i, token in enumerate(tokens):
        if token.type == 'heading_open':
            level = int(token.tag[1])
            line_num = token.map[0] + 1 if token.map else 1
            if i + 1 < len(tokens) and tokens[i + 1].type == 'inline':
                title = _inline_text(tokens[i + 1].children or [])
                heading_id = generate_heading_id(title)
                # 重复的标题按 GitHub 规则追加 -1、-2 ...
                count = seen_ids.get(heading_id, 0)
                seen_ids[heading_id] = count + 1
                if count:
                    heading_id = f"{heading_id}-{count}"
                headings.append(Heading(
                    level=level,
                    title=title,
                    id=heading_id,
                    line=line_num,
                ))

        elif token.type == 'inline' and token.children:
            finder.start_block(token.map)
            for target in _iter_link_targets(token.children):
                line_num, column = finder.locate(target)
                links.append(Hyperlink.create(file_path, line_num, column, target, pathmod))

    logger.debug(f"Parsed {file_path}: {len(links)} links, {len(headings)} headings")

    return MarkdownDocument(
        file_path=file_path,
        links=links,
        headings=headings,
        raw_content=content,
    )


def parse_markdown_file(path: Path) -> MarkdownDocument:
    """读取 UTF-8 编码的 Markdown 文件并解析，读取失败时抛出 OSError/UnicodeDecodeError"""
    content = path.read_text(encoding="utf-8")
    return parse_markdown(content, str(path))
