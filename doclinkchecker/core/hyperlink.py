"""
超链接模型 - 对 Markdown 文档中的单个链接进行分类和路径解析

分类规则（按顺序，首个匹配生效）：
1. 空串或纯空白 -> EMPTY
2. https:// 或 http:// -> WEBPAGE
3. ftps:// 或 ftp:// -> FTP
4. mailto: -> MAIL
5. xref: -> CROSS_REFERENCE
6. 扩展名为 .md（不区分大小写）或没有扩展名 -> LOCAL
7. 其他 -> RESOURCE

本地链接的 "#" 之后（没有 "#" 时为 "?" 之后）的部分视为 topic。
所有计算都是纯函数，不访问文件系统。
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from types import ModuleType


WEB_PREFIXES = ("https://", "http://")
FTP_PREFIXES = ("ftps://", "ftp://")
MAIL_PREFIX = "mailto:"
XREF_PREFIX = "xref:"

MARKDOWN_EXTENSION = ".md"


class LinkType(Enum):
    """链接类型"""
    EMPTY = "empty"
    WEBPAGE = "webpage"
    FTP = "ftp"
    MAIL = "mail"
    CROSS_REFERENCE = "xref"
    LOCAL = "local"        # Markdown 文件或目录
    RESOURCE = "resource"  # 图片、PDF 等附件


LOCAL_TYPES = frozenset({LinkType.LOCAL, LinkType.RESOURCE})
WEB_TYPES = frozenset({LinkType.WEBPAGE, LinkType.FTP})


@dataclass(frozen=True)
class Location:
    """
    文档内位置

    Attributes:
        file_path: Markdown 文件路径
        line: 行号 (1-based)
        column: 列号 (1-based)
    """
    file_path: str
    line: int = 1
    column: int = 1


def is_local(link_type: LinkType) -> bool:
    return link_type in LOCAL_TYPES


def is_web(link_type: LinkType) -> bool:
    return link_type in WEB_TYPES


def topic_delimiter(url: str) -> int:
    """
    查找 topic 分隔符的位置

    优先查找 "#"，找不到时把 "?" 也当作分隔符。

    Returns:
        分隔符下标，不存在时为 -1
    """
    pos = url.find("#")
    if pos == -1:
        pos = url.find("?")
    return pos


def _extension(path: str, pathmod: ModuleType) -> str:
    """
    文件扩展名，规则与 .NET 的 Path.GetExtension 一致

    以点开头的文件名（如 ".gitignore"）整体视为扩展名；以点结尾的名字没有扩展名。
    """
    name = pathmod.basename(path)
    pos = name.rfind(".")
    if pos == -1 or pos == len(name) - 1:
        return ""
    return name[pos:]


def classify(url: str, pathmod: ModuleType = os.path) -> LinkType:
    """
    根据 URL 文本判断链接类型

    前缀比较区分大小写，只有扩展名比较不区分大小写。
    任何输入都不会抛出异常。

    Args:
        url: 文档中原样写出的链接目标
        pathmod: 路径模块（os.path / posixpath / ntpath）

    Returns:
        LinkType
    """
    if not url or not url.strip():
        return LinkType.EMPTY
    if url.startswith(WEB_PREFIXES):
        return LinkType.WEBPAGE
    if url.startswith(FTP_PREFIXES):
        return LinkType.FTP
    if url.startswith(MAIL_PREFIX):
        return LinkType.MAIL
    if url.startswith(XREF_PREFIX):
        return LinkType.CROSS_REFERENCE

    # 扩展名取自 topic 之前的部分，否则 "other.md#setup" 的扩展名会变成 ".md#setup"
    pos = topic_delimiter(url)
    target = url if pos == -1 else url[:pos]
    extension = _extension(target, pathmod)
    if extension == "" or extension.lower() == MARKDOWN_EXTENSION:
        return LinkType.LOCAL
    return LinkType.RESOURCE


def url_topic(url: str, link_type: LinkType) -> str:
    """本地链接中分隔符之后的 topic，非本地链接返回空串"""
    if not is_local(link_type):
        return ""
    pos = topic_delimiter(url)
    return "" if pos == -1 else url[pos + 1:]


def url_without_topic(url: str, file_path: str, link_type: LinkType) -> str:
    """
    去掉 topic 之后的 URL

    以分隔符开头的链接（如 "#section"）指向当前文件，返回 file_path。
    非本地链接原样返回。
    """
    if not is_local(link_type):
        return url
    pos = topic_delimiter(url)
    if pos == -1:
        return url
    if pos == 0:
        return file_path
    return url[:pos]


def url_full_path(
    url: str,
    file_path: str,
    link_type: LinkType,
    pathmod: ModuleType = os.path,
) -> str:
    """
    本地链接目标的绝对路径（不含 topic）

    相对于 file_path 所在目录计算，并规范化 "." 和 ".."。
    只做路径运算，不检查目标是否存在；路径模块抛出的异常直接向上传递。
    非本地链接原样返回。
    """
    if not is_local(link_type):
        return url
    if topic_delimiter(url) == 0:
        destination = file_path
    else:
        destination = pathmod.join(
            pathmod.dirname(file_path),
            url_without_topic(url, file_path, link_type),
        )
    return pathmod.abspath(destination)


@dataclass(frozen=True)
class Hyperlink:
    """
    Markdown 文档中的一个超链接

    link_type 在构造时计算一次，之后所有派生属性都基于它。

    Attributes:
        location: 链接所在的文件和位置
        url: 原始链接目标文本
        link_type: 链接类型
        pathmod: 解析路径所用的路径模块，不参与比较
    """
    location: Location
    url: str
    link_type: LinkType
    pathmod: ModuleType = field(default=os.path, compare=False, repr=False)

    @classmethod
    def create(
        cls,
        file_path: str,
        line: int,
        column: int,
        url: str,
        pathmod: ModuleType = os.path,
    ) -> "Hyperlink":
        """从文件路径、位置和原始 URL 构造超链接并完成分类"""
        url = url or ""
        return cls(
            location=Location(file_path=file_path, line=line, column=column),
            url=url,
            link_type=classify(url, pathmod),
            pathmod=pathmod,
        )

    @property
    def file_path(self) -> str:
        return self.location.file_path

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def is_local(self) -> bool:
        return is_local(self.link_type)

    @property
    def is_web(self) -> bool:
        return is_web(self.link_type)

    @property
    def url_topic(self) -> str:
        return url_topic(self.url, self.link_type)

    @property
    def url_without_topic(self) -> str:
        return url_without_topic(self.url, self.file_path, self.link_type)

    @property
    def url_full_path(self) -> str:
        return url_full_path(self.url, self.file_path, self.link_type, self.pathmod)

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column} {self.url}"
