"""
Core Layer - 核心层

包含超链接模型、Markdown 解析器、文档树扫描和验证器。
"""

from doclinkchecker.core.hyperlink import (
    Hyperlink,
    LinkType,
    Location,
    classify,
    is_local,
    is_web,
    topic_delimiter,
    url_topic,
    url_without_topic,
    url_full_path,
)
from doclinkchecker.core.parser import (
    parse_markdown,
    parse_markdown_file,
    generate_heading_id,
    Heading,
    MarkdownDocument,
)
from doclinkchecker.core.walker import (
    scan_documentation,
    DocumentationTree,
    DEFAULT_IGNORE_PATTERNS,
)
from doclinkchecker.core.validator import (
    Validator,
    Issue,
    ValidationResult,
    collect_links,
)

__all__ = [
    # hyperlink
    "Hyperlink",
    "LinkType",
    "Location",
    "classify",
    "is_local",
    "is_web",
    "topic_delimiter",
    "url_topic",
    "url_without_topic",
    "url_full_path",
    # parser
    "parse_markdown",
    "parse_markdown_file",
    "generate_heading_id",
    "Heading",
    "MarkdownDocument",
    # walker
    "scan_documentation",
    "DocumentationTree",
    "DEFAULT_IGNORE_PATTERNS",
    # validator
    "Validator",
    "Issue",
    "ValidationResult",
    "collect_links",
]
