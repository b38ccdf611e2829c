"""
核心验证器模块 - 验证文档中的超链接

执行以下验证：
1. 空链接检测
2. 本地链接验证：检查目标文件或目录是否存在
3. 锚点验证：检查 #topic 是否指向目标文档中存在的标题
4. 目录策略：subfolder 策略下链接目标必须位于文档根目录内
5. 孤立附件检测：资源目录中未被任何链接引用的文件

网页、FTP、邮件和 xref 链接只做分类统计，不做网络请求。
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Literal, Optional
from urllib.parse import unquote

from doclinkchecker.config import CheckerConfig
from doclinkchecker.core.hyperlink import Hyperlink, LinkType
from doclinkchecker.core.parser import MarkdownDocument, parse_markdown_file
from doclinkchecker.core.walker import DocumentationTree, is_markdown

logger = logging.getLogger(__name__)


INDEX_FILES = ("README.md", "readme.md", "index.md", "INDEX.md")


@dataclass
class Issue:
    """
    检查问题

    Attributes:
        severity: 严重程度 (error, warning, info)
        code: 问题代码 (如 DEAD_LINK, INVALID_ANCHOR)
        message: 问题描述
        file_path: 相关文件路径
        line: 行号
        column: 列号
        suggestion: 修复建议
    """
    severity: Literal["error", "warning", "info"]
    code: str
    message: str
    file_path: str
    line: int = 0
    column: int = 0
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """
    验证结果

    Attributes:
        issues: 发现的问题列表
        stats: 统计信息
    """
    issues: list[Issue] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)

    @property
    def errors(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "warning")


def collect_links(documents: Iterable[MarkdownDocument]) -> list[Hyperlink]:
    """所有文档中的超链接"""
    return [link for document in documents for link in document.links]


def _link_issue(
    link: Hyperlink,
    severity: Literal["error", "warning", "info"],
    code: str,
    message: str,
    suggestion: Optional[str] = None,
) -> Issue:
    return Issue(
        severity=severity,
        code=code,
        message=message,
        file_path=link.file_path,
        line=link.line,
        column=link.column,
        suggestion=suggestion,
    )


class Validator:
    """验证器"""

    def __init__(self, root: Path, config: Optional[CheckerConfig] = None):
        """
        初始化验证器

        Args:
            root: 文档根目录
            config: 检查器配置，默认使用 CheckerConfig()
        """
        self.root = Path(root).resolve()
        self.config = config or CheckerConfig()
        self._documents: dict[str, Optional[MarkdownDocument]] = {}

    def add_documents(self, documents: Iterable[MarkdownDocument]) -> None:
        """登记已解析的文档，锚点验证时直接使用"""
        for document in documents:
            self._documents[document.file_path] = document

    def _get_document(self, path: str) -> Optional[MarkdownDocument]:
        if path not in self._documents:
            try:
                self._documents[path] = parse_markdown_file(Path(path))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Cannot read {path} for anchor validation: {e}")
                self._documents[path] = None
        return self._documents[path]

    def load_documents(self, paths: Iterable[Path]) -> tuple[list[MarkdownDocument], list[Issue]]:
        """
        解析 Markdown 文件

        Returns:
            (成功解析的文档, 无法读取的文件对应的问题)
        """
        documents: list[MarkdownDocument] = []
        issues: list[Issue] = []

        for path in paths:
            try:
                document = parse_markdown_file(path)
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Failed to read {path}: {e}")
                issues.append(Issue(
                    severity="error",
                    code="UNREADABLE_FILE",
                    message=f"Cannot read markdown file: {e}",
                    file_path=str(path),
                ))
                continue
            documents.append(document)

        self.add_documents(documents)
        return documents, issues

    def validate_link(self, link: Hyperlink) -> list[Issue]:
        """
        验证单个超链接

        Args:
            link: 超链接

        Returns:
            问题列表
        """
        if link.link_type == LinkType.EMPTY:
            return [_link_issue(
                link, "error", "EMPTY_LINK",
                "Link has an empty target",
                suggestion="Add a target or remove the link",
            )]

        if not link.is_local:
            return []

        issues: list[Issue] = []

        if "\\" in link.url:
            issues.append(_link_issue(
                link, "warning", "BACKSLASH_IN_LINK",
                f"Link contains a backslash: {link.url}",
                suggestion="Use forward slashes in links",
            ))

        target = Path(unquote(link.url_full_path))

        if self.config.relative_link_strategy == "subfolder" and not target.is_relative_to(self.root):
            issues.append(_link_issue(
                link, "error", "LINK_OUTSIDE_ROOT",
                f"Link target is outside the documentation root: {link.url}",
                suggestion=f"Keep link targets inside '{self.root}'",
            ))
            return issues

        if not target.exists():
            issues.append(_link_issue(
                link, "error", "DEAD_LINK",
                f"Link target does not exist: {link.url}",
                suggestion=f"Check if '{link.url_without_topic}' exists or fix the path",
            ))
            return issues

        if target.is_dir():
            if not any((target / name).exists() for name in INDEX_FILES):
                issues.append(_link_issue(
                    link, "warning", "FOLDER_WITHOUT_INDEX",
                    f"Linked folder has no README.md or index.md: {link.url}",
                    suggestion="Link to a file inside the folder or add an index page",
                ))
            return issues

        # 只验证 "#" 锚点；"?" 之后是查询字符串，不对应标题
        topic = link.url_topic
        if topic and "#" in link.url and is_markdown(target):
            anchor_issue = self._validate_anchor(link, str(target), topic)
            if anchor_issue:
                issues.append(anchor_issue)

        return issues

    def _validate_anchor(self, link: Hyperlink, target: str, topic: str) -> Optional[Issue]:
        document = self._get_document(target)
        if document is None:
            return None

        if topic.lower() not in {heading_id.lower() for heading_id in document.heading_ids}:
            return _link_issue(
                link, "error", "INVALID_ANCHOR",
                f"Anchor '#{topic}' not found in {link.url_without_topic}",
                suggestion=f"Check available headings in '{link.url_without_topic}'",
            )
        return None

    def validate_documents(self, documents: Iterable[MarkdownDocument]) -> list[Issue]:
        """验证所有文档中的所有链接"""
        documents = list(documents)
        self.add_documents(documents)

        issues: list[Issue] = []
        for link in collect_links(documents):
            issues.extend(self.validate_link(link))
        return issues

    def find_orphaned_resources(
        self,
        documents: Iterable[MarkdownDocument],
        resource_files: Iterable[Path],
    ) -> list[Issue]:
        """
        查找未被引用的附件

        Args:
            documents: 已解析的文档
            resource_files: 资源目录中的文件

        Returns:
            问题列表
        """
        referenced = {
            unquote(link.url_full_path)
            for link in collect_links(documents)
            if link.is_local
        }

        issues: list[Issue] = []
        for resource in resource_files:
            if str(resource) not in referenced:
                issues.append(Issue(
                    severity="warning",
                    code="ORPHANED_RESOURCE",
                    message=f"Resource is not referenced by any document: {resource.relative_to(self.root)}",
                    file_path=str(resource),
                    suggestion="Remove the file or link to it",
                ))
        return issues

    def check_tree(self, tree: DocumentationTree) -> ValidationResult:
        """
        执行完整检查：解析、链接验证、孤立附件检测

        Args:
            tree: scan_documentation 的结果

        Returns:
            ValidationResult 对象
        """
        result = ValidationResult()

        documents, read_issues = self.load_documents(tree.markdown_files)
        result.issues.extend(read_issues)
        result.issues.extend(self.validate_documents(documents))

        if self.config.check_orphaned_resources:
            result.issues.extend(self.find_orphaned_resources(documents, tree.resource_files))

        links = collect_links(documents)
        result.stats["files"] = len(tree.markdown_files)
        result.stats["resources"] = len(tree.resource_files)
        result.stats["links"] = len(links)
        for link_type in LinkType:
            result.stats[f"links_{link_type.value}"] = sum(
                1 for link in links if link.link_type == link_type
            )
        result.stats["total_issues"] = len(result.issues)
        result.stats["errors"] = result.errors
        result.stats["warnings"] = result.warnings

        return result
