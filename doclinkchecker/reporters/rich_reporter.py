"""
Rich 终端报告器 - 使用 Rich 库输出彩色终端格式
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from doclinkchecker.core.hyperlink import LinkType
from doclinkchecker.core.validator import Issue, ValidationResult


# 链接类型的显示名称和图标
LINK_TYPE_LABELS: dict[LinkType, tuple[str, str]] = {
    LinkType.LOCAL: ("本地文档", "📄"),
    LinkType.RESOURCE: ("附件资源", "🖼"),
    LinkType.WEBPAGE: ("网页", "🌐"),
    LinkType.FTP: ("FTP", "📡"),
    LinkType.MAIL: ("邮件", "✉"),
    LinkType.CROSS_REFERENCE: ("交叉引用", "🔀"),
    LinkType.EMPTY: ("空链接", "∅"),
}

# 最多显示的问题数
MAX_ISSUES_SHOWN = 20


class RichReporter:
    """Rich 终端报告器"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def report(self, result: ValidationResult, target: str) -> None:
        """生成 Rich 格式报告"""
        self.console.print()
        self.console.print("─" * 80, style="dim")
        self.console.print(
            "🔗 DocLinkChecker 链接检查报告 🔗",
            style="bold cyan",
            justify="center",
        )
        self.console.print("─" * 80, style="dim")

        self._print_summary_panel(result, target)
        self._print_link_table(result)

        if result.issues:
            self._print_issues(result.issues)

        self._print_conclusion(result)

    def _print_summary_panel(self, result: ValidationResult, target: str) -> None:
        """打印概要面板"""
        color = "green" if result.errors == 0 else "red"

        content = Text()
        content.append("文件: ", style="bold")
        content.append(f"{result.stats.get('files', 0)}\n")
        content.append("链接: ", style="bold")
        content.append(f"{result.stats.get('links', 0)}\n")
        content.append("错误: ", style="bold")
        content.append(f"{result.errors}\n", style="red" if result.errors else "green")
        content.append("警告: ", style="bold")
        content.append(f"{result.warnings}\n\n", style="yellow" if result.warnings else "green")
        content.append(f"目标: {target}", style="dim")

        self.console.print(Panel(
            content,
            title="[bold]📊 检查概要[/bold]",
            border_style=color,
        ))

    def _print_link_table(self, result: ValidationResult) -> None:
        """按类型打印链接数量"""
        self.console.print()
        self.console.print("[bold]◆ 链接类型[/bold]")
        self.console.print()

        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("类型", style="cyan", width=20)
        table.add_column("数量", justify="right", width=10)

        for link_type, (label, icon) in LINK_TYPE_LABELS.items():
            count = result.stats.get(f"links_{link_type.value}", 0)
            table.add_row(f"{icon} {label}", str(count))

        self.console.print(table)

    def _print_issues(self, issues: list[Issue]) -> None:
        """打印问题详情"""
        self.console.print()
        self.console.print("[bold]◆ 问题详情[/bold]")
        self.console.print()

        # 错误在前，然后按位置排序
        sorted_issues = sorted(
            issues,
            key=lambda x: (0 if x.severity == "error" else 1, x.file_path, x.line, x.column)
        )

        for i, issue in enumerate(sorted_issues[:MAX_ISSUES_SHOWN], 1):
            if issue.severity == "error":
                icon = "❌"
                style = "red"
            else:
                icon = "⚠️"
                style = "yellow"

            location = issue.file_path
            if issue.line:
                location += f":{issue.line}:{issue.column}"

            self.console.print(f"  {i}. [{style}]{icon} {issue.code}[/{style}] {escape(issue.message)}", highlight=False)
            self.console.print(f"     [dim]{escape(location)}[/dim]", highlight=False)
            if issue.suggestion:
                self.console.print(f"     [dim]→ {escape(issue.suggestion)}[/dim]", highlight=False)
            self.console.print()

        if len(issues) > MAX_ISSUES_SHOWN:
            self.console.print(f"  [dim]... 还有 {len(issues) - MAX_ISSUES_SHOWN} 个问题未显示[/dim]")

    def _print_conclusion(self, result: ValidationResult) -> None:
        """打印总结"""
        self.console.print()
        if result.errors == 0 and result.warnings == 0:
            self.console.print(Panel(
                "[bold green]✅ 所有链接均有效[/bold green]",
                border_style="green",
            ))
        elif result.errors == 0:
            self.console.print(Panel(
                f"[bold yellow]通过，但有 {result.warnings} 个警告[/bold yellow]",
                border_style="yellow",
            ))
        else:
            self.console.print(Panel(
                f"发现 [red]{result.errors}[/red] 个错误，[yellow]{result.warnings}[/yellow] 个警告",
                border_style="red",
            ))
        self.console.print()
