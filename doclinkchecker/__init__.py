"""
doclinkchecker - Markdown 文档链接检查工具

对文档中的每个超链接分类（网页、FTP、邮件、xref、本地文件、附件），
解析本地链接的目标路径和锚点，并验证目标是否存在。
"""

__version__ = "0.1.0"
