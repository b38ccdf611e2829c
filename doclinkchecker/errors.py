"""
异常定义

库代码只抛出这里定义的异常，CLI 负责把它们转换为退出码。
"""


class DocLinkCheckerError(Exception):
    """所有 doclinkchecker 异常的基类"""


class ConfigError(DocLinkCheckerError):
    """配置文件无法读取或内容无效"""


class DocumentationRootError(DocLinkCheckerError):
    """文档根目录不存在或不是目录"""
