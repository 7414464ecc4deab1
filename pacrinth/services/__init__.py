"""
Pacrinth 服务层

包含业务逻辑服务：API 客户端、版本匹配、归档元数据提取、slug 解析、依赖处理、冲突处理。
"""

from pacrinth.services.api_client import ModrinthClient, create_session
from pacrinth.services.version_matcher import VersionMatcher
from pacrinth.services.archive_inspector import ArchiveInspector
from pacrinth.services.slug_resolver import SlugResolver
from pacrinth.services.dependency_resolver import DependencyResolver
from pacrinth.services.conflict import ConflictDisambiguator

__all__ = [
    "ModrinthClient",
    "create_session",
    "VersionMatcher",
    "ArchiveInspector",
    "SlugResolver",
    "DependencyResolver",
    "ConflictDisambiguator",
]
