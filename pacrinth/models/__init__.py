"""
Pacrinth 数据模型包

包含配置模型、API 模型、归档元数据模型和解析上下文。
"""

from pacrinth.models.config import (
    Category,
    ProjectType,
    PacrinthConfig,
    DEFAULT_IGNORED_DEPENDENCIES,
    MODRINTH_BASE_URL,
)
from pacrinth.models.api import (
    DependencyType,
    ProjectInfo,
    FileInfo,
    DependencyInfo,
    VersionInfo,
)
from pacrinth.models.manifest import (
    FabricModManifest,
    ForgeModsToml,
    PluginDescriptor,
)
from pacrinth.models.resolution import DependencyToken, ResolutionContext

__all__ = [
    # 配置模型
    "Category",
    "ProjectType",
    "PacrinthConfig",
    "DEFAULT_IGNORED_DEPENDENCIES",
    "MODRINTH_BASE_URL",
    # API 模型
    "DependencyType",
    "ProjectInfo",
    "FileInfo",
    "DependencyInfo",
    "VersionInfo",
    # 归档元数据
    "FabricModManifest",
    "ForgeModsToml",
    "PluginDescriptor",
    # 解析
    "DependencyToken",
    "ResolutionContext",
]
