"""
API 数据模型

定义 API 相关的数据类，包括项目信息、版本信息等。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List
from urllib.parse import urlparse

from pacrinth.exceptions import DecodeError


class DependencyType(Enum):
    """依赖类型"""

    REQUIRED = "required"
    OPTIONAL = "optional"
    INCOMPATIBLE = "incompatible"
    EMBEDDED = "embedded"


@dataclass(frozen=True)
class ProjectInfo:
    """
    项目信息。
    """

    id: str
    slug: str
    project_type: str
    title: str = ""

    @classmethod
    def from_modrinth(cls, data: Any) -> "ProjectInfo":
        """将 Modrinth `/project/{slug}` 响应转换为 ProjectInfo"""
        if not isinstance(data, dict):
            raise DecodeError("项目信息不是 JSON 对象")
        project_type = data.get("project_type", "")
        if not isinstance(project_type, str):
            raise DecodeError("project_type 字段类型错误")
        slug = data.get("slug") or ""
        if not isinstance(slug, str):
            raise DecodeError("slug 字段类型错误")
        return cls(
            id=str(data.get("id") or ""),
            slug=slug,
            project_type=project_type.lower(),
            title=str(data.get("title") or ""),
        )


@dataclass(frozen=True)
class FileInfo:
    """文件信息"""

    url: str

    @property
    def filename(self) -> str:
        """URL 路径最后一段，原样作为保存的文件名"""
        return urlparse(self.url).path.rsplit("/", 1)[-1]


@dataclass(frozen=True)
class DependencyInfo:
    """依赖信息"""

    project_id: str
    dependency_type: DependencyType

    @property
    def required(self) -> bool:
        return self.dependency_type is DependencyType.REQUIRED


@dataclass(frozen=True)
class VersionInfo:
    """
    版本信息。

    files 的第一个元素视为主文件。
    """

    id: str
    version_number: str
    game_versions: List[str] = field(default_factory=list)
    loaders: List[str] = field(default_factory=list)
    dependencies: List[DependencyInfo] = field(default_factory=list)
    files: List[FileInfo] = field(default_factory=list)

    def supports_game_version(self, game_version: str) -> bool:
        """精确匹配游戏版本，空值视为不过滤"""
        return not game_version or game_version in self.game_versions

    def supports_loader(self, loader: str) -> bool:
        """加载器大小写不敏感匹配，空值视为不过滤"""
        if not loader:
            return True
        loader = loader.lower()
        return any(item.lower() == loader for item in self.loaders)

    @property
    def required_dependencies(self) -> List[DependencyInfo]:
        return [dep for dep in self.dependencies if dep.required and dep.project_id]

    @classmethod
    def from_modrinth(cls, data: Any) -> "VersionInfo":
        """
        将 Modrinth API 返回的版本信息转换为 VersionInfo 对象。

        Raises:
            DecodeError: 字段缺失或类型不符
        """
        if not isinstance(data, dict):
            raise DecodeError("版本信息不是 JSON 对象")

        try:
            files = [FileInfo(url=str(file["url"])) for file in data.get("files") or []]

            dependencies = []
            for dep in data.get("dependencies") or []:
                dependencies.append(
                    DependencyInfo(
                        project_id=dep.get("project_id") or "",
                        dependency_type=DependencyType(
                            dep.get("dependency_type", "required")
                        ),
                    )
                )

            game_versions = [str(v) for v in data.get("game_versions") or []]
            loaders = [str(loader) for loader in data.get("loaders") or []]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise DecodeError(
                f"无法解析版本信息: {e}", context={"version": data.get("id")}
            ) from e

        return cls(
            id=str(data.get("id") or ""),
            version_number=str(data.get("version_number") or ""),
            game_versions=game_versions,
            loaders=loaders,
            dependencies=dependencies,
            files=files,
        )
