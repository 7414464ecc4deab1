"""
版本匹配服务

按注册表返回顺序（最新在前）选择第一个同时满足游戏版本和加载器过滤条件的版本，
不做语义化版本比较。
"""

from typing import Iterable

from pacrinth.models import FileInfo, VersionInfo
from pacrinth.exceptions import NoMatchingVersionError


class VersionMatcher:
    """版本匹配器"""

    def matches(
        self,
        version: VersionInfo,
        game_version: str = "",
        loader: str = "",
    ) -> bool:
        """
        检查版本是否满足过滤条件

        Args:
            version: 要检查的版本
            game_version: 目标游戏版本，空字符串表示不过滤（精确匹配）
            loader: 目标加载器，空字符串表示不过滤（大小写不敏感）
        """
        return version.supports_game_version(game_version) and version.supports_loader(
            loader
        )

    def select(
        self,
        versions: Iterable[VersionInfo],
        game_version: str = "",
        loader: str = "",
    ) -> VersionInfo:
        """
        返回第一个匹配的版本

        Raises:
            NoMatchingVersionError: 没有版本满足条件
        """
        for version in versions:
            if self.matches(version, game_version, loader):
                return version
        raise NoMatchingVersionError(
            "没有找到匹配的版本",
            context={"game_version": game_version, "loader": loader},
        )

    def primary_file(self, version: VersionInfo) -> FileInfo:
        """主文件为文件列表的第一个"""
        if not version.files:
            raise NoMatchingVersionError(
                f"版本 {version.version_number or version.id} 没有可下载的文件",
                context={"version": version.id},
            )
        return version.files[0]
