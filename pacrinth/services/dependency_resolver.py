"""
依赖处理服务

递归下载项目及其必需依赖。依赖来自两处：API 声明的 required 依赖，
以及下载后归档内嵌清单中的依赖。去重和递归终止都依赖解析上下文中的 visited。
"""

from pathlib import Path
from typing import List, Optional, Tuple

from loguru import logger

from pacrinth.models import (
    Category,
    DependencyToken,
    ResolutionContext,
    VersionInfo,
)
from pacrinth.paths import StorageLocator
from pacrinth.download import DownloadManager
from pacrinth.services.api_client import ModrinthClient
from pacrinth.services.archive_inspector import ArchiveInspector
from pacrinth.services.slug_resolver import SlugResolver
from pacrinth.services.version_matcher import VersionMatcher
from pacrinth.exceptions import PacrinthError, UnresolvedDependencyError


class DependencyResolver:
    """依赖解析器"""

    def __init__(
        self,
        client: ModrinthClient,
        downloader: DownloadManager,
        storage: StorageLocator,
        context: Optional[ResolutionContext] = None,
        matcher: Optional[VersionMatcher] = None,
        slug_resolver: Optional[SlugResolver] = None,
        inspector: Optional[ArchiveInspector] = None,
    ):
        self.client = client
        self.downloader = downloader
        self.storage = storage
        self.context = context or ResolutionContext()
        self.matcher = matcher or VersionMatcher()
        self.slug_resolver = slug_resolver or SlugResolver(client)
        self.inspector = inspector or ArchiveInspector()

    async def resolve_and_download(
        self,
        identifier: str,
        game_version: str = "",
        loader: str = "",
        category: Category = Category.MODS,
    ) -> Optional[Path]:
        """
        下载项目并递归处理其依赖

        Args:
            identifier: 项目 slug 或 ID
            game_version: 游戏版本过滤，空字符串表示不过滤
            loader: 加载器过滤，空字符串表示不过滤
            category: 存放目录分类，依赖沿用同一分类

        Returns:
            顶层项目的文件路径；已处理过或下载失败时返回 None
        """
        slug = await self._claim(identifier)
        if slug is None:
            return None
        return await self._process(slug, game_version, loader, category)

    async def download_project(
        self,
        identifier: str,
        game_version: str = "",
        loader: str = "",
        category: Category = Category.MODS,
    ) -> Optional[Path]:
        """只下载项目本身，不处理依赖（整合包、光影、资源包、数据包）"""
        slug = await self._claim(identifier)
        if slug is None:
            return None
        result = await self._fetch(slug, game_version, loader, category)
        return result[1] if result else None

    async def _claim(self, identifier: str) -> Optional[str]:
        """规范化为小写 slug 并登记到 visited，已处理过则返回 None"""
        alias = identifier.lower()
        if self.context.is_visited(alias):
            logger.debug(f"[跳过] '{identifier}' 已处理")
            return None

        slug = (await self.slug_resolver.id_to_slug(identifier)).lower()
        if self.context.is_visited(slug):
            self.context.mark_visited(alias)
            logger.debug(f"[跳过] '{slug}' 已处理")
            return None

        # 在下载之前登记，下载失败也不会再次进入
        self.context.mark_visited(slug, alias)
        return slug

    async def _process(
        self,
        slug: str,
        game_version: str,
        loader: str,
        category: Category,
    ) -> Optional[Path]:
        result = await self._fetch(slug, game_version, loader, category)
        if result is None:
            return None
        version, file_path = result

        tokens = self._collect_tokens(version, file_path, game_version, loader)
        if tokens:
            logger.info(f"'{slug}' 自动处理 {len(tokens)} 个依赖")

        for token in tokens:
            await self._process_token(token, game_version, loader, category)

        return file_path

    async def _process_token(
        self,
        token: DependencyToken,
        game_version: str,
        loader: str,
        category: Category,
    ):
        identifier = token.identifier
        if self.context.is_ignored(identifier):
            logger.debug(f"[依赖] 忽略 '{identifier}'")
            return
        if self.context.is_visited(identifier):
            return

        resolved = await self.slug_resolver.resolve(identifier)
        if not resolved:
            error = UnresolvedDependencyError(
                f"无法解析依赖: {identifier}", context={"token": str(token)}
            )
            logger.warning(f"[依赖] {error.message}")
            self.context.unresolved.append(identifier)
            return

        if self.context.is_visited(resolved):
            self.context.mark_visited(identifier)
            return
        self.context.mark_visited(resolved)
        logger.info(f"[依赖] '{identifier}' -> '{resolved}'")
        await self._process(resolved, game_version, loader, category)

    async def _fetch(
        self,
        slug: str,
        game_version: str,
        loader: str,
        category: Category,
    ) -> Optional[Tuple[VersionInfo, Path]]:
        """选择版本并下载主文件，失败时记录并返回 None"""
        try:
            versions = await self.client.get_versions(slug)
            version = self.matcher.select(versions, game_version, loader)
            primary = self.matcher.primary_file(version)
            file_path = await self.downloader.download_file(
                primary.url, self.storage.folder(category)
            )
        except PacrinthError as e:
            logger.error(f"[错误] 下载 '{slug}' 失败: {e}")
            self.context.failed.append(slug)
            return None

        self.context.downloaded.append(file_path)
        logger.success(f"已下载: {file_path.name}")
        return version, file_path

    def _collect_tokens(
        self,
        version: VersionInfo,
        file_path: Path,
        game_version: str,
        loader: str,
    ) -> List[DependencyToken]:
        """API 依赖在前，归档依赖在后，不去重"""
        api_tokens = [
            DependencyToken(dep.project_id, loader, game_version)
            for dep in version.required_dependencies
        ]
        archive_tokens = self.inspector.extract(str(file_path), game_version, loader)
        return api_tokens + archive_tokens
