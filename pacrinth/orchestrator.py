"""
主协调器

解析命令行目标，按分类分发到依赖解析器，汇总运行结果。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence

from loguru import logger

from pacrinth.models import Category, PacrinthConfig, ResolutionContext
from pacrinth.paths import StorageLocator
from pacrinth.download import DownloadManager
from pacrinth.services import (
    ArchiveInspector,
    ConflictDisambiguator,
    DependencyResolver,
    ModrinthClient,
    create_session,
)
from pacrinth.services.conflict import MOD_OR_MODPACK, RESOURCEPACK_OR_DATAPACK


MOD_LOADERS = frozenset({"fabric", "forge", "neoforge", "quilt"})
SHADER_LOADERS = frozenset({"iris", "optifine", "canvas", "vanilla"})
PLUGIN_LOADERS = frozenset({"paper", "spigot", "bukkit", "purpur", "folia"})


class TargetKind(Enum):
    """命令行目标类型"""

    MOD = "mod"
    SHADER = "shader"
    PLUGIN = "plugin"
    PACK = "pack"


@dataclass(frozen=True)
class Target:
    """一个命令行目标"""

    slug: str
    kind: TargetKind
    game_version: str = ""
    loader: str = ""


def parse_target(text: str) -> Target:
    """
    解析 ``slug[:game_version][@loader_or_version]``

    `@` 之后如果是模组加载器、光影加载器或插件平台，视为加载器；
    否则整个目标视为资源包/数据包，`@` 之后是游戏版本。
    """
    text = text.strip().lower()
    head, _, tail = text.partition("@")
    slug, _, game_version = head.partition(":")

    if tail in PLUGIN_LOADERS:
        return Target(slug, TargetKind.PLUGIN, game_version, tail)
    if tail in MOD_LOADERS or tail.startswith(("f", "neo", "quilt")):
        return Target(slug, TargetKind.MOD, game_version, tail)
    if tail in SHADER_LOADERS or tail.startswith("o"):
        return Target(slug, TargetKind.SHADER, game_version, tail)
    return Target(slug, TargetKind.PACK, tail or game_version, "")


class PacrinthOrchestrator:
    """Pacrinth 主协调器"""

    def __init__(
        self,
        config: PacrinthConfig,
        client: Optional[ModrinthClient] = None,
        downloader: Optional[DownloadManager] = None,
        prompt: Optional[Callable[[str, Sequence[str]], str]] = None,
    ):
        self.config = config
        self.context = ResolutionContext(ignored=config.ignored_dependencies)
        self.storage = StorageLocator(config.game_dir)
        self._client = client
        self._downloader = downloader
        self._prompt = prompt

    async def run(self, targets: Iterable[str]) -> bool:
        """
        依次处理所有目标

        Returns:
            没有任何下载失败时返回 True
        """
        session = None
        if self._client is None or self._downloader is None:
            session = create_session(self.config)

        try:
            client = self._client or ModrinthClient(
                session=session,
                base_url=self.config.api_base_url,
                user_agent=self.config.user_agent,
            )
            downloader = self._downloader or DownloadManager(session=session)
            resolver = DependencyResolver(
                client,
                downloader,
                self.storage,
                context=self.context,
                inspector=ArchiveInspector(self.config.include_soft_dependencies),
            )
            disambiguator = ConflictDisambiguator(client, self._prompt)

            logger.info(f"游戏目录: {self.storage.game_dir}")
            for raw in targets:
                target = parse_target(raw)
                if not target.slug:
                    logger.error(f"[错误] 无效的目标: '{raw}'")
                    self.context.failed.append(raw)
                    continue
                await self._process_target(target, resolver, disambiguator)
        finally:
            if session is not None:
                await session.close()

        self._report()
        return not self.context.failed

    async def _process_target(
        self,
        target: Target,
        resolver: DependencyResolver,
        disambiguator: ConflictDisambiguator,
    ):
        logger.info(f"处理 '{target.slug}' ({target.kind.value})")

        if target.kind is TargetKind.MOD:
            choice = await disambiguator.resolve(target.slug, MOD_OR_MODPACK)
            if choice == "modpack":
                await resolver.download_project(
                    target.slug, target.game_version, target.loader, Category.MODPACKS
                )
            else:
                await resolver.resolve_and_download(
                    target.slug, target.game_version, target.loader, Category.MODS
                )
        elif target.kind is TargetKind.SHADER:
            await resolver.download_project(
                target.slug, target.game_version, target.loader, Category.SHADERS
            )
        elif target.kind is TargetKind.PLUGIN:
            await resolver.resolve_and_download(
                target.slug, target.game_version, target.loader, Category.PLUGINS
            )
        else:
            choice = await disambiguator.resolve(target.slug, RESOURCEPACK_OR_DATAPACK)
            category = (
                Category.DATAPACKS if choice == "datapack" else Category.RESOURCEPACKS
            )
            await resolver.download_project(target.slug, target.game_version, "", category)

    def _report(self):
        """输出运行汇总"""
        logger.info(f"共下载 {len(self.context.downloaded)} 个文件")
        if self.context.unresolved:
            logger.warning(
                f"未解析的依赖 ({len(self.context.unresolved)}): "
                f"{', '.join(self.context.unresolved)}"
            )
        if self.context.failed:
            logger.warning(f"下载失败 ({len(self.context.failed)}): {', '.join(self.context.failed)}")

    def get_stats(self) -> dict:
        """获取统计信息"""
        return {
            "downloaded": [str(path) for path in self.context.downloaded],
            "unresolved": list(self.context.unresolved),
            "failed": list(self.context.failed),
        }
