"""
Slug 解析服务

依赖标识（模组 ID、插件名等）与 Modrinth slug 的命名习惯经常不同，
依次尝试固定顺序的命名变体，返回第一个在注册表中存在的项目。
"""

from typing import List

from loguru import logger

from pacrinth.services.api_client import ModrinthClient
from pacrinth.exceptions import APIError


class SlugResolver:
    """Slug 解析器"""

    def __init__(self, client: ModrinthClient):
        self.client = client

    @staticmethod
    def variants(raw: str) -> List[str]:
        """按尝试顺序生成命名变体（去重）"""
        candidates = [
            raw,
            f"{raw}-api",
            f"{raw}-mod",
            f"{raw}-mc",
            raw.replace("-", "_"),
            raw.replace("-", ""),
            raw.replace("_", "-"),
            raw.replace("_", ""),
        ]
        result: List[str] = []
        for candidate in candidates:
            if candidate and candidate not in result:
                result.append(candidate)
        return result

    async def resolve(self, raw: str) -> str:
        """
        解析为规范 slug

        Returns:
            小写 slug；所有变体都不存在时返回空字符串
        """
        for variant in self.variants(raw):
            try:
                project = await self.client.get_project(variant)
            except APIError as e:
                logger.debug(f"[解析] 变体 '{variant}' 不存在: {e}")
                continue
            slug = (project.slug or variant).lower()
            if variant != raw:
                logger.debug(f"[解析] '{raw}' -> '{slug}'")
            return slug
        return ""

    async def id_to_slug(self, identifier: str) -> str:
        """
        将项目 ID 转换为 slug

        查询失败或 slug 为空时原样返回输入。
        """
        try:
            project = await self.client.get_project(identifier)
        except APIError as e:
            logger.debug(f"[解析] 无法查询 '{identifier}': {e}")
            return identifier
        return project.slug or identifier
