"""
API 客户端

Modrinth v2 API 的薄封装：获取项目信息和版本列表。
不做重试，任何失败都以异常形式立即交给调用方。
"""

import asyncio
from typing import Any, List, Optional
from urllib.parse import quote

import aiohttp
from loguru import logger

from pacrinth.models import PacrinthConfig, ProjectInfo, VersionInfo
from pacrinth.models.config import DEFAULT_USER_AGENT, MODRINTH_BASE_URL
from pacrinth.exceptions import (
    APIError,
    APINotFoundError,
    DecodeError,
    TransportError,
)


_INVALID_SLUG_CHARS = set("/?#\\")


def build_timeout(config: PacrinthConfig) -> aiohttp.ClientTimeout:
    """
    统一的超时策略

    不限制总时长（大文件下载可能很慢），但连接和两次读之间的间隔都有上限，
    卡死的连接会以 TransportError 结束而不是永远阻塞。
    """
    return aiohttp.ClientTimeout(
        total=None,
        sock_connect=config.connect_timeout,
        sock_read=config.read_timeout,
    )


def create_session(config: PacrinthConfig) -> aiohttp.ClientSession:
    """创建 API 请求和文件下载共用的 session"""
    return aiohttp.ClientSession(
        timeout=build_timeout(config),
        headers={"User-Agent": config.user_agent},
    )


def is_valid_slug(slug: str) -> bool:
    return bool(slug and slug.strip() and not (_INVALID_SLUG_CHARS & set(slug)))


class ModrinthClient:
    """Modrinth API 客户端"""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        base_url: str = MODRINTH_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self._session = session
        self._owned_session = session is None
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent}
            )
            self._owned_session = True
        return self._session

    async def _request(self, endpoint: str) -> Any:
        """发送 API 请求"""
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"[API] GET {url}")
        try:
            async with self.session.get(url) as response:
                if response.status != 200:
                    raise APINotFoundError(
                        f"API 请求失败 (状态码: {response.status})",
                        status=response.status,
                        url=url,
                    )
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise DecodeError(f"无法解析 API 响应: {e}", url=url) from e
        except APIError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"网络请求失败: {e!r}", url=url) from e

    def _project_endpoint(self, slug: str) -> str:
        if not is_valid_slug(slug):
            raise APINotFoundError(f"非法的项目标识: {slug!r}")
        return f"/project/{quote(slug, safe='')}"

    async def get_project(self, slug: str) -> ProjectInfo:
        """获取项目信息"""
        response = await self._request(self._project_endpoint(slug))
        return ProjectInfo.from_modrinth(response)

    async def get_versions(self, slug: str) -> List[VersionInfo]:
        """
        获取项目的全部版本

        Returns:
            按注册表顺序（最新在前）排列的版本列表
        """
        response = await self._request(f"{self._project_endpoint(slug)}/version")
        if not isinstance(response, list):
            raise DecodeError("版本列表不是 JSON 数组", context={"project": slug})
        return [VersionInfo.from_modrinth(item) for item in response]

    async def project_exists(self, slug: str) -> bool:
        """项目是否存在（元数据请求成功即视为存在）"""
        try:
            await self.get_project(slug)
        except APIError:
            return False
        return True

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
