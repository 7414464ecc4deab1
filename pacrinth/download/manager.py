"""
下载管理器

顺序下载单个文件到目标目录，统计下载结果。
不做并发、重试和校验，文件直接写入最终路径。
"""

import asyncio
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Callable, Union

import aiohttp
import aiofiles
from loguru import logger

from pacrinth.models import FileInfo
from pacrinth.exceptions import DownloadError, DownloadNetworkError


@dataclass
class DownloadStats:
    """下载统计"""

    completed: int = 0
    failed: int = 0
    bytes_downloaded: int = 0


class DownloadManager:
    """下载管理器"""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        chunk_size: int = 8192,
        progress_callback: Optional[Callable[[str, float], None]] = None,
    ):
        self.stats = DownloadStats()
        self.chunk_size = chunk_size
        self._session = session
        self._owned_session = session is None
        self._progress_callback = progress_callback

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owned_session = True
        return self._session

    async def download_file(self, url: str, download_dir: Union[str, Path]) -> Path:
        """
        下载单个文件

        文件名取 URL 路径的最后一段。

        Returns:
            保存后的文件路径

        Raises:
            DownloadError: HTTP 状态异常或写入失败
            DownloadNetworkError: 网络错误
        """
        filename = FileInfo(url=url).filename
        if not filename:
            raise DownloadError(f"无法从 URL 推断文件名: {url}", context={"url": url})

        download_dir = Path(download_dir)
        file_path = download_dir / filename

        try:
            os.makedirs(download_dir, exist_ok=True)
        except OSError as e:
            self.stats.failed += 1
            raise DownloadError(
                f"无法创建目录: {download_dir}", context={"error": str(e)}
            ) from e

        logger.info(f"[开始] 下载: {filename}")

        try:
            async with self.session.get(url) as response:
                if response.status != 200:
                    raise DownloadError(
                        f"HTTP {response.status}",
                        context={"url": url, "status": response.status},
                    )

                total_size = int(response.headers.get("Content-Length", 0) or 0)
                if total_size:
                    logger.debug(
                        f"[信息] 文件大小: {total_size / (1024 * 1024):.2f} MB"
                    )

                async with aiofiles.open(file_path, "wb") as f:
                    downloaded = 0
                    last_percent = 0.0

                    async for chunk in response.content.iter_chunked(self.chunk_size):
                        await f.write(chunk)
                        downloaded += len(chunk)
                        self.stats.bytes_downloaded += len(chunk)

                        if total_size > 0:
                            percent = (downloaded / total_size) * 100
                            if percent - last_percent >= 25:
                                if self._progress_callback:
                                    self._progress_callback(filename, percent)
                                logger.debug(f"[进度] {filename}: {percent:.1f}%")
                                last_percent = percent

        except DownloadError:
            self.stats.failed += 1
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.stats.failed += 1
            raise DownloadNetworkError(
                f"下载失败: {filename}", context={"url": url, "error": repr(e)}
            ) from e
        except OSError as e:
            self.stats.failed += 1
            raise DownloadError(
                f"写入文件失败: {file_path}", context={"error": str(e)}
            ) from e

        self.stats.completed += 1
        logger.success(f"[完成] '{filename}' 下载完成")
        return file_path

    def get_stats(self) -> DownloadStats:
        """获取下载统计"""
        return self.stats

    async def close(self):
        """关闭自行创建的 session"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        """异步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """异步上下文管理器出口"""
        await self.close()
