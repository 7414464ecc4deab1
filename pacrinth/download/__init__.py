"""
Pacrinth 下载层
"""

from pacrinth.download.manager import DownloadManager, DownloadStats

__all__ = [
    "DownloadManager",
    "DownloadStats",
]
