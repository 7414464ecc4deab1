"""
存储位置解析

根据操作系统确定 .minecraft 目录，以及各下载分类对应的子目录。
"""

import os
import sys
from pathlib import Path
from typing import Optional

from pacrinth.models import Category


def default_game_dir() -> Path:
    """当前平台默认的游戏目录"""
    home = Path.home()
    if sys.platform.startswith("win"):
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / ".minecraft"
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "minecraft"
    return home / ".minecraft"


class StorageLocator:
    """存储位置解析器"""

    def __init__(self, game_dir: Optional[str] = None):
        if game_dir is None:
            game_dir = os.environ.get("PACRINTH_GAME_DIR") or None
        self.game_dir = Path(game_dir).expanduser() if game_dir else default_game_dir()

    def folder(self, category: Category) -> Path:
        """分类对应的目录（不会自动创建）"""
        return self.game_dir / category.value
