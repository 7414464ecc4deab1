"""
配置模型

定义下载分类、运行配置以及默认忽略的依赖列表。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from pacrinth.exceptions import ConfigError


MODRINTH_BASE_URL = "https://api.modrinth.com/v2"

DEFAULT_USER_AGENT = "pacrinth/0.1.0 (+https://github.com/pacrinth/pacrinth)"

# 加载器运行时、游戏本体以及平台 API 分片，永远不作为可下载依赖
DEFAULT_IGNORED_DEPENDENCIES: FrozenSet[str] = frozenset(
    {
        "fabricloader",
        "quilt-loader",
        "quilt_loader",
        "minecraft",
        "java",
        "forge",
        "neoforge",
        "fabric-renderer-api-v1",
        "fabric-rendering-fluids-v1",
        "fabric-resource-loader-v0",
        "fabric-block-view-api-v2",
    }
)


class Category(Enum):
    """下载分类，值即游戏目录下的子目录名"""

    MODS = "mods"
    RESOURCEPACKS = "resourcepacks"
    SHADERS = "shaders"
    DATAPACKS = "datapacks"
    MODPACKS = "modpacks"
    PLUGINS = "plugins"


class ProjectType(Enum):
    """Modrinth 项目类型"""

    MOD = "mod"
    MODPACK = "modpack"
    RESOURCEPACK = "resourcepack"
    SHADER = "shader"
    DATAPACK = "datapack"
    PLUGIN = "plugin"


@dataclass
class PacrinthConfig:
    """运行配置"""

    game_dir: Optional[str] = None
    api_base_url: str = MODRINTH_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    ignored_dependencies: FrozenSet[str] = field(
        default_factory=lambda: DEFAULT_IGNORED_DEPENDENCIES
    )
    include_soft_dependencies: bool = True
    connect_timeout: float = 10.0
    read_timeout: float = 60.0
    debug: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PacrinthConfig":
        """从字典（配置文件内容）创建配置"""
        data = dict(data or {})
        known = {
            "game_dir",
            "api_base_url",
            "user_agent",
            "ignored_dependencies",
            "extra_ignored_dependencies",
            "include_soft_dependencies",
            "connect_timeout",
            "read_timeout",
            "debug",
        }
        unknown = set(data) - known
        if unknown:
            raise ConfigError(
                f"未知的配置项: {', '.join(sorted(unknown))}",
                context={"keys": sorted(unknown)},
            )

        ignored = DEFAULT_IGNORED_DEPENDENCIES
        if "ignored_dependencies" in data:
            ignored = frozenset(
                _as_str_list(data["ignored_dependencies"], "ignored_dependencies")
            )
        extra = _as_str_list(
            data.get("extra_ignored_dependencies", []), "extra_ignored_dependencies"
        )
        ignored = frozenset(dep.lower() for dep in ignored | set(extra))

        try:
            connect_timeout = float(data.get("connect_timeout", 10.0))
            read_timeout = float(data.get("read_timeout", 60.0))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"超时配置必须为数字: {e}")
        if connect_timeout <= 0 or read_timeout <= 0:
            raise ConfigError("超时配置必须大于 0")

        return cls(
            game_dir=data.get("game_dir"),
            api_base_url=str(data.get("api_base_url", MODRINTH_BASE_URL)).rstrip("/"),
            user_agent=str(data.get("user_agent", DEFAULT_USER_AGENT)),
            ignored_dependencies=ignored,
            include_soft_dependencies=bool(data.get("include_soft_dependencies", True)),
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
            debug=bool(data.get("debug", False)),
        )


def _as_str_list(value: Any, key: str) -> list:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple, set, frozenset)):
        raise ConfigError(f"{key} 必须为字符串列表")
    return [str(item) for item in value]
