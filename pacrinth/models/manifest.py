"""
归档内嵌元数据模型

fabric.mod.json / quilt.mod.json、mods.toml、plugin.yml 三种格式的类型化表示。
只保留依赖解析需要的字段。
"""

from dataclasses import dataclass, field
from typing import Any, List

from pacrinth.exceptions import DecodeError


@dataclass
class FabricModManifest:
    """fabric.mod.json / quilt.mod.json"""

    depends: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "FabricModManifest":
        if not isinstance(data, dict):
            raise DecodeError("mod.json 顶层不是对象")

        depends: List[str] = []
        raw = data.get("depends")
        if raw is not None:
            if not isinstance(raw, dict):
                raise DecodeError("depends 必须为对象")
            depends.extend(str(key) for key in raw)

        # Quilt 把依赖放在 quilt_loader.depends，元素可以是字符串或 {id: ...}
        quilt_loader = data.get("quilt_loader")
        if isinstance(quilt_loader, dict):
            for item in quilt_loader.get("depends") or []:
                if isinstance(item, str):
                    depends.append(item)
                elif isinstance(item, dict) and isinstance(item.get("id"), str):
                    depends.append(item["id"])

        return cls(depends=depends)


@dataclass
class ForgeModsToml:
    """META-INF/mods.toml / META-INF/neoforge.mods.toml"""

    dependencies: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ForgeModsToml":
        if not isinstance(data, dict):
            raise DecodeError("mods.toml 顶层不是表")

        dependencies: List[str] = []
        mods = data.get("mods", [])
        if not isinstance(mods, list):
            raise DecodeError("mods 必须为表数组")
        for mod in mods:
            if not isinstance(mod, dict):
                continue
            for dep in mod.get("dependencies") or []:
                if isinstance(dep, dict) and isinstance(dep.get("modId"), str):
                    dependencies.append(dep["modId"])

        # 常见写法: [[dependencies.<modid>]]
        top_level = data.get("dependencies")
        if isinstance(top_level, dict):
            for entries in top_level.values():
                if not isinstance(entries, list):
                    continue
                for dep in entries:
                    if isinstance(dep, dict) and isinstance(dep.get("modId"), str):
                        dependencies.append(dep["modId"])

        return cls(dependencies=dependencies)


@dataclass
class PluginDescriptor:
    """plugin.yml（Bukkit/Spigot/Paper）"""

    depend: List[str] = field(default_factory=list)
    softdepend: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "PluginDescriptor":
        if not isinstance(data, dict):
            raise DecodeError("plugin.yml 顶层不是映射")
        return cls(
            depend=_string_or_list(data.get("depend")),
            softdepend=_string_or_list(data.get("softdepend")),
        )


def _string_or_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, list):
        return [str(item) for item in value if item is not None]
    if isinstance(value, str):
        return [value]
    raise DecodeError(f"依赖字段类型错误: {type(value).__name__}")
