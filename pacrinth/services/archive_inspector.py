"""
归档元数据提取服务

打开下载好的 jar/zip，读取内嵌的加载器清单文件，找出 API 没有声明的依赖。
任何一种格式解析失败只会让该格式不产出依赖，永远不会向调用方抛出异常。
"""

import json
import os
import zipfile
from typing import Callable, Dict, List, Tuple

import toml
import yaml
from loguru import logger

from pacrinth.models import (
    DependencyToken,
    FabricModManifest,
    ForgeModsToml,
    PluginDescriptor,
)
from pacrinth.exceptions import DecodeError


FABRIC_MANIFESTS = ("fabric.mod.json", "quilt.mod.json")
FORGE_MANIFESTS = ("META-INF/mods.toml", "META-INF/neoforge.mods.toml")
PLUGIN_DESCRIPTOR = "plugin.yml"


class ArchiveInspector:
    """归档元数据提取器"""

    def __init__(self, include_soft_dependencies: bool = True):
        self.include_soft_dependencies = include_soft_dependencies

    def extract(
        self,
        archive_path: str,
        game_version: str = "",
        loader: str = "",
    ) -> List[DependencyToken]:
        """
        提取归档中声明的依赖

        Args:
            archive_path: 归档路径
            game_version: 写入依赖标记的游戏版本（继承自父项目）
            loader: 写入依赖标记的加载器（继承自父项目）

        Returns:
            依赖标记列表，按清单顺序排列
        """
        try:
            archive = zipfile.ZipFile(archive_path)
        except (zipfile.BadZipFile, OSError) as e:
            logger.debug(f"[归档] 无法打开 {os.path.basename(str(archive_path))}: {e}")
            return []

        identifiers: List[str] = []
        with archive:
            entries = {info.filename.lower(): info for info in archive.infolist()}
            for name, parser in self._parsers():
                info = entries.get(name.lower())
                if info is None:
                    continue
                try:
                    identifiers.extend(parser(archive.read(info)))
                except (
                    DecodeError,
                    ValueError,
                    yaml.YAMLError,
                    zipfile.BadZipFile,
                    OSError,
                    RuntimeError,
                ) as e:
                    logger.debug(f"[归档] 解析 {name} 失败，忽略: {e}")

        return [
            DependencyToken(identifier=identifier, loader=loader, game_version=game_version)
            for identifier in identifiers
            if identifier
        ]

    def _parsers(self) -> List[Tuple[str, Callable[[bytes], List[str]]]]:
        parsers: List[Tuple[str, Callable[[bytes], List[str]]]] = []
        for name in FABRIC_MANIFESTS:
            parsers.append((name, self._parse_mod_json))
        for name in FORGE_MANIFESTS:
            parsers.append((name, self._parse_mods_toml))
        parsers.append((PLUGIN_DESCRIPTOR, self._parse_plugin_yml))
        return parsers

    @staticmethod
    def _parse_mod_json(content: bytes) -> List[str]:
        data = json.loads(content.decode("utf-8-sig"))
        return FabricModManifest.from_dict(data).depends

    @staticmethod
    def _parse_mods_toml(content: bytes) -> List[str]:
        data: Dict = toml.loads(content.decode("utf-8-sig"))
        return ForgeModsToml.from_dict(data).dependencies

    def _parse_plugin_yml(self, content: bytes) -> List[str]:
        descriptor = PluginDescriptor.from_dict(yaml.safe_load(content))
        if self.include_soft_dependencies:
            return descriptor.depend + descriptor.softdepend
        return list(descriptor.depend)
