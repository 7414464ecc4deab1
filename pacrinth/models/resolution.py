"""
依赖解析数据模型
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List

from pacrinth.models.config import DEFAULT_IGNORED_DEPENDENCIES


@dataclass(frozen=True)
class DependencyToken:
    """
    统一的依赖标记，字符串形式为 ``<identifier>:<loader>@<game_version>``。

    API 返回的依赖和归档元数据中的依赖都会被转换为此形式。
    """

    identifier: str
    loader: str = ""
    game_version: str = ""

    def __str__(self) -> str:
        return f"{self.identifier}:{self.loader}@{self.game_version}"

    @classmethod
    def parse(cls, text: str) -> "DependencyToken":
        """解析字符串形式的依赖标记"""
        head, _, game_version = text.partition("@")
        identifier, _, loader = head.partition(":")
        return cls(identifier=identifier, loader=loader, game_version=game_version)


@dataclass
class ResolutionContext:
    """
    单次运行的解析上下文。

    visited 以小写 slug 为键，保证每个项目在一次运行中最多处理一次。
    """

    ignored: FrozenSet[str] = DEFAULT_IGNORED_DEPENDENCIES
    visited: Dict[str, bool] = field(default_factory=dict)
    downloaded: List[Path] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    def __post_init__(self):
        self.ignored = frozenset(item.lower() for item in self.ignored)

    def is_visited(self, slug: str) -> bool:
        return self.visited.get(slug.lower(), False)

    def mark_visited(self, *slugs: str):
        for slug in slugs:
            if slug:
                self.visited[slug.lower()] = True

    def is_ignored(self, identifier: str) -> bool:
        return identifier.lower() in self.ignored
