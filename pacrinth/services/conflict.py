"""
分类冲突处理

同一个参数既可能是模组也可能是整合包（或资源包/数据包）时，
根据注册表声明的项目类型决定是否需要询问用户。
"""

from typing import Callable, Optional, Sequence

import click
from loguru import logger

from pacrinth.models import ProjectType
from pacrinth.services.api_client import ModrinthClient
from pacrinth.exceptions import APIError


MOD_OR_MODPACK = (ProjectType.MOD.value, ProjectType.MODPACK.value)
RESOURCEPACK_OR_DATAPACK = (ProjectType.RESOURCEPACK.value, ProjectType.DATAPACK.value)


def _click_prompt(question: str, choices: Sequence[str]) -> str:
    return click.prompt(
        question,
        type=click.Choice(list(choices), case_sensitive=False),
        default=choices[0],
        show_choices=True,
    )


class ConflictDisambiguator:
    """分类冲突处理器"""

    def __init__(
        self,
        client: ModrinthClient,
        prompt: Optional[Callable[[str, Sequence[str]], str]] = None,
    ):
        self.client = client
        self.prompt = prompt or _click_prompt

    async def needs_prompt(self, slug: str, interpretations: Sequence[str]) -> bool:
        """
        项目类型既不是任何一种候选解释时才需要询问

        查询失败视为没有冲突。
        """
        try:
            project = await self.client.get_project(slug)
        except APIError as e:
            logger.debug(f"[冲突] 无法查询 '{slug}' 的项目类型: {e}")
            return False
        return project.project_type not in {item.lower() for item in interpretations}

    def choose(self, slug: str, interpretations: Sequence[str]) -> str:
        """询问用户选择一种解释"""
        question = (
            f"'{slug}' 存在分类冲突，请选择 ({'/'.join(interpretations)})"
        )
        answer = self.prompt(question, interpretations).strip().lower()
        if answer not in interpretations:
            return interpretations[0]
        return answer

    async def resolve(self, slug: str, interpretations: Sequence[str]) -> str:
        """返回最终采用的分类解释，默认第一种"""
        if await self.needs_prompt(slug, interpretations):
            return self.choose(slug, interpretations)
        return interpretations[0]
