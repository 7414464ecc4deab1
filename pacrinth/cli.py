"""
CLI 模块

命令行接口实现。
"""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
import toml
import yaml
from loguru import logger

from pacrinth import __version__
from pacrinth.models import PacrinthConfig
from pacrinth.orchestrator import PacrinthOrchestrator
from pacrinth.exceptions import ConfigParseError, PacrinthError
from pacrinth.logger import setup_logger


USAGE = """Usage:
pacrinth mod@loader
pacrinth mod:version@loader
pacrinth resourcepack@version
pacrinth shader@shaderloader
pacrinth modpack@loader
pacrinth datapack@version
pacrinth plugin@platform"""


def load_config(config_path: Optional[str]) -> dict:
    """加载配置文件，未指定时返回空配置"""
    if not config_path:
        return {}

    path = Path(config_path)
    suffix = path.suffix.lower()

    try:
        if suffix == ".toml":
            data = toml.load(config_path)
        elif suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        elif suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        else:
            raise ConfigParseError(f"不支持的配置文件格式: {suffix}")
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigParseError(
            f"无法解析配置文件 {config_path}: {e}", context={"path": config_path}
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(f"配置文件顶层必须为映射: {config_path}")
    return data


async def run_async(targets: tuple, config: PacrinthConfig) -> bool:
    """异步运行"""
    orchestrator = PacrinthOrchestrator(config)
    return await orchestrator.run(targets)


@click.command()
@click.argument("targets", nargs=-1)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="配置文件（toml/json/yaml）",
)
@click.option("--game-dir", help="游戏目录，默认为当前平台的 .minecraft")
@click.option("--debug", is_flag=True, help="启用调试模式")
@click.version_option(version=__version__)
def main(targets: tuple, config_path: Optional[str], game_dir: Optional[str], debug: bool):
    """Pacrinth - Modrinth 模组及依赖下载工具"""
    if not targets:
        click.echo(USAGE)
        return

    try:
        config = PacrinthConfig.from_dict(load_config(config_path))
    except PacrinthError as e:
        raise click.ClickException(str(e))

    if game_dir:
        config.game_dir = game_dir
    if debug:
        config.debug = True

    setup_logger(level="DEBUG" if config.debug else None)

    try:
        ok = asyncio.run(run_async(targets, config))
    except PacrinthError as e:
        logger.error(f"运行错误: {e}")
        raise click.ClickException(str(e))

    if not ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
