"""
Pacrinth - Modrinth 模组及依赖下载工具
"""

__version__ = "0.1.0"

from pacrinth.models import Category, PacrinthConfig
from pacrinth.orchestrator import PacrinthOrchestrator
from pacrinth.exceptions import PacrinthError

__all__ = [
    "__version__",
    "Category",
    "PacrinthConfig",
    "PacrinthOrchestrator",
    "PacrinthError",
]
