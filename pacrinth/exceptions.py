"""
Pacrinth 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息和 JSON 序列化。
"""

from typing import Any, Dict, Optional


class PacrinthError(Exception):
    """Pacrinth 基础异常类"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        """获取默认错误代码"""
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(PacrinthError):
    """配置相关错误"""

    def _get_default_code(self) -> str:
        return "E100"


class ConfigParseError(ConfigError):
    """配置解析错误"""

    def _get_default_code(self) -> str:
        return "E101"


class APIError(PacrinthError):
    """API 相关错误"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        status: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message, code, context)
        self.status = status
        if status is not None:
            self.context["status_code"] = status
        if url:
            self.context["url"] = url

    def _get_default_code(self) -> str:
        return "E200"


class APINotFoundError(APIError):
    """项目或版本不存在（包括非成功状态码与非法 slug）"""

    def _get_default_code(self) -> str:
        return "E404"


class TransportError(APIError):
    """网络层错误（连接失败、超时等）"""

    def _get_default_code(self) -> str:
        return "E201"


class DecodeError(APIError):
    """响应或归档元数据格式错误"""

    def _get_default_code(self) -> str:
        return "E202"


class DownloadError(PacrinthError):
    """下载相关错误"""

    def _get_default_code(self) -> str:
        return "E300"


class DownloadNetworkError(DownloadError):
    """下载网络错误"""

    def _get_default_code(self) -> str:
        return "E301"


class ResolutionError(PacrinthError):
    """依赖解析相关错误"""

    def _get_default_code(self) -> str:
        return "E600"


class NoMatchingVersionError(ResolutionError):
    """没有符合游戏版本/加载器过滤条件的版本"""

    def _get_default_code(self) -> str:
        return "E601"


class UnresolvedDependencyError(ResolutionError):
    """所有命名变体都无法在注册表中找到"""

    def _get_default_code(self) -> str:
        return "E602"


__all__ = [
    # 基础异常
    "PacrinthError",
    # 配置异常
    "ConfigError",
    "ConfigParseError",
    # API 异常
    "APIError",
    "APINotFoundError",
    "TransportError",
    "DecodeError",
    # 下载异常
    "DownloadError",
    "DownloadNetworkError",
    # 解析异常
    "ResolutionError",
    "NoMatchingVersionError",
    "UnresolvedDependencyError",
]
