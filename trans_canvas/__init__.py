"""Trans-Canvas: 设计稿文本的批量本地化助手。

该模块提供处理引擎的协调器、配置，以及可独立使用的格式化与排版查找函数。
"""

__version__ = "0.3.0"

from .config import TransCanvasConfig
from .core.types import DeviceClass, Language, ProviderKind, RunReport, RunState
from .formatter import format_content
from .gate import needs_polishing, needs_translation
from .orchestrator import Orchestrator
from .typography import resolve_font, resolve_style_key

__all__ = [
    "__version__",
    "Orchestrator",
    "TransCanvasConfig",
    "Language",
    "DeviceClass",
    "ProviderKind",
    "RunState",
    "RunReport",
    "format_content",
    "needs_translation",
    "needs_polishing",
    "resolve_style_key",
    "resolve_font",
]
