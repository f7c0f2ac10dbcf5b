"""翻译服务适配器。"""

from .base import BaseEngineConfig, BaseTranslationEngine
from .bulk import BulkEngine, BulkEngineConfig
from .free import FreeEngine, FreeEngineConfig
from .signed import SignedEngine, SignedEngineConfig

__all__ = [
    "BaseEngineConfig",
    "BaseTranslationEngine",
    "BulkEngine",
    "BulkEngineConfig",
    "FreeEngine",
    "FreeEngineConfig",
    "SignedEngine",
    "SignedEngineConfig",
]
