# trans_canvas/engine_registry.py
"""本模块负责根据 `ProviderKind` 构造对应的翻译引擎实例。"""

from typing import Any, assert_never

import httpx
import structlog

from trans_canvas.bridge import MessageBridge
from trans_canvas.config import TransCanvasConfig
from trans_canvas.core.types import ProviderKind
from trans_canvas.engines.base import BaseTranslationEngine
from trans_canvas.engines.bulk import BulkEngine
from trans_canvas.engines.free import FreeEngine
from trans_canvas.engines.signed import SignedEngine

log = structlog.get_logger(__name__)


def create_engine(
    kind: ProviderKind,
    config: TransCanvasConfig,
    *,
    bridge: MessageBridge | None = None,
    client: httpx.AsyncClient | None = None,
) -> BaseTranslationEngine[Any]:
    """
    为一次运行构造一个新的引擎实例。

    Raises:
        ConfigurationError: 引擎缺少必需的凭据或协作方。

    """
    engine: BaseTranslationEngine[Any]
    if kind is ProviderKind.BULK:
        engine = BulkEngine(config.bulk, client=client)
    elif kind is ProviderKind.FREE:
        engine = FreeEngine(config.free, client=client)
    elif kind is ProviderKind.SIGNED:
        engine = SignedEngine(config.signed, bridge=bridge)
    else:
        assert_never(kind)
    log.debug("已创建翻译引擎。", kind=kind.value, engine=engine.name)
    return engine
