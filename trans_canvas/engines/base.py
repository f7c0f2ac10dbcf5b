# trans_canvas/engines/base.py
"""
本模块定义了所有翻译服务适配器必须继承的抽象基类（ABC）。

引擎本身不做限速：所有调用都经由调用方传入的 `Dispatcher` 发出，
以保证同一次运行内的全部请求共享一个最小间隔。
"""

import asyncio
from abc import ABC
from typing import Generic, TypeVar

import httpx
import structlog
from pydantic import BaseModel, Field

from trans_canvas.core.exceptions import TransportError
from trans_canvas.core.types import (
    EngineBatchItemResult,
    EngineError,
    EngineSuccess,
    Language,
    ProviderKind,
)
from trans_canvas.dispatcher import Dispatcher

_ConfigType = TypeVar("_ConfigType", bound="BaseEngineConfig")

logger = structlog.get_logger(__name__)


class BaseEngineConfig(BaseModel):
    """所有引擎配置模型的基类，提供通用的 HTTP 超时选项。"""

    timeout_total: float = Field(default=10.0, gt=0)
    timeout_connect: float = Field(default=5.0, gt=0)


class BaseTranslationEngine(ABC, Generic[_ConfigType]):
    """
    翻译服务适配器的纯异步抽象基类。

    支持批量的引擎实现 `atranslate_batch`，整批文本只发出一次调用；
    逐条引擎实现 `atranslate_one`，每条文本各自发出一次调用。
    """

    CONFIG_MODEL: type[_ConfigType]
    KIND: ProviderKind
    VERSION: str = "1.0.0"
    SUPPORTS_BATCH: bool = False

    def __init__(self, config: _ConfigType):
        self.config = config
        self.initialized: bool = False

    @property
    def name(self) -> str:
        """从类名自动推断引擎的名称。"""
        return self.__class__.__name__.replace("Engine", "").lower()

    async def initialize(self) -> None:
        """引擎的异步初始化钩子。"""
        self.initialized = True

    async def close(self) -> None:
        """引擎的异步关闭钩子，用于安全释放资源。"""
        self.initialized = False

    async def atranslate_batch(
        self, texts: list[str], target_lang: Language, source_lang: Language
    ) -> list[str]:
        """[批量引擎实现] 一次调用翻译整批文本，返回与输入等长的译文列表。"""
        raise NotImplementedError(f"引擎 '{self.name}' 不支持批量翻译。")

    async def atranslate_one(
        self, text: str, target_lang: Language, source_lang: Language
    ) -> str:
        """[逐条引擎实现] 翻译单条文本。"""
        raise NotImplementedError(f"引擎 '{self.name}' 不支持逐条翻译。")

    async def translate_via(
        self, dispatcher: Dispatcher, texts: list[str], target_language: Language
    ) -> list[EngineBatchItemResult]:
        """
        经由调度器翻译一组文本，按输入顺序返回每条文本的结果。

        批量引擎的失败会以 `DispatchError` 抛出；逐条引擎的失败则按条目
        转换为 `EngineError`，其余条目不受影响。
        """
        if not texts:
            return []

        if self.SUPPORTS_BATCH:
            translated = await dispatcher.dispatch(
                self.atranslate_batch, texts, target_language
            )
            if len(translated) != len(texts):
                raise TransportError(
                    f"引擎 '{self.name}' 返回了 {len(translated)} 条结果，"
                    f"期望 {len(texts)} 条。"
                )
            return [EngineSuccess(translated_text=text) for text in translated]

        tasks = [
            dispatcher.dispatch(self.atranslate_one, text, target_language)
            for text in texts
        ]
        results: list[str | BaseException] = await asyncio.gather(
            *tasks, return_exceptions=True
        )

        final_results: list[EngineBatchItemResult] = []
        for index, res in enumerate(results):
            if isinstance(res, str):
                final_results.append(EngineSuccess(translated_text=res))
            elif isinstance(res, asyncio.CancelledError):
                raise res
            else:
                logger.warning(
                    "单条翻译失败。", engine=self.name, index=index, error=str(res)
                )
                final_results.append(
                    EngineError(
                        error_message=f"引擎执行异常: {res.__class__.__name__}: {res}"
                    )
                )
        return final_results


def build_timeout(config: BaseEngineConfig) -> httpx.Timeout:
    """根据引擎配置构造 httpx 超时对象。"""
    return httpx.Timeout(config.timeout_total, connect=config.timeout_connect)
