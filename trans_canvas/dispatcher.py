# trans_canvas/dispatcher.py
"""
本模块提供限速调度器：所有外部服务调用都经由它发出。

调度器在调用前通过 `IntervalRateLimiter` 保证相邻两次调用的最小间隔，
并将服务抛出的任何异常包装为带上下文标签的 `DispatchError`。
每个会话（一次运行，或一个润色器）持有自己的调度器实例。
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from trans_canvas.core.exceptions import DispatchError
from trans_canvas.core.types import Language
from trans_canvas.rate_limiter import IntervalRateLimiter

logger = structlog.get_logger(__name__)

_PayloadT = TypeVar("_PayloadT")
_ResultT = TypeVar("_ResultT")

ProviderFn = Callable[[_PayloadT, Language, Language], Awaitable[_ResultT]]


class Dispatcher:
    """包装服务调用的限速调度器。"""

    def __init__(self, min_interval: float, label: str):
        self.label = label
        self._limiter = IntervalRateLimiter(min_interval)

    @property
    def min_interval(self) -> float:
        return self._limiter.min_interval

    async def dispatch(
        self,
        provider_fn: ProviderFn[_PayloadT, _ResultT],
        payload: _PayloadT,
        target_language: Language,
    ) -> _ResultT:
        """
        限速后调用 `provider_fn(payload, target_language, source_language)`。

        源语言总是目标语言在双语模型下的另一种语言。

        Raises:
            DispatchError: 服务调用抛出了任何异常。原始异常保存在 `__cause__` 中。

        """
        waited = await self._limiter.acquire()
        source_language = target_language.counterpart
        logger.debug(
            "调度服务调用。",
            label=self.label,
            target_language=target_language.value,
            source_language=source_language.value,
            waited_seconds=round(waited, 4),
        )
        try:
            return await provider_fn(payload, target_language, source_language)
        except Exception as e:
            logger.error(
                "服务调用失败。",
                label=self.label,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise DispatchError(f"{self.label} - {e}") from e
