# tests/unit/test_dispatcher.py
"""针对 `trans_canvas.dispatcher` 模块的单元测试。"""

import asyncio
import time
from unittest.mock import AsyncMock

import pytest

from trans_canvas.core.exceptions import DispatchError
from trans_canvas.core.types import Language
from trans_canvas.dispatcher import Dispatcher


@pytest.mark.asyncio
async def test_dispatch_passes_counterpart_as_source_language() -> None:
    provider = AsyncMock(return_value="ok")
    dispatcher = Dispatcher(min_interval=0, label="bulk")

    result = await dispatcher.dispatch(provider, ["a", "b"], Language.EN)

    assert result == "ok"
    provider.assert_awaited_once_with(["a", "b"], Language.EN, Language.ZH)


@pytest.mark.asyncio
async def test_dispatch_to_chinese_uses_english_source() -> None:
    provider = AsyncMock(return_value="好")
    dispatcher = Dispatcher(min_interval=0, label="free")

    await dispatcher.dispatch(provider, "good", Language.ZH)

    provider.assert_awaited_once_with("good", Language.ZH, Language.EN)


@pytest.mark.asyncio
async def test_dispatch_wraps_errors_with_label() -> None:
    original = RuntimeError("connection reset")
    provider = AsyncMock(side_effect=original)
    dispatcher = Dispatcher(min_interval=0, label="signed")

    with pytest.raises(DispatchError, match="signed - connection reset") as exc_info:
        await dispatcher.dispatch(provider, "text", Language.EN)

    assert exc_info.value.__cause__ is original


def test_min_interval_is_exposed() -> None:
    assert Dispatcher(min_interval=0.1, label="x").min_interval == 0.1


# 事件循环的定时器可能比单调时钟略早触发
CLOCK_TOLERANCE = 0.01


class CallRecorder:
    """记录每次服务调用发生的单调时间。"""

    def __init__(self) -> None:
        self.times: list[float] = []

    async def __call__(
        self, payload: str, target: Language, source: Language
    ) -> str:
        self.times.append(time.monotonic())
        return payload


@pytest.mark.asyncio
async def test_calls_are_spaced_by_min_interval() -> None:
    interval = 0.05
    recorder = CallRecorder()
    dispatcher = Dispatcher(min_interval=interval, label="free")

    start = time.monotonic()
    await asyncio.gather(
        *(dispatcher.dispatch(recorder, str(i), Language.EN) for i in range(4))
    )
    elapsed = time.monotonic() - start

    assert elapsed >= 3 * interval - CLOCK_TOLERANCE
    gaps = [later - earlier for earlier, later in zip(recorder.times, recorder.times[1:])]
    assert all(gap >= interval - CLOCK_TOLERANCE for gap in gaps)


@pytest.mark.asyncio
async def test_independent_dispatchers_do_not_delay_each_other() -> None:
    interval = 0.2
    translate = Dispatcher(min_interval=interval, label="bulk")
    polish = Dispatcher(min_interval=interval, label="polish")
    recorder = CallRecorder()

    start = time.monotonic()
    await translate.dispatch(recorder, "a", Language.EN)
    await polish.dispatch(recorder, "b", Language.EN)
    assert time.monotonic() - start < interval / 2

    # 第二次调用只受本实例上一调用的约束
    await translate.dispatch(recorder, "c", Language.EN)
    assert recorder.times[2] - recorder.times[0] >= interval - CLOCK_TOLERANCE
    assert time.monotonic() - start < interval * 1.5
