# tests/unit/test_rate_limiter.py
"""
针对 `trans_canvas.rate_limiter` 模块的单元测试。

这些测试验证了最小间隔限速器的预约逻辑，以及并发调用者按发起顺序依次放行的行为。
"""

import asyncio
import time
from unittest.mock import AsyncMock

import pytest
from pytest_mock import MockerFixture

from trans_canvas.rate_limiter import IntervalRateLimiter


def test_rate_limiter_init_with_negative_interval() -> None:
    with pytest.raises(ValueError, match="最小调用间隔不能为负数"):
        IntervalRateLimiter(min_interval=-0.1)


@pytest.mark.asyncio
async def test_first_acquire_does_not_wait(mocker: MockerFixture) -> None:
    mock_sleep = mocker.patch("asyncio.sleep", new_callable=AsyncMock)
    limiter = IntervalRateLimiter(min_interval=1.0)
    assert limiter.last_call_time is None

    waited = await limiter.acquire()

    assert waited == 0
    mock_sleep.assert_not_called()
    assert limiter.last_call_time is not None


@pytest.mark.asyncio
async def test_second_acquire_waits_for_remaining_interval(
    mocker: MockerFixture,
) -> None:
    """测试第二次调用只等待间隔中尚未流逝的部分。"""
    mock_sleep = mocker.patch("asyncio.sleep", new_callable=AsyncMock)
    start_time = 1000.0
    time_sequence = [start_time, start_time + 0.3]

    def monotonic_side_effect() -> float:
        return time_sequence.pop(0) if time_sequence else start_time + 0.3

    mocker.patch("time.monotonic", side_effect=monotonic_side_effect)

    limiter = IntervalRateLimiter(min_interval=1.0)
    await limiter.acquire()
    waited = await limiter.acquire()

    mock_sleep.assert_called_once()
    assert pytest.approx(mock_sleep.call_args[0][0]) == 0.7
    assert pytest.approx(waited) == 0.7
    assert limiter.last_call_time == pytest.approx(start_time + 1.0)


@pytest.mark.asyncio
async def test_no_wait_after_interval_has_elapsed(mocker: MockerFixture) -> None:
    mock_sleep = mocker.patch("asyncio.sleep", new_callable=AsyncMock)
    time_sequence = [1000.0, 1005.0]

    def monotonic_side_effect() -> float:
        return time_sequence.pop(0) if time_sequence else 1005.0

    mocker.patch("time.monotonic", side_effect=monotonic_side_effect)

    limiter = IntervalRateLimiter(min_interval=1.0)
    await limiter.acquire()
    waited = await limiter.acquire()

    assert waited == 0
    mock_sleep.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_callers_are_spaced_by_interval() -> None:
    """并发发起的调用，其放行时刻两两之间至少相隔一个间隔。"""
    interval = 0.05
    limiter = IntervalRateLimiter(min_interval=interval)
    release_times: list[float] = []

    async def caller() -> None:
        await limiter.acquire()
        release_times.append(time.monotonic())

    await asyncio.gather(*(caller() for _ in range(4)))

    release_times.sort()
    gaps = [b - a for a, b in zip(release_times, release_times[1:])]
    # 允许少量调度误差
    assert all(gap >= interval - 0.01 for gap in gaps)


@pytest.mark.asyncio
async def test_zero_interval_never_sleeps(mocker: MockerFixture) -> None:
    mock_sleep = mocker.patch("asyncio.sleep", new_callable=AsyncMock)
    limiter = IntervalRateLimiter(min_interval=0)
    for _ in range(3):
        await limiter.acquire()
    mock_sleep.assert_not_called()
