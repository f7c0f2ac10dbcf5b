# trans_canvas/rate_limiter.py
"""本模块提供一个基于最小调用间隔的异步速率限制器。"""

import asyncio
import time


class IntervalRateLimiter:
    """
    一个异步安全的最小间隔速率限制器。

    每次 `acquire` 在锁内预约下一个可用时刻 `max(now, last + interval)`，
    然后在锁外等待到该时刻，因此并发调用者按发起顺序依次放行。
    """

    def __init__(self, min_interval: float):
        if min_interval < 0:
            raise ValueError("最小调用间隔不能为负数")
        self.min_interval = min_interval
        self.last_call_time: float | None = None
        self._lock = asyncio.Lock()

    async def acquire(self) -> float:
        """等待到下一个可用时刻，返回实际等待的秒数。"""
        async with self._lock:
            now = time.monotonic()
            if self.last_call_time is None:
                scheduled = now
            else:
                scheduled = max(now, self.last_call_time + self.min_interval)
            self.last_call_time = scheduled
            wait_time = scheduled - now

        # 在锁外等待，后续调用者可以立即预约自己的时刻
        if wait_time > 0:
            await asyncio.sleep(wait_time)
        return wait_time
