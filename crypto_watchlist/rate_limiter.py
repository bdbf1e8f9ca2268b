import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

from crypto_watchlist.config import WatchlistConfig

T = TypeVar("T")


class AsyncConcurrencyLimiter:
    """
    限制并发数与相邻两次请求的最小间隔。

    等待者按提交顺序（FIFO）放行；任务抛出的异常原样传给调用方，不做重试。
    """

    def __init__(self, max_concurrent: int, min_interval: float = 0.0) -> None:
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be >= 1")
        if min_interval < 0:
            raise ValueError("min_interval must be >= 0")
        self._sem = asyncio.Semaphore(max_concurrent)
        self._min_interval = min_interval
        self._lock = asyncio.Lock()
        self._last_acquire: Optional[float] = None

    async def __aenter__(self):
        await self._sem.acquire()
        if self._min_interval <= 0:
            return self

        try:
            async with self._lock:
                loop = asyncio.get_running_loop()
                now = loop.time()
                if self._last_acquire is not None:
                    wait_for = self._min_interval - (now - self._last_acquire)
                    if wait_for > 0:
                        await asyncio.sleep(wait_for)
                        now = loop.time()
                self._last_acquire = now
        except BaseException:
            self._sem.release()
            raise

        return self

    async def __aexit__(self, exc_type, exc, tb):
        self._sem.release()
        return False

    async def schedule(self, task: Callable[[], Awaitable[T]]) -> T:
        """排队执行一个无参协程函数，返回其结果。"""
        async with self:
            return await task()


def build_cmc_limiter(config: WatchlistConfig) -> AsyncConcurrencyLimiter:
    return AsyncConcurrencyLimiter(
        config.cmc_max_concurrent_requests,
        config.cmc_min_request_interval,
    )
