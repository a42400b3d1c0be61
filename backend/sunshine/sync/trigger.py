"""背景同步觸發

把同步工作交給單一背景執行緒後立即返回，
呼叫端不會收到結果，也不會收到錯誤。
"""

import asyncio
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable

logger = logging.getLogger(__name__)


class SyncDispatcher:
    """同步工作派送器

    同一時間只執行一個同步工作，其餘請求依序排隊。

    Attributes:
        job: 同步工作；可為一般函式或返回 coroutine 的函式
    """

    def __init__(self, job: Callable[[], Any], name: str = "sunshine-sync"):
        self.job = job
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=name)

    def request_sync(self) -> Future:
        """排入一次同步，立即返回"""
        logger.info("sync requested")
        return self._executor.submit(self._run)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "SyncDispatcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown(wait=True)

    def _run(self) -> Any:
        try:
            result = self.job()
            if asyncio.iscoroutine(result):
                result = asyncio.run(result)
        except Exception:
            logger.exception("sync job failed")
            return None

        logger.info("sync finished: %s", result)
        return result


def start_immediate_sync(dispatcher: SyncDispatcher) -> None:
    """要求盡快執行一次背景同步"""
    dispatcher.request_sync()
